"""
Configuration stuff.

The launcher does not read any configuration file. Defaults live in `config`
and may be overridden for a single run, e.g. by `-o page-size:10` on the
command-line.
"""
# Stdlib
import os
# 3rd party
from xdg.BaseDirectory import xdg_data_home

# Default configuration
config = {
    'app-suffix': '.desktop',
    'native-dir': '/usr/share/applications',
    'flatpak-user-dir': os.path.join(
        xdg_data_home, 'flatpak', 'exports', 'share', 'applications'),
    'flatpak-system-dir': '/var/lib/flatpak/exports/share/applications',
    'native-starter': 'gtk-launch',
    'flatpak-starter': 'flatpak run',
    'page-size': 5,
    'max-query-length': 63,
    'window-height': 22,
    'window-width': 60,
    'quit-keys': 'q',
}

def update_config(configuration):
    """
    Update the current configuration with the given `configuration`-dictionary.

    If a key already exists, its value is replaced. Otherwise the key is just
    added. Thus, an empty dictionary will result in no change.
    """
    config.update(configuration)

def get_config_entries(lines):
    """
    Parse the given `key: value` lines and return a dictionary of overrides.

    Each key must already be known by `config`. Values are converted to the
    type of the corresponding default value, so `page-size: 8` will give an
    integer. A `ValueError` is raised for unknown keys or for values, which
    can't be converted.
    """
    entries = {}
    for key, value in iter_config_entries(lines):
        if key not in config:
            raise ValueError('Unknown option {0!r}'.format(key))
        default = config[key]
        if isinstance(default, int):
            try:
                value = int(value)
            except ValueError:
                msg = 'Option {0!r} expects an integer, got {1!r}'
                raise ValueError(msg.format(key, value))
            if value < 1:
                msg = 'Option {0!r} must be at least 1'
                raise ValueError(msg.format(key))
        entries[key] = value
    return entries

def iter_config_entries(lines):
    """
    Iterate over the given configuration lines, which may be either a file-like
    object or a list of strings and return a `(key, value)`-pair for each line.
    Parsing is done according to the following rules:

    Each line must use the scheme `key: value` to define an item. If a line
    contains multiple `:`-chars, then the first one disappears, as it is used
    as the separator, while the other ones will remain inside the value entry.
    Lines are read until a `#` appears, since that is interpreted as the
    beginning of a comment. Whitespace around key and value is ignored. Empty
    lines are skipped, while a non-empty line without the separator is an
    error. Note that keys and values will always be strings.
    """
    for index, line in enumerate(lines):
        code = line.split('#')[0].strip()
        if code:
            if ':' not in code:
                msg = 'Syntax error in line {0}: Expected a separator (`:`)'
                raise ValueError(msg.format(index + 1))
            key, value = code.split(':', 1)
            yield (key.strip(), value.strip())
