"""
Basic functionality to filter, scroll and launch application entries.
"""
import os
import shlex
import subprocess

# termlaunch package
from . import logger, settings
from .catalog import FLATPAK, ascii_lower, strip_suffix

class LaunchError(Exception):
    """
    Used to indicate that the launch helper for an entry could not be started.
    """
    pass

### High-level functions

def get_filtered_indices(catalog, query=''):
    """
    Return the indices of those entries in `catalog`, whose display name
    contains `query`. The result keeps the catalog's order, so it is sorted
    the same way the catalog is. An empty query returns every index.

    Note that the whole list is computed from scratch on each call. It is
    meant to be invoked once per change of the query, not on navigation.
    """
    return [index for index, entry in enumerate(catalog)
            if matches(entry.display_name, query)]

def adjust_offset(offset, highlight, capacity):
    """
    Return a new scroll offset, which keeps `highlight` inside a window of
    `capacity` rows starting at that offset. The given `offset` is returned
    unchanged, if the highlight is already visible.
    """
    capacity = max(capacity, 1)
    if highlight < offset:
        return highlight
    if highlight >= offset + capacity:
        return highlight - capacity + 1
    return offset

def get_visible_range(offset, count, capacity):
    """
    Return a `range()` of the filtered positions that fit into a window of
    `capacity` rows starting at `offset`, given `count` filtered entries.
    """
    return range(offset, min(offset + max(capacity, 1), count))

def launch(entry):
    """
    Start the application described by `entry` in the background.

    The helper runs in a new session with its output sent to the null device,
    so the launcher neither waits for it nor learns whether the application
    came up. Only a helper that can't be executed at all (e.g. `gtk-launch`
    is not installed) results in a `LaunchError`.
    """
    args = get_launch_args(entry)
    logger.debug('Launching {0}'.format(' '.join(args)))
    try:
        with open(os.devnull, 'wb') as null:
            subprocess.Popen(args, stdin=null, stdout=null, stderr=null,
                             start_new_session=True)
    except OSError as exc:
        error = 'Unable to launch {0}: {1}'.format(entry.display_name, exc)
        raise LaunchError(error)

### Low-level functions

def matches(name, query):
    """
    Return True if `query` occurs inside `name` ignoring ASCII case,
    otherwise False. An empty query matches every name.
    """
    if not query:
        return True
    return ascii_lower(query) in ascii_lower(name)

def get_launch_args(entry):
    """
    Return the argument list used to start `entry`.

    Native entries are handed over to the configured starter (`gtk-launch`)
    by their file name. Flatpak entries are run by their application ID,
    which is the file name without its suffix.
    """
    if entry.source_kind == FLATPAK:
        starter = settings.config['flatpak-starter']
        target = strip_suffix(entry.launch_token)
    else:
        starter = settings.config['native-starter']
        target = entry.launch_token
    return shlex.split(starter) + [target]
