"""
Discover application shortcut files and collect them into a sorted catalog.
"""
from collections import namedtuple
import os
import string

# termlaunch package
from . import logger, settings

# Where an entry comes from. This decides how it is launched.
NATIVE = 'native'
FLATPAK = 'flatpak'

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

AppEntry = namedtuple('AppEntry', 'display_name launch_token source_kind')

class EmptyCatalogError(Exception):
    """
    Raised when none of the application directories provided any entry.
    """
    pass

def strip_suffix(name, suffix=None):
    """
    Return `name` without a trailing `suffix`. When `suffix` is `None`, the
    configured shortcut file suffix (`.desktop`) is used.
    """
    if suffix is None:
        suffix = settings.config['app-suffix']
    if suffix and name.endswith(suffix):
        return name[:-len(suffix)]
    return name

def make_entry(launch_token, source_kind=NATIVE):
    """
    Return an `AppEntry` for the given file name. Its display name is the
    file name without the shortcut suffix.
    """
    return AppEntry(strip_suffix(launch_token), launch_token, source_kind)

def ascii_lower(text):
    """
    Return a copy of `text` with ASCII letters converted to lower case.
    Any other character, including non-ASCII letters, is left untouched.
    """
    return text.translate(_ASCII_FOLD)

def sort_key(entry):
    """
    Return the key used to sort `entry` inside a catalog.
    """
    return ascii_lower(entry.display_name)

def make_catalog(entries):
    """
    Return the given entries as a tuple sorted by their display names,
    ignoring ASCII case. Sorting is stable, so entries with equal names
    keep the order in which they were passed.
    """
    return tuple(sorted(entries, key=sort_key))

def iter_app_dirs():
    """
    Yield a `(path, source_kind)`-pair for each directory that is searched
    for shortcut files: the system's application directory first, then the
    user's and the system-wide Flatpak export directories.
    """
    yield (settings.config['native-dir'], NATIVE)
    yield (settings.config['flatpak-user-dir'], FLATPAK)
    yield (settings.config['flatpak-system-dir'], FLATPAK)

def list_entries(path, source_kind=NATIVE):
    """
    Return a list of entries for the shortcut files inside `path`, ordered
    by file name. A directory that does not exist or can't be read is not
    treated as an error. An empty list is returned in that case.
    """
    suffix = settings.config['app-suffix']
    try:
        names = os.listdir(path)
    except OSError as exc:
        logger.debug('Skipping {0!r}: {1}'.format(path, exc))
        return []
    return [make_entry(name, source_kind)
            for name in sorted(names) if name.endswith(suffix)]

def discover_entries(app_dirs=None):
    """
    Return the concatenated entries of all `(path, source_kind)`-pairs in
    `app_dirs`. If `app_dirs` is `None`, `iter_app_dirs()` is used.
    """
    if app_dirs is None:
        app_dirs = iter_app_dirs()
    entries = []
    for path, source_kind in app_dirs:
        found = list_entries(path, source_kind)
        logger.debug('Found {0} entries in {1!r}'.format(len(found), path))
        entries.extend(found)
    return entries

def load_catalog(app_dirs=None):
    """
    Discover all entries and return them as a sorted catalog. Raise an
    `EmptyCatalogError` if no entry was found at all.
    """
    catalog = make_catalog(discover_entries(app_dirs))
    if not catalog:
        raise EmptyCatalogError('No applications found')
    return catalog
