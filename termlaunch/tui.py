"""
Terminal user-interface made with curses.
"""
# Stdlib
import argparse
import curses
import curses.ascii
import logging
import os
import sys

# termlaunch package
from . import __version__, core, logger, settings
from .catalog import FLATPAK, EmptyCatalogError, load_catalog
from .session import (APPEND_CHAR, BACKSPACE, CANCEL, COMMIT, IGNORED,
                      MOVE_DOWN, MOVE_UP, PAGE_DOWN, PAGE_UP, Session)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

KEY_ESCAPE = 27

# Rows taken by the border, the search line and the rule below it
CHROME_ROWS = 4

HELP_TEXT = ' UP/DOWN:Navigation Enter:Start ESC/q:Quit '

NAVIGATION_KEYS = {
    curses.KEY_UP: MOVE_UP,
    curses.KEY_DOWN: MOVE_DOWN,
    curses.KEY_PPAGE: PAGE_UP,
    curses.KEY_NPAGE: PAGE_DOWN,
}
COMMIT_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)

def translate_key(key, quit_keys=None):
    """
    Map a key code as returned by `getch()` to a `(kind, char)`-pair, which
    can be passed to `Session.handle()`. `char` is only set for printable
    characters that should be appended to the query.

    Characters in `quit_keys` cancel the session instead of being typed. When
    `quit_keys` is `None`, the configured value is used. Unknown keys map to
    `IGNORED`.
    """
    if quit_keys is None:
        quit_keys = settings.config['quit-keys']
    if key in NAVIGATION_KEYS:
        return (NAVIGATION_KEYS[key], None)
    if key in COMMIT_KEYS:
        return (COMMIT, None)
    if key == KEY_ESCAPE:
        return (CANCEL, None)
    if key in BACKSPACE_KEYS:
        return (BACKSPACE, None)
    if 0 <= key < 128 and curses.ascii.isprint(key):
        char = chr(key)
        if char in quit_keys:
            return (CANCEL, None)
        return (APPEND_CHAR, char)
    return (IGNORED, None)

def get_geometry(lines, cols):
    """
    Return `(height, width, top, left)` of the menu window for a screen
    of `lines` x `cols`. The configured size shrinks to fit the screen and
    the window is centered.
    """
    height = max(min(settings.config['window-height'], lines - 2), 1)
    width = max(min(settings.config['window-width'], cols), 1)
    return (height, width, max((lines - height) // 2, 0),
            max((cols - width) // 2, 0))

def get_capacity(height):
    """
    Return how many list rows fit into a menu window of `height` lines.
    """
    return max(height - CHROME_ROWS, 1)

def format_row(entry, width):
    """
    Return the text shown for `entry` inside a window of `width` columns.
    Flatpak entries get a `[F]` marker.
    """
    marker = '[F] ' if entry.source_kind == FLATPAK else '    '
    return marker + entry.display_name.ljust(max(width - 8, 0))

def format_query(query, width):
    """
    Return the search line for `query`. If the query is too long for a window
    of `width` columns, only its end is shown.
    """
    label = 'Search: '
    room = max(width - len(label) - 5, 1)
    return label + query[-room:]

def _addstr(window, y, x, text, attr=0):
    # curses complains when writing beyond the window's edge
    try:
        window.addstr(y, x, text, attr)
    except curses.error:
        pass

def draw(window, model, height, width):
    """
    Paint the given `RenderModel` onto `window`, which is `height` lines high
    and `width` columns wide.
    """
    limit = max(width - 4, 0)
    window.erase()
    window.box()
    title = ' termlaunch ({0}/{1}) '.format(model.filtered_count,
                                            model.total_count)
    _addstr(window, 0, 2, title[:limit])
    search = format_query(model.query, width)
    _addstr(window, 1, 2, search[:limit])
    if model.query:
        _addstr(window, 1, 2 + len(search), '_', curses.A_BLINK)
    window.hline(2, 1, getattr(curses, 'ACS_HLINE', ord('-')), width - 2)
    for line, row in enumerate(model.rows):
        attr = curses.A_REVERSE if row.highlighted else curses.A_NORMAL
        _addstr(window, line + 3, 2, format_row(row.entry, width)[:limit], attr)
    _addstr(window, height - 1, 2, HELP_TEXT[:limit])
    window.refresh()

def make_window(stdscr):
    """
    Create the centered menu window on `stdscr` and return it together with
    its height and width.
    """
    lines, cols = stdscr.getmaxyx()
    height, width, top, left = get_geometry(lines, cols)
    window = curses.newwin(height, width, top, left)
    window.keypad(True)
    return (window, height, width)

def run_session(stdscr, catalog):
    """
    Run the interactive menu for `catalog` until the user either picks an
    entry or quits. Return the chosen entry or `None`.

    This is meant to be called via `curses.wrapper()`, which restores the
    terminal on any exit path.
    """
    try:
        curses.curs_set(0)
    except curses.error:
        # Terminal can't hide the cursor
        pass
    window, height, width = make_window(stdscr)
    session = Session(catalog, get_capacity(height))
    while not session.finished:
        draw(window, session.render(), height, width)
        try:
            key = window.getch()
        except KeyboardInterrupt:
            session.handle(CANCEL)
            break
        if key == curses.KEY_RESIZE:
            stdscr.erase()
            stdscr.refresh()
            window, height, width = make_window(stdscr)
            session.resize(get_capacity(height))
            continue
        session.handle(*translate_key(key))
    return session.selected_entry

def make_parser():
    """
    Return the command-line parser used by `run_app()`.
    """
    parser = argparse.ArgumentParser(
        prog='termlaunch',
        description='Pick an installed application by typing and start it.')
    parser.add_argument(
        '-o', '--option', dest='options', action='append', default=[],
        metavar='KEY:VALUE',
        help='override a setting for this run, e.g. page-size:10')
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='log discovery details')
    parser.add_argument(
        '--version', action='version',
        version='%(prog)s {0}'.format(__version__))
    return parser

def run_app(args=None):
    """
    Run the launcher with the given command-line `args` (without the program
    name) and return the exit code.

    `EXIT_FAILURE` is returned, if no application could be found. In that
    case the menu is not shown at all. Otherwise the menu runs and the chosen
    entry is launched after the terminal has been restored.
    """
    parser = make_parser()
    options = parser.parse_args(args)
    try:
        settings.update_config(settings.get_config_entries(options.options))
    except ValueError as exc:
        parser.error(str(exc))
    logger.enable(level=logging.DEBUG if options.verbose else logging.INFO)
    try:
        catalog = load_catalog()
    except EmptyCatalogError as exc:
        logger.error(str(exc))
        return EXIT_FAILURE
    # Don't let curses wait a full second to tell ESC from an escape sequence
    os.environ.setdefault('ESCDELAY', '25')
    entry = curses.wrapper(run_session, catalog)
    if entry is not None:
        try:
            core.launch(entry)
        except core.LaunchError as exc:
            logger.warning(str(exc))
    return EXIT_SUCCESS

def main():
    """
    This function is intended to be used as an entry point, when termlaunch
    was invoked from the commandline. It exits the interpreter using the
    launcher's return value as the exit code.
    """
    sys.exit(run_app(sys.argv[1:]))
