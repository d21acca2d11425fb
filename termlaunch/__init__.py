"""
Pick an installed application from a terminal menu and start it.

Some features:

- Collect shortcut files of native and Flatpak applications
- Narrow down the list incrementally by typing a part of the name
- Scroll through the matches with the arrow and page keys
- Start the chosen application detached from the terminal
"""
__license__ = 'MIT'
__version__ = '0.1.dev0'

from . import catalog, core, session, settings, tui
