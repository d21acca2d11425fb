"""
Common interface for propagating logable messages.

Note that nothing should be logged while the curses screen is active, since
the console handler writes to `stderr` and would garble the menu.
"""
import logging

DEFAULT_FORMAT = '%(name)s: %(message)s'

def set_console_handler(logger, format=DEFAULT_FORMAT):
    """
    Create a `logging.StreamHandler()`, which writes to `stderr`, pass the
    given `format` to it and add the handler to `logger`. Return the logger.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format))
    logger.addHandler(handler)
    return logger

def get_logger(name, level=logging.INFO, format=DEFAULT_FORMAT):
    """
    Request a logger from Python's `logging`-module by using the given `name`.
    A console handler is only added when the logger has no handler yet, so
    requesting the same name twice won't duplicate messages. The logger's
    level is always set to `level`.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        set_console_handler(logger, format)
    logger.setLevel(level)
    return logger

# Used on module-level by the helper functions below. A `logging`-compatible
# object is expected here. `None` means that no logging is desired.
LOGGER = None

def enable(name='termlaunch', level=logging.INFO):
    """
    Enable logging by setting a logger with the given `name` and `level`
    as `LOGGER`.
    """
    global LOGGER
    LOGGER = get_logger(name, level)

def disable():
    """
    Disable logging. This is setting `LOGGER` to `None`.
    """
    global LOGGER
    LOGGER = None

def _log(level, message):
    """
    Log `message` with `level` on `LOGGER`. Do nothing, if `LOGGER` is `None`.
    """
    if LOGGER is not None:
        LOGGER.log(level, message)

def debug(message):
    """
    Log a `message` with logging level `DEBUG` on the `LOGGER`.
    """
    _log(logging.DEBUG, message)

def info(message):
    """
    Log a `message` with logging level `INFO` on the `LOGGER`.
    """
    _log(logging.INFO, message)

def warning(message):
    """
    Log a `message` with logging level `WARNING` on the `LOGGER`.
    """
    _log(logging.WARNING, message)

def error(message):
    """
    Log a `message` with logging level `ERROR` on the `LOGGER`.
    """
    _log(logging.ERROR, message)
