"""Level-filtered diagnostics written to standard error."""

import sys

from envil.types import LogLevel

_level = LogLevel.ERROR

_PREFIXES = {
    LogLevel.ERROR: "ERROR: ",
    LogLevel.WARNING: "WARNING: ",
    LogLevel.INFO: "INFO: ",
    LogLevel.DEBUG: "DEBUG: ",
    LogLevel.TRACE: "TRACE: ",
}

_VERBOSITY_LEVELS = {
    0: LogLevel.ERROR,
    1: LogLevel.INFO,
    2: LogLevel.DEBUG,
}


def set_level(level):
    """Set the most verbose level that is still written."""
    global _level
    _level = LogLevel(level)


def get_level():
    """Return the current log level."""
    return _level


def level_for_verbosity(count):
    """Map a number of -v flags to a log level."""
    return _VERBOSITY_LEVELS.get(count, LogLevel.ERROR)


def log(level, message, *args):
    """Write a prefixed message to stderr if the level is enabled."""
    if level > _level:
        return
    text = message % args if args else message
    sys.stderr.write(f"{_PREFIXES.get(level, '')}{text}\n")