"""Enumerations and type names shared across envil."""

from enum import IntEnum


class LogLevel(IntEnum):
    """Verbosity levels, from silent to most verbose."""

    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


class EnvType(IntEnum):
    """Value types an environment variable can be checked against."""

    STRING = 0
    INTEGER = 1
    BOOLEAN = 2
    FLOAT = 3
    JSON = 4


class ExitCode(IntEnum):
    """Results of validation, doubling as process exit statuses."""

    OK = 0
    CONFIG_ERROR = 1
    MISSING_VAR = 2
    TYPE_ERROR = 3
    VALUE_ERROR = 4
    CUSTOM_ERROR = 5


_TYPE_NAMES = {
    EnvType.STRING: "string",
    EnvType.INTEGER: "integer",
    EnvType.BOOLEAN: "boolean",
    EnvType.FLOAT: "float",
    EnvType.JSON: "json",
}

# Names accepted when a type is given by the user.
_PARSEABLE_TYPES = {
    "string": EnvType.STRING,
    "integer": EnvType.INTEGER,
    "float": EnvType.FLOAT,
    "json": EnvType.JSON,
}


def type_name(env_type):
    """Return the lower-case name of a type, or "unknown"."""
    try:
        return _TYPE_NAMES[EnvType(env_type)]
    except ValueError:
        return "unknown"


def parse_env_type(name):
    """Turn a user-supplied type name into an EnvType.

    Raises ValueError for names that are not accepted.
    """
    try:
        return _PARSEABLE_TYPES[name]
    except (KeyError, TypeError):
        raise ValueError(f"Invalid type: {name}") from None