"""Built-in checks and the registry that names them."""

import os
import re
import subprocess
import sys
from dataclasses import dataclass
from typing import Any, Callable

from envil.logger import log
from envil.types import EnvType, ExitCode, LogLevel, parse_env_type
from envil.validator import parse_number, validate_type

MAX_CHECKS = 32


def _byte_length(value):
    return len(value.encode("utf-8", "surrogateescape"))


def _compare(value, threshold, predicate):
    number = parse_number(value)
    if number is None:
        return ExitCode.VALUE_ERROR
    return ExitCode.OK if predicate(number, float(threshold)) else ExitCode.VALUE_ERROR


def check_type(value, env_type):
    """Check that a value has the given type."""
    return validate_type(env_type, value)


def check_gt(value, threshold):
    """Check that a number is greater than the threshold."""
    return _compare(value, threshold, lambda a, b: a > b)


def check_lt(value, threshold):
    """Check that a number is less than the threshold."""
    return _compare(value, threshold, lambda a, b: a < b)


def check_ge(value, threshold):
    """Check that a number is at least the threshold."""
    return _compare(value, threshold, lambda a, b: a >= b)


def check_le(value, threshold):
    """Check that a number is at most the threshold."""
    return _compare(value, threshold, lambda a, b: a <= b)


def check_len(value, length):
    """Check that the value is exactly `length` bytes long."""
    return ExitCode.OK if _byte_length(value) == length else ExitCode.VALUE_ERROR


def check_lengt(value, length):
    """Check that the value is longer than `length` bytes."""
    return ExitCode.OK if _byte_length(value) > length else ExitCode.VALUE_ERROR


def check_lenlt(value, length):
    """Check that the value is shorter than `length` bytes."""
    return ExitCode.OK if _byte_length(value) < length else ExitCode.VALUE_ERROR


def check_enum(value, allowed):
    """Check that the value is one of the allowed values."""
    if value is None or allowed is None:
        return ExitCode.VALUE_ERROR
    return ExitCode.OK if value in allowed else ExitCode.VALUE_ERROR


def check_eq(value, target):
    """Check that the value equals the target string."""
    if value is None or target is None:
        return ExitCode.VALUE_ERROR
    return ExitCode.OK if value == target else ExitCode.VALUE_ERROR


def check_ne(value, target):
    """Check that the value differs from the target string."""
    if value is None or target is None:
        return ExitCode.VALUE_ERROR
    return ExitCode.OK if value != target else ExitCode.VALUE_ERROR


def check_regex(value, pattern):
    """Check that the value matches the regular expression anywhere."""
    if value is None or pattern is None:
        return ExitCode.VALUE_ERROR
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        log(LogLevel.ERROR, "Failed to compile regex: %s", exc)
        return ExitCode.VALUE_ERROR
    return ExitCode.OK if compiled.search(value) else ExitCode.VALUE_ERROR


def check_cmd(value, command):
    """Run a shell command with VALUE set; pass when it exits with 0."""
    if value is None or command is None:
        return ExitCode.CUSTOM_ERROR
    if not command:
        sys.stderr.write("Empty command provided\n")
        return ExitCode.CUSTOM_ERROR

    log(LogLevel.INFO, "Executing command: %s", command)
    env = dict(os.environ, VALUE=value)
    try:
        completed = subprocess.run(
            ["/bin/sh", "-c", command],
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as exc:
        sys.stderr.write(f"Failed to execute command: {exc}\n")
        return ExitCode.CUSTOM_ERROR

    if completed.stdout:
        output = completed.stdout.decode("utf-8", "replace")
        sys.stderr.write(f"Command output: {output}")

    if completed.returncode < 0:
        sys.stderr.write("Command did not exit normally\n")
        return ExitCode.CUSTOM_ERROR

    log(LogLevel.INFO, "Command exited with status: %d", completed.returncode)
    return ExitCode.OK if completed.returncode == 0 else ExitCode.CUSTOM_ERROR


@dataclass(frozen=True)
class CheckDefinition:
    """A named check and the function that performs it."""

    name: str
    description: str
    callback: Callable[[str, Any], int]
    has_arg: bool = True
    error_message: str = ""


@dataclass(frozen=True)
class Check:
    """A check definition bound to its parsed argument."""

    definition: CheckDefinition
    argument: Any = None

    @property
    def name(self):
        return self.definition.name


class CheckRegistry:
    """Ordered, bounded collection of check definitions."""

    def __init__(self, capacity=MAX_CHECKS):
        self._capacity = capacity
        self._definitions = []

    def register(self, name, description, callback, has_arg=True, error_message=""):
        """Add a check and return its definition.

        Raises ValueError when the registry is full.
        """
        if len(self._definitions) >= self._capacity:
            raise ValueError("check registry is full")
        definition = CheckDefinition(
            name, description, callback, bool(has_arg), error_message
        )
        self._definitions.append(definition)
        return definition

    def get(self, name):
        """Return the first definition with this name, or None."""
        return next((d for d in self._definitions if d.name == name), None)

    def by_index(self, index):
        """Return the definition at a position, or None when out of range."""
        if 0 <= index < len(self._definitions):
            return self._definitions[index]
        return None

    def __len__(self):
        return len(self._definitions)

    def __iter__(self):
        return iter(self._definitions)


BUILTIN_CHECKS = (
    ("type", "Check the type of the variable (integer,string,json,float,boolean)",
     check_type, "Invalid type"),
    ("gt", "Check if greater than a value", check_gt, "Invalid length"),
    ("lt", "Check if less than a value", check_lt, "Invalid length"),
    ("enum", "Check if in a set of values (foo,bar,baz)", check_enum,
     "Invalid enum value"),
    ("len", "Check the length of the variable", check_len, "Invalid length"),
    ("cmd", "Run a command to validate the variable", check_cmd, "Invalid command"),
    ("eq", "Check if equal to a value", check_eq, "Invalid target"),
    ("ne", "Check if not equal to a value", check_ne, "Invalid target"),
    ("ge", "Check if greater than or equal to a value", check_ge, "Invalid length"),
    ("le", "Check if less than or equal to a value", check_le, "Invalid length"),
    ("lengt", "Check if string length is greater than specified length",
     check_lengt, "Invalid length"),
    ("lenlt", "Check if string length is less than specified length",
     check_lenlt, "Invalid length"),
    ("regex", "Check if value matches regular expression pattern", check_regex,
     "Invalid pattern"),
)

BUILTIN_CHECK_NAMES = tuple(name for name, *_ in BUILTIN_CHECKS)

registry = CheckRegistry()
for _name, _description, _callback, _error in BUILTIN_CHECKS:
    registry.register(_name, _description, _callback, True, _error)


def register_check(name, description, callback, has_arg=True, error_message=""):
    """Add a check to the shared registry."""
    return registry.register(name, description, callback, has_arg, error_message)


def get_check_definition(name):
    """Look a check up by name in the shared registry."""
    return registry.get(name)


def get_check_definition_by_index(index):
    """Look a check up by position in the shared registry."""
    return registry.by_index(index)


def list_available_checks(stream=None):
    """Write the name and description of every registered check."""
    out = sys.stdout if stream is None else stream
    out.write("Available checks:\n\n")
    for definition in registry:
        out.write(f"  {definition.name:<10} {definition.description}\n")


_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")

_NUMERIC_CHECKS = frozenset({"gt", "lt", "ge", "le", "len", "lengt", "lenlt"})
_STRING_CHECKS = frozenset({"eq", "ne", "regex", "cmd"})


def _atoi(text):
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_check(name, raw):
    """Bind a named check to its argument given as text.

    Raises ValueError for unknown checks and invalid type names.
    """
    definition = get_check_definition(name)
    if definition is None:
        raise ValueError(f"Unknown check '{name}'")
    if name == "type":
        argument = parse_env_type(raw)
    elif name in _NUMERIC_CHECKS:
        argument = _atoi(raw)
    elif name == "enum":
        argument = tuple(token for token in raw.split(",") if token)
    elif name in _STRING_CHECKS:
        argument = raw
    else:
        argument = raw
    return Check(definition, argument)


__all__ = [
    "BUILTIN_CHECKS",
    "BUILTIN_CHECK_NAMES",
    "Check",
    "CheckDefinition",
    "CheckRegistry",
    "EnvType",
    "MAX_CHECKS",
    "check_cmd",
    "check_enum",
    "check_eq",
    "check_ge",
    "check_gt",
    "check_le",
    "check_len",
    "check_lengt",
    "check_lenlt",
    "check_lt",
    "check_ne",
    "check_regex",
    "check_type",
    "get_check_definition",
    "get_check_definition_by_index",
    "list_available_checks",
    "parse_check",
    "register_check",
    "registry",
]