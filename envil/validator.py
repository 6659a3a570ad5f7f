"""Type predicates and collection of validation errors."""

import json
import re
import sys
from dataclasses import dataclass

from envil.types import EnvType, ExitCode

_DIGITS = frozenset("0123456789")

_STRTOD = re.compile(
    r"""
    [\ \t\n\v\f\r]*
    (?P<num>[+-]?(?:
        0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?
      | (?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?
      | (?i:inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?)
    ))
    """,
    re.VERBOSE,
)


def parse_number(text):
    """Parse a whole string as a C-style floating point number.

    Returns None when any part of the text is not part of the number.
    The empty string parses as zero.
    """
    if text is None:
        return None
    if text == "":
        return 0.0
    match = _STRTOD.fullmatch(text)
    if match is None:
        return None
    num = match["num"]
    lowered = num.lower()
    negative = num.startswith("-")
    if "nan" in lowered:
        return float("-nan" if negative else "nan")
    if "inf" in lowered:
        return float("-inf" if negative else "inf")
    if "x" in lowered:
        try:
            return float.fromhex(num)
        except OverflowError:
            return float("-inf" if negative else "inf")
    return float(num)


def is_integer(text):
    """True for an optional leading minus followed only by digits."""
    if not text:
        return False
    digits = text[1:] if text.startswith("-") else text
    return all(ch in _DIGITS for ch in digits)


def is_float(text):
    """True when the whole text is a floating point number."""
    if not text:
        return False
    return parse_number(text) is not None


def is_json(text):
    """True when the text is a JSON document."""
    if not text:
        return False
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def validate_type(env_type, value):
    """Check a value against a type, returning an ExitCode."""
    if value is None:
        return ExitCode.TYPE_ERROR
    if env_type == EnvType.STRING:
        return ExitCode.OK
    if env_type == EnvType.INTEGER:
        return ExitCode.OK if is_integer(value) else ExitCode.TYPE_ERROR
    if env_type == EnvType.JSON:
        return ExitCode.OK if is_json(value) else ExitCode.TYPE_ERROR
    if env_type == EnvType.FLOAT:
        return ExitCode.OK if is_float(value) else ExitCode.TYPE_ERROR
    return ExitCode.TYPE_ERROR


@dataclass(frozen=True)
class ValidationError:
    """One failed validation of a named variable."""

    name: str
    message: str
    code: ExitCode


class ValidationErrors:
    """Ordered collection of validation errors."""

    def __init__(self):
        self._errors = []

    def add(self, name, message, code):
        """Record an error and return it."""
        error = ValidationError(name, message, ExitCode(code))
        self._errors.append(error)
        return error

    def report(self, stream=None):
        """Write every error as 'Error NAME: MESSAGE' lines."""
        out = sys.stderr if stream is None else stream
        for error in self._errors:
            out.write(f"Error {error.name}: {error.message}\n")

    def __len__(self):
        return len(self._errors)

    def __iter__(self):
        return iter(self._errors)

    def __getitem__(self, index):
        return self._errors[index]

    def __repr__(self):
        return f"ValidationErrors({self._errors!r})"