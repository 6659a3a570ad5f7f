"""Command-line option tables, usage text and check listing."""

import sys
from dataclasses import dataclass

from envil.checks import BUILTIN_CHECKS


@dataclass(frozen=True)
class OptionSpec:
    """A long option, whether it takes an argument, and its short letter."""

    name: str
    takes_argument: bool
    short: str | None = None


BASE_OPTIONS = (
    OptionSpec("config", True, "c"),
    OptionSpec("env", True, "e"),
    OptionSpec("default", True, "d"),
    OptionSpec("print", False, "p"),
    OptionSpec("list-checks", False, "l"),
    OptionSpec("verbose", False, "v"),
    OptionSpec("completion", True, "C"),
    OptionSpec("help", False, "h"),
)

CHECK_OPTIONS = tuple(OptionSpec(name, True) for name, *_ in BUILTIN_CHECKS)

SHORT_OPTIONS = "c:e:pvlhC:d:"

_USAGE = """\
Usage:
  Single variable: envil -e VAR_NAME [-d VALUE] [-p]
  Config file: envil -c config.yml
  List checks: envil -l
  Generate completion: envil -C <shell>

Options:
  -c, --config FILE    Path to configuration file (YAML or JSON)
  -e, --env NAME       Environment variable name
  -d, --default VALUE  Default value if not set
  -p, --print          Print value if validation passes
  -v, --verbose        Enable verbose output
  -l, --list-checks    List available check types and descriptions
  -C, --completion <shell>  Generate shell completion script (bash|zsh)
  -h, --help           Show this help message
"""


def create_long_options():
    """Return every long option: base options first, then one per check."""
    return list(BASE_OPTIONS + CHECK_OPTIONS)


def get_getopt_long_string():
    """Return the short-option string; a colon marks a required argument."""
    return SHORT_OPTIONS


def list_checks(stream=None):
    """Write every built-in check with its description."""
    out = sys.stderr if stream is None else stream
    out.write("Available checks:\n")
    for name, description, *_ in BUILTIN_CHECKS:
        out.write(f"  --{name}: {description}\n")


def usage_text():
    """Return the usage message."""
    return _USAGE


def print_usage(stream=None):
    """Write the usage message and exit with status 1."""
    out = sys.stderr if stream is None else stream
    out.write(_USAGE)
    raise SystemExit(1)