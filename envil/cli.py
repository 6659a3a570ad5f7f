"""The envil command: validate environment variables from the command line."""

import os
import re
import sys
from dataclasses import dataclass

from envil.checks import get_check_definition, parse_check
from envil.completion import ShellType, generate_completion_script, get_shell_type
from envil.config import handle_config_option, validate_and_print_env
from envil.logger import level_for_verbosity, set_level
from envil.options import (
    create_long_options,
    get_getopt_long_string,
    list_checks,
    usage_text,
)
from envil.types import ExitCode
from envil.validator import ValidationErrors

PROG = "envil"
ERROR = "?"


@dataclass(frozen=True)
class ParsedOption:
    """One option found on the command line.

    `name` is the long option name, or "?" for an unusable option, in
    which case `error` holds the diagnostic.
    """

    name: str
    value: str | None = None
    error: str | None = None


def _error(message):
    return ParsedOption(ERROR, error=f"{PROG}: {message}")


def _parse_long(body, args, options):
    name, sep, inline = body.partition("=")
    match = next((option for option in options if option.name == name), None)
    if match is None:
        candidates = [option for option in options if option.name.startswith(name)]
        if not candidates:
            return _error(f"unrecognized option '--{body}'")
        first = candidates[0]
        if any(
            (other.takes_argument, other.short) != (first.takes_argument, first.short)
            for other in candidates[1:]
        ):
            possibilities = " ".join(f"'--{option.name}'" for option in candidates)
            return _error(f"option '--{name}' is ambiguous; possibilities: {possibilities}")
        match = first

    if match.takes_argument:
        value = inline if sep else next(args, None)
        if value is None:
            return _error(f"option '--{match.name}' requires an argument")
        return ParsedOption(match.name, value)
    if sep:
        return _error(f"option '--{match.name}' doesn't allow an argument")
    return ParsedOption(match.name)


def _parse_short(cluster, args, needs_argument, by_short):
    rest = cluster
    while rest:
        letter, rest = rest[0], rest[1:]
        if letter not in needs_argument:
            yield _error(f"invalid option -- '{letter}'")
            continue
        name = by_short[letter].name
        if needs_argument[letter]:
            value = rest or next(args, None)
            if value is None:
                yield _error(f"option requires an argument -- '{letter}'")
            else:
                yield ParsedOption(name, value)
            return
        yield ParsedOption(name)


def parse_arguments(argv):
    """Yield the options in `argv` in order, skipping non-option words.

    Long options may be abbreviated to a unique prefix and take their
    argument after "=" or as the next word; short options may be grouped.
    A lone "--" ends option parsing.
    """
    options = create_long_options()
    needs_argument = {
        letter: bool(colon)
        for letter, colon in re.findall(r"([^:])(:?)", get_getopt_long_string())
    }
    by_short = {option.short: option for option in options if option.short}

    args = iter(argv)
    for arg in args:
        if arg == "--":
            return
        if arg.startswith("--"):
            yield _parse_long(arg[2:], args, options)
        elif arg.startswith("-") and arg != "-":
            yield from _parse_short(arg[1:], args, needs_argument, by_short)


def _validate_env(name, default, print_value, checks):
    errors = ValidationErrors()
    result = validate_and_print_env(
        name, os.environ.get(name), default, print_value, checks, errors
    )
    if result != ExitCode.OK and len(errors) > 0:
        errors.report(sys.stderr)
    return int(result)


def main(argv=None):
    """Run the command and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stderr.write(usage_text())
        return 1

    verbosity = sum(1 for option in parse_arguments(args) if option.name == "verbose")
    set_level(level_for_verbosity(verbosity))

    config_path = None
    env_name = None
    default = None
    print_value = False
    checks = []

    for option in parse_arguments(args):
        name, value = option.name, option.value
        if name == "completion":
            shell = get_shell_type(value)
            if shell is ShellType.UNKNOWN:
                sys.stderr.write(
                    f"Error: Unsupported shell type '{value}'. "
                    "Supported types: bash, zsh\n"
                )
                return 1
            generate_completion_script(shell, sys.stdout)
            return 0
        if name == "config":
            config_path = value
        elif name == "env":
            env_name = value
        elif name == "default":
            default = value
        elif name == "print":
            print_value = True
        elif name == "list-checks":
            list_checks(sys.stderr)
            return 0
        elif name == "verbose":
            continue
        elif name in ("help", ERROR):
            if option.error:
                sys.stderr.write(option.error + "\n")
            sys.stderr.write(usage_text())
            return 1
        elif get_check_definition(name) is not None:
            try:
                checks.append(parse_check(name, value))
            except ValueError as exc:
                sys.stderr.write(f"{exc}\n")
                return 1

    if config_path is None and env_name is None:
        sys.stderr.write("Error: Must specify either -c CONFIG or -e ENV_NAME\n")
        return 1
    if config_path is not None and env_name is not None:
        sys.stderr.write("Error: Cannot specify both -c and -e options\n")
        return 1

    if env_name is not None:
        return _validate_env(env_name, default, print_value, checks)
    return int(handle_config_option(config_path, print_value))


if __name__ == "__main__":
    raise SystemExit(main())