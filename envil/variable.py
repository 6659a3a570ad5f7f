"""Environment variable descriptions and their validation."""

import os
from dataclasses import dataclass, field

from envil.logger import log
from envil.types import EnvType, ExitCode, LogLevel, type_name
from envil.validator import ValidationErrors


@dataclass
class EnvVariable:
    """A named environment variable and the checks it must pass."""

    name: str
    default: str | None = None
    required: bool = True
    type: EnvType = EnvType.STRING
    checks: tuple = field(default_factory=tuple)


def validate_check(check, value):
    """Run one bound check against a value and return an ExitCode."""
    if check is None or value is None or check.definition is None:
        return ExitCode.VALUE_ERROR
    return ExitCode(check.definition.callback(value, check.argument))


def _failure_detail(check):
    name = check.name
    arg = check.argument
    if name == "gt":
        return f" (value must be greater than {arg})"
    if name == "lt":
        return f" (value must be less than {arg})"
    if name == "eq":
        return f" (value must be equal to {arg})"
    if name == "ne":
        return f" (value must not be equal to {arg})"
    if name == "len":
        return f" (length must be exactly {arg})"
    if name == "lengt":
        return f" (length must be greater than {arg})"
    if name == "lenlt":
        return f" (length must be less than {arg})"
    if name == "regex":
        return f" (value must match pattern: {arg})"
    if name == "enum":
        return f" (allowed values: {', '.join(arg or ())})"
    return ""


def validate_variable(var, value, errors=None):
    """Validate a value for a variable, recording any failure in `errors`.

    Type checks run before all other checks; the first failure stops
    validation. Returns an ExitCode.
    """
    if errors is None:
        errors = ValidationErrors()

    log(LogLevel.INFO, "Validating variable '%s' with value '%s'",
        var.name, "NULL" if value is None else value)
    log(LogLevel.INFO, "Number of checks: %d", len(var.checks))
    for check in var.checks:
        log(LogLevel.INFO, "Check: %s", check.name)
        if check.name == "type":
            log(LogLevel.INFO, "Variable '%s' has type check: %s",
                var.name, type_name(check.argument))
            break

    if value is None:
        if var.required:
            errors.add(var.name, "variable is required but not set",
                       ExitCode.MISSING_VAR)
            return ExitCode.MISSING_VAR
        log(LogLevel.INFO,
            "Variable '%s' not set but not required, validation passed", var.name)
        return ExitCode.OK

    log(LogLevel.INFO, "Checking value: '%s'", value)

    type_checks = [check for check in var.checks if check.name == "type"]
    other_checks = [check for check in var.checks if check.name != "type"]

    for check in type_checks:
        expected = type_name(check.argument)
        log(LogLevel.INFO, "Running type check: %s", expected)
        result = validate_check(check, value)
        if result != ExitCode.OK:
            errors.add(var.name, f"invalid type - expected {expected}\n", result)
            return result
        log(LogLevel.INFO, "Type check passed")

    for check in other_checks:
        log(LogLevel.INFO, "Running check: %s", check.name)
        result = validate_check(check, value)
        if result != ExitCode.OK:
            message = f"failed {check.name} check{_failure_detail(check)}"
            errors.add(var.name, message, result)
            return result
        log(LogLevel.INFO, "Check passed: %s", check.name)

    log(LogLevel.INFO, "All validations passed for '%s'", var.name)
    return ExitCode.OK


def get_env_value(var, environ=None):
    """Return the variable's value from the environment, else its default."""
    if var is None or not var.name:
        return None
    env = os.environ if environ is None else environ
    value = env.get(var.name)
    if value is None:
        value = var.default
    return value