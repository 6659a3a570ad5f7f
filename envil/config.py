"""Validation of single variables and of YAML or JSON configuration files."""

import json
import os
import sys

import yaml

from envil.checks import parse_check
from envil.logger import log
from envil.types import ExitCode, LogLevel
from envil.validator import ValidationErrors
from envil.variable import EnvVariable, validate_variable

_YAML_EXTENSIONS = (".yml", ".yaml")
_JSON_EXTENSIONS = (".json",)


def _parse_checks(pairs):
    """Bind (name, raw) pairs to checks, logging and skipping bad ones."""
    checks = []
    for name, raw in pairs:
        try:
            checks.append(parse_check(name, raw))
        except ValueError as exc:
            log(LogLevel.ERROR, "%s", exc)
    return checks


def _json_text(obj):
    """Render a JSON value as the text a check or default receives."""
    if obj is None:
        return None
    if isinstance(obj, str):
        return obj
    if isinstance(obj, bool):
        return "true" if obj else "false"
    return json.dumps(obj)


def validate_and_print_env(name, env_value, default=None, print_value=False,
                           checks=(), errors=None, out=None):
    """Validate one variable and print NAME=VALUE when asked and it passes.

    The default is used when the variable is unset; a variable without a
    default is required. Returns an ExitCode.
    """
    value = env_value if env_value is not None else default
    var = EnvVariable(
        name=name,
        default=default,
        required=default is None,
        checks=tuple(checks),
    )
    result = validate_variable(var, value, errors)
    if result == ExitCode.OK and print_value and value is not None:
        (sys.stdout if out is None else out).write(f"{name}={value}\n")
    return result


def _extension(path):
    dot = path.rfind(".")
    return path[dot:] if dot >= 0 else ""


def handle_config_option(path, print_value=False, environ=None, out=None):
    """Validate every variable described in a .yml, .yaml or .json file.

    Validation errors are reported on stderr. Returns an ExitCode.
    """
    if path is None:
        log(LogLevel.ERROR, "Error: No configuration file path provided")
        return ExitCode.CONFIG_ERROR

    path = os.fspath(path)
    log(LogLevel.TRACE, "Loading config file: %s", path)
    try:
        stream = open(path, encoding="utf-8")
    except OSError:
        log(LogLevel.ERROR, "Error: Cannot open config file: %s", path)
        return ExitCode.CONFIG_ERROR

    with stream:
        ext = _extension(path)
        if ext in _YAML_EXTENSIONS:
            handler = handle_yaml_config
        elif ext in _JSON_EXTENSIONS:
            handler = handle_json_config
        else:
            log(LogLevel.ERROR, "Error: Config file must be .yml, .yaml, or .json")
            return ExitCode.CONFIG_ERROR

        errors = ValidationErrors()
        result = handler(stream, print_value, errors, environ, out)

    if result != ExitCode.OK and len(errors) > 0:
        errors.report()
    return result


def handle_yaml_config(stream, print_value=False, errors=None, environ=None, out=None):
    """Validate the variables of a YAML document read from a stream.

    Scalars are taken as written, without YAML type conversion.
    """
    if errors is None:
        errors = ValidationErrors()
    env = os.environ if environ is None else environ

    try:
        root = next(iter(yaml.compose_all(stream, Loader=yaml.SafeLoader)), None)
    except (yaml.YAMLError, UnicodeDecodeError):
        log(LogLevel.ERROR, "Failed to parse YAML file")
        return ExitCode.CONFIG_ERROR

    if not isinstance(root, yaml.MappingNode):
        log(LogLevel.ERROR, "Error: YAML root must be a mapping")
        return ExitCode.CONFIG_ERROR

    result = ExitCode.OK
    for key_node, value_node in root.value:
        if not isinstance(key_node, yaml.ScalarNode):
            continue
        if not isinstance(value_node, yaml.MappingNode):
            continue

        name = key_node.value
        default = None
        checks = []
        for opt_key, opt_value in value_node.value:
            if not isinstance(opt_key, yaml.ScalarNode):
                continue
            if opt_key.value == "default" and isinstance(opt_value, yaml.ScalarNode):
                default = opt_value.value
            elif opt_key.value == "checks" and isinstance(opt_value, yaml.MappingNode):
                if opt_value.value:
                    checks = _parse_checks(
                        (check_key.value, check_value.value)
                        for check_key, check_value in opt_value.value
                        if isinstance(check_key, yaml.ScalarNode)
                        and isinstance(check_value, yaml.ScalarNode)
                    )

        var_result = validate_and_print_env(
            name, env.get(name), default, print_value, checks, errors, out
        )
        if var_result != ExitCode.OK:
            result = var_result

    return result


def handle_json_config(stream, print_value=False, errors=None, environ=None, out=None):
    """Validate the variables of a JSON object read from a stream."""
    if errors is None:
        errors = ValidationErrors()
    env = os.environ if environ is None else environ

    try:
        text = stream.read()
    except (OSError, UnicodeDecodeError):
        log(LogLevel.ERROR, "Failed to read JSON file")
        return ExitCode.CONFIG_ERROR

    try:
        root = json.loads(text)
    except ValueError as exc:
        log(LogLevel.ERROR, "Failed to parse JSON: %s", getattr(exc, "msg", exc))
        return ExitCode.CONFIG_ERROR

    if not isinstance(root, dict):
        log(LogLevel.ERROR, "Error: JSON root must be an object")
        return ExitCode.CONFIG_ERROR

    result = ExitCode.OK
    for name, spec in root.items():
        if not isinstance(spec, dict):
            continue

        default = _json_text(spec["default"]) if "default" in spec else None

        checks = []
        checks_obj = spec.get("checks")
        if isinstance(checks_obj, dict) and checks_obj:
            pairs = []
            for check_name, raw in checks_obj.items():
                text_value = _json_text(raw)
                if text_value is None:
                    log(LogLevel.ERROR, "Missing value for check '%s'", check_name)
                    continue
                pairs.append((check_name, text_value))
            checks = _parse_checks(pairs)

        var_result = validate_and_print_env(
            name, env.get(name), default, print_value, checks, errors, out
        )
        if var_result != ExitCode.OK:
            result = var_result

    return result