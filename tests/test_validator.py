import io

import pytest

from envil.types import EnvType, ExitCode
from envil.validator import (
    ValidationError,
    ValidationErrors,
    is_float,
    is_integer,
    is_json,
    parse_number,
    validate_type,
)


@pytest.mark.parametrize(
    "env_type, value, expected",
    [
        (EnvType.INTEGER, "123", ExitCode.OK),
        (EnvType.INTEGER, "-123", ExitCode.OK),
        (EnvType.INTEGER, "12.3", ExitCode.TYPE_ERROR),
        (EnvType.INTEGER, "abc", ExitCode.TYPE_ERROR),
        (EnvType.FLOAT, "123.45", ExitCode.OK),
        (EnvType.FLOAT, "-123.45", ExitCode.OK),
        (EnvType.FLOAT, "123", ExitCode.OK),
        (EnvType.FLOAT, "abc", ExitCode.TYPE_ERROR),
        (EnvType.JSON, '{"key":"value"}', ExitCode.OK),
        (EnvType.JSON, "[1,2,3]", ExitCode.OK),
        (EnvType.JSON, "invalid json", ExitCode.TYPE_ERROR),
        (EnvType.STRING, "any string", ExitCode.OK),
        (EnvType.STRING, "123", ExitCode.OK),
        (EnvType.STRING, "", ExitCode.OK),
    ],
)
def test_type_validation(env_type, value, expected):
    assert validate_type(env_type, value) == expected


def test_validate_type_missing_value():
    assert validate_type(EnvType.STRING, None) == ExitCode.TYPE_ERROR


def test_validate_type_boolean_is_never_valid():
    assert validate_type(EnvType.BOOLEAN, "true") == ExitCode.TYPE_ERROR


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", True),
        ("-42", True),
        ("", False),
        ("+1", False),
        ("1 ", False),
        ("1.0", False),
    ],
)
def test_is_integer(text, expected):
    assert is_integer(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1e5", True),
        (".5", True),
        ("5.", True),
        (" 1.5", True),
        ("0x1A", True),
        ("inf", True),
        ("1e", False),
        ("1.5 ", False),
        ("", False),
        ("1_0", False),
    ],
)
def test_is_float(text, expected):
    assert is_float(text) is expected


def test_parse_number_values():
    assert parse_number("0x10") == 16.0
    assert parse_number("-2.5") == -2.5
    assert parse_number("") == 0.0
    assert parse_number("   ") is None
    assert parse_number("abc") is None


@pytest.mark.parametrize(
    "text, expected",
    [('{"a": 1}', True), ("[]", True), ("{invalid}", False), ("", False)],
)
def test_is_json(text, expected):
    assert is_json(text) is expected


def test_validation_errors():
    errors = ValidationErrors()
    assert len(errors) == 0

    errors.add("TEST_VAR", "test error message", ExitCode.TYPE_ERROR)
    assert len(errors) == 1
    assert errors[0].name == "TEST_VAR"
    assert errors[0].message == "test error message"
    assert errors[0].code == ExitCode.TYPE_ERROR

    errors.add("ANOTHER_VAR", "another error", ExitCode.VALUE_ERROR)
    assert len(errors) == 2


def test_validation_errors_iteration_order():
    errors = ValidationErrors()
    errors.add("A", "first", ExitCode.MISSING_VAR)
    errors.add("B", "second", ExitCode.VALUE_ERROR)
    assert list(errors) == [
        ValidationError("A", "first", ExitCode.MISSING_VAR),
        ValidationError("B", "second", ExitCode.VALUE_ERROR),
    ]


def test_validation_errors_report():
    errors = ValidationErrors()
    errors.add("TEST_VAR", "test error message", ExitCode.TYPE_ERROR)
    errors.add("ANOTHER_VAR", "another error", ExitCode.VALUE_ERROR)
    out = io.StringIO()
    errors.report(out)
    assert out.getvalue() == (
        "Error TEST_VAR: test error message\n"
        "Error ANOTHER_VAR: another error\n"
    )


def test_validation_errors_report_defaults_to_stderr(capsys):
    errors = ValidationErrors()
    errors.add("X", "bad", ExitCode.VALUE_ERROR)
    errors.report()
    assert capsys.readouterr().err == "Error X: bad\n"


def test_add_rejects_unknown_code():
    errors = ValidationErrors()
    with pytest.raises(ValueError):
        errors.add("X", "bad", 99)
    assert len(errors) == 0