import pytest

from envil import logger
from envil.types import LogLevel


@pytest.fixture(autouse=True)
def restore_level():
    saved = logger.get_level()
    yield
    logger.set_level(saved)


def test_default_level_is_error():
    assert logger.level_for_verbosity(0) is LogLevel.ERROR


@pytest.mark.parametrize(
    "count, level",
    [
        (0, LogLevel.ERROR),
        (1, LogLevel.INFO),
        (2, LogLevel.DEBUG),
        (3, LogLevel.ERROR),
        (10, LogLevel.ERROR),
    ],
)
def test_level_for_verbosity(count, level):
    assert logger.level_for_verbosity(count) is level


def test_set_and_get_level_round_trip():
    for level in LogLevel:
        logger.set_level(level)
        assert logger.get_level() is level


def test_set_level_rejects_bad_value():
    with pytest.raises(ValueError):
        logger.set_level(42)


def test_error_is_written_with_prefix(capsys):
    logger.set_level(LogLevel.ERROR)
    logger.log(LogLevel.ERROR, "boom")
    assert capsys.readouterr().err == "ERROR: boom\n"


def test_more_verbose_message_is_suppressed(capsys):
    logger.set_level(LogLevel.ERROR)
    logger.log(LogLevel.INFO, "quiet")
    logger.log(LogLevel.TRACE, "quieter")
    assert capsys.readouterr().err == ""


def test_format_arguments_are_applied(capsys):
    logger.set_level(LogLevel.INFO)
    logger.log(LogLevel.INFO, "Executing command: %s", "true")
    assert capsys.readouterr().err == "INFO: Executing command: true\n"


def test_trace_prefix_when_enabled(capsys):
    logger.set_level(LogLevel.TRACE)
    logger.log(LogLevel.TRACE, "detail")
    logger.log(LogLevel.WARNING, "careful")
    err = capsys.readouterr().err
    assert err.splitlines() == ["TRACE: detail", "WARNING: careful"]


def test_none_level_writes_nothing(capsys):
    logger.set_level(LogLevel.NONE)
    logger.log(LogLevel.ERROR, "hidden")
    assert capsys.readouterr().err == ""