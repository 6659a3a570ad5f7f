import pytest

from envil.types import EnvType, parse_env_type, type_name


@pytest.mark.parametrize(
    "env_type, name",
    [
        (EnvType.STRING, "string"),
        (EnvType.INTEGER, "integer"),
        (EnvType.BOOLEAN, "boolean"),
        (EnvType.FLOAT, "float"),
        (EnvType.JSON, "json"),
    ],
)
def test_type_name(env_type, name):
    assert type_name(env_type) == name


def test_type_name_unknown():
    assert type_name(99) == "unknown"


def test_type_name_accepts_plain_int():
    assert type_name(int(EnvType.JSON)) == type_name(EnvType.JSON)


@pytest.mark.parametrize(
    "env_type", [EnvType.STRING, EnvType.INTEGER, EnvType.FLOAT, EnvType.JSON]
)
def test_parse_round_trip(env_type):
    assert parse_env_type(type_name(env_type)) is env_type


@pytest.mark.parametrize("name", ["boolean", "bogus", "", "INTEGER"])
def test_parse_rejects(name):
    with pytest.raises(ValueError, match="Invalid type"):
        parse_env_type(name)


def test_parsed_types_are_distinct():
    parsed = [parse_env_type(name) for name in ("string", "integer", "float", "json")]
    assert len(set(parsed)) == 4
    assert [type_name(t) for t in parsed] == ["string", "integer", "float", "json"]