import pytest
from pydantic import ValidationError

from pyvolley.models import Gender, Player, Position, parse_gender, parse_position


def test_player_is_frozen():
    player = Player(player_id="p1", name="Ana", gender="F", position="setter", level=4)

    assert player.player_id == "p1"
    assert player.position is Position.SETTER

    with pytest.raises((TypeError, ValidationError)):
        player.level = 5  # type: ignore[misc]


def test_player_accepts_id_alias_and_integer_ids():
    player = Player.model_validate({"id": 7, "name": "Bruno", "gender": "M", "position": "meio", "level": "3"})

    assert player.player_id == "7"
    assert player.gender is Gender.MALE
    assert player.position is Position.MIDDLE
    assert player.level == 3


def test_player_requires_level_and_id():
    with pytest.raises(ValidationError):
        Player.model_validate({"name": "No Id", "level": 3})
    with pytest.raises(ValidationError):
        Player.model_validate({"id": "x", "name": "No Level"})


def test_unknown_values_fall_back_instead_of_failing():
    player = Player(player_id="p9", name="Coach", gender="X", position="coach", level=9)

    assert player.gender is Gender.UNKNOWN
    assert player.position is Position.OTHER
    assert player.level == 9


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Levantador", Position.SETTER),
        ("Líbero", Position.LIBERO),
        ("outside hitter", Position.HITTER),
        ("atacante", Position.HITTER),
        ("middle-blocker", Position.MIDDLE),
        ("OPOSTO", Position.OPPOSITE),
        ("outros", Position.OTHER),
        ("", Position.OTHER),
        (None, Position.OTHER),
    ],
)
def test_parse_position_aliases(raw, expected):
    assert parse_position(raw) is expected


def test_parse_gender_aliases():
    assert parse_gender("m") is Gender.MALE
    assert parse_gender("Feminino") is Gender.FEMALE
    assert parse_gender(None) is Gender.UNKNOWN
    assert parse_gender("nb") is Gender.UNKNOWN
