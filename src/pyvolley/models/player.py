"""Canonical player models shared across the classifier, balancer and API layers."""

from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "?"


class Position(str, Enum):
    SETTER = "setter"
    LIBERO = "libero"
    HITTER = "hitter"
    MIDDLE = "middle"
    OPPOSITE = "opposite"
    OTHER = "other"


_GENDER_ALIASES: dict[str, Gender] = {
    "M": Gender.MALE,
    "MALE": Gender.MALE,
    "MASCULINO": Gender.MALE,
    "F": Gender.FEMALE,
    "FEMALE": Gender.FEMALE,
    "FEMININO": Gender.FEMALE,
}

_POSITION_ALIASES: dict[str, Position] = {
    "setter": Position.SETTER,
    "levantador": Position.SETTER,
    "levantadora": Position.SETTER,
    "libero": Position.LIBERO,
    "hitter": Position.HITTER,
    "outside": Position.HITTER,
    "outside_hitter": Position.HITTER,
    "atacante": Position.HITTER,
    "ponteiro": Position.HITTER,
    "ponteira": Position.HITTER,
    "middle": Position.MIDDLE,
    "middle_blocker": Position.MIDDLE,
    "meio": Position.MIDDLE,
    "central": Position.MIDDLE,
    "opposite": Position.OPPOSITE,
    "opp": Position.OPPOSITE,
    "oposto": Position.OPPOSITE,
    "oposta": Position.OPPOSITE,
    "other": Position.OTHER,
    "outros": Position.OTHER,
}


def _strip_accents(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def parse_gender(value: Any) -> Gender:
    """Map a raw gender token to :class:`Gender`, falling back to ``UNKNOWN``."""

    if isinstance(value, Gender):
        return value
    if value is None:
        return Gender.UNKNOWN
    token = _strip_accents(str(value)).strip().upper()
    return _GENDER_ALIASES.get(token, Gender.UNKNOWN)


def parse_position(value: Any) -> Position:
    """Map a raw position token to :class:`Position`, falling back to ``OTHER``."""

    if isinstance(value, Position):
        return value
    if value is None:
        return Position.OTHER
    token = _strip_accents(str(value)).strip().lower()
    token = "_".join(token.replace("-", " ").split())
    return _POSITION_ALIASES.get(token, Position.OTHER)


class Player(BaseModel):
    """Confirmed player as supplied by the roster layer."""

    player_id: str = Field(..., min_length=1, validation_alias=AliasChoices("player_id", "id"))
    name: str
    gender: Gender = Gender.UNKNOWN
    position: Position = Position.OTHER
    level: int

    model_config = ConfigDict(frozen=True)

    @field_validator("player_id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("gender", mode="before")
    @classmethod
    def coerce_gender(cls, value: Any) -> Gender:
        return parse_gender(value)

    @field_validator("position", mode="before")
    @classmethod
    def coerce_position(cls, value: Any) -> Position:
        return parse_position(value)
