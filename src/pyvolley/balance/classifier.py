"""Descriptive statistics and eligibility checks over a confirmed roster."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from pyvolley.config import BalanceRules, default_rules
from pyvolley.models import Gender, Player, Position


LEVEL_PRECISION = Decimal("0.1")


@dataclass(frozen=True)
class GenderCounts:
    men: int = 0
    women: int = 0


@dataclass(frozen=True)
class PositionCounts:
    """Player count per position bucket."""

    setter: int = 0
    libero: int = 0
    hitter: int = 0
    middle: int = 0
    opposite: int = 0
    other: int = 0

    @classmethod
    def from_positions(cls, positions: Iterable[Position]) -> "PositionCounts":
        counts = Counter(position.value for position in positions)
        return cls(**{position.value: counts.get(position.value, 0) for position in Position})

    def count(self, position: Position) -> int:
        return getattr(self, position.value)

    def total(self) -> int:
        return sum(self.count(position) for position in Position)


@dataclass(frozen=True)
class RosterStats:
    """Aggregate view of a roster; never mutates its input."""

    total: int
    by_gender: GenderCounts
    by_position: PositionCounts
    average_level: float


@dataclass(frozen=True)
class EligibilityReport:
    eligible: bool
    minimum_players: int
    missing_players: int
    warnings: tuple[str, ...] = ()


def round_level(value: float) -> float:
    """Round a level figure half-up to one decimal."""

    return float(Decimal(str(value)).quantize(LEVEL_PRECISION, rounding=ROUND_HALF_UP))


def average_level(players: Sequence[Player]) -> float:
    if not players:
        return 0.0
    return round_level(sum(player.level for player in players) / len(players))


def count_genders(players: Iterable[Player]) -> GenderCounts:
    men = 0
    women = 0
    for player in players:
        if player.gender is Gender.MALE:
            men += 1
        elif player.gender is Gender.FEMALE:
            women += 1
    return GenderCounts(men=men, women=women)


def classify(roster: Sequence[Player]) -> RosterStats:
    """Compute roster statistics; total for any roster, including an empty one."""

    players = list(roster)
    return RosterStats(
        total=len(players),
        by_gender=count_genders(players),
        by_position=PositionCounts.from_positions(player.position for player in players),
        average_level=average_level(players),
    )


def check_eligibility(stats: RosterStats, rules: BalanceRules | None = None) -> EligibilityReport:
    """Decide whether a roster is large enough for team generation.

    Role shortages are reported as warnings only; they never block generation.
    """

    rules = rules or default_rules()
    minimum = rules.minimum_players
    missing = max(0, minimum - stats.total)

    warnings: list[str] = []
    if missing:
        warnings.append(
            f"Insufficient players to form teams: at least {minimum} confirmed players are "
            f"required, currently {stats.total}."
        )
    for role in rules.key_roles:
        holders = stats.by_position.count(role)
        if holders == 0:
            warnings.append(f"No {role.value} confirmed.")
        elif holders == 1:
            warnings.append(f"Only one {role.value} confirmed; one team will play without a {role.value}.")

    return EligibilityReport(
        eligible=missing == 0,
        minimum_players=minimum,
        missing_players=missing,
        warnings=tuple(warnings),
    )


__all__ = [
    "EligibilityReport",
    "GenderCounts",
    "PositionCounts",
    "RosterStats",
    "average_level",
    "check_eligibility",
    "classify",
    "count_genders",
    "round_level",
]
