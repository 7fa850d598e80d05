from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from pyvolley.balance import EligibilityReport, RosterStats
from pyvolley.balance.classifier import PositionCounts
from pyvolley.models import Player, Position


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RosterRequest(BaseModel):
    players: List[Player] = Field(default_factory=list)
    format: str | None = None
    force: bool = False

    @field_validator("players")
    @classmethod
    def unique_ids(cls, players: List[Player]) -> List[Player]:
        seen: set[str] = set()
        for player in players:
            if player.player_id in seen:
                raise ValueError(f"duplicate player id {player.player_id!r} in roster")
            seen.add(player.player_id)
        return players


class PlayerResponse(CamelModel):
    player_id: str = Field(alias="id")
    name: str
    gender: str
    position: str
    level: int

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(
            player_id=player.player_id,
            name=player.name,
            gender=player.gender.value,
            position=player.position.value,
            level=player.level,
        )


class GenderCountsResponse(CamelModel):
    men: int
    women: int


class PositionCountsResponse(CamelModel):
    setter: int
    libero: int
    hitter: int
    middle: int
    opposite: int
    other: int

    @classmethod
    def from_counts(cls, counts: PositionCounts) -> "PositionCountsResponse":
        return cls(**{position.value: counts.count(position) for position in Position})


class RosterStatsResponse(CamelModel):
    total: int
    by_gender: GenderCountsResponse
    by_position: PositionCountsResponse
    average_level: float

    @classmethod
    def from_stats(cls, stats: RosterStats) -> "RosterStatsResponse":
        return cls(
            total=stats.total,
            by_gender=GenderCountsResponse(men=stats.by_gender.men, women=stats.by_gender.women),
            by_position=PositionCountsResponse.from_counts(stats.by_position),
            average_level=stats.average_level,
        )


class EligibilityResponse(CamelModel):
    eligible: bool
    minimum_players: int
    missing_players: int
    warnings: List[str]

    @classmethod
    def from_report(cls, report: EligibilityReport) -> "EligibilityResponse":
        return cls(
            eligible=report.eligible,
            minimum_players=report.minimum_players,
            missing_players=report.missing_players,
            warnings=list(report.warnings),
        )


class RosterOverviewResponse(CamelModel):
    format: str
    players: List[PlayerResponse]
    stats: RosterStatsResponse
    eligibility: EligibilityResponse
