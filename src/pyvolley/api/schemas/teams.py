from __future__ import annotations

from typing import List

from pyvolley.balance import Team, TeamAssignmentResult

from .roster import CamelModel, PlayerResponse, PositionCountsResponse


class TeamResponse(CamelModel):
    team_number: int
    players: List[PlayerResponse]
    total_players: int
    men_count: int
    women_count: int
    positions: PositionCountsResponse
    level_sum: int
    average_level: float
    has_setter: bool
    has_libero: bool

    @classmethod
    def from_team(cls, team: Team) -> "TeamResponse":
        return cls(
            team_number=team.team_number,
            players=[PlayerResponse.from_player(player) for player in team.players],
            total_players=team.total_players,
            men_count=team.men_count,
            women_count=team.women_count,
            positions=PositionCountsResponse.from_counts(team.positions),
            level_sum=team.level_sum,
            average_level=team.average_level,
            has_setter=team.has_setter,
            has_libero=team.has_libero,
        )


class AssignmentSummaryResponse(CamelModel):
    total_confirmed_players: int
    players_in_teams: int
    players_on_bench: int
    average_level_difference: float


class TeamAssignmentResponse(CamelModel):
    format: str
    teams: List[TeamResponse]
    bench_players: List[PlayerResponse]
    summary: AssignmentSummaryResponse

    @classmethod
    def from_result(cls, result: TeamAssignmentResult, game_format: str) -> "TeamAssignmentResponse":
        summary = result.summary
        return cls(
            format=game_format,
            teams=[TeamResponse.from_team(team) for team in result.teams],
            bench_players=[PlayerResponse.from_player(player) for player in result.bench_players],
            summary=AssignmentSummaryResponse(
                total_confirmed_players=summary.total_confirmed_players,
                players_in_teams=summary.players_in_teams,
                players_on_bench=summary.players_on_bench,
                average_level_difference=summary.average_level_difference,
            ),
        )
