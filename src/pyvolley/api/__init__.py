"""REST API exposing roster statistics and team generation."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from pyvolley.api.schemas import (
    EligibilityResponse,
    PlayerResponse,
    RosterOverviewResponse,
    RosterRequest,
    RosterStatsResponse,
    TeamAssignmentResponse,
)
from pyvolley.balance import check_eligibility, classify, generate_teams
from pyvolley.config import BalanceRules, get_rules_by_key


logger = logging.getLogger(__name__)


def _resolve_rules(game_format: str | None) -> BalanceRules:
    try:
        return get_rules_by_key(game_format)
    except (KeyError, ValueError) as exc:
        detail = exc.args[0] if exc.args else str(exc)
        raise HTTPException(status_code=400, detail=str(detail)) from exc


def create_app() -> FastAPI:
    app = FastAPI(title="pyvolley team balancer")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/teams/stats", response_model=RosterOverviewResponse)
    async def roster_stats(request: RosterRequest) -> RosterOverviewResponse:
        rules = _resolve_rules(request.format)
        stats = classify(request.players)
        report = check_eligibility(stats, rules)
        return RosterOverviewResponse(
            format=rules.format,
            players=[PlayerResponse.from_player(player) for player in request.players],
            stats=RosterStatsResponse.from_stats(stats),
            eligibility=EligibilityResponse.from_report(report),
        )

    @app.post("/teams/generate", response_model=TeamAssignmentResponse)
    async def generate(request: RosterRequest) -> TeamAssignmentResponse:
        rules = _resolve_rules(request.format)
        report = check_eligibility(classify(request.players), rules)
        if not report.eligible and not request.force:
            raise HTTPException(status_code=400, detail=report.warnings[0])

        result = generate_teams(request.players, rules)
        logger.info(
            "Generated %s teams: %d in teams, %d on bench, level difference %.1f",
            rules.format,
            result.summary.players_in_teams,
            result.summary.players_on_bench,
            result.summary.average_level_difference,
        )
        return TeamAssignmentResponse.from_result(result, rules.format)

    return app


__all__ = ["create_app"]
