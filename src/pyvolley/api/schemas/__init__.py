"""Pydantic models for API I/O."""

from .roster import (
    EligibilityResponse,
    PlayerResponse,
    RosterOverviewResponse,
    RosterRequest,
    RosterStatsResponse,
)
from .teams import AssignmentSummaryResponse, TeamAssignmentResponse, TeamResponse

__all__ = [
    "AssignmentSummaryResponse",
    "EligibilityResponse",
    "PlayerResponse",
    "RosterOverviewResponse",
    "RosterRequest",
    "RosterStatsResponse",
    "TeamAssignmentResponse",
    "TeamResponse",
]
