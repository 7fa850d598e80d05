"""Roster classification and team balancing built on plain player lists."""

from .classifier import EligibilityReport, RosterStats, check_eligibility, classify
from .service import AssignmentSummary, Team, TeamAssignmentResult, generate_teams

__all__ = [
    "AssignmentSummary",
    "EligibilityReport",
    "RosterStats",
    "Team",
    "TeamAssignmentResult",
    "check_eligibility",
    "classify",
    "generate_teams",
]
