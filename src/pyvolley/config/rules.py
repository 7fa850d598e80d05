"""Balancing rules for supported game formats."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Tuple

from pyvolley.models import Position


logger = logging.getLogger(__name__)

_ROLE_SWAP_TOLERANCE_ENV = "PYVOLLEY_ROLE_SWAP_TOLERANCE"
DEFAULT_FORMAT = "INDOOR_6"


@dataclass(frozen=True)
class BalanceRules:
    format: str
    players_per_side: int
    key_roles: Tuple[Position, ...]
    role_swap_tolerance: int = 2
    balance_gender: bool = True

    @property
    def minimum_players(self) -> int:
        return self.players_per_side * 2


_BALANCE_RULES: Dict[str, BalanceRules] = {
    "INDOOR_6": BalanceRules(
        format="INDOOR_6",
        players_per_side=6,
        key_roles=(Position.SETTER, Position.LIBERO),
    ),
    "QUADS_4": BalanceRules(
        format="QUADS_4",
        players_per_side=4,
        key_roles=(Position.SETTER,),
    ),
}


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _with_env_overrides(rules: BalanceRules) -> BalanceRules:
    tolerance = _env_int(_ROLE_SWAP_TOLERANCE_ENV, rules.role_swap_tolerance, min_value=0)
    if tolerance == rules.role_swap_tolerance:
        return rules
    return replace(rules, role_swap_tolerance=tolerance)


def iter_rules() -> Iterable[BalanceRules]:
    """Return an iterator of all configured rule sets."""

    return _BALANCE_RULES.values()


def get_rules(game_format: str) -> BalanceRules:
    """Fetch rules for a game format, raising KeyError if missing."""

    key = game_format.strip().upper()
    if key not in _BALANCE_RULES:
        raise KeyError(f"No balance rules configured for format={game_format!r}")
    return _with_env_overrides(_BALANCE_RULES[key])


def get_rules_by_key(format_key: str | int | None) -> BalanceRules:
    """Resolve rules from a format key ("INDOOR_6") or a players-per-side count."""

    if format_key is None:
        return default_rules()

    if isinstance(format_key, bool) or not isinstance(format_key, (str, int)):
        raise TypeError("format_key must be a str, an int or None")

    if isinstance(format_key, int):
        for rules in iter_rules():
            if rules.players_per_side == format_key:
                return _with_env_overrides(rules)
        raise KeyError(f"No balance rules configured for {format_key} players per side")

    if not format_key.strip():
        raise ValueError("format_key must not be blank")
    return get_rules(format_key)


def default_rules() -> BalanceRules:
    return get_rules(DEFAULT_FORMAT)
