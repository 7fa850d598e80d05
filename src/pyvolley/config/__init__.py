"""Configuration helpers for game formats and balancing rules."""

from .rules import BalanceRules, default_rules, get_rules, get_rules_by_key, iter_rules

__all__ = [
    "BalanceRules",
    "default_rules",
    "get_rules",
    "get_rules_by_key",
    "iter_rules",
]
