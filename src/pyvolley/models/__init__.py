"""Player models and enumerations."""

from .player import Gender, Player, Position, parse_gender, parse_position

__all__ = ["Gender", "Player", "Position", "parse_gender", "parse_position"]
