"""Command-line interface for roster statistics and team generation."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import ValidationError

from pyvolley.api.schemas import TeamAssignmentResponse
from pyvolley.balance import RosterStats, Team, check_eligibility, classify, generate_teams
from pyvolley.config import BalanceRules, get_rules_by_key
from pyvolley.models import Player


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Balance volleyball teams from a confirmed roster")
    parser.add_argument("--verbose", action="store_true", help="Log balancing decisions to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    stats_cmd = sub.add_parser("stats", help="Show roster statistics and eligibility warnings")
    stats_cmd.add_argument("roster", type=Path, help="Path to roster JSON")
    stats_cmd.add_argument("--format", default=None, help="Game format key (e.g., INDOOR_6, QUADS_4)")

    teams_cmd = sub.add_parser("teams", help="Generate two balanced teams and a bench")
    teams_cmd.add_argument("roster", type=Path, help="Path to roster JSON")
    teams_cmd.add_argument("--format", default=None, help="Game format key (e.g., INDOOR_6, QUADS_4)")
    teams_cmd.add_argument(
        "--force",
        action="store_true",
        help="Generate teams even when the roster is below the format minimum",
    )
    teams_cmd.add_argument("--output", type=Path, default=None, help="Optional path to write result JSON")
    return parser.parse_args(argv)


def _load_roster(path: Path) -> List[Player]:
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SystemExit(f"Cannot read roster {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid roster JSON: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("players", [])
    if not isinstance(payload, list):
        raise SystemExit("Roster JSON must be a list of players or an object with a 'players' list")

    players: List[Player] = []
    seen: set[str] = set()
    for number, entry in enumerate(payload, start=1):
        try:
            player = Player.model_validate(entry)
        except ValidationError as exc:
            raise SystemExit(f"Invalid player #{number}: {exc}") from exc
        if player.player_id in seen:
            raise SystemExit(f"Duplicate player id {player.player_id!r} in roster")
        seen.add(player.player_id)
        players.append(player)
    return players


def _resolve_rules(game_format: str | None) -> BalanceRules:
    try:
        return get_rules_by_key(game_format)
    except (KeyError, ValueError) as exc:
        raise SystemExit(str(exc.args[0] if exc.args else exc)) from exc


def _print_stats(stats: RosterStats) -> None:
    positions = stats.by_position
    print(f"Players: {stats.total}")
    print(f"Gender: {stats.by_gender.men}M / {stats.by_gender.women}F")
    print(f"Average level: {stats.average_level:.1f}")
    print(
        "Positions: "
        f"setter={positions.setter} libero={positions.libero} hitter={positions.hitter} "
        f"middle={positions.middle} opposite={positions.opposite} other={positions.other}"
    )


def _print_team(team: Team) -> None:
    print(
        f"Team {team.team_number} - {team.total_players} players, "
        f"{team.men_count}M / {team.women_count}F, average level {team.average_level:.1f}, "
        f"setter {'yes' if team.has_setter else 'no'}, libero {'yes' if team.has_libero else 'no'}"
    )
    for player in team.players:
        print(f"  {player.name} ({player.position.value}, {player.gender.value}, L{player.level})")


def run_stats(roster_path: Path, game_format: str | None) -> int:
    rules = _resolve_rules(game_format)
    stats = classify(_load_roster(roster_path))
    _print_stats(stats)
    report = check_eligibility(stats, rules)
    for warning in report.warnings:
        print(f"WARNING: {warning}")
    return 0


def run_teams(roster_path: Path, game_format: str | None, force: bool, output_path: Path | None) -> int:
    rules = _resolve_rules(game_format)
    roster = _load_roster(roster_path)
    report = check_eligibility(classify(roster), rules)
    if not report.eligible and not force:
        print(f"ERROR: {report.warnings[0]} Use --force to generate anyway.")
        return 1

    result = generate_teams(roster, rules)
    for team in result.teams:
        _print_team(team)
    if result.bench_players:
        names = ", ".join(player.name for player in result.bench_players)
        print(f"Bench ({len(result.bench_players)}): {names}")
    summary = result.summary
    print(
        f"{summary.players_in_teams}/{summary.total_confirmed_players} players in teams, "
        f"average level difference {summary.average_level_difference:.1f}"
    )

    if output_path:
        payload = TeamAssignmentResponse.from_result(result, rules.format).model_dump(by_alias=True)
        output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote teams to {output_path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "stats":
        return run_stats(args.roster, args.format)
    return run_teams(args.roster, args.format, args.force, args.output)


if __name__ == "__main__":
    raise SystemExit(main())
