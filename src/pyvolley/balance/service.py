"""Team generation for a confirmed roster.

Teams are built in layered passes rather than by search:

1. the roster is seeded by descending level (stable, so confirmation order
   breaks ties) and truncated to an even capacity;
2. a snake draft (A, B, B, A, A, B, ...) spreads the seeded players over
   the two sides;
3. key roles (setter, libero) are redistributed with a single one-for-one
   swap per role when one side holds none and the other two or more;
4. equal-level, same-position players of different gender are swapped while
   that narrows the gender gap.

Every pass is one-for-one, so both sides always keep the same size.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from pyvolley.balance.classifier import PositionCounts, classify, round_level
from pyvolley.config import BalanceRules, default_rules
from pyvolley.models import Gender, Player, Position


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Team:
    team_number: int
    players: Tuple[Player, ...]
    total_players: int
    men_count: int
    women_count: int
    positions: PositionCounts
    level_sum: int
    average_level: float
    has_setter: bool
    has_libero: bool


@dataclass(frozen=True)
class AssignmentSummary:
    total_confirmed_players: int
    players_in_teams: int
    players_on_bench: int
    average_level_difference: float


@dataclass(frozen=True)
class TeamAssignmentResult:
    teams: Tuple[Team, Team]
    bench_players: Tuple[Player, ...]
    summary: AssignmentSummary


@dataclass
class _TeamDraft:
    """Working state for one side while passes run."""

    players: List[Player] = field(default_factory=list)
    level_sum: int = 0
    genders: Counter = field(default_factory=Counter)
    roles: Counter = field(default_factory=Counter)

    def add(self, player: Player) -> None:
        self.players.append(player)
        self._track(player, 1)

    def replace(self, outgoing: Player, incoming: Player) -> None:
        index = next(i for i, player in enumerate(self.players) if player is outgoing)
        self.players[index] = incoming
        self._track(outgoing, -1)
        self._track(incoming, 1)

    def _track(self, player: Player, sign: int) -> None:
        self.level_sum += sign * player.level
        self.genders[player.gender] += sign
        self.roles[player.position] += sign


def _snake_side(pick: int) -> int:
    round_number, slot = divmod(pick, 2)
    return slot if round_number % 2 == 0 else 1 - slot


def _id_key(player_id: str) -> Tuple[int, int, str]:
    # Numeric ids compare numerically and sort ahead of free-form ids.
    if player_id.isascii() and player_id.isdigit():
        return (0, int(player_id), player_id)
    return (1, 0, player_id)


def _swap(first: _TeamDraft, first_player: Player, second: _TeamDraft, second_player: Player) -> None:
    first.replace(first_player, second_player)
    second.replace(second_player, first_player)


def _balance_role(teams: Tuple[_TeamDraft, _TeamDraft], role: Position, rules: BalanceRules) -> None:
    first, second = teams
    if first.roles[role] == 0 and second.roles[role] >= 2:
        over, under = second, first
    elif second.roles[role] == 0 and first.roles[role] >= 2:
        over, under = first, second
    else:
        return

    before = abs(first.level_sum - second.level_sum)
    best: Optional[Tuple[int, Tuple[int, int, str], Tuple[int, int, str]]] = None
    best_pair: Optional[Tuple[Player, Player]] = None
    for outgoing in over.players:
        if outgoing.position is not role:
            continue
        for incoming in under.players:
            # Do not open a new hole on the side that gives a key-role player up.
            if incoming.position in rules.key_roles and under.roles[incoming.position] < 2:
                continue
            delta = outgoing.level - incoming.level
            after = abs((over.level_sum - delta) - (under.level_sum + delta))
            key = (after, _id_key(outgoing.player_id), _id_key(incoming.player_id))
            if best is None or key < best:
                best = key
                best_pair = (outgoing, incoming)

    if best is None or best_pair is None:
        logger.debug("No eligible %s swap candidate; keeping draft", role.value)
        return

    after = best[0]
    if after - before > rules.role_swap_tolerance:
        logger.debug(
            "Skipping %s swap: level gap would grow from %d to %d (tolerance %d)",
            role.value,
            before,
            after,
            rules.role_swap_tolerance,
        )
        return

    outgoing, incoming = best_pair
    _swap(over, outgoing, under, incoming)
    logger.info(
        "Moved %s %s for %s to cover role; level gap %d -> %d",
        role.value,
        outgoing.player_id,
        incoming.player_id,
        before,
        after,
    )


def _gender_gap(first: Counter, second: Counter) -> int:
    return abs(first[Gender.MALE] - second[Gender.MALE]) + abs(first[Gender.FEMALE] - second[Gender.FEMALE])


def _gap_after_swap(first: _TeamDraft, second: _TeamDraft, first_player: Player, second_player: Player) -> int:
    first_genders = first.genders.copy()
    second_genders = second.genders.copy()
    first_genders[first_player.gender] -= 1
    first_genders[second_player.gender] += 1
    second_genders[second_player.gender] -= 1
    second_genders[first_player.gender] += 1
    return _gender_gap(first_genders, second_genders)


def _lowest_id_by_slot(draft: _TeamDraft) -> Dict[Tuple[int, Position, Gender], Player]:
    lowest: Dict[Tuple[int, Position, Gender], Player] = {}
    for player in draft.players:
        slot = (player.level, player.position, player.gender)
        current = lowest.get(slot)
        if current is None or _id_key(player.player_id) < _id_key(current.player_id):
            lowest[slot] = player
    return lowest


def _balance_genders(teams: Tuple[_TeamDraft, _TeamDraft]) -> None:
    """Swap equal-level, same-position players while the gender gap shrinks.

    Only the lowest-id player of each (level, position, gender) slot can win a
    step, so each step is linear in team size. The gap drops on every step and
    starts at most twice the team size, which bounds the pass at quadratic.
    """

    first, second = teams
    gap = _gender_gap(first.genders, second.genders)
    while gap > 0:
        best: Optional[Tuple[int, Tuple[int, int, str], Tuple[int, int, str]]] = None
        best_pair: Optional[Tuple[Player, Player]] = None
        second_slots = _lowest_id_by_slot(second)
        for (level, position, gender), first_player in _lowest_id_by_slot(first).items():
            for other in Gender:
                if other is gender:
                    continue
                second_player = second_slots.get((level, position, other))
                if second_player is None:
                    continue
                after = _gap_after_swap(first, second, first_player, second_player)
                if after >= gap:
                    continue
                key = (after, _id_key(first_player.player_id), _id_key(second_player.player_id))
                if best is None or key < best:
                    best = key
                    best_pair = (first_player, second_player)

        if best is None or best_pair is None:
            break

        first_player, second_player = best_pair
        _swap(first, first_player, second, second_player)
        logger.debug(
            "Swapped %s and %s for gender balance; gap %d -> %d",
            first_player.player_id,
            second_player.player_id,
            gap,
            best[0],
        )
        gap = best[0]


def _build_team(team_number: int, draft: _TeamDraft) -> Team:
    stats = classify(draft.players)
    return Team(
        team_number=team_number,
        players=tuple(draft.players),
        total_players=stats.total,
        men_count=stats.by_gender.men,
        women_count=stats.by_gender.women,
        positions=stats.by_position,
        level_sum=draft.level_sum,
        average_level=stats.average_level,
        has_setter=stats.by_position.setter >= 1,
        has_libero=stats.by_position.libero >= 1,
    )


def generate_teams(roster: Sequence[Player], rules: BalanceRules | None = None) -> TeamAssignmentResult:
    """Split a confirmed roster into two equal teams and a bench.

    The caller's sequence is read, never reordered. Identical input yields an
    identical result. Rosters below the format minimum are still processed;
    gating on ``RosterStats.total`` is left to the caller.
    """

    rules = rules or default_rules()
    players = list(roster)
    team_size = len(players) // 2
    capacity = team_size * 2

    seeded = sorted(range(len(players)), key=lambda index: -players[index].level)
    drafted = seeded[:capacity]

    teams = (_TeamDraft(), _TeamDraft())
    for pick, index in enumerate(drafted):
        teams[_snake_side(pick)].add(players[index])

    drafted_indexes = set(drafted)
    bench = tuple(player for index, player in enumerate(players) if index not in drafted_indexes)
    logger.debug(
        "Drafted %d of %d players into teams of %d (%d on bench)",
        capacity,
        len(players),
        team_size,
        len(bench),
    )

    for role in rules.key_roles:
        _balance_role(teams, role, rules)
    if rules.balance_gender:
        _balance_genders(teams)

    built = (_build_team(1, teams[0]), _build_team(2, teams[1]))
    summary = AssignmentSummary(
        total_confirmed_players=len(players),
        players_in_teams=capacity,
        players_on_bench=len(bench),
        average_level_difference=round_level(abs(built[0].average_level - built[1].average_level)),
    )
    return TeamAssignmentResult(teams=built, bench_players=bench, summary=summary)


__all__ = [
    "AssignmentSummary",
    "Team",
    "TeamAssignmentResult",
    "generate_teams",
]
