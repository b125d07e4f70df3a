"""
Team draw for Pelada Manager.

Splits the confirmed roster into a requested number of teams. Goalkeepers are
dealt first, one per team in turn, and every other role is then dealt the
same way from a separate pool. Both pools are shuffled before dealing, so two
draws over the same roster give different teams unless a seeded random source
is passed in.

The functions here are stateless; the caller keeps the team count and the
last result (see :mod:`pelada.services.draw_session`).
"""
import logging
import random
from typing import List, Optional, Protocol, Sequence, Tuple

from ..models import Participant, RoleCategory, TeamAssignment, team_label
from ..utils.constants import (
    MIN_TEAMS, MAX_TEAMS, MIN_PLAYERS_PER_TEAM, SUGGESTION_DIVISOR,
    KEEPER_TAG, FIELD_TAG, SHARE_SIGNATURE
)

logger = logging.getLogger(__name__)

# Field roles are pooled in this order before shuffling; unknown roles go last.
FIELD_ROLE_ORDER = (RoleCategory.DEFENDER, RoleCategory.MIDFIELDER, RoleCategory.FORWARD)


class RandomSource(Protocol):
    """Anything that can shuffle a list in place (``random.Random`` or the ``random`` module)."""

    def shuffle(self, x: list) -> None:
        ...


class DrawError(Exception):
    """Base class for team draw errors."""
    pass


class InsufficientPlayersError(DrawError):
    """Raised when there are fewer than six eligible players per requested team."""

    def __init__(self, number_of_teams: int, eligible_count: int) -> None:
        self.number_of_teams = number_of_teams
        self.eligible_count = eligible_count
        self.required = number_of_teams * MIN_PLAYERS_PER_TEAM
        super().__init__(
            f"Not enough confirmed players for {number_of_teams} teams: "
            f"{eligible_count} confirmed, at least {self.required} needed"
        )


class InvalidInputError(DrawError):
    """Raised for malformed draw input (bad team count, duplicate player ids)."""
    pass


def clamp_team_count(number_of_teams: int) -> int:
    """Clamp a team count into the supported range."""
    return max(MIN_TEAMS, min(MAX_TEAMS, number_of_teams))


def suggest_team_count(eligible_count: int) -> int:
    """
    Suggest a team count for the current number of confirmed players.

    Args:
        eligible_count: Number of confirmed players

    Returns:
        ``max(2, eligible_count // 7)``

    Example:
        >>> suggest_team_count(21)
        3
    """
    return max(MIN_TEAMS, eligible_count // SUGGESTION_DIVISOR)


def _validate(participants: Sequence[Participant], number_of_teams: int) -> None:
    if isinstance(number_of_teams, bool) or not isinstance(number_of_teams, int):
        raise InvalidInputError(f"Team count must be an integer, got {number_of_teams!r}")
    if number_of_teams <= 0:
        raise InvalidInputError(f"Team count must be positive, got {number_of_teams}")

    seen = set()
    duplicates = []
    for participant in participants:
        if participant.id in seen:
            duplicates.append(participant.id)
        seen.add(participant.id)
    if duplicates:
        raise InvalidInputError(f"Duplicate player ids: {', '.join(sorted(set(duplicates)))}")


def _split_pools(participants: Sequence[Participant]) -> Tuple[List[Participant], List[Participant]]:
    """Separate keepers from field players, field players grouped by role order."""
    keepers = [p for p in participants if p.is_keeper()]
    others = [p for p in participants if not p.is_keeper()]

    def role_rank(p: Participant) -> int:
        try:
            return FIELD_ROLE_ORDER.index(p.position)
        except ValueError:
            return len(FIELD_ROLE_ORDER)

    others.sort(key=role_rank)
    return keepers, others


def _serpentine_slot(index: int, number_of_teams: int) -> int:
    """Slot for the index-th pick when dealing A..N then N..A."""
    cycle, offset = divmod(index, number_of_teams)
    return offset if cycle % 2 == 0 else number_of_teams - 1 - offset


def _deal(pool: List[Participant], teams: List[TeamAssignment], serpentine: bool) -> None:
    number_of_teams = len(teams)
    for index, participant in enumerate(pool):
        if serpentine:
            slot = _serpentine_slot(index, number_of_teams)
        else:
            slot = index % number_of_teams
        teams[slot].members.append(participant)


def draw(
    eligible_participants: Sequence[Participant],
    number_of_teams: int,
    rng: Optional[RandomSource] = None,
    balance_levels: bool = False,
) -> List[TeamAssignment]:
    """
    Split confirmed players into balanced teams.

    Args:
        eligible_participants: Confirmed players (filtering happens before this call)
        number_of_teams: Requested team count, clamped to [2, 6]
        rng: Random source used for shuffling; the process-wide ``random`` module if omitted
        balance_levels: Sort each shuffled pool by rating and deal in serpentine
            order so strong players are spread across teams

    Returns:
        One TeamAssignment per team, named "Team A", "Team B", ...

    Raises:
        InvalidInputError: If the team count is not a positive integer or ids repeat
        InsufficientPlayersError: If there are fewer than six players per team
    """
    _validate(eligible_participants, number_of_teams)
    number_of_teams = clamp_team_count(number_of_teams)

    eligible_count = len(eligible_participants)
    if eligible_count < number_of_teams * MIN_PLAYERS_PER_TEAM:
        logger.warning(
            "Draw rejected: %d players for %d teams", eligible_count, number_of_teams
        )
        raise InsufficientPlayersError(number_of_teams, eligible_count)

    rng = rng or random
    keepers, others = _split_pools(eligible_participants)
    rng.shuffle(keepers)
    rng.shuffle(others)

    if balance_levels:
        # Stable sort keeps the shuffled order among equal ratings
        keepers.sort(key=lambda p: p.rating, reverse=True)
        others.sort(key=lambda p: p.rating, reverse=True)

    teams = [TeamAssignment(name=team_label(i)) for i in range(number_of_teams)]
    _deal(keepers, teams, balance_levels)
    _deal(others, teams, balance_levels)

    logger.info(
        "Drew %d teams from %d players (%d keepers, balance_levels=%s)",
        number_of_teams, eligible_count, len(keepers), balance_levels
    )
    return teams


def format_shareable_text(teams: Sequence[TeamAssignment]) -> str:
    """
    Plain-text listing of drawn teams for pasting into a chat.

    Each team gets an upper-case header followed by one line per member
    tagged GK or FIELD, and the listing ends with a signature line.
    """
    blocks = []
    for team in teams:
        lines = [team.name.upper()]
        for member in team.members:
            tag = KEEPER_TAG if member.is_keeper() else FIELD_TAG
            lines.append(f"- {member.name} ({tag})")
        blocks.append("\n".join(lines))
    blocks.append(SHARE_SIGNATURE)
    return "\n\n".join(blocks) + "\n"
