"""
Draw session state for the team draw screen.

Holds the chosen team count, the level-balancing toggle and the last drawn
teams. A new draw replaces the previous result entirely.
"""
from typing import List, Optional, Sequence

from ..models import Participant, TeamAssignment
from ..utils.constants import MIN_TEAMS, MAX_TEAMS
from .roster_partitioner import (
    RandomSource, DrawError, clamp_team_count, draw,
    format_shareable_text, suggest_team_count
)


class DrawSession:
    """
    Caller-side state around the stateless partitioner.

    The suggested team count follows the confirmed roster size until the user
    picks a count explicitly; after that the user's choice is kept until
    :meth:`reset_override` is called.
    """

    def __init__(self, rng: Optional[RandomSource] = None, balance_levels: bool = False) -> None:
        self.number_of_teams = MIN_TEAMS
        self.balance_levels = balance_levels
        self.last_result: Optional[List[TeamAssignment]] = None
        self.user_overridden = False
        self._rng = rng

    def update_eligible_count(self, eligible_count: int) -> int:
        """
        Apply the suggested team count for a new confirmed roster size.

        Returns:
            The team count now in effect
        """
        if not self.user_overridden:
            self.number_of_teams = clamp_team_count(suggest_team_count(eligible_count))
        return self.number_of_teams

    def set_number_of_teams(self, count: int) -> int:
        """Set the team count explicitly (clamped to the supported range)."""
        self.number_of_teams = clamp_team_count(int(count))
        self.user_overridden = True
        return self.number_of_teams

    def increment(self) -> int:
        return self.set_number_of_teams(min(MAX_TEAMS, self.number_of_teams + 1))

    def decrement(self) -> int:
        return self.set_number_of_teams(max(MIN_TEAMS, self.number_of_teams - 1))

    def reset_override(self, eligible_count: Optional[int] = None) -> int:
        """Forget the user's choice and optionally re-apply the suggestion."""
        self.user_overridden = False
        if eligible_count is not None:
            return self.update_eligible_count(eligible_count)
        return self.number_of_teams

    def toggle_balance(self) -> bool:
        self.balance_levels = not self.balance_levels
        return self.balance_levels

    def players_per_team(self, eligible_count: int) -> int:
        """Whole players each team would get, shown next to the team count."""
        if eligible_count <= 0:
            return 0
        return eligible_count // self.number_of_teams

    def run_draw(self, eligible: Sequence[Participant]) -> List[TeamAssignment]:
        """
        Draw teams from the confirmed roster and store them as the last result.

        Raises:
            InsufficientPlayersError: If the roster is too small
            InvalidInputError: If the roster contains duplicate ids

        The previous result is cleared when the draw fails.
        """
        try:
            teams = draw(
                eligible, self.number_of_teams,
                rng=self._rng, balance_levels=self.balance_levels
            )
        except DrawError:
            self.last_result = None
            raise
        self.last_result = teams
        return teams

    def share_text(self) -> str:
        if not self.last_result:
            return ""
        return format_shareable_text(self.last_result)

    def to_dict(self, eligible_count: int = 0) -> dict:
        """Snapshot of the session for the web API."""
        return {
            "number_of_teams": self.number_of_teams,
            "balance_levels": self.balance_levels,
            "user_overridden": self.user_overridden,
            "players_per_team": self.players_per_team(eligible_count),
            "eligible_count": eligible_count,
            "teams": [t.to_dict() for t in self.last_result] if self.last_result else [],
        }
