"""
Team models produced by the team draw.
"""
import string
from dataclasses import dataclass, field
from typing import Dict, List, Any

from .participant import Participant
from ..utils.constants import RATING_PER_STAR


def team_label(index: int) -> str:
    """
    Sequential team label for a zero-based slot index.

    Example:
        >>> team_label(0)
        'Team A'
        >>> team_label(26)
        'Team AA'
    """
    if index < 0:
        raise ValueError("Team index cannot be negative")
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = string.ascii_uppercase[rem] + letters
    return f"Team {letters}"


@dataclass
class TeamAssignment:
    """
    One team produced by a draw.

    Attributes:
        name: Generated label ("Team A", "Team B", ...)
        members: Players assigned to the team, in insertion order
    """
    name: str
    members: List[Participant] = field(default_factory=list)

    def keeper_count(self) -> int:
        return sum(1 for p in self.members if p.is_keeper())

    def field_count(self) -> int:
        return sum(1 for p in self.members if not p.is_keeper())

    def average_stars(self) -> float:
        """Mean member rating on the five-star scale, one decimal place."""
        if not self.members:
            return 0.0
        total = sum(p.rating for p in self.members)
        return round(total / (len(self.members) * RATING_PER_STAR), 1)

    def member_ids(self) -> List[str]:
        return [p.id for p in self.members]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "members": [p.to_dict() for p in self.members],
            "keepers": self.keeper_count(),
            "field_players": self.field_count(),
            "average": self.average_stars(),
        }


@dataclass
class DrawRequest:
    """Ephemeral input to a single draw; never persisted."""
    number_of_teams: int
    eligible_participants: List[Participant] = field(default_factory=list)

    @property
    def eligible_count(self) -> int:
        return len(self.eligible_participants)
