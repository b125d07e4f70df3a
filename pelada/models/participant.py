"""
Participant model for the Pelada Manager application.

This module contains the Participant dataclass which represents a roster
member, along with the role category enumeration used by the team draw and
the per-player statistics tracked across sessions.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Any
from enum import Enum

from ..utils.constants import DEFAULT_RATING, RATING_PER_STAR, MIN_RATING, MAX_RATING


class RoleCategory(Enum):
    """Position categories a player can register with."""
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"

    @classmethod
    def parse(cls, value: Any) -> "RoleCategory":
        """
        Resolve a category from an enum member, its value or its name.

        Raises:
            ValueError: If the value names no known category
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        for member in cls:
            if text.lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown role category: {value!r}")


class PlayerRole(Enum):
    """Access role inside the group."""
    ADMIN = "admin"
    PLAYER = "player"


@dataclass
class PlayerStats:
    """Accumulated player statistics."""
    goals: int = 0
    assists: int = 0
    matches: int = 0
    goals_conceded: int = 0  # For goalkeepers

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "goals": self.goals,
            "assists": self.assists,
            "matches": self.matches,
            "goals_conceded": self.goals_conceded,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PlayerStats':
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        return cls(
            goals=int(data.get("goals", 0) or 0),
            assists=int(data.get("assists", 0) or 0),
            matches=int(data.get("matches", 0) or 0),
            goals_conceded=int(data.get("goals_conceded", 0) or 0),
        )


@dataclass
class Participant:
    """
    Represents a member of the pelada roster.

    Attributes:
        id: Opaque identifier, unique within the roster
        name: Display name (labelling only, never used for balancing)
        position: Registered role category
        confirmed: Whether the player confirmed attendance for the next session
        paid: Whether the player paid the session fee
        rating: Overall rating on a 0-100 scale
        avatar: URL of the player's avatar image
        role: Access role inside the group
        statistics: Goals, assists, matches and goals conceded
        club: Favourite club (optional)
        number: Shirt number (optional)
    """
    id: str
    name: str
    position: RoleCategory = RoleCategory.MIDFIELDER
    confirmed: bool = False
    paid: bool = False
    rating: int = DEFAULT_RATING
    avatar: Optional[str] = None
    role: PlayerRole = PlayerRole.PLAYER
    statistics: PlayerStats = field(default_factory=PlayerStats)
    club: Optional[str] = None
    number: Optional[int] = None

    def is_keeper(self) -> bool:
        """Return True when the player registered as a goalkeeper."""
        return self.position is RoleCategory.GOALKEEPER

    def star_rating(self) -> int:
        """
        Rating expressed as whole stars (0-5).

        Returns:
            Rating divided by 20, rounded to the nearest star
        """
        clamped = max(MIN_RATING, min(MAX_RATING, self.rating))
        return int(round(clamped / RATING_PER_STAR))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert participant to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the participant
        """
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position.value,
            "confirmed": self.confirmed,
            "paid": self.paid,
            "rating": self.rating,
            "avatar": self.avatar,
            "role": self.role.value,
            "statistics": self.statistics.to_dict(),
            "club": self.club,
            "number": self.number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Participant':
        """
        Create participant from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of participant

        Returns:
            Participant instance

        Raises:
            KeyError: If id or name is missing
            ValueError: If position or role is not recognised
        """
        number = data.get("number")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            position=RoleCategory.parse(data.get("position", RoleCategory.MIDFIELDER.value)),
            confirmed=bool(data.get("confirmed", False)),
            paid=bool(data.get("paid", False)),
            rating=int(data.get("rating", DEFAULT_RATING)),
            avatar=data.get("avatar"),
            role=PlayerRole(data.get("role", PlayerRole.PLAYER.value)),
            statistics=PlayerStats.from_dict(data.get("statistics")),
            club=data.get("club"),
            number=int(number) if number not in (None, "") else None,
        )
