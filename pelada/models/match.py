"""
Match model for the Pelada Manager application.

A match is the upcoming session players confirm attendance for. Only one
match is active at a time.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Any

from ..utils.constants import DEFAULT_MATCH_TYPE


@dataclass
class Match:
    """
    Represents a scheduled session.

    Attributes:
        id: Unique identifier
        location: Venue name
        date: Session date as entered (e.g. "21/10")
        time: Kick-off time as entered (e.g. "20:00")
        match_type: Futsal, Society or Campo
        price: Total price of the venue booking
        limit: Maximum number of confirmed players (0 means no limit)
        active: Whether this is the current session
        created_at: Creation time in epoch seconds
    """
    id: str
    location: str
    date: str
    time: str
    match_type: str = DEFAULT_MATCH_TYPE
    price: float = 0.0
    limit: int = 0
    active: bool = True
    created_at: Optional[float] = None

    def has_capacity_for(self, confirmed_count: int) -> bool:
        """Return True if one more player can confirm."""
        return self.limit <= 0 or confirmed_count < self.limit

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "location": self.location,
            "date": self.date,
            "time": self.time,
            "type": self.match_type,
            "price": self.price,
            "limit": self.limit,
            "active": self.active,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Match':
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=str(data["id"]),
            location=data.get("location", ""),
            date=data.get("date", ""),
            time=data.get("time", ""),
            match_type=data.get("type", DEFAULT_MATCH_TYPE),
            price=float(data.get("price", 0) or 0),
            limit=int(data.get("limit", 0) or 0),
            active=bool(data.get("active", True)),
            created_at=data.get("created_at"),
        )
