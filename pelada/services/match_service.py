"""
Match service for Pelada Manager.

Creates the upcoming session and keeps exactly one match active.
"""
import logging
import uuid
from typing import Optional

from ..models import Match
from ..utils import now_ts
from ..utils.constants import MATCH_TYPES
from .roster_store import RosterStore

logger = logging.getLogger(__name__)


class MatchValidationError(Exception):
    """Raised when match details are invalid."""
    pass


class MatchService:
    """Business logic for scheduling sessions."""

    def __init__(self, store: RosterStore) -> None:
        self.store = store

    def active_match(self) -> Optional[Match]:
        """The current session, or None if none has been created."""
        active = [m for m in self.store.matches() if m.active]
        if not active:
            return None
        return max(active, key=lambda m: m.created_at or 0)

    def create_match(
        self,
        location: str,
        date: str,
        time: str,
        match_type: str = "Society",
        price: float = 0.0,
        limit: int = 0
    ) -> Match:
        """
        Start a new session.

        Previous active matches are deactivated and every player's attendance
        and payment are reset, since both belong to the session.

        Raises:
            MatchValidationError: If the details are invalid
        """
        errors = []
        if not isinstance(location, str) or not location.strip():
            errors.append("Location is required")
        if not date or not str(date).strip():
            errors.append("Date is required")
        if not time or not str(time).strip():
            errors.append("Time is required")
        if match_type not in MATCH_TYPES:
            errors.append(f"Match type must be one of: {', '.join(MATCH_TYPES)}")
        if price < 0:
            errors.append("Price cannot be negative")
        if limit < 0:
            errors.append("Player limit cannot be negative")
        if errors:
            raise MatchValidationError("; ".join(errors))

        for match in self.store.matches():
            match.active = False

        self.store.batch_update({
            player.id: {"confirmed": False, "paid": False}
            for player in self.store.all()
        })

        match = Match(
            id=uuid.uuid4().hex,
            location=location.strip(),
            date=str(date).strip(),
            time=str(time).strip(),
            match_type=match_type,
            price=float(price),
            limit=int(limit),
            active=True,
            created_at=now_ts(),
        )
        self.store.put_match(match)
        logger.info("Created %s match at %s on %s %s", match_type, match.location, match.date, match.time)
        return match
