"""
Roster service for Pelada Manager.

This module provides business logic for the player roster: profile creation
and validation, attendance confirmation, fee payments, the finance summary
and the scout ranking.
"""
import logging
from typing import Dict, List, Optional, Any

from ..models import Participant, PlayerStats, RoleCategory
from ..utils.constants import (
    DEFAULT_PLAYER_NAME, DEFAULT_RATING, GAME_FEE, MIN_RATING, MAX_RATING
)
from .match_service import MatchService
from .roster_store import RosterStore

logger = logging.getLogger(__name__)

PAYMENT_FILTERS = ("all", "paid", "pending")


class PlayerValidationError(Exception):
    """Custom exception for player validation errors."""
    pass


class MatchFullError(Exception):
    """Raised when confirming a player would exceed the active match's limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Match is full ({limit} players confirmed)")


class RosterService:
    """
    Service class for managing the roster.

    All writes go through the :class:`RosterStore`, so subscribers see every
    change.
    """

    def __init__(self, store: Optional[RosterStore] = None, match_service: Optional[MatchService] = None):
        """
        Initialize RosterService.

        Args:
            store: Roster store (a new empty one if omitted)
            match_service: Used to look up the active match's player limit
        """
        self.store = store or RosterStore()
        self.match_service = match_service or MatchService(self.store)

    # ==================== Profiles ==================== #

    def validate_player(self, player: Participant) -> List[str]:
        """
        Validate player data and return list of validation errors.

        Args:
            player: Participant to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not player.id or not str(player.id).strip():
            errors.append("Player id is required")

        if not isinstance(player.name, str):
            errors.append("Player name must be text")
        elif not player.name.strip():
            errors.append("Player name is required")
        elif len(player.name.strip()) < 2:
            errors.append("Player name must be at least 2 characters long")

        if not isinstance(player.position, RoleCategory):
            errors.append(f"Invalid position: {player.position}")

        if not MIN_RATING <= player.rating <= MAX_RATING:
            errors.append(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

        if player.number is not None and not 0 < player.number < 100:
            errors.append("Shirt number must be between 1 and 99")

        return errors

    def create_player(
        self,
        player_id: str,
        name: str,
        position: Any = RoleCategory.MIDFIELDER,
        rating: int = DEFAULT_RATING,
        **kwargs
    ) -> Participant:
        """
        Create a player, validate it and add it to the roster.

        Raises:
            PlayerValidationError: If player data is invalid or the id is taken
        """
        try:
            category = RoleCategory.parse(position)
        except ValueError as e:
            raise PlayerValidationError(str(e)) from e

        player = Participant(
            id=str(player_id).strip(),
            name=name.strip() if isinstance(name, str) else (name or ""),
            position=category,
            rating=rating,
            **kwargs
        )

        errors = self.validate_player(player)
        if self.store.contains(player.id):
            errors.append(f"Player id already exists: {player.id}")
        if errors:
            raise PlayerValidationError(f"Player validation failed: {'; '.join(errors)}")

        self.store.put(player)
        return player

    def ensure_player_profile(
        self,
        uid: str,
        display_name: Optional[str] = None,
        avatar: Optional[str] = None
    ) -> Participant:
        """
        Return the signed-in user's profile, creating a default one if needed.

        New profiles start as midfielders with the default rating.
        """
        if self.store.contains(uid):
            return self.store.get(uid)

        player = Participant(
            id=uid,
            name=display_name or DEFAULT_PLAYER_NAME,
            position=RoleCategory.MIDFIELDER,
            rating=DEFAULT_RATING,
            avatar=avatar,
            statistics=PlayerStats(),
        )
        self.store.put(player)
        logger.info("Created player profile for %s", player.name)
        return player

    def seed_players(self, players: List[Participant]) -> int:
        """
        Load demo players into an empty roster.

        Returns:
            Number of players added (0 if the roster already had players)
        """
        if not self.store.is_empty():
            return 0
        changed = 0
        for player in players:
            self.store.put(player)
            changed += 1
        logger.info("Seeded roster with %d players", changed)
        return changed

    def update_avatar(self, player_id: str, avatar_url: str) -> Participant:
        return self.store.update(player_id, avatar=avatar_url)

    # ==================== Attendance ==================== #

    def confirmed_players(self) -> List[Participant]:
        """Players eligible for the next draw, ordered by name."""
        return [p for p in self.store.snapshot() if p.confirmed]

    def toggle_presence(self, player_id: str) -> Participant:
        """
        Flip a player's attendance confirmation.

        Raises:
            PlayerNotFoundError: If the id is unknown
            MatchFullError: If confirming would exceed the active match's limit
        """
        player = self.store.get(player_id)
        if not player.confirmed:
            match = self.match_service.active_match()
            confirmed_count = sum(1 for p in self.store.all() if p.confirmed)
            if match is not None and not match.has_capacity_for(confirmed_count):
                raise MatchFullError(match.limit)
        return self.store.update(player_id, confirmed=not player.confirmed)

    # ==================== Finance ==================== #

    def toggle_payment(self, player_id: str) -> Participant:
        player = self.store.get(player_id)
        return self.store.update(player_id, paid=not player.paid)

    def finance_summary(self, fee: int = GAME_FEE) -> Dict[str, Any]:
        """
        Collected fees against the expected total for confirmed players.

        Returns:
            Dictionary with counts, amounts and the progress percentage
        """
        players = self.store.all()
        confirmed = sum(1 for p in players if p.confirmed)
        paid = sum(1 for p in players if p.paid)
        progress = int(round(paid / confirmed * 100)) if confirmed else 0
        return {
            "fee": fee,
            "confirmed_count": confirmed,
            "paid_count": paid,
            "pending_count": max(0, confirmed - paid),
            "collected": paid * fee,
            "goal": confirmed * fee,
            "progress": progress,
        }

    def filter_by_payment(self, status: str = "all", search: str = "") -> List[Participant]:
        """
        Players filtered by payment status and a case-insensitive name search.

        Raises:
            ValueError: If the status is not one of all, paid, pending
        """
        status = (status or "all").lower()
        if status not in PAYMENT_FILTERS:
            raise ValueError(f"Payment filter must be one of: {', '.join(PAYMENT_FILTERS)}")

        needle = (search or "").lower()
        result = []
        for player in self.store.snapshot():
            if needle not in player.name.lower():
                continue
            if status == "paid" and not player.paid:
                continue
            if status == "pending" and player.paid:
                continue
            result.append(player)
        return result

    # ==================== Scout ==================== #

    def scout_ranking(self, position: Optional[Any] = None) -> List[Participant]:
        """
        Players ranked by goals scored, optionally restricted to one position.

        Raises:
            ValueError: If the position is not a known category
        """
        players = self.store.snapshot()
        if position:
            category = RoleCategory.parse(position)
            players = [p for p in players if p.position is category]
        # snapshot is name-ordered, so ties stay alphabetical
        players.sort(key=lambda p: p.statistics.goals, reverse=True)
        return players
