"""
Service factory for Pelada Manager.

Builds the service objects around one shared roster store so every service
sees the same players and matches.
"""
from typing import Optional

from .avatar_storage import AvatarStorageClient
from .draw_session import DrawSession
from .match_service import MatchService
from .roster_partitioner import RandomSource
from .roster_service import RosterService
from .roster_store import RosterStore


class ServiceFactory:
    """
    Factory for creating service instances with their dependencies injected.
    """

    def __init__(self, store: Optional[RosterStore] = None):
        """Initialize factory, optionally around an existing store."""
        self._store = store
        self._avatar_storage: Optional[AvatarStorageClient] = None

    def create_match_service(self) -> MatchService:
        return MatchService(self._get_store())

    def create_roster_service(self, match_service: Optional[MatchService] = None) -> RosterService:
        """
        Create RosterService sharing the factory's store.

        Args:
            match_service: Optional match service; a new one is created if omitted

        Returns:
            Configured RosterService instance
        """
        store = self._get_store()
        return RosterService(store=store, match_service=match_service or MatchService(store))

    def create_draw_session(self, rng: Optional[RandomSource] = None, balance_levels: bool = False) -> DrawSession:
        return DrawSession(rng=rng, balance_levels=balance_levels)

    def create_complete_service_suite(self, rng: Optional[RandomSource] = None) -> dict:
        """
        Create a complete suite of services with shared dependencies.

        Returns:
            Dictionary containing all configured services
        """
        match_service = self.create_match_service()
        return {
            'store': self._get_store(),
            'match': match_service,
            'roster': self.create_roster_service(match_service),
            'draw': self.create_draw_session(rng=rng),
            'avatars': self._get_avatar_storage(),
        }

    def _get_store(self) -> RosterStore:
        """Get singleton roster store."""
        if self._store is None:
            self._store = RosterStore()
        return self._store

    def _get_avatar_storage(self) -> AvatarStorageClient:
        """Get singleton avatar storage client."""
        if self._avatar_storage is None:
            self._avatar_storage = AvatarStorageClient()
        return self._avatar_storage
