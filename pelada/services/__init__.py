"""
Services package for Pelada Manager.

This package contains the team draw and the service classes that handle
roster, match and avatar business logic.
"""
from .roster_partitioner import (
    DrawError, InsufficientPlayersError, InvalidInputError,
    suggest_team_count, draw, format_shareable_text
)
from .draw_session import DrawSession
from .roster_store import RosterStore, PlayerNotFoundError
from .match_service import MatchService, MatchValidationError
from .roster_service import RosterService, PlayerValidationError, MatchFullError
from .avatar_storage import AvatarStorageClient, AvatarUploadError
from .service_factory import ServiceFactory

__all__ = [
    "DrawError", "InsufficientPlayersError", "InvalidInputError",
    "suggest_team_count", "draw", "format_shareable_text", "DrawSession",
    "RosterStore", "PlayerNotFoundError", "MatchService", "MatchValidationError",
    "RosterService", "PlayerValidationError", "MatchFullError",
    "AvatarStorageClient", "AvatarUploadError", "ServiceFactory"
]
