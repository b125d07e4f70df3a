"""
Pelada Manager

Roster, attendance, payments and balanced team draws for a recurring
informal football game.

The team draw lives in :mod:`pelada.services.roster_partitioner`; the Flask
JSON API in :mod:`pelada.ui.web_app`.
"""
from .models import Participant, RoleCategory, TeamAssignment, Match
from .services import (
    draw, suggest_team_count, format_shareable_text,
    InsufficientPlayersError, InvalidInputError, DrawSession
)
from .utils import APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "Participant", "RoleCategory", "TeamAssignment", "Match",
    "draw", "suggest_team_count", "format_shareable_text",
    "InsufficientPlayersError", "InvalidInputError", "DrawSession", "APP_TITLE"
]
