"""
Utilities package for Pelada Manager.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import now_ts, stamp_ms
from .constants import (
    APP_TITLE, MIN_TEAMS, MAX_TEAMS, MIN_PLAYERS_PER_TEAM, SUGGESTION_DIVISOR,
    KEEPER_TAG, FIELD_TAG, SHARE_SIGNATURE, DEFAULT_RATING, GAME_FEE
)

__all__ = [
    "now_ts", "stamp_ms", "APP_TITLE", "MIN_TEAMS", "MAX_TEAMS",
    "MIN_PLAYERS_PER_TEAM", "SUGGESTION_DIVISOR", "KEEPER_TAG", "FIELD_TAG",
    "SHARE_SIGNATURE", "DEFAULT_RATING", "GAME_FEE"
]
