"""
Constants for the Pelada Manager application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Pelada Manager"

# Team draw limits
MIN_TEAMS = 2
MAX_TEAMS = 6
MIN_PLAYERS_PER_TEAM = 6
# One suggested team per seven confirmed players
SUGGESTION_DIVISOR = 7

# Tags used in the shareable team listing
KEEPER_TAG = "GK"
FIELD_TAG = "FIELD"
SHARE_SIGNATURE = f"Drawn with {APP_TITLE}"

# Player defaults
DEFAULT_RATING = 60
MIN_RATING = 0
MAX_RATING = 100
RATING_PER_STAR = 20
DEFAULT_PLAYER_NAME = "New Player"

# Session fee charged to each confirmed player
GAME_FEE = 30

MATCH_TYPES = ["Futsal", "Society", "Campo"]
DEFAULT_MATCH_TYPE = "Society"

# Avatar storage
STORAGE_URL_ENV = "PELADA_STORAGE_URL"
DEFAULT_STORAGE_URL = "http://127.0.0.1:9199/storage"
UPLOAD_TIMEOUT_SECONDS = 15
