"""
Models package for Pelada Manager.

This package contains the core data models used throughout the application.
"""
from .participant import Participant, PlayerStats, RoleCategory, PlayerRole
from .team import TeamAssignment, DrawRequest, team_label
from .match import Match

__all__ = [
    "Participant", "PlayerStats", "RoleCategory", "PlayerRole",
    "TeamAssignment", "DrawRequest", "team_label", "Match"
]
