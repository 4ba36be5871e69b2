"""Service layer for game logic."""

from .assignment_service import MIN_PLAYERS, ROLE_TIERS, RoleAssignor, RoleTier
from .collector_service import CollectorService, OpenWindow
from .night_service import NightResolver
from .vote_service import VoteService

__all__ = [
    "MIN_PLAYERS",
    "ROLE_TIERS",
    "RoleAssignor",
    "RoleTier",
    "CollectorService",
    "OpenWindow",
    "NightResolver",
    "VoteService",
]
