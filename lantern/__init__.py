"""Lantern - a turn-based Werewolf game engine."""

from .config import EngineSettings
from .errors import CollaboratorFailure, GameStateError, InsufficientPlayers, LanternError, NotFound
from .game import GameSession, check_winner
from .phases import PhaseMachine
from .roles import Role, Team
from .store import InMemoryRosterStore
from .types import Phase
from .windows import LocalWindowProvider

__all__ = [
    "EngineSettings",
    "LanternError",
    "InsufficientPlayers",
    "NotFound",
    "CollaboratorFailure",
    "GameStateError",
    "GameSession",
    "check_winner",
    "PhaseMachine",
    "Role",
    "Team",
    "Phase",
    "InMemoryRosterStore",
    "LocalWindowProvider",
]
