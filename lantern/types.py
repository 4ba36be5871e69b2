"""Type definitions for game configuration and data structures."""

from enum import Enum
from typing import Literal


class Phase(str, Enum):
    """Ordered phases a game moves through."""

    SETUP = "setup"
    NIGHT = "night"
    DAY = "day"
    SUNSET = "sunset"
    END = "end"


WindowKind = Literal["vote", "role_reveal"]
"""Kinds of collection window the engine opens."""

WindowScope = Literal["round", "game"]
"""Round windows close at the end of each night, game windows at teardown."""

VerdictStatus = Literal["accepted", "rejected", "ignored", "unknown"]
"""Outcome of a single night submission."""
