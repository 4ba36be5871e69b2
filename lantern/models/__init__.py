"""Data models for game rows, tallies and night results."""

from .actions import DetectiveFinding, NightOutcome, SubmissionVerdict, WerewolfFinding
from .roster import Game, Player
from .voting import Tally, Vote
from .window import WindowEvent

__all__ = [
    "Game",
    "Player",
    "Vote",
    "Tally",
    "NightOutcome",
    "WerewolfFinding",
    "DetectiveFinding",
    "SubmissionVerdict",
    "WindowEvent",
]
