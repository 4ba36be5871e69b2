"""Exceptions raised by the game engine."""


class LanternError(Exception):
    """Base class for all engine errors."""


class InsufficientPlayers(LanternError, ValueError):
    """Role assignment needs more players than the roster holds."""

    def __init__(self, count: int, minimum: int) -> None:
        self.count = count
        self.minimum = minimum
        super().__init__(f"At least {minimum} players are required, got {count}")


class NotFound(LanternError, LookupError):
    """A referenced game or player row does not exist."""


class CollaboratorFailure(LanternError):
    """The roster store failed in a way that leaves the game unable to continue."""


class GameStateError(LanternError):
    """An operation was attempted in a phase where it is not allowed."""
