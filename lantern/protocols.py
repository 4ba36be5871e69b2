"""Protocol definitions for the engine's collaborators."""

from collections.abc import AsyncIterator, Sequence
from typing import TYPE_CHECKING, Protocol

from .roles import Role
from .types import Phase, WindowKind

if TYPE_CHECKING:
    from .models import Player, WindowEvent


class RosterStore(Protocol):
    """Persistence for game and player rows, always addressed by game id."""

    async def create_game(self, game_id: str) -> None: ...

    async def add_player(self, game_id: str, player_id: str, name: str) -> None: ...

    async def get_players(self, game_id: str) -> Sequence["Player"]: ...

    async def get_player(self, game_id: str, player_id: str) -> "Player | None": ...

    async def set_role(self, game_id: str, player_id: str, role: Role) -> None: ...

    async def set_vote(self, game_id: str, player_id: str, target_id: str | None) -> None: ...

    async def set_dead(self, game_id: str, player_id: str) -> None: ...

    async def reset_votes(self, game_id: str) -> None: ...

    async def set_phase(self, game_id: str, phase: Phase, is_active: bool) -> None: ...

    async def delete_game(self, game_id: str) -> None:
        """Delete the game row together with all of its players."""
        ...


class WindowHandle(Protocol):
    """An open, time-boxed input window.

    Iterating yields events until the window times out or is stopped.
    """

    def __aiter__(self) -> AsyncIterator["WindowEvent"]: ...

    def stop(self) -> None:
        """Stop accepting input. Calling it again has no effect."""
        ...


class WindowProvider(Protocol):
    """Opens collection windows on the hosting platform."""

    async def open_window(self, game_id: str, kind: WindowKind, duration: float) -> WindowHandle:
        """Open a window of ``kind`` lasting ``duration`` seconds."""
        ...


class Notifier(Protocol):
    """Delivers narration to everyone in a game."""

    async def notify(self, game_id: str, text: str, *, spoken: bool = False) -> None: ...
