"""Collector service - tracks the open input windows of one game."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..models import WindowEvent
from ..protocols import WindowHandle
from ..types import WindowKind, WindowScope

logger = logging.getLogger(__name__)

EventHandler = Callable[[WindowEvent], Awaitable[None]]


@dataclass(eq=False)
class OpenWindow:
    """A registered window: handle, kind, expiry and its consumer task."""

    handle: WindowHandle
    kind: WindowKind
    scope: WindowScope
    expires_at: float
    task: asyncio.Task | None = None
    closed: bool = False

    def __repr__(self) -> str:
        status = "closed" if self.closed else "open"
        return f"OpenWindow({self.kind}, {self.scope}, {status})"


class CollectorService:
    """Owns every window a game has opened and closes each exactly once.

    A window ends in one of three ways: its own timeout, an explicit
    ``close`` from the phase that opened it, or ``close_all`` at teardown.
    Once closed, its consumer is cancelled so no further events reach the
    handler.
    """

    def __init__(self, game_id: str) -> None:
        self.game_id = game_id
        self._windows: list[OpenWindow] = []

    @property
    def windows(self) -> list[OpenWindow]:
        return list(self._windows)

    def has_opened(self, kind: WindowKind) -> bool:
        return any(w.kind == kind for w in self._windows)

    def register(
        self,
        handle: WindowHandle,
        kind: WindowKind,
        duration: float,
        scope: WindowScope = "round",
        on_event: EventHandler | None = None,
    ) -> OpenWindow:
        """Track ``handle`` and, given a handler, start feeding events to it."""
        loop = asyncio.get_running_loop()
        window = OpenWindow(handle=handle, kind=kind, scope=scope, expires_at=loop.time() + duration)
        if on_event is not None:
            window.task = loop.create_task(
                self._consume(window, on_event),
                name=f"{self.game_id}:{kind}",
            )
        self._windows.append(window)
        logger.debug("Registered %s window for game %s", kind, self.game_id)
        return window

    async def wait(self, window: OpenWindow, timeout: float) -> None:
        """Wait up to ``timeout`` seconds, returning early if the window ends by itself."""
        if window.task is None:
            await asyncio.sleep(timeout)
            return
        await asyncio.wait({window.task}, timeout=timeout)

    async def close(self, window: OpenWindow) -> None:
        """Stop a window and its consumer. Safe on an already closed window."""
        if not window.closed:
            window.closed = True
            try:
                window.handle.stop()
            except Exception:
                logger.exception("Failed to stop %s window for game %s", window.kind, self.game_id)
        if window.task is not None and not window.task.done():
            window.task.cancel()
            await asyncio.gather(window.task, return_exceptions=True)

    async def close_scope(self, scope: WindowScope) -> int:
        """Close and forget every window of one scope."""
        targets = [w for w in self._windows if w.scope == scope]
        self._windows = [w for w in self._windows if w.scope != scope]
        for window in targets:
            await self.close(window)
        return len(targets)

    async def close_all(self) -> int:
        """Close and forget every window. A second call finds nothing to do."""
        targets, self._windows = self._windows, []
        for window in targets:
            await self.close(window)
        if targets:
            logger.info("Closed %d windows for game %s", len(targets), self.game_id)
        return len(targets)

    async def _consume(self, window: OpenWindow, on_event: EventHandler) -> None:
        try:
            async for event in window.handle:
                if window.closed:
                    break
                try:
                    await on_event(event)
                except Exception:
                    logger.exception(
                        "Error handling %s input from %s in game %s",
                        window.kind,
                        event.actor_id,
                        self.game_id,
                    )
        finally:
            if not window.closed:
                # Ended on its own timeout; the provider has already stopped it
                window.closed = True
                logger.debug("%s window for game %s expired", window.kind, self.game_id)
