"""Local collection windows backed by asyncio queues."""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from .models import WindowEvent
from .types import WindowKind

logger = logging.getLogger(__name__)


class LocalWindow:
    """A collection window that participants feed through ``submit``.

    Iteration ends on timeout or ``stop``; anything still queued at that point
    is dropped so a closed window never delivers late input.
    """

    def __init__(self, game_id: str, kind: WindowKind, expires_at: float) -> None:
        self.game_id = game_id
        self.kind = kind
        self.expires_at = expires_at
        self._queue: asyncio.Queue[WindowEvent | None] = asyncio.Queue()
        self._stopped = False
        self.stop_calls = 0

    @property
    def closed(self) -> bool:
        return self._stopped or asyncio.get_running_loop().time() >= self.expires_at

    def submit(
        self,
        actor_id: str,
        payload: Any = None,
        respond: Callable[[str], Awaitable[None]] | None = None,
    ) -> bool:
        """Queue an input. Returns False if the window no longer accepts input."""
        if self.closed:
            logger.debug("Discarded late %s input from %s in game %s", self.kind, actor_id, self.game_id)
            return False
        self._queue.put_nowait(WindowEvent(actor_id=actor_id, payload=payload, respond=respond))
        return True

    def stop(self) -> None:
        self.stop_calls += 1
        if self._stopped:
            return
        self._stopped = True
        self._queue.put_nowait(None)

    def __aiter__(self) -> AsyncIterator[WindowEvent]:
        return self._events()

    async def _events(self) -> AsyncIterator[WindowEvent]:
        loop = asyncio.get_running_loop()
        while not self._stopped:
            remaining = self.expires_at - loop.time()
            if remaining <= 0:
                return
            try:
                event = await asyncio.wait_for(self._queue.get(), remaining)
            except asyncio.TimeoutError:
                return
            if event is None or self._stopped:
                return
            yield event


class LocalWindowProvider:
    """Opens ``LocalWindow`` instances and remembers them for inspection."""

    def __init__(self) -> None:
        self.windows: list[LocalWindow] = []
        self._opened: dict[WindowKind, asyncio.Event] = {}

    async def open_window(self, game_id: str, kind: WindowKind, duration: float) -> LocalWindow:
        expires_at = asyncio.get_running_loop().time() + duration
        window = LocalWindow(game_id, kind, expires_at)
        self.windows.append(window)
        self._signal(kind).set()
        logger.debug("Opened %s window for game %s (%.1fs)", kind, game_id, duration)
        return window

    def latest(self, kind: WindowKind, game_id: str | None = None) -> LocalWindow | None:
        """Get the most recently opened window of a kind."""
        for window in reversed(self.windows):
            if window.kind == kind and (game_id is None or window.game_id == game_id):
                return window
        return None

    async def wait_for_window(self, kind: WindowKind) -> LocalWindow:
        """Wait until a window of ``kind`` has been opened, then return the newest one."""
        signal = self._signal(kind)
        await signal.wait()
        signal.clear()
        window = self.latest(kind)
        assert window is not None
        return window

    def _signal(self, kind: WindowKind) -> asyncio.Event:
        return self._opened.setdefault(kind, asyncio.Event())
