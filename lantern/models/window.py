"""Events delivered by collection windows."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WindowEvent:
    """One participant input received through a collection window.

    ``respond`` is an optional private reply channel back to the actor.
    """

    actor_id: str
    payload: Any = None
    respond: Callable[[str], Awaitable[None]] | None = None
