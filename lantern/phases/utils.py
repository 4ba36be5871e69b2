"""Utility functions for game phases."""

import logging

from ..models import WindowEvent
from ..protocols import Notifier

logger = logging.getLogger(__name__)


async def narrate(notifier: Notifier, game_id: str, text: str, spoken: bool = False) -> None:
    """Send narration, logging rather than raising when delivery fails."""
    try:
        await notifier.notify(game_id, text, spoken=spoken)
    except Exception:
        logger.exception("Failed to deliver narration to game %s", game_id)


async def reply(event: WindowEvent, text: str) -> None:
    """Answer an actor privately if the window gave us a way to."""
    if event.respond is None:
        return
    try:
        await event.respond(text)
    except Exception:
        logger.exception("Failed to reply to %s", event.actor_id)
