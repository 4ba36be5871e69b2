"""Day and sunset phase logic."""

import asyncio
import logging

from ..config import EngineSettings
from ..errors import CollaboratorFailure
from ..game import GameSession, check_winner
from ..protocols import Notifier, RosterStore
from ..roles import Team
from ..services import narration
from .utils import narrate

logger = logging.getLogger(__name__)


class DayPhaseHandler:
    """Reports the night, waits out the discussion and closes the round."""

    def __init__(self, store: RosterStore, notifier: Notifier, settings: EngineSettings) -> None:
        self.store = store
        self.notifier = notifier
        self.settings = settings

    async def run_day(self, session: GameSession) -> None:
        game_id = session.game_id
        spoken = self.settings.spoken_narration

        if session.last_outcome is not None:
            players = await self.store.get_players(game_id)
            names = {p.id: p.name for p in players}
            await narrate(
                self.notifier,
                game_id,
                narration.morning_report(session.last_outcome, names),
                spoken,
            )
        await narrate(self.notifier, game_id, narration.DAY_START, spoken)

        await asyncio.sleep(self.settings.discussion_seconds)
        logger.info("Day %d ended for game %s", session.round_number, game_id)

    async def run_sunset(self, session: GameSession) -> Team | None:
        """Clear round-scoped votes and check whether a faction has won."""
        game_id = session.game_id
        try:
            await self.store.reset_votes(game_id)
        except Exception as exc:
            raise CollaboratorFailure(f"Could not reset votes for game {game_id}") from exc

        players = await self.store.get_players(game_id)
        winner = check_winner(players)
        if winner is not None:
            logger.info("Game %s won by %s", game_id, winner.value)
        return winner
