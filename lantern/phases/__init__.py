"""Phase management - drives a game through setup, night, day and sunset.

- setup.py: role assignment, introduction and the role-reveal window
- night.py: the vote window and night resolution
- day.py: morning report, discussion wait and the sunset round boundary
- utils.py: narration and private reply helpers
"""

import logging
import random

from ..config import EngineSettings
from ..errors import GameStateError
from ..game import GameSession
from ..protocols import Notifier, RosterStore, WindowProvider
from ..roles import Team
from ..services import narration
from ..types import Phase
from .day import DayPhaseHandler
from .night import NightPhaseHandler
from .setup import SetupPhaseHandler
from .utils import narrate

logger = logging.getLogger(__name__)


class PhaseMachine:
    """Runs games through their phases.

    One machine can drive many games at once; everything per-game lives on
    the ``GameSession`` handle returned by ``open_game``.
    """

    def __init__(
        self,
        store: RosterStore,
        windows: WindowProvider,
        notifier: Notifier,
        settings: EngineSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.windows = windows
        self.notifier = notifier
        self.settings = settings or EngineSettings()
        self.rng = rng or random.Random()
        self.setup_handler = SetupPhaseHandler(store, windows, notifier, self.settings, self.rng)
        self.night_handler = NightPhaseHandler(store, windows, notifier, self.settings)
        self.day_handler = DayPhaseHandler(store, notifier, self.settings)

    async def open_game(self, game_id: str) -> GameSession:
        """Create the game row in ``setup`` and hand back its session."""
        await self.store.create_game(game_id)
        logger.info("Opened game %s", game_id)
        return GameSession(game_id=game_id)

    async def join(self, session: GameSession, player_id: str, name: str) -> bool:
        """Seat a participant before roles are dealt.

        Returns False if they already joined.
        """
        if session.phase != Phase.SETUP or not session.is_active:
            raise GameStateError(f"Game {session.game_id} is no longer accepting players")
        if await self.store.get_player(session.game_id, player_id) is not None:
            return False
        await self.store.add_player(session.game_id, player_id, name)
        logger.info("%s joined game %s", name, session.game_id)
        return True

    async def run(self, session: GameSession) -> Team | None:
        """Play the game to the end and tear it down.

        Teardown happens even when a phase fails; the error is then re-raised
        for the session layer.
        """
        if session.phase != Phase.SETUP or not session.is_active:
            raise GameStateError(f"Game {session.game_id} has already been started")
        try:
            while session.is_active:
                await self.step(session)
        finally:
            await self.teardown(session)
        return session.winner

    async def step(self, session: GameSession) -> Phase:
        """Run the current phase and persist the transition it leads to."""
        phase = session.phase
        if phase == Phase.SETUP:
            await self.setup_handler.run(session)
            next_phase = Phase.NIGHT
        elif phase == Phase.NIGHT:
            await self.night_handler.run(session)
            next_phase = Phase.DAY
        elif phase == Phase.DAY:
            await self.day_handler.run_day(session)
            next_phase = Phase.SUNSET
        elif phase == Phase.SUNSET:
            session.winner = await self.day_handler.run_sunset(session)
            if session.winner is None and self.settings.allows_another_round(session.round_number):
                next_phase = Phase.NIGHT
            else:
                next_phase = Phase.END
        else:
            session.is_active = False
            next_phase = Phase.END
            await narrate(
                self.notifier,
                session.game_id,
                narration.game_over_line(session.winner),
                self.settings.spoken_narration,
            )

        session.phase = next_phase
        await self.store.set_phase(session.game_id, next_phase, session.is_active)
        logger.info("Game %s: %s -> %s", session.game_id, phase.value, next_phase.value)
        return next_phase

    async def teardown(self, session: GameSession) -> None:
        """Close every window and delete the game with its players."""
        session.is_active = False
        await session.collectors.close_all()
        try:
            await self.store.delete_game(session.game_id)
        except Exception:
            logger.exception("Failed to delete game %s", session.game_id)
        logger.info("Game %s torn down", session.game_id)


__all__ = ["PhaseMachine"]
