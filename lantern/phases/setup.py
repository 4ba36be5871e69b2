"""Setup phase - deal roles, introduce the game and open role checks."""

import asyncio
import logging
import random

from ..config import EngineSettings
from ..errors import CollaboratorFailure, GameStateError
from ..game import GameSession
from ..models import WindowEvent
from ..protocols import Notifier, RosterStore, WindowProvider
from ..roles import UNKNOWN_ROLE_TEXT, get_role_info
from ..services import RoleAssignor, narration
from .utils import narrate, reply

logger = logging.getLogger(__name__)


class SetupPhaseHandler:
    """Handles everything between the join window and the first night."""

    def __init__(
        self,
        store: RosterStore,
        windows: WindowProvider,
        notifier: Notifier,
        settings: EngineSettings,
        rng: random.Random,
    ) -> None:
        self.store = store
        self.windows = windows
        self.notifier = notifier
        self.settings = settings
        self.rng = rng
        self.assignor = RoleAssignor(rng)

    async def run(self, session: GameSession) -> None:
        """Assign roles, narrate the introduction and open the role-reveal window.

        Raises InsufficientPlayers before anything is written when the roster
        is too small, and CollaboratorFailure if roles cannot be persisted.
        """
        game_id = session.game_id
        players = await self.store.get_players(game_id)
        assignment = self.assignor.assign([p.id for p in players])

        try:
            for player_id, role in assignment.items():
                await self.store.set_role(game_id, player_id, role)
        except Exception as exc:
            raise CollaboratorFailure(f"Could not persist roles for game {game_id}") from exc
        logger.info("Assigned roles for game %s: %d players", game_id, len(assignment))

        await self._introduce(session)
        await self.open_role_reveal(session)

    async def open_role_reveal(self, session: GameSession) -> None:
        """Open the one-shot window where players privately check their role."""
        if session.collectors.has_opened("role_reveal"):
            raise GameStateError(f"Role reveal already opened for game {session.game_id}")

        duration = self.settings.role_reveal_seconds
        handle = await self.windows.open_window(session.game_id, "role_reveal", duration)

        async def on_event(event: WindowEvent) -> None:
            await self._reveal_role(session.game_id, event)

        session.collectors.register(handle, "role_reveal", duration, scope="game", on_event=on_event)

    async def _introduce(self, session: GameSession) -> None:
        spoken = self.settings.spoken_narration
        pause = self.settings.narration_pause_seconds
        players = await self.store.get_players(session.game_id)

        await narrate(self.notifier, session.game_id, narration.role_census(players), spoken)
        await narrate(
            self.notifier,
            session.game_id,
            narration.player_introductions(players, self.rng),
        )
        await asyncio.sleep(pause)
        await narrate(self.notifier, session.game_id, narration.INTRO_NARRATION, spoken)
        await asyncio.sleep(pause)

    async def _reveal_role(self, game_id: str, event: WindowEvent) -> None:
        player = await self.store.get_player(game_id, event.actor_id)
        if player is None or player.role is None:
            logger.warning("Role check from %s, who is not in game %s", event.actor_id, game_id)
            await reply(event, UNKNOWN_ROLE_TEXT)
            return
        await reply(event, get_role_info(player.role)["description"])
