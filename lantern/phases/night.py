"""Night phase logic - collect votes and resolve them."""

import logging

from ..config import EngineSettings
from ..errors import CollaboratorFailure
from ..game import GameSession
from ..models import NightOutcome, WindowEvent
from ..protocols import Notifier, RosterStore, WindowProvider
from ..roles import Role
from ..services import NightResolver, VoteService, narration
from .utils import narrate, reply

logger = logging.getLogger(__name__)


class NightPhaseHandler:
    """Handles all night phase logic."""

    def __init__(
        self,
        store: RosterStore,
        windows: WindowProvider,
        notifier: Notifier,
        settings: EngineSettings,
    ) -> None:
        self.store = store
        self.windows = windows
        self.notifier = notifier
        self.settings = settings
        self.votes = VoteService()
        self.resolver = NightResolver()

    async def run(self, session: GameSession) -> NightOutcome:
        """Run the vote window, then tally and resolve the night.

        The tally is only computed once the window is confirmed closed, so a
        submission racing the close is either fully written or discarded.
        """
        game_id = session.game_id
        session.round_number += 1
        logger.info("Night %d started for game %s", session.round_number, game_id)

        await narrate(self.notifier, game_id, narration.NIGHT_START, self.settings.spoken_narration)

        duration = self.settings.vote_window_seconds
        handle = await self.windows.open_window(game_id, "vote", duration)

        async def on_event(event: WindowEvent) -> None:
            await self._on_vote(game_id, event)

        window = session.collectors.register(handle, "vote", duration, scope="round", on_event=on_event)
        await session.collectors.wait(window, duration)
        await session.collectors.close_scope("round")

        outcome = await self.resolve(game_id)
        session.last_outcome = outcome
        session.outcomes.append(outcome)
        return outcome

    async def resolve(self, game_id: str) -> NightOutcome:
        """Tally the standing votes and record any death."""
        players = await self.store.get_players(game_id)
        tallies = self.votes.tally_night(players)
        outcome = self.resolver.resolve(
            tallies[Role.WEREWOLF],
            tallies[Role.DOCTOR],
            tallies[Role.DETECTIVE],
            roles={p.id: p.role for p in players},
        )

        if outcome.killed_player_id is not None:
            try:
                await self.store.set_dead(game_id, outcome.killed_player_id)
            except Exception as exc:
                raise CollaboratorFailure(
                    f"Could not record death of {outcome.killed_player_id} in game {game_id}"
                ) from exc
            logger.info("Player %s killed in game %s", outcome.killed_player_id, game_id)

        logger.info(
            "Night resolved for game %s: %s / %s",
            game_id,
            outcome.werewolf_finding.value,
            outcome.detective_finding.value,
        )
        return outcome

    async def _on_vote(self, game_id: str, event: WindowEvent) -> None:
        if event.payload is None:
            logger.debug("Empty vote from %s in game %s", event.actor_id, game_id)
            return

        verdict, actor, target = await self.votes.submit(
            self.store, game_id, event.actor_id, str(event.payload)
        )
        text = narration.advisory(
            verdict,
            actor.name if actor else event.actor_id,
            target.name if target else str(event.payload),
        )
        await reply(event, text)
