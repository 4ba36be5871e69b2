"""Vote service for night submissions and per-role tallies."""

import logging
from collections.abc import Iterable

from ..models import Player, SubmissionVerdict, Tally, Vote
from ..protocols import RosterStore
from ..roles import Role

logger = logging.getLogger(__name__)

NIGHT_ROLES = (Role.WEREWOLF, Role.DOCTOR, Role.DETECTIVE)


class VoteService:
    """Checks night submissions against role rules and tallies them."""

    def check_submission(self, actor: Player, target: Player) -> SubmissionVerdict:
        """Decide what a submission from ``actor`` against ``target`` stores.

        Rules are checked in priority order and the first match wins. Rejected
        submissions clear the actor's stored vote; ignored ones leave it alone.
        """
        if actor.role == Role.WEREWOLF:
            if target.role == Role.WEREWOLF:
                reason = "self_cannibalism" if target.id == actor.id else "pack_member"
                return SubmissionVerdict("rejected", reason)
            return SubmissionVerdict("accepted", "target", target.id)

        if actor.role == Role.DOCTOR:
            reason = "protect_self" if target.id == actor.id else "protect"
            return SubmissionVerdict("accepted", reason, target.id)

        if actor.role == Role.DETECTIVE:
            if target.id == actor.id:
                return SubmissionVerdict("rejected", "investigate_self")
            if target.role == Role.DETECTIVE:
                return SubmissionVerdict("rejected", "investigate_colleague")
            return SubmissionVerdict("accepted", "investigate", target.id)

        return SubmissionVerdict("ignored", "no_night_action")

    async def submit(
        self,
        store: RosterStore,
        game_id: str,
        actor_id: str,
        target_id: str,
    ) -> tuple[SubmissionVerdict, Player | None, Player | None]:
        """Check a submission and write the actor's vote when the rules allow.

        Both players must be alive members of the game; otherwise the
        submission is logged and dropped without touching the roster.
        """
        actor = await store.get_player(game_id, actor_id)
        target = await store.get_player(game_id, target_id)
        if actor is None or target is None or actor.is_dead or target.is_dead:
            logger.warning(
                "Dropped vote %s -> %s in game %s: player missing or dead",
                actor_id,
                target_id,
                game_id,
            )
            return SubmissionVerdict("unknown", "unknown_player"), actor, target

        verdict = self.check_submission(actor, target)
        if verdict.written:
            # Last write wins; a rejection clears any earlier choice
            await store.set_vote(game_id, actor_id, verdict.stored_target)
        logger.info(
            "Vote %s (%s) -> %s in game %s: %s",
            actor.name,
            actor.role.value if actor.role else "unassigned",
            target.name,
            game_id,
            verdict.reason,
        )
        return verdict, actor, target

    def tally(self, players: Iterable[Player], role: Role) -> Tally:
        """Tally the standing votes of living players holding ``role``."""
        votes = [
            Vote(voter=p.id, target=p.voted_for)
            for p in players
            if p.role == role and p.alive
        ]
        return Tally(role=role, votes=votes)

    def tally_night(self, players: Iterable[Player]) -> dict[Role, Tally]:
        """Tally every role that acts at night."""
        players = list(players)
        return {role: self.tally(players, role) for role in NIGHT_ROLES}
