"""Night resolution - turns role tallies into a death-or-save outcome."""

from collections.abc import Mapping

from ..models import DetectiveFinding, NightOutcome, Tally, WerewolfFinding
from ..roles import Role


class NightResolver:
    """Combines werewolf, doctor and detective tallies.

    Resolution:
    1. No werewolf votes -> nobody dies.
    2. Werewolves split -> nobody dies.
    3. Single werewolf target -> saved only when the doctors agree on that
       same target; a split doctor vote that includes it still fails.

    The detective result never changes who dies, it only selects narration.
    """

    def resolve(
        self,
        werewolf: Tally,
        doctor: Tally,
        detective: Tally | None = None,
        roles: Mapping[str, Role | None] | None = None,
    ) -> NightOutcome:
        roles = roles or {}
        target = werewolf.consensus
        killed = None
        saved = False

        if werewolf.is_empty:
            finding = WerewolfFinding.QUIET
        elif target is None:
            finding = WerewolfFinding.STRUGGLE
        elif doctor.consensus == target:
            finding = WerewolfFinding.SAVED
            saved = True
        elif doctor.is_split and target in doctor.leaders:
            finding = WerewolfFinding.FOUND_DEAD
            killed = target
        else:
            finding = WerewolfFinding.MISSING
            killed = target

        return NightOutcome(
            killed_player_id=killed,
            saved=saved,
            attacked_player_id=target,
            werewolf_finding=finding,
            detective_finding=self.investigate(werewolf, detective, roles),
        )

    def investigate(
        self,
        werewolf: Tally,
        detective: Tally | None,
        roles: Mapping[str, Role | None],
    ) -> DetectiveFinding:
        """Pick the detective narration variant."""
        if detective is None or detective.is_empty:
            return DetectiveFinding.NONE
        if detective.is_split:
            return DetectiveFinding.DISTRACTED
        if roles.get(detective.consensus) != Role.WEREWOLF:
            return DetectiveFinding.INNOCENT
        if werewolf.consensus is not None:
            return DetectiveFinding.WITNESSED
        if werewolf.is_split:
            return DetectiveFinding.SCUFFLE
        return DetectiveFinding.INVESTIGATION
