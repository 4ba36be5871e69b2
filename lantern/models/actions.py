"""Action result models for night resolution."""

from dataclasses import dataclass
from enum import Enum

from ..types import VerdictStatus


class WerewolfFinding(str, Enum):
    """What the village wakes up to."""

    QUIET = "quiet"  # no werewolf votes at all
    STRUGGLE = "struggle"  # werewolves split their votes
    SAVED = "saved"
    FOUND_DEAD = "found_dead"  # a split doctor decision failed to protect
    MISSING = "missing"  # nobody protected the target


class DetectiveFinding(str, Enum):
    """Which investigation narration is surfaced."""

    NONE = "none"
    WITNESSED = "witnessed"
    SCUFFLE = "scuffle"
    INVESTIGATION = "investigation"
    INNOCENT = "innocent"
    DISTRACTED = "distracted"


@dataclass(frozen=True)
class NightOutcome:
    """Facts produced by resolving one night."""

    killed_player_id: str | None = None
    saved: bool = False
    attacked_player_id: str | None = None
    werewolf_finding: WerewolfFinding = WerewolfFinding.QUIET
    detective_finding: DetectiveFinding = DetectiveFinding.NONE

    @property
    def has_death(self) -> bool:
        return self.killed_player_id is not None


@dataclass(frozen=True)
class SubmissionVerdict:
    """Result of checking one night submission against the role rules."""

    status: VerdictStatus
    reason: str
    stored_target: str | None = None

    @property
    def written(self) -> bool:
        """Whether the actor's stored vote was overwritten."""
        return self.status in ("accepted", "rejected")
