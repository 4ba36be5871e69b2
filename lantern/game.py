"""Game session state and win evaluation."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from .models import NightOutcome, Player
from .roles import Team
from .services import CollectorService
from .types import Phase


def count_factions(players: Iterable[Player]) -> tuple[int, int]:
    """Count living werewolves and living non-werewolves."""
    werewolves = villagers = 0
    for player in players:
        if not player.alive or player.role is None:
            continue
        if player.is_werewolf():
            werewolves += 1
        else:
            villagers += 1
    return werewolves, villagers


def check_winner(players: Iterable[Player]) -> Team | None:
    """Decide whether a faction has won.

    Returns None while both factions still have living members.
    """
    werewolves, villagers = count_factions(players)
    if werewolves == 0:
        return Team.VILLAGE
    if villagers == 0:
        return Team.WEREWOLVES
    return None


@dataclass
class GameSession:
    """Handle for one running game, held by the session layer.

    The roster itself lives in the roster store; this only carries what the
    phase machine needs between phases.
    """

    game_id: str
    phase: Phase = Phase.SETUP
    is_active: bool = True
    round_number: int = 0
    winner: Team | None = None
    last_outcome: NightOutcome | None = None
    outcomes: list[NightOutcome] = field(default_factory=list)
    collectors: CollectorService = field(init=False)

    def __post_init__(self) -> None:
        self.collectors = CollectorService(self.game_id)

    @property
    def game_over(self) -> bool:
        return self.phase == Phase.END

    def get_phase_description(self) -> str:
        """Get a description of the current phase."""
        if self.phase in (Phase.NIGHT, Phase.DAY, Phase.SUNSET):
            return f"{self.phase.value.capitalize()} {self.round_number}"
        return self.phase.value.capitalize()
