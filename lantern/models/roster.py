"""Game and player rows as held by the roster store."""

from dataclasses import dataclass

from ..roles import Role, Team, team_of
from ..types import Phase


@dataclass
class Game:
    """One running match, keyed by its session id."""

    id: str
    is_active: bool = True
    phase: Phase = Phase.SETUP


@dataclass
class Player:
    """A participant seated in one game."""

    id: str
    game_id: str
    name: str
    role: Role | None = None
    is_dead: bool = False
    voted_for: str | None = None

    @property
    def alive(self) -> bool:
        return not self.is_dead

    @property
    def team(self) -> Team | None:
        if self.role is None:
            return None
        return team_of(self.role)

    def is_werewolf(self) -> bool:
        """Check if player is on the werewolves team."""
        return self.role == Role.WEREWOLF

    def __str__(self) -> str:
        status = "alive" if self.alive else "dead"
        role = self.role.value if self.role else "unassigned"
        return f"{self.name} ({role}, {status})"
