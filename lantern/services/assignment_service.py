"""Role assignment for a freshly filled roster."""

import random
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import InsufficientPlayers
from ..roles import Role

MIN_PLAYERS = 3


@dataclass(frozen=True)
class RoleTier:
    """Inclusive role-count bounds for one player-count bracket."""

    min_players: int
    max_players: int | None  # None = no upper bound
    werewolves: tuple[int, int]
    doctors: tuple[int, int]
    detectives: tuple[int, int]

    def covers(self, count: int) -> bool:
        return count >= self.min_players and (self.max_players is None or count <= self.max_players)


ROLE_TIERS: tuple[RoleTier, ...] = (
    RoleTier(3, 4, werewolves=(1, 1), doctors=(1, 1), detectives=(1, 1)),
    RoleTier(5, 5, werewolves=(1, 2), doctors=(1, 2), detectives=(1, 2)),
    RoleTier(6, 7, werewolves=(1, 2), doctors=(1, 2), detectives=(1, 2)),
    RoleTier(8, 8, werewolves=(2, 2), doctors=(1, 2), detectives=(1, 2)),
    RoleTier(9, 11, werewolves=(2, 3), doctors=(1, 2), detectives=(1, 2)),
    RoleTier(12, 12, werewolves=(3, 3), doctors=(1, 2), detectives=(1, 2)),
    RoleTier(13, None, werewolves=(3, 4), doctors=(1, 2), detectives=(1, 2)),
)


def tier_for(count: int) -> RoleTier:
    """Find the bracket a player count falls into."""
    for tier in ROLE_TIERS:
        if tier.covers(count):
            return tier
    raise InsufficientPlayers(count, MIN_PLAYERS)


class RoleAssignor:
    """Draws a role distribution and deals it onto a roster."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def role_counts(self, count: int) -> dict[Role, int]:
        """Draw how many of each role a game of ``count`` players gets.

        Each special role is drawn uniformly within its tier bounds. When the
        draws do not fit the table (five players drawing two of everything),
        detectives and then doctors are trimmed back toward one.
        """
        if count < MIN_PLAYERS:
            raise InsufficientPlayers(count, MIN_PLAYERS)

        tier = tier_for(count)
        werewolves = self.rng.randint(*tier.werewolves)
        doctors = self.rng.randint(*tier.doctors)
        detectives = self.rng.randint(*tier.detectives)

        while werewolves + doctors + detectives > count:
            if detectives > 1:
                detectives -= 1
            elif doctors > 1:
                doctors -= 1
            else:
                break

        return {
            Role.WEREWOLF: werewolves,
            Role.DOCTOR: doctors,
            Role.DETECTIVE: detectives,
            Role.CIVILIAN: count - werewolves - doctors - detectives,
        }

    def assign(self, players: Sequence[str]) -> dict[str, Role]:
        """Map every player id to a role.

        The role multiset is shuffled before dealing so seat order reveals
        nothing. Nothing is persisted here.
        """
        counts = self.role_counts(len(players))
        roles = [role for role, amount in counts.items() for _ in range(amount)]
        self.rng.shuffle(roles)
        return dict(zip(players, roles, strict=True))
