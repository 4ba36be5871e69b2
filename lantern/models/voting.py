"""Voting models and per-role tallies."""

from collections import Counter
from dataclasses import dataclass, field

from ..roles import Role


@dataclass(frozen=True)
class Vote:
    """A single stored night vote."""

    voter: str
    target: str | None  # None when the voter has no standing choice

    def is_abstain(self) -> bool:
        return self.target is None


@dataclass
class Tally:
    """Aggregated votes of one role for a single round.

    ``ranking`` groups targets by descending vote count; the first group holds
    the leaders. A tally with more than one leader has no consensus target.
    """

    role: Role
    votes: list[Vote] = field(default_factory=list)
    vote_counts: dict[str, int] = field(default_factory=dict)
    ranking: list[list[str]] = field(default_factory=list)

    def __post_init__(self):
        if not self.vote_counts:
            self._calculate_result()

    def _calculate_result(self):
        counts = Counter(v.target for v in self.votes if not v.is_abstain())
        self.vote_counts = dict(counts)

        groups: dict[int, list[str]] = {}
        # Counter.most_common keeps first-seen order among equal counts
        for target, count in counts.most_common():
            groups.setdefault(count, []).append(target)
        self.ranking = [groups[count] for count in sorted(groups, reverse=True)]

    @property
    def leaders(self) -> list[str]:
        """Targets sharing the highest vote count."""
        return list(self.ranking[0]) if self.ranking else []

    @property
    def consensus(self) -> str | None:
        """The single leading target, or None when empty or tied."""
        leaders = self.leaders
        return leaders[0] if len(leaders) == 1 else None

    @property
    def is_empty(self) -> bool:
        return not self.ranking

    @property
    def is_split(self) -> bool:
        return len(self.leaders) > 1

    def __repr__(self) -> str:
        if self.is_empty:
            return f"Tally({self.role.value}, no votes)"
        if self.is_split:
            return f"Tally({self.role.value}, TIE: {self.leaders})"
        return f"Tally({self.role.value}, leader: {self.consensus})"
