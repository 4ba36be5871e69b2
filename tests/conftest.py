"""Pytest configuration and fixtures."""

import pytest

from lantern.config import EngineSettings
from lantern.models import Player
from lantern.roles import Role
from lantern.store import InMemoryRosterStore


class RecordingNotifier:
    """Notifier that keeps everything it was asked to say."""

    def __init__(self):
        self.messages: list[tuple[str, str, bool]] = []

    async def notify(self, game_id: str, text: str, *, spoken: bool = False) -> None:
        self.messages.append((game_id, text, spoken))

    @property
    def texts(self) -> list[str]:
        return [text for _, text, _ in self.messages]


class FixedAssignor:
    """Deals a predetermined role mapping instead of a random one."""

    def __init__(self, roles: dict[str, Role]):
        self.roles = roles

    def assign(self, players):
        return {player_id: self.roles[player_id] for player_id in players}


@pytest.fixture
def basic_players():
    """Create a basic set of players for testing."""
    return [
        Player(id="alice", game_id="g1", name="Alice", role=Role.WEREWOLF),
        Player(id="bob", game_id="g1", name="Bob", role=Role.WEREWOLF),
        Player(id="carol", game_id="g1", name="Carol", role=Role.DOCTOR),
        Player(id="david", game_id="g1", name="David", role=Role.DETECTIVE),
        Player(id="eve", game_id="g1", name="Eve", role=Role.DETECTIVE),
        Player(id="frank", game_id="g1", name="Frank", role=Role.CIVILIAN),
    ]


@pytest.fixture
def roster_factory():
    """Build an in-memory store holding one game with the given roles."""

    async def build(roles: dict[str, Role | None], game_id: str = "g1") -> InMemoryRosterStore:
        store = InMemoryRosterStore()
        await store.create_game(game_id)
        for player_id, role in roles.items():
            await store.add_player(game_id, player_id, player_id.capitalize())
            if role is not None:
                await store.set_role(game_id, player_id, role)
        return store

    return build


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def fast_settings():
    """Settings with timers short enough for tests."""
    return EngineSettings(
        vote_window_seconds=0.2,
        role_reveal_seconds=5,
        discussion_seconds=0,
        narration_pause_seconds=0,
    )
