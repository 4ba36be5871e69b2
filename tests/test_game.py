"""Tests for game state, the roster store and settings."""

import pytest
from pydantic import ValidationError

from lantern.config import EngineSettings
from lantern.errors import GameStateError, NotFound
from lantern.game import GameSession, check_winner, count_factions
from lantern.roles import Role, Team
from lantern.store import InMemoryRosterStore
from lantern.types import Phase


class TestWinCondition:
    """Test the win predicate."""

    def test_game_continues_with_both_factions(self, basic_players):
        assert count_factions(basic_players) == (2, 4)
        assert check_winner(basic_players) is None

    def test_village_wins_when_werewolves_gone(self, basic_players):
        for player in basic_players:
            if player.role == Role.WEREWOLF:
                player.is_dead = True
        assert check_winner(basic_players) == Team.VILLAGE

    def test_werewolves_win_when_village_gone(self, basic_players):
        for player in basic_players:
            if player.role != Role.WEREWOLF:
                player.is_dead = True
        assert check_winner(basic_players) == Team.WEREWOLVES

    def test_werewolves_alone_with_one_villager_continue(self, basic_players):
        for player in basic_players:
            if player.id not in ("alice", "frank"):
                player.is_dead = True
        assert check_winner(basic_players) is None


class TestInMemoryRosterStore:
    """Test the in-memory roster store."""

    @pytest.mark.asyncio
    async def test_reset_votes_is_idempotent(self, roster_factory):
        store = await roster_factory({"wolf": Role.WEREWOLF, "doc": Role.DOCTOR, "civ": Role.CIVILIAN})
        await store.set_vote("g1", "wolf", "civ")
        await store.set_vote("g1", "doc", "civ")

        await store.reset_votes("g1")
        once = await store.get_players("g1")
        await store.reset_votes("g1")
        twice = await store.get_players("g1")

        assert once == twice
        assert all(p.voted_for is None for p in twice)

    @pytest.mark.asyncio
    async def test_reads_are_copies(self, roster_factory):
        store = await roster_factory({"wolf": Role.WEREWOLF})
        player = await store.get_player("g1", "wolf")
        player.is_dead = True
        assert (await store.get_player("g1", "wolf")).is_dead is False

    @pytest.mark.asyncio
    async def test_delete_cascades_players(self, roster_factory):
        store = await roster_factory({"wolf": Role.WEREWOLF, "civ": Role.CIVILIAN})
        await store.delete_game("g1")

        assert await store.get_game("g1") is None
        assert await store.get_player("g1", "wolf") is None
        with pytest.raises(NotFound):
            await store.get_players("g1")

    @pytest.mark.asyncio
    async def test_games_are_isolated(self, roster_factory):
        store = await roster_factory({"wolf": Role.WEREWOLF})
        await store.create_game("g2")
        await store.add_player("g2", "wolf", "Wolf")

        await store.set_dead("g2", "wolf")
        assert (await store.get_player("g1", "wolf")).is_dead is False

    @pytest.mark.asyncio
    async def test_no_orphan_players(self):
        store = InMemoryRosterStore()
        with pytest.raises(NotFound):
            await store.add_player("missing", "p1", "P1")

    @pytest.mark.asyncio
    async def test_duplicate_game_rejected(self):
        store = InMemoryRosterStore()
        await store.create_game("g1")
        with pytest.raises(GameStateError):
            await store.create_game("g1")

    @pytest.mark.asyncio
    async def test_set_phase(self):
        store = InMemoryRosterStore()
        await store.create_game("g1")
        await store.set_phase("g1", Phase.END, False)
        game = await store.get_game("g1")
        assert game.phase == Phase.END
        assert game.is_active is False


class TestGameSession:
    """Test the per-game session handle."""

    def test_initial_state(self):
        session = GameSession(game_id="g1")
        assert session.phase == Phase.SETUP
        assert session.is_active
        assert session.round_number == 0
        assert session.collectors.game_id == "g1"
        assert not session.game_over

    def test_phase_description(self):
        session = GameSession(game_id="g1", phase=Phase.NIGHT, round_number=2)
        assert session.get_phase_description() == "Night 2"
        session.phase = Phase.END
        assert session.get_phase_description() == "End"
        assert session.game_over


class TestEngineSettings:
    """Test configuration loading."""

    def test_defaults(self):
        settings = EngineSettings()
        assert settings.vote_window_seconds == 10
        assert settings.role_reveal_seconds == 600
        assert settings.max_rounds == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LANTERN_VOTE_WINDOW_SECONDS", "2.5")
        monkeypatch.setenv("LANTERN_MAX_ROUNDS", "0")
        monkeypatch.setenv("LANTERN_SPOKEN_NARRATION", "false")
        settings = EngineSettings.from_env()

        assert settings.vote_window_seconds == 2.5
        assert settings.max_rounds == 0
        assert settings.spoken_narration is False

    def test_negative_duration_rejected(self, monkeypatch):
        monkeypatch.setenv("LANTERN_DISCUSSION_SECONDS", "-1")
        with pytest.raises(ValidationError):
            EngineSettings.from_env()

    def test_round_cap(self):
        assert EngineSettings(max_rounds=2).allows_another_round(1)
        assert not EngineSettings(max_rounds=2).allows_another_round(2)
        assert EngineSettings(max_rounds=0).allows_another_round(100)
