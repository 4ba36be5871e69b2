"""Integration tests for full games driven through local windows."""

import asyncio
import random

import pytest

from conftest import FixedAssignor, RecordingNotifier
from lantern.errors import CollaboratorFailure, GameStateError, InsufficientPlayers
from lantern.models import DetectiveFinding, WerewolfFinding
from lantern.phases import PhaseMachine
from lantern.roles import Role, Team
from lantern.store import InMemoryRosterStore
from lantern.types import Phase
from lantern.windows import LocalWindowProvider


async def open_table(machine: PhaseMachine, names: list[str], game_id: str = "g1"):
    session = await machine.open_game(game_id)
    for name in names:
        await machine.join(session, name.lower(), name)
    return session


class FailingNotifier:
    """Notifier whose platform is down."""

    def __init__(self):
        self.calls = 0

    async def notify(self, game_id, text, *, spoken=False):
        self.calls += 1
        raise ConnectionError("voice channel gone")


class DeathlessStore(InMemoryRosterStore):
    """Store that cannot record deaths."""

    async def set_dead(self, game_id, player_id):
        raise ConnectionError("database unavailable")


class TestGameIntegration:
    """Integration tests for full game scenarios."""

    @pytest.mark.asyncio
    async def test_four_player_saved_and_witnessed(self, notifier, fast_settings):
        store = InMemoryRosterStore()
        provider = LocalWindowProvider()
        machine = PhaseMachine(store, provider, notifier, fast_settings)
        machine.setup_handler.assignor = FixedAssignor(
            {"a": Role.CIVILIAN, "b": Role.WEREWOLF, "c": Role.DOCTOR, "d": Role.DETECTIVE}
        )
        session = await open_table(machine, ["A", "B", "C", "D"])
        replies = []

        async def respond(text):
            replies.append(text)

        game = asyncio.create_task(machine.run(session))
        window = await provider.wait_for_window("vote")
        assert window.submit("b", "a", respond=respond)
        assert window.submit("c", "a", respond=respond)
        assert window.submit("d", "b", respond=respond)
        winner = await game

        outcome = session.last_outcome
        assert outcome.saved is True
        assert outcome.killed_player_id is None
        assert outcome.werewolf_finding == WerewolfFinding.SAVED
        assert outcome.detective_finding == DetectiveFinding.WITNESSED
        assert winner is None
        assert session.phase == Phase.END
        assert not session.is_active

        assert replies == ["targeting A", "Protecting A", "Investigating B"]
        assert any("mysteriously saved" in text for text in notifier.texts)
        assert any("This crime was witnessed" in text for text in notifier.texts)
        assert await store.get_game("g1") is None

    @pytest.mark.asyncio
    async def test_real_assignment_for_four_players(self, notifier, fast_settings):
        store = InMemoryRosterStore()
        provider = LocalWindowProvider()
        machine = PhaseMachine(store, provider, notifier, fast_settings, random.Random(5))
        session = await open_table(machine, ["A", "B", "C", "D"])

        await machine.step(session)
        roles = sorted(p.role.value for p in await store.get_players("g1"))

        assert roles == ["civilian", "detective", "doctor", "werewolf"]
        assert session.phase == Phase.NIGHT
        assert (await store.get_game("g1")).phase == Phase.NIGHT
        assert notifier.texts[0].startswith("Welcome to the game of Werewolf, this game has 1 werewolf")
        await machine.teardown(session)

    @pytest.mark.asyncio
    async def test_split_werewolves_nobody_dies(self, notifier, fast_settings):
        store = InMemoryRosterStore()
        provider = LocalWindowProvider()
        machine = PhaseMachine(store, provider, notifier, fast_settings)
        machine.setup_handler.assignor = FixedAssignor(
            {
                "w1": Role.WEREWOLF,
                "w2": Role.WEREWOLF,
                "doc": Role.DOCTOR,
                "det": Role.DETECTIVE,
                "x": Role.CIVILIAN,
                "y": Role.CIVILIAN,
            }
        )
        session = await open_table(machine, ["W1", "W2", "Doc", "Det", "X", "Y"])

        game = asyncio.create_task(machine.run(session))
        window = await provider.wait_for_window("vote")
        window.submit("w1", "x")
        window.submit("w2", "y")
        window.submit("doc", "y")
        await game

        assert session.last_outcome.killed_player_id is None
        assert session.last_outcome.werewolf_finding == WerewolfFinding.STRUGGLE
        assert any("sounds of struggle" in text for text in notifier.texts)

    @pytest.mark.asyncio
    async def test_plays_until_werewolves_win(self, notifier, fast_settings):
        settings = fast_settings.model_copy(update={"max_rounds": 0, "vote_window_seconds": 0.1})
        store = InMemoryRosterStore()
        provider = LocalWindowProvider()
        machine = PhaseMachine(store, provider, notifier, settings)
        machine.setup_handler.assignor = FixedAssignor(
            {"a": Role.CIVILIAN, "b": Role.WEREWOLF, "c": Role.DOCTOR, "d": Role.DETECTIVE}
        )
        session = await open_table(machine, ["A", "B", "C", "D"])

        async def hunt():
            while True:
                window = await provider.wait_for_window("vote")
                players = await store.get_players("g1")
                prey = next(p for p in players if p.alive and not p.is_werewolf())
                window.submit("b", prey.id)

        hunter = asyncio.create_task(hunt())
        try:
            winner = await machine.run(session)
        finally:
            hunter.cancel()

        assert winner == Team.WEREWOLVES
        assert session.round_number == 3
        assert [o.killed_player_id for o in session.outcomes] == ["a", "c", "d"]
        assert "werewolves have won" in notifier.texts[-1]

    @pytest.mark.asyncio
    async def test_too_few_players_never_starts(self, notifier, fast_settings):
        store = InMemoryRosterStore()
        provider = LocalWindowProvider()
        machine = PhaseMachine(store, provider, notifier, fast_settings)
        session = await open_table(machine, ["A", "B"])

        with pytest.raises(InsufficientPlayers):
            await machine.run(session)

        assert provider.windows == []
        assert await store.get_game("g1") is None
        assert not session.is_active

    @pytest.mark.asyncio
    async def test_role_reveal_answers_privately(self, notifier, fast_settings):
        store = InMemoryRosterStore()
        provider = LocalWindowProvider()
        machine = PhaseMachine(store, provider, notifier, fast_settings)
        machine.setup_handler.assignor = FixedAssignor(
            {"a": Role.CIVILIAN, "b": Role.WEREWOLF, "c": Role.DOCTOR}
        )
        session = await open_table(machine, ["A", "B", "C"])
        answers = {}

        def answer_for(actor):
            async def respond(text):
                answers[actor] = text

            return respond

        await machine.step(session)
        reveal = provider.latest("role_reveal")
        reveal.submit("b", respond=answer_for("b"))
        reveal.submit("stranger", respond=answer_for("stranger"))
        await asyncio.sleep(0.05)

        assert answers["b"].startswith("You are a Werewolf")
        assert answers["stranger"] == "Your role information is not available."

        with pytest.raises(GameStateError):
            await machine.setup_handler.open_role_reveal(session)

        await machine.teardown(session)
        assert reveal.stop_calls == 1
        assert reveal.submit("a") is False

    @pytest.mark.asyncio
    async def test_join_rules(self, notifier, fast_settings):
        machine = PhaseMachine(InMemoryRosterStore(), LocalWindowProvider(), notifier, fast_settings)
        session = await open_table(machine, ["A", "B", "C"])

        assert await machine.join(session, "a", "A") is False
        await machine.step(session)
        with pytest.raises(GameStateError):
            await machine.join(session, "z", "Z")
        with pytest.raises(GameStateError):
            await machine.run(session)
        await machine.teardown(session)

    @pytest.mark.asyncio
    async def test_notifier_failure_does_not_stop_the_game(self, fast_settings):
        failing = FailingNotifier()
        store = InMemoryRosterStore()
        machine = PhaseMachine(store, LocalWindowProvider(), failing, fast_settings)
        session = await open_table(machine, ["A", "B", "C"])

        await machine.run(session)

        assert failing.calls > 0
        assert session.phase == Phase.END

    @pytest.mark.asyncio
    async def test_store_failure_still_tears_down(self, notifier, fast_settings):
        store = DeathlessStore()
        provider = LocalWindowProvider()
        machine = PhaseMachine(store, provider, notifier, fast_settings)
        machine.setup_handler.assignor = FixedAssignor(
            {"a": Role.CIVILIAN, "b": Role.WEREWOLF, "c": Role.DOCTOR}
        )
        session = await open_table(machine, ["A", "B", "C"])

        game = asyncio.create_task(machine.run(session))
        window = await provider.wait_for_window("vote")
        window.submit("b", "a")
        with pytest.raises(CollaboratorFailure):
            await game

        reveal = provider.latest("role_reveal")
        assert reveal.stop_calls == 1
        assert window.closed
        assert await store.get_game("g1") is None

    @pytest.mark.asyncio
    async def test_concurrent_games_are_independent(self, fast_settings):
        store = InMemoryRosterStore()
        provider = LocalWindowProvider()
        first_notes, second_notes = RecordingNotifier(), RecordingNotifier()
        first = PhaseMachine(store, provider, first_notes, fast_settings)
        second = PhaseMachine(store, provider, second_notes, fast_settings)
        s1 = await open_table(first, ["A", "B", "C"], game_id="g1")
        s2 = await open_table(second, ["D", "E", "F", "G"], game_id="g2")

        await asyncio.gather(first.run(s1), second.run(s2))

        assert {game_id for game_id, _, _ in first_notes.messages} == {"g1"}
        assert {game_id for game_id, _, _ in second_notes.messages} == {"g2"}
        assert s1.last_outcome.werewolf_finding == WerewolfFinding.QUIET
        assert s2.last_outcome.werewolf_finding == WerewolfFinding.QUIET
