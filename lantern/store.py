"""In-memory roster store."""

import logging
from dataclasses import replace

from .errors import GameStateError, NotFound
from .models import Game, Player
from .roles import Role
from .types import Phase

logger = logging.getLogger(__name__)


class InMemoryRosterStore:
    """Dict-backed roster store.

    Rows are keyed by game id, so concurrent games never see each other's
    players. Reads return copies; only the ``set_*`` methods mutate state.
    """

    def __init__(self) -> None:
        self._games: dict[str, Game] = {}
        self._players: dict[str, dict[str, Player]] = {}

    async def create_game(self, game_id: str) -> None:
        if game_id in self._games:
            raise GameStateError(f"Game {game_id} already exists")
        self._games[game_id] = Game(id=game_id)
        self._players[game_id] = {}

    async def get_game(self, game_id: str) -> Game | None:
        game = self._games.get(game_id)
        return replace(game) if game else None

    async def add_player(self, game_id: str, player_id: str, name: str) -> None:
        roster = self._roster(game_id)
        if player_id in roster:
            raise GameStateError(f"Player {player_id} already joined game {game_id}")
        roster[player_id] = Player(id=player_id, game_id=game_id, name=name)

    async def get_players(self, game_id: str) -> list[Player]:
        return [replace(p) for p in self._roster(game_id).values()]

    async def get_player(self, game_id: str, player_id: str) -> Player | None:
        player = self._players.get(game_id, {}).get(player_id)
        return replace(player) if player else None

    async def set_role(self, game_id: str, player_id: str, role: Role) -> None:
        self._row(game_id, player_id).role = role

    async def set_vote(self, game_id: str, player_id: str, target_id: str | None) -> None:
        self._row(game_id, player_id).voted_for = target_id

    async def set_dead(self, game_id: str, player_id: str) -> None:
        self._row(game_id, player_id).is_dead = True

    async def reset_votes(self, game_id: str) -> None:
        for player in self._roster(game_id).values():
            player.voted_for = None

    async def set_phase(self, game_id: str, phase: Phase, is_active: bool) -> None:
        game = self._games.get(game_id)
        if game is None:
            raise NotFound(f"Game {game_id} not found")
        game.phase = phase
        game.is_active = is_active

    async def delete_game(self, game_id: str) -> None:
        self._games.pop(game_id, None)
        removed = self._players.pop(game_id, {})
        logger.debug("Deleted game %s with %d players", game_id, len(removed))

    def _roster(self, game_id: str) -> dict[str, Player]:
        if game_id not in self._games:
            raise NotFound(f"Game {game_id} not found")
        return self._players[game_id]

    def _row(self, game_id: str, player_id: str) -> Player:
        player = self._roster(game_id).get(player_id)
        if player is None:
            raise NotFound(f"Player {player_id} not found in game {game_id}")
        return player
