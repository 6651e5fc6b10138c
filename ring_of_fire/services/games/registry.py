import random
import string
import threading
from typing import Dict, Optional

from ring_of_fire.catalog import CardCatalog
from .deck import Deck
from .errors import GameNotFound
from .session import Game

GAME_CODE_ALPHABET = string.ascii_uppercase + string.digits


class SessionRegistry:
    """All games currently in play, keyed by game code."""

    def __init__(self, catalog: CardCatalog, code_length: int = 6, rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.code_length = code_length
        self._rng = rng or random.Random()
        self._games: Dict[str, Game] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, game_id) -> bool:
        return self._normalize(game_id) in self._games

    @staticmethod
    def _normalize(game_id) -> str:
        return str(game_id or '').strip().upper()

    def _generate_code(self) -> str:
        while True:
            code = ''.join(self._rng.choices(GAME_CODE_ALPHABET, k=self.code_length))
            if code not in self._games:
                return code

    def create(self, name: str, host: str) -> Game:
        deck = Deck(self.catalog.cards, self.catalog.rules, rng=self._rng)
        with self._lock:
            game = Game(self._generate_code(), name, host, deck, rng=self._rng)
            self._games[game.game_id] = game
        return game

    def get(self, game_id) -> Game:
        game = self._games.get(self._normalize(game_id))
        if game is None:
            raise GameNotFound(game_id)
        return game

    def delete(self, game_id) -> None:
        with self._lock:
            game = self._games.pop(self._normalize(game_id), None)
        if game is not None:
            game.close()

    def remove_player(self, game_id, username: str) -> Optional[Game]:
        """Take ``username`` out of a game, deleting the game once it is empty."""
        try:
            game = self.get(game_id)
        except GameNotFound:
            return None
        with game.lock:
            game.remove_player(username)
            if not game.players:
                self.delete(game.game_id)
        return game
