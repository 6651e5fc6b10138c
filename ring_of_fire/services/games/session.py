import random
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ring_of_fire.catalog import DrawnCard
from .deck import Deck
from .errors import DuplicatePlayer, GameAlreadyStarted, GameNotFound


@dataclass(frozen=True)
class Draw:
    picker: str
    card: DrawnCard

    def to_dict(self) -> Dict[str, Any]:
        return {'picker': self.picker, 'card': self.card.to_dict()}


class Game:
    """One game room: roster, turn pointer and deck.

    Methods here are plain state transitions. Checking *who* asked for a
    transition (host, turn owner) is left to the caller, and callers that
    share a game between threads must hold ``lock`` around every mutation.
    """

    def __init__(self, game_id: str, name: str, host: str, deck: Deck, rng: Optional[random.Random] = None):
        self.game_id = game_id
        self.name = name
        self.host = host
        self.players: List[str] = [host]
        self.started = False
        self.turn_index = 0
        self.deck = deck
        self.closed = False
        self.lock = threading.RLock()
        self._rng = rng or random.Random()

    def __repr__(self):
        return f"<Game {self.game_id} players={self.players} started={self.started}>"

    @property
    def current_player(self) -> str:
        return self.players[self.turn_index]

    def is_host(self, username: str) -> bool:
        return username == self.host

    def is_current_player(self, username: str) -> bool:
        return bool(self.players) and username == self.current_player

    def check_can_join(self, username: str) -> None:
        """Raise the error ``add_player`` would raise, without changing anything."""
        if self.closed:
            raise GameNotFound(self.game_id)
        if self.started:
            raise GameAlreadyStarted(self.game_id)
        if username in self.players:
            raise DuplicatePlayer(self.game_id, username)

    def add_player(self, username: str) -> None:
        self.check_can_join(username)
        self.players.append(username)

    def start(self) -> str:
        """Enter the playing phase with a random first player.

        Starting an already started game deals the turn again.
        """
        self.turn_index = self._rng.randrange(len(self.players))
        self.started = True
        return self.current_player

    def advance_turn(self) -> str:
        self.turn_index = (self.turn_index + 1) % len(self.players)
        return self.current_player

    def draw_card(self) -> Draw:
        return Draw(picker=self.current_player, card=self.deck.pick_next_card())

    def remove_player(self, username: str) -> bool:
        """Remove ``username`` if present and return whether it was.

        The turn stays with the same player when someone before them
        leaves. When the current player leaves, the turn passes to whoever
        now sits at that position, wrapping round to the start.
        """
        if username not in self.players:
            return False
        index = self.players.index(username)
        self.players.pop(index)
        if not self.players:
            self.turn_index = 0
            return True

        if index < self.turn_index:
            self.turn_index -= 1
        elif self.turn_index >= len(self.players):
            self.turn_index = 0

        if username == self.host:
            self.host = self.players[0]
        return True

    def close(self) -> None:
        self.closed = True
