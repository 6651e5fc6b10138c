"""Game domain: deck, game room state machine and the registry of live games.

Nothing in this package touches the network or the database, so socket
handlers and tests can drive the state machine directly.
"""

from .deck import Deck
from .errors import DuplicatePlayer, EmptyDeck, GameAlreadyStarted, GameError, GameNotFound
from .registry import SessionRegistry
from .session import Draw, Game

__all__ = [
    'Deck',
    'Draw',
    'DuplicatePlayer',
    'EmptyDeck',
    'Game',
    'GameAlreadyStarted',
    'GameError',
    'GameNotFound',
    'SessionRegistry',
]
