import random
from typing import Dict, Iterable, List, Optional

from ring_of_fire.catalog import Card, DrawnCard
from .errors import EmptyDeck


class Deck:
    """Working set of cards for a single game.

    Cards are drawn in random order and never put back, so every card
    code comes out at most once for the life of the deck.
    """

    def __init__(self, cards: Iterable[Card], rules: Dict[str, str], rng: Optional[random.Random] = None):
        self.rules = rules
        self.cards: List[Card] = list(cards)
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self.cards)

    def pick_next_card(self) -> DrawnCard:
        """Shuffle the remaining cards and take the one off the end."""
        if not self.cards:
            raise EmptyDeck()
        self._rng.shuffle(self.cards)
        card = self.cards.pop()
        return card.with_action(self.rules.get(card.code))
