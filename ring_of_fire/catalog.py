import json
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')
DEFAULT_CARDS_PATH = os.path.join(DATA_DIR, 'cards.json')
DEFAULT_RULES_PATH = os.path.join(DATA_DIR, 'rules.json')


@dataclass(frozen=True)
class Card:
    code: str
    title: str
    href: str

    def with_action(self, action: Optional[str]) -> 'DrawnCard':
        return DrawnCard(code=self.code, title=self.title, href=self.href, action=action)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DrawnCard:
    code: str
    title: str
    href: str
    action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Cards without a rule go out without an action key at all
        if self.action is None:
            data.pop('action')
        return data


class CardCatalog:
    """The static card set and the rule text for each card code."""

    def __init__(self, cards: List[Card], rules: Dict[str, str]):
        codes = [c.code for c in cards]
        if len(codes) != len(set(codes)):
            raise ValueError('card codes must be unique within a catalog')
        self.cards = tuple(cards)
        self.rules = dict(rules)

    def __len__(self):
        return len(self.cards)

    def rule_for(self, code: str) -> Optional[str]:
        return self.rules.get(code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cards': [c.to_dict() for c in self.cards],
            'rules': dict(self.rules),
        }

    @classmethod
    def load(cls, cards_path: Optional[str] = None, rules_path: Optional[str] = None) -> 'CardCatalog':
        with open(cards_path or DEFAULT_CARDS_PATH, encoding='utf-8') as fh:
            raw_cards = json.load(fh)
        with open(rules_path or DEFAULT_RULES_PATH, encoding='utf-8') as fh:
            rules = json.load(fh)
        # cards.json wraps the list in {"cards": [...]}
        if isinstance(raw_cards, dict):
            raw_cards = raw_cards.get('cards', [])
        cards = [Card(code=c['code'], title=c['title'], href=c['href']) for c in raw_cards]
        return cls(cards, rules)
