from datetime import datetime, timezone
from ring_of_fire import db
import json


def _utcnow():
    return datetime.now(timezone.utc)


class CustomDeck(db.Model):
    __tablename__ = 'custom_deck'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, index=True)
    cards = db.Column(db.Text, nullable=True)  # JSON-encoded list of card records
    rules = db.Column(db.Text, nullable=True)  # JSON-encoded {code: action}
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)

    def set_cards(self, cards):
        self.cards = json.dumps(list(cards or []))

    def set_rules(self, rules):
        self.rules = json.dumps(dict(rules or {}))

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'cards': json.loads(self.cards) if self.cards else [],
            'rules': json.loads(self.rules) if self.rules else {},
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
