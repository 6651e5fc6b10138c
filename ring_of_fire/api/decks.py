from flask import Blueprint, jsonify, request, current_app
from sqlalchemy.exc import SQLAlchemyError
from ring_of_fire import db
from ring_of_fire.models import CustomDeck

decks = Blueprint('decks', __name__)


@decks.route('/deck', methods=['POST'])
def create_deck():
    """
    Stores a user supplied deck under the given name.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Deck must be a JSON object'}), 400
    name = data.get('name')
    if not isinstance(name, str) or not name.strip():
        return jsonify({'error': 'Deck name is required'}), 400
    cards = data.get('cards') or []
    rules = data.get('rules') or {}
    if not isinstance(cards, list) or not isinstance(rules, dict):
        return jsonify({'error': 'cards must be a list and rules an object'}), 400

    deck = CustomDeck(name=name.strip())
    deck.set_cards(cards)
    deck.set_rules(rules)
    try:
        db.session.add(deck)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[deck-save-failed] name={name!r}")
        return jsonify({'error': 'Server error'}), 500

    current_app.logger.info(f"[deck-saved] id={deck.id} name={deck.name!r}")
    return jsonify(deck.to_dict()), 201


@decks.route('/decks', methods=['GET'])
def list_decks():
    """
    Returns every deck uploaded to the server.
    """
    try:
        stored = CustomDeck.query.order_by(CustomDeck.id).all()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("[deck-list-failed]")
        return jsonify({'error': 'Server error'}), 500
    return jsonify([d.to_dict() for d in stored]), 200
