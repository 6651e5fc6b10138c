import os
from flask import Blueprint, current_app, jsonify, send_from_directory

main = Blueprint('main', __name__)

DEFAULT_ASSETS_DIR = os.path.join(os.path.dirname(__file__), 'assets', 'cards')


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Ring of Fire game server!'})


@main.route('/cards')
def get_cards():
    """Returns every card in the catalog along with its rule."""
    catalog = current_app.extensions['card_catalog']
    return jsonify(catalog.to_dict())


@main.route('/card/<path:filename>')
def get_card_image(filename):
    assets_dir = current_app.config.get('CARD_ASSETS_DIR') or DEFAULT_ASSETS_DIR
    # send_from_directory 404s on missing files and paths escaping the directory
    return send_from_directory(assets_dir, filename)
