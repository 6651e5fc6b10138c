import os
import sys
import random
import pytest

# Ensure the project root (containing the `ring_of_fire` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from ring_of_fire import create_app, db, socketio
from ring_of_fire.catalog import Card, CardCatalog


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:8080']
    SOCKETIO_NAMESPACE = '/'
    SOCKETIO_PING_INTERVAL = 10
    GAME_CODE_LENGTH = 6
    CARDS_PATH = None
    RULES_PATH = None
    CARD_ASSETS_DIR = None
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import ring_of_fire.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['session_registry']


@pytest.fixture()
def sio_factory(flask_app):
    """Build Socket.IO test clients; all are disconnected at teardown."""
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for c in clients:
        try:
            if c.is_connected():
                c.disconnect()
        except Exception:
            pass


@pytest.fixture()
def small_catalog():
    cards = [
        Card(code='AS', title='Ace of Spades', href='AS.svg'),
        Card(code='KH', title='King of Hearts', href='KH.svg'),
        Card(code='JK', title='Joker', href='JK.svg'),
    ]
    rules = {'AS': 'Waterfall', 'KH': "King's cup"}
    return CardCatalog(cards, rules)


@pytest.fixture()
def rng():
    return random.Random(1234)
