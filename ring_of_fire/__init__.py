from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(
        flask_app,
        cors_allowed_origins=allowed_origins,
        ping_interval=flask_app.config.get('SOCKETIO_PING_INTERVAL', 10),
    )

    # The catalog is read once; every game gets its own deck built from it
    from ring_of_fire.catalog import CardCatalog
    from ring_of_fire.services.games import SessionRegistry
    catalog = CardCatalog.load(flask_app.config.get('CARDS_PATH'), flask_app.config.get('RULES_PATH'))
    registry = SessionRegistry(catalog, code_length=flask_app.config.get('GAME_CODE_LENGTH', 6))
    flask_app.extensions['card_catalog'] = catalog
    flask_app.extensions['session_registry'] = registry

    # Import and register blueprints here
    from ring_of_fire.main import main
    flask_app.register_blueprint(main)

    from ring_of_fire.api.decks import decks
    flask_app.register_blueprint(decks)

    # Register Socket.IO event handlers against this app's registry
    from ring_of_fire.socketio_events import register_socketio_handlers
    flask_app.extensions['game_gateway'] = register_socketio_handlers(
        registry, namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    )
    flask_app.logger.info(f"[startup] cards={len(catalog)} namespace={flask_app.config.get('SOCKETIO_NAMESPACE', '/')}")

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from ring_of_fire.models import CustomDeck
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed the classic rules as a custom deck users can start from
            classic = CustomDeck(name='Classic')
            classic.set_cards([c.to_dict() for c in catalog.cards])
            classic.set_rules(catalog.rules)
            db.session.add(classic)

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
