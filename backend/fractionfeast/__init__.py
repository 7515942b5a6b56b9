import random
import threading

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'

    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # The one shared table for this process
    session = build_session(flask_app.config)
    flask_app.extensions['game_session'] = session
    flask_app.extensions['game_lock'] = threading.Lock()

    from fractionfeast.main import main
    flask_app.register_blueprint(main)

    from fractionfeast.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    flask_app.logger.info(f"[startup] target={session.target_fraction.text} deck={len(session.deck)}")
    return flask_app


def build_session(config):
    """Create a session for a fresh process: new round, four placeholder seats."""
    from fractionfeast.models import GameSession
    from fractionfeast.services.game.seats import reset_round

    seed = config.get('RNG_SEED')
    session = GameSession(
        rng=random.Random(seed),
        hand_size=int(config.get('HAND_SIZE', 5)),
        deck_size=int(config.get('DECK_SIZE', 100)),
        target_cards_min=int(config.get('TARGET_CARDS_MIN', 3)),
        target_cards_max=int(config.get('TARGET_CARDS_MAX', 5)),
        skip_placeholder_turns=bool(config.get('SKIP_PLACEHOLDER_TURNS', False)),
    )
    reset_round(session)
    return session
