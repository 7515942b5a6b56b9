import os
import sys
import random
import pytest

# Ensure the backend root (containing the `fractionfeast` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from fractionfeast import create_app, socketio
from fractionfeast.models import GameSession
from fractionfeast.services.game.seats import reset_round


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:3000']
    HAND_SIZE = 5
    DECK_SIZE = 100
    TARGET_CARDS_MIN = 3
    TARGET_CARDS_MAX = 5
    ROUND_RESTART_DELAY_SEC = 0
    SKIP_PLACEHOLDER_TURNS = False
    RNG_SEED = 'fraction-feast-tests'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def game_session(flask_app):
    return flask_app.extensions['game_session']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    """Open Socket.IO test clients on /ws; all are disconnected on teardown."""
    opened = []

    def _open():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        opened.append(test_client)
        return test_client

    yield _open
    for test_client in opened:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass


@pytest.fixture()
def fresh_session():
    session = GameSession(rng=random.Random(1234))
    reset_round(session)
    return session
