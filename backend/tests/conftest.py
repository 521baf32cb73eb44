import os
import sys
import random
import pytest

# Ensure the backend root (containing the `guesstheword` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from guesstheword import create_app, registry, socketio
from guesstheword.services.games import GameSession


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    # Countdowns are driven by hand through session.timer.advance()
    SESSION_TIMER_BACKGROUND = False
    TIMER_HEARTBEAT_SEC = 0
    MAX_SESSIONS = 5


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application
    registry.dispose_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def session():
    game = GameSession(session_code='TEST', rng=random.Random(1234))
    yield game
    game.dispose()
