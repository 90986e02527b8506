import os
import sys
import pytest

# Ensure the backend root (containing the `greenfund` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from greenfund import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    PORT = 3000
    CORS_ALLOWED_ORIGINS = '*'
    MAX_PLAYERS = 8
    IMPOSTOR_COUNT = 2
    STARTING_BUDGET = 100
    ROOM_IDLE_TTL_SEC = 0


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def coordinator(flask_app):
    return flask_app.extensions['room_coordinator']


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; each one is a separate connection."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
