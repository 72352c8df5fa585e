import os
import sys
import pytest

# Ensure the backend root (containing the `kittenboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from kittenboard import create_app, db, socketio
from kittenboard.services.leaderboard import get_leaderboard


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:3000']
    LOG_LEVEL = 'DEBUG'
    LEADERBOARD_SIZE = 10
    LEADERBOARD_MAX_SIZE = 100
    LEADERBOARD_NAMESPACE = '/ws'
    BROADCAST_ON_SESSION_START = False


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import kittenboard.models  # noqa: F401
        db.create_all()
        yield application
        get_leaderboard(application).close()
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def service(flask_app):
    return get_leaderboard(flask_app)


@pytest.fixture()
def seed(service):
    """Create players with the given win counts through the public operations."""
    def _seed(**wins):
        for username, count in wins.items():
            service.start_session(username)
            for _ in range(count):
                service.record_win(username)
    return _seed


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass
