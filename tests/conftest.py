import pytest
from flask.testing import FlaskClient

import accounts
import graph
from app import create_app
from realtime import broadcaster


class IsolatedClient(FlaskClient):
    """Runs every request in a fresh app context.

    Tests hold an app context open for direct domain calls; without this the
    requests would share its ``g`` and Flask-Login's cached user with it.
    """

    def open(self, *args, **kwargs):
        with self.application.app_context():
            return super().open(*args, **kwargs)


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'DATA_DIR': str(tmp_path / 'data'),
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
    })
    app.test_client_class = IsolatedClient
    broadcaster.clear()
    with app.app_context():
        yield app
    broadcaster.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(name, password='secret'):
        return accounts.register(name, f'{name.lower()}@example.com', password)
    return _make


@pytest.fixture
def befriend():
    def _befriend(a, b):
        edge = graph.request_friend(a.id, b.id)
        return graph.respond_friend(edge.id, b.id, 'accept')
    return _befriend


def auth(token):
    return {'Authorization': f'Bearer {token}'}
