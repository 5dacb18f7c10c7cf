import json
from urllib.parse import urlsplit

import pytest
import requests

from zonewatch import create_app
from zonewatch.config import TestConfig
from zonewatch.services.map_surface import InMemoryMapSurface
from zonewatch.services.zone_store import ZoneStore


class FlaskResponse:
    """The parts of requests.Response the zone store reads."""

    def __init__(self, resp):
        self.status_code = resp.status_code
        self.reason = resp.status.split(' ', 1)[-1]
        self._body = resp.get_data(as_text=True)

    def json(self):
        return json.loads(self._body)


class FlaskSession:
    """requests-style session that forwards calls to a Flask test client."""

    def __init__(self, client):
        self.client = client
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(('GET', url))
        return FlaskResponse(self.client.get(urlsplit(url).path))

    def post(self, url, json=None, timeout=None):
        self.calls.append(('POST', url))
        return FlaskResponse(self.client.post(urlsplit(url).path, json=json))


class StubResponse:
    def __init__(self, status_code, body=None, reason='Error'):
        self.status_code = status_code
        self.reason = reason
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError('No JSON body')
        return self._body


class StubSession:
    """Session returning canned responses, or raising `error`."""

    def __init__(self, get=None, post=None, error=None):
        self.get_response = get
        self.post_response = post
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(('GET', url))
        if self.error:
            raise self.error
        return self.get_response

    def post(self, url, json=None, timeout=None):
        self.calls.append(('POST', url))
        if self.error:
            raise self.error
        return self.post_response


@pytest.fixture()
def app(tmp_path):
    class Config(TestConfig):
        ZONES_DATA_FILE = str(tmp_path / 'data' / 'zones.json')

    app = create_app(Config)
    yield app
    app.extensions['zone_editor'].detach()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def remote(app):
    """Session talking to this app's /api/zones through its own test client."""
    return FlaskSession(app.test_client())


@pytest.fixture()
def store(app, remote):
    return ZoneStore(TestConfig.ZONES_API_URL, session=remote)


@pytest.fixture()
def editor(app, remote):
    editor = app.extensions['zone_editor']
    editor.store.session = remote
    return editor


@pytest.fixture()
def surface():
    return InMemoryMapSurface()


@pytest.fixture()
def market_points():
    return [(13.07, 80.26), (13.08, 80.26), (13.08, 80.27)]


@pytest.fixture()
def connection_error():
    return StubSession(error=requests.exceptions.ConnectionError('Connection refused'))
