import json
from datetime import datetime

import pytest
import requests

from keeo_cli.client import KeeoClient, KeeoConnector
from keeo_cli.config import KeeoConfig


def make_response(status_code=200, body=None, headers=None, reason='OK'):
    """Build a requests.Response as the transport would return it."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if body is not None:
        text = body if isinstance(body, str) else json.dumps(body)
        response._content = text.encode('utf-8')
    else:
        response._content = b''
    response.headers.update(headers or {})
    response.encoding = 'utf-8'
    return response


class FakeSession:
    """Stands in for requests.Session; records calls and replays responses."""

    def __init__(self):
        self.calls = []
        self.responses = []
        self.auth = None
        self.verify = None
        self.headers = {}

    def queue(self, *args, **kwargs):
        self.responses.append(make_response(*args, **kwargs))

    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        return self.responses.pop(0)

    @property
    def last(self):
        return self.calls[-1]


class FixedClock:
    def __init__(self, moment):
        self.moment = moment

    def __call__(self):
        return self.moment


@pytest.fixture
def config():
    return KeeoConfig(
        username='api-user',
        password='api-secret',
        login_salt='s4lt',
        api_url='https://keeo.test/api',
    )


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 19, 14, 5))


@pytest.fixture
def client(config, session, clock):
    connector = KeeoConnector(config, session=session)
    return KeeoClient(config, clock=clock, connector=connector)
