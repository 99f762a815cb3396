import hashlib
import json
from datetime import datetime

import pytest

from keeo_cli.client import CredentialsDoNotMatchError, InvalidResponseError


def x_json(payload):
    return {'X-Json': '(' + json.dumps(payload) + ')'}


def expected_hash(stamp):
    return hashlib.md5(f"12345s4ltpa55w0rd{stamp}".encode()).hexdigest()


def test_login_posts_credentials(client, session):
    session.queue(200, headers=x_json({'result': 'ok', 'authenticated': True,
                                       'hash': expected_hash('2026101914')}))

    client.user_login('12345', 'pa55w0rd')

    assert session.last['method'] == 'POST'
    assert session.last['url'] == 'https://keeo.test/api/person/login.json'
    assert session.last['data'] == {'login': '12345', 'password': 'pa55w0rd'}


def test_login_accepts_hash_of_current_hour(client, session):
    session.queue(200, headers=x_json({'result': 'ok', 'authenticated': True,
                                       'hash': expected_hash('2026101914')}))

    assert client.user_login('12345', 'pa55w0rd') is True


def test_login_hash_stable_within_hour(client, clock):
    first = client.login_hash('12345', 'pa55w0rd')
    clock.moment = datetime(2026, 10, 19, 14, 59)
    assert client.login_hash('12345', 'pa55w0rd') == first


def test_login_hash_changes_across_hour(client, clock):
    first = client.login_hash('12345', 'pa55w0rd')
    clock.moment = datetime(2026, 10, 19, 15, 0)
    assert client.login_hash('12345', 'pa55w0rd') != first


def test_login_rejects_hash_from_previous_hour(client, session):
    session.queue(200, headers=x_json({'result': 'ok', 'authenticated': True,
                                       'hash': expected_hash('2026101913')}))

    assert client.user_login('12345', 'pa55w0rd') is False


def test_login_not_authenticated_raises_with_server_message(client, session):
    session.queue(200, headers=x_json({'result': 'ok', 'authenticated': False,
                                       'message': 'Stamnummer of wachtwoord onjuist'}))

    with pytest.raises(CredentialsDoNotMatchError) as exc_info:
        client.user_login('12345', 'wrong')

    assert exc_info.value.message == 'Stamnummer of wachtwoord onjuist'


def test_login_authenticated_without_hash_is_invalid(client, session):
    session.queue(200, headers=x_json({'result': 'ok', 'authenticated': True}))

    with pytest.raises(InvalidResponseError):
        client.user_login('12345', 'pa55w0rd')


def test_login_payload_without_authenticated_is_invalid(client, session):
    session.queue(200, headers=x_json({'result': 'ok'}))

    with pytest.raises(InvalidResponseError):
        client.user_login('12345', 'pa55w0rd')


def test_login_without_header_is_false(client, session):
    session.queue(200, body={})

    assert client.user_login('12345', 'pa55w0rd') is False


def test_login_non_ascii_hash_is_false(client, session):
    session.queue(200, headers=x_json({'result': 'ok', 'authenticated': True, 'hash': 'hé'}))

    assert client.user_login('12345', 'pa55w0rd') is False
