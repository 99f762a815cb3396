import json
from datetime import date

import pytest

from keeo_cli.client import (
    BadRequestError,
    ConflictAtEventSubscriptionError,
    Event,
    ForbiddenEventSubscriptionError,
    InvalidArgumentError,
    InvalidResponseError,
    Person,
    PersonAlreadySubscribedError,
    PriceCategory,
)


def test_event_categories(client, session):
    session.queue(200, body={'event_categories': [{'id': 5, 'name': 'Kampen'}]})

    categories = client.get_event_categories()

    assert session.last['url'] == 'https://keeo.test/api/event/categories.json'
    assert [(c.id, c.name) for c in categories] == [(5, 'Kampen')]


def test_find_events_requires_a_parameter(client, session):
    with pytest.raises(InvalidArgumentError):
        client.find_events()
    assert session.calls == []


def test_find_events_by_category_only(client, session):
    session.queue(200, body={'event_codes': ['EV-1', 'EV-2']})

    codes = client.find_events(category_id=5)

    assert codes == ['EV-1', 'EV-2']
    assert session.last['method'] == 'POST'
    assert session.last['url'] == 'https://keeo.test/api/event/search.json'
    assert session.last['data'] == {'category_id': 5}


def test_find_events_date_bounds(client, session):
    session.queue(200, body={'event_codes': []})

    client.find_events(start_date_from=date(2026, 7, 1), end_date_until=date(2026, 8, 31))

    assert session.last['data'] == {'start[from]': '2026-07-01', 'end[until]': '2026-08-31'}


def test_find_events_non_200_is_empty(client, session):
    session.queue(500, body='oops')

    assert client.find_events(category_id=5) == []


def test_get_event(client, session):
    session.queue(200, body={'event': {
        'code': 'EV-1',
        'name': 'Zomerkamp',
        'price_categories': [{'id': 2, 'name': 'Lid', 'price': '120.00'}],
    }})

    event = client.get_event('EV-1')

    assert session.last['url'] == 'https://keeo.test/api/event/EV-1.json'
    assert event.code == 'EV-1'
    assert event.price_categories == [PriceCategory(id=2, name='Lid', price='120.00')]


def test_get_event_missing_key(client, session):
    session.queue(200, body={'events': []})

    with pytest.raises(InvalidResponseError):
        client.get_event('EV-1')


def test_subscribe_success(client, session):
    session.queue(204, reason='No Content')

    assert client.subscribe_person_to_event('111', 'EV-1', '999', 'admin-pw') is None
    assert session.last['url'] == 'https://keeo.test/api/event/subscribe.json'
    assert session.last['data'] == {
        'person_code': '111',
        'event_code': 'EV-1',
        'administrator_code': '999',
        'administrator_password': 'admin-pw',
    }


def test_subscribe_normalizes_entities(client, session):
    session.queue(204)

    client.subscribe_person_to_event(
        Person(stemnumber='111'),
        Event(code='EV-1'),
        Person(stemnumber='999'),
        'admin-pw',
        price_category=PriceCategory(id=2),
    )

    assert session.last['data'] == {
        'person_code': '111',
        'event_code': 'EV-1',
        'administrator_code': '999',
        'administrator_password': 'admin-pw',
        'price_category_id': 2,
    }


def test_subscribe_forbidden(client, session):
    session.queue(403, headers={'X-Json': '(' + json.dumps({'message': 'Wrong password'}) + ')'})

    with pytest.raises(ForbiddenEventSubscriptionError) as exc_info:
        client.subscribe_person_to_event('111', 'EV-1', '999', 'nope')

    assert exc_info.value.message == 'Wrong password'


def test_subscribe_conflict(client, session):
    session.queue(409, headers={'X-Error-Message': 'Overlaps with EV-7'})

    with pytest.raises(ConflictAtEventSubscriptionError) as exc_info:
        client.subscribe_person_to_event('111', 'EV-1', '999', 'admin-pw')

    assert exc_info.value.message == 'Overlaps with EV-7'


def test_subscribe_already_subscribed(client, session):
    session.queue(400, body={'message': 'This person is already subscribed to this event.'})

    with pytest.raises(PersonAlreadySubscribedError) as exc_info:
        client.subscribe_person_to_event('111', 'EV-1', '999', 'admin-pw')

    assert exc_info.value.message == 'This person is already subscribed to this event.'


def test_subscribe_other_bad_request_propagates(client, session):
    session.queue(400, body={'message': 'Unknown event code.'})

    with pytest.raises(BadRequestError) as exc_info:
        client.subscribe_person_to_event('111', 'EV-404', '999', 'admin-pw')

    assert not isinstance(exc_info.value, PersonAlreadySubscribedError)
    assert exc_info.value.message == 'Unknown event code.'


def test_subscribe_unexpected_status_warns(client, session, capsys):
    session.queue(202)

    client.subscribe_person_to_event('111', 'EV-1', '999', 'admin-pw')

    assert 'Warning: unexpected HTTP 202' in capsys.readouterr().err


def test_find_events_html_body(client, session):
    session.queue(200, body='<html>maintenance</html>')

    with pytest.raises(InvalidResponseError):
        client.find_events(category_id=5)


@pytest.mark.parametrize('person, event', [
    (Person(), 'EV-1'),
    ('111', Event(name='Zomerkamp')),
])
def test_subscribe_rejects_entities_without_id(client, session, person, event):
    with pytest.raises(InvalidArgumentError):
        client.subscribe_person_to_event(person, event, '999', 'admin-pw')
    assert session.calls == []
