import pytest

from keeo_cli.client import Event, EventCategory, Person, PersonFunction, Unit
from keeo_cli.commands import EventCommands, PersonCommands, UnitCommands


class StubClient:
    """Records calls and answers with canned entities."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def call(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return CANNED[name]
        return call


CANNED = {
    'user_login': True,
    'get_person': Person.from_dict({'stemnumber': '1', 'first_name': 'Lotte', 'name': 'Peeters'}),
    'get_functions': [PersonFunction(number=3, name='Lid')],
    'find_user': [{'stemnumber': '1'}],
    'get_unit': Unit.from_dict({'number': '1512', 'name': 'Sint-Jan'}),
    'get_number_of_persons_in_unit': 42,
    'search_members_in_unit': [Person(stemnumber='1', first_name='Lotte', name='Peeters')],
    'get_unit_categories': [{'id': 1, 'name': 'Alle', 'children': []}],
    'get_all_unit_numbers': ['1512', '1513'],
    'get_units_numbers_in_category': ['1512'],
    'get_event_categories': [EventCategory(id=5, name='Kampen')],
    'find_events': ['EV-1'],
    'get_event': Event.from_dict({'code': 'EV-1', 'price_categories': [{'id': 2, 'name': 'Lid'}]}),
    'subscribe_person_to_event': None,
}


@pytest.fixture
def stub():
    return StubClient()


def test_check_login(stub):
    assert PersonCommands(stub).check_login('1', 'pw') == {'stemnumber': '1', 'authenticated': True}


def test_get_person_not_found(stub, monkeypatch):
    monkeypatch.setitem(CANNED, 'get_person', None)

    assert PersonCommands(stub).get_person('1') == {'stemnumber': '1', 'found': False}


def test_find_parses_birth_date(stub):
    result = PersonCommands(stub).find(name='Peeters', birth_date='2004-05-17')

    _, _, kwargs = stub.calls[-1]
    assert kwargs['birth_date'].isoformat() == '2004-05-17'
    assert kwargs['first_name'] == ''
    assert result['count'] == 1


def test_list_members_simplifies(stub):
    result = UnitCommands(stub).list_members('1512')

    assert result['count'] == 1
    assert result['members'][0]['fullName'] == 'Lotte Peeters'


def test_list_numbers_defaults_to_all(stub):
    assert UnitCommands(stub).list_numbers()['unitNumbers'] == ['1512', '1513']
    assert UnitCommands(stub).list_numbers(4)['unitNumbers'] == ['1512']


def test_event_search_parses_dates(stub):
    EventCommands(stub).search(category_id=5, start_from='2026-07-01')

    _, args, _ = stub.calls[-1]
    assert args[0] == 5
    assert args[1].isoformat() == '2026-07-01'
    assert args[2:] == (None, None, None)


def test_get_event_lists_price_categories(stub):
    result = EventCommands(stub).get_event('EV-1')

    assert result['priceCategories'] == [{'id': 2, 'name': 'Lid', 'price': None}]


def test_subscribe_dry_run_sends_nothing(stub):
    result = EventCommands(stub).subscribe('1', 'EV-1', '9', '', dry_run=True)

    assert result['status'] == 'dry_run'
    assert stub.calls == []


def test_subscribe(stub):
    result = EventCommands(stub).subscribe('1', 'EV-1', '9', 'pw', price_category='2')

    assert result['status'] == 'subscribed'
    assert stub.calls == [('subscribe_person_to_event', ('1', 'EV-1', '9', 'pw'),
                           {'price_category': '2'})]
