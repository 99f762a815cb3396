"""Client for the Keeo membership and event API."""

import re
import sys
import hmac
import hashlib
from datetime import date, datetime
from typing import Callable, List, Optional, Union

import requests

from .. import config as keeo_config
from .connector import KeeoConnector, parse_header_json
from .entities import (
    Event,
    EventCategory,
    Person,
    PersonFunction,
    PriceCategory,
    Unit,
)
from .errors import (
    BadRequestError,
    ConflictAtEventSubscriptionError,
    CredentialsDoNotMatchError,
    ForbiddenEventSubscriptionError,
    InvalidArgumentError,
    InvalidResponseError,
    PersonAlreadySubscribedError,
)


ALREADY_SUBSCRIBED_MESSAGE = 'This person is already subscribed to this event.'

# Category holding every unit
ALL_UNITS_CATEGORY_ID = 1

LOGIN_HASH_TIME_FORMAT = '%Y%m%d%H'
DATE_FORMAT = '%Y-%m-%d'

_NUMERIC = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')


def _is_numeric(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and bool(_NUMERIC.match(value))


def _is_empty(value) -> bool:
    """Optional filters count as absent when falsy or the string '0'."""
    return not value or value == '0'


def _number_text(value) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _resolve_id(value, entity_class, attribute: str, field: str) -> str:
    """Normalize an entity or a numeric id to the id sent to Keeo."""
    if isinstance(value, entity_class):
        return _number_text(_id_of(value, entity_class, attribute, field))
    if _is_numeric(value):
        return _number_text(value)
    raise InvalidArgumentError(
        f"{field} must be an instance of {entity_class.__name__} "
        f"or be a numerical value",
        field=field,
        value=repr(value),
    )


def _id_of(value, entity_class, attribute: str, field: str):
    """Entity -> its id (which must be set); anything else is passed through as given."""
    if isinstance(value, entity_class):
        value = getattr(value, attribute)
        if value is None:
            raise InvalidArgumentError(
                f"{entity_class.__name__} has no {attribute}", field=field
            )
    return value


def _format_date(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    return str(value)


def _warn(message: str):
    print(f"Warning: {message}", file=sys.stderr)


class KeeoClient:
    """Synchronous client for the Keeo API.

    One method per remote operation. Every call is a single round trip;
    the client keeps no state besides its configuration.
    """

    def __init__(self, config, verbose: bool = False,
                 clock: Callable[[], datetime] = None,
                 connector: KeeoConnector = None):
        """
        Args:
            config: KeeoConfig, or a mapping accepted by KeeoConfig.from_dict
            verbose: Print HTTP traffic to stderr
            clock: Returns the current local time (login hash window)
            connector: Transport override, used by tests
        """
        if not isinstance(config, keeo_config.KeeoConfig):
            config = keeo_config.KeeoConfig.from_dict(config)
        self.config = config
        self.verbose = verbose
        self.clock = clock or datetime.now
        self.connector = connector or KeeoConnector(config, verbose=verbose)

    # ── Response decoding ──────────────────────────────────────────

    @staticmethod
    def _decode_body(response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Response body is not valid JSON (HTTP {response.status_code})"
            ) from e

    @staticmethod
    def _decode_header_json(response: requests.Response, header: str = 'X-Json') -> dict:
        return parse_header_json(response.headers.get(header, ''))

    @staticmethod
    def _unwrap(data, key: str):
        """Return data[key], raising InvalidResponseError when it is missing."""
        if not isinstance(data, dict) or data.get(key) is None:
            raise InvalidResponseError(
                f"Expected key '{key}' not found in the response", key=key
            )
        return data[key]

    def _fetch(self, method: str, path: str, key: str, params: dict = None):
        """Call an endpoint and unwrap the named top-level key of its body."""
        response = getattr(self.connector, method)(path, params)
        return self._unwrap(self._decode_body(response), key)

    # ── Person ─────────────────────────────────────────────────────

    def user_login(self, stemnumber, password: str) -> bool:
        """Check a member's credentials against Keeo.

        Keeo answers in the X-Json header. On success it sends
        md5(stemnumber + salt + password + YYYYMMDDHH); the hash is
        recomputed with the current local hour, so it only matches within
        the hour it was issued.

        Returns:
            True if the credentials are correct, False otherwise

        Raises:
            CredentialsDoNotMatchError: If Keeo reports authenticated = false
            InvalidResponseError: If the X-Json payload is incomplete
        """
        response = self.connector.post('/person/login.json', {
            'login': stemnumber,
            'password': password,
        })

        if not response.headers.get('X-Json'):
            return False

        data = self._decode_header_json(response)
        self._unwrap(data, 'result')
        self._unwrap(data, 'authenticated')

        if not data['authenticated']:
            raise CredentialsDoNotMatchError(data.get('message') or '')

        received_hash = self._unwrap(data, 'hash')
        expected_hash = self.login_hash(stemnumber, password)
        return hmac.compare_digest(str(received_hash).encode('utf-8'),
                                   expected_hash.encode('ascii'))

    def login_hash(self, stemnumber, password: str, moment: datetime = None) -> str:
        """Hash Keeo returns for a successful login at `moment` (default: now)."""
        moment = moment or self.clock()
        payload = (f"{stemnumber}{self.config.login_salt}{password}"
                   f"{moment.strftime(LOGIN_HASH_TIME_FORMAT)}")
        return hashlib.md5(payload.encode('utf-8')).hexdigest()

    def get_person(self, stemnumber) -> Optional[Person]:
        """Get a person, or None if not found (404) or deleted (410)."""
        response = self.connector.get(f'/person/{stemnumber}.json')

        if response.status_code == 200:
            return Person.from_dict(self._unwrap(self._decode_body(response), 'person'))
        if response.status_code not in (404, 410):
            _warn(f"unexpected HTTP {response.status_code} for person "
                  f"{stemnumber}, treating as not found")
        return None

    def get_functions(self) -> List[PersonFunction]:
        """Get every function a person can hold in a unit."""
        functions = self._fetch('get', '/person/functions.json', 'functions')
        return [PersonFunction.from_dict(f) for f in functions]

    def find_user(self, first_name: str = '', name: str = '', email: str = '',
                  birth_date: Union[date, str, None] = None) -> list:
        """Check whether users exist with the given attributes.

        Only the non-empty fields are sent. A non-200 answer yields an
        empty list, so a server-side failure looks like "no match".

        Raises:
            InvalidArgumentError: If no search parameter is given
        """
        params = {}
        if first_name:
            params['first_name'] = first_name
        if name:
            params['name'] = name
        if email:
            params['email'] = email
        if birth_date:
            params['birth_date'] = _format_date(birth_date)

        if not params:
            raise InvalidArgumentError('At least one search parameter needs to be given.')

        response = self.connector.post('/person/verify.json', params)
        if response.status_code != 200:
            return []
        return self._decode_body(response)

    # ── Unit ───────────────────────────────────────────────────────

    def get_unit(self, unit_number) -> Unit:
        return Unit.from_dict(self._fetch('get', f'/unit/{unit_number}.json', 'unit_data'))

    def get_number_of_persons_in_unit(self, unit, function=None) -> int:
        """Count the members of a unit, optionally only those with a function.

        Args:
            unit: Unit or numeric unit number
            function: PersonFunction or numeric function number

        Raises:
            InvalidArgumentError: If unit or function has the wrong type
        """
        params = {'number': _resolve_id(unit, Unit, 'number', 'Unit')}
        if not _is_empty(function):
            params['function_number'] = _resolve_id(
                function, PersonFunction, 'number', 'Function')

        count = self._fetch('post', '/unit/search-member-count.json', 'count', params)
        try:
            return int(count)
        except (TypeError, ValueError) as e:
            raise InvalidResponseError(
                f"Member count is not a number: {count!r}", key='count') from e

    def get_all_members_in_unit(self, unit_number) -> List[Person]:
        return self.search_members_in_unit(unit_number)

    def search_members_in_unit(self, unit_number, function_number=None) -> List[Person]:
        """Get the members of a unit, optionally filtered on function."""
        params = {'number': _id_of(unit_number, Unit, 'number', 'Unit')}
        if not _is_empty(function_number):
            params['function_number'] = _id_of(
                function_number, PersonFunction, 'number', 'Function')

        members = self._fetch('get', '/unit/search-members.json', 'unit_members', params)
        return [Person.from_dict(m) for m in members]

    def get_unit_categories(self) -> list:
        """Get the unit category tree.

        Returns:
            Nested structure of {'id', 'name', 'children': [...]} as sent by Keeo
        """
        return self._fetch('get', '/unit/categories.json', 'structure')

    def get_all_unit_numbers(self) -> List[str]:
        return self.get_units_numbers_in_category(ALL_UNITS_CATEGORY_ID)

    def get_units_numbers_in_category(self, category_id) -> List[str]:
        return self._fetch('get', '/unit/select-by-category-id.json', 'unit_numbers',
                           {'category_id': category_id})

    # ── Event ──────────────────────────────────────────────────────

    def get_event_categories(self) -> List[EventCategory]:
        categories = self._fetch('get', '/event/categories.json', 'event_categories')
        return [EventCategory.from_dict(c) for c in categories]

    def find_events(self, category_id=None,
                    start_date_from: Union[date, str, None] = None,
                    start_date_until: Union[date, str, None] = None,
                    end_date_from: Union[date, str, None] = None,
                    end_date_until: Union[date, str, None] = None) -> List[str]:
        """Search events; every date bound is inclusive.

        Args:
            category_id: Category id, see get_event_categories()
            start_date_from: Start date on or after this day
            start_date_until: Start date on or before this day
            end_date_from: End date on or after this day
            end_date_until: End date on or before this day

        Returns:
            Event codes. Empty if Keeo answers anything but 200.

        Raises:
            InvalidArgumentError: If no search parameter is given
        """
        params = {}
        if category_id:
            params['category_id'] = category_id
        if start_date_from:
            params['start[from]'] = _format_date(start_date_from)
        if start_date_until:
            params['start[until]'] = _format_date(start_date_until)
        if end_date_from:
            params['end[from]'] = _format_date(end_date_from)
        if end_date_until:
            params['end[until]'] = _format_date(end_date_until)

        if not params:
            raise InvalidArgumentError('At least one search parameter needs to be given.')

        response = self.connector.post('/event/search.json', params)
        if response.status_code != 200:
            return []
        return self._unwrap(self._decode_body(response), 'event_codes')

    def get_event(self, event_code) -> Event:
        return Event.from_dict(self._fetch('get', f'/event/{event_code}.json', 'event'))

    def subscribe_person_to_event(self, person, event, administrator,
                                  administrator_password: str,
                                  price_category=None):
        """Subscribe a person to an event on behalf of an administrator.

        Args:
            person: Person or stem number
            event: Event or event code
            administrator: Person or stem number of the subscribing admin
            administrator_password: The administrator's Keeo password
            price_category: PriceCategory or price category id

        Raises:
            PersonAlreadySubscribedError: If the person is already subscribed
            BadRequestError: For any other rejected request
            ForbiddenEventSubscriptionError: On 403 (e.g. wrong admin password)
            ConflictAtEventSubscriptionError: On 409 (e.g. overlapping events)
        """
        params = {
            'person_code': _id_of(person, Person, 'stemnumber', 'person'),
            'event_code': _id_of(event, Event, 'code', 'event'),
            'administrator_code': _id_of(administrator, Person, 'stemnumber', 'administrator'),
            'administrator_password': administrator_password,
        }
        if price_category is not None:
            params['price_category_id'] = _id_of(
                price_category, PriceCategory, 'id', 'price_category')

        try:
            response = self.connector.post('/event/subscribe.json', params)
        except BadRequestError as e:
            if e.message == ALREADY_SUBSCRIBED_MESSAGE:
                raise PersonAlreadySubscribedError(e.message) from e
            raise

        if response.status_code == 204:
            return
        if response.status_code == 403:
            raise ForbiddenEventSubscriptionError(
                KeeoConnector.extract_error_message(response.headers))
        if response.status_code == 409:
            raise ConflictAtEventSubscriptionError(
                KeeoConnector.extract_error_message(response.headers))

        _warn(f"unexpected HTTP {response.status_code} when subscribing "
              f"{params['person_code']} to event {params['event_code']}")
