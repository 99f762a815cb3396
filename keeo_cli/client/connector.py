"""HTTP transport for the Keeo API."""

import sys
import json

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .errors import BadRequestError, TransportError


def parse_header_json(value: str) -> dict:
    """Decode the JSON payload Keeo wraps in parentheses inside a header.

    Returns an empty dict when the header is empty or not valid JSON.
    """
    if not value:
        return {}
    value = value.strip()
    if value.startswith('(') and value.endswith(')'):
        value = value[1:-1]
    try:
        data = json.loads(value)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class KeeoConnector:
    """Basic-auth `requests` session bound to the configured API URL.

    Status codes are left to the caller, except 400 which is raised as
    BadRequestError carrying the message Keeo sent along.
    """

    def __init__(self, config, verbose: bool = False, session: requests.Session = None):
        self.config = config
        self.verbose = verbose
        self.base_url = config.api_url.rstrip('/')
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with basic auth and SSL settings."""
        session = requests.Session()
        session.auth = (self.config.username, self.config.password)
        session.verify = self.config.verify_ssl
        session.headers.update({'Accept': 'application/json'})

        if not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)

        return session

    def get(self, path: str, params: dict = None) -> requests.Response:
        return self._request('GET', path, params=params or {})

    def post(self, path: str, params: dict = None) -> requests.Response:
        return self._request('POST', path, data=params or {})

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Send one request and return the raw response.

        Args:
            method: HTTP method (GET or POST)
            path: URL path, appended to the configured API URL
            **kwargs: Passed to requests (params or data)

        Raises:
            TransportError: If no HTTP response was received
            BadRequestError: If Keeo answered 400
        """
        url = f"{self.base_url}{path}"

        if self.verbose:
            print(f">> {method} {url}", file=sys.stderr)
            fields = kwargs.get('params') or kwargs.get('data')
            if fields:
                # names only: passwords travel in these fields
                print(f"   Fields: {', '.join(sorted(fields))}", file=sys.stderr)

        try:
            response = self.session.request(
                method, url, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e

        if self.verbose:
            print(f"<< {response.status_code} {response.reason}", file=sys.stderr)

        if response.status_code == 400:
            raise BadRequestError(self._bad_request_message(response))

        return response

    @staticmethod
    def _bad_request_message(response: requests.Response) -> str:
        """Find the human-readable reason Keeo gave for a 400."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get('message', body.get('error'))
            if message:
                return message

        message = KeeoConnector.extract_error_message(response.headers)
        if message:
            return message

        return response.text.strip() if response.text else (response.reason or '')

    @staticmethod
    def extract_error_message(headers) -> str:
        """Get the error message Keeo sends in the response headers.

        Looks at the `message` of the X-Json header first, then at the
        X-Error-Message header. Returns '' when neither carries one.
        """
        message = parse_header_json(headers.get('X-Json', '')).get('message')
        if message:
            return message
        return headers.get('X-Error-Message', '')
