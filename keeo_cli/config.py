"""Configuration for Keeo CLI."""

import os
from dataclasses import dataclass
from typing import Optional

from .client.errors import ConfigurationError

# API endpoint
API_BASE_URL = "https://keeo.fos.be/api"

# Environment variables
ENV_API_URL = "KEEO_API_URL"
ENV_API_USERNAME = "KEEO_API_USERNAME"
ENV_API_PASSWORD = "KEEO_API_PASSWORD"
ENV_LOGIN_SALT = "KEEO_LOGIN_SALT"
ENV_VERIFY_SSL = "KEEO_VERIFY_SSL"
ENV_TIMEOUT = "KEEO_TIMEOUT"
ENV_SKIP_CONFIRM = "KEEO_SKIP_CONFIRM"

# HTTP configuration
VERIFY_SSL = False      # Keeo historically served a certificate that does not validate
REQUEST_TIMEOUT = None  # requests default (wait indefinitely)

# Original PHP config keys -> KeeoConfig fields
_CONFIG_ALIASES = {
    'apiUrl': 'api_url',
    'apiUsername': 'username',
    'apiPassword': 'password',
    'userLoginSalt': 'login_salt',
    'verifySsl': 'verify_ssl',
}

_TRUTHY = ('1', 'true', 'yes')


@dataclass(frozen=True)
class KeeoConfig:
    """Connection settings for one Keeo API account."""

    username: str
    password: str
    login_salt: str = ''
    api_url: str = API_BASE_URL
    verify_ssl: bool = VERIFY_SSL
    timeout: Optional[float] = REQUEST_TIMEOUT

    def __post_init__(self):
        if not self.username or not self.password:
            raise ConfigurationError("Keeo API username and password are required.")

    @classmethod
    def from_dict(cls, data: dict) -> 'KeeoConfig':
        """Build a config from a mapping.

        Accepts the camelCase keys of the original PHP config array
        (apiUrl, apiUsername, apiPassword, userLoginSalt) as well as the
        field names. Unknown keys are ignored.
        """
        values = {}
        for key, value in data.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = value
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigurationError(f"Incomplete Keeo configuration: {e}") from e

    @classmethod
    def from_env(cls, environ=None) -> 'KeeoConfig':
        """Build a config from KEEO_* environment variables."""
        env = os.environ if environ is None else environ

        timeout = env.get(ENV_TIMEOUT)
        if timeout:
            try:
                timeout = float(timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be a number of seconds, got {timeout!r}.",
                    suggestion=f"Unset {ENV_TIMEOUT} to use the transport default.",
                ) from e
        else:
            timeout = REQUEST_TIMEOUT

        return cls(
            username=env.get(ENV_API_USERNAME, ''),
            password=env.get(ENV_API_PASSWORD, ''),
            login_salt=env.get(ENV_LOGIN_SALT, ''),
            api_url=env.get(ENV_API_URL) or API_BASE_URL,
            verify_ssl=env.get(ENV_VERIFY_SSL, '').lower() in _TRUTHY,
            timeout=timeout,
        )
