"""Client package for Keeo CLI."""

from .keeo_client import KeeoClient
from .connector import KeeoConnector
from .entities import (
    Person,
    PersonFunction,
    Unit,
    Event,
    EventCategory,
    PriceCategory,
)
from .errors import (
    KeeoError,
    ConfigurationError,
    TransportError,
    InvalidResponseError,
    CredentialsDoNotMatchError,
    InvalidArgumentError,
    BadRequestError,
    PersonAlreadySubscribedError,
    ForbiddenEventSubscriptionError,
    ConflictAtEventSubscriptionError,
)

__all__ = [
    "KeeoClient",
    "KeeoConnector",
    "Person",
    "PersonFunction",
    "Unit",
    "Event",
    "EventCategory",
    "PriceCategory",
    "KeeoError",
    "ConfigurationError",
    "TransportError",
    "InvalidResponseError",
    "CredentialsDoNotMatchError",
    "InvalidArgumentError",
    "BadRequestError",
    "PersonAlreadySubscribedError",
    "ForbiddenEventSubscriptionError",
    "ConflictAtEventSubscriptionError",
]
