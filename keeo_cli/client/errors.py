"""Custom exception classes for Keeo CLI."""


class KeeoError(Exception):
    """Base exception for all Keeo CLI errors."""

    def __init__(self, message='', suggestion=None, **kwargs):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.metadata = kwargs

    def to_dict(self):
        """Convert error to dictionary for JSON output."""
        result = {
            'error': self.__class__.__name__,
            'message': self.message
        }
        if self.suggestion:
            result['suggestion'] = self.suggestion
        result.update(self.metadata)
        return result


class ConfigurationError(KeeoError):
    """Missing or malformed client configuration."""

    def __init__(self, message='Invalid configuration', suggestion=None):
        super().__init__(
            message=message,
            suggestion=suggestion or (
                "Set KEEO_API_USERNAME and KEEO_API_PASSWORD "
                "(and KEEO_LOGIN_SALT for 'keeo auth check')."
            )
        )


class TransportError(KeeoError):
    """The request never produced an HTTP response (DNS, connection, TLS)."""

    def __init__(self, message='Could not reach the Keeo API', url=None):
        super().__init__(
            message=message,
            suggestion="Check KEEO_API_URL and your network connection.",
            url=url
        )


class InvalidResponseError(KeeoError):
    """The API answered, but not in the expected shape."""

    def __init__(self, message='Invalid response from Keeo', key=None):
        super().__init__(message=message, key=key)


class CredentialsDoNotMatchError(KeeoError):
    """Keeo reported the login as not authenticated."""

    def __init__(self, message=''):
        super().__init__(message=message)


class InvalidArgumentError(KeeoError, ValueError):
    """Caller passed no usable search parameters or a value of the wrong type."""

    def __init__(self, message='Invalid argument', field=None, value=None):
        super().__init__(
            message=message,
            field=field,
            value=value
        )


class BadRequestError(KeeoError):
    """Keeo rejected the request (400)."""

    def __init__(self, message='Bad request', status_code=400):
        super().__init__(message=message, status_code=status_code)


class PersonAlreadySubscribedError(BadRequestError):
    """The person already has a subscription for the event."""


class ForbiddenEventSubscriptionError(KeeoError):
    """Subscription refused (403), typically a wrong administrator password."""

    def __init__(self, message='Subscription forbidden'):
        super().__init__(
            message=message,
            suggestion="Check the administrator stem number and password.",
            status_code=403
        )


class ConflictAtEventSubscriptionError(KeeoError):
    """Subscription conflicts with existing data (409), e.g. overlapping events."""

    def __init__(self, message='Subscription conflict'):
        super().__init__(message=message, status_code=409)
