"""Custom exceptions."""


class BigMLError(Exception):
    """Base class for all custom exceptions.

    Useful to catch all of them.
    """


class InvalidResourceIdError(BigMLError, ValueError):
    """A resource identifier does not match the pattern of its kind."""

    def __init__(self, kind: str, value: object):
        """Raise the InvalidResourceIdError.

        Args:
            kind (str): Expected resource kind (e.g. ``cluster``).
            value (object): The rejected identifier or envelope.
        """
        self.kind = kind
        self.value = value
        super().__init__(f"Wrong {kind} id: {value!r}")


class ConfigurationError(BigMLError):
    """Settings are missing or inconsistent (e.g. no credentials)."""


class TransportError(BigMLError):
    """The HTTP request could not be completed (DNS, connection, timeout...)."""


class ResourceRequestError(BigMLError):
    """The remote service answered with an unexpected HTTP status."""

    def __init__(self, status_code: int, message: str, url: str | None = None):
        """Raise the ResourceRequestError.

        Args:
            status_code (int): HTTP status returned by the service.
            message (str): Error message extracted from the response body.
            url (str | None): Request URL without credentials.
        """
        self.status_code = status_code
        self.message = message
        self.url = url
        where = f" ({url})" if url else ""
        super().__init__(f"HTTP {status_code}{where}: {message}")
