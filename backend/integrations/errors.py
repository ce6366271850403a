"""Errors raised while building or sending TeePublic requests."""

from __future__ import annotations


class TeePublicError(ValueError):
    """Base class for every per-item failure of the TeePublic adapter."""


class ConfigurationError(TeePublicError):
    """Raised when credentials are unusable (e.g. no base URL)."""


class InvalidParametersError(ConfigurationError):
    """Raised when an item's parameters cannot be validated."""


class MissingIdentifierError(TeePublicError):
    """Raised when get/sync needs a record ID and none was provided."""


class InvalidPayloadError(TeePublicError):
    """Raised when a sync payload is text that does not parse as JSON."""


class InvalidProxyError(TeePublicError):
    """Raised when the configured proxy URL cannot be parsed."""


class TransportError(TeePublicError):
    """Raised on network failures and non-2xx responses."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
