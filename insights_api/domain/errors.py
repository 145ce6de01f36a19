"""Error types shared by the application and interface layers."""


class InsightsError(Exception):
    """Base class for errors raised by the activity and insights services."""


class ValidationError(InsightsError, ValueError):
    """Raised when a request is malformed and must be rejected before store access."""


class AuthorizationError(InsightsError):
    """Raised when no organization or user can be resolved for a request."""


class DataAccessError(InsightsError):
    """Raised when the underlying store is unreachable or a statement fails."""


__all__ = [
    "InsightsError",
    "ValidationError",
    "AuthorizationError",
    "DataAccessError",
]
