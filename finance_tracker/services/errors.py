"""
Service-level errors, mapped to HTTP responses by the API layer.
"""


class ValidationError(ValueError):
    """Raised when a request is well-formed but semantically invalid."""

    pass


class NotFoundError(LookupError):
    """Raised when a single resource does not exist for the owner."""

    pass
