class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record no longer exists in the store."""


class RenderFailure(DomainError):
    """Raised when a chart could not be rendered to an image."""


class StoreUnavailable(DomainError):
    """Raised when the record store cannot be reached."""


class MissingPhoneError(DomainError):
    """Raised when a message composer is requested without a destination phone."""
