class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a required field is missing or malformed."""


class NotFoundError(DomainError):
    """Raised when a referenced user, request or pass does not exist."""


class AuthenticationError(NotFoundError):
    """Raised when login credentials do not match any user."""


class InvalidStateError(DomainError):
    """Raised when a transition is attempted on an already decided request."""


class EncodingError(DomainError):
    """Raised when the pass image could not be generated."""


class StorageError(DomainError):
    """Raised when the store cannot be read or written.

    After a state change this means the change is not guaranteed durable.
    """
