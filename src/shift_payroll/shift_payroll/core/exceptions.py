class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the entity's current state."""


class ConfigurationError(DomainError):
    """Raised when settings, targets or calendar data make a calculation impossible."""


class NotFoundError(DomainError):
    """Raised when a referenced agent, sale, payment or record does not exist."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
