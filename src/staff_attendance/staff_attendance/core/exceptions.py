class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class OrderingError(ValidationError):
    """Raised when a punch cannot legally sit at its chronological position."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConfigurationError(Exception):
    """Raised at startup when settings are missing or malformed."""
