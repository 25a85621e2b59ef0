"""Custom exception classes for finmood."""


class FinMoodError(Exception):
    """Base exception for all finmood errors."""
    pass


class ConfigurationError(FinMoodError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(FinMoodError):
    """Raised when a proposed mood record fails validation."""
    pass


class NotFoundError(FinMoodError):
    """Raised when a referenced record does not exist."""
    pass


class OwnershipError(NotFoundError):
    """Raised when a transaction is missing or not owned by the acting user."""
    pass
