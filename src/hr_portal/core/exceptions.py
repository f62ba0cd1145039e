class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateError(ValidationError):
    """Raised when a date is unparseable or a date range is inverted."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConfigurationError(DomainError):
    """Raised when a required setting (API key, bucket, ...) is missing."""


class EmailDeliveryError(DomainError):
    """Raised when a transactional email could not be handed to the provider."""


class StorageError(DomainError):
    """Raised when the object store rejects an upload."""
