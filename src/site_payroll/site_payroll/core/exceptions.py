class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidArgumentError(ValidationError):
    """Raised for negative hours, non-positive rates or non-numeric amounts."""


class NotFoundError(DomainError):
    """Raised when a referenced worker, site or record does not exist."""
