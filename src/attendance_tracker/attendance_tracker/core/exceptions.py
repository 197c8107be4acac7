class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NoActiveSessionError(DomainError):
    """Raised on check-out when the user has no open attendance record."""


class RecordNotFoundError(DomainError):
    """Raised when a record id does not exist in the store."""


class RecordValidationError(DomainError):
    """Raised when a stored document cannot be turned into a typed record."""

    def __init__(self, record_id: object, reason: str):
        super().__init__(f"record {record_id!r}: {reason}")
        self.record_id = record_id
        self.reason = reason


class StoreError(DomainError):
    """Raised by store adapters when the backend fails (network, disk, SQL)."""
