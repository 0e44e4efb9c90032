class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the API layer answers with.
    """

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class DuplicateKeyError(DomainError):
    """Raised when creating a row whose key already exists."""

    status_code = 409


class NotFoundError(DomainError):
    """Raised when the addressed row does not exist."""

    status_code = 404


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""

    status_code = 403


class AdminRequiredError(AuthorizationError):
    """Raised when an admin-gated route is called without the admin PIN."""


class BusinessRuleError(DomainError):
    """Expected, user-facing rejection of a state transition."""


class AlreadyTimedInError(BusinessRuleError):
    pass


class AlreadyTimedOutError(BusinessRuleError):
    pass


class MustTimeInFirstError(BusinessRuleError):
    pass


class NothingToUpdateError(BusinessRuleError):
    pass


class InvalidTimeSequenceError(BusinessRuleError):
    """timeOut would end up before timeIn (or set without timeIn)."""


class NoRecordFoundError(NotFoundError):
    """Time-out found neither today's nor yesterday's record."""


class StorageError(DomainError):
    """Unexpected backend failure. The message is never shown to callers."""

    status_code = 500
