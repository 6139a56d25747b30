class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """No matching record in the expected state for the acting user."""


class AlreadyOpenError(ValidationError):
    """The subject already has an open interval of this kind."""


class NoOpenSessionError(ValidationError):
    """The subject has no open interval to close."""


class DailyLimitExceededError(ValidationError):
    """A once-per-day AUX type was already used today."""


class MissingDocumentError(ValidationError):
    """Sick leave submitted without a supporting file."""


class MissingOvertimeWindowError(ValidationError):
    """Overtime request submitted without both start and end time."""


class SelfSwapError(ValidationError):
    """A shift swap cannot target its own requester."""
