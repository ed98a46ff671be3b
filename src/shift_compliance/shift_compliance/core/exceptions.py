class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AlreadyCheckedIn(DomainError):
    """Raised when a check-in is attempted while a session is still open."""


class NoOpenSession(DomainError):
    """Raised when a check-out is attempted without an open session."""


class InvalidShiftConfig(ValidationError):
    """Raised when shift parameters are inconsistent (end before start, negative grace, ...)."""


class MissingShiftConfig(InvalidShiftConfig):
    """Raised when an employee has no shift configured at classification time."""


class MissingEmployee(DomainError):
    """Raised when an operation references an unknown employee id."""


class UpstreamUnavailable(DomainError):
    """Raised when the leave or holiday collaborator cannot answer.

    The affected day is left unresolved so a later retry can classify it.
    """
