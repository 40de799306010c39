class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a request carries no logged-in user."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RecalculationError(DomainError):
    """Raised when a preview or commit of a scope cannot complete.

    The failed run (state FAILED) travels with the error when there is one.
    """

    retryable = False

    def __init__(self, message: str, *, run=None):
        super().__init__(message)
        self.run = run


class CommitConflictError(RecalculationError):
    """Another commit holds the scope; try again later."""

    retryable = True


class PersistenceError(RecalculationError):
    """Replacing a scope failed; the previously stored results are untouched."""


class RecalculationCancelled(RecalculationError):
    """Cancellation was requested before the commit started."""


class InvalidStateTransition(RecalculationError):
    """A recalculation run was asked to move to a state it cannot reach."""
