class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedEvent(DomainError):
    """Raised when a device event fails validation.

    Carries every reason so the webhook can acknowledge with a readable message.
    """

    def __init__(self, reasons):
        self.reasons = list(reasons)
        super().__init__(", ".join(self.reasons))


class DuplicateEvent(DomainError):
    """Raised when a device event was already seen in the recent-event window."""


class NoEmployeeMatch(DomainError):
    """Raised when the device subject id does not match an active employee."""


class NoShiftAssigned(DomainError):
    """Raised when neither a published roster nor a default shift applies."""


class StoreConflict(DomainError):
    """Raised by a repository when an insert violates the uniqueness contract."""


class PersistenceFailure(Exception):
    """Unexpected storage error. The only failure surfaced to the device."""
