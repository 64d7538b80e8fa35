"""Exception types shared by forms, repositories and the store gateway."""

from __future__ import annotations


class SmartSpendError(Exception):
    """Base class for all application errors."""


class ValidationError(SmartSpendError):
    """Raised when user input fails validation.

    ``errors`` maps field names to the messages collected for them.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        summary = "; ".join(
            f"{field}: {' '.join(messages)}" for field, messages in self.errors.items()
        )
        super().__init__(summary or "Invalid input.")


class StoreError(SmartSpendError):
    """Base class for failures reported by the persistence store."""

    code = "store_error"


class NotFoundError(StoreError):
    """The addressed record does not exist for this owner."""

    code = "not_found"


class ConstraintViolationError(StoreError):
    """The store rejected a write because of a uniqueness or integrity rule."""

    code = "constraint_violation"


class StoreUnavailableError(StoreError):
    """The store could not be reached or failed while serving the call."""

    code = "unavailable"


class StoreTimeoutError(StoreError):
    """The call did not complete within the configured timeout."""

    code = "timeout"
