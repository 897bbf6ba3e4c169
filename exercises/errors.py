"""Exceptions raised by the exercise engine."""


class ExerciseError(Exception):
    """Base class for exercise engine errors."""


class InvalidCatalogError(ExerciseError, ValueError):
    """The item catalog or answer key is inconsistent."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid catalog: {'; '.join(errors)}")


class UnknownItemError(ExerciseError, ValueError):
    """A mutation referenced an id that is not part of the catalog."""

    def __init__(self, item_id: str, role: str = "item"):
        self.item_id = item_id
        self.role = role
        super().__init__(f"Unknown {role} id: {item_id}")


class AttemptCompletedError(ExerciseError, RuntimeError):
    """A mutation was attempted after the attempt completed."""


class IncompleteAttemptError(ExerciseError, ValueError):
    """An explicit submit was rejected because required input is missing."""

    def __init__(self, message: str, missing: list[str] | None = None):
        self.missing = missing or []
        super().__init__(message)


class ResetNotRequestedError(ExerciseError):
    """confirm_reset() was called without a pending reset request."""
