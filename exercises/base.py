"""Abstract base class and shared utilities for exercise attempts."""

import random
from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel

from exercises.config import EngineConfig
from exercises.errors import (
    AttemptCompletedError,
    InvalidCatalogError,
    ResetNotRequestedError,
)
from exercises.events import EventDispatcher, ExerciseListener
from models import (
    AttemptResult,
    AttemptStatus,
    EvaluationResult,
    ExerciseKind,
    ExerciseResponse,
)

C = TypeVar("C", bound=BaseModel)

CompletionCallback = Callable[[AttemptResult], None]


class Attempt(ABC, Generic[C]):
    """One learner's run through a single exercise.

    The attempt owns the learner state for its catalog and drives the
    lifecycle IN_PROGRESS -> COMPLETED. Completion fires exactly once per
    attempt; only reset() returns a completed attempt to IN_PROGRESS, as a
    new attempt with a fresh state.

    To create a new exercise kind:
    1. Add a catalog model with a validate_catalog() method in models.py
    2. Add an evaluator in exercises/evaluation.py
    3. Subclass Attempt[YourCatalog] and implement the abstract methods
    4. Register it in ATTEMPT_CLASSES in exercises/question_adapter.py
    """

    kind: ExerciseKind

    def __init__(
        self,
        exercise_id: str,
        catalog: C,
        config: EngineConfig | None = None,
        listeners: list[ExerciseListener] | None = None,
        on_complete: CompletionCallback | None = None,
        rng: random.Random | None = None,
    ):
        valid, errors = catalog.validate_catalog()
        if not valid:
            raise InvalidCatalogError(errors)

        self.exercise_id = exercise_id
        self.catalog = catalog
        self.config = config or EngineConfig()
        self.events = EventDispatcher(listeners)
        self.on_complete = on_complete
        self.rng = rng or random.Random()

        self.status = AttemptStatus.IN_PROGRESS
        self.attempt_number = 1
        self.result: AttemptResult | None = None
        self.reset_pending = False

    @property
    def is_completed(self) -> bool:
        return self.status == AttemptStatus.COMPLETED

    @abstractmethod
    def evaluate(self) -> EvaluationResult:
        """Grade the current state. Pure: never changes the attempt."""
        ...

    @abstractmethod
    def to_response(self) -> ExerciseResponse:
        """Export the current state as the stored response payload."""
        ...

    @abstractmethod
    def has_progress(self) -> bool:
        """Return True if a reset would discard learner input."""
        ...

    @abstractmethod
    def _clear_state(self, new_attempt: bool) -> None:
        """Replace the learner state with a fresh one in a single assignment."""
        ...

    def ensure_in_progress(self, action: str) -> None:
        if self.is_completed:
            logger.warning(
                "Rejected {} on completed attempt {} of {}",
                action,
                self.attempt_number,
                self.exercise_id,
            )
            raise AttemptCompletedError(
                f"Cannot {action}: attempt {self.attempt_number} of "
                f"{self.exercise_id} is already completed"
            )

    def _complete(self) -> AttemptResult:
        """Transition to COMPLETED and deliver the final result exactly once."""
        self.ensure_in_progress("complete")

        evaluation = self.evaluate()
        result = AttemptResult(
            exercise_id=self.exercise_id,
            kind=self.kind,
            attempt_number=self.attempt_number,
            all_correct=evaluation.all_correct,
            score=evaluation.score,
            evaluation=evaluation,
            response=self.to_response().model_dump(),
        )
        self.status = AttemptStatus.COMPLETED
        self.result = result
        self.reset_pending = False
        logger.info(
            "Attempt {} of {} completed: score={} all_correct={}",
            self.attempt_number,
            self.exercise_id,
            result.score,
            result.all_correct,
        )

        self.events.emit("on_attempt_completed", result)
        if self.on_complete is not None:
            self.on_complete(result)
        return result

    # ------------------------------------------------------------------
    # Retry / reset
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Clear the learner state.

        On a completed attempt this starts a new attempt (IN_PROGRESS, next
        attempt number). On an attempt in progress it is a plain clear.
        """
        new_attempt = self.is_completed
        self._clear_state(new_attempt)
        if new_attempt:
            self.attempt_number += 1
            self.status = AttemptStatus.IN_PROGRESS
            self.result = None
        self.reset_pending = False

        logger.info("Reset {} (attempt {})", self.exercise_id, self.attempt_number)
        self.events.emit("on_attempt_reset", self.attempt_number)

    def request_reset(self) -> bool:
        """Ask to clear an attempt in progress.

        Returns True if the reset is waiting for confirm_reset(), False if it
        was applied immediately because there was nothing to discard.
        """
        self.ensure_in_progress("reset")
        if self.config.reset.require_confirmation and self.has_progress():
            self.reset_pending = True
            return True
        self.reset()
        return False

    def confirm_reset(self) -> None:
        if not self.reset_pending:
            raise ResetNotRequestedError(
                f"No reset was requested for {self.exercise_id}"
            )
        self.ensure_in_progress("reset")
        self.reset()

    def cancel_reset(self) -> None:
        self.reset_pending = False


def parse_letter_input(user_input: str, max_options: int = 4) -> int | None:
    """Parse letter (A-Z) or number (1-N) input to 0-based index.

    Args:
        user_input: Raw user input string.
        max_options: Maximum number of valid options.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()

    if len(user_input) == 1 and "A" <= user_input <= "Z":
        index = ord(user_input) - ord("A")
    elif user_input.isdigit():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index
