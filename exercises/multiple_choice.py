"""Multiple choice attempts (single or multiple selection)."""

import random

from exercises.base import Attempt, CompletionCallback
from exercises.config import EngineConfig
from exercises.errors import IncompleteAttemptError, UnknownItemError
from exercises.evaluation import evaluate_multiple_choice
from exercises.events import ExerciseListener
from models import (
    AttemptResult,
    EvaluationResult,
    ExerciseKind,
    MultipleChoiceCatalog,
    MultipleChoiceResponse,
)


class MultipleChoiceAttempt(Attempt[MultipleChoiceCatalog]):
    kind = ExerciseKind.MULTIPLE_CHOICE

    def __init__(
        self,
        exercise_id: str,
        catalog: MultipleChoiceCatalog,
        config: EngineConfig | None = None,
        listeners: list[ExerciseListener] | None = None,
        on_complete: CompletionCallback | None = None,
        rng: random.Random | None = None,
        initial_selections: list[str] | None = None,
    ):
        super().__init__(exercise_id, catalog, config, listeners, on_complete, rng)
        self._option_ids = [option.id for option in catalog.options]
        self.selected: list[str] = []
        for option_id in initial_selections or []:
            self.select(option_id)

    def select(self, option_id: str) -> list[str]:
        """Select an option.

        Single choice replaces the selection; multiple choice toggles the
        option in or out of it.
        """
        self.ensure_in_progress("select")
        if option_id not in self._option_ids:
            raise UnknownItemError(option_id, "option")

        if not self.catalog.allow_multiple:
            self.selected = [option_id]
        elif option_id in self.selected:
            self.selected = [o for o in self.selected if o != option_id]
        else:
            self.selected = [*self.selected, option_id]
        return list(self.selected)

    def submit(self) -> AttemptResult:
        self.ensure_in_progress("submit")
        if not self.selected and self.config.multiple_choice.require_selection:
            raise IncompleteAttemptError("Please select an option")
        return self._complete()

    def _clear_state(self, new_attempt: bool) -> None:
        self.selected = []

    def evaluate(self) -> EvaluationResult:
        return evaluate_multiple_choice(self.selected, self.catalog)

    def to_response(self) -> MultipleChoiceResponse:
        return MultipleChoiceResponse(selected_options=list(self.selected))

    def has_progress(self) -> bool:
        return bool(self.selected)
