"""Ordering attempts: arrange items into their correct sequence."""

import random

from loguru import logger

from exercises.base import Attempt, CompletionCallback
from exercises.config import EngineConfig
from exercises.errors import UnknownItemError
from exercises.evaluation import evaluate_ordering
from exercises.events import ExerciseListener
from models import (
    AttemptResult,
    EvaluationResult,
    ExerciseKind,
    OrderedItemResponse,
    OrderingCatalog,
    OrderingItem,
    OrderingResponse,
)


class OrderingAttempt(Attempt[OrderingCatalog]):
    """An ordering attempt.

    The learner's sequence is always a permutation of the catalog items.
    Completion is an explicit submit().
    """

    kind = ExerciseKind.ORDERING

    def __init__(
        self,
        exercise_id: str,
        catalog: OrderingCatalog,
        config: EngineConfig | None = None,
        listeners: list[ExerciseListener] | None = None,
        on_complete: CompletionCallback | None = None,
        rng: random.Random | None = None,
        initial_order: list[str] | None = None,
    ):
        super().__init__(exercise_id, catalog, config, listeners, on_complete, rng)
        self._items_by_id = {item.id: item for item in catalog.items}
        self._moved = False

        if initial_order:
            self.sequence = self._sequence_from_ids(initial_order)
        elif self.config.ordering.shuffle_items:
            self.sequence = self._shuffled()
        else:
            self.sequence = list(catalog.items)

    def _sequence_from_ids(self, order: list[str]) -> list[OrderingItem]:
        for item_id in order:
            if item_id not in self._items_by_id:
                raise UnknownItemError(item_id)
        if sorted(order) != sorted(self._items_by_id):
            raise ValueError(
                f"Initial order must list every item exactly once, got {order}"
            )
        return [self._items_by_id[item_id] for item_id in order]

    def _shuffled(self, avoid: list[OrderingItem] | None = None) -> list[OrderingItem]:
        """Return a random permutation, different from `avoid` when possible."""
        sequence = list(self.catalog.items)
        self.rng.shuffle(sequence)
        if avoid is not None and len(sequence) > 1:
            while sequence == avoid:
                self.rng.shuffle(sequence)
        return sequence

    def index_of(self, item_id: str) -> int:
        for index, item in enumerate(self.sequence):
            if item.id == item_id:
                return index
        raise UnknownItemError(item_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def move_index(self, old_index: int, new_index: int) -> list[OrderingItem]:
        """Remove the item at old_index and insert it at new_index."""
        self.ensure_in_progress("move")
        size = len(self.sequence)
        if not (0 <= old_index < size and 0 <= new_index < size):
            raise IndexError(f"Move {old_index} -> {new_index} out of range for {size} items")

        sequence = list(self.sequence)
        item = sequence.pop(old_index)
        sequence.insert(new_index, item)
        self.sequence = sequence
        self._moved = True
        logger.debug("Moved {} from {} to {}", item.id, old_index, new_index)
        return list(self.sequence)

    def move(self, active_id: str, over_id: str | None) -> list[OrderingItem]:
        """Drop active_id onto the slot held by over_id.

        Dropping outside any item or onto itself leaves the sequence alone.
        """
        self.ensure_in_progress("move")
        if over_id is None or active_id == over_id:
            return list(self.sequence)
        return self.move_index(self.index_of(active_id), self.index_of(over_id))

    def submit(self) -> AttemptResult:
        return self._complete()

    def _clear_state(self, new_attempt: bool) -> None:
        if self.config.ordering.reshuffle_on_reset:
            self.sequence = self._shuffled(avoid=self.sequence)
        else:
            self.sequence = list(self.catalog.items)
        self._moved = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_item_correct(self, item_id: str) -> bool:
        return self._items_by_id[item_id].correct_position == self.index_of(item_id)

    def correct_sequence(self) -> list[OrderingItem]:
        return sorted(self.catalog.items, key=lambda item: item.correct_position)

    def evaluate(self) -> EvaluationResult:
        return evaluate_ordering(self.sequence)

    def to_response(self) -> OrderingResponse:
        return OrderingResponse(
            ordered_items=[
                OrderedItemResponse(id=item.id, position=index)
                for index, item in enumerate(self.sequence)
            ]
        )

    def has_progress(self) -> bool:
        return self._moved
