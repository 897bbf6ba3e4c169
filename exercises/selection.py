"""Selection coordinator: turns drag/drop and tap/tap input into store mutations.

Both interaction protocols end in the same MatchingAttempt.match() call, so
grading and completion never depend on how the learner made a match.

Drag protocol: drag_begin(source_id) then drop(target_id). A drop always
upserts, so a matched source can be re-matched and a target can receive
several sources (unless the attempt enforces unique targets).

Tap protocol: a scratch selection, separate from the pairing state, is
updated by each tap:
- tap on an already matched item selects it (or deselects it if it was
  the selection); a matched source also loses its current match
- tap with nothing selected selects the item
- tap on the selected item deselects it
- tap on another item on the same side switches the selection
- tap on the opposite side matches the two items and clears the selection
"""

from enum import Enum

from loguru import logger
from pydantic import BaseModel

from exercises.errors import UnknownItemError
from exercises.events import ExerciseListener
from exercises.matching import MatchingAttempt


class TapOutcome(str, Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    SWITCHED = "switched"
    PRIMED = "primed"  # Matched item selected for reassignment
    MATCHED = "matched"


class Selection(BaseModel):
    id: str
    is_source: bool


class SelectionCoordinator(ExerciseListener):
    """Normalizes learner input for one matching attempt."""

    def __init__(self, attempt: MatchingAttempt):
        self.attempt = attempt
        self.selection: Selection | None = None
        self.dragging: str | None = None
        attempt.events.add(self)

    def on_attempt_reset(self, attempt_number: int) -> None:
        self.selection = None
        self.dragging = None

    def _side(self, item_id: str) -> bool:
        """Return True for a source id, False for a target id."""
        if self.attempt.is_source(item_id):
            return True
        if self.attempt.is_target(item_id):
            return False
        raise UnknownItemError(item_id)

    def _select(self, item_id: str, is_source: bool) -> None:
        self.selection = Selection(id=item_id, is_source=is_source)
        self.attempt.events.emit("on_item_selected", item_id, is_source)

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    def drag_begin(self, source_id: str) -> None:
        self.attempt.ensure_in_progress("drag")
        if not self.attempt.is_source(source_id):
            raise UnknownItemError(source_id, "source")
        self.dragging = source_id

    def drag_cancel(self) -> None:
        self.dragging = None

    def drop(self, target_id: str | None) -> bool:
        """Release the dragged source over target_id.

        Returns True if a match was made. Dropping outside any target, or
        without a drag in progress, does nothing.
        """
        source_id, self.dragging = self.dragging, None
        if source_id is None or target_id is None or target_id == source_id:
            return False
        self.attempt.match(source_id, target_id)
        return True

    # ------------------------------------------------------------------
    # Tap to select
    # ------------------------------------------------------------------

    def tap(self, item_id: str) -> TapOutcome:
        self.attempt.ensure_in_progress("tap")
        is_source = self._side(item_id)
        tapped = Selection(id=item_id, is_source=is_source)

        if is_source:
            already_matched = self.attempt.get_match(item_id) is not None
        else:
            already_matched = self.attempt.is_target_matched(item_id)

        if already_matched:
            if self.selection == tapped:
                self.selection = None
                return TapOutcome.DESELECTED
            self._select(item_id, is_source)
            if is_source:
                self.attempt.unmatch(item_id)
            logger.debug("Primed {} for reassignment", item_id)
            return TapOutcome.PRIMED

        if self.selection is None:
            self._select(item_id, is_source)
            return TapOutcome.SELECTED

        if self.selection == tapped:
            self.selection = None
            return TapOutcome.DESELECTED

        if self.selection.is_source == is_source:
            self._select(item_id, is_source)
            return TapOutcome.SWITCHED

        if is_source:
            source_id, target_id = item_id, self.selection.id
        else:
            source_id, target_id = self.selection.id, item_id
        self.selection = None
        self.attempt.match(source_id, target_id)
        return TapOutcome.MATCHED
