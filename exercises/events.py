"""Advisory event notifications for feedback collaborators.

Listeners receive notifications for sound, toast or animation cues. They
are purely advisory: an exception raised by a listener is logged and
never reaches the engine or the caller.
"""

from loguru import logger

from models import AttemptResult


class ExerciseListener:
    """Base class for feedback listeners. Override the hooks you need."""

    def on_item_selected(self, item_id: str, is_source: bool) -> None:
        """A tap selected an item (no store mutation)."""

    def on_match_made(self, source_id: str, target_id: str, correct: bool) -> None:
        """A source was matched to a target."""

    def on_item_just_matched(self, source_id: str) -> None:
        """Transient highlight marker for the source that was just matched."""

    def on_attempt_completed(self, result: AttemptResult) -> None:
        """The attempt reached COMPLETED."""

    def on_attempt_reset(self, attempt_number: int) -> None:
        """The attempt state was cleared."""


class EventDispatcher:
    """Fans events out to listeners, isolating the engine from their failures."""

    def __init__(self, listeners: list[ExerciseListener] | None = None):
        self.listeners: list[ExerciseListener] = list(listeners or [])

    def add(self, listener: ExerciseListener) -> None:
        self.listeners.append(listener)

    def remove(self, listener: ExerciseListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def emit(self, hook: str, *args) -> None:
        for listener in list(self.listeners):
            try:
                getattr(listener, hook)(*args)
            except Exception:
                logger.exception(
                    "Listener {} failed in {}", type(listener).__name__, hook
                )
