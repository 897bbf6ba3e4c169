"""Abstract repository interfaces for the storage layer."""

from abc import ABC, abstractmethod

from models import AttemptResult, InteractiveQuestion


class QuestionRepository(ABC):
    """Abstract interface for authoring-system question storage."""

    @abstractmethod
    def add(self, question: InteractiveQuestion) -> None:
        """Insert or replace a question.

        Args:
            question: The question record to store.
        """
        pass

    @abstractmethod
    def get_by_id(self, question_id: str) -> InteractiveQuestion | None:
        """Load a single question by ID.

        Args:
            question_id: The question ID.

        Returns:
            The question, or None if not found.
        """
        pass

    @abstractmethod
    def get_for_assignment(self, assignment_id: str) -> list[InteractiveQuestion]:
        """Load the questions of an assignment in display order.

        Args:
            assignment_id: The assignment ID.

        Returns:
            List of questions sorted by their order field.
        """
        pass


class AttemptResultRepository(ABC):
    """Abstract interface for completed attempt storage.

    This is the persistence collaborator: it receives AttemptResult events
    and writes them to durable storage.
    """

    @abstractmethod
    def record(self, result: AttemptResult) -> None:
        """Store a completed attempt.

        Args:
            result: The result emitted by the attempt's completion trigger.
        """
        pass

    @abstractmethod
    def get_for_exercise(self, exercise_id: str) -> list[AttemptResult]:
        """Load every stored attempt of an exercise, oldest first."""
        pass

    @abstractmethod
    def get_latest(self, exercise_id: str) -> AttemptResult | None:
        """Load the most recent attempt of an exercise, if any."""
        pass

    @abstractmethod
    def best_score(self, exercise_id: str) -> int | None:
        """Return the highest recorded score, or None without attempts."""
        pass
