from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from exercises import (
    Attempt,
    CompletionAttempt,
    ExerciseListener,
    IncompleteAttemptError,
    MatchingAttempt,
    MultipleChoiceAttempt,
    OrderingAttempt,
    SelectionCoordinator,
    parse_letter_input,
)
from models import AttemptResult
from ui.components import (
    ChoiceBoard,
    CompletionBoard,
    MatchingBoard,
    OrderingBoard,
    ProgressTracker,
    ResultPanel,
    ResultsTable,
)
from ui.styles import (
    ACCENT_GOLD,
    COMPLETION_QUIT,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    SUCCESS_GREEN,
)


class PlayerUI(ExerciseListener):
    """Terminal player for exercise attempts.

    Registered as a listener on every attempt it plays, so it also acts as
    the feedback collaborator: match cues and the completion banner are
    printed from the event hooks.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Feedback hooks
    # ------------------------------------------------------------------

    def on_match_made(self, source_id: str, target_id: str, correct: bool) -> None:
        if correct:
            self.console.print(Text("✓ Great!", style=f"bold {SUCCESS_GREEN}"))
        else:
            self.console.print(Text("✗ Try again", style=f"bold {ERROR_RED}"))

    def on_attempt_completed(self, result: AttemptResult) -> None:
        self.console.print()
        self.console.print(ResultPanel(result))

    def on_attempt_reset(self, attempt_number: int) -> None:
        self.show_info(f"Starting over (attempt {attempt_number}).")

    # ------------------------------------------------------------------
    # Playing
    # ------------------------------------------------------------------

    def play(self, attempt: Attempt) -> AttemptResult | None:
        """Play an attempt until the learner stops retrying.

        Returns:
            The result of the last completed attempt, or None if the learner
            quit before completing one.
        """
        attempt.events.add(self)
        try:
            result = None
            while True:
                if not self._play_once(attempt):
                    return result
                result = attempt.result
                if not self.ask_yes_no("Try again?"):
                    return result
                attempt.reset()
        finally:
            attempt.events.remove(self)

    def _play_once(self, attempt: Attempt) -> bool:
        if isinstance(attempt, MatchingAttempt):
            return self.play_matching(attempt)
        if isinstance(attempt, OrderingAttempt):
            return self.play_ordering(attempt)
        if isinstance(attempt, CompletionAttempt):
            return self.play_completion(attempt)
        if isinstance(attempt, MultipleChoiceAttempt):
            return self.play_multiple_choice(attempt)
        raise TypeError(f"No player for {type(attempt).__name__}")

    def play_matching(self, attempt: MatchingAttempt) -> bool:
        """Tap-tap matching: letters pick sources, numbers pick targets."""
        coordinator = SelectionCoordinator(attempt)
        try:
            while not attempt.is_completed:
                self.console.print(MatchingBoard(attempt, coordinator.selection))
                user_input = self._prompt("Tap: ")

                if user_input.lower() == "q":
                    return False
                if user_input.lower() == "r":
                    self.handle_reset(attempt)
                    continue

                item_id = self._matching_item_id(attempt, user_input)
                if item_id is None:
                    self.show_error_text(
                        "Enter a letter for the left column, a number for the right "
                        "column, 'r' to reset or 'q' to quit"
                    )
                    continue
                coordinator.tap(item_id)
        finally:
            attempt.events.remove(coordinator)

        self.console.print(MatchingBoard(attempt))
        return True

    def _matching_item_id(self, attempt: MatchingAttempt, user_input: str) -> str | None:
        if user_input.isdigit():
            index = parse_letter_input(user_input, len(attempt.display_targets))
            return None if index is None else attempt.display_targets[index].id
        if user_input.isalpha():
            index = parse_letter_input(user_input, len(attempt.display_sources))
            return None if index is None else attempt.display_sources[index].id
        return None

    def play_ordering(self, attempt: OrderingAttempt) -> bool:
        """Rearrange with '<from> <to>' moves, then submit."""
        while not attempt.is_completed:
            self.console.print(OrderingBoard(attempt))
            user_input = self._prompt("Move: ")
            command = user_input.lower()

            if command == "q":
                return False
            if command == "r":
                self.handle_reset(attempt)
                continue
            if command == "s":
                attempt.submit()
                continue

            try:
                old, new = (int(x) - 1 for x in user_input.split())
                attempt.move_index(old, new)
            except (ValueError, IndexError):
                self.show_error_text(
                    f"Please enter two positions 1-{len(attempt.sequence)}, "
                    "'s' to submit, 'r' to reset or 'q' to quit"
                )

        self.console.print(OrderingBoard(attempt))
        return True

    def play_completion(self, attempt: CompletionAttempt) -> bool:
        """Prompt for every empty blank, then submit."""
        numbers = {
            blank.id: i + 1 for i, blank in enumerate(attempt.catalog.sorted_blanks())
        }
        while not attempt.is_completed:
            self.console.print(CompletionBoard(attempt))
            for blank_id in attempt.missing_blanks():
                answer = self._prompt(f"Blank {numbers[blank_id]}: ")
                if answer == COMPLETION_QUIT:
                    return False
                attempt.set_answer(blank_id, answer)

            try:
                attempt.submit()
            except IncompleteAttemptError as e:
                self.show_error_text(str(e))

        self.console.print(CompletionBoard(attempt))
        return True

    def play_multiple_choice(self, attempt: MultipleChoiceAttempt) -> bool:
        """Single choice submits on the first pick; multiple choice toggles until 's'."""
        options = attempt.catalog.options
        while not attempt.is_completed:
            self.console.print(ChoiceBoard(attempt))
            user_input = self._prompt("Your answer: ")
            command = user_input.lower()

            if command == "q":
                return False
            if command == "s":
                try:
                    attempt.submit()
                except IncompleteAttemptError as e:
                    self.show_error_text(str(e))
                continue

            index = parse_letter_input(user_input, len(options)) if user_input.isalpha() else None
            if index is None:
                self.show_error_text(
                    f"Please enter a letter A-{chr(ord('A') + len(options) - 1)} "
                    "(or 'q' to quit)"
                )
                continue

            attempt.select(options[index].id)
            if not attempt.catalog.allow_multiple:
                attempt.submit()

        self.console.print(ChoiceBoard(attempt))
        return True

    def handle_reset(self, attempt: Attempt) -> None:
        """Reset an attempt in progress, asking first if it would discard input."""
        if not attempt.request_reset():
            return
        if self.ask_yes_no("Discard your answers and start over?"):
            attempt.confirm_reset()
        else:
            attempt.cancel_reset()

    # ------------------------------------------------------------------
    # Sessions and results
    # ------------------------------------------------------------------

    def create_progress_tracker(self, total: int) -> ProgressTracker:
        """Create a new progress tracker for an assignment."""
        return ProgressTracker(total)

    def show_session_complete(self, tracker: ProgressTracker) -> None:
        self.console.print(tracker.render_session_summary())

    def show_results(self, exercise_id: str, results: list[AttemptResult]) -> None:
        if not results:
            self.show_info(f"No attempts recorded for {exercise_id}.")
            return
        self.console.print(ResultsTable(exercise_id, results))

    def show_title(self, title: str, question_number: int, total: int) -> None:
        text = Text()
        text.append(f"Question {question_number}/{total}", style=f"bold {ACCENT_GOLD}")
        if title:
            text.append(f"  {title}", style=MUTED_GRAY)
        self.console.print(text)

    # ------------------------------------------------------------------
    # Input and messages
    # ------------------------------------------------------------------

    def _prompt(self, label: str) -> str:
        return self.console.input(Text(label, style=f"bold {MUTED_GRAY}")).strip()

    def ask_yes_no(self, question: str) -> bool:
        while True:
            answer = self._prompt(f"{question} (y/n): ").lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no", "q"):
                return False
            self.show_error_text("Please enter y or n")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_error_text(self, message: str) -> None:
        self.console.print(Text(f"{message}\n", style=ERROR_RED))

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style=INFO_BLUE))

    def show_quit_message(self) -> None:
        self.console.print()
        self.console.print(Text("👋 Goodbye! Your results have been saved.", style=MUTED_GRAY))
