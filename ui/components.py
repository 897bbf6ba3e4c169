from rich import box
from rich.align import Align
from rich.columns import Columns
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from exercises import (
    CompletionAttempt,
    MatchingAttempt,
    MultipleChoiceAttempt,
    OrderingAttempt,
    Selection,
)
from models import AttemptResult
from ui.styles import (
    ACCENT_GOLD,
    COMPLETION_QUIT,
    ERROR_RED,
    LABEL_STYLE,
    MUTED_GRAY,
    PRIMARY_BLUE,
    SELECTED_STYLE,
    SUCCESS_GREEN,
    TEXT_WHITE,
    correctness_mark,
    get_score_style,
    source_label,
    target_label,
)


class MatchingBoard:
    """Sources (lettered) and targets (numbered) side by side."""

    def __init__(
        self,
        attempt: MatchingAttempt,
        selection: Selection | None = None,
        title: str = "Match the pairs",
    ):
        self.attempt = attempt
        self.selection = selection
        self.title = title

    def _is_selected(self, item_id: str, is_source: bool) -> bool:
        return self.selection == Selection(id=item_id, is_source=is_source)

    def render(self) -> Panel:
        target_labels = {
            item.id: target_label(i) for i, item in enumerate(self.attempt.display_targets)
        }
        evaluation = self.attempt.evaluate() if self.attempt.is_completed else None

        sources = Text()
        for i, item in enumerate(self.attempt.display_sources):
            style = SELECTED_STYLE if self._is_selected(item.id, True) else Style(color=TEXT_WHITE)
            sources.append(f"{source_label(i)}. ", LABEL_STYLE)
            sources.append(item.content, style)
            target_id = self.attempt.get_match(item.id)
            if target_id is not None:
                sources.append(f"  → {target_labels[target_id]}", Style(color=PRIMARY_BLUE))
            if evaluation is not None:
                sources.append(" ")
                sources.append(correctness_mark(evaluation.item_results[item.id]))
            sources.append("\n")

        targets = Text()
        for i, item in enumerate(self.attempt.display_targets):
            if self._is_selected(item.id, False):
                style = SELECTED_STYLE
            elif self.attempt.is_target_matched(item.id):
                style = Style(color=MUTED_GRAY)
            else:
                style = Style(color=TEXT_WHITE)
            targets.append(f"{target_label(i)}. ", LABEL_STYLE)
            targets.append(item.content, style)
            targets.append("\n")

        return Panel(
            Columns([sources, targets], padding=(0, 6)),
            title=self.title,
            subtitle="Tap: letter or number | r reset | q quit",
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class OrderingBoard:
    """The learner's current sequence, numbered from 1."""

    def __init__(self, attempt: OrderingAttempt, title: str = "Put in the correct order"):
        self.attempt = attempt
        self.title = title

    def render(self) -> Panel:
        content = Text()
        if self.attempt.catalog.instructions:
            content.append(self.attempt.catalog.instructions, Style(color=MUTED_GRAY))
            content.append("\n\n")

        for i, item in enumerate(self.attempt.sequence):
            content.append(f"{i + 1}. ", LABEL_STYLE)
            content.append(item.text, Style(color=TEXT_WHITE))
            if self.attempt.is_completed:
                content.append(" ")
                content.append(correctness_mark(self.attempt.is_item_correct(item.id)))
            content.append("\n")

        return Panel(
            Align.left(content),
            title=self.title,
            subtitle="Move: '<from> <to>' | s submit | r reset | q quit",
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class CompletionBoard:
    """The completion text with numbered blanks."""

    def __init__(self, attempt: CompletionAttempt, title: str = "Fill in the blanks"):
        self.attempt = attempt
        self.title = title

    def render(self) -> Panel:
        content = Text()
        for segment in self.attempt.segments():
            if segment.kind == "text":
                content.append(segment.text, Style(color=TEXT_WHITE))
                continue
            answer = self.attempt.get_answer(segment.blank_id)
            label = f"[{segment.index + 1}: {answer or '____'}]"
            if self.attempt.is_completed:
                correct = self.attempt.is_answer_correct(segment.blank_id)
                content.append(label, Style(color=SUCCESS_GREEN if correct else ERROR_RED, bold=True))
            else:
                content.append(label, LABEL_STYLE)

        return Panel(
            Align.left(content),
            title=self.title,
            subtitle=f"Type each answer | {COMPLETION_QUIT} quit",
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ChoiceBoard:
    """Lettered options with the current selection marked."""

    def __init__(self, attempt: MultipleChoiceAttempt):
        self.attempt = attempt

    def render(self) -> Panel:
        catalog = self.attempt.catalog
        content = Text()
        content.append(catalog.question, Style(color=PRIMARY_BLUE, bold=True))
        content.append("\n\n")

        for i, option in enumerate(catalog.options):
            selected = option.id in self.attempt.selected
            content.append(f"{source_label(i)}. ", LABEL_STYLE)
            content.append(option.text, SELECTED_STYLE if selected else Style(color=TEXT_WHITE))
            if self.attempt.is_completed and (selected or option.is_correct):
                content.append(" ")
                content.append(correctness_mark(option.is_correct))
            content.append("\n")

        if catalog.allow_multiple:
            subtitle = "Toggle letters, s to submit, q to quit"
        else:
            subtitle = "Pick a letter, s to submit, q to quit"

        return Panel(
            Align.left(content),
            title="Choose the answer",
            subtitle=subtitle,
            border_style=PRIMARY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ResultPanel:
    """Final grade of one attempt."""

    def __init__(self, result: AttemptResult):
        self.result = result

    def render(self) -> Panel:
        content = Text()
        if self.result.all_correct:
            content.append("🎉 Great job! Everything is correct!\n", Style(color=SUCCESS_GREEN, bold=True))
        else:
            content.append("😊 Good try!\n", Style(color=ACCENT_GOLD, bold=True))

        evaluation = self.result.evaluation
        content.append("\n")
        content.append("Score: ", Style(color=MUTED_GRAY))
        content.append(f"{self.result.score}%", get_score_style(self.result.score))
        content.append(
            f"  ({evaluation.correct_count}/{evaluation.total} correct)",
            Style(color=MUTED_GRAY),
        )

        return Panel(
            Align.left(content),
            title=f"Attempt {self.result.attempt_number}",
            border_style=SUCCESS_GREEN if self.result.all_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ResultsTable:
    """Stored attempts of one exercise."""

    def __init__(self, exercise_id: str, results: list[AttemptResult]):
        self.exercise_id = exercise_id
        self.results = results

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=PRIMARY_BLUE, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )
        table.add_column("Attempt", justify="right")
        table.add_column("Kind")
        table.add_column("Score", justify="right")
        table.add_column("All correct", justify="center")

        for result in self.results:
            table.add_row(
                str(result.attempt_number),
                result.kind.value,
                Text(f"{result.score}%", style=get_score_style(result.score)),
                correctness_mark(result.all_correct),
            )

        return Panel(
            Align.center(table),
            title=f"Results for {self.exercise_id}",
            border_style=ACCENT_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ProgressTracker:
    """Track and display assignment progress."""

    def __init__(self, total: int):
        self.total = total
        self.current = 0
        self.perfect_count = 0
        self.scores: list[int] = []

    def update(self, result: AttemptResult):
        self.current += 1
        self.scores.append(result.score)
        if result.all_correct:
            self.perfect_count += 1

    @property
    def progress_percent(self) -> float:
        if self.total == 0:
            return 100.0
        return (self.current / self.total) * 100

    @property
    def average_score(self) -> int:
        if not self.scores:
            return 0
        return round(sum(self.scores) / len(self.scores))

    def render_session_summary(self) -> Panel:
        progress_bar = self._create_progress_bar()

        stats = Table(
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.SIMPLE,
        )
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")

        stats.add_row("Completed", f"{self.current}/{self.total}")
        stats.add_row(
            "Perfect",
            Text(f"{self.perfect_count}", style=Style(color=SUCCESS_GREEN)),
        )
        stats.add_row(
            "Average score",
            Text(f"{self.average_score}%", style=get_score_style(self.average_score)),
        )

        content = Text()
        content.append("Assignment Complete!\n\n", Style(color=PRIMARY_BLUE, bold=True))
        content.append(f"Progress: {progress_bar}\n", Style(color=MUTED_GRAY))

        return Panel(
            Columns(
                [Align.center(content), Align.center(stats)],
                align="center",
                padding=(0, 1),
            ),
            title="Summary",
            border_style=ACCENT_GOLD,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def _create_progress_bar(self) -> str:
        width = 30
        filled = int(width * self.progress_percent / 100)
        remaining = width - filled
        bar = "█" * filled + "░" * remaining
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render_session_summary()
