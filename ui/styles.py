from rich.style import Style
from rich.text import Text

PRIMARY_BLUE = "#3B82F6"
ACCENT_GOLD = "#F59E0B"
SUCCESS_GREEN = "#22C55E"
ERROR_RED = "#EF4444"
INFO_BLUE = "#06B6D4"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

SELECTED_STYLE = Style(color=ACCENT_GOLD, bold=True, reverse=True)
LABEL_STYLE = Style(color=ACCENT_GOLD, bold=True)

# Quit command at blank prompts, where "q" may be a real answer
COMPLETION_QUIT = ":q"


def get_score_style(score: int) -> Style:
    """Get color style based on a 0-100 score."""
    if score >= 80:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif score >= 50:
        return Style(color=ACCENT_GOLD)
    else:
        return Style(color=ERROR_RED)


def correctness_mark(is_correct: bool) -> Text:
    if is_correct:
        return Text("✓", style=Style(color=SUCCESS_GREEN, bold=True))
    return Text("✗", style=Style(color=ERROR_RED, bold=True))


def source_label(index: int) -> str:
    """Label for the index-th source or option: A, B, C, ..."""
    return chr(ord("A") + index)


def target_label(index: int) -> str:
    """Label for the index-th target: 1, 2, 3, ..."""
    return str(index + 1)
