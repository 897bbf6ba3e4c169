"""Exercise Player UI Module - terminal interface for playing exercises."""

from ui.app import PlayerUI
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
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    PRIMARY_BLUE,
    SUCCESS_GREEN,
)

__all__ = [
    "PlayerUI",
    "MatchingBoard",
    "OrderingBoard",
    "CompletionBoard",
    "ChoiceBoard",
    "ResultPanel",
    "ResultsTable",
    "ProgressTracker",
    "PRIMARY_BLUE",
    "ACCENT_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
