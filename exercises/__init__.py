"""Exercise response and grading engine.

This package holds the learner-state side of interactive exercises: the
associations a learner builds, how input reaches them, how they are graded,
and when an attempt ends.

Architecture:
- Attempts own one learner's state and lifecycle (IN_PROGRESS -> COMPLETED)
- The pairing store holds matching associations (one entry per source)
- The selection coordinator reduces drag/drop and tap/tap input to one
  match() call
- Evaluators are pure functions from state + catalog to an EvaluationResult
- Listeners receive advisory feedback events; a failing listener never
  affects engine state
- The question adapter builds catalogs and attempts from authoring data

Attempts:
- MatchingAttempt: count-driven completion when every source is matched
- OrderingAttempt: arrange items, explicit submit
- CompletionAttempt: fill in blanks, explicit submit
- MultipleChoiceAttempt: pick one or several options, explicit submit

Configuration:
- EngineConfig: per-kind policy (unique targets, shuffling, reset confirmation)
"""

from exercises.base import Attempt, parse_letter_input
from exercises.completion import CompletionAttempt
from exercises.config import (
    CompletionConfig,
    EngineConfig,
    MatchingConfig,
    MultipleChoiceConfig,
    OrderingConfig,
    ResetConfig,
)
from exercises.errors import (
    AttemptCompletedError,
    ExerciseError,
    IncompleteAttemptError,
    InvalidCatalogError,
    ResetNotRequestedError,
    UnknownItemError,
)
from exercises.evaluation import (
    evaluate_completion,
    evaluate_matching,
    evaluate_multiple_choice,
    evaluate_ordering,
    is_pair_correct,
    percent_score,
)
from exercises.events import EventDispatcher, ExerciseListener
from exercises.matching import MatchingAttempt
from exercises.multiple_choice import MultipleChoiceAttempt
from exercises.ordering import OrderingAttempt
from exercises.pairing import PairingStateStore
from exercises.question_adapter import ATTEMPT_CLASSES, QuestionAdapter
from exercises.selection import Selection, SelectionCoordinator, TapOutcome
from exercises.templates import TemplateSegment, segment_template

__all__ = [
    # Utilities
    "parse_letter_input",
    "percent_score",
    "segment_template",
    "TemplateSegment",
    # Attempts
    "Attempt",
    "MatchingAttempt",
    "OrderingAttempt",
    "CompletionAttempt",
    "MultipleChoiceAttempt",
    "ATTEMPT_CLASSES",
    # State and input
    "PairingStateStore",
    "SelectionCoordinator",
    "Selection",
    "TapOutcome",
    # Evaluators
    "evaluate_matching",
    "evaluate_ordering",
    "evaluate_completion",
    "evaluate_multiple_choice",
    "is_pair_correct",
    # Events
    "ExerciseListener",
    "EventDispatcher",
    # Configuration
    "EngineConfig",
    "MatchingConfig",
    "OrderingConfig",
    "CompletionConfig",
    "MultipleChoiceConfig",
    "ResetConfig",
    # Errors
    "ExerciseError",
    "InvalidCatalogError",
    "UnknownItemError",
    "AttemptCompletedError",
    "IncompleteAttemptError",
    "ResetNotRequestedError",
    # Authoring adapter
    "QuestionAdapter",
]
