"""Shared pytest fixtures for the exercise engine test suite."""

import random
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exercises import EngineConfig, ExerciseListener
from models import (
    AttemptResult,
    Blank,
    ChoiceOption,
    CompletionCatalog,
    Item,
    MatchingCatalog,
    MatchPair,
    MultipleChoiceCatalog,
    OrderingCatalog,
    OrderingItem,
)
from logging_config import configure_logging
from settings import get_settings
from storage import init_schema


class RecordingListener(ExerciseListener):
    """Listener that records every event it receives."""

    def __init__(self):
        self.events: list[tuple] = []

    def on_item_selected(self, item_id, is_source):
        self.events.append(("selected", item_id, is_source))

    def on_match_made(self, source_id, target_id, correct):
        self.events.append(("match", source_id, target_id, correct))

    def on_item_just_matched(self, source_id):
        self.events.append(("just_matched", source_id))

    def on_attempt_completed(self, result):
        self.events.append(("completed", result))

    def on_attempt_reset(self, attempt_number):
        self.events.append(("reset", attempt_number))

    def of(self, kind: str) -> list[tuple]:
        return [event for event in self.events if event[0] == kind]


class CompletionSink:
    """Completion callback that stores every delivered result."""

    def __init__(self):
        self.results: list[AttemptResult] = []

    def __call__(self, result: AttemptResult) -> None:
        self.results.append(result)


@pytest.fixture
def matching_catalog() -> MatchingCatalog:
    """Two capitals: s1 -> t1, s2 -> t2."""
    return MatchingCatalog(
        source_items=[
            Item(id="s1", content="France"),
            Item(id="s2", content="Japan"),
        ],
        target_items=[
            Item(id="t1", content="Paris"),
            Item(id="t2", content="Tokyo"),
        ],
        correct_pairs=[
            MatchPair(source_id="s1", target_id="t1"),
            MatchPair(source_id="s2", target_id="t2"),
        ],
    )


@pytest.fixture
def three_pair_catalog() -> MatchingCatalog:
    return MatchingCatalog(
        source_items=[Item(id=f"s{i}", content=f"Source {i}") for i in range(1, 4)],
        target_items=[Item(id=f"t{i}", content=f"Target {i}") for i in range(1, 4)],
        correct_pairs=[
            MatchPair(source_id=f"s{i}", target_id=f"t{i}") for i in range(1, 4)
        ],
    )


@pytest.fixture
def ordering_catalog() -> OrderingCatalog:
    """Four items A-D whose correct order is A, B, C, D."""
    return OrderingCatalog(
        instructions="Put the letters in order",
        items=[
            OrderingItem(id=letter, text=letter, correct_position=index)
            for index, letter in enumerate("ABCD")
        ],
    )


@pytest.fixture
def completion_catalog() -> CompletionCatalog:
    return CompletionCatalog(
        text="The capital of France is _____ and of Japan is _____.",
        blanks=[
            Blank(id="b1", answer="Paris", position=0),
            Blank(id="b2", answer="Tokyo", position=1),
        ],
    )


@pytest.fixture
def single_choice_catalog() -> MultipleChoiceCatalog:
    return MultipleChoiceCatalog(
        question="What is the capital of France?",
        options=[
            ChoiceOption(id="o1", text="Paris", is_correct=True),
            ChoiceOption(id="o2", text="Lyon"),
            ChoiceOption(id="o3", text="Nice"),
        ],
    )


@pytest.fixture
def multi_choice_catalog() -> MultipleChoiceCatalog:
    return MultipleChoiceCatalog(
        question="Which are primes?",
        allow_multiple=True,
        options=[
            ChoiceOption(id="two", text="2", is_correct=True),
            ChoiceOption(id="three", text="3", is_correct=True),
            ChoiceOption(id="four", text="4"),
            ChoiceOption(id="five", text="5", is_correct=True),
        ],
    )


@pytest.fixture
def unshuffled_config() -> EngineConfig:
    """Config that keeps authored order so tests can address items by position."""
    config = EngineConfig()
    config.matching.shuffle_items = False
    config.ordering.shuffle_items = False
    return config


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def sink() -> CompletionSink:
    return CompletionSink()


@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary database with the schema initialized."""
    db_path = tmp_path / "test.db"
    init_schema(db_path)
    return db_path


@pytest.fixture(autouse=True)
def setup_logging():
    """Route engine logs to the per-test stderr and drop the sink afterwards."""
    configure_logging("DEBUG")
    yield
    logger.remove()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep environment overrides from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
