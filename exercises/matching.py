"""Matching attempts: pair each source item with a target item."""

import random

from loguru import logger

from exercises.base import Attempt, CompletionCallback
from exercises.config import EngineConfig
from exercises.errors import UnknownItemError
from exercises.evaluation import evaluate_matching, is_pair_correct
from exercises.events import ExerciseListener
from exercises.pairing import PairingStateStore
from models import (
    AttemptResult,
    EvaluationResult,
    ExerciseKind,
    Item,
    MatchingCatalog,
    MatchingResponse,
    MatchPair,
    ResponsePair,
)


class MatchingAttempt(Attempt[MatchingCatalog]):
    """A matching attempt.

    Completion is count driven: as soon as every source holds some match
    (correct or not) the attempt completes and the final grade is emitted.
    """

    kind = ExerciseKind.MATCHING

    def __init__(
        self,
        exercise_id: str,
        catalog: MatchingCatalog,
        config: EngineConfig | None = None,
        listeners: list[ExerciseListener] | None = None,
        on_complete: CompletionCallback | None = None,
        rng: random.Random | None = None,
        initial_matches: list[MatchPair] | None = None,
    ):
        super().__init__(exercise_id, catalog, config, listeners, on_complete, rng)
        self._source_ids = set(catalog.source_ids)
        self._target_ids = set(catalog.target_ids)

        for pair in initial_matches or []:
            self._check_ids(pair.source_id, pair.target_id)
        self.store = PairingStateStore(
            initial_matches, unique_targets=self.config.matching.unique_targets
        )
        self.display_sources, self.display_targets = self._display_order()

    def _display_order(self) -> tuple[list[Item], list[Item]]:
        sources = list(self.catalog.source_items)
        targets = list(self.catalog.target_items)
        if self.config.matching.shuffle_items:
            self.rng.shuffle(sources)
            self.rng.shuffle(targets)
        return sources, targets

    def _check_ids(self, source_id: str, target_id: str | None = None) -> None:
        if source_id not in self._source_ids:
            raise UnknownItemError(source_id, "source")
        if target_id is not None and target_id not in self._target_ids:
            raise UnknownItemError(target_id, "target")

    def is_source(self, item_id: str) -> bool:
        return item_id in self._source_ids

    def is_target(self, item_id: str) -> bool:
        return item_id in self._target_ids

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def match(self, source_id: str, target_id: str) -> AttemptResult | None:
        """Upsert source_id -> target_id and fire completion if every source is matched.

        Returns the AttemptResult if this match completed the attempt.
        """
        self.ensure_in_progress("match")
        self._check_ids(source_id, target_id)

        self.store.upsert(source_id, target_id)
        correct = is_pair_correct(self.catalog, source_id, target_id)
        self.events.emit("on_item_just_matched", source_id)
        self.events.emit("on_match_made", source_id, target_id, correct)

        if self.catalog.source_items and len(self.store) >= len(self.catalog.source_items):
            return self._complete()
        return None

    def unmatch(self, source_id: str) -> None:
        self.ensure_in_progress("unmatch")
        self._check_ids(source_id)
        self.store.remove(source_id)
        logger.debug("Unmatched {}", source_id)

    def _clear_state(self, new_attempt: bool) -> None:
        self.store.clear()
        if new_attempt:
            self.display_sources, self.display_targets = self._display_order()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def matches(self) -> list[MatchPair]:
        return self.store.pairs

    def get_match(self, source_id: str) -> str | None:
        return self.store.get(source_id)

    def is_target_matched(self, target_id: str) -> bool:
        return self.store.is_target_matched(target_id)

    def sources_for_target(self, target_id: str) -> list[str]:
        return self.store.sources_for_target(target_id)

    def unmatched_sources(self) -> list[Item]:
        return [item for item in self.display_sources if item.id not in self.store]

    def unmatched_targets(self) -> list[Item]:
        return [
            item
            for item in self.display_targets
            if not self.store.is_target_matched(item.id)
        ]

    def is_match_correct(self, source_id: str) -> bool:
        target_id = self.store.get(source_id)
        return target_id is not None and is_pair_correct(self.catalog, source_id, target_id)

    def evaluate(self) -> EvaluationResult:
        return evaluate_matching(self.store.pairs, self.catalog)

    def to_response(self) -> MatchingResponse:
        return MatchingResponse(
            pairs=[
                ResponsePair(left_id=pair.source_id, right_id=pair.target_id)
                for pair in self.store.pairs
            ]
        )

    def has_progress(self) -> bool:
        return len(self.store) > 0
