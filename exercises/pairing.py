"""Pairing state store for matching attempts."""

from loguru import logger

from models import MatchPair


class PairingStateStore:
    """Ordered source -> target associations for one attempt.

    Holds at most one entry per source id. Target uniqueness is only
    enforced when `unique_targets` is set; otherwise several sources may
    point at the same target.
    """

    def __init__(
        self,
        pairs: list[MatchPair] | None = None,
        unique_targets: bool = False,
    ):
        self.unique_targets = unique_targets
        self._pairs: list[MatchPair] = []
        for pair in pairs or []:
            self.upsert(pair.source_id, pair.target_id)

    def upsert(self, source_id: str, target_id: str) -> list[MatchPair]:
        """Match source_id to target_id, replacing any existing match for the source.

        An existing entry keeps its place in the sequence; a new one is
        appended. Returns the new pairing state.
        """
        if self.unique_targets:
            displaced = [
                pair.source_id
                for pair in self._pairs
                if pair.target_id == target_id and pair.source_id != source_id
            ]
            for other in displaced:
                logger.debug("Target {} taken over, unmatching {}", target_id, other)
            self._pairs = [pair for pair in self._pairs if pair.source_id not in displaced]

        for index, pair in enumerate(self._pairs):
            if pair.source_id == source_id:
                self._pairs[index] = MatchPair(source_id=source_id, target_id=target_id)
                break
        else:
            self._pairs.append(MatchPair(source_id=source_id, target_id=target_id))

        logger.debug("Matched {} -> {}", source_id, target_id)
        return self.pairs

    def remove(self, source_id: str) -> None:
        """Delete the entry for source_id if present."""
        self._pairs = [pair for pair in self._pairs if pair.source_id != source_id]

    def clear(self) -> None:
        self._pairs = []

    def get(self, source_id: str) -> str | None:
        """Return the target currently matched to source_id, if any."""
        for pair in self._pairs:
            if pair.source_id == source_id:
                return pair.target_id
        return None

    def sources_for_target(self, target_id: str) -> list[str]:
        return [pair.source_id for pair in self._pairs if pair.target_id == target_id]

    def is_target_matched(self, target_id: str) -> bool:
        return any(pair.target_id == target_id for pair in self._pairs)

    @property
    def pairs(self) -> list[MatchPair]:
        """A copy of the current entries in insertion order."""
        return list(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, source_id: object) -> bool:
        return any(pair.source_id == source_id for pair in self._pairs)
