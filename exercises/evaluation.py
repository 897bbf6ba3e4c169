"""Correctness evaluators.

Every evaluator is a pure function from (learner state, catalog) to an
EvaluationResult. They never mutate their inputs and may be called at any
time; attempts call them once more at completion to produce the final score.
"""

from typing import Iterable

from models import (
    CompletionCatalog,
    EvaluationResult,
    MatchPair,
    MatchingCatalog,
    MultipleChoiceCatalog,
    OrderingItem,
)


def percent_score(correct: int, total: int) -> int:
    """Return round(100 * correct / total), rounding halves up.

    A degenerate total of zero scores 0 instead of dividing by zero.
    """
    if total <= 0:
        return 0
    correct = max(0, min(correct, total))
    # floor(100c/t + 1/2) in integer arithmetic
    return (200 * correct + total) // (2 * total)


def normalize_answer(answer: str) -> str:
    return answer.strip().lower()


def is_pair_correct(catalog: MatchingCatalog, source_id: str, target_id: str) -> bool:
    """Check whether (source_id, target_id) is in the answer key."""
    return any(
        pair.source_id == source_id and pair.target_id == target_id
        for pair in catalog.correct_pairs
    )


def evaluate_matching(
    pairs: Iterable[MatchPair], catalog: MatchingCatalog
) -> EvaluationResult:
    """Grade matching pairs against the answer key.

    Every source gets an entry in `item_results`; an unmatched source is
    incorrect. `all_correct` requires every source to hold its keyed target.
    """
    key = catalog.answer_key()
    matched = {pair.source_id: pair.target_id for pair in pairs}

    item_results = {}
    for source_id in catalog.source_ids:
        target_id = matched.get(source_id)
        item_results[source_id] = target_id is not None and key.get(source_id) == target_id

    correct_count = sum(item_results.values())
    total = len(catalog.source_items)
    return EvaluationResult(
        item_results=item_results,
        correct_count=correct_count,
        total=total,
        score=percent_score(correct_count, total),
        all_correct=correct_count == total,
    )


def evaluate_ordering(sequence: list[OrderingItem]) -> EvaluationResult:
    """Grade a learner-chosen sequence: item i is correct iff its correct position is i."""
    item_results = {
        item.id: item.correct_position == index for index, item in enumerate(sequence)
    }
    correct_count = sum(item_results.values())
    total = len(sequence)
    return EvaluationResult(
        item_results=item_results,
        correct_count=correct_count,
        total=total,
        score=percent_score(correct_count, total),
        all_correct=correct_count == total,
    )


def evaluate_completion(
    answers: dict[str, str], catalog: CompletionCatalog
) -> EvaluationResult:
    """Grade blank answers with a case- and surrounding-whitespace-insensitive exact match."""
    item_results = {}
    for blank in catalog.blanks:
        user_answer = answers.get(blank.id)
        item_results[blank.id] = user_answer is not None and normalize_answer(
            user_answer
        ) == normalize_answer(blank.answer)

    correct_count = sum(item_results.values())
    total = len(catalog.blanks)
    return EvaluationResult(
        item_results=item_results,
        correct_count=correct_count,
        total=total,
        score=percent_score(correct_count, total),
        all_correct=correct_count == total,
    )


def evaluate_multiple_choice(
    selected: Iterable[str], catalog: MultipleChoiceCatalog
) -> EvaluationResult:
    """Grade a multiple choice selection.

    Single choice scores 100 or 0. Multiple choice scores the net number of
    correct selections (correct picks minus wrong picks) against the number
    of correct options, clamped to [0, 100].
    """
    selected_ids = list(dict.fromkeys(selected))
    correct_ids = set(catalog.correct_ids)
    correct_picks = [option_id for option_id in selected_ids if option_id in correct_ids]
    wrong_picks = [option_id for option_id in selected_ids if option_id not in correct_ids]

    item_results = {
        option.id: (option.id in selected_ids) == option.is_correct
        for option in catalog.options
    }

    if not catalog.options:
        all_correct = not selected_ids
        score = 0
    elif catalog.allow_multiple:
        all_correct = len(correct_picks) == len(correct_ids) and not wrong_picks
        net = len(correct_picks) - len(wrong_picks)
        score = percent_score(max(net, 0), len(correct_ids))
    else:
        all_correct = len(selected_ids) == 1 and len(correct_picks) == 1
        score = 100 if all_correct else 0

    return EvaluationResult(
        item_results=item_results,
        correct_count=len(correct_picks),
        total=len(correct_ids),
        score=score,
        all_correct=all_correct,
    )
