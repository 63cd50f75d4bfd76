"""
Helpers for callers that combine several generation results.

Questions for one paper are often requested in independent batches (for
example Easy, Medium and Difficult in parallel) and tagged with the filters
the request was made with. These helpers do that post-processing without
mutating their inputs.
"""

from collections.abc import Iterable, Mapping
from typing import Optional, Union

from .models import Difficulty, GenerationResult, QuestionDraft
from .normalizer import IdGenerator

ALL = "All"

# The generation UI labels the top band "Hard".
_DIFFICULTY_ALIASES = {"hard": Difficulty.DIFFICULT}

_TAG_FIELDS = ("curriculum", "subject", "term", "grade")


def apply_filters(
    questions: Iterable[QuestionDraft], filters: Mapping[str, Optional[str]]
) -> tuple[QuestionDraft, ...]:
    """
    Tag drafts with the filters their request was made with.

    ``curriculum``, ``subject``, ``term`` and ``grade`` are stored on each
    draft unless the filter value is ``"All"`` (or missing). ``topic``
    replaces the draft's own topic unless it is ``"All"``.
    """
    tagged = []
    for question in questions:
        extra = dict(question.extra)
        for name in _TAG_FIELDS:
            value = filters.get(name)
            if value is not None and value != ALL:
                extra[name] = value
            else:
                extra.pop(name, None)

        topic = filters.get("topic")
        tagged.append(
            question.with_updates(
                extra=extra,
                topic=topic if topic is not None and topic != ALL else question.topic,
            )
        )
    return tuple(tagged)


def merge_batches(
    batches: Mapping[Union[Difficulty, str], GenerationResult],
    id_prefix: str = "ai",
    default_title: str = "Untitled Exam",
) -> GenerationResult:
    """
    Merge independently generated batches keyed by difficulty.

    Each batch's drafts are stamped with its difficulty. Ids stay unique
    across the merged result; a draft whose id collides with an earlier one
    is re-issued. The title is the first one not reporting an error. Failed
    batches contribute no questions; the merge fails only if every batch did.

    Keys match difficulty names case-insensitively, and "Hard" stands for
    Difficult.

    Raises:
        ValueError: if a key names no known difficulty
    """
    ids = IdGenerator(id_prefix)
    merged: list[QuestionDraft] = []
    title: Optional[str] = None
    errors = []

    for difficulty, result in batches.items():
        if result.failed:
            errors.append(result.error or result.suggested_title)
            continue
        if title is None:
            title = result.suggested_title

        level = _as_difficulty(difficulty)
        for question in result.questions:
            identifier = question.id if ids.reserve(question.id) else ids.next_id()
            merged.append(question.with_updates(id=identifier, difficulty=level.value))

    if title is None and errors:
        return GenerationResult.failure("; ".join(errors))
    return GenerationResult(
        suggested_title=title or default_title, questions=tuple(merged)
    )


def _as_difficulty(key: Union[Difficulty, str]) -> Difficulty:
    if isinstance(key, Difficulty):
        return key
    name = str(key).strip().lower()
    for level in Difficulty:
        if level.value.lower() == name:
            return level
    if name in _DIFFICULTY_ALIASES:
        return _DIFFICULTY_ALIASES[name]
    raise ValueError(f"Unknown difficulty: {key!r}")
