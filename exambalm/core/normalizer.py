"""
Record normalization.

Turns the parsed response object into typed question drafts: every draft
gets a fresh id, an unknown ``type`` falls back to a safe default, and the
collection fields are always lists. Everything else passes through as sent.
"""

import logging
import random
import string
import time
from typing import Any, Optional

from ..security.limits import LimitValidator
from ..utils.config import PipelineConfig
from .models import GenerationResult, MatchingPair, QuestionDraft, QuestionType

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits

# Wire keys consumed into named QuestionDraft fields; the rest go to ``extra``.
_KNOWN_KEYS = frozenset(
    {
        "id",
        "text",
        "marks",
        "difficulty",
        "topic",
        "type",
        "options",
        "matchingPairs",
        "markingScheme",
        "bloomsLevel",
        "unit",
    }
)


class IdGenerator:
    """Issues ``<prefix>-<millis>-<suffix>`` ids, unique within one batch."""

    def __init__(self, prefix: str = "ai", rng: Optional[random.Random] = None):
        self.prefix = prefix
        self._rng = rng or random.Random()
        self._issued: set[str] = set()

    def reserve(self, identifier: str) -> bool:
        """Mark ``identifier`` as used. Returns False if it already was."""
        if identifier in self._issued:
            return False
        self._issued.add(identifier)
        return True

    def next_id(self) -> str:
        while True:
            suffix = "".join(self._rng.choices(_ID_ALPHABET, k=9))
            identifier = f"{self.prefix}-{int(time.time() * 1000)}-{suffix}"
            if self.reserve(identifier):
                return identifier


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _coerce_number(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    candidate = value.strip()
    try:
        return int(candidate)
    except ValueError:
        pass
    try:
        return float(candidate)
    except ValueError:
        return value


class RecordNormalizer:
    """Builds a GenerationResult from a parsed response object."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        if self.config.fallback_type not in QuestionType.values():
            raise ValueError(
                f"Unsupported fallback type: {self.config.fallback_type!r}"
            )
        self.validator = LimitValidator(self.config.limits)

    def normalize(self, data: dict[str, Any]) -> GenerationResult:
        """
        Normalize a parsed response.

        A missing or null ``questions`` array yields an empty result, not an
        error.

        Raises:
            SecurityError: if the response carries more questions than allowed
        """
        title = data.get("suggestedTitle") or self.config.default_title
        questions = self.normalize_questions(data.get("questions"))
        return GenerationResult(suggested_title=str(title), questions=questions)

    def normalize_questions(self, raw: Any) -> tuple[QuestionDraft, ...]:
        if raw is None:
            return ()
        if not isinstance(raw, list):
            logger.debug(
                f"Ignoring non-list questions value of type {type(raw).__name__}"
            )
            return ()

        self.validator.validate_question_count(len(raw))

        ids = IdGenerator(self.config.id_prefix)
        drafts = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                logger.debug(f"Skipping question {index}: not an object")
                continue
            drafts.append(self.normalize_question(item, ids))
        return tuple(drafts)

    def normalize_question(
        self, item: dict[str, Any], ids: Optional[IdGenerator] = None
    ) -> QuestionDraft:
        ids = ids or IdGenerator(self.config.id_prefix)

        question_type = item.get("type")
        if (
            not isinstance(question_type, str)
            or question_type not in QuestionType.values()
        ):
            logger.debug(
                f"Unknown question type {question_type!r}; "
                f"using {self.config.fallback_type!r}"
            )
            question_type = self.config.fallback_type

        marks = item.get("marks")
        if self.config.coerce_marks:
            marks = _coerce_number(marks)

        return QuestionDraft(
            id=ids.next_id(),
            text=item.get("text"),
            marks=marks,
            difficulty=item.get("difficulty"),
            topic=item.get("topic"),
            type=question_type,
            options=_as_list(item.get("options")),
            matching_pairs=self._matching_pairs(item.get("matchingPairs")),
            marking_scheme=item.get("markingScheme"),
            blooms_level=item.get("bloomsLevel"),
            unit=item.get("unit"),
            extra={k: v for k, v in item.items() if k not in _KNOWN_KEYS},
        )

    @staticmethod
    def _matching_pairs(raw: Any) -> list[MatchingPair]:
        pairs = []
        for entry in _as_list(raw):
            if isinstance(entry, dict):
                pairs.append(
                    MatchingPair(left=entry.get("left"), right=entry.get("right"))
                )
            else:
                logger.debug(f"Skipping matching pair that is not an object: {entry!r}")
        return pairs
