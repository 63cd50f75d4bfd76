"""
Typed records produced by the pipeline.

All records are frozen dataclasses created fresh for every call. The
``to_dict`` methods emit the camelCase wire shape used by the rest of the
application (``suggestedTitle``, ``matchingPairs``, ``markingScheme``...).
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

ERROR_PREFIX = "Error:"
PARSE_FAILURE_TITLE = "Error: Failed to parse AI response"
LIMIT_FAILURE_TITLE = "Error: AI response exceeds limits"


class QuestionType(str, Enum):
    """Question types the application knows how to render."""

    MULTIPLE_CHOICE = "Multiple Choice"
    TRUE_FALSE = "True/False"
    MATCHING = "Matching"
    FILL_IN_THE_BLANK = "Fill-in-the-blank"
    NUMERIC = "Numeric"
    STRUCTURED = "Structured"
    SHORT_ANSWER = "Short Answer"
    ESSAY = "Essay"
    PRACTICAL = "Practical"
    ORAL = "Oral"

    @classmethod
    def values(cls) -> frozenset[str]:
        return frozenset(member.value for member in cls)


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    DIFFICULT = "Difficult"


class BloomsLevel(str, Enum):
    KNOWLEDGE = "Knowledge"
    UNDERSTANDING = "Understanding"
    APPLICATION = "Application"
    ANALYSIS = "Analysis"
    EVALUATION = "Evaluation"
    CREATION = "Creation"


@dataclass(frozen=True)
class MatchingPair:
    """One row of a matching question."""

    left: Any
    right: Any

    def to_dict(self) -> dict[str, Any]:
        return {"left": self.left, "right": self.right}


# Keys of the wire format that map onto named QuestionDraft fields.
_WIRE_FIELDS = {
    "id": "id",
    "text": "text",
    "marks": "marks",
    "difficulty": "difficulty",
    "topic": "topic",
    "type": "type",
    "options": "options",
    "matchingPairs": "matching_pairs",
    "markingScheme": "marking_scheme",
    "bloomsLevel": "blooms_level",
    "unit": "unit",
}


@dataclass(frozen=True)
class QuestionDraft:
    """
    A normalized question prior to any downstream validation.

    ``type`` is always a member of :class:`QuestionType`; ``options`` and
    ``matching_pairs`` are always lists. Scalar fields hold whatever the model
    sent (``None`` when absent). Fields outside the known schema, such as
    ``subtopic`` or ``graphSvg``, are kept verbatim in ``extra``.
    """

    id: str
    text: Any = None
    marks: Any = None
    difficulty: Any = None
    topic: Any = None
    type: str = QuestionType.STRUCTURED.value
    options: list[Any] = field(default_factory=list)
    matching_pairs: list[MatchingPair] = field(default_factory=list)
    marking_scheme: Optional[Any] = None
    blooms_level: Optional[Any] = None
    unit: Optional[Any] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def with_updates(self, **changes: Any) -> "QuestionDraft":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        for wire_name, attr in _WIRE_FIELDS.items():
            value = getattr(self, attr)
            if attr == "matching_pairs":
                value = [pair.to_dict() for pair in value]
            elif attr == "options":
                value = list(value)
            elif value is None and wire_name in (
                "markingScheme",
                "bloomsLevel",
                "unit",
            ):
                continue
            data[wire_name] = value
        return data


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of one pipeline run.

    A parse failure is a normal value: ``questions`` is empty and
    ``suggested_title`` starts with ``"Error:"``. An empty but successful
    generation keeps the model's own title.
    """

    suggested_title: str
    questions: tuple[QuestionDraft, ...] = ()
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return not self.questions and self.suggested_title.startswith(ERROR_PREFIX)

    @classmethod
    def failure(
        cls, reason: str, title: str = PARSE_FAILURE_TITLE
    ) -> "GenerationResult":
        return cls(suggested_title=title, questions=(), error=reason)

    def to_dict(self) -> dict[str, Any]:
        return {
            "suggestedTitle": self.suggested_title,
            "questions": [question.to_dict() for question in self.questions],
        }


@dataclass(frozen=True)
class QuestionSuggestion:
    """A refined single question returned by the suggestion prompt."""

    refined_text: Any
    options: list[Any] = field(default_factory=list)
    suggested_marks: Any = None
    suggested_topic: Any = None
    marking_scheme: Any = None
    blooms_level: Any = None
    graph_svg: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionSuggestion":
        options = data.get("options")
        return cls(
            refined_text=data.get("refinedText"),
            options=list(options) if isinstance(options, list) else [],
            suggested_marks=data.get("suggestedMarks"),
            suggested_topic=data.get("suggestedTopic"),
            marking_scheme=data.get("markingScheme"),
            blooms_level=data.get("bloomsLevel"),
            graph_svg=data.get("graphSvg"),
        )


@dataclass(frozen=True)
class ExtractionMetadata:
    """Document-level facts reported alongside extracted questions."""

    document_title: Any = None
    estimated_subject: Any = None
    total_questions_found: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "ExtractionMetadata":
        if not isinstance(data, dict):
            return cls()
        return cls(
            document_title=data.get("documentTitle"),
            estimated_subject=data.get("estimatedSubject"),
            total_questions_found=data.get("totalQuestionsFound"),
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Questions extracted from an uploaded document."""

    questions: tuple[QuestionDraft, ...] = ()
    metadata: ExtractionMetadata = field(default_factory=ExtractionMetadata)
    error: Optional[str] = None
    raw_preview: str = ""

    @property
    def failed(self) -> bool:
        return self.error is not None
