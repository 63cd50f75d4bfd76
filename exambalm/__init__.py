"""
exambalm - soothes raw LLM exam-generation output into typed question drafts.

Language models asked for a JSON object of exam questions answer with
markdown fences, chatty preamble, raw LaTeX backslashes and literal line
breaks inside strings. exambalm repairs that text, parses it with the
standard JSON decoder and normalizes the result, without ever raising to its
caller.

Key Features:
- Strips markdown fences and conversational preamble
- String-aware extraction of the JSON object from surrounding prose
- Re-escapes stray backslashes (``\\ce``, ``\\sqrt``) while keeping valid escapes.
  A raw ``\\frac`` or ``\\theta`` starts with the valid escapes ``\\f`` and
  ``\\t``, so it decodes to a form feed or tab unless
  ``RepairSettings(literal_latex_commands=True)`` is set
- Escapes literal newlines and tabs inside string values
- Unique ids, safe question-type fallback and list defaults per question
- Failure as a value: an empty result titled ``"Error: ..."``

Quick Start:
    import exambalm

    result = exambalm.parse_generation(raw_text)
    if result.failed:
        ...  # show "generation failed, try again"
    for question in result.questions:
        print(question.id, question.type, question.text)
"""

from .core.batching import apply_filters, merge_batches
from .core.engine import (
    clean_response,
    loads_response,
    parse_extraction,
    parse_generation,
    parse_suggestion,
)
from .core.models import (
    PARSE_FAILURE_TITLE,
    BloomsLevel,
    Difficulty,
    ExtractionMetadata,
    ExtractionResult,
    GenerationResult,
    MatchingPair,
    QuestionDraft,
    QuestionSuggestion,
    QuestionType,
)
from .security.exceptions import ExamBalmError, ParseError, SecurityError
from .utils.config import (
    ExtractionSettings,
    NormalizationSettings,
    ParseLimits,
    PipelineConfig,
    RegexSettings,
    RepairSettings,
)

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "parse_generation", "parse_suggestion", "parse_extraction",
    "clean_response", "loads_response",
    # Batch helpers
    "apply_filters", "merge_batches",
    # Records
    "GenerationResult", "QuestionDraft", "MatchingPair", "QuestionSuggestion",
    "ExtractionResult", "ExtractionMetadata",
    "QuestionType", "Difficulty", "BloomsLevel", "PARSE_FAILURE_TITLE",
    # Configuration
    "PipelineConfig", "ExtractionSettings", "RepairSettings",
    "NormalizationSettings", "ParseLimits", "RegexSettings",
    # Exceptions
    "ExamBalmError", "ParseError", "SecurityError",
]
