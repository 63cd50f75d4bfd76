"""
exambalm core: records, parsing and normalization.
"""

from .batching import apply_filters, merge_batches
from .engine import (
    clean_response,
    loads_response,
    parse_extraction,
    parse_generation,
    parse_suggestion,
)
from .models import (
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
from .normalizer import IdGenerator, RecordNormalizer
from .parser import StructuralParser

__all__ = [
    "parse_generation", "parse_suggestion", "parse_extraction",
    "clean_response", "loads_response",
    "apply_filters", "merge_batches",
    "StructuralParser", "RecordNormalizer", "IdGenerator",
    "GenerationResult", "QuestionDraft", "MatchingPair", "QuestionSuggestion",
    "ExtractionResult", "ExtractionMetadata",
    "QuestionType", "Difficulty", "BloomsLevel",
]
