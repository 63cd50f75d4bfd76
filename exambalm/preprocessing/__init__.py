"""
Response preprocessing module.

This module turns raw model output into text a standard JSON parser accepts.
Each concern lives in a focused, single-responsibility step; the steps are
composed into a pipeline.
"""

from .base import PreprocessingStepBase
from .escapes import EscapeNormalizer, EscapePlaceholderTable
from .extractors import FenceStripper, SpanExtractor
from .pipeline import PreprocessingPipeline
from .sanitizers import ControlCharacterSanitizer

__all__ = [
    "PreprocessingPipeline",
    "PreprocessingStepBase",
    "FenceStripper",
    "SpanExtractor",
    "EscapeNormalizer",
    "EscapePlaceholderTable",
    "ControlCharacterSanitizer",
]
