"""
Content extraction preprocessing steps.

These steps locate the JSON payload inside a chatty model response: they drop
markdown code fences and conversational preamble, then cut the text down to
the object itself.
"""

import logging

from ..core.regex_utils import compile_pattern, safe_search, safe_sub
from ..utils.config import PipelineConfig
from .base import PreprocessingStepBase
from .string_utils import find_object_end

logger = logging.getLogger(__name__)

# Opening fence with an optional language tag, or a closing fence.
FENCE_PATTERN = compile_pattern(
    r"(?:\r?\n)?[ \t]*```(?:[A-Za-z0-9_+.-]+(?=[ \t]*(?:\r?\n|$)))?[ \t]*(?:\r?\n)?"
)

# An opening brace that starts a key or an empty object.
OBJECT_START_PATTERN = compile_pattern(r'\{\s*(?:"|\})')


class FenceStripper(PreprocessingStepBase):
    """Removes markdown code fences and any prose before the payload."""

    def should_apply(self, config: PipelineConfig) -> bool:
        """Apply if fence or preamble removal is enabled."""
        return config.strip_fences or config.strip_preamble

    def process(self, text: str, config: PipelineConfig) -> str:
        """Strip fences, then preamble."""
        result = text
        if config.strip_fences:
            result = self.strip_fences(result, config.regex_timeout)
        if config.strip_preamble:
            result = self.strip_preamble(result, config.regex_timeout)
        return result.strip()

    @staticmethod
    def strip_fences(text: str, timeout: float = 1.0) -> str:
        """Remove every fence opener and closer, tagged or not."""
        if "```" not in text:
            return text
        return safe_sub(FENCE_PATTERN, "\n", text, timeout=timeout)

    @staticmethod
    def strip_preamble(text: str, timeout: float = 1.0) -> str:
        """
        Drop text that precedes the first JSON object.

        Prefers a brace that opens a key (``{"``) so that braces in prose such
        as "here are {3} questions" are skipped; falls back to the first brace.
        """
        match = safe_search(OBJECT_START_PATTERN, text, timeout=timeout)
        start = match.start() if match else text.find("{")
        if start <= 0:
            return text
        logger.debug(f"Dropping {start} chars of preamble before JSON payload")
        return text[start:]


class SpanExtractor(PreprocessingStepBase):
    """Isolates the object from its opening brace to its closing brace."""

    switch = "extract_span"

    def process(self, text: str, config: PipelineConfig) -> str:
        """Extract the object span."""
        if config.structural_span:
            return self.extract_structural_span(text)
        return self.extract_textual_span(text)

    @staticmethod
    def extract_textual_span(text: str) -> str:
        """
        Return the substring from the first ``{`` to the last ``}``.

        Returns the input unchanged if either brace is missing or they are
        out of order.
        """
        first = text.find("{")
        last = text.rfind("}")
        if first != -1 and last != -1 and last > first:
            return text[first : last + 1]
        return text

    @classmethod
    def extract_structural_span(cls, text: str) -> str:
        """
        Return the first object, tracking string literals and brace depth.

        Falls back to the textual span when the object never closes.
        """
        first = text.find("{")
        if first == -1:
            return text

        end = find_object_end(text, first)
        if end != -1:
            return text[first : end + 1]

        logger.debug("Object never closes; falling back to last closing brace")
        return cls.extract_textual_span(text)
