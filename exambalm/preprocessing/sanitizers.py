"""
Control-character sanitizing.

Models frequently emit real line breaks and tabs inside string values, which
JSON forbids. Inside string literals these become their escape sequences;
other C0 control bytes are dropped wherever they appear. Newlines, carriage
returns and tabs between tokens are legal JSON whitespace and are kept.
"""

from ..core.regex_utils import compile_pattern, safe_search
from ..utils.config import PipelineConfig
from .base import PreprocessingStepBase
from .string_utils import StringStateTracker

CONTROL_CHAR_PATTERN = compile_pattern(r"[\x00-\x1f]")

CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


class ControlCharacterSanitizer(PreprocessingStepBase):
    """Escapes raw whitespace controls in strings and strips the rest."""

    switch = "sanitize_control_chars"

    def process(self, text: str, config: PipelineConfig) -> str:
        """Sanitize control characters."""
        if not safe_search(CONTROL_CHAR_PATTERN, text, timeout=config.regex_timeout):
            return text
        return self.sanitize(text)

    @staticmethod
    def sanitize(text: str) -> str:
        result = []
        tracker = StringStateTracker()

        for char in text:
            if char >= " ":
                tracker.update_state(char)
                result.append(char)
                continue

            if tracker.in_string:
                # Escape state never spans a control byte.
                tracker.escape_next = False
                if char in CONTROL_ESCAPES:
                    result.append(CONTROL_ESCAPES[char])
            elif char in CONTROL_ESCAPES:
                result.append(char)

        return "".join(result)
