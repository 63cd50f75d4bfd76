"""
Limit validation for untrusted model responses.
"""

from ..utils.config import ParseLimits
from .exceptions import SecurityError


class LimitValidator:
    """Validates response limits to keep a single bad response cheap."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits

    def validate_input_size(self, text: str) -> None:
        """Validate that input text size is within limits."""
        if len(text) > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}"
            )

    def validate_question_count(self, count: int) -> None:
        """Validate that the number of questions is within limits."""
        if count > self.limits.max_questions:
            raise SecurityError(
                f"Question count {count} exceeds limit {self.limits.max_questions}"
            )
