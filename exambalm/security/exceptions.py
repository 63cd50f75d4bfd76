"""
Exception types raised inside the exambalm pipeline.

Public entry points never let these escape; they are turned into sentinel
results at the boundary. They are exposed for callers that drive individual
stages directly.
"""

from typing import Optional


class ExamBalmError(Exception):
    """Base class for pipeline errors."""


class ParseError(ExamBalmError):
    """Raised when the cleaned text is not a usable JSON document."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        context: str = "",
    ):
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        self.context = context
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.message
        text = f"{self.message} at line {self.line}, column {self.column}"
        if self.context.strip():
            text += f": {self.context.strip()}"
        return text


class SecurityError(ExamBalmError):
    """Raised when a response exceeds the configured limits."""
