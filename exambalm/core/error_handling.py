"""
Error context helpers.

Builds line, column and a short context window for a failing position so
parse errors can be diagnosed from logs alone.
"""

from dataclasses import dataclass

from ..security.exceptions import ParseError


@dataclass
class ErrorContext:
    """Context information for parsing errors."""

    position: int
    line: int
    column: int
    context_text: str


class ErrorContextBuilder:
    """Builds error context information from a position in text."""

    @staticmethod
    def build_context(
        position: int, text: str, context_length: int = 50
    ) -> ErrorContext:
        """Build error context from position and text."""
        if not text:
            return ErrorContext(
                position=position, line=1, column=position + 1, context_text=""
            )

        position = max(0, min(position, len(text)))
        line = text[:position].count("\n") + 1
        line_start = text.rfind("\n", 0, position) + 1
        column = position - line_start + 1

        start = max(0, position - context_length // 2)
        end = min(len(text), position + context_length // 2)

        return ErrorContext(
            position=position,
            line=line,
            column=column,
            context_text=text[start:end],
        )

    @classmethod
    def create_parse_error(cls, message: str, position: int, text: str) -> ParseError:
        """Create a ParseError carrying the context around ``position``."""
        context = cls.build_context(position, text)
        return ParseError(
            message,
            position=context.position,
            line=context.line,
            column=context.column,
            context=context.context_text,
        )


def preview(text: str, limit: int = 200) -> str:
    """Truncate text for log output."""
    if len(text) <= limit:
        return text
    return text[:limit] + f"... [{len(text) - limit} more chars]"
