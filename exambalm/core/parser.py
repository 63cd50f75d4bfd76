"""
Structural parsing of cleaned model output.
"""

import json
from typing import Any

from ..security.exceptions import ParseError
from .error_handling import ErrorContextBuilder


class StructuralParser:
    """Parses cleaned text with the standard library JSON decoder."""

    def parse(self, text: str) -> dict[str, Any]:
        """
        Parse ``text`` into a JSON object.

        Raises:
            ParseError: if the text is not valid JSON or its top-level value
                is not an object
        """
        if not text.strip():
            raise ParseError("Empty response")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ErrorContextBuilder.create_parse_error(e.msg, e.pos, text) from e
        except ValueError as e:
            # Integer literals beyond the interpreter's digit limit
            raise ParseError(f"Invalid JSON value: {e}") from e
        except RecursionError as e:
            raise ParseError("Response nests too deeply") from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Expected a JSON object at top level, got {type(data).__name__}"
            )
        return data
