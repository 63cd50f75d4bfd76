"""
Test cases for error context building.
"""

import unittest

from exambalm.core.error_handling import ErrorContextBuilder, preview
from exambalm.security.exceptions import ParseError


class TestErrorContextBuilder(unittest.TestCase):
    def test_line_and_column(self) -> None:
        text = "first line\nsecond line"
        context = ErrorContextBuilder.build_context(text.index("line", 11), text)
        self.assertEqual(context.line, 2)
        self.assertEqual(context.column, 8)

    def test_context_window(self) -> None:
        text = "a" * 100 + "X" + "b" * 100
        context = ErrorContextBuilder.build_context(100, text, context_length=10)
        self.assertEqual(context.context_text, "aaaaaXbbbb")

    def test_position_is_clamped(self) -> None:
        context = ErrorContextBuilder.build_context(500, "short")
        self.assertEqual(context.position, 5)
        self.assertEqual(context.column, 6)

    def test_empty_text(self) -> None:
        context = ErrorContextBuilder.build_context(0, "")
        self.assertEqual(context.line, 1)
        self.assertEqual(context.column, 1)
        self.assertEqual(context.context_text, "")

    def test_create_parse_error(self) -> None:
        error = ErrorContextBuilder.create_parse_error("Bad token", 2, "ab?cd")
        self.assertIsInstance(error, ParseError)
        self.assertEqual(error.line, 1)
        self.assertEqual(error.column, 3)
        self.assertEqual(error.context, "ab?cd")


class TestPreview(unittest.TestCase):
    def test_short_text_unchanged(self) -> None:
        self.assertEqual(preview("abc"), "abc")

    def test_long_text_truncated(self) -> None:
        expected = "x" * 200 + "... [5 more chars]"
        self.assertEqual(preview("x" * 205, limit=200), expected)


if __name__ == "__main__":
    unittest.main()
