"""
Unit tests for escape normalization.
"""

import json
import unittest
from unittest.mock import patch

from exambalm.core.regex_utils import RegexTimeout
from exambalm.preprocessing.escapes import (
    MARKER_CANDIDATES,
    EscapeNormalizer,
    EscapePlaceholderTable,
    choose_marker,
)
from exambalm.utils.config import PipelineConfig, RepairSettings


class TestEscapeNormalizer(unittest.TestCase):
    """Test re-escaping of stray backslashes."""

    def test_text_without_backslashes_is_unchanged(self) -> None:
        text = '{"text": "What is 2 + 2?"}'
        self.assertEqual(EscapeNormalizer.normalize(text), text)

    def test_stray_latex_backslashes_are_doubled(self) -> None:
        text = r'{"text": "Balance \ce{H2O} and find \alpha"}'
        expected = r'{"text": "Balance \\ce{H2O} and find \\alpha"}'
        self.assertEqual(EscapeNormalizer.normalize(text), expected)

    def test_doubled_result_parses_to_literal_backslash(self) -> None:
        text = r'{"text": "Evaluate \sqrt{x}"}'
        data = json.loads(EscapeNormalizer.normalize(text))
        self.assertEqual(data["text"], r"Evaluate \sqrt{x}")

    def test_valid_escapes_are_preserved(self) -> None:
        text = r'{"text": "say \"hi\"\nthen\ttab \/ \\ \b \f \r"}'
        self.assertEqual(EscapeNormalizer.normalize(text), text)

    def test_already_escaped_latex_is_unchanged(self) -> None:
        text = r'{"text": "Solve \\frac{a}{b}"}'
        self.assertEqual(EscapeNormalizer.normalize(text), text)

    def test_escaped_backslash_pair_is_consumed_first(self) -> None:
        # \\ then a stray \x
        text = r'"\\\x"'
        self.assertEqual(EscapeNormalizer.normalize(text), r'"\\\\x"')

    def test_escaped_backslash_before_quote(self) -> None:
        text = r'{"path": "C:\\", "next": "ok"}'
        self.assertEqual(EscapeNormalizer.normalize(text), text)

    def test_unicode_escapes(self) -> None:
        text = r'"caf\u00e9 \u00zz"'
        self.assertEqual(EscapeNormalizer.normalize(text), r'"caf\u00e9 \\u00zz"')

    def test_escaped_backslash_before_u(self) -> None:
        text = r'"\\u0041"'
        self.assertEqual(EscapeNormalizer.normalize(text), text)

    def test_trailing_backslash(self) -> None:
        self.assertEqual(EscapeNormalizer.normalize("abc\\"), "abc\\\\")

    def test_default_mode_keeps_json_escape_letters(self) -> None:
        text = r'"\frac{a}{b}"'
        self.assertEqual(EscapeNormalizer.normalize(text), text)

    def test_latex_aware_mode_escapes_latex_commands(self) -> None:
        cases = [
            (r'"\frac{a}{b}"', r'"\\frac{a}{b}"'),
            (r'"\theta + \beta"', r'"\\theta + \\beta"'),
            (r'"x \neq y"', r'"x \\neq y"'),
            (r'"\rho\nu"', r'"\\rho\\nu"'),
            (r'"\text{m}"', r'"\\text{m}"'),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                self.assertEqual(
                    EscapeNormalizer.normalize(text, latex_aware=True), expected
                )

    def test_latex_aware_mode_keeps_ordinary_escapes(self) -> None:
        cases = [
            r'"line one\nline two"',
            r'"\nearly\tab"',
            r'"col\tvalue\r"',
            r'"\\frac"',
        ]
        for text in cases:
            with self.subTest(text=text):
                normalized = EscapeNormalizer.normalize(text, latex_aware=True)
                self.assertEqual(normalized, text)

    def test_marker_characters_in_content_survive(self) -> None:
        text = '"\x1a0\x1a \\q \\n"'
        result = EscapeNormalizer.normalize(text)
        self.assertEqual(result, '"\x1a0\x1a \\\\q \\n"')

    def test_single_pass_when_no_marker_is_free(self) -> None:
        text = MARKER_CANDIDATES + r"\q\n"
        self.assertEqual(EscapeNormalizer.normalize(text), MARKER_CANDIDATES + r"\\q\n")

    def test_process_respects_config(self) -> None:
        config = PipelineConfig(repair=RepairSettings(literal_latex_commands=True))
        normalizer = EscapeNormalizer()
        self.assertTrue(normalizer.should_apply(config))
        self.assertEqual(normalizer.process(r'"\frac"', config), r'"\\frac"')

        disabled = PipelineConfig(repair=RepairSettings(normalize_escapes=False))
        self.assertFalse(normalizer.should_apply(disabled))

    def test_process_returns_input_on_timeout(self) -> None:
        with patch(
            "exambalm.preprocessing.escapes.timed_sub",
            side_effect=RegexTimeout("p", 10, 1.0, "sub"),
        ):
            text = r'"\q"'
            self.assertEqual(EscapeNormalizer().process(text, PipelineConfig()), text)


class TestPlaceholders(unittest.TestCase):
    """Test placeholder marker selection and the placeholder table."""

    def test_choose_marker_skips_present_characters(self) -> None:
        self.assertEqual(choose_marker("plain"), "\x1a")
        self.assertEqual(choose_marker("a\x1ab"), "\x1e")
        self.assertEqual(choose_marker("\x1a\x1e\x1f"), "\ue000")

    def test_choose_marker_exhausted(self) -> None:
        self.assertIsNone(choose_marker(MARKER_CANDIDATES))

    def test_protect_and_restore(self) -> None:
        table = EscapePlaceholderTable("\x1a")
        first = table.protect("\\n")
        second = table.protect("\\u00e9")
        self.assertEqual(first, "\x1a0\x1a")
        self.assertEqual(second, "\x1a1\x1a")
        self.assertEqual(len(table), 2)
        self.assertEqual(
            table.restore(f"a{first}b{second}c", timeout=1.0), "a\\nb\\u00e9c"
        )

    def test_restore_with_empty_table(self) -> None:
        table = EscapePlaceholderTable("\x1a")
        self.assertEqual(table.restore("unchanged", timeout=1.0), "unchanged")


if __name__ == "__main__":
    unittest.main()
