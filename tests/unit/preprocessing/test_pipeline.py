"""
Unit tests for the preprocessing pipeline.
"""

import json
import unittest

from exambalm.preprocessing import (
    ControlCharacterSanitizer,
    EscapeNormalizer,
    FenceStripper,
    PreprocessingPipeline,
    PreprocessingStepBase,
    SpanExtractor,
)
from exambalm.utils.config import PipelineConfig


class UppercaseStep(PreprocessingStepBase):
    def process(self, text, _config):
        return text.upper()


class NeverStep(PreprocessingStepBase):
    def should_apply(self, _config):
        return False

    def process(self, text, _config):
        raise AssertionError("should not run")


class TestPreprocessingPipeline(unittest.TestCase):
    """Test step composition and the default pipeline."""

    def test_default_pipeline_order(self):
        pipeline = PreprocessingPipeline.create_default_pipeline()
        self.assertEqual(
            [type(step) for step in pipeline.steps],
            [FenceStripper, SpanExtractor, EscapeNormalizer, ControlCharacterSanitizer],
        )

    def test_default_pipeline_cleans_noisy_response(self):
        raw = (
            "Sure! Here's the JSON:\n"
            "```json\n"
            '{"suggestedTitle": "Chemistry",\n'
            ' "questions": [{"text": "Balance \\ce{H2 + O2}\nShow working"}]}\n'
            "```\n"
            "Good luck!"
        )
        cleaned = PreprocessingPipeline.create_default_pipeline().process(raw)
        data = json.loads(cleaned)
        self.assertEqual(
            data["questions"][0]["text"], "Balance \\ce{H2 + O2}\nShow working"
        )

    def test_steps_are_skipped_when_not_applicable(self):
        pipeline = PreprocessingPipeline([NeverStep(), UppercaseStep()])
        self.assertEqual(pipeline.process("abc", PipelineConfig()), "ABC")

    def test_add_step(self):
        pipeline = PreprocessingPipeline()
        self.assertEqual(pipeline.process("abc"), "abc")
        pipeline.add_step(UppercaseStep())
        self.assertEqual(pipeline.process("abc"), "ABC")

    def test_base_step_requires_process(self):
        with self.assertRaises(NotImplementedError):
            PreprocessingStepBase().process("x", PipelineConfig())

    def test_switch_controls_step(self):
        self.assertTrue(SpanExtractor().should_apply(PipelineConfig()))
        config = PipelineConfig.from_features({"normalize_escapes"})
        self.assertFalse(SpanExtractor().should_apply(config))
        self.assertTrue(EscapeNormalizer().should_apply(config))
        self.assertTrue(UppercaseStep().should_apply(config))

    def test_all_features_disabled_is_identity(self):
        raw = '```json\n{"a": "\\q"}\n```'
        config = PipelineConfig.from_features(set())
        pipeline = PreprocessingPipeline.create_default_pipeline()
        self.assertEqual(pipeline.process(raw, config), raw)


if __name__ == "__main__":
    unittest.main()
