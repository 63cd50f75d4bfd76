"""
Preprocessing pipeline for composable response-cleaning steps.

Steps run strictly in order; each is a pure text-to-text function.
"""

from typing import Optional

from ..core.interfaces import PreprocessingStep
from ..utils.config import PipelineConfig
from .escapes import EscapeNormalizer
from .extractors import FenceStripper, SpanExtractor
from .sanitizers import ControlCharacterSanitizer


class PreprocessingPipeline:
    """Manages a sequence of preprocessing steps applied to model output."""

    def __init__(self, steps: Optional[list[PreprocessingStep]] = None):
        self.steps = steps or []

    def add_step(self, step: PreprocessingStep) -> None:
        """Add a preprocessing step to the pipeline."""
        self.steps.append(step)

    def process(self, text: str, config: Optional[PipelineConfig] = None) -> str:
        """Apply all applicable preprocessing steps to the text."""
        if config is None:
            config = PipelineConfig()

        result = text
        for step in self.steps:
            if step.should_apply(config):
                result = step.process(result, config)
        return result

    @classmethod
    def create_default_pipeline(cls) -> "PreprocessingPipeline":
        """Create the standard four-step cleaning pipeline."""
        pipeline = cls()

        # Locate the payload
        pipeline.add_step(FenceStripper())
        pipeline.add_step(SpanExtractor())

        # Repair string content; escapes first so control-character
        # sanitizing sees only valid escape sequences
        pipeline.add_step(EscapeNormalizer())
        pipeline.add_step(ControlCharacterSanitizer())

        return pipeline
