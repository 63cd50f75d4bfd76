"""
Base class for response-cleaning steps.

A step is toggled by one boolean switch of :class:`PipelineConfig`, named by
its ``switch`` attribute. Steps without a switch always run.
"""

from typing import Optional

from ..utils.config import PipelineConfig


class PreprocessingStepBase:
    """Base class for preprocessing steps with common functionality."""

    switch: Optional[str] = None

    def should_apply(self, config: PipelineConfig) -> bool:
        """Apply when the step's config switch is on, or always without one."""
        if self.switch is None:
            return True
        return bool(getattr(config, self.switch))

    def process(self, text: str, _config: PipelineConfig) -> str:
        """Process the text. Must be implemented by subclasses."""
        raise NotImplementedError(
            f"{type(self).__name__} must implement process()"
        )
