"""
Core interfaces for the response-cleaning pipeline.
"""

from typing import Any, Protocol


class PreprocessingStep(Protocol):
    """Protocol for text-to-text steps in the preprocessing pipeline."""

    def process(self, text: str, config: Any) -> str:
        """Process the input text according to this step."""
        ...

    def should_apply(self, config: Any) -> bool:
        """Determine if this step should be applied given the configuration."""
        ...
