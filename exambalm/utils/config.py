"""
Configuration and limits for exambalm.

This module defines size limits and the switches that control each stage of
the response-cleaning pipeline.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ParseLimits:
    """Limits on the untrusted model response."""

    max_input_size: int = 1024 * 1024
    max_questions: int = 500

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.max_questions <= 0:
            raise ValueError("max_questions must be positive")


@dataclass
class ExtractionSettings:
    """Settings for locating the JSON payload inside the response."""

    strip_fences: bool = True
    strip_preamble: bool = True
    extract_span: bool = True
    structural_span: bool = True


@dataclass
class RepairSettings:
    """Settings for repairing string content before parsing."""

    normalize_escapes: bool = True
    sanitize_control_chars: bool = True
    literal_latex_commands: bool = False


@dataclass
class NormalizationSettings:
    """Settings for turning parsed objects into question drafts."""

    fallback_type: str = "Structured"
    default_title: str = "Untitled Exam"
    id_prefix: str = "ai"
    coerce_marks: bool = False


@dataclass
class RegexSettings:
    """Timeout applied to every pattern operation."""

    timeout: float = 1.0


@dataclass
class PipelineConfig:
    """Granular control over the response-cleaning pipeline."""

    extraction: Optional[ExtractionSettings] = None
    repair: Optional[RepairSettings] = None
    normalization: Optional[NormalizationSettings] = None
    limits: Optional[ParseLimits] = None
    regex: Optional[RegexSettings] = None

    def __post_init__(self) -> None:
        if self.extraction is None:
            self.extraction = ExtractionSettings()
        if self.repair is None:
            self.repair = RepairSettings()
        if self.normalization is None:
            self.normalization = NormalizationSettings()
        if self.limits is None:
            self.limits = ParseLimits()
        if self.regex is None:
            self.regex = RegexSettings()

    @property
    def strip_fences(self) -> bool:
        """Whether to remove markdown code fences."""
        assert self.extraction is not None
        return self.extraction.strip_fences

    @property
    def strip_preamble(self) -> bool:
        """Whether to drop prose before the first opening brace."""
        assert self.extraction is not None
        return self.extraction.strip_preamble

    @property
    def extract_span(self) -> bool:
        """Whether to isolate the object span."""
        assert self.extraction is not None
        return self.extraction.extract_span

    @property
    def structural_span(self) -> bool:
        """Whether span extraction tracks string literals and brace depth."""
        assert self.extraction is not None
        return self.extraction.structural_span

    @property
    def normalize_escapes(self) -> bool:
        """Whether to re-escape stray backslashes."""
        assert self.repair is not None
        return self.repair.normalize_escapes

    @property
    def sanitize_control_chars(self) -> bool:
        """Whether to escape or strip raw control characters."""
        assert self.repair is not None
        return self.repair.sanitize_control_chars

    @property
    def literal_latex_commands(self) -> bool:
        """Whether escapes that start a LaTeX command are kept literal."""
        assert self.repair is not None
        return self.repair.literal_latex_commands

    @property
    def fallback_type(self) -> str:
        """Question type used when the model sends an unknown one."""
        assert self.normalization is not None
        return self.normalization.fallback_type

    @property
    def default_title(self) -> str:
        """Title used when the model omits one."""
        assert self.normalization is not None
        return self.normalization.default_title

    @property
    def id_prefix(self) -> str:
        """Prefix of generated question ids."""
        assert self.normalization is not None
        return self.normalization.id_prefix

    @property
    def coerce_marks(self) -> bool:
        """Whether numeric strings in marks become numbers."""
        assert self.normalization is not None
        return self.normalization.coerce_marks

    @property
    def max_input_size(self) -> int:
        """Maximum response size in characters."""
        assert self.limits is not None
        return self.limits.max_input_size

    @property
    def max_questions(self) -> int:
        """Maximum number of questions accepted from one response."""
        assert self.limits is not None
        return self.limits.max_questions

    @property
    def regex_timeout(self) -> float:
        """Timeout in seconds for a single pattern operation."""
        assert self.regex is not None
        return self.regex.timeout

    @classmethod
    def conservative(cls) -> "PipelineConfig":
        """Create a configuration with textual span matching and no hardening."""
        return cls(
            extraction=ExtractionSettings(structural_span=False),
            repair=RepairSettings(literal_latex_commands=False),
            normalization=NormalizationSettings(coerce_marks=False),
        )

    @classmethod
    def aggressive(cls) -> "PipelineConfig":
        """Create a configuration with every optional repair enabled."""
        return cls(
            extraction=ExtractionSettings(),
            repair=RepairSettings(literal_latex_commands=True),
            normalization=NormalizationSettings(coerce_marks=True),
        )

    @classmethod
    def from_features(
        cls, enabled_features: set[str], **overrides: Any
    ) -> "PipelineConfig":
        """Create configuration from a set of enabled feature names.

        Every boolean switch not named in ``enabled_features`` is disabled.
        ``overrides`` may carry non-boolean normalization values such as
        ``fallback_type`` or ``default_title``.
        """
        config = cls(
            extraction=ExtractionSettings(
                strip_fences=False,
                strip_preamble=False,
                extract_span=False,
                structural_span=False,
            ),
            repair=RepairSettings(
                normalize_escapes=False,
                sanitize_control_chars=False,
                literal_latex_commands=False,
            ),
            normalization=NormalizationSettings(coerce_marks=False),
        )

        field_mapping = {
            "strip_fences": ("extraction", "strip_fences"),
            "strip_preamble": ("extraction", "strip_preamble"),
            "extract_span": ("extraction", "extract_span"),
            "structural_span": ("extraction", "structural_span"),
            "normalize_escapes": ("repair", "normalize_escapes"),
            "sanitize_control_chars": ("repair", "sanitize_control_chars"),
            "literal_latex_commands": ("repair", "literal_latex_commands"),
            "coerce_marks": ("normalization", "coerce_marks"),
        }

        for feature_name in enabled_features:
            if feature_name in field_mapping:
                group_name, attr_name = field_mapping[feature_name]
                setattr(getattr(config, group_name), attr_name, True)

        for name, value in overrides.items():
            if not hasattr(config.normalization, name):
                raise ValueError(f"Unknown normalization setting: {name}")
            setattr(config.normalization, name, value)

        return config
