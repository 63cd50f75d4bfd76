"""
Public entry points of the response-cleaning pipeline.

``parse_generation`` is the main boundary: it accepts the raw text of a model
response and always returns a :class:`GenerationResult`. Failures are values,
never exceptions. The lower-level ``clean_response`` and ``loads_response``
expose the intermediate stages for callers that handle errors themselves.
"""

import logging
from typing import Any, Optional

from ..preprocessing.pipeline import PreprocessingPipeline
from ..security.exceptions import ParseError, SecurityError
from ..security.limits import LimitValidator
from ..utils.config import PipelineConfig
from .error_handling import preview
from .models import (
    LIMIT_FAILURE_TITLE,
    ExtractionMetadata,
    ExtractionResult,
    GenerationResult,
    QuestionSuggestion,
)
from .normalizer import RecordNormalizer
from .parser import StructuralParser

logger = logging.getLogger(__name__)

_PIPELINE = PreprocessingPipeline.create_default_pipeline()

RAW_PREVIEW_LENGTH = 1000


def clean_response(text: str, config: Optional[PipelineConfig] = None) -> str:
    """
    Run the text-repair stages on a raw model response.

    Strips fences and preamble, isolates the object, re-escapes stray
    backslashes and sanitizes control characters. Never raises for string
    input; the result is not guaranteed to be valid JSON.
    """
    return _PIPELINE.process(text, config or PipelineConfig())


def loads_response(
    text: str, config: Optional[PipelineConfig] = None
) -> dict[str, Any]:
    """
    Clean a raw model response and parse it into a JSON object.

    Raises:
        SecurityError: if the response exceeds the configured size limit
        ParseError: if the cleaned text is not a JSON object
    """
    config = config or PipelineConfig()
    _check_input(text, config)
    return StructuralParser().parse(clean_response(text, config))


def parse_generation(
    text: str, config: Optional[PipelineConfig] = None
) -> GenerationResult:
    """
    Turn a raw question-generation response into normalized question drafts.

    Args:
        text: The raw response text
        config: Pipeline configuration (defaults to ``PipelineConfig()``)

    Returns:
        The normalized result, or a sentinel result with no questions and a
        title starting with ``"Error:"`` when the response cannot be used.
    """
    config = config or PipelineConfig()
    cleaned = ""
    try:
        _check_input(text, config)
        cleaned = clean_response(text, config)
        data = StructuralParser().parse(cleaned)
        return RecordNormalizer(config).normalize(data)
    except SecurityError as e:
        logger.warning(f"Rejected AI response: {e}")
        return GenerationResult.failure(str(e), title=LIMIT_FAILURE_TITLE)
    except ParseError as e:
        _log_parse_failure(e, text, cleaned)
        return GenerationResult.failure(str(e))


def parse_suggestion(
    text: str, config: Optional[PipelineConfig] = None
) -> Optional[QuestionSuggestion]:
    """
    Parse the response to a single-question refinement prompt.

    Returns:
        The suggestion, or None if the response cannot be parsed.
    """
    try:
        data = loads_response(text, config)
    except (ParseError, SecurityError) as e:
        logger.warning(f"Error parsing AI suggestion: {e}")
        return None
    return QuestionSuggestion.from_dict(data)


def parse_extraction(
    text: str, config: Optional[PipelineConfig] = None
) -> ExtractionResult:
    """
    Parse the response to a document question-extraction prompt.

    Returns:
        The extracted questions and document metadata. On failure ``error``
        is set and ``raw_preview`` holds the start of the response.
    """
    config = config or PipelineConfig()
    cleaned = ""
    try:
        _check_input(text, config)
        cleaned = clean_response(text, config)
        data = StructuralParser().parse(cleaned)
        questions = RecordNormalizer(config).normalize_questions(data.get("questions"))
    except (ParseError, SecurityError) as e:
        if isinstance(e, ParseError):
            _log_parse_failure(e, text, cleaned)
        else:
            logger.warning(f"Rejected AI response: {e}")
        return ExtractionResult(
            error=str(e),
            raw_preview=text[:RAW_PREVIEW_LENGTH] if isinstance(text, str) else "",
        )

    return ExtractionResult(
        questions=questions,
        metadata=ExtractionMetadata.from_dict(data.get("metadata")),
    )


def _check_input(text: Any, config: PipelineConfig) -> None:
    if not isinstance(text, str):
        raise ParseError(f"Expected response text, got {type(text).__name__}")
    LimitValidator(config.limits).validate_input_size(text)


def _log_parse_failure(error: ParseError, raw: Any, cleaned: str) -> None:
    raw_text = raw if isinstance(raw, str) else repr(raw)
    logger.warning(
        f"Failed to parse AI response: {error}\n"
        f"Raw text: {preview(raw_text)}\n"
        f"Cleaned text: {preview(cleaned)}"
    )
