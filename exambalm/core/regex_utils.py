"""
Timeout-protected regex helpers.

All pattern work in exambalm goes through these helpers so that a single
pathological response cannot stall a request. They use the ``regex`` module,
whose matching functions accept a native ``timeout`` argument.
"""

import logging
from typing import Callable, Optional, Union

import regex  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1.0

PatternLike = Union[str, "regex.Pattern[str]"]
Replacement = Union[str, Callable[["regex.Match[str]"], str]]


class RegexTimeout(Exception):
    """Raised when a pattern operation exceeds its timeout."""

    def __init__(self, pattern: str, input_length: int, timeout: float, operation: str):
        self.pattern = pattern
        self.input_length = input_length
        self.timeout = timeout
        self.operation = operation
        pattern_display = pattern[:50] + "..." if len(pattern) > 50 else pattern
        super().__init__(
            f"Regex {operation} timed out after {timeout}s "
            f"(pattern: {pattern_display}, input length: {input_length})"
        )


def compile_pattern(pattern: PatternLike, flags: int = 0) -> "regex.Pattern[str]":
    """Compile a pattern; already compiled patterns are returned as-is."""
    if isinstance(pattern, str):
        return regex.compile(pattern, flags)
    return pattern


def timed_sub(
    pattern: PatternLike,
    repl: Replacement,
    string: str,
    count: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Perform a substitution, raising RegexTimeout when it runs too long."""
    compiled = compile_pattern(pattern)
    try:
        return compiled.sub(repl, string, count=count, timeout=timeout)
    except TimeoutError as e:
        error = RegexTimeout(compiled.pattern, len(string), timeout, "sub")
        logger.error(str(error))
        raise error from e


def safe_sub(
    pattern: PatternLike,
    repl: Replacement,
    string: str,
    count: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """
    Perform a substitution with timeout protection.

    Returns:
        The substituted string, or ``string`` unchanged on timeout.
    """
    try:
        return timed_sub(pattern, repl, string, count=count, timeout=timeout)
    except RegexTimeout:
        return string


def safe_search(
    pattern: PatternLike,
    string: str,
    pos: int = 0,
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional["regex.Match[str]"]:
    """
    Perform a search with timeout protection.

    Returns:
        The match, or None when nothing matched or the search timed out.
    """
    compiled = compile_pattern(pattern)
    try:
        return compiled.search(string, pos, timeout=timeout)
    except TimeoutError:
        error = RegexTimeout(compiled.pattern, len(string), timeout, "search")
        logger.error(str(error))
        return None
