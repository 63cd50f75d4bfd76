"""
Escape normalization for model output.

Model responses mix valid JSON escapes (``\\n``, ``\\"``, ``\\u00e9``) with raw
backslashes from LaTeX and chemical notation (``\\frac{a}{b}``, ``\\ce{H2O}``)
that make the document unparseable. The normalizer re-escapes only the latter:

1. every valid escape is swapped for a placeholder token. The scan is
   leftmost, so a ``\\\\`` pair is always consumed before the backslash it
   contains can start another escape;
2. every backslash still in the text is stray and is doubled;
3. the placeholders are restored.

Placeholder tokens are built from a marker character that is verified absent
from the text, so restoration can never touch content.

By default a command such as ``\\frac`` or ``\\theta`` is not stray: its
first letter forms the valid escape ``\\f`` or ``\\t``, so the parsed text
holds a form feed or tab followed by ``rac`` or ``heta``. The LaTeX-aware
mode (``literal_latex_commands``) keeps known command words literal.
"""

import logging
from typing import Optional

from ..core.regex_utils import RegexTimeout, compile_pattern, timed_sub
from ..utils.config import PipelineConfig
from .base import PreprocessingStepBase

logger = logging.getLogger(__name__)

# LaTeX command words whose first letter is also a JSON escape letter.
LATEX_COMMANDS = (
    # \b
    "backslash", "bar", "because", "begin", "beta", "bf", "big", "bigcap",
    "bigcup", "bigg", "binom", "bmod", "boldsymbol", "bot", "bullet",
    # \f
    "flat", "footnote", "forall", "frac", "frown",
    # \n
    "nabla", "ne", "nearrow", "neg", "neq", "newline", "ngeq", "ni", "nleq",
    "nmid", "noindent", "nolimits", "not", "notin", "nparallel", "nu",
    # \r
    "rangle", "rbrace", "rceil", "rfloor", "rho", "right", "rightarrow", "rm",
    "rvert",
    # \t
    "tan", "tanh", "tau", "text", "textbf", "textit", "textrm", "tfrac",
    "therefore", "theta", "tilde", "times", "to", "top", "triangle", "tt",
)

VALID_ESCAPE_PATTERN = compile_pattern(r'\\(?:u[0-9a-fA-F]{4}|["\\/bfnrt])')

LATEX_AWARE_ESCAPE_PATTERN = compile_pattern(
    r'\\(?:u[0-9a-fA-F]{4}|["\\/]|(?!(?:'
    + "|".join(LATEX_COMMANDS)
    + r")(?![A-Za-z]))[bfnrt])"
)

# Markers tried in order: rarely used C0 controls, then the private use area.
MARKER_CANDIDATES = "\x1a\x1e\x1f" + "".join(chr(c) for c in range(0xE000, 0xF900))


def choose_marker(text: str) -> Optional[str]:
    """Return a marker character that does not occur in ``text``."""
    present = set(text)
    for candidate in MARKER_CANDIDATES:
        if candidate not in present:
            return candidate
    return None


class EscapePlaceholderTable:
    """Maps placeholder tokens back to the escape sequences they replaced."""

    def __init__(self, marker: str):
        self.marker = marker
        self._literals: list[str] = []
        self._token_pattern = compile_pattern(f"{marker}(\\d+){marker}")

    def __len__(self) -> int:
        return len(self._literals)

    def protect(self, literal: str) -> str:
        """Store ``literal`` and return the token standing in for it."""
        self._literals.append(literal)
        return f"{self.marker}{len(self._literals) - 1}{self.marker}"

    def restore(self, text: str, timeout: float) -> str:
        """Replace every token in ``text`` with its stored literal."""
        if not self._literals:
            return text
        return timed_sub(
            self._token_pattern,
            lambda match: self._literals[int(match.group(1))],
            text,
            timeout=timeout,
        )


class EscapeNormalizer(PreprocessingStepBase):
    """Re-escapes stray backslashes while keeping valid JSON escapes intact."""

    switch = "normalize_escapes"

    def process(self, text: str, config: PipelineConfig) -> str:
        """Normalize escapes, returning the input unchanged on regex timeout."""
        try:
            return self.normalize(
                text,
                latex_aware=config.literal_latex_commands,
                timeout=config.regex_timeout,
            )
        except RegexTimeout:
            return text

    @staticmethod
    def normalize(text: str, latex_aware: bool = False, timeout: float = 1.0) -> str:
        """
        Make every backslash in ``text`` part of a valid JSON escape.

        Args:
            text: Text that may contain stray backslashes
            latex_aware: Treat ``\\frac``, ``\\theta`` and similar LaTeX
                commands as stray backslashes even though ``\\f`` and ``\\t``
                are valid JSON escapes
            timeout: Regex timeout in seconds

        Raises:
            RegexTimeout: if a substitution exceeds ``timeout``
        """
        if "\\" not in text:
            return text

        pattern = LATEX_AWARE_ESCAPE_PATTERN if latex_aware else VALID_ESCAPE_PATTERN

        marker = choose_marker(text)
        if marker is None:
            # Every candidate marker occurs in the text; escape in one pass.
            return timed_sub(
                compile_pattern(f"(?P<valid>{pattern.pattern})|\\\\"),
                lambda match: match.group(0) if match.group("valid") else "\\\\",
                text,
                timeout=timeout,
            )

        table = EscapePlaceholderTable(marker)
        protected = timed_sub(
            pattern, lambda match: table.protect(match.group(0)), text, timeout=timeout
        )
        stray = protected.count("\\")
        if stray:
            logger.debug(f"Re-escaping {stray} stray backslashes")
        return table.restore(protected.replace("\\", "\\\\"), timeout)
