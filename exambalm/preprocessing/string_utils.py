"""
String-literal tracking shared by the extraction and sanitizing steps.

JSON strings are always double-quoted, and a quote is escaped exactly when it
is preceded by an odd run of backslashes; the tracker follows that rule by
consuming backslash pairs as it goes.
"""

from collections.abc import Generator


class StringStateTracker:
    """Tracks whether a left-to-right scan is inside a JSON string literal."""

    def __init__(self) -> None:
        self.in_string = False
        self.escape_next = False

    def update_state(self, char: str) -> bool:
        """
        Update string state with the next character.

        Returns:
            True if ``char`` is content of a string literal. The opening and
            closing quotes themselves report False.
        """
        if self.in_string:
            if self.escape_next:
                self.escape_next = False
                return True
            if char == "\\":
                self.escape_next = True
                return True
            if char == '"':
                self.in_string = False
                return False
            return True

        if char == '"':
            self.in_string = True
        return False

    def reset(self) -> None:
        """Reset string state tracking."""
        self.in_string = False
        self.escape_next = False


def iterate_with_string_tracking(
    text: str, start: int = 0
) -> Generator[tuple[int, str, bool], None, None]:
    """
    Iterate through text with string state tracking.

    Yields:
        Tuple of (index, character, inside_string_content)
    """
    tracker = StringStateTracker()
    for i in range(start, len(text)):
        char = text[i]
        yield i, char, tracker.update_state(char)


def find_object_end(text: str, start: int) -> int:
    """
    Find the brace that closes the object opening at ``start``.

    Braces inside string literals are ignored.

    Returns:
        Index of the closing brace, or -1 if the object never closes.
    """
    if start >= len(text) or text[start] != "{":
        return -1

    depth = 0
    for i, char, in_string in iterate_with_string_tracking(text, start):
        if in_string or char == '"':
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1
