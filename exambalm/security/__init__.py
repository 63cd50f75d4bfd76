"""
exambalm limits and exception types.
"""

from .exceptions import ExamBalmError, ParseError, SecurityError
from .limits import LimitValidator

__all__ = ["ExamBalmError", "ParseError", "SecurityError", "LimitValidator"]
