"""Regular expression support for the pattern-based keywords.

JSON Schema patterns are not anchored, so a pattern matches when it is found
anywhere in the string.
"""

import re
from enum import Enum
from typing import Pattern


class RegexErrorKind(Enum):
    """Why a pattern could not be compiled."""
    SYNTAX_ERROR = 'syntax'
    RESOURCE_LIMIT_EXCEEDED = 'resource-limit'
    OTHER = 'other'


class PatternError(Exception):
    """Exception raised when a schema pattern cannot be compiled."""

    def __init__(self, pattern: str, kind: RegexErrorKind, detail: str):
        self.pattern = pattern
        self.kind = kind
        self.detail = detail
        super().__init__(f"Invalid regular expression {pattern!r}: {detail}")


def compile_pattern(pattern: str) -> Pattern:
    """Compiles a schema pattern.

    Args:
        pattern: The regular expression source

    Returns:
        The compiled pattern

    Raises:
        PatternError: If the pattern is malformed or too large to compile
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, RegexErrorKind.SYNTAX_ERROR, e.msg) from e
    except (RecursionError, OverflowError, MemoryError) as e:
        raise PatternError(pattern, RegexErrorKind.RESOURCE_LIMIT_EXCEEDED, "regex too big") from e
    except (TypeError, ValueError) as e:
        raise PatternError(pattern, RegexErrorKind.OTHER, str(e)) from e


def matches(compiled: Pattern, text: str) -> bool:
    """Returns True if the compiled pattern is found anywhere in text."""
    return compiled.search(text) is not None
