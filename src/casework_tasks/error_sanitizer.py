"""Redaction of storage error text before it is logged or put on a DomainError."""

import re
from typing import List, Pattern, Tuple

# Applied in order: URLs first so their paths are not redacted piecemeal.
_REDACTIONS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"\b(?:sqlite|postgresql|mysql)(?:\+\w+)?://[^\s\"']*", re.IGNORECASE), "<database-url>"),
    (re.compile(r"(?:password|passwd|pwd)\s*[=:]\s*['\"]?[^\s\"',;]+", re.IGNORECASE), "<credential>"),
    (re.compile(r"(?:[A-Za-z]:\\|\.{1,2}/|/)(?:[\w.\-]+[/\\])+[\w.\-]*"), "<path>"),
]


def sanitize_error_message(message: str) -> str:
    """Strip database URLs, credentials and filesystem paths from ``message``."""
    for pattern, replacement in _REDACTIONS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_exception(exception: BaseException) -> str:
    """``"<ExceptionType>: <redacted message>"`` for a storage exception."""
    return f"{type(exception).__name__}: {sanitize_error_message(str(exception))}"
