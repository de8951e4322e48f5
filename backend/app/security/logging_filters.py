"""Logging filters that scrub credentials from log output."""

from __future__ import annotations

import logging
import re

_REDACTED = "**REDACTED**"

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|access_token\"?\s*[:=]\s*\"?[\w\.-]+\"?"
    r"|password\"?\s*[:=]\s*\"?[^\"\s&,}]+\"?)",
    re.IGNORECASE,
)


def redact(text: str) -> str:
    """Return ``text`` with bearer tokens and passwords masked."""
    return _SENSITIVE_PATTERN.sub(_REDACTED, text)


class SensitiveFilter(logging.Filter):
    """Mask sensitive values in a record's message and string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["SensitiveFilter", "redact"]
