"""Tests for the log scrubbing filter."""

from __future__ import annotations

import logging

from app.security.logging_filters import SensitiveFilter, redact


def test_redact_masks_tokens_and_passwords() -> None:
    text = 'Authorization: Bearer abc.def-ghi {"password": "hunter22"}'
    cleaned = redact(text)
    assert "abc.def-ghi" not in cleaned
    assert "hunter22" not in cleaned
    assert cleaned.count("**REDACTED**") == 2


def test_filter_scrubs_message_and_arguments() -> None:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="login %s",
        args=("password=swordfish",),
        exc_info=None,
    )

    assert SensitiveFilter().filter(record) is True
    assert "swordfish" not in record.getMessage()
