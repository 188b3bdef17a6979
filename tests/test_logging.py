"""
Structured log lines and free-text truncation.
"""

import logging

from promptlab.util.logging import StructuredLogger, sanitize_text


def test_sanitize_text():
    assert sanitize_text("short") == "short"
    assert sanitize_text("x" * 60) == "x" * 50 + "..."
    assert sanitize_text("x" * 60, limit=10) == "x" * 10 + "..."
    assert sanitize_text(None) is None


def test_operation_format(caplog):
    structured = StructuredLogger("promptlab.test.format")
    with caplog.at_level(logging.INFO, logger="promptlab.test.format"):
        structured.log_operation("demo.op", "success", {"count": 2})

    assert "Operation: demo.op, Status: success, Details: {'count': 2}" in caplog.text


def test_similarity_query_partial_is_warning(caplog):
    structured = StructuredLogger("promptlab.test.rank")
    with caplog.at_level(logging.INFO, logger="promptlab.test.rank"):
        structured.log_similarity_query("cosine", 3, 2, 1.23456, failed_items=1)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "Status: partial" in record.getMessage()
    assert "'duration_ms': 1.235" in record.getMessage()


def test_fallback_truncates_question(caplog):
    structured = StructuredLogger("promptlab.test.fallback")
    with caplog.at_level(logging.INFO, logger="promptlab.test.fallback"):
        structured.log_prompt_fallback("q" * 80, TypeError("bad input"))

    message = caplog.records[-1].getMessage()
    assert "q" * 50 + "..." in message
    assert "'error_type': 'TypeError'" in message


def test_llm_failure_logged_as_error(caplog):
    structured = StructuredLogger("promptlab.test.llm")
    with caplog.at_level(logging.INFO, logger="promptlab.test.llm"):
        structured.log_llm_call("m", 10, 5, status="failed", error="connection refused")

    assert caplog.records[-1].levelno == logging.ERROR
    assert "connection refused" in caplog.records[-1].getMessage()
