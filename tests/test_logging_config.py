from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.history",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="History fetch failed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extra_fields() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    message = formatter.format(
        _record(url="http://localhost:6729/history", status="transport_failure", status_code=None)
    )

    assert message == (
        "WARNING History fetch failed | url=http://localhost:6729/history status=transport_failure"
    )


def test_formatter_leaves_plain_records_untouched() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["reading_count"])

    assert formatter.format(_record(url="ignored")) == "History fetch failed"
