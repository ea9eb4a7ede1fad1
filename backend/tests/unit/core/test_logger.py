from __future__ import annotations

import json
import logging
import sys

from flask import g

from tokengate.core.logger import JSONFormatter, ensure_request_id, seed_request_id


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("tokengate.test", logging.INFO, __file__, 1, "auth.login", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_extras():
    line = JSONFormatter().format(_record(account_id=5, reason="unknown_session", ignored="x"))
    payload = json.loads(line)

    assert payload["message"] == "auth.login"
    assert payload["level"] == "INFO"
    assert payload["account_id"] == 5
    assert payload["reason"] == "unknown_session"
    assert "ignored" not in payload


def test_json_formatter_includes_traceback():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]


def test_seed_request_id_replaces_a_stale_value(app):
    with app.test_request_context(headers={"X-Request-ID": "fresh"}):
        g.request_id = "stale"
        assert seed_request_id() == "fresh"
        assert ensure_request_id() == "fresh"


def test_seed_request_id_generates_without_header(app):
    with app.test_request_context():
        g.request_id = "stale"
        generated = seed_request_id()
        assert generated != "stale"
        assert ensure_request_id() == generated
