# src/users_api/tests/test_logging/test_formatters.py
import json
import logging
import sys

from users_api.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(level=logging.INFO):
    # a LogRecord that simulates formatting with args
    return logging.LogRecord("users_api", level, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    # attach an extra (simulate extra param)
    rec.operation = "insert"
    rec.request_id = "req-1"
    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "users_api"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["request_id"] == "req-1"
    assert data["operation"] == "insert"
    assert "version" in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="development", service="svc").format(rec))
    # non-serializable obj is stringified
    assert data["obj"] == "<X>"


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad value")
    except ValueError:
        rec = logging.LogRecord("users_api", logging.ERROR, __file__, 10, "failed", (), sys.exc_info())

    data = json.loads(JsonFormatter().format(rec))
    assert "ValueError: bad value" in data["exc_info"]
    assert data["request_id"] == "-"


def test_color_formatter_line_layout():
    rec = make_record(logging.WARNING)
    rec.request_id = "rid-7"
    line = ColorFormatter().format(rec)

    assert "WARNING" in line
    assert "rid-7" in line
    assert line.endswith("hello tester")
    assert ColorFormatter.COLOR_CODES["WARNING"] in line
