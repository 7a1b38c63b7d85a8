import json
import logging
import sys

import pytest

from urlshortener.logging_config import JsonFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg="url added: id=%s", args=(1,), **extra):
    record = logging.LogRecord("urlshortener.main", logging.INFO, __file__, 10, msg, args, None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_fields():
    log = json.loads(JsonFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "urlshortener.main"
    assert log["message"] == "url added: id=1"
    assert log["timestamp"].endswith("Z")
    assert "lineno" not in log


def test_json_formatter_includes_extra():
    log = json.loads(JsonFormatter().format(_record(request_id="req-42", alias="abc123")))
    assert log["request_id"] == "req-42"
    assert log["alias"] == "abc123"


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    log = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in log["exc_info"]


@pytest.mark.parametrize(
    "environment, level, formatter_type",
    [
        ("local", logging.DEBUG, logging.Formatter),
        ("dev", logging.DEBUG, JsonFormatter),
        ("prod", logging.INFO, JsonFormatter),
    ],
)
def test_setup_logging(environment, level, formatter_type):
    setup_logging(environment)
    root = logging.getLogger()
    assert root.level == level
    assert type(root.handlers[0].formatter) is formatter_type
    assert logging.getLogger("sqlalchemy").level == logging.WARNING
