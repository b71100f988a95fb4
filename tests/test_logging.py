import json
import logging

import pytest

from common.logging import JsonFormatter, ServiceFilter, configure_logging


@pytest.fixture
def _restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("signed_records.pipeline", logging.INFO, __file__, 1, "stage %s", ("ok",), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_includes_context():
    out = json.loads(JsonFormatter().format(_record(agreement_id="AGR-123", stage="record_created")))
    assert out["level"] == "INFO"
    assert out["logger"] == "signed_records.pipeline"
    assert out["message"] == "stage ok"
    assert out["agreement_id"] == "AGR-123"
    assert out["stage"] == "record_created"
    assert "record_uri" not in out


def test_service_filter_does_not_override_explicit_service():
    flt = ServiceFilter("signed_records")
    plain, tagged = _record(), _record(service="other")
    assert flt.filter(plain) and flt.filter(tagged)
    assert plain.service == "signed_records"
    assert tagged.service == "other"


def test_configure_logging_json(_restore_root):
    handler = configure_logging("json", service_name="signed_records", level="debug")

    root = logging.getLogger()
    assert root.handlers == [handler]
    assert root.level == logging.DEBUG
    assert isinstance(handler.formatter, JsonFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_configure_logging_text_from_env(monkeypatch, _restore_root):
    monkeypatch.setenv("LOG_FORMAT", "text")
    handler = configure_logging()
    assert not isinstance(handler.formatter, JsonFormatter)
    assert "%(levelname)s" in handler.formatter._fmt
