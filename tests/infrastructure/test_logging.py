"""Tests for log formatters and handler factories."""

import json
import logging

import pytest

from doccatalog.infrastructure.logging import get_logger
from doccatalog.infrastructure.logging.formatters import JSONFormatter, StructuredFormatter, get_formatter
from doccatalog.infrastructure.logging.handlers import create_file_handler


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("doccatalog.test", logging.INFO, __file__, 10, "Blob stored", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    payload = json.loads(JSONFormatter().format(_record(storage_key="k.pdf", size=2048)))

    assert payload["message"] == "Blob stored"
    assert payload["level"] == "INFO"
    assert payload["module"] == "doccatalog.test"
    assert payload["storage_key"] == "k.pdf"
    assert payload["size"] == 2048


def test_json_formatter_stringifies_unserializable_extras():
    payload = json.loads(JSONFormatter().format(_record(path=object())))

    assert isinstance(payload["path"], str)


def test_structured_formatter():
    line = StructuredFormatter().format(_record(storage_key="k.pdf", size=2048))

    assert 'message="Blob stored"' in line
    assert 'storage_key="k.pdf"' in line
    assert "size=2048" in line


def test_unknown_format_type():
    with pytest.raises(ValueError):
        get_formatter("xml")


def test_file_handler_writes_records(tmp_path):
    log_file = tmp_path / "app.log"
    handler = create_file_handler(str(log_file), format_type="json")
    logger = logging.getLogger("doccatalog.test.file")
    logger.addHandler(handler)
    try:
        logger.warning("Export finished")
    finally:
        logger.removeHandler(handler)
        handler.close()

    assert json.loads(log_file.read_text().strip())["message"] == "Export finished"


def test_get_logger_with_context():
    logger = get_logger("doccatalog.test.context", component="export")

    assert isinstance(logger, logging.LoggerAdapter)
    assert logger.extra == {"component": "export"}
