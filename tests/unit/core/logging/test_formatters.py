"""Tests for log formatters."""

import json
import logging

import pytest

from anchor_http.core.logging.formatters import (
    ColoredFormatter,
    JSONFormatter,
    TextFormatter,
    extra_fields,
    get_formatter,
)


def _record(msg="Request started", level=logging.INFO, **extra):
    record = logging.LogRecord("anchor_http", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestExtraFields:
    def test_only_custom_attributes(self):
        record = _record(method="GET", _private=1)
        assert extra_fields(record) == {"method": "GET"}


class TestJSONFormatter:
    def test_structure(self):
        output = json.loads(JSONFormatter().format(_record(method="GET", status_code=200)))

        assert output["level"] == "INFO"
        assert output["logger"] == "anchor_http"
        assert output["message"] == "Request started"
        assert output["method"] == "GET"
        assert output["status_code"] == 200
        assert "timestamp" in output

    def test_non_serializable_values(self):
        output = json.loads(JSONFormatter().format(_record(error=ValueError("x"))))
        assert output["error"] == "x"

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = logging.LogRecord("anchor_http", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        output = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in output["exception"]


class TestTextFormatter:
    def test_appends_fields(self):
        output = TextFormatter().format(_record(method="GET", url="https://x"))

        assert "[INFO] [anchor_http] Request started" in output
        assert output.endswith("method=GET url=https://x")


class TestColoredFormatter:
    def test_colors_level_and_restores_record(self):
        record = _record(level=logging.ERROR)
        output = ColoredFormatter().format(record)

        assert "\033[31mERROR\033[0m" in output
        assert record.levelname == "ERROR"


class TestGetFormatter:
    @pytest.mark.parametrize("name, cls", [
        ("json", JSONFormatter),
        ("TEXT", TextFormatter),
        ("colored", ColoredFormatter),
    ])
    def test_known(self, name, cls):
        assert type(get_formatter(name)) is cls

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")
