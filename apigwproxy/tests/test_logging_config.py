"""
Where: apigwproxy/tests/test_logging_config.py
What: Unit tests for JSON log formatting and YAML logging setup.
Why: Log lines must carry the request id of the invocation that wrote them.
"""

import json
import logging
import logging.config
import sys

from apigwproxy.config import ProxySettings
from apigwproxy.core import logging_config, request_context


def _record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="apigwproxy.test",
        level=logging.INFO,
        pathname="test_path.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_custom_json_formatter_includes_request_id():
    """The formatter picks the request id up from context."""
    request_context.set_request_id("req-abc123")

    log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert log_json["message"] == "Test message"
    assert log_json["level"] == "INFO"
    assert log_json["logger"] == "apigwproxy.test"
    assert log_json["aws_request_id"] == "req-abc123"
    assert "_time" in log_json


def test_custom_json_formatter_includes_extra_fields():
    record = _record(status_code=200, url="/test", aws_request_id="explicit-id")

    log_json = json.loads(logging_config.CustomJsonFormatter().format(record))

    assert log_json["status_code"] == 200
    assert log_json["url"] == "/test"
    assert log_json["aws_request_id"] == "explicit-id"


def test_custom_json_formatter_without_request_id():
    request_context.clear_request_id()

    log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert "aws_request_id" not in log_json


def test_custom_json_formatter_includes_exception():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    log_json = json.loads(logging_config.CustomJsonFormatter().format(record))

    assert "ValueError: bad value" in log_json["exception"]


def test_setup_logging_falls_back_to_basic_config(monkeypatch, tmp_path):
    captured = {}
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    logging_config.setup_logging(str(tmp_path / "missing.yaml"))

    assert captured == {"level": "INFO"}


def test_setup_logging_substitutes_environment(monkeypatch, tmp_path):
    config_file = tmp_path / "log.yaml"
    config_file.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "root:\n"
        "  level: ${LOG_LEVEL}\n",
        encoding="utf-8",
    )
    captured = {}
    monkeypatch.delenv("LOG_CONFIG_PATH", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(logging.config, "dictConfig", lambda config: captured.update(config))

    logging_config.setup_logging(str(config_file))

    assert captured["root"] == {"level": "DEBUG"}


def test_setup_logging_defaults_log_level(monkeypatch, tmp_path):
    config_file = tmp_path / "log.yaml"
    config_file.write_text("version: 1\nroot:\n  level: ${LOG_LEVEL}\n", encoding="utf-8")
    captured = {}
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setattr(logging.config, "dictConfig", lambda config: captured.update(config))

    logging_config.setup_logging(str(config_file))

    assert captured["root"] == {"level": "INFO"}


def test_setup_logging_defaults_to_configured_path(monkeypatch, tmp_path):
    config_file = tmp_path / "from_settings.yaml"
    config_file.write_text("version: 1\nroot:\n  level: WARNING\n", encoding="utf-8")
    captured = {}
    monkeypatch.setattr(logging_config.config, "LOG_CONFIG_PATH", str(config_file))
    monkeypatch.setattr(logging.config, "dictConfig", lambda config: captured.update(config))

    logging_config.setup_logging()

    assert captured["root"] == {"level": "WARNING"}


def test_packaged_log_config_uses_json_formatter(monkeypatch):
    """The YAML shipped with the package is what a deployed function loads."""
    captured = {}
    monkeypatch.delenv("LOG_CONFIG_PATH", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(logging.config, "dictConfig", lambda config: captured.update(config))

    logging_config.setup_logging(ProxySettings(_env_file=None).LOG_CONFIG_PATH)

    assert captured["formatters"]["json"]["()"] == (
        "apigwproxy.core.logging_config.CustomJsonFormatter"
    )
    assert captured["loggers"]["apigwproxy"]["level"] == "DEBUG"
    assert captured["root"]["level"] == "DEBUG"
