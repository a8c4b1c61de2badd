import os

import pytest
from pydantic import ValidationError

import apigwproxy
from apigwproxy.config import ProxySettings


def test_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_CONFIG_PATH", "BIND_ADDR", "LAMBDA_DETECT_ENV_VAR", "BODY_ENCODING_POLICY"):
        monkeypatch.delenv(name, raising=False)

    settings = ProxySettings(_env_file=None)

    assert settings.LOG_LEVEL == "INFO"
    assert settings.LAMBDA_DETECT_ENV_VAR == "AWS_LAMBDA_RUNTIME_API"
    assert settings.BODY_ENCODING_POLICY == "ascii"
    assert settings.bind_host == "0.0.0.0"
    assert settings.bind_port == 8080


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BODY_ENCODING_POLICY", "utf8")
    monkeypatch.setenv("BIND_ADDR", "127.0.0.1:9000")

    settings = ProxySettings(_env_file=None)

    assert settings.BODY_ENCODING_POLICY == "utf8"
    assert settings.bind_host == "127.0.0.1"
    assert settings.bind_port == 9000


def test_unknown_encoding_policy_is_rejected(monkeypatch):
    monkeypatch.setenv("BODY_ENCODING_POLICY", "latin1")

    with pytest.raises(ValidationError):
        ProxySettings(_env_file=None)


def test_log_config_default_is_the_packaged_file(monkeypatch):
    monkeypatch.delenv("LOG_CONFIG_PATH", raising=False)

    settings = ProxySettings(_env_file=None)

    assert os.path.dirname(settings.LOG_CONFIG_PATH) == os.path.dirname(apigwproxy.__file__)
    assert os.path.isfile(settings.LOG_CONFIG_PATH)


def test_log_config_path_can_be_overridden(monkeypatch):
    monkeypatch.setenv("LOG_CONFIG_PATH", "/etc/apigwproxy/log.yaml")

    assert ProxySettings(_env_file=None).LOG_CONFIG_PATH == "/etc/apigwproxy/log.yaml"
