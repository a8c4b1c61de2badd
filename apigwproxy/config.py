"""
Adapter configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProxySettings(BaseSettings):
    """
    Configuration for both the Lambda adapter and the HTTP server.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default=str(Path(__file__).with_name("apigwproxy_log.yaml")),
        description="Logging config (YAML dictConfig) path, defaults to the packaged file",
    )

    # Server settings
    BIND_ADDR: str = Field(default="0.0.0.0:8080", description="Listen address")

    # Lambda detection
    LAMBDA_DETECT_ENV_VAR: str = Field(
        default="AWS_LAMBDA_RUNTIME_API",
        description="Environment variable whose presence means we run inside Lambda",
    )

    # Response body transport
    BODY_ENCODING_POLICY: Literal["ascii", "utf8"] = Field(
        default="ascii",
        description="Which bodies are sent base64: 'ascii' for anything outside printable "
        "ASCII, 'utf8' for anything that is not valid UTF-8",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    @property
    def bind_host(self) -> str:
        host, _, _ = self.BIND_ADDR.rpartition(":")
        return host or "0.0.0.0"

    @property
    def bind_port(self) -> int:
        _, _, port = self.BIND_ADDR.rpartition(":")
        return int(port)


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = ProxySettings()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
