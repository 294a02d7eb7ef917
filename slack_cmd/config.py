"""Configuration helpers for slack-cmd."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .slack_client import SLACK_API_BASE, ClientOptions
from .store import default_store_path


@dataclass(slots=True)
class Settings:
    """Runtime configuration values loaded from environment variables."""

    store_path: Path
    base_url: str = SLACK_API_BASE
    timeout: Optional[float] = None
    log_level: str = "WARNING"

    def client_options(self) -> ClientOptions:
        return ClientOptions(base_url=self.base_url, timeout=self.timeout)


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from the environment, optionally from a specific file."""

    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    store_path = os.getenv("SLACK_CMD_CONFIG_PATH")
    raw_timeout = os.getenv("SLACK_CMD_TIMEOUT")
    timeout: Optional[float] = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigError(f"SLACK_CMD_TIMEOUT must be a number, got {raw_timeout!r}") from exc

    return Settings(
        store_path=Path(store_path).expanduser() if store_path else default_store_path(),
        base_url=os.getenv("SLACK_API_BASE_URL", SLACK_API_BASE),
        timeout=timeout,
        log_level=os.getenv("SLACK_CMD_LOG_LEVEL", "WARNING").upper(),
    )


__all__ = ["Settings", "load_settings"]
