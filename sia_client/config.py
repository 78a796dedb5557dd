"""
Configuration helpers for the Sia walletd client.

This module centralizes base URL selection, API password loading, default
timeouts, and logging setup. No secrets are stored in the repository; the
password is read from environment or a local file if present.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Default connection settings
DEFAULT_BASE_URL = os.getenv("SIA_API_URL", "http://localhost:9980/")
DEFAULT_TIMEOUT = 10.0


def _load_timeout() -> float:
    raw_timeout = os.getenv("SIA_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return DEFAULT_TIMEOUT
    return DEFAULT_TIMEOUT


# Password handling
PASSWORD_ENV_VAR = "SIA_API_PASSWORD"
PASSWORD_FILE_ENV_VAR = "SIA_API_PASSWORD_FILE"
DEFAULT_PASSWORD_FILE = "apipassword.txt"

LOG_LEVEL = os.getenv("SIA_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("SIA_LOG_FORMAT", "json")  # json or plain


def load_password() -> Optional[str]:
    """
    Load the walletd API password from environment or a local file.

    Returns:
        The password string if available, otherwise None. The password is
        never logged.
    """
    env_password = os.getenv(PASSWORD_ENV_VAR)
    if env_password:
        return env_password.strip()

    password_path = os.getenv(PASSWORD_FILE_ENV_VAR, DEFAULT_PASSWORD_FILE)
    if password_path:
        path = Path(password_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip() or None

    return None


@dataclass(slots=True, frozen=True)
class ClientConf:
    """Connection settings for one walletd node. Immutable once built."""

    url: str
    password: str
    timeout: Optional[float] = None

    @property
    def effective_timeout(self) -> float:
        return DEFAULT_TIMEOUT if self.timeout is None else float(self.timeout)

    @classmethod
    def from_env(cls) -> "ClientConf":
        """Build a configuration from SIA_* environment variables."""
        return cls(
            url=os.getenv("SIA_API_URL", DEFAULT_BASE_URL),
            password=load_password() or "",
            timeout=_load_timeout(),
        )


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in ("method", "url", "status_code", "error"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        return json.dumps(payload)


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Install a root handler; meant for applications and scripts, not the library."""
    resolved_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    if (fmt or LOG_FORMAT).lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=resolved_level, handlers=[handler], force=True)
    else:
        logging.basicConfig(level=resolved_level, force=True)
