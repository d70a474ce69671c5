"""Offline outbox configuration.

All settings can be overridden via environment variables with the
LIGHTHOUSE_ prefix.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from lighthouse.core.constants import (
    DEFAULT_POLL_INTERVAL_S,
    DEFAULT_PROBE_HOST,
    DEFAULT_PROBE_PORT,
    DEFAULT_PROBE_TIMEOUT_S,
    DEFAULT_REQUEST_TIMEOUT_MS,
    RETENTION_DAYS,
)

ENV_PREFIX = "LIGHTHOUSE_"


def _number(name: str, cast):
    raw = os.environ[f"{ENV_PREFIX}{name}"]
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None


def _default_queue_path() -> Path:
    return Path.home() / ".lighthouse" / "offline_queue.jsonl"


@dataclass
class OutboxConfig:
    """Offline outbox configuration."""

    # Storage
    queue_path: Path = field(default_factory=_default_queue_path)

    # Delivery
    base_url: str = ""
    auth_token: str = ""
    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS

    # Connectivity probe
    probe_host: str = DEFAULT_PROBE_HOST
    probe_port: int = DEFAULT_PROBE_PORT
    probe_timeout_s: float = DEFAULT_PROBE_TIMEOUT_S
    poll_interval_s: float = DEFAULT_POLL_INTERVAL_S

    # Cleanup
    retention_days: int = RETENTION_DAYS

    @classmethod
    def from_env(cls) -> "OutboxConfig":
        """Load configuration from environment variables.

        Raises:
            ValueError: A numeric variable does not parse
        """
        config = cls()

        # Storage
        if f"{ENV_PREFIX}QUEUE_PATH" in os.environ:
            config.queue_path = Path(os.environ[f"{ENV_PREFIX}QUEUE_PATH"]).expanduser()

        # Delivery
        if f"{ENV_PREFIX}BASE_URL" in os.environ:
            config.base_url = os.environ[f"{ENV_PREFIX}BASE_URL"]
        if f"{ENV_PREFIX}AUTH_TOKEN" in os.environ:
            config.auth_token = os.environ[f"{ENV_PREFIX}AUTH_TOKEN"]
        if f"{ENV_PREFIX}REQUEST_TIMEOUT_MS" in os.environ:
            config.request_timeout_ms = _number("REQUEST_TIMEOUT_MS", int)

        # Connectivity probe
        if f"{ENV_PREFIX}PROBE_HOST" in os.environ:
            config.probe_host = os.environ[f"{ENV_PREFIX}PROBE_HOST"]
        if f"{ENV_PREFIX}PROBE_PORT" in os.environ:
            config.probe_port = _number("PROBE_PORT", int)
        if f"{ENV_PREFIX}PROBE_TIMEOUT_S" in os.environ:
            config.probe_timeout_s = _number("PROBE_TIMEOUT_S", float)
        if f"{ENV_PREFIX}POLL_INTERVAL_S" in os.environ:
            config.poll_interval_s = _number("POLL_INTERVAL_S", float)

        # Cleanup
        if f"{ENV_PREFIX}RETENTION_DAYS" in os.environ:
            config.retention_days = _number("RETENTION_DAYS", int)

        return config

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if self.base_url and not self.base_url.startswith(("http://", "https://")):
            errors.append("base_url must start with http:// or https://")

        if self.request_timeout_ms <= 0:
            errors.append("request_timeout_ms must be positive")

        if not (0 < self.probe_port < 65536):
            errors.append("probe_port must be between 1 and 65535")

        if self.probe_timeout_s <= 0:
            errors.append("probe_timeout_s must be positive")

        if self.poll_interval_s <= 0:
            errors.append("poll_interval_s must be positive")

        if self.retention_days < 1:
            errors.append("retention_days must be at least 1")

        return errors
