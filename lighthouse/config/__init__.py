"""Configuration for the Lighthouse offline outbox."""
from .settings import ENV_PREFIX, OutboxConfig

__all__ = ["ENV_PREFIX", "OutboxConfig"]
