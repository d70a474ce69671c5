"""Queued action record and its status vocabulary.

A QueuedAction is one deferred outbound write. It is persisted as a single
JSON object per line in the queue file; to_dict/from_dict define that layout.
"""
import json
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from lighthouse.core.constants import HTTP_METHODS
from lighthouse.core.receipt import utc_iso


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO 8601 timestamp.

    Raises:
        TypeError: value is not a string
        ValueError: value is not ISO 8601 or carries no UTC offset
    """
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {value!r}")
    return moment


class ActionStatus(str, Enum):
    """Lifecycle status of a queued action."""
    PENDING = "pending"
    SYNCING = "syncing"
    SYNCED = "synced"
    FAILED = "failed"


@dataclass
class QueuedAction:
    """One deferred outbound write."""
    id: str
    method: str
    url: str
    timestamp: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    retry_count: int = 0
    status: ActionStatus = ActionStatus.PENDING
    error: str | None = None

    @property
    def created_at(self) -> datetime:
        """Creation time as an aware datetime."""
        return parse_timestamp(self.timestamp)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
            "body": self.body,
            "timestamp": self.timestamp,
            "retry_count": self.retry_count,
            "status": self.status.value,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "QueuedAction":
        timestamp = d["timestamp"]
        parse_timestamp(timestamp)
        return cls(
            id=d["id"],
            method=d["method"],
            url=d["url"],
            timestamp=timestamp,
            headers=dict(d.get("headers") or {}),
            body=d.get("body"),
            retry_count=int(d.get("retry_count", 0)),
            status=ActionStatus(d.get("status", ActionStatus.PENDING.value)),
            error=d.get("error"),
        )

    def merged(self, **fields) -> "QueuedAction":
        """Return a copy with fields overwritten (id and timestamp are immutable)."""
        for immutable in ("id", "timestamp"):
            if immutable in fields and fields[immutable] != getattr(self, immutable):
                raise ValueError(f"QueuedAction.{immutable} cannot be changed")
        if "status" in fields:
            fields["status"] = ActionStatus(fields["status"])
        return replace(self, **fields)


def new_action(
    method: str,
    url: str,
    created_at: datetime,
    headers: dict[str, str] | None = None,
    body: Any = None,
) -> QueuedAction:
    """Build a fresh pending action.

    Args:
        method: HTTP method, case-insensitive
        url: Absolute URL or path relative to the configured base URL
        created_at: Creation time from the injected clock
        headers: Extra headers merged over transport defaults at delivery
        body: JSON-serialisable payload

    Returns:
        QueuedAction with a new uuid4 id, status pending, retry_count 0

    Raises:
        ValueError: Unknown method, empty url, or body that cannot be serialised
    """
    method = method.upper()
    if method not in HTTP_METHODS:
        raise ValueError(f"Unsupported method '{method}', expected one of {', '.join(HTTP_METHODS)}")
    if not url:
        raise ValueError("url is required")
    try:
        json.dumps(body)
    except (TypeError, ValueError) as e:
        raise ValueError(f"body is not JSON serialisable: {e}") from e

    return QueuedAction(
        id=str(uuid.uuid4()),
        method=method,
        url=url,
        timestamp=utc_iso(created_at),
        headers={str(k): str(v) for k, v in (headers or {}).items()},
        body=body,
    )
