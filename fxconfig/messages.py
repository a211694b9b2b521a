"""Message types exchanged with the ordering, query and notification services."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class Status(IntEnum):
    """Final status of a transaction as reported by the committer."""

    STATUS_UNSPECIFIED = 0
    COMMITTED = 1
    ABORTED_SIGNATURE_INVALID = 2

    @classmethod
    def name_of(cls, code: int) -> str:
        """Return the symbolic name of a status code, or an empty string if unknown."""
        try:
            return cls(code).name
        except ValueError:
            return ""


class BroadcastStatus(IntEnum):
    """Status returned by the ordering service for a broadcast envelope."""

    UNKNOWN = 0
    SUCCESS = 200
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
    REQUEST_ENTITY_TOO_LARGE = 413
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503


@dataclass
class TxStatusEvent:
    """Status of a single transaction carried in a notification."""

    tx_id: str
    status: int


@dataclass
class NotificationRequest:
    """Request to be notified about the final status of transactions."""

    tx_ids: list[str]
    timeout: float


@dataclass
class NotificationResponse:
    """Batch of status events and timed-out transaction IDs."""

    tx_status_events: list[TxStatusEvent] = field(default_factory=list)
    timeout_tx_ids: list[str] = field(default_factory=list)


@dataclass
class Envelope:
    """Signed payload submitted to the ordering service."""

    payload: bytes
    signature: bytes