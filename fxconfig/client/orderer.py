"""Client for submitting transactions to the ordering service."""

from __future__ import annotations

import base64
import json
import os
import time
from typing import Any, Callable, Mapping, Protocol

from fxconfig.messages import BroadcastStatus, Envelope

MESSAGE_HEADER_TYPE = 3
NONCE_SIZE = 24


class BroadcastError(RuntimeError):
    """Raised when the ordering service rejects an envelope."""


class Signer(Protocol):
    """Identity that signs envelopes."""

    def serialize(self) -> bytes: ...

    def sign(self, message: bytes) -> bytes: ...


class BroadcastStream(Protocol):
    """Stream of envelopes to the ordering service."""

    def send(self, envelope: Envelope) -> None: ...

    def recv(self) -> int: ...


class AtomicBroadcaster(Protocol):
    """Ordering service that opens broadcast streams."""

    def broadcast(self) -> BroadcastStream: ...


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"cannot serialise {type(value).__name__}")


def _status_text(status: int) -> str:
    try:
        return f"{int(status)} ({BroadcastStatus(status).name})"
    except ValueError:
        return str(int(status))


class OrdererClient:
    """Signs transactions into envelopes and broadcasts them to the orderer."""

    def __init__(
        self,
        broadcaster: AtomicBroadcaster | None,
        channel: str,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.channel = channel
        self._broadcaster = broadcaster
        self._on_close = on_close

    def close(self) -> None:
        """Release the connection to the ordering service."""
        if self._on_close is not None:
            self._on_close()

    def broadcast(self, signer: Signer | None, tx_id: str, tx: Mapping[str, Any]) -> None:
        """Sign the transaction and submit it, raising if the orderer rejects it."""
        envelope = self._create_signed_envelope(signer, tx_id, tx)
        self._send(envelope)

    def _send(self, envelope: Envelope) -> None:
        if self._broadcaster is None:
            raise ValueError("require client")
        stream = self._broadcaster.broadcast()
        try:
            stream.send(envelope)
            status = stream.recv()
        finally:
            close_stream = getattr(stream, "close", None)
            if callable(close_stream):
                close_stream()
        if status != BroadcastStatus.SUCCESS:
            raise BroadcastError(f"got error {_status_text(status)}")

    def _create_signed_envelope(
        self, signer: Signer | None, tx_id: str, tx: Mapping[str, Any]
    ) -> Envelope:
        if signer is None:
            raise ValueError("require Signer")

        payload = {
            "header": {
                "channel_header": {
                    "type": MESSAGE_HEADER_TYPE,
                    "version": 0,
                    "channel_id": self.channel,
                    "epoch": 0,
                    "timestamp": {"seconds": int(time.time()), "nanos": 0},
                    "tx_id": tx_id,
                },
                "signature_header": {
                    "creator": signer.serialize(),
                    "nonce": os.urandom(NONCE_SIZE),
                },
            },
            "data": dict(tx),
        }
        payload_bytes = json.dumps(
            payload, sort_keys=True, separators=(",", ":"), default=_json_default
        ).encode("utf-8")
        signature = signer.sign(payload_bytes)
        return Envelope(payload=payload_bytes, signature=signature)