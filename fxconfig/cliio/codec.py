"""JSON encoding of transactions for command-line input and output."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Dict, Tuple, Union


class CodecError(ValueError):
    """Raised when a transaction cannot be encoded or decoded."""


class JSONCodec:
    """Encodes a transaction and its ID as a JSON document and back."""

    def encode(self, tx_id: str, tx: Union[Mapping, None]) -> bytes:
        """Return the indented JSON document holding ``txID`` and ``tx``."""
        if tx is None:
            raise CodecError("tx is nil")
        if not isinstance(tx, Mapping):
            raise CodecError("tx must be a mapping")
        try:
            text = json.dumps(
                {"txID": tx_id, "tx": dict(tx)},
                indent=2,
                sort_keys=True,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as exc:
            raise CodecError(str(exc)) from exc
        return text.encode("utf-8")

    def decode(self, data: Union[bytes, str]) -> Tuple[str, Dict[str, Any]]:
        """Parse a JSON document into its transaction ID and transaction."""
        try:
            carrier = json.loads(data)
        except (ValueError, UnicodeDecodeError) as exc:
            raise CodecError(f"invalid transaction document: {exc}") from exc
        if not isinstance(carrier, dict):
            raise CodecError("transaction document must be a JSON object")

        tx_id = carrier.get("txID")
        if tx_id is None:
            tx_id = ""
        if not isinstance(tx_id, str):
            raise CodecError("txID must be a string")

        if "tx" not in carrier:
            raise CodecError("transaction document has no tx")
        tx = carrier["tx"]
        if not isinstance(tx, dict):
            raise CodecError("tx must be a JSON object")
        return tx_id, tx