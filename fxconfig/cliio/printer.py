"""Formatted printing of command results and errors."""

from __future__ import annotations

import base64
import dataclasses
import enum
import json
from typing import Any, TextIO

import yaml


class Format(str, enum.Enum):
    """Output format of a printer."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def _plain(value: Any) -> Any:
    """Convert dataclasses, enums and bytes into plain serialisable values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, enum.Enum):
        return _plain(value.value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class CLIPrinter:
    """Prints values as plain text, JSON or YAML."""

    def __init__(self, out: TextIO, err_out: TextIO, format: Format = Format.TABLE):
        self.out = out
        self.err_out = err_out
        self.format = Format(format)

    def print(self, value: Any) -> None:
        """Print a value in the configured format, reporting failures as errors."""
        try:
            self._print(value)
        except Exception as exc:  # noqa: BLE001 - reported to the user instead
            self.print_error(exc)

    def _print(self, value: Any) -> None:
        if self.format is Format.JSON:
            self.out.write(json.dumps(_plain(value), indent=2, ensure_ascii=False) + "\n")
        elif self.format is Format.YAML:
            text = yaml.safe_dump(
                _plain(value), default_flow_style=False, allow_unicode=True
            )
            if text.endswith("\n...\n"):
                text = text[: -len("...\n")]
            self.out.write(text)
        else:
            self.out.write(str(value))

    def print_error(self, error: BaseException) -> None:
        """Print an error, as JSON in JSON mode and as text otherwise."""
        if self.format is not Format.JSON:
            self.err_out.write(f"Error: {error}\n")
            return
        self.err_out.write(json.dumps({"error": str(error)}) + "\n")