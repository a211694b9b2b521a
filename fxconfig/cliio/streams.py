"""Reading command input and writing command output."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO

import click

DEFAULT_MAX_INPUT_SIZE = 20 * 1024 * 1024


class InputError(ValueError):
    """Raised when command input is missing, ambiguous or too large."""


@dataclass
class IOFlags:
    """Input and output file paths given on the command line."""

    input: str = ""
    output: str = ""

    def bind(self, command: click.Command) -> None:
        """Register ``--input`` and ``--output`` options on a command."""

        def _store(attr: str):
            def callback(_ctx, _param, value):
                setattr(self, attr, value)
                return value

            return callback

        command.params.append(
            click.Option(
                ["--input"],
                default="",
                help="Input file (optional, defaults to stdin)",
                callback=_store("input"),
            )
        )
        command.params.append(
            click.Option(
                ["--output"],
                default="",
                help="Output file (optional, defaults to stdout)",
                callback=_store("output"),
            )
        )


def _is_pipe(stdin: BinaryIO | None) -> bool:
    if stdin is None:
        return False
    isatty = getattr(stdin, "isatty", None)
    if isatty is None:
        return True
    try:
        return not isatty()
    except (OSError, ValueError):
        return False


def resolve_input(input_file: str, stdin: BinaryIO | None) -> bytes:
    """Read input from a file or from piped standard input, within the size limit."""
    pipe = _is_pipe(stdin)
    if input_file and pipe:
        raise InputError("cannot use --input and stdin together")
    if input_file:
        path = os.path.normpath(input_file)
        if ".." in path:
            raise InputError("path traversal not allowed")
        with open(path, "rb") as handle:
            if os.fstat(handle.fileno()).st_size > DEFAULT_MAX_INPUT_SIZE:
                raise InputError(
                    "input file exceeds maximum allowed size of "
                    f"{DEFAULT_MAX_INPUT_SIZE} bytes"
                )
            return read_with_limit(handle, DEFAULT_MAX_INPUT_SIZE)
    if pipe:
        return read_with_limit(stdin, DEFAULT_MAX_INPUT_SIZE)
    raise InputError("no input provided (use --input or pipe data via stdin)")


def write_output(output_file: str, data: bytes, stdout: BinaryIO) -> None:
    """Write data to a file readable only by its owner, or to standard output."""
    if output_file:
        fd = os.open(output_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        return
    stdout.write(data)


def read_with_limit(stream: BinaryIO, max_bytes: int) -> bytes:
    """Read the whole stream, failing if it holds more than ``max_bytes``."""
    chunks = []
    remaining = max_bytes + 1
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) > max_bytes:
        raise InputError(f"input exceeds maximum allowed size of {max_bytes} bytes")
    return data