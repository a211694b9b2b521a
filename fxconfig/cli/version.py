"""The ``version`` command: show build and platform information."""

from __future__ import annotations

import platform
from importlib import metadata

import click

COMMIT_SHA = "unknown"

_VERSION_HELP = """Display detailed version information including:

\b
  - fxconfig version
  - Python version
  - Git commit SHA
  - Operating system and architecture
"""


def _package_version() -> str:
    try:
        return metadata.version("fxconfig")
    except metadata.PackageNotFoundError:
        return "unknown"


def _title(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def show_line(title: str, value: str) -> str:
    """Format one line of version information with the title capitalised and padded."""
    return f" {_title(title) + ':':<16} {value}"


def new_version_command() -> click.Command:
    """Return the command that prints version information."""

    @click.command(
        name="version", short_help="Display version information", help=_VERSION_HELP
    )
    def version() -> None:
        click.echo("fxconfig")
        click.echo(show_line("Version", _package_version()))
        click.echo(show_line("Python version", platform.python_version()))
        click.echo(show_line("Commit", COMMIT_SHA))
        click.echo(
            show_line("OS/Arch", f"{platform.system().lower()}/{platform.machine()}")
        )

    return version