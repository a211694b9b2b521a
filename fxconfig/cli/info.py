"""The ``info`` command: show the effective configuration."""

from __future__ import annotations

import dataclasses
from typing import Any

import click
import yaml

from fxconfig.cli.context import CLIContext

_INFO_HELP = """Print the configuration in effect, as YAML, once every source is merged.

\b
Sources are applied in this order, each one overriding those before it:
  defaults, the per-user file under the home directory, the file in the
  current project, the file given with --config, and finally FXCONFIG_*
  environment variables.

Run it to check the settings before doing any real work.
"""


def _config_yaml(config: Any) -> str:
    if dataclasses.is_dataclass(config) and not isinstance(config, type):
        config = dataclasses.asdict(config)
    text = yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
    if text.endswith("\n...\n"):
        text = text[: -len("...\n")]
    return text


def new_info_command(ctx: CLIContext) -> click.Command:
    """Return the command that prints the effective configuration as YAML."""

    @click.command(
        name="info", short_help="Display effective configuration", help=_INFO_HELP
    )
    def info() -> None:
        ctx.printer.print(_config_yaml(ctx.config))

    return info