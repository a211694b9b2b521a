"""The top-level ``fxconfig`` command."""

from __future__ import annotations

from typing import Any, Callable, Optional

import click

from fxconfig.cli.context import Application, CLIContext
from fxconfig.cli.info import new_info_command
from fxconfig.cli.namespace import new_ns_root_command
from fxconfig.cli.tx import new_tx_root_command
from fxconfig.cli.version import new_version_command
from fxconfig.cliio.codec import JSONCodec
from fxconfig.cliio.printer import CLIPrinter, Format

_ROOT_HELP = """fxconfig is a command-line tool for managing Fabric-X namespaces and transactions.

\b
Namespaces in Fabric-X define isolated execution environments with their own
endorsement policies. This tool allows you to:
  - Create and update namespaces with custom endorsement policies
  - Query installed namespaces and their configurations
  - Endorse, merge, and submit transactions
  - Manage transaction lifecycle across multiple organizations

\b
Configuration can be provided via:
  - Config file (--config flag or $HOME/.fxconfig/config.yaml, .fxconfig/config.yaml)
  - Environment variables (FXCONFIG_*)
"""


def new_root_command(
    ctx: CLIContext,
    build_app: Callable[[Any], Application],
    load_config: Callable[[Optional[str]], Any],
) -> click.Group:
    """Return the root command with all subcommands.

    Before a subcommand runs, the configuration is loaded with ``load_config``
    (given the ``--config`` path, or None), and the context is filled with it,
    a table printer, the JSON codec and the application built by ``build_app``.
    """

    @click.group(
        name="fxconfig",
        short_help="CLI tool for managing Fabric-X namespaces and transactions",
        help=_ROOT_HELP,
    )
    @click.option(
        "--config",
        "config_file",
        default="",
        help="Config file (default is $HOME/.fxconfig/config.yaml)",
    )
    def root(config_file: str) -> None:
        config = load_config(config_file or None)
        ctx.config = config
        ctx.printer = CLIPrinter(
            click.get_text_stream("stdout"),
            click.get_text_stream("stderr"),
            Format.TABLE,
        )
        ctx.codec = JSONCodec()
        ctx.app = build_app(config)

    root.add_command(new_version_command())
    root.add_command(new_info_command(ctx))
    root.add_command(new_ns_root_command(ctx))
    root.add_command(new_tx_root_command(ctx))
    return root