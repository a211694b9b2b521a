"""Reusable command-line options."""

from __future__ import annotations

from typing import Callable, TypeVar

import click

F = TypeVar("F", bound=Callable)


def output_option() -> Callable[[F], F]:
    """Option for the output file path; stdout when not given."""
    return click.option(
        "--output",
        default="",
        help="Output file path (if not specified, writes to stdout)",
    )


def policy_option() -> Callable[[F], F]:
    """Required option for the endorsement policy."""
    return click.option(
        "--policy",
        required=True,
        help=(
            "Endorsement policy (e.g., \"OR('Org1MSP.member')\" or "
            "\"AND('Org1MSP.member', 'Org2MSP.member')\")"
        ),
    )


def version_option() -> Callable[[F], F]:
    """Required option for the current namespace version."""
    return click.option(
        "--version",
        type=int,
        required=True,
        help="Current namespace version (required for updates to prevent conflicts)",
    )


def namespace_deploy_options() -> Callable[[F], F]:
    """Options ``--endorse``, ``--submit`` and ``--wait`` for namespace deployment."""
    options = [
        click.option(
            "--endorse",
            is_flag=True,
            default=False,
            help="Endorse transaction with local MSP before saving/submitting",
        ),
        click.option(
            "--submit",
            is_flag=True,
            default=False,
            help="Submit transaction to ordering service (requires --endorse)",
        ),
        click.option(
            "--wait",
            is_flag=True,
            default=False,
            help="Wait for transaction finalization (implies --submit)",
        ),
    ]

    def decorate(func: F) -> F:
        for option in reversed(options):
            func = option(func)
        return func

    return decorate


def wait_option() -> Callable[[F], F]:
    """Flag to wait for transaction finalization."""
    return click.option(
        "--wait",
        is_flag=True,
        default=False,
        help="Wait for transaction to be finalized and return status code",
    )