"""The ``tx`` command group: endorse, merge and submit transactions."""

from __future__ import annotations

import os
import stat
from typing import Any, BinaryIO, Optional, Sequence

import click

from fxconfig.cli.context import CLIContext
from fxconfig.cli.flags import output_option, wait_option
from fxconfig.cliio.streams import resolve_input, write_output
from fxconfig.messages import Status

_ROOT_HELP = """Perform transaction operations such as endorsement, merging, and submission.

\b
Transaction Lifecycle:
  1. Create - Generate transaction (e.g., namespace create/update)
  2. Endorse - Collect signatures from required organizations
  3. Merge - Combine endorsements from multiple organizations
  4. Submit - Send to ordering service for finalization

\b
Multi-Organization Workflow:
  1. Org1 creates transaction: fxconfig namespace create ... --output tx.json
  2. Org1 endorses: fxconfig tx endorse tx.json --output tx_org1.json
  3. Org2 endorses: fxconfig tx endorse tx.json --output tx_org2.json
  4. Merge endorsements: fxconfig tx merge tx_org1.json tx_org2.json --output merged.json
  5. Submit: fxconfig tx submit merged.json --wait
"""

_ENDORSE_HELP = """Endorse a transaction with the local MSP's signature.

Each organization that must approve a transaction (per the endorsement policy)
needs to endorse it. This command adds the local organization's signature
to the transaction.

The transaction file must contain both the transaction ID and transaction data
in JSON format (as generated by namespace create/update commands).

If the input transaction is already endorsed, the new endorsement will be
appended to the existing endorsements.

\b
Examples:
  # Endorse transaction and save to new file
  fxconfig tx endorse tx.json --output tx_org1.json

\b
  # Endorse and write to stdout (for piping)
  fxconfig tx endorse tx.json > tx_org1.json
"""

_MERGE_HELP = """Combine endorsements from multiple organizations into a single transaction.

\b
All input transactions must:
  - Have the same transaction ID
  - Contain the same transaction data
  - Have endorsements from different organizations

The merged transaction will contain all endorsement signatures, making it
ready for submission if the endorsement policy is satisfied.

\b
Examples:
  # Merge two endorsed transactions
  fxconfig tx merge tx_org1.json tx_org2.json --output merged_tx.json

\b
  # Merge and output to stdout
  fxconfig tx merge tx_org1.json tx_org2.json > merged_tx.json
"""

_SUBMIT_HELP = """Submit an endorsed transaction to the Fabric-X ordering service.

The transaction must have sufficient endorsements to satisfy its endorsement
policy. Use 'fxconfig tx merge' to combine endorsements from multiple
organizations before submission.

\b
Status Codes (with --wait):
  0 - Transaction successfully committed
  1 - Transaction failed (see error message for details)

\b
Examples:
  # Submit transaction (returns immediately)
  fxconfig tx submit merged_tx.json

\b
  # Submit and wait for finalization
  fxconfig tx submit merged_tx.json --wait
"""


class TransactionFailedError(RuntimeError):
    """Raised when a submitted transaction was not committed."""


def _piped_stdin() -> Optional[BinaryIO]:
    """Return the process's standard input if it is a pipe or a redirected file."""
    stream = click.get_binary_stream("stdin")
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (OSError, ValueError):
        return None
    if stat.S_ISCHR(mode):
        return None
    return stream


def _require_args(args: Sequence[str], minimum: int) -> None:
    if len(args) < minimum:
        raise click.UsageError(
            f"requires at least {minimum} arg(s), only received {len(args)}"
        )


def _write(output: str, data: bytes) -> None:
    write_output(output, data, click.get_binary_stream("stdout"))


def resolve_inputs(
    ctx: CLIContext, stdin: Optional[BinaryIO], paths: Sequence[str]
) -> tuple[str, list[dict[str, Any]]]:
    """Decode every transaction file and check that all share one transaction ID."""
    txs: list[dict[str, Any]] = []
    tx_ids: set[str] = set()
    first_id = ""
    for path in paths:
        data = resolve_input(path, stdin)
        tx_id, tx = ctx.codec.decode(data)
        tx_ids.add(tx_id)
        if not first_id:
            first_id = tx_id
        txs.append(tx)

    if len(tx_ids) != 1:
        raise ValueError(
            "all transaction must have the same txID, "
            f"found {len(tx_ids)} different txIDs"
        )
    return first_id, txs


def new_tx_endorse_command(ctx: CLIContext) -> click.Command:
    """Return the command that adds the local endorsement to a transaction."""

    @click.command(
        name="endorse",
        short_help="Add endorsement signature to transaction",
        help=_ENDORSE_HELP,
    )
    @click.argument("files", nargs=-1)
    @output_option()
    def endorse(files: tuple[str, ...], output: str) -> None:
        _require_args(files, 1)
        data = resolve_input(files[0], _piped_stdin())
        tx_id, tx = ctx.codec.decode(data)
        endorsed = ctx.app.endorse_transaction(tx_id, tx)
        _write(output, ctx.codec.encode(tx_id, endorsed))

    return endorse


def new_tx_merge_command(ctx: CLIContext) -> click.Command:
    """Return the command that merges endorsed copies of one transaction."""

    @click.command(
        name="merge",
        short_help="Merge multiple endorsed transactions",
        help=_MERGE_HELP,
    )
    @click.argument("files", nargs=-1)
    @output_option()
    def merge(files: tuple[str, ...], output: str) -> None:
        _require_args(files, 2)
        tx_id, txs = resolve_inputs(ctx, _piped_stdin(), files)
        merged = ctx.app.merge_transactions(txs)
        _write(output, ctx.codec.encode(tx_id, merged))

    return merge


def new_tx_submit_command(ctx: CLIContext) -> click.Command:
    """Return the command that submits a transaction to the ordering service."""

    @click.command(
        name="submit",
        short_help="Submit transaction to ordering service",
        help=_SUBMIT_HELP,
    )
    @click.argument("files", nargs=-1)
    @wait_option()
    def submit(files: tuple[str, ...], wait: bool) -> None:
        _require_args(files, 1)
        data = resolve_input(files[0], _piped_stdin())
        tx_id, tx = ctx.codec.decode(data)

        if not wait:
            ctx.app.submit_transaction(tx_id, tx)
            return

        status = ctx.app.submit_transaction_with_wait(tx_id, tx)
        name = Status.name_of(status)
        ctx.printer.print(f"Transaction status: {name}")
        if status != Status.COMMITTED:
            raise TransactionFailedError(f"transaction failed with status: {name}")

    return submit


def new_tx_root_command(ctx: CLIContext) -> click.Group:
    """Return the ``tx`` command group."""
    return click.Group(
        name="tx",
        short_help="Perform transaction operations",
        help=_ROOT_HELP,
        commands=[
            new_tx_merge_command(ctx),
            new_tx_endorse_command(ctx),
            new_tx_submit_command(ctx),
        ],
    )