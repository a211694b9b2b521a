"""The ``namespace`` command group: create, update and list namespaces."""

from __future__ import annotations

import click

from fxconfig.cli.context import CLIContext, DeployNamespaceInput, PolicyConfig
from fxconfig.cli.flags import (
    namespace_deploy_options,
    output_option,
    policy_option,
    version_option,
)
from fxconfig.cliio.streams import write_output
from fxconfig.messages import Status

_ROOT_HELP = """Manage namespace lifecycle operations.

\b
Namespaces in Fabric-X define isolated execution environments with their own
endorsement policies. Each namespace has:
  - Unique identifier (name)
  - Version number (incremented on updates)
  - Endorsement policy (defines which organizations must sign transactions)
"""

_CREATE_HELP = """Create a new namespace with an endorsement policy.

The endorsement policy defines which organizations must sign transactions
in this namespace. Policies use MSP identifiers and logical operators.

\b
Policy Syntax:
  OR('Org1MSP.member')                    - Any member of Org1
  AND('Org1MSP.member', 'Org2MSP.member') - Both Org1 and Org2
  OutOf(2, 'Org1MSP.member', 'Org2MSP.member', 'Org3MSP.member') - 2 of 3 orgs

\b
Transaction Lifecycle Flags:
  --endorse  Collect endorsement from local MSP
  --submit   Submit transaction to ordering service
  --wait     Wait for transaction finalization (implies --submit)

\b
Examples:
  # Create namespace with single org policy (save to file)
  fxconfig namespace create hello --policy="OR('Org1MSP.member')" --output=tx.json

\b
  # Create and immediately deploy (endorse + submit + wait)
  fxconfig namespace create hello --policy="OR('Org1MSP.member')" --endorse --submit --wait
"""

_UPDATE_HELP = """Update an existing namespace's endorsement policy.

The --version flag is required to prevent concurrent modification conflicts.
Use 'fxconfig namespace list' to find the current version number.

Version numbers increment with each successful update. If the version you
specify doesn't match the current version, the update will fail.

\b
Examples:
  # Update namespace policy (check version first with 'list')
  fxconfig namespace update hello --policy="OR('Org2MSP.member')" --version=0 --endorse --submit --wait

\b
  # Change from single-org to multi-org policy
  fxconfig namespace update hello --policy="AND('Org1MSP.member', 'Org2MSP.member')" --version=1 --output=tx.json
"""

_LIST_HELP = """Query and display all installed namespaces with their configurations.

\b
For each namespace, displays:
  - Name (namespace identifier)
  - Version (current version number)
  - Policy (endorsement policy in hexadecimal format)

\b
Examples:
  # List all namespaces
  fxconfig namespace list

\b
  # List and save output to file
  fxconfig namespace list > namespaces.txt
"""

_CREATE_VERSION = -1


def _deploy(
    ctx: CLIContext,
    ns_id: str,
    version: int,
    policy: str,
    output: str,
    endorse: bool,
    submit: bool,
    wait: bool,
) -> None:
    policy_config = PolicyConfig()
    policy_config.set(policy)
    request = DeployNamespaceInput(
        ns_id=ns_id,
        version=version,
        policy=policy_config,
        endorse=endorse,
        submit=submit,
        wait=wait,
    )
    result, status = ctx.app.deploy_namespace(request)
    if result is None:
        ctx.printer.print(f"Transaction status: {Status.name_of(status)}")
        return
    data = ctx.codec.encode(result.tx_id, result.tx)
    write_output(output, data, click.get_binary_stream("stdout"))


def new_ns_create_command(ctx: CLIContext) -> click.Command:
    """Return the command that creates a namespace."""

    @click.command(name="create", short_help="Create new namespace", help=_CREATE_HELP)
    @click.argument("name")
    @policy_option()
    @output_option()
    @namespace_deploy_options()
    def create(
        name: str, policy: str, output: str, endorse: bool, submit: bool, wait: bool
    ) -> None:
        _deploy(ctx, name, _CREATE_VERSION, policy, output, endorse, submit, wait)

    return create


def new_ns_update_command(ctx: CLIContext) -> click.Command:
    """Return the command that updates an existing namespace's policy."""

    @click.command(
        name="update", short_help="Update existing namespace", help=_UPDATE_HELP
    )
    @click.argument("name")
    @version_option()
    @policy_option()
    @output_option()
    @namespace_deploy_options()
    def update(
        name: str,
        version: int,
        policy: str,
        output: str,
        endorse: bool,
        submit: bool,
        wait: bool,
    ) -> None:
        _deploy(ctx, name, version, policy, output, endorse, submit, wait)

    return update


def new_ns_list_command(ctx: CLIContext) -> click.Command:
    """Return the command that lists installed namespaces."""

    @click.command(name="list", short_help="List installed Namespaces", help=_LIST_HELP)
    def list_namespaces() -> None:
        namespaces = ctx.app.list_namespaces()
        ctx.printer.print(f"Installed namespaces ({len(namespaces)} total):\n")
        for index, ns in enumerate(namespaces):
            ctx.printer.print(
                f"{index}) {ns.ns_id}: version {ns.version} policy: {bytes(ns.policy).hex()}\n"
            )

    return list_namespaces


def new_ns_root_command(ctx: CLIContext) -> click.Group:
    """Return the ``namespace`` command group."""
    return click.Group(
        name="namespace",
        short_help="Manage Fabric-X namespaces",
        help=_ROOT_HELP,
        commands=[
            new_ns_create_command(ctx),
            new_ns_update_command(ctx),
            new_ns_list_command(ctx),
        ],
    )