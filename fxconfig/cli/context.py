"""Shared state and application interface used by the command-line commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

from fxconfig.cliio.codec import JSONCodec
from fxconfig.cliio.printer import CLIPrinter
from fxconfig.messages import Status

UNKNOWN_STATUS = int(Status.STATUS_UNSPECIFIED)


@dataclass
class PolicyConfig:
    """Endorsement policy of a namespace, as given on the command line."""

    policy: str = ""

    def set(self, value: str) -> None:
        """Set the policy expression."""
        self.policy = value


@dataclass
class DeployNamespaceInput:
    """Parameters of a namespace create or update operation.

    A version of -1 marks a create operation.
    """

    ns_id: str
    version: int
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    endorse: bool = False
    submit: bool = False
    wait: bool = False


@dataclass
class DeployNamespaceOutput:
    """Transaction produced by a namespace operation that was not submitted."""

    tx_id: str
    tx: dict[str, Any]


@dataclass
class NamespaceQueryResult:
    """One installed namespace as reported by the query service."""

    ns_id: str
    version: int
    policy: bytes


@runtime_checkable
class Application(Protocol):
    """Operations the command-line commands delegate to."""

    def deploy_namespace(
        self, request: DeployNamespaceInput
    ) -> tuple[Optional[DeployNamespaceOutput], int]: ...

    def list_namespaces(self) -> list[NamespaceQueryResult]: ...

    def endorse_transaction(self, tx_id: str, tx: dict[str, Any]) -> dict[str, Any]: ...

    def merge_transactions(self, txs: list[dict[str, Any]]) -> dict[str, Any]: ...

    def submit_transaction(self, tx_id: str, tx: dict[str, Any]) -> None: ...

    def submit_transaction_with_wait(self, tx_id: str, tx: dict[str, Any]) -> int: ...


@dataclass
class CLIContext:
    """Configuration, output printer, transaction codec and application for commands."""

    config: Any = None
    printer: Optional[CLIPrinter] = None
    codec: Optional[JSONCodec] = None
    app: Optional[Application] = None