"""Client for querying namespace policies from the committer."""

from __future__ import annotations

from typing import Any, Callable, Protocol


class QueryError(RuntimeError):
    """Raised when the query service call fails."""


class QueryService(Protocol):
    """Committer query service."""

    def get_namespace_policies(self, timeout: float) -> Any: ...


class QueryClient:
    """Reads namespace policies from the query service."""

    def __init__(
        self,
        service: QueryService | None,
        connection_timeout: float,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.connection_timeout = connection_timeout
        self._service = service
        self._on_close = on_close

    def get_namespace_policies(self) -> Any:
        """Return all namespace policies, bounded by the connection timeout."""
        if self._service is None:
            raise ValueError("require client")
        try:
            return self._service.get_namespace_policies(timeout=self.connection_timeout)
        except Exception as exc:
            raise QueryError(f"getNamespacePolicies error: {exc}") from exc

    def close(self) -> None:
        """Release the connection to the query service."""
        if self._on_close is not None:
            self._on_close()