"""Namespace and transaction management for Fabric-X networks."""

__version__ = "0.1.0"
__all__ = ["cli", "client", "cliio", "messages"]