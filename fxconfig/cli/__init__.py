"""Command tree for namespace and transaction operations, built with click."""

__all__ = ["context", "flags", "info", "namespace", "root", "tx", "version"]