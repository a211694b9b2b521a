"""Clients for the ordering, query and notification services, and TLS options."""

__all__ = ["notifications", "orderer", "queries", "security"]