"""Transaction encoding, size-limited input and output, and formatted printing."""

__all__ = ["codec", "printer", "streams"]