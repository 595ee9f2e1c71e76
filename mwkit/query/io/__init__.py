"""I/O adapters."""

from .session import ApiSession, encode_params

__all__ = ["ApiSession", "encode_params"]
