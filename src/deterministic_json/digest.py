"""Deterministic bytes and SHA-256 digests of serialized values."""

import hashlib
from typing import Any

from .options import Options
from .serializer import serialize


def canonical_bytes(value: Any, *, options: Options | None = None) -> bytes:
    """Return UTF-8 bytes of the compact deterministic serialization."""
    return serialize(value, options=options).encode("utf-8")


def canonical_sha256(value: Any, *, options: Options | None = None) -> str:
    """Return SHA-256 hex digest of the canonical bytes; key order never changes it."""
    return hashlib.sha256(canonical_bytes(value, options=options)).hexdigest()
