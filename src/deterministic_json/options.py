"""
Options and sentinels shared by the canonicalizer, reducer and renderer.
"""

from dataclasses import dataclass
from typing import Any, Literal


# Longest root-to-leaf chain of containers accepted by default.
DEFAULT_MAX_DEPTH = 256

NonFinitePolicy = Literal["null", "error"]


class _Omitted:
    """Marker for "no value": an absent field, never written as a mapping entry."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMITTED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Omitted, ())


OMITTED: Any = _Omitted()


@dataclass(frozen=True)
class Options:
    """
    Options for serialize, deserialize and canonicalize.

    max_depth: deepest chain of nested containers accepted
    non_finite: "null" renders NaN/Infinity as null, "error" rejects them
    ensure_ascii: escape every non-ASCII character in rendered strings
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    non_finite: NonFinitePolicy = "null"
    ensure_ascii: bool = False


DEFAULT_OPTIONS = Options()
