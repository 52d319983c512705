"""
Canonical form of structured values.

A canonical value is a fresh tree in which:
- Mapping keys appear in ascending Unicode code point order
- Mapping entries whose value is OMITTED are dropped
- Sequence order is unchanged
- No container appears inside itself

The input tree is never mutated.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from .errors import CircularReferenceError, NestingDepthError, UnsupportedValueError
from .options import DEFAULT_OPTIONS, OMITTED, Options


def keys(mapping: Mapping) -> list[str]:
    """
    Return the sorted keys of a mapping whose values are not OMITTED.

    Keys are compared by code point, not by locale. None values are kept.

    Args:
        mapping: Mapping with str keys

    Returns:
        List of keys in ascending order (empty list when none qualify)

    Raises:
        UnsupportedValueError: If a key is not a str
    """
    eligible = []
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise UnsupportedValueError(
                f"Mapping keys must be str, got {type(key).__name__}",
                value_type=type(key).__name__,
            )
        if value is not OMITTED:
            eligible.append(key)
    eligible.sort()
    return eligible


def child_location(location: str, key: str | int) -> str:
    """JSONPath-style location of a child node, used in error details."""
    if isinstance(key, int):
        return f"{location}[{key}]"
    return f"{location}.{key}"


class ActivePath:
    """
    Identity handles of the containers between the root and the current node.

    Membership compares id() handles, never structural equality, so two
    equal but distinct containers are not a cycle while a container
    reached again through its own descendants is.
    """

    def __init__(self, max_depth: int):
        self._handles: list[int] = []
        self._max_depth = max_depth

    @property
    def depth(self) -> int:
        return len(self._handles)

    @contextmanager
    def enter(self, container: Any, location: str) -> Iterator[None]:
        handle = id(container)
        if handle in self._handles:
            raise CircularReferenceError(location)
        if len(self._handles) >= self._max_depth:
            raise NestingDepthError(self._max_depth, location)
        self._handles.append(handle)
        try:
            yield
        finally:
            self._handles.pop()


def canonicalize(value: Any, *, options: Options | None = None) -> Any:
    """
    Return a deep copy of value with every mapping's keys sorted.

    Non-container values are returned as-is. Tuples become lists.

    Args:
        value: Structured value (dicts, lists, scalars)
        options: Canonicalization options (default: Options())

    Returns:
        New canonical value tree

    Raises:
        CircularReferenceError: If a container contains itself
        NestingDepthError: If nesting exceeds options.max_depth
            or the interpreter recursion limit (max_depth is then None)
        UnsupportedValueError: If a mapping key is not a str
    """
    opts = options or DEFAULT_OPTIONS
    try:
        return _canonicalize(value, ActivePath(opts.max_depth), "$")
    except NestingDepthError:
        raise
    except RecursionError as exc:
        raise NestingDepthError(None) from exc


def _canonicalize(value: Any, path: ActivePath, location: str) -> Any:
    if isinstance(value, Mapping):
        with path.enter(value, location):
            result = {}
            for key in keys(value):
                result[key] = _canonicalize(value[key], path, child_location(location, key))
            return result

    if isinstance(value, (list, tuple)):
        with path.enter(value, location):
            items = []
            for index, item in enumerate(value):
                items.append(_canonicalize(item, path, child_location(location, index)))
            return items

    return value
