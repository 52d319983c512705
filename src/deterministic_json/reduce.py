"""
Reduction of arbitrary Python values to structured values.

This is the step serialize runs before canonicalization. It mirrors the
semantics of a standard JSON encoder so that only None, bool, int, float,
str, list and dict (plus OMITTED, which it resolves) ever reach the
canonicalizer.

Coercion rules, applied to every node:
1. An object with a callable ``to_json`` attribute is replaced by its result
2. The replacer callback, if any, is called with (key, value)
3. Then:
   - None, bool pass through; str/int/float subclasses become the base type
   - NaN and +/-Infinity become None (or raise, per Options.non_finite)
   - Mappings become dicts with str keys; list and tuple become lists
   - Dataclass instances become a dict of their fields
   - datetime, date and time become their isoformat() text
   - OMITTED and callables are "no value": dropped from mappings,
     None inside sequences
   - Anything else goes through ``default`` if given, else is rejected
"""

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from typing import Any

from .canonical import ActivePath, child_location
from .errors import NestingDepthError, UnsupportedValueError
from .options import DEFAULT_OPTIONS, OMITTED, Options
from .render import format_number


ReplacerFn = Callable[[str, Any], Any]
Replacer = ReplacerFn | Iterable[str | int]
DefaultFn = Callable[[Any], Any]


class Reducer:
    """
    Converts host values to structured values.

    Args:
        replacer: Callable (key, value) -> value, or an allowlist of
            mapping keys (ints are matched by their decimal text)
        default: Callable turning an otherwise unsupported value into a
            supported one
        options: Depth and non-finite number policy
    """

    def __init__(
        self,
        replacer: Replacer | None = None,
        default: DefaultFn | None = None,
        options: Options | None = None,
    ):
        self.options = options or DEFAULT_OPTIONS
        self.default = default
        self._replace: ReplacerFn | None = None
        self._allowed: frozenset[str] | None = None

        if callable(replacer):
            self._replace = replacer
        elif replacer is not None:
            allowed = set()
            for name in replacer:
                if isinstance(name, bool) or not isinstance(name, (str, int)):
                    raise TypeError(
                        f"replacer allowlist entries must be str or int, not {type(name).__name__}"
                    )
                allowed.add(name if isinstance(name, str) else format_number(int(name)))
            self._allowed = frozenset(allowed)

    def reduce(self, value: Any) -> Any:
        """
        Reduce a value to the structured-value model.

        Raises:
            UnsupportedValueError: If a value cannot be represented, or the
                root itself reduces to "no value"
            CircularReferenceError: If a container contains itself
            NestingDepthError: If nesting exceeds options.max_depth
                or the interpreter recursion limit (max_depth is then None)
        """
        try:
            result = self._reduce("", value, ActivePath(self.options.max_depth), "$")
        except NestingDepthError:
            raise
        except RecursionError as exc:
            raise NestingDepthError(None) from exc
        if result is OMITTED:
            raise UnsupportedValueError(
                "Top-level value has no JSON representation",
                value_type=type(value).__name__,
            )
        return result

    def _reduce(self, key: str, value: Any, path: ActivePath, location: str) -> Any:
        to_json = getattr(value, "to_json", None)
        if callable(to_json) and not isinstance(value, type):
            value = to_json()
        if self._replace is not None:
            value = self._replace(key, value)
        return self._coerce(value, path, location)

    def _coerce(self, value: Any, path: ActivePath, location: str) -> Any:
        if value is None or value is OMITTED:
            return value

        if isinstance(value, bool):
            return value

        if isinstance(value, str):
            return str.__str__(value)

        if isinstance(value, int):
            return int(value)

        if isinstance(value, float):
            value = float(value)
            if math.isfinite(value):
                return value
            if self.options.non_finite == "error":
                raise UnsupportedValueError(
                    f"Non-finite number {value!r} at {location}",
                    location,
                    "float",
                )
            return None

        if isinstance(value, Mapping):
            with path.enter(value, location):
                return self._reduce_items(value.items(), path, location)

        if isinstance(value, (list, tuple)):
            with path.enter(value, location):
                items = []
                for index, item in enumerate(value):
                    reduced = self._reduce(str(index), item, path, child_location(location, index))
                    items.append(None if reduced is OMITTED else reduced)
                return items

        if is_dataclass(value) and not isinstance(value, type):
            with path.enter(value, location):
                pairs = [(f.name, getattr(value, f.name)) for f in fields(value)]
                return self._reduce_items(pairs, path, location)

        if isinstance(value, (datetime, date, time)):
            return value.isoformat()

        if callable(value):
            return OMITTED

        if self.default is not None:
            # Keep value on the path so a default that hands it back is a cycle
            with path.enter(value, location):
                return self._coerce(self.default(value), path, location)

        raise UnsupportedValueError(
            f"Object of type {type(value).__name__} at {location} is not JSON serializable",
            location,
            type(value).__name__,
        )

    def _reduce_items(
        self,
        items: Iterable[tuple[Any, Any]],
        path: ActivePath,
        location: str,
    ) -> dict[str, Any]:
        result: dict[str, Any] = {}
        seen: set[str] = set()
        for raw_key, item in items:
            key = _coerce_key(raw_key, location)
            if self._allowed is not None and key not in self._allowed:
                continue
            if key in seen:
                raise UnsupportedValueError(
                    f"Duplicate key {key!r} at {location} after key coercion",
                    location,
                )
            seen.add(key)
            reduced = self._reduce(key, item, path, child_location(location, key))
            if reduced is not OMITTED:
                result[key] = reduced
        return result


def _coerce_key(key: Any, location: str) -> str:
    """Mapping keys become str the way a JSON encoder writes them."""
    if isinstance(key, str):
        return str.__str__(key)
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, int):
        return format_number(int(key))
    if isinstance(key, float):
        if math.isnan(key):
            return "NaN"
        if math.isinf(key):
            return "Infinity" if key > 0 else "-Infinity"
        return format_number(float(key))
    raise UnsupportedValueError(
        f"Keys must be str, int, float, bool or None, not {type(key).__name__} (at {location})",
        location,
        type(key).__name__,
    )


def reduce_value(
    value: Any,
    replacer: Replacer | None = None,
    default: DefaultFn | None = None,
    options: Options | None = None,
) -> Any:
    """Reduce a value with a one-off Reducer."""
    return Reducer(replacer, default, options).reduce(value)
