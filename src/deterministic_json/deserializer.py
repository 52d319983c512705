"""
JSON parsing with canonical output.

Parsed values are canonicalized before they are returned, so serializing
the result always reproduces sorted-key text whatever order the input
used.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from .canonical import canonicalize
from .errors import JSONSyntaxError, NestingDepthError, UnsupportedValueError
from .options import DEFAULT_OPTIONS, OMITTED, Options


logger = logging.getLogger(__name__)

Reviver = Callable[[str, Any], Any]


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity/-Infinity, the JSON grammar does not
    raise JSONSyntaxError(f"Unexpected token {name}")


def _parse_int(literal: str) -> int:
    try:
        return int(literal)
    except ValueError as exc:
        # int/str conversion digit limit (sys.set_int_max_str_digits)
        raise UnsupportedValueError(
            f"Integer literal of {len(literal)} digits exceeds the conversion limit: {exc}",
            value_type="int",
        ) from exc


def deserialize(
    text: str | bytes | bytearray,
    reviver: Reviver | None = None,
    *,
    options: Options | None = None,
) -> Any:
    """
    Parse JSON text and return its canonical value.

    Args:
        text: JSON document
        reviver: Optional (key, value) -> value transform applied bottom-up
            after canonicalization. The root is visited with key "".
            Returning OMITTED removes a mapping entry; in a sequence the
            slot keeps OMITTED.
        options: Canonicalization options (default: Options())

    Returns:
        Canonical structured value

    Raises:
        JSONSyntaxError: If text is not valid JSON
        NestingDepthError: If nesting exceeds options.max_depth, or the
            interpreter recursion limit (max_depth is then None)
        UnsupportedValueError: If an integer literal is longer than the
            interpreter allows converting (sys.get_int_max_str_digits)
    """
    opts = options or DEFAULT_OPTIONS

    try:
        parsed = json.loads(text, parse_constant=_reject_constant, parse_int=_parse_int)
    except json.JSONDecodeError as exc:
        logger.debug("Rejected JSON text: %s", exc)
        raise JSONSyntaxError.from_decode_error(exc) from exc
    except RecursionError as exc:
        logger.debug("JSON text nested too deep for the parser")
        raise NestingDepthError(None, "JSON parser") from exc

    canonical = canonicalize(parsed, options=opts)
    if reviver is None:
        return canonical
    try:
        return _revive("", canonical, reviver)
    except NestingDepthError:
        raise
    except RecursionError as exc:
        raise NestingDepthError(None, "reviver") from exc


def _revive(key: str, value: Any, reviver: Reviver) -> Any:
    if isinstance(value, list):
        items = []
        for index, item in enumerate(value):
            items.append(_revive(str(index), item, reviver))
        value = items
    elif isinstance(value, dict):
        entries = {}
        for name, item in value.items():
            revived = _revive(name, item, reviver)
            if revived is not OMITTED:
                entries[name] = revived
        value = entries
    return reviver(key, value)
