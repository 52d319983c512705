"""
Deterministic JSON serialization.

Two values that are equal after canonicalization always produce
byte-identical text for the same indent argument.
"""

from typing import Any

from .canonical import canonicalize
from .options import DEFAULT_OPTIONS, Options
from .reduce import DefaultFn, Reducer, Replacer
from .render import render


def serialize(
    value: Any,
    indent: int | str | None = None,
    *,
    replacer: Replacer | None = None,
    default: DefaultFn | None = None,
    options: Options | None = None,
) -> str:
    """
    Serialize a value to JSON text with sorted mapping keys.

    The value is first reduced to plain structured data (see reduce.py),
    then canonicalized, then rendered.

    Args:
        value: Any value the reducer accepts
        indent: None for compact output, an int (spaces, clamped to 10) or
            a string (truncated to 10 characters) for one entry per line
        replacer: Callable (key, value) -> value, or an allowlist of keys
        default: Fallback conversion for otherwise unsupported values
        options: Depth, non-finite and ASCII options (default: Options())

    Returns:
        Deterministic JSON text

    Raises:
        CircularReferenceError: If the value contains itself
        UnsupportedValueError: If the value cannot be represented
        NestingDepthError: If nesting exceeds options.max_depth
    """
    opts = options or DEFAULT_OPTIONS
    reduced = Reducer(replacer, default, opts).reduce(value)
    canonical = canonicalize(reduced, options=opts)
    return render(canonical, indent, opts.ensure_ascii)
