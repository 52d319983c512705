"""
Text rendering of canonical values.

Rules:
- No whitespace between tokens unless an indent is requested
- Numbers: ints exactly, floats per ECMAScript Number::toString
- Strings: minimal escaping (control chars, backslash, double-quote)
- null, true, false as literals

Values reaching this module are already reduced and canonicalized;
mapping keys are emitted in the order they are stored.
"""

import json
import math
import re
from decimal import Decimal

from .errors import NestingDepthError, UnsupportedValueError


# Widest indent accepted; longer gaps are truncated.
MAX_GAP = 10

# A Python str holds surrogates only as unpaired code points.
_SURROGATE = re.compile(r"[\ud800-\udfff]")


def normalize_indent(indent: int | str | None) -> str:
    """
    Turn an indent argument into the whitespace inserted per nesting level.

    Ints are clamped to 0..10 spaces, strings truncated to 10 characters.
    An empty result means compact output.
    """
    if indent is None:
        return ""
    if isinstance(indent, bool):
        raise TypeError("indent must be int, str or None, not bool")
    if isinstance(indent, int):
        return " " * max(0, min(MAX_GAP, indent))
    if isinstance(indent, str):
        return indent[:MAX_GAP]
    raise TypeError(f"indent must be int, str or None, not {type(indent).__name__}")


def format_number(num: int | float) -> str:
    """
    Render a number as JSON text.

    ints keep every digit. Finite floats use the shortest digits that
    round-trip (repr), laid out the way ECMAScript Number::toString does:
    1.0 -> "1", 1e21 -> "1e+21", 1e-7 -> "1e-7", -0.0 -> "0".
    """
    if isinstance(num, int):
        try:
            return int.__repr__(num)
        except ValueError as exc:
            # int/str conversion digit limit (sys.set_int_max_str_digits)
            raise UnsupportedValueError(
                f"Integer with {num.bit_length()} bits exceeds the conversion limit: {exc}",
                value_type="int",
            ) from exc

    if not math.isfinite(num):
        raise ValueError(f"Non-finite number has no JSON form: {num!r}")
    if num == 0:
        return "0"
    if num < 0:
        return "-" + format_number(-num)

    _, digit_tuple, exponent = Decimal(repr(num)).as_tuple()
    all_digits = "".join(str(d) for d in digit_tuple)
    # n: position of the decimal point relative to the first digit
    n = exponent + len(all_digits)
    digits = all_digits.rstrip("0")
    k = len(digits)

    if k <= n <= 21:
        return digits + "0" * (n - k)
    if 0 < n <= 21:
        return digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return "0." + "0" * (-n) + digits

    e = n - 1
    exp_text = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return digits + exp_text
    return digits[0] + "." + digits[1:] + exp_text


def quote(text: str, ensure_ascii: bool = False) -> str:
    """
    Serialize string with proper JSON escaping.

    Uses json.dumps which handles control characters, backslash,
    and double-quote escaping correctly. Unpaired surrogates are
    escaped as \\uXXXX so the text always encodes to UTF-8.
    """
    quoted = json.dumps(text, ensure_ascii=ensure_ascii)
    if ensure_ascii:
        return quoted
    return _SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", quoted)


def render(value, indent: int | str | None = None, ensure_ascii: bool = False) -> str:
    """
    Render a canonical value as JSON text.

    Args:
        value: Reduced, canonical structured value
        indent: Spaces (int) or literal string per nesting level
        ensure_ascii: Escape non-ASCII characters in strings

    Returns:
        JSON text
    """
    gap = normalize_indent(indent)
    try:
        return _render(value, gap, "", ensure_ascii)
    except RecursionError as exc:
        raise NestingDepthError(None) from exc


def _render(value, gap: str, current: str, ensure_ascii: bool) -> str:
    if value is None:
        return "null"

    if isinstance(value, bool):
        # Must check bool before int (bool is subclass of int in Python)
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return format_number(value)

    if isinstance(value, str):
        return quote(value, ensure_ascii)

    if isinstance(value, list):
        if not value:
            return "[]"
        inner = current + gap
        items = [_render(item, gap, inner, ensure_ascii) for item in value]
        if gap:
            return "[\n" + inner + (",\n" + inner).join(items) + "\n" + current + "]"
        return "[" + ",".join(items) + "]"

    if isinstance(value, dict):
        if not value:
            return "{}"
        inner = current + gap
        colon = ": " if gap else ":"
        pairs = [
            quote(key, ensure_ascii) + colon + _render(val, gap, inner, ensure_ascii)
            for key, val in value.items()
        ]
        if gap:
            return "{\n" + inner + (",\n" + inner).join(pairs) + "\n" + current + "}"
        return "{" + ",".join(pairs) + "}"

    raise UnsupportedValueError(
        f"Cannot render value of type {type(value).__name__}",
        value_type=type(value).__name__,
    )
