"""
Error codes and types for deterministic-json.

Every failure raised by serialize/deserialize/canonicalize is a
DeterministicJSONError carrying a typed ErrorCode.
"""

import sys
from enum import Enum
from json import JSONDecodeError
from typing import Any


class ErrorCode(str, Enum):
    """Error codes carried by every raised error."""
    CIRCULAR_REFERENCE = "CIRCULAR_REFERENCE"
    UNSUPPORTED_VALUE = "UNSUPPORTED_VALUE"
    SYNTAX_ERROR = "SYNTAX_ERROR"
    NESTING_TOO_DEEP = "NESTING_TOO_DEEP"


class DeterministicJSONError(Exception):
    """Base class for all errors raised by this package."""
    code = ErrorCode.UNSUPPORTED_VALUE

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class CircularReferenceError(DeterministicJSONError, ValueError):
    """A mapping or sequence contains itself, directly or transitively."""
    code = ErrorCode.CIRCULAR_REFERENCE

    def __init__(self, location: str):
        super().__init__(
            f"Circular reference detected at {location}",
            {"location": location},
        )
        self.location = location


class UnsupportedValueError(DeterministicJSONError, TypeError):
    """A value has no representation in the structured-data model."""
    code = ErrorCode.UNSUPPORTED_VALUE

    def __init__(self, message: str, location: str = "$", value_type: str | None = None):
        details: dict[str, Any] = {"location": location}
        if value_type is not None:
            details["type"] = value_type
        super().__init__(message, details)
        self.location = location


class NestingDepthError(DeterministicJSONError, RecursionError):
    """
    Input is nested too deep.

    max_depth is the Options.max_depth that was exceeded, or None when the
    interpreter's own recursion limit tripped first.
    """
    code = ErrorCode.NESTING_TOO_DEEP

    def __init__(self, max_depth: int | None, location: str | None = None):
        where = f" at {location}" if location else ""
        if max_depth is None:
            limit = sys.getrecursionlimit()
            message = f"Nesting exceeds the interpreter recursion limit ({limit}){where}"
            details = {"max_depth": None, "recursion_limit": limit, "location": location}
        else:
            message = f"Maximum nesting depth of {max_depth} exceeded{where}"
            details = {"max_depth": max_depth, "location": location}
        super().__init__(message, details)
        self.max_depth = max_depth


class JSONSyntaxError(DeterministicJSONError, ValueError):
    """
    Malformed JSON text.

    pos is the character offset of the failure; lineno/colno are 1-based.
    Any of them is None when the parser could not report a position.
    """
    code = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        pos: int | None = None,
        lineno: int | None = None,
        colno: int | None = None,
    ):
        if lineno is not None:
            text = f"{message}: line {lineno} column {colno} (char {pos})"
        else:
            text = message
        super().__init__(text, {"pos": pos, "lineno": lineno, "colno": colno})
        self.msg = message
        self.pos = pos
        self.lineno = lineno
        self.colno = colno

    @classmethod
    def from_decode_error(cls, exc: JSONDecodeError) -> "JSONSyntaxError":
        return cls(exc.msg, exc.pos, exc.lineno, exc.colno)
