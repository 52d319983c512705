"""
deterministic-json: canonical, deterministic JSON serialization.

Values that are equal after canonicalization always serialize to
byte-identical text, whatever order their mapping keys were inserted in.
Parsing returns key-sorted values, so parse-then-serialize is canonical too.
"""

import logging

from .canonical import canonicalize, keys
from .deserializer import deserialize
from .digest import canonical_bytes, canonical_sha256
from .errors import (
    CircularReferenceError,
    DeterministicJSONError,
    ErrorCode,
    JSONSyntaxError,
    NestingDepthError,
    UnsupportedValueError,
)
from .options import DEFAULT_MAX_DEPTH, OMITTED, Options
from .reduce import Reducer, reduce_value
from .serializer import serialize

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Names matching the JSON.stringify / JSON.parse family
stringify = serialize
parse = deserialize

__version__ = "0.1.0"
__all__ = [
    # Core
    "keys",
    "canonicalize",
    "serialize",
    "deserialize",
    "stringify",
    "parse",
    # Reduction and options
    "Reducer",
    "reduce_value",
    "Options",
    "OMITTED",
    "DEFAULT_MAX_DEPTH",
    # Digests
    "canonical_bytes",
    "canonical_sha256",
    # Errors
    "ErrorCode",
    "DeterministicJSONError",
    "CircularReferenceError",
    "UnsupportedValueError",
    "JSONSyntaxError",
    "NestingDepthError",
]
