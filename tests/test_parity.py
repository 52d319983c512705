"""
Golden vector parity tests for deterministic-json.

These tests pin the exact text produced for a fixed set of inputs, and
the digests derived from it, so output never drifts between
releases.

Golden vectors are stored in fixtures/golden-vectors.json
"""

import hashlib
import json
from pathlib import Path

import pytest

# Add parent src to path for development
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from deterministic_json import (
    canonical_bytes,
    canonical_sha256,
    deserialize,
    serialize,
)


# Path to golden vectors
GOLDEN_VECTORS_PATH = Path(__file__).parent / "fixtures" / "golden-vectors.json"


def load_golden_vectors() -> dict:
    """Load the golden vector JSON file."""
    if not GOLDEN_VECTORS_PATH.exists():
        pytest.skip(f"Golden vectors not found: {GOLDEN_VECTORS_PATH}")
    with open(GOLDEN_VECTORS_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


class TestGoldenVectors:
    """Test serialized text against golden vectors."""

    def test_serialize_parity(self):
        """serialize must reproduce every expected output exactly."""
        vectors = load_golden_vectors()
        for test_case in vectors["serialize"]:
            actual = serialize(test_case["input"], test_case.get("indent"))
            expected = test_case["expected_output"]
            assert actual == expected, (
                f"Serialization mismatch for {test_case['input']}: "
                f"expected {expected!r}, got {actual!r}"
            )

    def test_round_trip_parity(self):
        """Parsing then serializing must reproduce the canonical text."""
        vectors = load_golden_vectors()
        for test_case in vectors["round_trip"]:
            actual = serialize(deserialize(test_case["text"]))
            expected = test_case["expected_output"]
            assert actual == expected, (
                f"Round trip mismatch for {test_case['text']!r}: "
                f"expected {expected!r}, got {actual!r}"
            )

    def test_expected_outputs_are_fixed_points(self):
        """Compact canonical text is unchanged by another round trip."""
        vectors = load_golden_vectors()
        for test_case in vectors["serialize"]:
            if test_case.get("indent") is not None:
                continue
            text = test_case["expected_output"]
            assert serialize(deserialize(text)) == text


class TestCanonicalDigest:
    """Test canonical bytes and SHA-256 digests."""

    def test_simple_object(self):
        """Digest is 64 lowercase hex characters."""
        result = canonical_sha256({"message": "test"})
        assert len(result) == 64
        assert int(result, 16) >= 0

    def test_matches_canonical_text(self):
        """The digest is SHA-256 of the compact canonical text."""
        expected = hashlib.sha256(b'{"a":1,"b":[true,null]}').hexdigest()
        assert canonical_sha256({"b": [True, None], "a": 1}) == expected

    def test_deterministic(self):
        """Same content always produces same digest."""
        content = {"a": 1, "b": 2}
        assert canonical_sha256(content) == canonical_sha256(content)

    def test_key_order_independent(self):
        """Digest is independent of key insertion order."""
        assert canonical_sha256({"z": 1, "a": 2}) == canonical_sha256({"a": 2, "z": 1})

    def test_canonical_bytes_utf8(self):
        """Canonical bytes are UTF-8, with non-ASCII unescaped."""
        assert canonical_bytes({"k": "é"}) == '{"k":"é"}'.encode("utf-8")

    def test_lone_surrogate_is_escaped(self):
        """Unpaired surrogates are written as escapes, so the bytes stay valid UTF-8."""
        assert canonical_bytes({"a": "\ud800"}) == b'{"a":"\\ud800"}'
        expected = hashlib.sha256(b'{"a":"\\ud800"}').hexdigest()
        assert canonical_sha256({"a": "\ud800"}) == expected
