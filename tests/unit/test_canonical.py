"""Unit tests for the canonical value model."""

from datetime import date, datetime, time

import pytest

from llmkit.utils.canonical import ValueKind, canonicalize, describe, kind_of


@pytest.mark.unit
class TestKindOf:
    """Tests for kind_of function."""

    @pytest.mark.parametrize(
        "value,kind",
        [
            (None, ValueKind.NULL),
            (True, ValueKind.BOOLEAN),
            (False, ValueKind.BOOLEAN),
            (0, ValueKind.INTEGER),
            (1.0, ValueKind.FLOAT),
            ("", ValueKind.STRING),
            ([], ValueKind.SEQUENCE),
            ({}, ValueKind.MAPPING),
        ],
    )
    def test_every_variant(self, value, kind):
        assert kind_of(value) is kind

    def test_non_canonical_rejected(self):
        with pytest.raises(TypeError):
            kind_of(b"bytes")

    def test_scalar_kinds(self):
        assert ValueKind.STRING.is_scalar
        assert ValueKind.NULL.is_scalar
        assert not ValueKind.SEQUENCE.is_scalar
        assert not ValueKind.MAPPING.is_scalar


@pytest.mark.unit
class TestCanonicalize:
    """Tests for canonicalize function."""

    def test_tuples_become_lists(self):
        assert canonicalize({"a": (1, (2, 3))}) == {"a": [1, [2, 3]]}

    def test_keys_become_strings(self):
        assert canonicalize({7: "a", None: "c", 2.5: "d"}) == {"7": "a", "null": "c", "2.5": "d"}
        assert canonicalize({False: "b"}) == {"false": "b"}

    def test_dates_become_iso_strings(self):
        value = {"d": date(2024, 1, 2), "dt": datetime(2024, 1, 2, 3, 4, 5), "t": time(7, 30)}
        assert canonicalize(value) == {
            "d": "2024-01-02",
            "dt": "2024-01-02T03:04:05",
            "t": "07:30:00",
        }

    def test_order_preserved(self):
        assert list(canonicalize({"z": 1, "a": 2, "m": 3})) == ["z", "a", "m"]

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="set"):
            canonicalize({"a": {1, 2}})

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_floats_rejected(self, value):
        """JSON has no NaN or Infinity, so neither does the canonical model."""
        with pytest.raises(TypeError, match="Non-finite"):
            canonicalize({"a": [value]})


@pytest.mark.unit
class TestDescribe:
    """Tests for describe function."""

    def test_containers(self):
        assert describe([1, 2]) == "sequence of 2 items"
        assert describe({"a": 1}) == "mapping with 1 keys"

    def test_scalars(self):
        assert describe("x") == "string"
        assert describe(None) == "null"
