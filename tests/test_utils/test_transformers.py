"""
Tests for transform (reducer) implementations
"""

import hashlib

import pytest

from tablestream.core.errors import InvalidField, MissingColumn
from tablestream.core.headers import Headers
from tablestream.core.row import Row
from tablestream.utils.transformers import (
    Count,
    Keep,
    KeepUnique,
    Max,
    Min,
    Reduce,
    Sum,
    Transformer,
    compute_hash,
    create_transform,
)


@pytest.fixture
def headers():
    return Headers(["key", "value"])


def fold(transform, headers, values):
    for value in values:
        transform.add_row(headers, Row.of("k", value))
    return transform.value()


class TestKeepUnique:
    """Test KEEP_UNIQUE transform"""

    def test_keeps_value(self, headers):
        """Test that the key value is kept"""
        transform = KeepUnique("key")
        transform.add_row(headers, Row.of("A", "1"))
        assert transform.value() == "A"

    def test_contributes_to_hash(self, headers):
        """Test that different keys hash differently"""
        transforms = [KeepUnique("key")]
        a = compute_hash(transforms, headers, Row.of("A", "1"))
        b = compute_hash(transforms, headers, Row.of("B", "1"))
        a_again = compute_hash(transforms, headers, Row.of("A", "99"))

        assert a != b
        assert a == a_again
        assert 0 <= a < 2**64

    def test_missing_column(self, headers):
        """Test hashing on an absent column"""
        with pytest.raises(MissingColumn):
            compute_hash([KeepUnique("nope")], headers, Row.of("A", "1"))


class TestAggregates:
    """Test aggregating transforms"""

    def test_aggregates_do_not_hash(self, headers):
        """Test that aggregates leave the hash unchanged"""
        empty = int.from_bytes(hashlib.blake2b(digest_size=8).digest(), "little")
        transforms = [Sum("value"), Count("value"), Keep("value"), Min("value")]

        assert compute_hash(transforms, headers, Row.of("A", "1")) == empty

    def test_sum(self, headers):
        """Test exact decimal sum"""
        assert fold(Sum("value"), headers, ["0.1", "0.2"]) == "0.3"

    def test_sum_init(self, headers):
        """Test a starting value"""
        assert fold(Sum("value", init=10), headers, ["1"]) == "11"

    def test_sum_invalid(self, headers):
        """Test that non-numeric values are rejected"""
        with pytest.raises(InvalidField) as exc_info:
            fold(Sum("value"), headers, ["abc"])
        assert exc_info.value.value == "abc"

    def test_sum_rejects_nan(self, headers):
        """Test that non-finite values are rejected"""
        with pytest.raises(InvalidField):
            fold(Sum("value"), headers, ["NaN"])

    def test_count(self, headers):
        """Test counting rows"""
        assert fold(Count("n"), headers, ["x", "y", "z"]) == "3"

    def test_count_empty(self):
        """Test count with no rows"""
        assert Count("n").value() == "0"

    def test_keep_last(self, headers):
        """Test that KEEP keeps the last value"""
        assert fold(Keep("value"), headers, ["a", "b"]) == "b"

    def test_min_max(self, headers):
        """Test numeric min and max keep the original text"""
        values = ["10", "2.50", "-3", "7"]
        assert fold(Min("value"), headers, values) == "-3"
        assert fold(Max("value"), headers, values) == "10"
        assert fold(Min("value"), headers, ["2.50", "9"]) == "2.50"

    def test_min_empty(self):
        """Test min with no rows"""
        assert Min("value").value() == ""

    def test_reduce(self, headers):
        """Test a custom fold"""
        transform = Reduce("value", lambda acc, field: acc + len(field), 0)
        assert fold(transform, headers, ["ab", "cde"]) == "5"


class TestTransformer:
    """Test the builder"""

    def test_from_col(self, headers):
        """Test reading from another column"""
        transform = Transformer("Total").from_col("value").sum()

        assert transform.name == "Total"
        assert transform.from_col == "value"
        assert fold(transform, headers, ["1", "2"]) == "3"

    def test_builders(self):
        """Test each builder method"""
        builder = Transformer("x")
        assert isinstance(builder.keep_unique(), KeepUnique)
        assert isinstance(builder.keep(), Keep)
        assert isinstance(builder.sum(), Sum)
        assert isinstance(builder.count(), Count)
        assert isinstance(builder.min(), Min)
        assert isinstance(builder.max(), Max)
        assert isinstance(builder.reduce(lambda a, b: a, ""), Reduce)


class TestCreateTransform:
    """Test the transform factory"""

    def test_by_name(self):
        """Test creating transforms by name"""
        assert isinstance(create_transform("sum", "total", "value"), Sum)
        assert isinstance(create_transform("KEEP_UNIQUE", "key"), KeepUnique)
        assert create_transform("count", "n").from_col == "n"

    def test_unknown(self):
        """Test an unknown function"""
        with pytest.raises(ValueError):
            create_transform("MEDIAN", "x")
