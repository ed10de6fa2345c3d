"""
Reducer (transform) implementations for TransformInto

Provides KEEP_UNIQUE, KEEP, SUM, COUNT, MIN, MAX and custom REDUCE.
Each transform owns one output column of a group, folds the group's rows
in one at a time and renders its final value as a string.

Key-defining transforms (KeepUnique) also feed their field into the
group hash; pure aggregates contribute nothing to it.
"""

import hashlib
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Optional

from tablestream.core.errors import InvalidField, MissingColumn
from tablestream.core.headers import Headers
from tablestream.core.row import Row

HASH_DIGEST_SIZE = 8


def parse_decimal(raw: str) -> Decimal:
    """
    Parse a field as an exact decimal

    Raises:
        InvalidField: If the field is not a finite number
    """
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise InvalidField(raw) from None
    if not value.is_finite():
        raise InvalidField(raw)
    return value


class Transform:
    """
    Base class for transforms

    Attributes:
        name: Output column name
        from_col: Input column the transform reads
    """

    def __init__(self, name: str, from_col: Optional[str] = None):
        self.name = name
        self.from_col = from_col if from_col is not None else name

    def hash(self, hasher: Any, headers: Headers, row: Row) -> None:
        """
        Add this transform's grouping contribution to the hasher

        The default is no contribution, which is right for aggregates.
        """

    def add_row(self, headers: Headers, row: Row) -> None:
        """
        Fold a row into the accumulated value

        Raise a PipelineError to reject the row. Folds run on deep
        copies, so a rejected row leaves the group as it was.
        """
        raise NotImplementedError

    def value(self) -> str:
        """Render the accumulated value"""
        raise NotImplementedError

    def field(self, headers: Headers, row: Row) -> str:
        """Read the input column, raising MissingColumn if it is absent"""
        field = headers.field_of(row, self.from_col)
        if field is None:
            raise MissingColumn(self.from_col)
        return field

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, from_col={self.from_col!r})"


class KeepUnique(Transform):
    """KEEP_UNIQUE transform - groups rows by the value of one column"""

    def __init__(self, name: str, from_col: Optional[str] = None):
        super().__init__(name, from_col)
        self.current = ""

    def hash(self, hasher: Any, headers: Headers, row: Row) -> None:
        data = self.field(headers, row).encode("utf-8")
        # Length prefix keeps ("ab", "c") and ("a", "bc") apart
        hasher.update(len(data).to_bytes(8, "little"))
        hasher.update(data)

    def add_row(self, headers: Headers, row: Row) -> None:
        self.current = self.field(headers, row)

    def value(self) -> str:
        return self.current


class Keep(Transform):
    """KEEP transform - keeps the last value seen, without grouping on it"""

    def __init__(self, name: str, from_col: Optional[str] = None):
        super().__init__(name, from_col)
        self.current = ""

    def add_row(self, headers: Headers, row: Row) -> None:
        self.current = self.field(headers, row)

    def value(self) -> str:
        return self.current


class Sum(Transform):
    """SUM transform - exact decimal sum of a numeric column"""

    def __init__(self, name: str, from_col: Optional[str] = None, init: Any = 0):
        super().__init__(name, from_col)
        self.total = Decimal(init)

    def add_row(self, headers: Headers, row: Row) -> None:
        """Add the field to the sum"""
        self.total += parse_decimal(self.field(headers, row))

    def value(self) -> str:
        return str(self.total)


class Count(Transform):
    """COUNT transform - counts the rows folded into the group"""

    def __init__(self, name: str, from_col: Optional[str] = None, init: int = 0):
        super().__init__(name, from_col)
        self.count = init

    def add_row(self, headers: Headers, row: Row) -> None:
        self.count += 1

    def value(self) -> str:
        return str(self.count)


class Min(Transform):
    """MIN transform - smallest numeric value, rendered as it was read"""

    def __init__(self, name: str, from_col: Optional[str] = None):
        super().__init__(name, from_col)
        self.best: Optional[Decimal] = None
        self.raw = ""

    def _better(self, candidate: Decimal) -> bool:
        return candidate < self.best

    def add_row(self, headers: Headers, row: Row) -> None:
        raw = self.field(headers, row)
        candidate = parse_decimal(raw)
        if self.best is None or self._better(candidate):
            self.best = candidate
            self.raw = raw

    def value(self) -> str:
        return self.raw


class Max(Min):
    """MAX transform - largest numeric value, rendered as it was read"""

    def _better(self, candidate: Decimal) -> bool:
        return candidate > self.best


class Reduce(Transform):
    """
    REDUCE transform - folds a column with a user supplied function

    The function receives (accumulator, field) and returns the new
    accumulator.
    """

    def __init__(
        self,
        name: str,
        reduce: Callable[[Any, str], Any],
        init: Any,
        from_col: Optional[str] = None,
    ):
        super().__init__(name, from_col)
        self.reduce = reduce
        self.accumulator = init

    def add_row(self, headers: Headers, row: Row) -> None:
        self.accumulator = self.reduce(self.accumulator, self.field(headers, row))

    def value(self) -> str:
        return str(self.accumulator)


class Transformer:
    """
    Builder for transforms

    Example:
        >>> Transformer("Person").keep_unique()
        >>> Transformer("Total score").from_col("Score").sum()
    """

    def __init__(self, name: str):
        self.name = name
        self.col = name

    def from_col(self, col: str) -> "Transformer":
        """Read values from `col` instead of the output column name"""
        self.col = col
        return self

    def keep_unique(self) -> Transform:
        return KeepUnique(self.name, self.col)

    def keep(self) -> Transform:
        return Keep(self.name, self.col)

    def sum(self, init: Any = 0) -> Transform:
        return Sum(self.name, self.col, init)

    def count(self, init: int = 0) -> Transform:
        return Count(self.name, self.col, init)

    def min(self) -> Transform:
        return Min(self.name, self.col)

    def max(self) -> Transform:
        return Max(self.name, self.col)

    def reduce(self, reduce: Callable[[Any, str], Any], init: Any) -> Transform:
        return Reduce(self.name, reduce, init, self.col)


def create_transform(function: str, name: str, column: Optional[str] = None) -> Transform:
    """
    Factory function to create a transform by name

    Args:
        function: Transform name (KEEP_UNIQUE, KEEP, SUM, COUNT, MIN, MAX)
        name: Output column name
        column: Input column name (defaults to the output name)

    Returns:
        Transform instance

    Raises:
        ValueError: If function is not recognized
    """
    function = function.upper()
    builder = Transformer(name)
    if column is not None:
        builder.from_col(column)

    if function == "KEEP_UNIQUE":
        return builder.keep_unique()
    elif function == "KEEP":
        return builder.keep()
    elif function == "SUM":
        return builder.sum()
    elif function == "COUNT":
        return builder.count()
    elif function == "MIN":
        return builder.min()
    elif function == "MAX":
        return builder.max()
    else:
        raise ValueError(f"Unknown transform function: {function}")


def compute_hash(transforms: Iterable[Transform], headers: Headers, row: Row) -> int:
    """
    Compute the 64-bit group key of a row

    Only key-defining transforms contribute. With none, every row lands
    in the same group.

    Raises:
        MissingColumn: If a key column is absent from the row
    """
    hasher = hashlib.blake2b(digest_size=HASH_DIGEST_SIZE)
    for transform in transforms:
        transform.hash(hasher, headers, row)
    return int.from_bytes(hasher.digest(), "little")
