"""
Row type - one ordered record of text fields
"""

from typing import Iterable, Union

from tablestream.core.errors import PipelineError


class Row(tuple):
    """
    Immutable, fixed-arity sequence of string fields

    Fields are coerced to str on construction. Because Row is a tuple,
    equality is field-wise and a Row compares equal to a plain tuple
    holding the same strings.

    Example:
        >>> Row(["1", "Norway"]).append("Norwegian")
        Row('1', 'Norway', 'Norwegian')
    """

    def __new__(cls, fields: Iterable = ()):
        return super().__new__(cls, (str(field) for field in fields))

    @classmethod
    def of(cls, *fields) -> "Row":
        """Build a row from positional fields"""
        return cls(fields)

    def append(self, value: str) -> "Row":
        """Return a new row with value added as the last field"""
        return Row((*self, value))

    def replace(self, index: int, value: str) -> "Row":
        """Return a new row with the field at index replaced"""
        fields = list(self)
        fields[index] = value
        return Row(fields)

    def __repr__(self) -> str:
        return f"Row({', '.join(repr(field) for field in self)})"


# A stream item: either a row or the error produced in its place
RowResult = Union[Row, PipelineError]


def is_error(item: RowResult) -> bool:
    """True if a stream item is an error rather than a row"""
    return isinstance(item, PipelineError)
