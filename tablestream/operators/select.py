"""
Select operator - reorders and narrows columns

Selects specific columns from rows, in the requested order.
"""

from collections.abc import Iterator
from typing import List

from tablestream.core.errors import MissingColumn
from tablestream.core.headers import Headers
from tablestream.core.row import Row, RowResult, is_error
from tablestream.operators.base import Operator


class Select(Operator):
    """
    Select operator - keeps only the requested columns

    Positions are resolved against the upstream headers when the stage
    is attached. If any requested column is missing, every row becomes
    a MissingColumn error for the first missing name.
    """

    def __init__(self, child: Operator, columns: List[str], headers: Headers):
        """
        Initialize select operator

        Args:
            child: Child operator to pull rows from
            columns: Column names to keep, in output order
            headers: Snapshot of the upstream headers
        """
        super().__init__(child)
        self.columns = list(columns)
        self.indexes = [headers.index_of(name) for name in self.columns]

    def __iter__(self) -> Iterator[RowResult]:
        missing = [name for name, index in zip(self.columns, self.indexes) if index is None]

        for item in self.child:
            if is_error(item):
                yield item
                continue

            if missing:
                yield MissingColumn(missing[0])
                continue

            short = [name for name, index in zip(self.columns, self.indexes) if index >= len(item)]
            if short:
                yield MissingColumn(short[0])
                continue

            yield Row(item[index] for index in self.indexes)

    def __repr__(self) -> str:
        return f"Select({', '.join(self.columns)})"
