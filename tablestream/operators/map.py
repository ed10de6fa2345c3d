"""
Map operators - rewrite whole rows or single fields
"""

from collections.abc import Iterator
from typing import Callable, Optional

from tablestream.core.errors import MissingColumn, PipelineError
from tablestream.core.headers import Headers
from tablestream.core.row import Row, RowResult, is_error
from tablestream.operators.base import Operator


class MapRow(Operator):
    """
    MapRow operator - replaces each row with the callback's result

    The callback must return a row with the same arity as the headers.
    This is not checked.
    """

    def __init__(self, child: Operator, f: Callable[[Headers, Row], Row], headers: Headers):
        super().__init__(child)
        self.f = f
        self.headers = headers

    def __iter__(self) -> Iterator[RowResult]:
        for item in self.child:
            if is_error(item):
                yield item
                continue

            try:
                row = self.f(self.headers, item)
            except PipelineError as e:
                yield e
                continue

            yield row if isinstance(row, Row) else Row(row)


class MapColumn(Operator):
    """
    MapColumn operator - rewrites one named field in every row

    The column position is resolved once, when the stage is attached.
    """

    def __init__(self, child: Operator, name: str, f: Callable[[str], str], headers: Headers):
        """
        Initialize map-column operator

        Args:
            child: Child operator to pull rows from
            name: Column to rewrite
            f: Callback mapping the old field value to the new one
            headers: Snapshot of the upstream headers
        """
        super().__init__(child)
        self.name = name
        self.f = f
        self.index: Optional[int] = headers.index_of(name)

    def __iter__(self) -> Iterator[RowResult]:
        for item in self.child:
            if is_error(item):
                yield item
                continue

            if self.index is None or self.index >= len(item):
                yield MissingColumn(self.name)
                continue

            try:
                value = self.f(item[self.index])
            except PipelineError as e:
                yield e
                continue

            yield item.replace(self.index, value)

    def __repr__(self) -> str:
        return f"MapColumn({self.name})"
