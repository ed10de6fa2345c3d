"""
AddColumn operator - appends a computed field to every row
"""

from collections.abc import Iterator
from typing import Callable

from tablestream.core.errors import PipelineError
from tablestream.core.headers import Headers
from tablestream.core.row import Row, RowResult, is_error
from tablestream.operators.base import Operator

GetValue = Callable[[Headers, Row], str]


class AddColumn(Operator):
    """
    AddColumn operator - computes one new field per row

    The column name must already be pushed onto the pipeline headers
    before the stage is attached, so the callback's headers include
    the new column.
    """

    def __init__(self, child: Operator, name: str, get_value: GetValue, headers: Headers):
        """
        Initialize add-column operator

        Args:
            child: Child operator to pull rows from
            name: Name of the new column (for debugging)
            get_value: Callback computing the field from (headers, row)
            headers: Snapshot of the upstream headers
        """
        super().__init__(child)
        self.name = name
        self.get_value = get_value
        self.headers = headers

    def __iter__(self) -> Iterator[RowResult]:
        for item in self.child:
            if is_error(item):
                yield item
                continue

            try:
                value = self.get_value(self.headers, item)
            except PipelineError as e:
                yield e
                continue

            yield item.append(value)

    def __repr__(self) -> str:
        return f"AddColumn({self.name})"
