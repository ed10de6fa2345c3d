"""
Filter operators - drop rows that fail a predicate

Rows for which the predicate is false are skipped silently. A predicate
that raises turns that row into an error item, and filtering goes on
with the next row.
"""

from collections.abc import Iterator
from typing import Callable

from tablestream.core.errors import MissingColumn, PipelineError
from tablestream.core.headers import Headers
from tablestream.core.row import Row, RowResult, is_error
from tablestream.operators.base import Operator


class Filter(Operator):
    """
    Filter operator - evaluates a row predicate

    Pulls rows from child and only yields those the predicate accepts.
    """

    def __init__(self, child: Operator, predicate: Callable[[Headers, Row], bool], headers: Headers):
        """
        Initialize filter operator

        Args:
            child: Child operator to pull rows from
            predicate: Callback deciding whether to keep (headers, row)
            headers: Snapshot of the upstream headers
        """
        super().__init__(child)
        self.predicate = predicate
        self.headers = headers

    def __iter__(self) -> Iterator[RowResult]:
        for item in self.child:
            if is_error(item):
                yield item
                continue

            try:
                keep = self.predicate(self.headers, item)
            except PipelineError as e:
                yield e
                continue

            if keep:
                yield item


class FilterColumn(Operator):
    """
    FilterColumn operator - evaluates a predicate on one named field
    """

    def __init__(self, child: Operator, name: str, predicate: Callable[[str], bool], headers: Headers):
        super().__init__(child)
        self.name = name
        self.predicate = predicate
        self.headers = headers

    def __iter__(self) -> Iterator[RowResult]:
        for item in self.child:
            if is_error(item):
                yield item
                continue

            field = self.headers.field_of(item, self.name)
            if field is None:
                yield MissingColumn(self.name)
                continue

            try:
                keep = self.predicate(field)
            except PipelineError as e:
                yield e
                continue

            if keep:
                yield item

    def __repr__(self) -> str:
        return f"FilterColumn({self.name})"
