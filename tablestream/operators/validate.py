"""
Validate operators - check rows without changing them
"""

from collections.abc import Iterator
from typing import Callable

from tablestream.core.errors import MissingColumn, PipelineError
from tablestream.core.headers import Headers
from tablestream.core.row import Row, RowResult, is_error
from tablestream.operators.base import Operator


class Validate(Operator):
    """
    Validate operator - runs a check on every row

    The check raises a PipelineError to reject a row; the error takes
    the row's place in the stream. Accepted rows pass through unchanged.
    """

    def __init__(self, child: Operator, check: Callable[[Headers, Row], None], headers: Headers):
        super().__init__(child)
        self.check = check
        self.headers = headers

    def __iter__(self) -> Iterator[RowResult]:
        for item in self.child:
            if is_error(item):
                yield item
                continue

            try:
                self.check(self.headers, item)
            except PipelineError as e:
                yield e
                continue

            yield item


class ValidateColumn(Operator):
    """
    ValidateColumn operator - runs a check on one named field
    """

    def __init__(self, child: Operator, name: str, check: Callable[[str], None], headers: Headers):
        super().__init__(child)
        self.name = name
        self.check = check
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
                self.check(field)
            except PipelineError as e:
                yield e
                continue

            yield item

    def __repr__(self) -> str:
        return f"ValidateColumn({self.name})"
