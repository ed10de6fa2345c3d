"""
Reader over rows that are already in memory
"""

from typing import Iterable, Iterator

from tablestream.core.errors import PipelineError
from tablestream.core.row import Row, RowResult
from tablestream.readers.base import BaseReader


class RowsReader(BaseReader):
    """
    Serve an explicit header row and an iterable of rows

    Rows are consumed lazily, so a generator works as well as a list.
    """

    def __init__(self, headers: Iterable[str], rows: Iterable[Iterable[str]]):
        self._headers = Row(headers)
        self._rows = rows

    def headers(self) -> Row:
        return self._headers

    def read_lazy(self) -> Iterator[RowResult]:
        for row in self._rows:
            yield row if isinstance(row, (Row, PipelineError)) else Row(row)
