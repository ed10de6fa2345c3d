"""
Source operator - reads rows from a reader

This is a leaf operator (has no child).
"""

from collections.abc import Iterator

from tablestream.core.row import RowResult
from tablestream.operators.base import Operator
from tablestream.readers.base import BaseReader


class Source(Operator):
    """
    Source operator - wrapper around a row reader

    This is the leaf of a single-source chain. It pulls data from
    a reader and yields it to parent operators.
    """

    def __init__(self, reader: BaseReader, index: int = 0):
        """
        Initialize source operator

        Args:
            reader: Row reader to pull from
            index: Source index used to tag errors
        """
        super().__init__(child=None)
        self.reader = reader
        self.index = index

    def __iter__(self) -> Iterator[RowResult]:
        """
        Yield all items from the reader

        This delegates directly to the reader's lazy iterator.
        """
        yield from self.reader.read_lazy()

    def close(self) -> None:
        self.reader.close()

    @property
    def current_source(self) -> int:
        return self.index

    def __repr__(self) -> str:
        return f"Source({self.reader!r})"
