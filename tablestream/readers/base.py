"""
Base reader interface for all row sources

Readers hand the pipeline a header row once, then a lazy sequence of
rows. Parse failures are yielded as error values, never raised, so one
bad record does not end the stream.
"""

from typing import Iterator

from tablestream.core.row import Row, RowResult


class BaseReader:
    """
    Base class for all row source readers

    Readers are responsible for:
    1. Reading the header row of a source
    2. Yielding data rows one at a time (lazy evaluation)
    3. Turning format errors into SourceError items
    """

    def headers(self) -> Row:
        """
        Return the header row of the source

        Called once, before read_lazy().
        """
        raise NotImplementedError("Subclasses must implement headers()")

    def read_lazy(self) -> Iterator[RowResult]:
        """
        Yield rows (or errors in place of rows)

        This is the core method that all readers must implement.
        It should yield one row at a time rather than loading the
        whole source into memory.

        Yields:
            Row, or SourceError for a record that could not be parsed
        """
        raise NotImplementedError("Subclasses must implement read_lazy()")

    def close(self) -> None:
        """Release any resource held by the reader"""

    def __iter__(self):
        """Allow readers to be used directly in for loops"""
        return self.read_lazy()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
