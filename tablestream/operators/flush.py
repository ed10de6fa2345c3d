"""
Flush operator - writes the stream into a target

Rows are written as they pass and forwarded unchanged, so a flush can
sit anywhere in the chain.
"""

import csv
from collections.abc import Iterator

from tablestream.core.errors import SourceError
from tablestream.core.headers import Headers
from tablestream.core.row import RowResult, is_error
from tablestream.operators.base import Operator
from tablestream.targets.base import BaseTarget


class Flush(Operator):
    """
    Flush operator - sink stage

    Writes the headers on the first pull, then every row. Error items
    are forwarded without being written. Target failures become
    SourceError items. The target is closed when iteration ends for any
    reason, including the consumer abandoning the stream early.
    """

    def __init__(self, child: Operator, target: BaseTarget, headers: Headers):
        """
        Initialize flush operator

        Args:
            child: Child operator to pull rows from
            target: Target to write into
            headers: Snapshot of the headers to write
        """
        super().__init__(child)
        self.target = target
        self.headers = headers

    def __iter__(self) -> Iterator[RowResult]:
        try:
            try:
                self.target.write_headers(self.headers)
            except (OSError, csv.Error) as e:
                yield SourceError(e)
                return

            for item in self.child:
                if is_error(item):
                    yield item
                    continue

                try:
                    self.target.write_row(item)
                except (OSError, csv.Error) as e:
                    yield SourceError(e)
                    continue

                yield item
        finally:
            self.target.close()

    def close(self) -> None:
        self.target.close()
        super().close()

    def __repr__(self) -> str:
        return f"Flush({self.target!r})"
