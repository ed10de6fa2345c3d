"""
CSV targets for files, process streams and in-memory strings
"""

import csv
import io
import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

from tablestream.core.headers import Headers
from tablestream.core.row import Row
from tablestream.targets.base import BaseTarget

logger = logging.getLogger(__name__)


class CSVTarget(BaseTarget):
    """Write rows as CSV into a text stream"""

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter
        self._writer = None

    def _open(self) -> IO[str]:
        raise NotImplementedError

    def write_headers(self, headers: Headers) -> None:
        stream = self._open()
        self._writer = csv.writer(stream, delimiter=self.delimiter, lineterminator="\n")
        self.write_row(headers.row)

    def write_row(self, row: Row) -> None:
        if self._writer is None:
            raise RuntimeError("write_headers() must be called before write_row()")
        self._writer.writerow(row)


class PathTarget(CSVTarget):
    """
    Write into a file, creating parent directories as needed

    The delimiter defaults to tab for .tsv paths and comma otherwise.
    """

    def __init__(
        self,
        path: Union[str, Path],
        delimiter: Optional[str] = None,
        encoding: str = "utf-8",
    ):
        self.path = Path(path)
        if delimiter is None:
            delimiter = "\t" if self.path.suffix.lower() == ".tsv" else ","
        super().__init__(delimiter)
        self.encoding = encoding
        self._handle: Optional[IO[str]] = None

    def _open(self) -> IO[str]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.path, "w", encoding=self.encoding, newline="")
        logger.debug("Opened %s for writing", self.path)
        return self._handle

    def close(self) -> None:
        if self._handle is not None and not self._handle.closed:
            self._handle.close()
            logger.debug("Closed %s", self.path)

    def __repr__(self) -> str:
        return f"PathTarget({self.path})"


class StdoutTarget(CSVTarget):
    """Write to standard output"""

    def _open(self) -> IO[str]:
        return sys.stdout

    def close(self) -> None:
        sys.stdout.flush()


class StderrTarget(CSVTarget):
    """Write to standard error"""

    def _open(self) -> IO[str]:
        return sys.stderr

    def close(self) -> None:
        sys.stderr.flush()


class StringTarget(CSVTarget):
    """
    Accumulate CSV text in memory

    Example:
        >>> target = StringTarget()
        >>> pipeline.flush(target).run()
        >>> target.getvalue()
        'ID,Country\\n1,Norway\\n'
    """

    def __init__(self, delimiter: str = ","):
        super().__init__(delimiter)
        self._buffer = io.StringIO()

    def _open(self) -> IO[str]:
        return self._buffer

    def getvalue(self) -> str:
        return self._buffer.getvalue()
