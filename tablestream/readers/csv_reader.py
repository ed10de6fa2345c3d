"""
CSV Reader with lazy evaluation

Uses Python's built-in csv module for simplicity and zero dependencies.
Fields stay as strings; no type inference is applied.
"""

import csv
import logging
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from tablestream.core.errors import SourceError
from tablestream.core.row import Row, RowResult
from tablestream.readers.base import BaseReader

logger = logging.getLogger(__name__)

DELIMITERS = {
    ".csv": ",",
    ".tsv": "\t",
}


def delimiter_for_path(path: Union[str, Path]) -> str:
    """
    Pick a delimiter from the file extension

    Raises:
        ValueError: If the extension is neither .csv nor .tsv
    """
    suffix = Path(path).suffix.lower()
    if suffix not in DELIMITERS:
        raise ValueError(
            f"Unsupported file format: {path}. Supported formats: .csv, .tsv"
        )
    return DELIMITERS[suffix]


class CSVReader(BaseReader):
    """
    Lazy CSV reader over a text stream or a path

    Features:
    - Lazy iteration (doesn't load the entire file into memory)
    - Header row read eagerly so pipelines know their layout up front
    - Malformed records surface as SourceError items and reading continues
    """

    def __init__(
        self,
        source: Union[str, Path, IO[str]],
        delimiter: Optional[str] = None,
        encoding: str = "utf-8",
        **fmtparams,
    ):
        """
        Initialize CSV reader

        Args:
            source: Path to a .csv/.tsv file, or an open text stream
            delimiter: Field delimiter (default: from the extension for
                paths, comma for streams)
            encoding: File encoding when source is a path (default: utf-8)
            **fmtparams: Extra csv dialect options (quotechar, strict, ...)
        """
        self.encoding = encoding
        self._owns_handle = isinstance(source, (str, Path))

        if self._owns_handle:
            self.path: Optional[Path] = Path(source)
            if delimiter is None:
                delimiter = delimiter_for_path(self.path)
            if not self.path.exists():
                raise FileNotFoundError(f"CSV file not found: {source}")
            self._handle = open(self.path, encoding=encoding, newline="")
        else:
            self.path = None
            self._handle = source

        self.delimiter = delimiter or ","
        self._reader = csv.reader(self._handle, delimiter=self.delimiter, **fmtparams)
        self._headers = self._read_headers()

    def _read_headers(self) -> Row:
        try:
            header = next(self._reader)
        except StopIteration:
            header = []
        except csv.Error:
            self.close()
            raise
        logger.debug("Read headers %s from %s", header, self.path or "stream")
        return Row(header)

    def headers(self) -> Row:
        return self._headers

    def read_lazy(self) -> Iterator[RowResult]:
        """
        Lazy iterator over CSV records

        A record with the wrong number of fields, or one the csv module
        fails to parse, is yielded as a SourceError. The next record is
        read normally.
        """
        expected = len(self._headers)

        try:
            while True:
                try:
                    record = next(self._reader)
                except StopIteration:
                    break
                except csv.Error as e:
                    yield SourceError(e)
                    continue

                if len(record) != expected:
                    yield SourceError(
                        f"line {self._reader.line_num}: found record with "
                        f"{len(record)} fields, expected {expected}"
                    )
                    continue

                yield Row(record)
        finally:
            self.close()

    def close(self) -> None:
        """Close the underlying file if the reader opened it"""
        if self._owns_handle and not self._handle.closed:
            self._handle.close()

    def __repr__(self) -> str:
        return f"CSVReader({self.path or 'stream'}, delimiter={self.delimiter!r})"
