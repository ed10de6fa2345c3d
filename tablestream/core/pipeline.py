"""
Pipeline API - user-facing interface for tablestream

This is the primary entry point for users. It provides a fluent API
for chaining row-stream stages over a tabular source.

Example:
    >>> from tablestream import Pipeline
    >>> csv = (
    ...     Pipeline.from_path("Countries.csv")
    ...     .add_col("Language", lambda headers, row: "Unknown")
    ...     .rename_col("Country", "COUNTRY")
    ...     .map_col("COUNTRY", str.upper)
    ...     .collect_into_string()
    ... )
"""

import logging
from pathlib import Path
from typing import IO, Callable, Iterable, Iterator, List, Optional, Union

from tablestream.core.errors import DuplicateColumn, PipelineError
from tablestream.core.headers import Headers
from tablestream.core.row import Row, RowResult, is_error
from tablestream.operators.add_column import AddColumn
from tablestream.operators.base import Operator
from tablestream.operators.concat import Concat
from tablestream.operators.filter import Filter, FilterColumn
from tablestream.operators.flush import Flush
from tablestream.operators.map import MapColumn, MapRow
from tablestream.operators.select import Select
from tablestream.operators.source import Source
from tablestream.operators.transform import TransformFactory, TransformInto
from tablestream.operators.validate import Validate, ValidateColumn
from tablestream.readers.base import BaseReader
from tablestream.readers.csv_reader import CSVReader, delimiter_for_path
from tablestream.readers.rows_reader import RowsReader
from tablestream.targets.base import BaseTarget
from tablestream.targets.csv_target import StringTarget

logger = logging.getLogger(__name__)


class Pipeline:
    """
    Pipeline builder

    Each builder method attaches one stage to the tail of the chain and
    returns the pipeline, so calls can be chained. Stages receive their
    own copy of the headers as they are at attach time.

    Structural mistakes (duplicate columns, bad renames) raise right
    away from the builder method. Data errors travel through the stream
    as PipelineError items.

    A pipeline reads its source once; iterate it (or call a terminal
    operation) a single time.
    """

    def __init__(self, reader: BaseReader, source: int = 0):
        """
        Initialize pipeline over a row reader

        Args:
            reader: Row source
            source: Source index used to tag errors

        Raises:
            DuplicateColumn: If the header row repeats a name
        """
        try:
            self.headers = Headers.from_row(reader.headers())
        except DuplicateColumn:
            reader.close()
            raise
        self.tail: Operator = Source(reader, source)
        logger.debug("Created pipeline over %r with headers %s", reader, self.headers.names)

    @classmethod
    def from_reader(cls, stream: IO[str], delimiter: str = ",") -> "Pipeline":
        """Create a pipeline from an open text stream of delimited data"""
        return cls(CSVReader(stream, delimiter=delimiter))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Pipeline":
        """
        Create a pipeline from a CSV or TSV file

        Raises:
            ValueError: If the extension is neither .csv nor .tsv
            FileNotFoundError: If the file does not exist
        """
        delimiter = delimiter_for_path(path)
        return cls(CSVReader(path, delimiter=delimiter))

    @classmethod
    def from_rows(cls, headers: Iterable[str], rows: Iterable[Iterable[str]]) -> "Pipeline":
        """Create a pipeline from an explicit header row and data rows"""
        return cls(RowsReader(headers, rows))

    @classmethod
    def from_pipelines(cls, pipelines: List["Pipeline"]) -> "Pipeline":
        """
        Concatenate pipelines

        Rows of pipeline i all come before rows of pipeline i+1. Every
        pipeline must have the same header row as the first one.

        Raises:
            ValueError: If no pipelines are given
        """
        concat = Concat(pipelines)
        pipeline = cls.__new__(cls)
        pipeline.headers = pipelines[0].headers.copy()
        pipeline.tail = concat
        logger.debug("Concatenated %d pipelines", len(pipelines))
        return pipeline

    def add_col(self, name: str, get_value: Callable[[Headers, Row], str]) -> "Pipeline":
        """
        Add a column with values computed from the callback for each row

        Raises:
            DuplicateColumn: If the column already exists
        """
        if not self.headers.push(name):
            raise DuplicateColumn(name)
        self.tail = AddColumn(self.tail, name, get_value, self.headers.copy())
        return self

    def map(self, f: Callable[[Headers, Row], Row]) -> "Pipeline":
        """Replace every row with the callback's result (same arity)"""
        self.tail = MapRow(self.tail, f, self.headers.copy())
        return self

    def map_col(self, name: str, f: Callable[[str], str]) -> "Pipeline":
        """Rewrite one column; a missing column errors every row"""
        self.tail = MapColumn(self.tail, name, f, self.headers.copy())
        return self

    def filter(self, predicate: Callable[[Headers, Row], bool]) -> "Pipeline":
        """Keep only rows for which the predicate is true"""
        self.tail = Filter(self.tail, predicate, self.headers.copy())
        return self

    def filter_col(self, name: str, predicate: Callable[[str], bool]) -> "Pipeline":
        """Keep only rows whose `name` field satisfies the predicate"""
        self.tail = FilterColumn(self.tail, name, predicate, self.headers.copy())
        return self

    def select(self, columns: List[str]) -> "Pipeline":
        """
        Keep only the given columns, in the given order

        Raises:
            DuplicateColumn: If a column is listed twice
        """
        selected = Headers(columns)
        self.tail = Select(self.tail, columns, self.headers.copy())
        self.headers = selected
        return self

    def rename_col(self, from_: str, to: str) -> "Pipeline":
        """
        Rename one column

        Raises:
            MissingColumn: If `from_` does not exist
            DuplicateColumn: If `to` already exists
        """
        self.headers.rename(from_, to)
        return self

    def rename_cols(self, rename: Callable[[int, str], str]) -> "Pipeline":
        """
        Rename every column with a (position, name) -> name callback

        Raises:
            DuplicateColumn: If the new names are not unique; the
                headers are left untouched
        """
        self.headers = Headers(rename(index, name) for index, name in enumerate(self.headers))
        return self

    def validate(self, check: Callable[[Headers, Row], None]) -> "Pipeline":
        """Reject rows for which the callback raises a PipelineError"""
        self.tail = Validate(self.tail, check, self.headers.copy())
        return self

    def validate_col(self, name: str, check: Callable[[str], None]) -> "Pipeline":
        """Reject rows whose `name` field makes the callback raise"""
        self.tail = ValidateColumn(self.tail, name, check, self.headers.copy())
        return self

    def transform_into(self, factory: TransformFactory) -> "Pipeline":
        """
        Group and reduce the stream into a new table

        Args:
            factory: Returns a fresh list of transforms, one per output
                column. Called once here to learn the output columns and
                once per group.

        Raises:
            DuplicateColumn: If two transforms share an output name

        Example:
            >>> pipeline.transform_into(lambda: [
            ...     Transformer("Person").keep_unique(),
            ...     Transformer("Total score").from_col("Score").sum(),
            ... ])
        """
        stage = TransformInto(self.tail, factory, self.headers.copy())
        headers = Headers(transform.name for transform in stage.key_transforms)
        self.tail = stage
        self.headers = headers
        return self

    def flush(self, target: BaseTarget) -> "Pipeline":
        """Write the stream into a target while passing rows on"""
        self.tail = Flush(self.tail, target, self.headers.copy())
        return self

    def build(self) -> "PipelineIter":
        """Turn the pipeline into an iterator of rows and errors"""
        return PipelineIter(self.tail, self.headers.copy())

    def __iter__(self) -> Iterator[RowResult]:
        return self.build()

    def run(self) -> None:
        """
        Drive the pipeline to the end

        Raises:
            PipelineError: The first error met; iteration stops there
        """
        with self.build() as items:
            for item in items:
                if is_error(item):
                    raise item

    def collect_into_string(self) -> str:
        """
        Run the pipeline and return the result as CSV text

        Raises:
            PipelineError: The first error met
        """
        target = StringTarget()
        self.flush(target).run()
        return target.getvalue()

    def to_dataframe(self):
        """
        Run the pipeline into a pandas DataFrame

        Returns:
            pandas.DataFrame with one string column per header

        Raises:
            PipelineError: The first error met
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "Pandas is required for to_dataframe(). "
                "Install with: pip install tablestream[pandas]"
            )

        headers = self.headers.names
        rows = []
        with self.build() as items:
            for item in items:
                if is_error(item):
                    raise item
                rows.append(list(item))
        return pd.DataFrame(rows, columns=headers, dtype=object)

    def close(self) -> None:
        """Release the readers and targets of every stage without running them"""
        self.tail.close()

    def __repr__(self) -> str:
        return f"Pipeline({self.tail!r})"


class PipelineIter:
    """
    Iterator over a built pipeline

    Yields Rows and PipelineErrors. Every error is tagged with the index
    of the source active when it was produced. The stream stays pollable
    after an error. Use as a context manager, or call close(), to release
    readers and targets when stopping early.
    """

    def __init__(self, tail: Operator, headers: Headers):
        self.headers = headers
        self._tail = tail
        self._iterator = iter(tail)

    def __iter__(self) -> "PipelineIter":
        return self

    def __next__(self) -> RowResult:
        item = next(self._iterator)
        if is_error(item):
            item.with_source(self._tail.current_source)
        return item

    def next_error(self) -> Optional[PipelineError]:
        """
        Pull until the next error

        Returns:
            The error, or None if the stream ended first. Iteration can
            go on after an error is returned.
        """
        for item in self:
            if is_error(item):
                return item
        return None

    def close(self) -> None:
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()
        # A generator never started skips its finally blocks
        self._tail.close()

    def __enter__(self) -> "PipelineIter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
