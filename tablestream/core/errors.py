"""
Pipeline error taxonomy

Errors are ordinary exceptions so they can be raised (configuration
mistakes, run()) but they are also carried through the row stream as
values: a stage that cannot process a row emits the error instance in
place of the row and stays pollable.
"""

from typing import Optional, Sequence


class PipelineError(Exception):
    """
    Base class for every error a pipeline can produce

    Attributes:
        source: Index of the source pipeline the error originated from.
            None until the owning pipeline tags it.
    """

    def __init__(self, message: str, source: Optional[int] = None):
        super().__init__(message)
        self.source = source

    def with_source(self, source: int) -> "PipelineError":
        """Tag the error with a source index unless it already has one"""
        if self.source is None:
            self.source = source
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PipelineError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.args == other.args
            and self.source == other.source
        )

    def __hash__(self) -> int:
        return hash((type(self), self.args, self.source))


class MissingColumn(PipelineError):
    """A column name is not present in the headers (or the row is too short)"""

    def __init__(self, name: str, source: Optional[int] = None):
        super().__init__(f"Missing column: {name}", source)
        self.name = name


class DuplicateColumn(PipelineError):
    """A column name already exists in the headers"""

    def __init__(self, name: str, source: Optional[int] = None):
        super().__init__(f"Duplicate column: {name}", source)
        self.name = name


class InvalidField(PipelineError):
    """A field value could not be interpreted (e.g. not a number)"""

    def __init__(self, value: str, source: Optional[int] = None):
        super().__init__(f"Invalid field: {value!r}", source)
        self.value = value


class MismatchedHeaders(PipelineError):
    """Two concatenated sources do not share the same header row"""

    def __init__(
        self,
        expected: Sequence[str],
        found: Sequence[str],
        source: Optional[int] = None,
    ):
        super().__init__(
            f"Mismatched headers: expected {list(expected)}, found {list(found)}",
            source,
        )
        self.expected = tuple(expected)
        self.found = tuple(found)


class SourceError(PipelineError):
    """
    Wraps a failure of the underlying data format or I/O layer

    Used for csv.Error, OSError and records whose arity does not match
    the header row.
    """

    def __init__(self, cause: object, source: Optional[int] = None):
        super().__init__(f"Source error: {cause}", source)
        self.cause = cause
