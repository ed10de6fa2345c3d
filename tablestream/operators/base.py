"""
Base operator class for Volcano-style pipeline execution

The Volcano model uses pull-based execution where each operator
pulls data from its child operator on demand.
"""

from collections.abc import Iterator
from typing import Optional

from tablestream.core.row import RowResult


class Operator:
    """
    Base class for all pipeline stages

    Stages form a chain where:
    - The leaf stage (Source or Concat) reads from row sources
    - Internal stages (AddColumn, Filter, ...) transform the stream
    - The tail stage is pulled by the consumer to get results

    The pull-based execution model means:
    - Operators are lazy (generators)
    - Data flows through the chain on demand
    - Memory usage is O(chain length), not O(data size), with the
      exception of TransformInto which must see every row first

    Items are RowResults: a stage receiving an error item forwards it
    untouched, and emits its own errors as items instead of raising.
    """

    def __init__(self, child: Optional["Operator"] = None):
        """
        Initialize operator

        Args:
            child: Child operator to pull data from (None for leaf operators)
        """
        self.child = child

    def __iter__(self) -> Iterator[RowResult]:
        """
        Execute operator and yield results

        This is the core method that defines operator behavior.
        Subclasses must implement this to define how they process data.

        Yields:
            Rows, or errors in place of rows
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement __iter__()")

    def close(self) -> None:
        """Release readers and targets held by this stage and its upstream"""
        if self.child is not None:
            self.child.close()

    @property
    def current_source(self) -> int:
        """Index of the source that produced the row currently in flight"""
        return self.child.current_source

    def __repr__(self) -> str:
        """String representation for debugging"""
        return f"{self.__class__.__name__}()"
