"""
Base target interface for all row sinks

Targets receive the headers exactly once, then every row that reaches
the flush stage, and are closed when the stream ends or is abandoned.
"""

from pathlib import Path
from typing import Union

from tablestream.core.headers import Headers
from tablestream.core.row import Row


class BaseTarget:
    """
    Base class for all targets

    Targets are responsible for:
    1. Opening their resource when the headers arrive
    2. Writing one row at a time
    3. Releasing the resource in close(), which may be called more
       than once
    """

    def write_headers(self, headers: Headers) -> None:
        """
        Write the header row

        Called exactly once, before any data row.
        """
        raise NotImplementedError("Targets must implement write_headers()")

    def write_row(self, row: Row) -> None:
        """Write one data row"""
        raise NotImplementedError("Targets must implement write_row()")

    def close(self) -> None:
        """Release any resource held by the target"""

    def __enter__(self) -> "BaseTarget":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Target:
    """
    Helper for building a target to flush data into

    Example:
        >>> pipeline.flush(Target.path("out/result.csv")).run()
    """

    @staticmethod
    def path(path: Union[str, Path]) -> BaseTarget:
        from tablestream.targets.csv_target import PathTarget

        return PathTarget(path)

    @staticmethod
    def stdout() -> BaseTarget:
        from tablestream.targets.csv_target import StdoutTarget

        return StdoutTarget()

    @staticmethod
    def stderr() -> BaseTarget:
        from tablestream.targets.csv_target import StderrTarget

        return StderrTarget()

    @staticmethod
    def string() -> BaseTarget:
        from tablestream.targets.csv_target import StringTarget

        return StringTarget()

    @staticmethod
    def table(**kwargs) -> BaseTarget:
        from tablestream.targets.table_target import TableTarget

        return TableTarget(**kwargs)
