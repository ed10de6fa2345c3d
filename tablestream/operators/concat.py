"""
Concat operator - chains several pipelines end to end

This is a leaf operator: its inputs are whole pipelines rather than
a child stage.
"""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, List

from tablestream.core.errors import MismatchedHeaders
from tablestream.core.row import RowResult, is_error
from tablestream.operators.base import Operator

if TYPE_CHECKING:
    from tablestream.core.pipeline import Pipeline

logger = logging.getLogger(__name__)


class Concat(Operator):
    """
    Concat operator - yields every item of pipeline i before pipeline i+1

    Each pipeline's header row must equal the first pipeline's. On the
    first mismatch a single MismatchedHeaders error tagged with the
    offending index is emitted and the stream ends; nothing is read from
    that pipeline or any later one.
    """

    def __init__(self, pipelines: List["Pipeline"]):
        super().__init__(child=None)
        if not pipelines:
            raise ValueError("Concat requires at least one pipeline")
        self.pipelines = list(pipelines)
        self._current = 0

    def __iter__(self) -> Iterator[RowResult]:
        expected = self.pipelines[0].headers.row

        try:
            for index, pipeline in enumerate(self.pipelines):
                self._current = index
                found = pipeline.headers.row

                if found != expected:
                    logger.debug("Source %d has mismatched headers %s", index, list(found))
                    yield MismatchedHeaders(expected, found, source=index)
                    return

                logger.debug("Reading source %d", index)
                for item in pipeline.tail:
                    if is_error(item):
                        item.with_source(index)
                    yield item
        finally:
            # Sources skipped or abandoned midway still hold open readers
            self.close()

    def close(self) -> None:
        for pipeline in self.pipelines:
            pipeline.close()

    @property
    def current_source(self) -> int:
        return self._current

    def __repr__(self) -> str:
        return f"Concat({len(self.pipelines)} sources)"
