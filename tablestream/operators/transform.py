"""
TransformInto operator

Performs hash-based grouped reduction. Groups rows by the key-defining
transforms and folds every row into its group's transforms.
"""

import copy
import logging
from collections.abc import Iterator
from typing import Callable, Dict, List

from tablestream.core.errors import PipelineError
from tablestream.core.headers import Headers
from tablestream.core.row import Row, RowResult, is_error
from tablestream.operators.base import Operator
from tablestream.utils.transformers import Transform, compute_hash

logger = logging.getLogger(__name__)

TransformFactory = Callable[[], List[Transform]]


class TransformInto(Operator):
    """
    Group-reduce operator

    Uses hash-based aggregation:
    1. Pull every upstream row (Accumulating)
    2. Hash the key-defining columns to find the row's group
    3. Fold the row into that group's transforms
    4. Once upstream is exhausted, yield one row per group in the
       order groups were first seen (Draining)

    Note: This operator holds every live group in memory and yields
    nothing before its input ends. Error items are forwarded as soon as
    they are met, so they come out ahead of all grouped rows.
    """

    def __init__(self, child: Operator, factory: TransformFactory, headers: Headers):
        """
        Initialize TransformInto operator

        Args:
            child: Child operator to pull rows from
            factory: Returns a fresh list of transforms, one per output
                column; called once per new group
            headers: Snapshot of the upstream headers
        """
        super().__init__(child)
        self.factory = factory
        self.headers = headers
        # The prototype set decides the group key; instances are per group
        self.key_transforms = factory()

    def __iter__(self) -> Iterator[RowResult]:
        groups: Dict[int, List[Transform]] = {}

        # Accumulating
        for item in self.child:
            if is_error(item):
                yield item
                continue

            try:
                key = compute_hash(self.key_transforms, self.headers, item)
            except PipelineError as e:
                yield e
                continue

            group = groups.get(key)
            if group is None:
                # First sighting fixes the group's place in the output
                group = groups[key] = self.factory()

            try:
                groups[key] = self._fold(group, item)
            except PipelineError as e:
                yield e

        logger.debug("Draining %d groups", len(groups))

        # Draining
        while groups:
            key = next(iter(groups))
            transforms = groups.pop(key)
            yield Row(transform.value() for transform in transforms)

    def _fold(self, transforms: List[Transform], row: Row) -> List[Transform]:
        """
        Fold a row into staged copies of a group's transforms

        Either every transform takes the row or, on the first failure,
        none does: the caller keeps the previous transforms. Copies are
        deep so transforms holding containers roll back too.
        """
        staged = [copy.deepcopy(transform) for transform in transforms]
        for transform in staged:
            transform.add_row(self.headers, row)
        return staged

    def __repr__(self) -> str:
        names = ", ".join(transform.name for transform in self.key_transforms)
        return f"TransformInto({names})"
