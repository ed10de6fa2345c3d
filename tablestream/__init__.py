"""
tablestream - lazy, pull-based pipelines over tabular data

This package chains row-stream stages (add column, map, filter, select,
rename, validate) over CSV/TSV files or in-memory rows, with an optional
group-by/reduce stage and sinks to write the result.
"""

__version__ = "0.1.0"

# Main API
from tablestream.core.errors import (
    DuplicateColumn,
    InvalidField,
    MismatchedHeaders,
    MissingColumn,
    PipelineError,
    SourceError,
)
from tablestream.core.headers import Headers
from tablestream.core.pipeline import Pipeline, PipelineIter
from tablestream.core.row import Row, RowResult, is_error
from tablestream.targets.base import Target
from tablestream.utils.transformers import Transform, Transformer

__all__ = [
    "__version__",
    "DuplicateColumn",
    "Headers",
    "InvalidField",
    "MismatchedHeaders",
    "MissingColumn",
    "Pipeline",
    "PipelineError",
    "PipelineIter",
    "Row",
    "RowResult",
    "SourceError",
    "Target",
    "Transform",
    "Transformer",
    "is_error",
]
