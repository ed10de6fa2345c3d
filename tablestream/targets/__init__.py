"""
Targets to flush pipelines into

Available targets:
- PathTarget: CSV/TSV file
- StdoutTarget / StderrTarget: CSV on the process streams
- StringTarget: CSV text in memory
- TableTarget: Rich table
"""

from tablestream.targets.base import BaseTarget, Target
from tablestream.targets.csv_target import PathTarget, StderrTarget, StdoutTarget, StringTarget
from tablestream.targets.table_target import TableTarget

__all__ = [
    "BaseTarget",
    "Target",
    "PathTarget",
    "StdoutTarget",
    "StderrTarget",
    "StringTarget",
    "TableTarget",
]
