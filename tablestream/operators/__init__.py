"""
Pipeline stages (Volcano model)

Available operators:
- Source / Concat: leaf stages reading from readers or pipelines
- AddColumn, MapRow, MapColumn: row rewriting
- Filter, FilterColumn, Select, Validate, ValidateColumn: row selection and checks
- TransformInto: group-by/reduce
- Flush: sink stage
"""

from tablestream.operators.add_column import AddColumn
from tablestream.operators.base import Operator
from tablestream.operators.concat import Concat
from tablestream.operators.filter import Filter, FilterColumn
from tablestream.operators.flush import Flush
from tablestream.operators.map import MapColumn, MapRow
from tablestream.operators.select import Select
from tablestream.operators.source import Source
from tablestream.operators.transform import TransformInto
from tablestream.operators.validate import Validate, ValidateColumn

__all__ = [
    "AddColumn",
    "Concat",
    "Filter",
    "FilterColumn",
    "Flush",
    "MapColumn",
    "MapRow",
    "Operator",
    "Select",
    "Source",
    "TransformInto",
    "Validate",
    "ValidateColumn",
]
