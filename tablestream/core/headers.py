"""
Headers - the named column layout of a row stream

Keeps the canonical header row and a name -> position mapping in sync.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from tablestream.core.errors import DuplicateColumn, MissingColumn
from tablestream.core.row import Row


class Headers:
    """
    Bidirectional column name <-> position mapping

    Invariants:
    - names are unique
    - every name maps to exactly one valid position
    - the name list and the mapping always agree

    Stages take a copy() when they are attached so later changes to the
    pipeline's headers never reach a stage that is already running.
    """

    def __init__(self, names: Optional[Iterable[str]] = None):
        self._names: List[str] = []
        self._indexes: Dict[str, int] = {}

        for name in names or ():
            if not self.push(name):
                raise DuplicateColumn(name)

    @classmethod
    def from_row(cls, row: Iterable[str]) -> "Headers":
        """
        Build headers from a header row

        Raises:
            DuplicateColumn: If a name appears more than once
        """
        return cls(str(name) for name in row)

    def push(self, name: str) -> bool:
        """
        Append a new column

        Returns:
            False (and leaves the headers untouched) if the name exists
        """
        if name in self._indexes:
            return False

        self._names.append(name)
        self._indexes[name] = len(self._names) - 1
        return True

    def rename(self, from_: str, to: str) -> None:
        """
        Rename a column in place, keeping its position

        Raises:
            DuplicateColumn: If `to` already exists
            MissingColumn: If `from_` does not exist
        """
        if to in self._indexes:
            raise DuplicateColumn(to)
        if from_ not in self._indexes:
            raise MissingColumn(from_)

        index = self._indexes.pop(from_)
        self._indexes[to] = index
        self._names[index] = to

    def contains(self, name: str) -> bool:
        return name in self._indexes

    def index_of(self, name: str) -> Optional[int]:
        return self._indexes.get(name)

    def field_of(self, row: Sequence[str], name: str) -> Optional[str]:
        """
        Look up a named field in a row

        Returns None if the name is unknown or the row is too short;
        callers treat that as a data error.
        """
        index = self._indexes.get(name)
        if index is None or index >= len(row):
            return None
        return row[index]

    @property
    def row(self) -> Row:
        """The canonical header row"""
        return Row(self._names)

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def copy(self) -> "Headers":
        clone = Headers()
        clone._names = list(self._names)
        clone._indexes = dict(self._indexes)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._indexes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._names == other._names

    def __repr__(self) -> str:
        return f"Headers({', '.join(self._names)})"
