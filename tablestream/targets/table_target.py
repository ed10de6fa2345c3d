"""
Rich table target for terminal output
"""

import warnings
from typing import List, Optional

try:
    from rich import box
    from rich.console import Console
    from rich.table import Table

    RICH_AVAILABLE = True
except ImportError:
    RICH_AVAILABLE = False
    Console = None
    Table = None
    box = None

from tablestream.core.headers import Headers
from tablestream.core.row import Row
from tablestream.targets.base import BaseTarget


class TableTarget(BaseTarget):
    """
    Render the stream as a Rich table

    Rows are buffered and the table is printed once, when the target is
    closed. With no console given, output is captured and available
    from getvalue().
    """

    def __init__(
        self,
        title: Optional[str] = None,
        console: Optional["Console"] = None,
        show_footer: bool = True,
    ):
        """
        Initialize table target

        Args:
            title: Optional table title
            console: Console to print to (default: capture to a string)
            show_footer: Print a row count under the table
        """
        if not RICH_AVAILABLE:
            raise ImportError(
                "Table target requires rich library. "
                "Install with: pip install tablestream[table]"
            )

        self.title = title
        self.console = console
        self.show_footer = show_footer
        self._columns: List[str] = []
        self._rows: List[Row] = []
        self._output = ""
        self._rendered = False

    def write_headers(self, headers: Headers) -> None:
        self._columns = headers.names

    def write_row(self, row: Row) -> None:
        if self._rendered:
            warnings.warn(
                "TableTarget already rendered; row will not be shown",
                UserWarning,
            )
            return
        self._rows.append(row)

    def close(self) -> None:
        if self._rendered:
            return
        self._rendered = True

        table = Table(title=self.title, show_header=True, header_style="bold magenta", box=box.SIMPLE)
        for col in self._columns:
            table.add_column(col, style="cyan", overflow="ellipsis")
        for row in self._rows:
            table.add_row(*row)

        footer = None
        if self.show_footer:
            count = len(self._rows)
            footer = f"[dim]{count} row{'s' if count != 1 else ''}[/dim]"

        if self.console is not None:
            self.console.print(table)
            if footer:
                self.console.print(footer)
            return

        console = Console(force_terminal=False, width=120)
        with console.capture() as capture:
            console.print(table)
            if footer:
                console.print(footer)
        self._output = capture.get()

    def getvalue(self) -> str:
        """Rendered table text (empty until the target is closed)"""
        return self._output
