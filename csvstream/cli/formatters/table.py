"""
Rich table formatter for terminal output
"""

from typing import Any, Dict, List

from rich import box
from rich.console import Console
from rich.table import Table

from csvstream.cli.formatters.base import BaseFormatter


class TableFormatter(BaseFormatter):
    """Format records as a Rich table"""

    null_text = "[dim]NULL[/dim]"

    def format(self, records: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format records as a Rich table

        Args:
            records: List of record dictionaries
            **kwargs: Options like 'no_color', 'show_footer', 'schema'

        Returns:
            Formatted table string
        """
        if not records:
            return "No records found."

        console = Console(force_terminal=not kwargs.get("no_color", False))
        columns = list(records[0].keys())
        schema = kwargs.get("schema")

        # Narrow terminal or many columns: aggressive truncation
        compact = console.width < 80 or len(columns) > 8
        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE if compact else box.HEAVY_HEAD,
        )

        for col in columns:
            title = col
            justify = "left"
            if schema is not None and col in schema:
                title = f"{col}\n[dim]{schema[col].describe()}[/dim]"
            if self.is_numeric_column(schema, col):
                justify = "right"
            table.add_column(
                title,
                style="cyan",
                justify=justify,
                overflow="ellipsis",
                max_width=kwargs.get("max_width", 15) if compact else 30,
                no_wrap=compact,
            )

        for record in records:
            table.add_row(*[self._cell(record[col]) for col in columns])

        with console.capture() as capture:
            console.print(table)
        output = capture.get()

        if kwargs.get("show_footer", True):
            count = len(records)
            footer = f"[dim]{count} record{'s' if count != 1 else ''}[/dim]"
            with console.capture() as capture:
                console.print(footer)
            output += capture.get()

        return output

    def _cell(self, value: Any) -> str:
        if isinstance(value, str):
            # Keep literal brackets in data from being read as markup
            return value.replace("[", "\\[")
        return self.render_value(value)
