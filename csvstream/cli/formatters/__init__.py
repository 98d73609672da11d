"""
Output formatters for CLI

Available formatters:
- TableFormatter: Rich tables
- JSONFormatter: Machine-readable JSON
- CSVFormatter: Unix-friendly CSV
- MarkdownFormatter: GitHub Flavored Markdown tables
"""

from csvstream.cli.formatters.base import BaseFormatter
from csvstream.cli.formatters.csv import CSVFormatter
from csvstream.cli.formatters.json import JSONFormatter
from csvstream.cli.formatters.markdown import MarkdownFormatter
from csvstream.cli.formatters.table import TableFormatter

__all__ = ["BaseFormatter", "TableFormatter", "JSONFormatter", "CSVFormatter", "MarkdownFormatter"]


def get_formatter(format_name: str) -> BaseFormatter:
    """
    Get formatter by name

    Args:
        format_name: Name of formatter (table, json, csv, markdown)

    Returns:
        Formatter instance

    Raises:
        ValueError: If formatter not found
    """
    formatters = {
        formatter.get_name(): formatter
        for formatter in (TableFormatter(), JSONFormatter(), CSVFormatter(), MarkdownFormatter())
    }

    if format_name not in formatters:
        available = ", ".join(formatters.keys())
        raise ValueError(f"Unknown format: {format_name}. Available formats: {available}")

    return formatters[format_name]
