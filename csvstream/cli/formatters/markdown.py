"""
Markdown formatter for documentation and sharing
"""

from typing import Any

from csvstream.cli.formatters.base import BaseFormatter


class MarkdownFormatter(BaseFormatter):
    """Format records as a Markdown table"""

    null_text = "_NULL_"

    def format(self, records: list[dict[str, Any]], **kwargs) -> str:
        """
        Format records as a Markdown table

        Numeric columns of the schema (if given) are right aligned.

        Args:
            records: List of record dictionaries
            **kwargs: Options like 'show_footer', 'schema'

        Returns:
            Markdown formatted table string
        """
        if not records:
            return "_No records found._"

        columns = list(records[0].keys())
        schema = kwargs.get("schema")

        header = "| " + " | ".join(columns) + " |"

        separators = []
        for col in columns:
            if self.is_numeric_column(schema, col):
                separators.append("---:")
            else:
                separators.append(":---")
        separator = "| " + " | ".join(separators) + " |"

        data_rows = []
        for record in records:
            values = []
            for col in columns:
                val = record[col]
                if isinstance(val, str):
                    # Escape pipe characters in strings
                    formatted_val = val.replace("|", "\\|")
                else:
                    formatted_val = self.render_value(val)
                values.append(formatted_val)

            data_rows.append("| " + " | ".join(values) + " |")

        output = "\n".join([header, separator] + data_rows)

        if kwargs.get("show_footer", True):
            count = len(records)
            output += f"\n\n_{count} record{'s' if count != 1 else ''}_"

        return output
