"""
CSV formatter for Unix-friendly output
"""

import csv
import io
from typing import Any, Dict, List

from csvstream.cli.formatters.base import BaseFormatter


class CSVFormatter(BaseFormatter):
    """Format records as CSV"""

    def format(self, records: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format records as CSV

        Null values are written as empty fields, which reads back as null
        for nullable fields.

        Args:
            records: List of record dictionaries
            **kwargs: Options like 'delimiter', 'quote_all'

        Returns:
            CSV string
        """
        if not records:
            return ""

        columns = list(records[0].keys())

        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=columns,
            delimiter=kwargs.get("delimiter", ","),
            quoting=csv.QUOTE_MINIMAL if not kwargs.get("quote_all") else csv.QUOTE_ALL,
            lineterminator="\n",
        )

        writer.writeheader()
        for record in records:
            writer.writerow({k: self.render_value(v) for k, v in record.items()})

        return output.getvalue()

