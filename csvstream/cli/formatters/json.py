"""
JSON formatter for machine-readable output
"""

import json
import math
from decimal import Decimal
from typing import Any

from csvstream.cli.formatters.base import BaseFormatter


class JSONFormatter(BaseFormatter):
    """Format records as JSON"""

    def format(self, records: list[dict[str, Any]], **kwargs) -> str:
        """
        Format records as JSON

        Decimals are written as strings so that no precision is lost.

        Args:
            records: List of record dictionaries
            **kwargs: Options like 'compact', 'indent'

        Returns:
            JSON string
        """

        # Handle NaN and infinity values (convert to null)
        def clean_value(val):
            if isinstance(val, float):
                if math.isnan(val) or math.isinf(val):
                    return None
            if isinstance(val, Decimal):
                return str(val)
            return val

        cleaned = [{k: clean_value(v) for k, v in record.items()} for record in records]

        if kwargs.get("compact", False):
            return json.dumps(cleaned, separators=(",", ":"))
        else:
            indent = kwargs.get("indent", 2)
            return json.dumps(cleaned, indent=indent)
