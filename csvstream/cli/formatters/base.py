"""
Base formatter interface for CLI output

All formatters must implement the format() method. Records are dicts of
mapped values, so cells may hold None, bool, int, float, Decimal or str.
"""

from typing import Any, Dict, List, Optional

from csvstream.core.types import Schema


class BaseFormatter:
    """Base class for all output formatters"""

    #: Text written for a null cell
    null_text = ""

    def format(self, records: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format records for output

        Args:
            records: List of record dictionaries
            **kwargs: Additional formatter-specific options, e.g. 'schema'

        Returns:
            Formatted string ready for output
        """
        raise NotImplementedError("Formatters must implement format() method")

    def get_name(self) -> str:
        """Get formatter name, as accepted by ``--format``"""
        return self.__class__.__name__.replace("Formatter", "").lower()

    def render_value(self, value: Any) -> str:
        """Render one mapped value as cell text"""
        if value is None:
            return self.null_text
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    @staticmethod
    def is_numeric_column(schema: Optional[Schema], column: str) -> bool:
        """Check if the schema declares ``column`` with a numeric type"""
        return schema is not None and column in schema and schema[column].type_tag.is_numeric()
