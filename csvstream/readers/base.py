"""
Base reader interface for all record sources

Readers turn a source of delimited text into records, either all at once or
one at a time.
"""

from typing import Any, Dict, Iterator, List, Optional

from csvstream.core.types import Schema


class BaseReader:
    """
    Base class for all record readers

    Readers are responsible for:
    1. Reading data from a source (file, S3 object, open stream)
    2. Yielding records as dictionaries (lazy evaluation)
    3. Returning every record at once for bulk reads
    """

    def read_lazy(self) -> Iterator[Dict[str, Any]]:
        """
        Yield records one at a time

        This is the core method that all readers must implement. It should
        yield one record at a time rather than loading all data into memory.

        Yields:
            Dictionary representing one record

        Example:
            {'id': 1, 'name': 'Alice', 'age': 30}
        """
        raise NotImplementedError("Subclasses must implement read_lazy()")

    def read_all(self) -> List[Dict[str, Any]]:
        """
        Read every record into a list

        Note:
            Default implementation materializes read_lazy(); an error on any
            record aborts the whole read.
        """
        return list(self.read_lazy())

    def get_schema(self) -> Optional[Schema]:
        """
        Get the schema records are mapped with

        Returns:
            Schema object, or None if the reader produces untyped rows
        """
        return None

    def __iter__(self):
        """Allow readers to be used directly in for loops"""
        return self.read_lazy()

    def to_dataframe(self):
        """
        Convert reader content to pandas DataFrame

        Returns:
            pandas.DataFrame containing all data

        Note:
            Default implementation builds the frame from read_all().
            Subclasses should override this to apply schema dtypes.
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError("Pandas is required for to_dataframe()")

        return pd.DataFrame(self.read_all())
