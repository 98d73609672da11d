"""
CSV Reader with schema-driven typed records

Reads delimited text with single separators (no quoting) and maps every row
onto a declared schema.
"""

import logging
import warnings
from typing import Any, Dict, Iterator, List, Optional, TextIO, Union

from csvstream.core.config import ReaderConfig
from csvstream.core.errors import ClosedResourceError, MappingError
from csvstream.core.types import Schema, TypeTag
from csvstream.readers.base import BaseReader
from csvstream.readers.csv_iterator import CSVRecordIterator, Record
from csvstream.readers.line_source import LineSource

logger = logging.getLogger(__name__)


class CSVReader(BaseReader):
    """
    Typed CSV reader

    Features:
    - Bulk read of every record (read_all)
    - Lazy iteration (read_lazy, iterator)
    - Header skipping and optional binding of the schema to the header
    - Explicit row separators
    - Untyped rows when no schema is given
    """

    def __init__(
        self,
        source: Union[str, TextIO],
        schema: Any = None,
        config: Optional[ReaderConfig] = None,
        **options: Any,
    ):
        """
        Initialize CSV reader

        Args:
            source: Path to CSV file (local or s3://) or an open text stream
            schema: Schema, annotated class, mapping or compact schema string;
                None to read raw rows
            config: Session configuration
            **options: Overrides for config fields (field_separator,
                row_separator, skip_headers, encoding, bind_header)

        Raises:
            FileNotFoundError: If a local file does not exist
            SchemaError: If the schema description is invalid
        """
        self.config = ReaderConfig.from_options(config, **options)
        self.schema: Optional[Schema] = Schema.coerce(schema) if schema is not None else None
        self._bound_schema: Optional[Schema] = None

        self._stream: Optional[TextIO] = None
        if isinstance(source, str):
            self.path_str = source
            self.is_s3 = source.startswith("s3://")
            if not self.is_s3:
                # Fail early for missing local files
                LineSource.open(source, encoding=self.config.encoding).close()
        else:
            self._stream = source
            self.path_str = getattr(source, "name", None) or "<stream>"
            self.is_s3 = False

        self._stream_consumed = False

    def _open_source(self) -> LineSource:
        """Open a fresh line source for one session."""
        if self._stream is None:
            return LineSource.open(
                self.path_str,
                encoding=self.config.encoding,
                row_separator=self.config.row_separator,
            )

        if self._stream_consumed:
            raise ClosedResourceError(f"Stream already consumed: {self.path_str}")
        self._stream_consumed = True
        return LineSource(self._stream, row_separator=self.config.row_separator, name=self.path_str)

    def iterator(self) -> CSVRecordIterator:
        """
        Start a streaming session

        Returns:
            CSVRecordIterator owning a newly opened line source
        """
        records = CSVRecordIterator(self._open_source(), self.schema, self.config)
        logger.debug("Started streaming session on %s", self.path_str)
        return records

    def read_all(self) -> List[Record]:
        """
        Read every record of the source

        The first ``skip_headers`` lines are discarded. Input shorter than
        that yields an empty list.

        Returns:
            Records in input order (raw field lists when there is no schema)

        Raises:
            MappingError: On the first row that cannot be mapped; no records
                are returned in that case
        """
        with self.iterator() as records:
            rows = list(records)
            self._bound_schema = records.schema

        logger.debug("Read %d record(s) from %s", len(rows), self.path_str)
        return rows

    def read_lazy(self, skip_malformed: bool = False) -> Iterator[Record]:
        """
        Lazy iterator over records

        Args:
            skip_malformed: Warn about and skip rows that cannot be mapped
                instead of raising

        Yields:
            One record per data line
        """
        with self.iterator() as records:
            while records.has_next():
                self._bound_schema = records.schema
                try:
                    record = records.next()
                except MappingError as e:
                    if not skip_malformed:
                        raise
                    warnings.warn(
                        f"Skipping malformed row {records.line_number} in {self.path_str}: {e}",
                        UserWarning,
                    )
                    continue

                yield record

    def get_schema(self) -> Optional[Schema]:
        """
        Get the schema records are mapped with

        Returns:
            The header-bound schema after a read with ``bind_header``,
            otherwise the declared schema
        """
        return self._bound_schema or self.schema

    def to_dataframe(self):
        """
        Convert to pandas DataFrame with nullable dtypes taken from the schema
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError("Pandas is required for to_dataframe()")

        rows = self.read_all()
        schema = self.get_schema()
        if schema is None:
            return pd.DataFrame(rows)

        dtypes: Dict[str, str] = {}
        for field in schema:
            if field.type_tag == TypeTag.INT:
                dtypes[field.name] = "Int64"  # Nullable integer
            elif field.type_tag == TypeTag.FLOAT:
                dtypes[field.name] = "Float64"
            elif field.type_tag == TypeTag.STRING:
                dtypes[field.name] = "string"
            elif field.type_tag == TypeTag.BOOLEAN:
                dtypes[field.name] = "boolean"
            # Decimal values stay as Python objects

        frame = pd.DataFrame(rows, columns=schema.get_field_names())
        return frame.astype(dtypes)
