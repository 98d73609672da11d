"""
Streaming record iterator

Produces one record per call over a line source, without materializing the
whole input. An iterator instance must be consumed by one caller at a time.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from csvstream.core.config import ReaderConfig
from csvstream.core.errors import ClosedResourceError, NoSuchElementError, SchemaError
from csvstream.core.mapper import map_row
from csvstream.core.tokenizer import tokenize
from csvstream.core.types import Schema
from csvstream.readers.line_source import LineSource

logger = logging.getLogger(__name__)

Record = Union[Dict[str, Any], List[str]]


class IteratorState(Enum):
    OPEN = "open"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


class CSVRecordIterator:
    """
    Iterator with explicit ``has_next()`` / ``next()`` over CSV records

    ``has_next()`` reads ahead at most one line and keeps it for the following
    ``next()``, so repeated calls do not advance the source. A mapping error
    from ``next()`` only affects the offending record; the iterator stays
    usable.

    The iterator owns its line source and closes it when the input is
    exhausted or when ``close()`` is called.

    Example:
        >>> with CSVRecordIterator(LineSource(f), schema) as records:
        ...     while records.has_next():
        ...         print(records.next())
    """

    def __init__(
        self,
        source: LineSource,
        schema: Optional[Schema] = None,
        config: Optional[ReaderConfig] = None,
    ):
        """
        Initialize iterator

        Args:
            source: Line source to read from
            schema: Schema descriptor; without one, raw rows are returned
            config: Session configuration
        """
        self._source = source
        self.schema = schema
        self.config = config or ReaderConfig()

        self.state = IteratorState.OPEN
        self.line_number = 0

        self._headers_pending = self.config.skip_headers
        self._peeked: Optional[str] = None
        self._has_peeked = False

    def has_next(self) -> bool:
        """
        Check if another record is available

        Returns:
            True if ``next()`` will produce a record (or a mapping error for it)

        Raises:
            ClosedResourceError: If the line source was closed underneath
            LineSourceError: If reading the source fails
        """
        if self.state is not IteratorState.OPEN:
            return False
        if self._has_peeked:
            return True

        if self._headers_pending and not self._skip_headers():
            return False

        line = self._read_line()
        if line is None:
            self._exhaust()
            return False

        self._peeked = line
        self._has_peeked = True
        return True

    def next(self) -> Record:
        """
        Produce the next record

        Returns:
            Record dictionary, or the raw fields when there is no schema

        Raises:
            ClosedResourceError: If the iterator has been closed
            NoSuchElementError: If no record is available
            MappingError: If the line cannot be mapped onto the schema
        """
        if self.state is IteratorState.CLOSED:
            raise ClosedResourceError("Iterator already closed.")
        if not self.has_next():
            raise NoSuchElementError()

        line = self._peeked
        self._peeked = None
        self._has_peeked = False

        fields = tokenize(line, self.config.field_separator)
        if self.schema is None:
            return fields
        return map_row(fields, self.schema)

    def close(self) -> None:
        """Close the iterator and release its line source. Safe to call more than once."""
        if self.state is IteratorState.CLOSED:
            return
        self.state = IteratorState.CLOSED
        self._peeked = None
        self._has_peeked = False
        self._source.close()

    def _read_line(self) -> Optional[str]:
        line = self._source.read_line()
        if line is not None:
            self.line_number += 1
        return line

    def _skip_headers(self) -> bool:
        """Discard header lines. Returns False if the input ended first."""
        while self._headers_pending:
            line = self._read_line()
            if line is None:
                logger.debug("Input ended while skipping header lines")
                self._exhaust()
                return False

            self._headers_pending -= 1

            if self.config.bind_header and self.line_number == 1 and self.schema is not None:
                try:
                    self.schema = self.schema.bind_header(tokenize(line, self.config.field_separator))
                except SchemaError:
                    # Rows cannot be mapped without a matching header
                    self.close()
                    raise
                logger.debug("Bound schema to header: %s", self.schema)

        return True

    def _exhaust(self) -> None:
        self.state = IteratorState.EXHAUSTED
        self._source.close()
        logger.debug("Iterator exhausted after %d line(s)", self.line_number)

    def __iter__(self) -> "CSVRecordIterator":
        return self

    def __next__(self) -> Record:
        if not self.has_next():
            raise StopIteration
        return self.next()

    def __enter__(self) -> "CSVRecordIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
