"""
Main API - user-facing entry points for CSVStream

Example:
    >>> from csvstream import read_csv, stream_csv
    >>> people = read_csv("people.csv", "id:int,name:string?,age:int?", skip_headers=1)
    >>> with stream_csv("people.csv", Person, skip_headers=1) as records:
    ...     for record in records:
    ...         print(record)
"""

from typing import Any, List, Optional, TextIO, Union

from csvstream.core.config import ReaderConfig
from csvstream.readers.csv_iterator import CSVRecordIterator, Record
from csvstream.readers.csv_reader import CSVReader


def read_csv(
    source: Union[str, TextIO],
    schema: Any = None,
    skip_headers: int = 0,
    config: Optional[ReaderConfig] = None,
    **options: Any,
) -> List[Record]:
    """
    Read a whole CSV source into a list of records

    The source is opened and closed internally.

    Args:
        source: Path, s3:// URL or open text stream
        schema: Schema description; None returns raw rows
        skip_headers: Number of leading lines to discard
        config: Session configuration
        **options: Other ReaderConfig overrides

    Returns:
        List of records in input order

    Raises:
        MappingError: On the first row that cannot be mapped
    """
    reader = CSVReader(source, schema, config=config, skip_headers=skip_headers or None, **options)
    return reader.read_all()


def stream_csv(
    source: Union[str, TextIO],
    schema: Any = None,
    skip_headers: int = 0,
    config: Optional[ReaderConfig] = None,
    **options: Any,
) -> CSVRecordIterator:
    """
    Open a CSV source as a stream of records

    The returned iterator owns the source; close it (or use it as a context
    manager) when stopping before the end.

    Returns:
        CSVRecordIterator over the source
    """
    reader = CSVReader(source, schema, config=config, skip_headers=skip_headers or None, **options)
    return reader.iterator()
