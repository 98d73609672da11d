"""
CSVStream - Typed, streaming reader for delimited text

This package maps rows of CSV-style text onto declared schemas, either as a
one-shot bulk read or as a lazily produced stream of records.
"""

__version__ = "0.1.0"

# Main API
from csvstream.core.api import read_csv, stream_csv
from csvstream.core.config import ReaderConfig
from csvstream.core.errors import (
    ClosedResourceError,
    CSVStreamError,
    EmptyLineError,
    EndOfStreamError,
    FieldConversionError,
    LineSourceError,
    MappingError,
    NoSuchElementError,
    NonNullableEmptyFieldError,
    SchemaError,
    UnsupportedFieldTypeError,
    UnsupportedNullableShapeError,
)
from csvstream.core.types import FieldSchema, Schema, TypeTag
from csvstream.readers.csv_iterator import CSVRecordIterator
from csvstream.readers.csv_reader import CSVReader

__all__ = [
    "__version__",
    "read_csv",
    "stream_csv",
    "ReaderConfig",
    "Schema",
    "FieldSchema",
    "TypeTag",
    "CSVReader",
    "CSVRecordIterator",
    "CSVStreamError",
    "MappingError",
    "EmptyLineError",
    "NonNullableEmptyFieldError",
    "UnsupportedNullableShapeError",
    "FieldConversionError",
    "UnsupportedFieldTypeError",
    "SchemaError",
    "EndOfStreamError",
    "NoSuchElementError",
    "ClosedResourceError",
    "LineSourceError",
]
