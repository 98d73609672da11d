"""Typed record mapper.

Converts one tokenized row into a record dictionary following the schema
descriptor. Any failure aborts the whole row; partial records are never
returned.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from csvstream.core.errors import (
    EmptyLineError,
    FieldConversionError,
    NonNullableEmptyFieldError,
    UnsupportedFieldTypeError,
    UnsupportedNullableShapeError,
)
from csvstream.core.types import FieldSchema, Schema, TypeTag

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def parse_int(text: str) -> int:
    """Parse a signed 64-bit integer.

    Raises:
        ValueError: If text is not a base 10 integer in the 64-bit range
    """
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def parse_float(text: str) -> float:
    """Parse a 64-bit float, rejecting digit group separators."""
    if "_" in text:
        raise ValueError(f"invalid float: {text!r}")
    return float(text)


def parse_decimal(text: str) -> Decimal:
    """Parse an arbitrary precision decimal."""
    if "_" in text:
        raise ValueError(f"invalid decimal: {text!r}")
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"invalid decimal: {text!r}") from e


def parse_boolean(text: str) -> bool:
    """Parse a boolean.

    Only a case-insensitive ``true`` is True. Every other text is False,
    including values like ``yes`` or ``1``.
    """
    return text.lower() == "true"


_CONVERTERS = {
    TypeTag.INT: parse_int,
    TypeTag.FLOAT: parse_float,
    TypeTag.DECIMAL: parse_decimal,
    TypeTag.BOOLEAN: parse_boolean,
    TypeTag.STRING: str,
}


def is_empty_line(fields: Sequence[str]) -> bool:
    """Check if a tokenized row came from an empty line."""
    return len(fields) == 0 or (len(fields) == 1 and not fields[0])


def convert_value(field: FieldSchema, value: Optional[str]) -> Any:
    """
    Convert the text of one field into its typed value

    Args:
        field: Field declaration
        value: Raw text (None when the row has no such column)

    Returns:
        Typed value, or None for an empty nullable field

    Raises:
        NonNullableEmptyFieldError: Empty text for a non-nullable field
        UnsupportedNullableShapeError: Field declared with a bad union shape
        FieldConversionError: Text is not valid for the declared type
        UnsupportedFieldTypeError: Declared type cannot be mapped
    """
    if value is None or value == "":
        if field.nullable:
            return None
        if field.is_union:
            raise UnsupportedNullableShapeError(field.name)
        raise NonNullableEmptyFieldError(field.name)

    type_tag = field.effective_type(value)
    if not type_tag.is_supported():
        raise UnsupportedFieldTypeError(field.name)

    trimmed = value.strip()
    try:
        return _CONVERTERS[type_tag](trimmed)
    except ValueError as e:
        raise FieldConversionError(field.name, trimmed) from e


def map_row(fields: Sequence[str], schema: Schema) -> Dict[str, Any]:
    """
    Map a tokenized row onto the schema

    Field ``i`` of the row is converted according to field ``i`` of the
    schema, in schema order, so the first failing field is the one reported.
    Columns beyond the schema length are ignored.

    Args:
        fields: Raw text fields of one row
        schema: Schema descriptor of the session

    Returns:
        Record dictionary keyed by field name

    Raises:
        EmptyLineError: If the row came from an empty line
        MappingError: If any field cannot be mapped

    Example:
        >>> map_row(["1", "Alice", ""], Schema.from_string("id:int,name:string,age:int?"))
        {'id': 1, 'name': 'Alice', 'age': None}
    """
    if is_empty_line(fields):
        raise EmptyLineError()

    record: Dict[str, Any] = {}
    for index, field in enumerate(schema):
        value = fields[index] if index < len(fields) else None
        record[field.name] = convert_value(field, value)

    return record

