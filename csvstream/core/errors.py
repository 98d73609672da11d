"""Error taxonomy for CSVStream.

Every error raised by the library carries a stable ``kind`` string and a
human readable ``message``. Mapping errors are row-scoped: when one is raised
no partial record has been handed to the caller.
"""

from typing import Any, Dict, Optional


class CSVStreamError(Exception):
    """Base class for all CSVStream errors."""

    kind = "csvstream_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a JSON-friendly dictionary."""
        return {
            "kind": self.kind,
            "message": self.message,
            "details": dict(self.details),
        }


class SchemaError(CSVStreamError):
    """Raised when a schema declaration cannot be used for reading."""

    kind = "schema_error"


class MappingError(CSVStreamError):
    """Base class for errors raised while converting a row into a record."""

    kind = "mapping_error"

    def __init__(self, message: str, field_name: Optional[str] = None, **details: Any):
        super().__init__(message, field_name=field_name, **details)
        self.field_name = field_name


class EmptyLineError(MappingError):
    """A line tokenized to zero usable fields."""

    kind = "empty_line"

    def __init__(self):
        super().__init__("Empty line detected")


class NonNullableEmptyFieldError(MappingError):
    """Empty or missing text for a field that does not accept null."""

    kind = "non_nullable_empty_field"

    def __init__(self, field_name: str):
        super().__init__(f"Field '{field_name}' does not support nil value.", field_name=field_name)


class UnsupportedNullableShapeError(MappingError):
    """A union-typed field that is not a plain ``T | None`` pair."""

    kind = "unsupported_nullable_shape"

    def __init__(self, field_name: str, raw_value: Optional[str] = None):
        message = f"Unsupported nillable field: {field_name}"
        if raw_value:
            message += f" for value: {raw_value}"
        super().__init__(message, field_name=field_name, raw_value=raw_value)
        self.raw_value = raw_value


class FieldConversionError(MappingError):
    """Text could not be parsed into the declared scalar type."""

    kind = "field_conversion"

    def __init__(self, field_name: str, raw_value: str):
        super().__init__(
            f"Invalid value: {raw_value} for the field: '{field_name}'",
            field_name=field_name,
            raw_value=raw_value,
        )
        self.raw_value = raw_value


class UnsupportedFieldTypeError(MappingError):
    """The declared type of a field is not one of the supported scalars."""

    kind = "unsupported_field_type"

    def __init__(self, field_name: str):
        super().__init__(
            "Data mapping support only for int, float, decimal, boolean and string. "
            f"Unsupported value for the field: {field_name}",
            field_name=field_name,
        )


class EndOfStreamError(CSVStreamError):
    """Raised when reading past the end of the input."""

    kind = "end_of_stream"

    def __init__(self, message: str = "End of stream reached"):
        super().__init__(message)


class NoSuchElementError(EndOfStreamError):
    """``next()`` was called on an iterator with no record available."""

    kind = "no_such_element"

    def __init__(self, message: str = "No more records available"):
        super().__init__(message)


class ClosedResourceError(CSVStreamError):
    """Operation attempted on an already closed source or session."""

    kind = "closed_resource"

    def __init__(self, message: str = "Channel already closed."):
        super().__init__(message)


class LineSourceError(CSVStreamError):
    """I/O failure in the underlying character stream."""

    kind = "line_source"

    def __init__(self, stage: str, cause: Exception):
        super().__init__(f"Failed to {stage}: {cause}", stage=stage)
        self.stage = stage
