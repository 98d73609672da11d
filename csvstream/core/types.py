"""Type system for CSVStream.

This module provides the scalar type tags a CSV field can be mapped to, and the
schema descriptor that fixes the positional order of fields in a record.
"""

import dataclasses
import types
import typing
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from csvstream.core.errors import SchemaError, UnsupportedNullableShapeError

_UNION_TYPES = tuple(t for t in (Union, getattr(types, "UnionType", None)) if t is not None)


class TypeTag(Enum):
    """Scalar field types supported by the record mapper."""

    # Numeric types
    INT = "INT"
    FLOAT = "FLOAT"
    DECIMAL = "DECIMAL"

    STRING = "STRING"
    BOOLEAN = "BOOLEAN"

    # Special
    NULL = "NULL"
    UNSUPPORTED = "UNSUPPORTED"

    def __str__(self) -> str:
        return self.value

    def is_numeric(self) -> bool:
        """Check if type is numeric (INT, FLOAT, or DECIMAL)."""
        return self in (TypeTag.INT, TypeTag.FLOAT, TypeTag.DECIMAL)

    def is_supported(self) -> bool:
        """Check if the mapper can convert text into this type."""
        return self not in (TypeTag.NULL, TypeTag.UNSUPPORTED)

    @staticmethod
    def from_python(annotation: Any) -> "TypeTag":
        """Get the tag for a plain (non-union) Python annotation.

        Examples:
            >>> TypeTag.from_python(int)
            TypeTag.INT
            >>> TypeTag.from_python(list)
            TypeTag.UNSUPPORTED
        """
        return _PYTHON_TYPES.get(annotation, TypeTag.UNSUPPORTED)

    @staticmethod
    def from_name(name: str) -> "TypeTag":
        """Get the tag for a type name such as ``int`` or ``boolean``.

        Unknown names map to UNSUPPORTED so that the mapper reports them
        against the field that declared them.
        """
        return _TYPE_NAMES.get(name.strip().lower(), TypeTag.UNSUPPORTED)


_PYTHON_TYPES = {
    int: TypeTag.INT,
    float: TypeTag.FLOAT,
    Decimal: TypeTag.DECIMAL,
    str: TypeTag.STRING,
    bool: TypeTag.BOOLEAN,
    type(None): TypeTag.NULL,
    None: TypeTag.NULL,
}

_TYPE_NAMES = {
    "int": TypeTag.INT,
    "integer": TypeTag.INT,
    "long": TypeTag.INT,
    "float": TypeTag.FLOAT,
    "double": TypeTag.FLOAT,
    "decimal": TypeTag.DECIMAL,
    "str": TypeTag.STRING,
    "string": TypeTag.STRING,
    "bool": TypeTag.BOOLEAN,
    "boolean": TypeTag.BOOLEAN,
    "null": TypeTag.NULL,
    "none": TypeTag.NULL,
    "()": TypeTag.NULL,
}


def _nullable_value_type(members: Tuple[TypeTag, ...]) -> Optional[TypeTag]:
    """Get ``T`` for a ``T | None`` pair, or None for any other union shape."""
    value_types = [m for m in members if m != TypeTag.NULL]
    if len(members) == 2 and len(value_types) == 1:
        return value_types[0]
    return None


@dataclasses.dataclass(frozen=True)
class FieldSchema:
    """Declared name and type of one record field.

    Only a two member union with a NULL member is a valid nullable
    declaration. Any other union keeps the tags of its members in
    ``union_members`` and is rejected by the mapper when the field is
    converted.
    """

    name: str
    type_tag: TypeTag
    nullable: bool = False
    union_members: Tuple[TypeTag, ...] = ()

    @property
    def is_union(self) -> bool:
        return bool(self.union_members)

    def effective_type(self, raw_value: Optional[str] = None) -> TypeTag:
        """Resolve the scalar type values of this field are converted to.

        Raises:
            UnsupportedNullableShapeError: If the field is a union that is not
                a ``T | None`` pair
        """
        if not self.union_members:
            return self.type_tag

        value_type = _nullable_value_type(self.union_members)
        if value_type is not None:
            return value_type

        raise UnsupportedNullableShapeError(self.name, raw_value)

    def describe(self) -> str:
        """Get the textual type declaration, e.g. ``INT?``."""
        if self.union_members:
            return "|".join(str(m) for m in self.union_members)
        return f"{self.type_tag}{'?' if self.nullable else ''}"

    @staticmethod
    def from_annotation(name: str, annotation: Any) -> "FieldSchema":
        """Build a field from a Python type annotation.

        ``Optional[int]`` and ``int | None`` become nullable INT fields.
        """
        if typing.get_origin(annotation) in _UNION_TYPES:
            members = tuple(TypeTag.from_python(arg) for arg in typing.get_args(annotation))
            return FieldSchema._from_union(name, members)

        return FieldSchema(name, TypeTag.from_python(annotation))

    @staticmethod
    def from_declaration(name: str, declaration: str) -> "FieldSchema":
        """Build a field from a textual declaration.

        Examples:
            >>> FieldSchema.from_declaration("age", "int?").nullable
            True
            >>> FieldSchema.from_declaration("id", "int|string").union_members
            (TypeTag.INT, TypeTag.STRING)
        """
        declaration = declaration.strip()
        if not declaration:
            raise SchemaError(f"Missing type for field '{name}'", field_name=name)

        optional = declaration.endswith("?")
        if optional:
            declaration = declaration[:-1]

        members = tuple(TypeTag.from_name(part) for part in declaration.split("|"))
        if optional:
            members += (TypeTag.NULL,)

        if len(members) == 1:
            return FieldSchema(name, members[0])
        return FieldSchema._from_union(name, members)

    @staticmethod
    def _from_union(name: str, members: Tuple[TypeTag, ...]) -> "FieldSchema":
        value_type = _nullable_value_type(members)
        if value_type is not None:
            return FieldSchema(name, value_type, nullable=True)
        return FieldSchema(name, TypeTag.UNSUPPORTED, union_members=members)


class Schema:
    """Schema descriptor for the records of one reading session.

    Holds the ordered field declarations. Field ``i`` of every row maps to
    the ``i``-th field of the schema.
    """

    def __init__(self, fields: Iterable[FieldSchema], record_type: Optional[type] = None):
        """Initialize schema.

        Args:
            fields: Field declarations in column order
            record_type: Type the schema was derived from, if any

        Raises:
            SchemaError: If two fields share a name
        """
        self.fields: Tuple[FieldSchema, ...] = tuple(fields)
        self.record_type = record_type

        seen = set()
        for field in self.fields:
            if field.name in seen:
                raise SchemaError(f"Duplicate field '{field.name}' in schema", field_name=field.name)
            seen.add(field.name)

    def __getitem__(self, key: Union[int, str]) -> FieldSchema:
        """Get a field by position or by name."""
        if isinstance(key, int):
            return self.fields[key]
        for field in self.fields:
            if field.name == key:
                return field
        raise KeyError(key)

    def __contains__(self, name: str) -> bool:
        """Check if field exists in schema."""
        return any(field.name == name for field in self.fields)

    def __len__(self) -> int:
        """Get number of fields."""
        return len(self.fields)

    def __iter__(self) -> Iterator[FieldSchema]:
        return iter(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self.fields == other.fields

    def __repr__(self) -> str:
        cols = ", ".join(f"{field.name}: {field.describe()}" for field in self.fields)
        return f"Schema({cols})"

    def get_field_names(self) -> List[str]:
        """Get list of field names in column order."""
        return [field.name for field in self.fields]

    def bind_header(self, header: List[str]) -> "Schema":
        """Re-order the schema to match the columns of a header row.

        Args:
            header: Column names as they appear in the input

        Returns:
            New schema whose field order follows the header

        Raises:
            SchemaError: If header and schema do not name the same fields
        """
        names = [name.strip() for name in header]

        unknown = [name for name in names if name not in self]
        if unknown:
            available = ", ".join(self.get_field_names())
            raise SchemaError(
                f"Header column(s) {', '.join(unknown)} not found in schema. "
                f"Available fields: {available}"
            )

        missing = [name for name in self.get_field_names() if name not in names]
        if missing:
            raise SchemaError(f"Header is missing field(s): {', '.join(missing)}")

        return Schema([self[name] for name in names], record_type=self.record_type)

    def build(self, record: Dict[str, Any]) -> Any:
        """Turn a mapped record into an instance of the declared record type.

        Returns the record unchanged when the schema was not derived from a type.
        """
        if self.record_type is None:
            return record
        return self.record_type(**record)

    def to_dict(self) -> Dict[str, str]:
        """Convert schema to dictionary of textual declarations."""
        return {field.name: field.describe() for field in self.fields}

    @staticmethod
    def from_type(record_type: type) -> "Schema":
        """Derive a schema from an annotated class.

        Supports dataclasses, NamedTuple, TypedDict and plain classes with
        annotations. Field order is declaration order.

        Example:
            >>> @dataclass
            ... class Person:
            ...     id: int
            ...     name: Optional[str]
            >>> Schema.from_type(Person)
            Schema(id: INT, name: STRING?)
        """
        try:
            hints = typing.get_type_hints(record_type)
        except (NameError, TypeError) as e:
            raise SchemaError(f"Cannot resolve annotations of {record_type!r}: {e}") from e

        if dataclasses.is_dataclass(record_type):
            names = [f.name for f in dataclasses.fields(record_type)]
        elif hasattr(record_type, "_fields"):
            names = list(record_type._fields)
        else:
            names = list(hints)

        if not names:
            raise SchemaError(f"{record_type!r} declares no fields")

        fields = [FieldSchema.from_annotation(name, hints.get(name)) for name in names]
        return Schema(fields, record_type=record_type)

    @staticmethod
    def from_dict(declarations: Mapping[str, Any]) -> "Schema":
        """Build a schema from a mapping of field name to type.

        Values may be type names (``"int?"``), Python annotations or TypeTags.
        """
        fields = []
        for name, declaration in declarations.items():
            if isinstance(declaration, TypeTag):
                fields.append(FieldSchema(name, declaration))
            elif isinstance(declaration, str):
                fields.append(FieldSchema.from_declaration(name, declaration))
            else:
                fields.append(FieldSchema.from_annotation(name, declaration))
        return Schema(fields)

    @staticmethod
    def from_string(text: str) -> "Schema":
        """Parse a compact schema such as ``"id:int,name:string?,age:int?"``."""
        declarations: Dict[str, str] = {}
        for part in text.split(","):
            part = part.strip()
            if not part:
                continue
            name, sep, declaration = part.partition(":")
            if not sep or not name.strip():
                raise SchemaError(f"Invalid field declaration '{part}', expected name:type")
            if name.strip() in declarations:
                raise SchemaError(f"Duplicate field '{name.strip()}' in schema", field_name=name.strip())
            declarations[name.strip()] = declaration

        if not declarations:
            raise SchemaError("Schema declares no fields")

        return Schema.from_dict(declarations)

    @staticmethod
    def coerce(schema: Any) -> "Schema":
        """Accept any supported schema description and return a Schema.

        Args:
            schema: Schema, annotated class, mapping, compact string or a
                sequence of FieldSchema / (name, type, nullable) triples
        """
        if isinstance(schema, Schema):
            return schema
        if isinstance(schema, str):
            return Schema.from_string(schema)
        if isinstance(schema, Mapping):
            return Schema.from_dict(schema)
        if isinstance(schema, type):
            return Schema.from_type(schema)
        if isinstance(schema, (list, tuple)):
            fields = []
            for item in schema:
                if isinstance(item, FieldSchema):
                    fields.append(item)
                else:
                    name, type_tag, nullable = item
                    if not isinstance(type_tag, TypeTag):
                        type_tag = TypeTag.from_name(str(type_tag))
                    fields.append(FieldSchema(name, type_tag, nullable=bool(nullable)))
            return Schema(fields)

        raise SchemaError(f"Unsupported schema description: {schema!r}")
