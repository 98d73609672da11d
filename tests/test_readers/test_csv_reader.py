"""
Tests for CSV reader
"""

import io
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import pytest

from csvstream.core.config import ReaderConfig
from csvstream.core.errors import (
    ClosedResourceError,
    EmptyLineError,
    FieldConversionError,
    NonNullableEmptyFieldError,
)
from csvstream.core.types import Schema
from csvstream.readers.csv_reader import CSVReader


@dataclass
class Person:
    id: int
    name: Optional[str]
    age: Optional[int]


class TestBulkRead:
    """Test read_all()"""

    def test_read_all(self, people_csv, people_schema):
        """Header is skipped and empty nullable fields become None"""
        reader = CSVReader(str(people_csv), people_schema, skip_headers=1)

        assert reader.read_all() == [
            {"id": 1, "name": "Alice", "age": 30},
            {"id": 2, "name": None, "age": None},
        ]

    def test_schema_from_type(self, people_csv):
        reader = CSVReader(str(people_csv), Person, skip_headers=1)
        rows = reader.read_all()

        assert rows[0] == {"id": 1, "name": "Alice", "age": 30}
        assert [reader.get_schema().build(row) for row in rows] == [
            Person(1, "Alice", 30),
            Person(2, None, None),
        ]

    def test_type_conversion(self, mixed_types_csv):
        """Test that every supported type is converted"""
        schema = "id:int,price:float,amount:decimal,active:boolean,label:string"
        reader = CSVReader(str(mixed_types_csv), schema, skip_headers=1)
        rows = reader.read_all()

        first = rows[0]
        assert first["id"] == 1
        assert first["price"] == 19.99
        assert first["amount"] == Decimal("12345678901234567890.123456789")
        assert first["active"] is True
        assert first["label"] == "first"

        second = rows[1]
        assert second["id"] == -2
        assert second["price"] == 2500.0
        assert second["active"] is False

    def test_skip_headers_beyond_input(self, people_csv, people_schema):
        reader = CSVReader(str(people_csv), people_schema, skip_headers=10)
        assert reader.read_all() == []

    def test_header_not_skipped_fails(self, people_csv, people_schema):
        """Without skipping, the header line is mapped like data"""
        reader = CSVReader(str(people_csv), people_schema)

        with pytest.raises(FieldConversionError) as exc_info:
            reader.read_all()
        assert exc_info.value.field_name == "id"
        assert exc_info.value.raw_value == "id"

    def test_first_error_aborts(self, tmp_path, people_schema):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("1,Alice,30\nx,Bob,thirty\n3,Carol,40\n")

        reader = CSVReader(str(csv_file), people_schema)
        with pytest.raises(FieldConversionError) as exc_info:
            reader.read_all()
        assert exc_info.value.field_name == "id"

    def test_empty_line_aborts(self, tmp_path, people_schema):
        csv_file = tmp_path / "gap.csv"
        csv_file.write_text("1,Alice,30\n\n2,Bob,25\n")

        with pytest.raises(EmptyLineError):
            CSVReader(str(csv_file), people_schema).read_all()

    def test_required_field_empty(self, tmp_path):
        csv_file = tmp_path / "required.csv"
        csv_file.write_text("1,\n")

        with pytest.raises(NonNullableEmptyFieldError, match="'name'"):
            CSVReader(str(csv_file), "id:int,name:string").read_all()

    def test_raw_rows_without_schema(self, people_csv):
        reader = CSVReader(str(people_csv))
        assert reader.read_all() == [["id", "name", "age"], ["1", "Alice", "30"], ["2", "", ""]]
        assert reader.get_schema() is None

    def test_repeatable_for_files(self, people_csv, people_schema):
        """Each read opens a new session on a file"""
        reader = CSVReader(str(people_csv), people_schema, skip_headers=1)
        assert reader.read_all() == reader.read_all()

    def test_row_separator(self, tmp_path, people_schema):
        csv_file = tmp_path / "rows.txt"
        csv_file.write_text("1,Alice,30|2,Bob,25|")

        reader = CSVReader(str(csv_file), people_schema, row_separator="|")
        assert [row["name"] for row in reader.read_all()] == ["Alice", "Bob"]

    @pytest.mark.parametrize("ending", [b"\n", b"\r\n"])
    def test_row_separator_file_ends_with_newline(self, tmp_path, people_schema, ending):
        csv_file = tmp_path / "rows.txt"
        csv_file.write_bytes(b"1,Alice,30;2,Bob,;" + ending)

        reader = CSVReader(str(csv_file), people_schema, row_separator=";")
        assert reader.read_all() == [
            {"id": 1, "name": "Alice", "age": 30},
            {"id": 2, "name": "Bob", "age": None},
        ]

    def test_config_object(self, tmp_path, people_schema):
        csv_file = tmp_path / "semi.csv"
        csv_file.write_text("id;name;age\n1;Alice;30\n")

        config = ReaderConfig(field_separator=";", skip_headers=1)
        reader = CSVReader(str(csv_file), people_schema, config=config)
        assert reader.read_all() == [{"id": 1, "name": "Alice", "age": 30}]

    def test_bind_header(self, tmp_path, people_schema):
        csv_file = tmp_path / "reordered.csv"
        csv_file.write_text("name,age,id\nAlice,30,1\n")

        reader = CSVReader(str(csv_file), people_schema, skip_headers=1, bind_header=True)
        assert reader.read_all() == [{"name": "Alice", "age": 30, "id": 1}]
        assert reader.get_schema().get_field_names() == ["name", "age", "id"]

    def test_file_not_found(self, people_schema):
        with pytest.raises(FileNotFoundError):
            CSVReader("nonexistent.csv", people_schema)


class TestStreamSource:
    """Test reading from an open text stream"""

    def test_read_stream(self, people_schema, sample_csv_content):
        reader = CSVReader(io.StringIO(sample_csv_content), people_schema, skip_headers=1)
        assert len(reader.read_all()) == 2

    def test_stream_consumed_once(self, people_schema, sample_csv_content):
        reader = CSVReader(io.StringIO(sample_csv_content), people_schema, skip_headers=1)
        reader.read_all()

        with pytest.raises(ClosedResourceError, match="already consumed"):
            reader.read_all()


class TestLazyIteration:
    """Test lazy iteration (generator behavior)"""

    def test_lazy_evaluation(self, people_csv, people_schema):
        reader = CSVReader(str(people_csv), people_schema, skip_headers=1)
        iterator = reader.read_lazy()

        assert hasattr(iterator, "__iter__")
        assert hasattr(iterator, "__next__")

        assert next(iterator)["name"] == "Alice"
        assert next(iterator)["name"] is None
        with pytest.raises(StopIteration):
            next(iterator)

    def test_iterate_with_for_loop(self, people_csv, people_schema):
        reader = CSVReader(str(people_csv), people_schema, skip_headers=1)
        assert [row["id"] for row in reader] == [1, 2]

    def test_malformed_row_raises(self, tmp_path, people_schema):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("1,Alice,30\n2,Bob,old\n")

        rows = []
        with pytest.raises(FieldConversionError):
            for row in CSVReader(str(csv_file), people_schema).read_lazy():
                rows.append(row)
        assert rows == [{"id": 1, "name": "Alice", "age": 30}]

    def test_skip_malformed(self, tmp_path, people_schema):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("1,Alice,30\n2,Bob,old\n\n4,Dan,50\n")

        reader = CSVReader(str(csv_file), people_schema)
        with pytest.warns(UserWarning, match="Skipping malformed row 2"):
            rows = list(reader.read_lazy(skip_malformed=True))

        assert [row["id"] for row in rows] == [1, 4]

    def test_iterator(self, people_csv, people_schema):
        reader = CSVReader(str(people_csv), people_schema, skip_headers=1)
        with reader.iterator() as records:
            assert records.has_next()
            assert records.next()["id"] == 1


class TestToDataFrame:
    """Test pandas conversion"""

    def test_to_dataframe(self, people_csv, people_schema):
        pd = pytest.importorskip("pandas")

        df = CSVReader(str(people_csv), people_schema, skip_headers=1).to_dataframe()

        assert list(df.columns) == ["id", "name", "age"]
        assert str(df["id"].dtype) == "Int64"
        assert str(df["age"].dtype) == "Int64"
        assert df["age"].isna().tolist() == [False, True]
        assert df["name"].iloc[0] == "Alice"
        assert pd.isna(df["name"].iloc[1])

    def test_to_dataframe_empty(self, people_csv, people_schema):
        pytest.importorskip("pandas")

        df = CSVReader(str(people_csv), people_schema, skip_headers=5).to_dataframe()
        assert list(df.columns) == ["id", "name", "age"]
        assert len(df) == 0

    def test_to_dataframe_decimal(self, mixed_types_csv):
        pytest.importorskip("pandas")

        schema = Schema.from_string("id:int,price:float,amount:decimal,active:boolean,label:string")
        df = CSVReader(str(mixed_types_csv), schema, skip_headers=1).to_dataframe()

        assert df["amount"].iloc[1] == Decimal("0.1")
        assert str(df["active"].dtype) == "boolean"
