"""Tests for S3 support in the CSV reader.

Mocks s3fs to avoid actual network calls.
"""

import io
from unittest.mock import MagicMock, patch

import pytest

from csvstream.readers.csv_reader import CSVReader


class TestS3CSVReader:
    """Test S3 support in CSVReader."""

    @pytest.fixture(autouse=True)
    def setup_s3_mock(self):
        """Mock s3fs before each test."""
        self.mock_s3fs = MagicMock()
        self.mock_fs = MagicMock()
        self.mock_s3fs.S3FileSystem.return_value = self.mock_fs

        with patch.dict("sys.modules", {"s3fs": self.mock_s3fs}):
            yield

    def test_csv_reader_s3_init(self):
        """Constructing an S3 reader does not touch the network."""
        path = "s3://bucket/people.csv"
        reader = CSVReader(path, "id:int")

        assert reader.is_s3
        assert reader.path_str == path
        self.mock_fs.open.assert_not_called()

    def test_csv_reader_s3_read(self, people_schema, sample_csv_content):
        """Records are read through s3fs."""
        self.mock_fs.open.return_value = io.StringIO(sample_csv_content)

        reader = CSVReader("s3://bucket/people.csv", people_schema, skip_headers=1, encoding="latin-1")
        rows = reader.read_all()

        self.mock_s3fs.S3FileSystem.assert_called_with(anon=False)
        self.mock_fs.open.assert_called_with("s3://bucket/people.csv", mode="r", encoding="latin-1")
        assert rows == [
            {"id": 1, "name": "Alice", "age": 30},
            {"id": 2, "name": None, "age": None},
        ]

    def test_csv_reader_s3_missing_library(self):
        """Test error when s3fs not installed."""
        with patch.dict("sys.modules", {"s3fs": None}):
            reader = CSVReader("s3://bucket/people.csv", "id:int")

            with pytest.raises(ImportError, match="s3fs is required"):
                reader.read_all()
