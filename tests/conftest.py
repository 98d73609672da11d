"""
Pytest configuration and shared fixtures
"""

import pytest

from csvstream.core.types import Schema


@pytest.fixture
def people_schema():
    """Schema of the people sample"""
    return Schema.from_string("id:int,name:string?,age:int?")


@pytest.fixture
def sample_csv_content():
    """Sample CSV content with one header line"""
    return "id,name,age\n1,Alice,30\n2,,\n"


@pytest.fixture
def people_csv(tmp_path, sample_csv_content):
    """Sample CSV file"""
    csv_file = tmp_path / "people.csv"
    csv_file.write_text(sample_csv_content)
    return csv_file


@pytest.fixture
def mixed_types_csv(tmp_path):
    """CSV with one column per supported type"""
    csv_file = tmp_path / "mixed.csv"
    csv_file.write_text(
        "id,price,amount,active,label\n"
        "1, 19.99 ,12345678901234567890.123456789,TRUE, first \n"
        "-2,2.5e3,0.1,false,second\n"
    )
    return csv_file
