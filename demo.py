#!/usr/bin/env python
"""
CSVStream Demo - Testing all implemented features

Demonstrates:
- Bulk reads with a compact schema
- Schemas derived from dataclasses
- Streaming with has_next() / next()
- Mapping errors
"""

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional
import tempfile

from csvstream import MappingError, read_csv, stream_csv


@dataclass
class Sale:
    region: str
    product: str
    amount: Decimal
    quantity: Optional[int]
    shipped: bool


def write_temp_csv(content: str) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.csv', delete=False) as f:
        f.write(content)
        return f.name


def demo_bulk_read():
    """Demo one-shot bulk reads"""
    print("=" * 60)
    print("DEMO 1: Bulk Read")
    print("=" * 60)

    csv_file = write_temp_csv("id,name,age\n1,Alice,30\n2,,\n")

    print("\n1. read_csv(file, 'id:int,name:string?,age:int?', skip_headers=1)")
    for record in read_csv(csv_file, "id:int,name:string?,age:int?", skip_headers=1):
        print(f"  {record}")

    print("\n2. read_csv(file) without a schema")
    for row in read_csv(csv_file):
        print(f"  {row}")

    Path(csv_file).unlink()


def demo_dataclass_schema():
    """Demo schemas taken from a dataclass"""
    print("\n" + "=" * 60)
    print("DEMO 2: Dataclass Schema")
    print("=" * 60)

    csv_file = write_temp_csv(
        "region;product;amount;quantity;shipped\n"
        "East;Widget;1000.10;10;true\n"
        "West;Gadget;1500.255;;false\n"
    )

    records = read_csv(csv_file, Sale, skip_headers=1, field_separator=";")
    for record in records:
        print(f"  {record}")

    Path(csv_file).unlink()


def demo_streaming():
    """Demo streaming iteration"""
    print("\n" + "=" * 60)
    print("DEMO 3: Streaming")
    print("=" * 60)

    csv_file = write_temp_csv("".join(f"{i},item-{i}\n" for i in range(1, 6)))

    with stream_csv(csv_file, "id:int,label:string") as records:
        while records.has_next():
            record = records.next()
            print(f"  {record}")
            if record["id"] == 3:
                print("  ... stopping early")
                break

    Path(csv_file).unlink()


def demo_errors():
    """Demo mapping errors"""
    print("\n" + "=" * 60)
    print("DEMO 4: Mapping Errors")
    print("=" * 60)

    csv_file = write_temp_csv("x,Bob,thirty\n")

    try:
        read_csv(csv_file, "id:int,name:string?,age:int?")
    except MappingError as e:
        print(f"  {e.kind}: {e.message}")

    Path(csv_file).unlink()


if __name__ == "__main__":
    demo_bulk_read()
    demo_dataclass_schema()
    demo_streaming()
    demo_errors()
