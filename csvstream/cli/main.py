"""
CSVStream CLI - Read CSV files into typed records

Usage:
    csvstream read <file> [--schema DECLARATION] [options]
    csvstream schema <declaration>
"""

import logging
import sys
from itertools import islice
from typing import Any, Dict, List, Optional

import click

from csvstream import __version__
from csvstream.cli.formatters import get_formatter
from csvstream.core.config import ReaderConfig
from csvstream.core.errors import CSVStreamError
from csvstream.core.types import Schema
from csvstream.readers.csv_reader import CSVReader


@click.group()
@click.version_option(version=__version__, prog_name="csvstream")
@click.option(
    "--log-level",
    type=click.Choice(["ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    default="WARNING",
    help="Logging level (default: WARNING)",
)
def cli(log_level: str):
    """
    CSVStream - Read delimited text as typed records

    Maps every row of a CSV file onto a declared schema.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("file", type=str)
@click.option(
    "--schema",
    "-s",
    "schema_text",
    type=str,
    default=None,
    help="Schema as name:type pairs, e.g. 'id:int,name:string?' (default: raw rows)",
)
@click.option("--skip-headers", "-H", type=int, default=None, help="Number of header lines to skip")
@click.option("--delimiter", "-d", type=str, default=None, help="Field separator (default: ,)")
@click.option("--row-separator", type=str, default=None, help="Explicit record separator")
@click.option("--encoding", type=str, default=None, help="File encoding (default: utf-8)")
@click.option(
    "--bind-header",
    is_flag=True,
    default=None,
    help="Match schema fields to the names in the first header line",
)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json", "csv", "markdown"], case_sensitive=False),
    default="table",
    help="Output format (default: table)",
)
@click.option("--limit", "-l", type=int, default=None, help="Stop after this many records")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Write output to file instead of stdout",
)
@click.option("--stream", is_flag=True, help="Read records lazily instead of in one bulk read")
@click.option(
    "--skip-malformed",
    is_flag=True,
    help="Warn about and skip rows that cannot be mapped (implies --stream)",
)
@click.option("--no-color", is_flag=True, help="Disable colored output")
def read(
    file: str,
    schema_text: Optional[str],
    skip_headers: Optional[int],
    delimiter: Optional[str],
    row_separator: Optional[str],
    encoding: Optional[str],
    bind_header: Optional[bool],
    fmt: str,
    limit: Optional[int],
    output: Optional[str],
    stream: bool,
    skip_malformed: bool,
    no_color: bool,
):
    """
    Read a CSV file and print its records

    Examples:

        \b
        # Typed records, skipping the header line
        $ csvstream read people.csv -s "id:int,name:string?,age:int?" -H 1

        \b
        # Let the header decide the column order
        $ csvstream read people.csv -s "age:int?,id:int,name:string?" -H 1 --bind-header

        \b
        # Semicolon separated, JSON output
        $ csvstream read data.csv -d ";" -f json

        \b
        # Stream a large file and keep only the first 10 records
        $ csvstream read big.csv -s "id:int" --stream --limit 10
    """
    fmt = fmt.lower()
    try:
        config = ReaderConfig.from_options(
            skip_headers=skip_headers,
            field_separator=delimiter,
            row_separator=row_separator,
            encoding=encoding,
            bind_header=bind_header,
        )
        reader = CSVReader(file, schema_text, config=config)

        if stream or skip_malformed or limit is not None:
            records = _take(reader.read_lazy(skip_malformed=skip_malformed), limit)
        else:
            records = reader.read_all()

        rows = _as_dicts(records)
        formatter = get_formatter(fmt)
        output_text = formatter.format(
            rows,
            schema=reader.get_schema(),
            no_color=no_color or (not sys.stdout.isatty()),
            show_footer=not output,
        )

        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(output_text)
            click.echo(f"Records written to {output} ({fmt} format)", err=True)
        else:
            click.echo(output_text)

    except FileNotFoundError as e:
        click.echo(f"Error: File not found - {e}", err=True)
        sys.exit(1)
    except CSVStreamError as e:
        click.echo(f"Error [{e.kind}]: {e.message}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("declaration", type=str)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json", "csv", "markdown"], case_sensitive=False),
    default="table",
    help="Output format (default: table)",
)
def schema(declaration: str, fmt: str):
    """
    Parse a schema declaration and show its fields

    Examples:

        \b
        $ csvstream schema "id:int,name:string?,price:decimal"
    """
    try:
        parsed = Schema.from_string(declaration)
    except CSVStreamError as e:
        click.echo(f"Error [{e.kind}]: {e.message}", err=True)
        sys.exit(1)

    rows = [
        {
            "position": index,
            "name": field.name,
            "type": str(field.type_tag),
            "nullable": field.nullable,
            "declared": field.describe(),
        }
        for index, field in enumerate(parsed)
    ]
    click.echo(get_formatter(fmt.lower()).format(rows, no_color=not sys.stdout.isatty(), show_footer=False))


def _take(records, limit: Optional[int]) -> List[Any]:
    """Collect at most ``limit`` records from a lazy reader and release it."""
    try:
        return list(islice(records, limit))
    finally:
        records.close()


def _as_dicts(records: List[Any]) -> List[Dict[str, Any]]:
    """Give raw rows generic column names so formatters can render them."""
    if not records or isinstance(records[0], dict):
        return records

    width = max(len(record) for record in records)
    columns = [f"column_{i + 1}" for i in range(width)]
    return [
        {col: record[i] if i < len(record) else None for i, col in enumerate(columns)}
        for record in records
    ]


if __name__ == "__main__":
    cli()
