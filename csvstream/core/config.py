"""Session configuration for reading delimited text."""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from csvstream.core.tokenizer import DEFAULT_FIELD_SEPARATOR


@dataclass(frozen=True)
class ReaderConfig:
    """
    Options fixed for the lifetime of one read or iteration session

    Attributes:
        field_separator: Separator between fields (default: comma)
        row_separator: Explicit end-of-record marker; empty means one record per line
        skip_headers: Number of leading lines discarded before mapping
        encoding: Text encoding used when opening files
        bind_header: Re-order the schema after the first skipped line
    """

    field_separator: str = DEFAULT_FIELD_SEPARATOR
    row_separator: str = ""
    skip_headers: int = 0
    encoding: str = "utf-8"
    bind_header: bool = False

    def __post_init__(self) -> None:
        if not self.field_separator:
            raise ValueError("field_separator must not be empty")
        if self.skip_headers < 0:
            raise ValueError(f"skip_headers must be non-negative, got {self.skip_headers}")
        if self.bind_header and self.skip_headers < 1:
            raise ValueError("bind_header requires skip_headers >= 1")

    @classmethod
    def from_options(cls, config: Optional["ReaderConfig"] = None, **options: Any) -> "ReaderConfig":
        """
        Build a config from an optional base config plus keyword overrides

        Options set to None are ignored, so CLI defaults do not override a
        given config.

        Raises:
            TypeError: If an option is not a config field
        """
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise TypeError(f"Unknown reader option(s): {', '.join(sorted(unknown))}")

        overrides: Dict[str, Any] = {k: v for k, v in options.items() if v is not None}
        return replace(config or cls(), **overrides)
