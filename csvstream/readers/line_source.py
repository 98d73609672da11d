"""
Line source over a character stream

Supplies one record of text at a time from a local file, an S3 object or any
open text stream, and reports the end of input.
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

from csvstream.core.errors import ClosedResourceError, EndOfStreamError, LineSourceError

logger = logging.getLogger(__name__)


class LineSource:
    """
    Reads records from a text stream

    By default a record is one line; ``\\n``, ``\\r\\n`` and ``\\r`` terminators
    are removed. With a row separator the stream is read in chunks and split
    on the separator, keeping any partial record between reads.

    ``read_line()`` returns None once at the end of input. Reading again
    after that raises EndOfStreamError.
    """

    CHUNK_SIZE = 8192

    def __init__(self, stream: TextIO, row_separator: str = "", name: Optional[str] = None):
        """
        Initialize line source

        Args:
            stream: Open text stream; the source takes ownership of it
            row_separator: Explicit record separator (default: line boundaries)
            name: Description of the stream used in messages
        """
        self._stream = stream
        self.row_separator = row_separator
        self.name = name or getattr(stream, "name", None) or "<stream>"

        self.closed = False
        self._buffer = ""
        self._stream_eof = False
        self._exhausted = False

    @classmethod
    def open(cls, path: str, encoding: str = "utf-8", row_separator: str = "") -> "LineSource":
        """
        Open a local file or an s3:// URL

        Raises:
            FileNotFoundError: If a local file does not exist
            ImportError: If s3fs is needed but not installed
        """
        if path.startswith("s3://"):
            try:
                import s3fs
            except ImportError:
                raise ImportError(
                    "s3fs is required for S3 support. Install with: pip install csvstream[s3]"
                )
            fs = s3fs.S3FileSystem(anon=False)
            stream = fs.open(path, mode="r", encoding=encoding)
        else:
            file_path = Path(path)
            if not file_path.exists():
                raise FileNotFoundError(f"CSV file not found: {path}")
            stream = open(file_path, encoding=encoding, newline="")

        logger.debug("Opened %s (encoding=%s)", path, encoding)
        return cls(stream, row_separator=row_separator, name=path)

    def read_line(self) -> Optional[str]:
        """
        Read the next record of text

        Returns:
            The record without its terminator, or None at the end of input

        Raises:
            ClosedResourceError: If the source has been closed
            EndOfStreamError: If the end of input was already reported
            LineSourceError: If the underlying stream fails
        """
        if self.closed:
            raise ClosedResourceError(f"Channel already closed: {self.name}")
        if self._exhausted:
            raise EndOfStreamError(f"End of stream reached: {self.name}")

        try:
            if self.row_separator:
                line = self._read_separated()
            else:
                line = self._read_terminated()
        except (OSError, UnicodeDecodeError) as e:
            raise LineSourceError(f"read line from {self.name}", e) from e

        if line is None:
            self._exhausted = True
            logger.debug("Reached end of %s", self.name)
        return line

    def _read_terminated(self) -> Optional[str]:
        line = self._stream.readline()
        if line == "":
            return None
        if line.endswith("\r\n"):
            return line[:-2]
        if line.endswith(("\n", "\r")):
            return line[:-1]
        return line

    def _read_separated(self) -> Optional[str]:
        separator = self.row_separator
        start = 0
        while True:
            index = self._buffer.find(separator, start)
            if index >= 0:
                line = self._buffer[:index]
                self._buffer = self._buffer[index + len(separator):]
                return line

            if self._stream_eof:
                break

            # The separator may straddle two chunks
            start = max(0, len(self._buffer) - len(separator) + 1)
            chunk = self._stream.read(self.CHUNK_SIZE)
            if not chunk:
                self._stream_eof = True
            else:
                self._buffer += chunk

        # A line terminator after the last separator ends the input
        line, self._buffer = self._buffer, ""
        if line.strip("\r\n"):
            return line
        return None

    def close(self) -> bool:
        """
        Close the source and its stream

        Safe to call more than once. The source counts as closed even when
        closing the stream fails.

        Returns:
            True if this call closed the source, False if it was already closed

        Raises:
            LineSourceError: If closing the underlying stream fails
        """
        if self.closed:
            logger.debug("Channel already closed: %s", self.name)
            return False

        self.closed = True
        self._buffer = ""
        try:
            self._stream.close()
        except OSError as e:
            raise LineSourceError(f"close {self.name}", e) from e

        logger.debug("Closed %s", self.name)
        return True

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
