"""
Line Streamer
-------------
Reads a byte source in fixed-size chunks and yields delimiter-terminated
lines without ever holding the whole file in memory.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096
DELIMITER = "\n"
ENCODING = "utf-8"


class SourceUnavailableError(OSError):
    """Raised when the byte source cannot be opened for reading."""


class LineStreamer:
    """
    Lazy, single-use sequence of decoded lines read from a file path or a
    binary file object. Call rewind() to iterate again from the start.
    """

    def __init__(self, source: Union[str, Path, BinaryIO], delimiter: str = DELIMITER,
                 encoding: str = ENCODING, chunk_size: int = CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if not delimiter:
            raise ValueError("delimiter must not be empty")

        if isinstance(source, (str, Path)):
            try:
                self._handle = open(source, "rb")
            except OSError as e:
                raise SourceUnavailableError(f"Cannot open {source}: {e}") from e
            self._owns_handle = True
            self.name = Path(source).name
        else:
            self._handle = source
            self._owns_handle = False
            self.name = getattr(source, "name", "<stream>")

        self.encoding = encoding
        self.chunk_size = chunk_size
        self._delimiter = delimiter.encode(encoding)
        self._buffer = bytearray()
        self._at_eof = False

    def next_line(self) -> Optional[str]:
        """Return the next line without its delimiter, or None once exhausted."""
        if self._at_eof:
            return None

        while True:
            pos = self._buffer.find(self._delimiter)
            if pos != -1:
                line = bytes(self._buffer[:pos])
                del self._buffer[:pos + len(self._delimiter)]
                return self._decode(line)

            chunk = self._handle.read(self.chunk_size)
            if not chunk:
                # last line may lack a trailing delimiter
                self._at_eof = True
                if self._buffer:
                    line = bytes(self._buffer)
                    self._buffer.clear()
                    return self._decode(line)
                return None
            self._buffer.extend(chunk)

    def rewind(self) -> None:
        """Seek back to the start of the source and drop buffered bytes."""
        self._handle.seek(0)
        self._buffer.clear()
        self._at_eof = False

    def close(self) -> None:
        if self._owns_handle and not self._handle.closed:
            self._handle.close()

    def _decode(self, data: bytes) -> str:
        return data.decode(self.encoding, errors="replace")

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def stream_lines(data: bytes, **kwargs) -> LineStreamer:
    """Wrap in-memory bytes in a LineStreamer."""
    return LineStreamer(io.BytesIO(data), **kwargs)
