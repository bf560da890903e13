"""
CSV Row Decoder
---------------
Turns a LineStreamer into a stream of {header: value} rows.

Known limitation: fields are split naively on the separator and only one
layer of enclosing quotes is stripped, so quoted fields that contain the
separator are not supported. The tweet exports this reads never have them.
"""

import logging
from typing import Dict, Iterator, List, Optional

from TweetProcessing.line_streamer import LineStreamer

logger = logging.getLogger(__name__)

SEPARATOR = ","
QUOTE = '"'


class MissingHeaderError(ValueError):
    """Raised when the source has no header line at all."""


def split_fields(line: str, separator: str = SEPARATOR, quote: str = QUOTE) -> List[str]:
    """Split one line on the separator and strip one layer of enclosing quotes per field."""
    if line.endswith("\r"):
        line = line[:-1]
    fields = []
    for field in line.split(separator):
        if field.startswith(quote):
            field = field[len(quote):]
        if field.endswith(quote):
            field = field[:-len(quote)]
        fields.append(field)
    return fields


class CsvRowDecoder:
    """Consumes the first line as the header, then decodes each following line into a dict."""

    def __init__(self, streamer: LineStreamer, separator: str = SEPARATOR, quote: str = QUOTE):
        header = streamer.next_line()
        if header is None:
            raise MissingHeaderError(f"{streamer.name} has no header line")

        self.streamer = streamer
        self.separator = separator
        self.quote = quote
        self.keys = split_fields(header, separator, quote)

    def next_row(self) -> Optional[Dict[str, str]]:
        """
        Return the next row, or None when the stream is exhausted.

        Positional zip against the header: keys with no matching field on a
        short line are left out of the row, extra fields are dropped.
        """
        line = self.streamer.next_line()
        if line is None:
            return None

        values = split_fields(line, self.separator, self.quote)
        if len(values) < len(self.keys):
            logger.debug(f"short row ({len(values)}/{len(self.keys)} fields): {line!r}")
        return dict(zip(self.keys, values))

    def __iter__(self) -> Iterator[Dict[str, str]]:
        while True:
            row = self.next_row()
            if row is None:
                return
            yield row
