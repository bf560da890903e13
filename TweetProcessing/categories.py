"""Category dictionary loader (word -> category) for the graph builder."""

import logging
from pathlib import Path
from typing import Dict, Union

from TweetProcessing.csv_rows import CsvRowDecoder, MissingHeaderError
from TweetProcessing.line_streamer import LineStreamer, SourceUnavailableError

logger = logging.getLogger(__name__)

CATEGORIZED_WORDS_FILE = Path("categorized_words.csv")
UNCATEGORIZED = "uncategorized"


def load_categorized_words(path: Union[str, Path] = CATEGORIZED_WORDS_FILE) -> Dict[str, str]:
    """
    Read a `word,category` CSV into a dict.

    Rows tagged "uncategorized" are left out so those words fall back to the
    default category at lookup time. A missing or unreadable file gives an
    empty dict.
    """
    categorized_words: Dict[str, str] = {}

    try:
        streamer = LineStreamer(path)
    except SourceUnavailableError:
        logger.info(f"[info] no category file at {path}, starting with an empty dictionary")
        return categorized_words

    with streamer:
        try:
            reader = CsvRowDecoder(streamer)
        except MissingHeaderError:
            logger.info(f"[info] category file {path} is empty")
            return categorized_words

        for row in reader:
            word = row.get("word")
            category = row.get("category")
            if word is None or category is None or category == UNCATEGORIZED:
                continue
            categorized_words[word] = category

    logger.info(f"[info] loaded {len(categorized_words):,} categorized words from {path}")
    return categorized_words
