# GraphConstruction/construct_graph.py
"""
Build the word co-occurrence graph from a tweet word CSV.

Run from repo root:
    python -m GraphConstruction.construct_graph data/tweets.csv

Writes next to the input:
    <name>_nodes.csv, <name>_edges.csv
and, in the current directory:
    categorized_words.csv   (read at start, rewritten at the end)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from GraphConstruction.word_graph import WordGraph
from TweetProcessing.categories import CATEGORIZED_WORDS_FILE, load_categorized_words
from TweetProcessing.csv_rows import CsvRowDecoder, MissingHeaderError
from TweetProcessing.line_streamer import CHUNK_SIZE, LineStreamer, SourceUnavailableError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PROGRESS_EVERY = 1_000_000   # rows between progress lines


def output_paths(input_path: Path):
    """(<name>_nodes.csv, <name>_edges.csv) beside the input file."""
    return (input_path.with_name(f"{input_path.stem}_nodes.csv"),
            input_path.with_name(f"{input_path.stem}_edges.csv"))


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Build a word co-occurrence graph from tweet word rows")
    parser.add_argument("input", help="CSV with word, favoriteCount, retweetCount and id columns")
    parser.add_argument("--categories", default=str(CATEGORIZED_WORDS_FILE),
                        help="word,category dictionary; rewritten with newly ranked words")
    parser.add_argument("--chunk-size", type=int, default=CHUNK_SIZE, help="bytes per read")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def build_graph(reader: CsvRowDecoder, graph: WordGraph) -> WordGraph:
    """Single forward pass over every row."""
    count = 0
    for row in reader:
        graph.add_nodes_and_edges(row)
        count += 1
        if count % PROGRESS_EVERY == 0:
            logger.info(f"[stream] {count:,} rows")
    stats = graph.stats()
    logger.info(
        f"[info] rows: {count:,} | nodes: {stats['nodes']:,} | uncategorized: {stats['uncategorized']:,} "
        f"| edges: {stats['edges']:,} | skipped: {stats['skipped_rows']:,}"
    )
    return graph


def write_output(path: Path, content: str, what: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error(f"[error] Couldn't write to {path}: {e}")
        sys.exit(f"Couldn't write to {path}")
    print(f"[ok] Wrote {what} to {path}")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    input_path = Path(args.input)
    if not input_path.exists():
        sys.exit(f"File {input_path.name} not found!")

    try:
        streamer = LineStreamer(input_path, chunk_size=args.chunk_size)
    except SourceUnavailableError as e:
        logger.error(f"[error] {e}")
        sys.exit(f"File {input_path.name} couldn't be read!")

    categories_path = Path(args.categories)
    with streamer:
        try:
            reader = CsvRowDecoder(streamer)
        except MissingHeaderError as e:
            logger.error(f"[error] {e}")
            sys.exit(f"File {input_path.name} couldn't be read!")

        graph = WordGraph(load_categorized_words(categories_path))
        build_graph(reader, graph)

    nodes_path, edges_path = output_paths(input_path)
    write_output(nodes_path, graph.nodes_csv(), "nodes")
    write_output(edges_path, graph.edges_csv(), "edges")
    write_output(categories_path, graph.categorized_words_csv(), "categorized words")


if __name__ == "__main__":
    main()
