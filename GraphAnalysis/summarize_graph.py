"""
Graph Summary

Run from repo root after GraphConstruction:
    python -m GraphAnalysis.summarize_graph data/tweets.csv

Reads <name>_nodes.csv + <name>_edges.csv and writes <name>_summary.json.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import networkx as nx
import pandas as pd

from GraphConstruction.construct_graph import LOG_FORMAT, output_paths

logger = logging.getLogger(__name__)

EDGE_CHUNK = 250_000
TOP_WORDS = 20


def summary_path(input_path: Path) -> Path:
    return input_path.with_name(f"{input_path.stem}_summary.json")


def load_nodes(nodes_csv: Path) -> pd.DataFrame:
    df = pd.read_csv(nodes_csv, usecols=["Id", "Label", "wordCount", "category"],
                     dtype={"Label": str, "category": str}, keep_default_na=False)
    df["Id"] = pd.to_numeric(df["Id"], errors="coerce")
    return df.dropna(subset=["Id"]).astype({"Id": int})


def add_edges_from_csv(G: nx.Graph, edges_csv: Path, chunksize: int = EDGE_CHUNK) -> int:
    """Stream the edges CSV into G, folding both orderings of a pair. Returns rows read."""
    total = 0
    usecols = ["Source", "Target", "Weight"]
    for chunk in pd.read_csv(edges_csv, usecols=usecols, chunksize=chunksize):
        chunk["Weight"] = pd.to_numeric(chunk["Weight"], errors="coerce").fillna(1).astype(int)
        for s, t, w in chunk.itertuples(index=False):
            s, t = int(s), int(t)
            if G.has_edge(s, t):
                G[s][t]["weight"] += int(w)
            else:
                G.add_edge(s, t, weight=int(w))
        total += len(chunk)
    return total


def build_graph_from_csv(nodes_csv: Path, edges_csv: Path) -> nx.Graph:
    nodes = load_nodes(nodes_csv)
    G = nx.Graph()
    # nodes first so isolated words are kept
    for r in nodes.itertuples(index=False):
        G.add_node(int(r.Id), label=r.Label, word_count=int(r.wordCount), category=r.category)
    rows = add_edges_from_csv(G, edges_csv)
    logger.info(f"[info] streamed edge rows: {rows:,} |V|={G.number_of_nodes():,} |E|={G.number_of_edges():,}")
    return G


def summarize(G: nx.Graph, top: int = TOP_WORDS) -> Dict:
    """Counts, density, components, words per category and the most connected words."""
    n = G.number_of_nodes()
    categories: Dict[str, int] = {}
    for _, category in G.nodes(data="category"):
        categories[category] = categories.get(category, 0) + 1

    strength = sorted(G.degree(weight="weight"), key=lambda kv: kv[1], reverse=True)[:top]
    return {
        "total_nodes": n,
        "total_edges": G.number_of_edges(),
        "total_edge_weight": int(G.size(weight="weight")),
        "density": float(nx.density(G)) if n > 1 else 0.0,
        "connected_components": nx.number_connected_components(G) if n else 0,
        "categories": categories,
        "top_words": [
            {"id": v, "label": G.nodes[v].get("label", str(v)), "weighted_degree": int(d)}
            for v, d in strength
        ],
    }


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Summarize a word co-occurrence graph")
    parser.add_argument("input", help="the tweet word CSV the graph was built from")
    parser.add_argument("--top", type=int, default=TOP_WORDS, help="number of top words to report")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    input_path = Path(args.input)
    nodes_csv, edges_csv = output_paths(input_path)
    if not nodes_csv.exists() or not edges_csv.exists():
        raise FileNotFoundError(
            "No graph found.\n"
            f"Expected:\n"
            f"  - {nodes_csv}\n"
            f"  - {edges_csv}"
        )

    G = build_graph_from_csv(nodes_csv, edges_csv)
    meta = summarize(G, top=args.top)

    out = summary_path(input_path)
    try:
        with open(out, "w", encoding="utf-8") as f:
            json.dump(meta, f, indent=2)
    except OSError as e:
        logger.error(f"[error] Couldn't write to {out}: {e}")
        sys.exit(f"Couldn't write to {out}")
    print(f"[ok] wrote {out} (density={meta['density']:.6f})")


if __name__ == "__main__":
    main()
