"""
Word co-occurrence graph built incrementally from tweet word rows.

Each row is one occurrence of a word in a tweet. Words the category
dictionary labels become graph nodes; words it doesn't know are tracked
separately so they can be ranked for manual categorization; words marked
"garbage" are dropped. Two labelled words seen in the same tweet share an
edge whose weight counts such tweets.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

import networkx as nx
import pandas as pd

logger = logging.getLogger(__name__)

NODE_COLUMNS = ["Id", "Label", "favoriteRate", "retweetRate", "wordCount",
                "wordFrequency", "popularity", "polemicity", "category"]
EDGE_COLUMNS = ["Source", "Target", "Type", "Id", "Weight"]
CATEGORY_COLUMNS = ["word", "category"]

EDGE_TYPE = "Undirected"

# relevance weights for ranking uncategorized words
FAVORITE_RATE_WEIGHT = 0.000048
RETWEET_RATE_WEIGHT = 0.00045
WORD_FREQUENCY_WEIGHT = 1000


@dataclass(frozen=True)
class Category:
    """Closed tag set: uncategorized, garbage, or other(name)."""

    kind: str
    name: Optional[str] = None

    UNCATEGORIZED_KIND = "uncategorized"
    GARBAGE_KIND = "garbage"
    OTHER_KIND = "other"

    @classmethod
    def uncategorized(cls) -> "Category":
        return cls(cls.UNCATEGORIZED_KIND)

    @classmethod
    def garbage(cls) -> "Category":
        return cls(cls.GARBAGE_KIND)

    @classmethod
    def other(cls, name: str) -> "Category":
        return cls(cls.OTHER_KIND, name)

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Category":
        if value is None or value == cls.UNCATEGORIZED_KIND:
            return cls.uncategorized()
        if value == cls.GARBAGE_KIND:
            return cls.garbage()
        return cls.other(value)

    @property
    def is_discardable(self) -> bool:
        return self.kind != self.OTHER_KIND

    def __str__(self) -> str:
        return self.name if self.kind == self.OTHER_KIND else self.kind


@dataclass
class Node:
    id: int
    word: str
    category: Category
    favorite_count: int = 0
    retweet_count: int = 0
    word_count: int = 0
    tweet_ids: Set[int] = field(default_factory=set)

    def rates(self) -> Tuple[float, float]:
        """(favoriteRate, retweetRate) per distinct tweet."""
        tweets = len(self.tweet_ids)
        return self.favorite_count / tweets, self.retweet_count / tweets


INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: Optional[str]) -> Optional[int]:
    """Plain signed decimal only; no whitespace or digit separators."""
    if value is None or not INTEGER.fullmatch(value):
        return None
    return int(value)


class WordGraph:
    """
    Single-pass graph builder. Feed rows with add_nodes_and_edges(), then
    serialize with nodes_csv(), edges_csv() and categorized_words_csv().

    Nodes live in one arena list; the categorized and uncategorized lookups
    map a word to its arena index.
    """

    def __init__(self, categorized_words: Optional[Mapping[str, str]] = None):
        self.categorized_words: Dict[str, str] = dict(categorized_words or {})

        self._nodes: List[Node] = []
        self._categorized: Dict[str, int] = {}
        self._uncategorized: Dict[str, int] = {}
        self._edge_weights: Dict[Tuple[int, int], int] = {}
        self._tweet_node_ids: Dict[int, Set[int]] = {}

        self.total_categorized_word_count = 0
        self.total_word_count = 0
        self.skipped_rows = 0

    # ----- ingestion -----

    def add_nodes_and_edges(self, row: Mapping[str, str]) -> bool:
        """Fold one word row into the graph. Returns False when the row is skipped."""
        word = row.get("word")
        favorite_count = _parse_int(row.get("favoriteCount"))
        retweet_count = _parse_int(row.get("retweetCount"))
        tweet_id = _parse_int(row.get("id"))
        if word is None or favorite_count is None or retweet_count is None or tweet_id is None:
            self.skipped_rows += 1
            logger.debug(f"skipping malformed row: {dict(row)}")
            return False

        index = self._categorized.get(word)
        if index is not None and tweet_id in self._nodes[index].tweet_ids:
            # same labelled word already counted for this tweet
            return False
        if index is None:
            index = self._uncategorized.get(word)

        if index is not None:
            node = self._nodes[index]
            node.favorite_count += favorite_count
            node.retweet_count += retweet_count
            node.word_count += 1
            node.tweet_ids.add(tweet_id)
        else:
            category = Category.from_string(self.categorized_words.get(word))
            if category == Category.garbage():
                self.total_word_count += 1
                return True

            node = Node(id=len(self._categorized), word=word, category=category,
                        favorite_count=favorite_count, retweet_count=retweet_count,
                        word_count=1, tweet_ids={tweet_id})
            self._nodes.append(node)
            if category.is_discardable:
                self._uncategorized[word] = len(self._nodes) - 1
            else:
                self._categorized[word] = len(self._nodes) - 1

        self.total_word_count += 1

        if node.category.is_discardable:
            return True

        node_ids = self._tweet_node_ids.get(tweet_id)
        if node_ids is None:
            self._tweet_node_ids[tweet_id] = {node.id}
        else:
            for previous_id in node_ids:
                edge = (node.id, previous_id)
                self._edge_weights[edge] = self._edge_weights.get(edge, 0) + 1
            node_ids.add(node.id)

        self.total_categorized_word_count += 1
        return True

    def add_rows(self, rows: Iterable[Mapping[str, str]]) -> int:
        """Feed every row; returns how many were accepted."""
        return sum(1 for row in rows if self.add_nodes_and_edges(row))

    # ----- read access -----

    def node(self, word: str) -> Optional[Node]:
        """Look a word up in either table."""
        index = self._categorized.get(word)
        if index is None:
            index = self._uncategorized.get(word)
        return None if index is None else self._nodes[index]

    def categorized_nodes(self) -> List[Node]:
        return [self._nodes[i] for i in self._categorized.values()]

    def uncategorized_nodes(self) -> List[Node]:
        return [self._nodes[i] for i in self._uncategorized.values()]

    @property
    def edge_weights(self) -> Dict[Tuple[int, int], int]:
        return dict(self._edge_weights)

    def relevance(self, node: Node) -> float:
        """Ranking score for an uncategorized word; frequency is over all words."""
        favorite_rate, retweet_rate = node.rates()
        word_frequency = node.word_count / self.total_word_count
        return (favorite_rate * FAVORITE_RATE_WEIGHT
                + retweet_rate * RETWEET_RATE_WEIGHT
                + word_frequency * WORD_FREQUENCY_WEIGHT) / 3

    def stats(self) -> Dict[str, int]:
        return {
            "nodes": len(self._categorized),
            "uncategorized": len(self._uncategorized),
            "edges": len(self._edge_weights),
            "tweets": len(self._tweet_node_ids),
            "total_words": self.total_word_count,
            "categorized_words": self.total_categorized_word_count,
            "skipped_rows": self.skipped_rows,
        }

    # ----- serialization -----

    def nodes_csv(self) -> str:
        rows = []
        for node in self.categorized_nodes():
            favorite_rate, retweet_rate = node.rates()
            word_frequency = node.word_count / self.total_categorized_word_count
            popularity = retweet_rate / word_frequency
            polemicity = 0.0 if favorite_rate == 0 else retweet_rate / favorite_rate
            rows.append([node.id, node.word, favorite_rate, retweet_rate, node.word_count,
                         word_frequency, popularity, polemicity, str(node.category)])
        return _to_csv(rows, NODE_COLUMNS)

    def edges_csv(self) -> str:
        rows = [
            [source, target, EDGE_TYPE, index, float(weight)]
            for index, ((source, target), weight) in enumerate(self._edge_weights.items())
        ]
        return _to_csv(rows, EDGE_COLUMNS)

    def categorized_words_csv(self) -> str:
        """
        Dictionary entries as loaded, then unknown words by descending relevance.

        Written raw, without CSV quoting, so the file reloads through the
        naive decoder unchanged.
        """
        rows = [[word, category] for word, category in self.categorized_words.items()]
        ranked = sorted(self.uncategorized_nodes(), key=self.relevance, reverse=True)
        rows.extend([node.word, Category.UNCATEGORIZED_KIND] for node in ranked)
        return "".join(",".join(row) + "\n" for row in [CATEGORY_COLUMNS] + rows)

    def to_networkx(self) -> nx.Graph:
        """Undirected weighted graph; both orderings of one pair fold into one edge."""
        G = nx.Graph()
        for node in self.categorized_nodes():
            G.add_node(node.id, label=node.word, category=str(node.category),
                       word_count=node.word_count)
        for (source, target), weight in self._edge_weights.items():
            if G.has_edge(source, target):
                G[source][target]["weight"] += weight
            else:
                G.add_edge(source, target, weight=weight)
        return G


def _to_csv(rows: List[list], columns: List[str]) -> str:
    return pd.DataFrame(rows, columns=columns).to_csv(index=False, lineterminator="\n")
