import json

import pytest

from conftest import HEADER
from GraphAnalysis.summarize_graph import build_graph_from_csv, main, summarize, summary_path
from GraphConstruction.construct_graph import main as construct_main, output_paths

ROWS = [
    HEADER,
    "a,1,1,1", "b,1,1,1", "c,1,1,1",
    "b,1,1,2", "a,1,1,2",
    "z,1,1,3",
]


@pytest.fixture
def built(write_csv, tmp_path):
    src = write_csv("tweets.csv", ROWS)
    categories = write_csv("cats.csv", ["word,category", "a,politics", "b,politics", "c,sport", "z,sport"])
    construct_main([str(src), "--categories", str(categories)])
    return src


def test_folds_both_orderings(built):
    G = build_graph_from_csv(*output_paths(built))
    assert G.number_of_nodes() == 4
    assert G[0][1]["weight"] == 2
    assert G.nodes[0]["label"] == "a"


def test_summary_values(built):
    meta = summarize(build_graph_from_csv(*output_paths(built)), top=2)
    assert meta["total_nodes"] == 4
    assert meta["total_edges"] == 3
    assert meta["total_edge_weight"] == 4
    assert meta["density"] == pytest.approx(3 / 6)
    assert meta["connected_components"] == 2
    assert meta["categories"] == {"politics": 2, "sport": 2}
    assert [w["label"] for w in meta["top_words"]] == ["a", "b"]
    assert meta["top_words"][0]["weighted_degree"] == 3


def test_main_writes_summary(built):
    main([str(built)])
    meta = json.loads(summary_path(built).read_text(encoding="utf-8"))
    assert meta["total_nodes"] == 4


def test_empty_graph(write_csv, tmp_path):
    src = write_csv("none.csv", [HEADER])
    construct_main([str(src), "--categories", str(tmp_path / "c.csv")])
    meta = summarize(build_graph_from_csv(*output_paths(src)))
    assert meta["total_nodes"] == 0
    assert meta["density"] == 0.0
    assert meta["top_words"] == []


def test_missing_graph_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / "never_built.csv")])


def test_main_confirms_on_stdout(built, capsys):
    capsys.readouterr()
    main([str(built)])
    assert capsys.readouterr().out.startswith(f"[ok] wrote {summary_path(built)}")
