import pytest

from conftest import HEADER
from GraphConstruction.construct_graph import main, output_paths

ROWS = [HEADER, '"a",10,5,1', '"b",2,1,1', '"a",1,1,2']


def test_output_paths(tmp_path):
    nodes, edges = output_paths(tmp_path / "tweets.csv")
    assert nodes == tmp_path / "tweets_nodes.csv"
    assert edges == tmp_path / "tweets_edges.csv"


def test_writes_all_three_files(write_csv, tmp_path):
    src = write_csv("tweets.csv", ROWS)
    categories = write_csv("categorized_words.csv", ["word,category", "a,politics", "b,politics", "c,uncategorized"])

    main([str(src), "--categories", str(categories), "--chunk-size", "3"])

    nodes = (tmp_path / "tweets_nodes.csv").read_text(encoding="utf-8").splitlines()
    assert nodes[0] == "Id,Label,favoriteRate,retweetRate,wordCount,wordFrequency,popularity,polemicity,category"
    assert len(nodes) == 3
    edges = (tmp_path / "tweets_edges.csv").read_text(encoding="utf-8").splitlines()
    assert edges == ["Source,Target,Type,Id,Weight", "1,0,Undirected,0,1.0"]
    assert categories.read_text(encoding="utf-8").splitlines() == ["word,category", "a,politics", "b,politics"]


def test_default_category_file_in_working_directory(write_csv, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    src = write_csv("tweets.csv", ROWS)

    main([str(src)])

    lines = (tmp_path / "categorized_words.csv").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "word,category"
    assert sorted(lines[1:]) == ["a,uncategorized", "b,uncategorized"]
    assert (tmp_path / "tweets_edges.csv").read_text(encoding="utf-8") == "Source,Target,Type,Id,Weight\n"


def test_header_only_input(write_csv, tmp_path):
    src = write_csv("empty.csv", [HEADER])
    categories = tmp_path / "cats.csv"
    main([str(src), "--categories", str(categories)])
    assert (tmp_path / "empty_nodes.csv").read_text(encoding="utf-8").count("\n") == 1
    assert (tmp_path / "empty_edges.csv").read_text(encoding="utf-8").count("\n") == 1
    assert categories.read_text(encoding="utf-8") == "word,category\n"


def test_missing_input_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.csv")])
    assert "not found" in str(exc.value.code)


def test_empty_input_file_exits(tmp_path):
    src = tmp_path / "blank.csv"
    src.write_bytes(b"")
    with pytest.raises(SystemExit) as exc:
        main([str(src), "--categories", str(tmp_path / "c.csv")])
    assert "couldn't be read" in str(exc.value.code)


def test_write_failure_stops_before_later_files(write_csv, tmp_path):
    src = write_csv("tweets.csv", ROWS)
    (tmp_path / "tweets_nodes.csv").mkdir()
    with pytest.raises(SystemExit) as exc:
        main([str(src), "--categories", str(tmp_path / "c.csv")])
    assert "Couldn't write" in str(exc.value.code)
    assert not (tmp_path / "tweets_edges.csv").exists()
    assert not (tmp_path / "c.csv").exists()


def test_confirms_each_file_on_stdout(write_csv, tmp_path, capsys):
    src = write_csv("tweets.csv", ROWS)
    categories = tmp_path / "c.csv"
    main([str(src), "--categories", str(categories)])
    out = capsys.readouterr().out.splitlines()
    assert out == [
        f"[ok] Wrote nodes to {tmp_path / 'tweets_nodes.csv'}",
        f"[ok] Wrote edges to {tmp_path / 'tweets_edges.csv'}",
        f"[ok] Wrote categorized words to {categories}",
    ]
