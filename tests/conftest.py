import pytest

HEADER = "word,favoriteCount,retweetCount,id"


def make_rows(*rows):
    """Rows as (word, fav, rt, tweet_id) tuples -> dicts the decoder would produce."""
    return [
        {"word": w, "favoriteCount": str(f), "retweetCount": str(r), "id": str(t)}
        for w, f, r, t in rows
    ]


@pytest.fixture
def write_csv(tmp_path):
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
