from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


AFINN_TEXT = "love\t3\ngreat\t3\nterrible\t-3\nhate\t-3\ncrash\t-2\ncashing in\t-2\n"

NRC_TEXT = "\n".join(
    [
        "crash\tfear\t1",
        "crash\tnegative\t1",
        "game\tjoy\t0",
        "hate\tanger\t1",
        "hate\tnegative\t1",
        "love\tjoy\t1",
        "love\tpositive\t1",
        "terrible\tfear\t1",
        "terrible\tnegative\t1",
    ]
)


@pytest.fixture
def afinn_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "word": ["love", "great", "terrible", "hate", "crash"],
            "value": [3, 3, -3, -3, -2],
        }
    )


@pytest.fixture
def nrc_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "word": ["crash", "crash", "hate", "hate", "love", "love", "terrible", "terrible"],
            "sentiment": ["fear", "negative", "anger", "negative", "joy", "positive", "fear", "negative"],
        }
    )


@pytest.fixture
def lexicon_dir(tmp_path):
    lex_dir = tmp_path / "lexicons"
    lex_dir.mkdir()
    (lex_dir / "AFINN-en-165.txt").write_text(AFINN_TEXT, encoding="utf-8")
    (lex_dir / "NRC-Emotion-Lexicon-Wordlevel-v0.92.txt").write_text(NRC_TEXT + "\n", encoding="utf-8")
    return lex_dir


@pytest.fixture
def raw_posts() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "id": ["a1", "a2", "a3", "a4", "a5"],
            "title": ["I love the game", "Crash after patch", "Great team", "Great team", "Weekly thread"],
            "selftext": ["great launch", "I hate this terrible crash", None, None, "[removed]"],
            "link_flair_text": ["Discussion", "Bug", "Discussion", "Discussion", None],
            "created_utc": [1700000000, 1700086400, 1702700000, 1702700000, 1705000000],
            "score": [10, "5", 3, 3, "n/a"],
            "num_comments": [2, 8, 1, 1, 0],
            "author": ["alice", "bob", "carol", "carol", "dave"],
        }
    )
