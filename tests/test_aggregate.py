from __future__ import annotations

import pandas as pd
import pytest

from aggregate import add_group_column, keywords_for, sentiment_summary, summarize_groups


def _scored() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "post_id": ["p1", "p2", "p3", "p4"],
            "flair": ["Discussion", "Bug", "Discussion", None],
            "created_date": ["2023-11-14", "2023-11-15", "2023-12-16", None],
            "author": ["alice", "bob", "alice", "dave"],
            "sentiment_label": ["pos", "neg", "neu", "pos"],
            "afinn_score": [6, -8, 0, 2],
            "nrc_net": [1, -3, 0, 1],
            "nrc_positive": [1, 0, 0, 1],
            "nrc_negative": [0, 3, 0, 0],
            "vader_compound": [0.8, -0.7, 0.0, 0.3],
            "score": [10, 5, 3, 0],
            "num_comments": [2, 8, 1, 0],
            "n_tokens": [3, 3, 1, 2],
        }
    )


def test_add_group_column_month_and_missing():
    df = add_group_column(_scored(), "month")

    assert df["group"].tolist() == ["2023-11", "2023-11", "2023-12", "(none)"]


def test_add_group_column_flair_missing_value():
    df = add_group_column(_scored(), "flair")

    assert df["group"].tolist() == ["Discussion", "Bug", "Discussion", "(none)"]


def test_add_group_column_rejects_unknown():
    with pytest.raises(ValueError, match="Unsupported grouping"):
        add_group_column(_scored(), "subreddit")


def test_sentiment_summary_empty_frame_is_all_zero():
    summ = sentiment_summary(_scored().iloc[0:0])

    assert summ["total"] == 0
    assert all(v == 0 for v in summ.values())
    assert "nrc_trust" in summ


def test_sentiment_summary_metrics():
    summ = sentiment_summary(_scored())

    assert summ["total"] == 4
    assert summ["pos_pct"] == 50
    assert summ["neg_pct"] == 25
    assert summ["avg_afinn"] == 0
    assert summ["median_afinn"] == 1
    assert summ["avg_upvotes"] == 4.5
    assert summ["nrc_negative"] == 3
    assert summ["nrc_joy"] == 0


def test_summarize_groups_sorted_with_keywords():
    keywords = pd.DataFrame(
        {
            "by": ["flair", "flair", "flair"],
            "group": ["Discussion", "Discussion", "Bug"],
            "bucket": ["pos", "pos", "neg"],
            "term": ["love", "great game", "crash"],
            "score": [0.4, 0.9, 0.7],
        }
    )

    table, nested = summarize_groups(_scored(), "flair", keywords)

    assert table["flair"].tolist() == ["(none)", "Discussion", "Bug"]
    assert table["score"].tolist() == [100, 50, -100]
    discussion = table.set_index("flair").loc["Discussion"]
    assert [t["term"] for t in discussion["top_pos_terms"]] == ["great game", "love"]
    assert nested["Bug"]["keywords"]["neg"][0]["term"] == "crash"
    assert nested["Bug"]["metrics"]["total"] == 1


def test_summarize_groups_empty_input():
    table, nested = summarize_groups(_scored().iloc[0:0], "author", pd.DataFrame())

    assert table.empty
    assert nested == {}


def test_summarize_groups_ignores_keywords_from_another_grouping(capsys):
    keywords = pd.DataFrame(
        {
            "by": ["flair", "flair"],
            "group": ["alice", "bob"],
            "bucket": ["pos", "neg"],
            "term": ["love", "crash"],
            "score": [0.4, 0.7],
        }
    )

    table, nested = summarize_groups(_scored(), "author", keywords)

    assert all(terms == [] for terms in table["top_pos_terms"])
    assert all(terms == [] for terms in table["top_neg_terms"])
    assert nested["alice"]["keywords"] == {}
    assert "keywords.py --by author" in capsys.readouterr().out


def test_keywords_without_grouping_column_are_ignored(capsys):
    keywords = pd.DataFrame({"group": ["Bug"], "bucket": ["neg"], "term": ["crash"], "score": [0.7]})

    assert keywords_for(keywords, "flair").empty
    assert "[warn]" in capsys.readouterr().out


def test_sentiment_summary_omits_vader_when_not_scored():
    scored = _scored().drop(columns="vader_compound")

    assert "avg_vader" not in sentiment_summary(scored)
    assert "avg_vader" not in sentiment_summary(scored.iloc[0:0])
    assert sentiment_summary(_scored())["avg_vader"] == pytest.approx(0.1)
