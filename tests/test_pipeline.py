from __future__ import annotations

import json
import sys

import pandas as pd

import aggregate
import clean
import keywords
import sentiment
import stats
import tokens
import visualize


def _run(monkeypatch, module, *argv):
    monkeypatch.setattr(sys, "argv", [module.__name__, *argv])
    module.main()


def test_full_study_runs_end_to_end(tmp_path, monkeypatch, raw_posts, lexicon_dir):
    raw = tmp_path / "raw" / "posts.csv"
    raw.parent.mkdir()
    raw_posts.to_csv(raw, index=False)
    clean_dir = tmp_path / "clean"
    outputs = tmp_path / "outputs"
    figures = outputs / "figures"

    _run(monkeypatch, clean, "--inp", str(raw), "--out", str(clean_dir))
    _run(monkeypatch, tokens, "--inp", str(clean_dir / "posts.csv"), "--out", str(clean_dir), "--outputs", str(outputs))
    _run(
        monkeypatch,
        sentiment,
        "--posts",
        str(clean_dir / "posts.csv"),
        "--tokens",
        str(clean_dir / "tokens.csv"),
        "--lexicons",
        str(lexicon_dir),
        "--out",
        str(clean_dir),
    )
    _run(monkeypatch, keywords, "--inp", str(clean_dir / "with_sentiment.csv"), "--out", str(outputs), "--min_df", "1")
    _run(
        monkeypatch,
        aggregate,
        "--inp",
        str(clean_dir / "with_sentiment.csv"),
        "--keywords",
        str(outputs / "keywords_flair.csv"),
        "--out",
        str(outputs),
    )
    _run(monkeypatch, stats, "--clean_dir", str(clean_dir), "--out", str(outputs))
    _run(monkeypatch, visualize, "--clean_dir", str(clean_dir), "--outputs", str(outputs), "--out_dir", str(figures))

    scored = pd.read_csv(clean_dir / "with_sentiment.csv", dtype={"post_id": str}).set_index("post_id")
    assert list(scored.index) == ["a1", "a2", "a3", "a5"]
    assert scored.loc["a1", "sentiment_label"] == "pos"
    assert scored.loc["a2", "afinn_score"] == -10
    assert scored.loc["a5", "sentiment_label"] == "neu"
    assert "vader_compound" in scored.columns

    kw = pd.read_csv(outputs / "keywords_flair.csv")
    assert set(kw["by"]) <= {"flair"}

    by_flair = pd.read_csv(outputs / "by_flair.csv")
    assert set(by_flair["flair"]) == {"Discussion", "Bug", "(none)"}

    summary = json.loads((outputs / "stats.json").read_text(encoding="utf-8"))
    assert summary["posts"] == 4
    assert summary["coverage"]["afinn_tokens"] > 0

    assert (figures / "nrc_totals.png").exists()
    assert (figures / "sentiment_dist.png").exists()
    assert (figures / "afinn_vs_vader.png").exists()


def test_stages_warn_when_inputs_missing(tmp_path, monkeypatch, capsys):
    _run(monkeypatch, clean, "--inp", str(tmp_path / "nope.csv"), "--out", str(tmp_path / "clean"))
    _run(monkeypatch, stats, "--clean_dir", str(tmp_path / "clean"), "--out", str(tmp_path / "outputs"))

    out = capsys.readouterr().out
    assert "[warn] posts file not found" in out
    assert "[warn] inputs not found" in out
