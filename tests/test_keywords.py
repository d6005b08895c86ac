from __future__ import annotations

import argparse

import pandas as pd

from keywords import build_vectorizer, extract_top_terms, group_terms
from tokens import build_stop_words


def _args(**overrides) -> argparse.Namespace:
    values = {"min_df": 1, "max_features": 2000, "top_k": 5}
    values.update(overrides)
    return argparse.Namespace(**values)


def test_extract_top_terms_drops_noise_terms():
    texts = ["patch broke my save file", "patch broke multiplayer", "reddit patch notes"]

    terms = extract_top_terms(texts, 10, build_vectorizer(1, 2000), {"reddit"})

    words = [t for t, _ in terms]
    assert words[0] == "patch"
    assert not any("reddit" in w for w in words)
    assert all(isinstance(s, float) for _, s in terms)


def test_extract_top_terms_too_few_documents_returns_empty():
    assert extract_top_terms(["one lonely post"], 10, build_vectorizer(2, 2000), set()) == []
    assert extract_top_terms([], 10, build_vectorizer(1, 2000), set()) == []


def test_group_terms_splits_by_group_and_bucket():
    df = pd.DataFrame(
        {
            "post_id": ["p1", "p2", "p3"],
            "flair": ["Bug", "Bug", "Discussion"],
            "text": ["crash on launch", "another crash after patch", "love the soundtrack"],
            "sentiment_label": ["neg", "neg", "pos"],
        }
    )

    results = group_terms(df, "flair", "sentiment_label", _args(), set())

    assert set(results) == {"Bug", "Discussion"}
    assert results["Bug"]["neg"][0][0] == "crash"
    assert results["Bug"]["pos"] == []
    assert [t for t, _ in results["Discussion"]["pos"]][:1] in (["love"], ["soundtrack"])


def test_group_terms_without_labels_uses_single_bucket():
    df = pd.DataFrame({"post_id": ["p1"], "flair": ["Bug"], "text": ["crash on launch"]})

    results = group_terms(df, "flair", "sentiment_label", _args(), set())

    assert list(results["Bug"]) == ["all"]


def test_extract_top_terms_skips_contraction_stems_and_digits():
    texts = ["I don't like it, it doesn't work", "didn't help, don't know", "doesn't work since 2024"]
    stop = build_stop_words()

    terms = extract_top_terms(texts, 20, build_vectorizer(1, 2000, stop), stop)

    tokens = {tok for term, _ in terms for tok in term.split()}
    assert "work" in tokens
    assert not tokens & {"don", "didn", "doesn", "isn", "t", "2024"}
    assert not any(tok.isdigit() for tok in tokens)
