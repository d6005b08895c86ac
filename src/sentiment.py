# Join the token table against the AFINN and NRC lexicons and score each post.
# VADER runs over the raw post text as a lexicon-independent reference.

import argparse
from pathlib import Path
from typing import Optional

import pandas as pd
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from lexicons import AFINN_FILENAME, NRC_CATEGORIES, NRC_FILENAME, load_afinn, load_nrc


# Parse CLI arguments for lexicon scoring.
def parse_args():
    parser = argparse.ArgumentParser(description="Join tokens with sentiment lexicons and score posts.")
    parser.add_argument("--posts", default="data/clean/posts.csv", help="Cleaned posts CSV from clean.py")
    parser.add_argument("--tokens", default="data/clean/tokens.csv", help="Token table from tokens.py")
    parser.add_argument("--lexicons", default="data/lexicons", help="Directory with the AFINN and NRC files")
    parser.add_argument("--afinn", default=None, help="Override path to the AFINN lexicon")
    parser.add_argument("--nrc", default=None, help="Override path to the NRC lexicon")
    parser.add_argument("--out", default="data/clean", help="Output directory")
    parser.add_argument("--no_vader", dest="vader", action="store_false", help="Skip the VADER reference score")
    return parser.parse_args()


def join_afinn(tokens: pd.DataFrame, afinn: pd.DataFrame):
    return tokens.merge(afinn, on="word", how="inner")[["post_id", "position", "word", "value"]]


def join_nrc(tokens: pd.DataFrame, nrc: pd.DataFrame):
    joined = tokens.merge(nrc, on="word", how="inner")[["post_id", "position", "word", "sentiment"]]
    return joined.sort_values(["post_id", "position", "sentiment"]).reset_index(drop=True)


def label_afinn(score: float):
    if score > 0:
        return "pos"
    if score < 0:
        return "neg"
    return "neu"


# Apply VADER to one post and return score/label.
def label_sentiment(text: str, analyzer: SentimentIntensityAnalyzer):
    scores = analyzer.polarity_scores(text or "")
    compound = scores["compound"]
    if compound >= 0.05:
        label = "pos"
    elif compound <= -0.05:
        label = "neg"
    else:
        label = "neu"
    return {"vader_compound": compound, "vader_label": label}


# One row per post. Posts without a lexicon hit score 0 and neu; afinn_mean stays NaN for them.
def score_posts(
    posts: pd.DataFrame,
    tokens: pd.DataFrame,
    afinn_tokens: pd.DataFrame,
    nrc_tokens: pd.DataFrame,
    analyzer: Optional[SentimentIntensityAnalyzer] = None,
):
    df = posts.copy()
    ids = df["post_id"]

    n_tokens = tokens.groupby("post_id").size()
    df["n_tokens"] = ids.map(n_tokens).fillna(0).astype(int)

    values = pd.to_numeric(afinn_tokens["value"], errors="coerce").astype(float)
    afinn_group = values.groupby(afinn_tokens["post_id"])
    df["afinn_matched"] = ids.map(afinn_group.size()).fillna(0).astype(int)
    df["afinn_score"] = ids.map(afinn_group.sum()).fillna(0).astype(int)
    df["afinn_mean"] = ids.map(afinn_group.mean()).astype(float)

    if nrc_tokens.empty:
        nrc_counts = pd.DataFrame()
    else:
        nrc_counts = nrc_tokens.groupby(["post_id", "sentiment"]).size().unstack(fill_value=0)
    for category in NRC_CATEGORIES:
        col = nrc_counts[category] if category in nrc_counts.columns else pd.Series(dtype=int)
        df[f"nrc_{category}"] = ids.map(col).fillna(0).astype(int)
    df["nrc_net"] = df["nrc_positive"] - df["nrc_negative"]

    df["sentiment_label"] = df["afinn_score"].map(label_afinn)

    if analyzer is not None:
        vader = df["text"].fillna("").astype(str).apply(lambda t: label_sentiment(t, analyzer))
        df["vader_compound"] = vader.map(lambda d: d["vader_compound"])
        df["vader_label"] = vader.map(lambda d: d["vader_label"])
    return df


# Load posts, tokens and lexicons, write the joined tables and per-post scores.
def main():
    args = parse_args()
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    posts_path = Path(args.posts)
    tokens_path = Path(args.tokens)
    for path in (posts_path, tokens_path):
        if not path.exists():
            print(f"[warn] input not found: {path}")
            return

    lex_dir = Path(args.lexicons)
    afinn_path = Path(args.afinn) if args.afinn else lex_dir / AFINN_FILENAME
    nrc_path = Path(args.nrc) if args.nrc else lex_dir / NRC_FILENAME
    for path in (afinn_path, nrc_path):
        if not path.exists():
            print(f"[warn] lexicon not found: {path} (run fetch_lexicons.py)")
            return

    posts = pd.read_csv(posts_path, dtype={"post_id": str})
    tokens = pd.read_csv(tokens_path, dtype={"post_id": str})
    afinn = load_afinn(afinn_path)
    nrc = load_nrc(nrc_path)
    print(f"[info] AFINN: {len(afinn)} words, NRC: {nrc['word'].nunique()} words / {len(nrc)} associations")

    afinn_tokens = join_afinn(tokens, afinn)
    nrc_tokens = join_nrc(tokens, nrc)
    afinn_tokens.to_csv(out_dir / "afinn_tokens.csv", index=False)
    nrc_tokens.to_csv(out_dir / "nrc_tokens.csv", index=False)

    analyzer = SentimentIntensityAnalyzer() if args.vader else None
    scored = score_posts(posts, tokens, afinn_tokens, nrc_tokens, analyzer=analyzer)
    out_path = out_dir / "with_sentiment.csv"
    scored.to_csv(out_path, index=False)

    counts = scored["sentiment_label"].value_counts().to_dict()
    print(
        f"[ok] {len(tokens)} tokens -> {len(afinn_tokens)} AFINN / {len(nrc_tokens)} NRC matches; "
        f"{len(scored)} posts {counts} -> {out_path}"
    )


if __name__ == "__main__":
    main()
