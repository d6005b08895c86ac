# Generate simple visuals for the lexicon study.
# Outputs (default to data/outputs/figures/):
# - nrc_totals.png          : bar chart of token counts per NRC category
# - afinn_hist.png          : histogram of per-post AFINN scores
# - afinn_contributions.png : horizontal bars of the words contributing most to AFINN totals
# - nrc_top_words.png       : one panel of top words per NRC category
# - afinn_vs_vader.png      : scatter of AFINN score against VADER compound
# - sentiment_dist.png      : stacked bar (pos/neu/neg %) per group
# - top_terms_<group>_<bucket>.png : horizontal bars of top TF-IDF terms for pos/neg

import argparse
import math
import re
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from aggregate import GROUP_CHOICES, keywords_for


POS_COLOR = "#5cb85c"
NEG_COLOR = "#d9544d"
NEU_COLOR = "#c0c0c0"


# Parse CLI arguments for visualization.
def parse_args():
    parser = argparse.ArgumentParser(description="Visualize lexicon sentiment results.")
    parser.add_argument("--clean_dir", default="data/clean", help="Directory with with_sentiment.csv")
    parser.add_argument("--outputs", default="data/outputs", help="Directory with stats.py/aggregate.py outputs")
    parser.add_argument("--by", default="flair", choices=GROUP_CHOICES, help="Grouping used by aggregate.py and keywords.py")
    parser.add_argument("--out_dir", default="data/outputs/figures", help="Directory to save figures")
    parser.add_argument("--top_n", type=int, default=10, help="Top words/terms to show per chart")
    return parser.parse_args()


def _save(fig, out_path: Path):
    plt.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)


def plot_nrc_totals(totals: pd.DataFrame, out_path: Path):
    totals = totals.sort_values("n", ascending=True)
    colors = [
        POS_COLOR if s == "positive" else NEG_COLOR if s == "negative" else "#4a90e2" for s in totals["sentiment"]
    ]
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.barh(totals["sentiment"], totals["n"], color=colors)
    ax.set_xlabel("Tokens")
    ax.set_title("NRC sentiment categories")
    _save(fig, out_path)


def plot_afinn_hist(df: pd.DataFrame, out_path: Path):
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.hist(df["afinn_score"], bins=30, color="#4a90e2", edgecolor="white")
    ax.axvline(0, color="black", linewidth=0.8)
    ax.set_xlabel("AFINN score (sum per post)")
    ax.set_ylabel("Posts")
    ax.set_title("Distribution of post AFINN scores")
    _save(fig, out_path)


# Horizontal bar of words with the largest absolute AFINN contribution.
def plot_contributions(contrib: pd.DataFrame, top_n: int, out_path: Path):
    subset = contrib.head(top_n).iloc[::-1]
    colors = [POS_COLOR if c > 0 else NEG_COLOR for c in subset["contribution"]]
    fig, ax = plt.subplots(figsize=(6, max(3, 0.3 * len(subset) + 1)))
    ax.barh(subset["word"], subset["contribution"], color=colors)
    ax.axvline(0, color="black", linewidth=0.8)
    ax.set_xlabel("Occurrences x AFINN value")
    ax.set_title("Words contributing most to sentiment")
    _save(fig, out_path)


# One small panel per NRC category.
def plot_nrc_top_words(top_words: pd.DataFrame, out_path: Path):
    categories = sorted(top_words["sentiment"].unique())
    cols = 5
    rows = max(1, math.ceil(len(categories) / cols))
    fig, axes = plt.subplots(rows, cols, figsize=(3 * cols, 3 * rows), squeeze=False)
    for ax, category in zip(axes.flat, categories):
        subset = top_words[top_words["sentiment"] == category].sort_values("n")
        ax.barh(subset["word"], subset["n"], color=NEG_COLOR if category == "negative" else POS_COLOR)
        ax.set_title(category)
    for ax in list(axes.flat)[len(categories):]:
        ax.axis("off")
    _save(fig, out_path)


def plot_afinn_vs_vader(df: pd.DataFrame, out_path: Path):
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.scatter(df["afinn_score"], df["vader_compound"], alpha=0.6, color="#4a90e2")
    ax.axhline(0, color="black", linewidth=0.6)
    ax.axvline(0, color="black", linewidth=0.6)
    ax.set_xlabel("AFINN score")
    ax.set_ylabel("VADER compound")
    ax.set_title("AFINN vs VADER per post")
    _save(fig, out_path)


# Stacked bar of pos/neu/neg percentages per group.
def plot_sentiment_dist(df: pd.DataFrame, group_col: str, out_path: Path):
    labels = df[group_col].astype(str).tolist()
    neg = df["neg_pct"].tolist()
    neu = df["neu_pct"].tolist()
    pos = df["pos_pct"].tolist()

    fig, ax = plt.subplots(figsize=(9, 4))
    ax.bar(labels, neg, label="neg", color=NEG_COLOR)
    ax.bar(labels, neu, bottom=neg, label="neu", color=NEU_COLOR)
    ax.bar(labels, pos, bottom=[n + u for n, u in zip(neg, neu)], label="pos", color=POS_COLOR)
    ax.set_ylabel("Percentage")
    ax.set_title(f"Sentiment distribution by {group_col}")
    ax.legend()
    plt.xticks(rotation=20, ha="right")
    _save(fig, out_path)


# Horizontal bar of top TF-IDF terms for one group/sentiment bucket.
def plot_top_terms(keywords_df: pd.DataFrame, group: str, bucket: str, top_n: int, out_path: Path):
    subset = keywords_df[(keywords_df["group"] == group) & (keywords_df["bucket"] == bucket)]
    subset = subset.sort_values("score", ascending=False).head(top_n)
    if subset.empty:
        return False
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.barh(subset["term"], subset["score"], color=POS_COLOR if bucket == "pos" else NEG_COLOR)
    ax.invert_yaxis()
    ax.set_title(f"Top {bucket} terms for {group}")
    _save(fig, out_path)
    return True


def _slug(value: str):
    return re.sub(r"[^a-z0-9]+", "_", str(value).lower()).strip("_") or "none"


# Load the study outputs, render charts, and save figures.
def main():
    args = parse_args()
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    outputs = Path(args.outputs)

    scored_path = Path(args.clean_dir) / "with_sentiment.csv"
    if not scored_path.exists():
        print(f"[warn] scored posts not found: {scored_path}")
        return
    scored = pd.read_csv(scored_path, dtype={"post_id": str})
    if scored.empty:
        print("[warn] scored posts file is empty")
        return

    plot_afinn_hist(scored, out_dir / "afinn_hist.png")
    if "vader_compound" in scored.columns:
        plot_afinn_vs_vader(scored, out_dir / "afinn_vs_vader.png")

    totals_path = outputs / "nrc_totals.csv"
    contrib_path = outputs / "afinn_contributions.csv"
    top_words_path = outputs / "nrc_top_words.csv"
    if totals_path.exists():
        plot_nrc_totals(pd.read_csv(totals_path), out_dir / "nrc_totals.png")
    else:
        print(f"[warn] NRC totals not found: {totals_path} (run stats.py)")
    if contrib_path.exists():
        contrib = pd.read_csv(contrib_path)
        if not contrib.empty:
            plot_contributions(contrib, args.top_n, out_dir / "afinn_contributions.png")
    if top_words_path.exists():
        top_words = pd.read_csv(top_words_path)
        if not top_words.empty:
            plot_nrc_top_words(top_words, out_dir / "nrc_top_words.png")

    groups_path = outputs / f"by_{args.by}.csv"
    if groups_path.exists():
        groups = pd.read_csv(groups_path, dtype={args.by: str})
        if not groups.empty:
            plot_sentiment_dist(groups, args.by, out_dir / "sentiment_dist.png")
    else:
        print(f"[warn] group comparison not found: {groups_path} (run aggregate.py)")

    kw_path = outputs / f"keywords_{args.by}.csv"
    if kw_path.exists():
        kw_df = keywords_for(pd.read_csv(kw_path, dtype={"group": str}), args.by)
        for group in kw_df["group"].drop_duplicates():
            for bucket in ["pos", "neg"]:
                plot_top_terms(kw_df, group, bucket, args.top_n, out_dir / f"top_terms_{_slug(group)}_{bucket}.png")
    else:
        print(f"[warn] keywords file not found: {kw_path}")

    print(f"[ok] figures saved to {out_dir}")


if __name__ == "__main__":
    main()
