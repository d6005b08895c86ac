# Aggregate per-post sentiment into a comparison table per flair, month or author.

import argparse
import json
from pathlib import Path
from typing import Dict

import pandas as pd

from lexicons import NRC_CATEGORIES


GROUP_CHOICES = ("flair", "month", "author")
MISSING_GROUP = "(none)"


# Parse CLI arguments for aggregation.
def parse_args():
    parser = argparse.ArgumentParser(description="Aggregate post sentiment per group.")
    parser.add_argument("--inp", default="data/clean/with_sentiment.csv", help="Scored posts from sentiment.py")
    parser.add_argument("--keywords", default=None, help="CSV from keywords.py (default: <out>/keywords_<by>.csv)")
    parser.add_argument("--by", default="flair", choices=GROUP_CHOICES, help="Grouping column")
    parser.add_argument("--out", default="data/outputs", help="Output directory")
    return parser.parse_args()


# Add a "group" column derived from the requested grouping.
def add_group_column(df: pd.DataFrame, by: str):
    if by not in GROUP_CHOICES:
        raise ValueError(f"Unsupported grouping {by!r}; expected one of {GROUP_CHOICES}")
    df = df.copy()
    if by == "month":
        source = df["created_date"] if "created_date" in df.columns else pd.Series("", index=df.index)
        group = source.fillna("").astype(str).str.slice(0, 7)
    else:
        source = df[by] if by in df.columns else pd.Series("", index=df.index)
        group = source.fillna("").astype(str).str.strip()
    df["group"] = group.where(group != "", MISSING_GROUP)
    return df


def _mean(df: pd.DataFrame, col: str):
    if col not in df.columns:
        return 0
    value = df[col].mean()
    return 0 if pd.isna(value) else float(value)


# Compute sentiment distribution and score metrics for one group of posts.
def sentiment_summary(df: pd.DataFrame):
    total = len(df)
    if total == 0:
        return {
            "total": 0,
            "pos_pct": 0,
            "neg_pct": 0,
            "neu_pct": 0,
            "avg_afinn": 0,
            "median_afinn": 0,
            "avg_nrc_net": 0,
            "avg_upvotes": 0,
            "avg_comments": 0,
            "avg_tokens": 0,
            **({"avg_vader": 0} if "vader_compound" in df.columns else {}),
            **{f"nrc_{c}": 0 for c in NRC_CATEGORIES},
        }
    pos = (df["sentiment_label"] == "pos").sum()
    neg = (df["sentiment_label"] == "neg").sum()
    neu = (df["sentiment_label"] == "neu").sum()

    # Token totals per NRC category
    nrc = {f"nrc_{c}": int(df[f"nrc_{c}"].sum()) if f"nrc_{c}" in df.columns else 0 for c in NRC_CATEGORIES}

    return {
        "total": total,
        "pos_pct": pos / total * 100,
        "neg_pct": neg / total * 100,
        "neu_pct": neu / total * 100,
        "avg_afinn": _mean(df, "afinn_score"),
        "median_afinn": float(df["afinn_score"].median()),
        "avg_nrc_net": _mean(df, "nrc_net"),
        "avg_upvotes": _mean(df, "score"),
        "avg_comments": _mean(df, "num_comments"),
        "avg_tokens": _mean(df, "n_tokens"),
        **({"avg_vader": _mean(df, "vader_compound")} if "vader_compound" in df.columns else {}),
        **nrc,
    }


# Load keywords CSV (if present).
def load_keywords(path: Path):
    if not path.exists():
        return pd.DataFrame(columns=["by", "group", "bucket", "term", "score"])
    return pd.read_csv(path, dtype={"group": str})


# Keep only keywords extracted with the same grouping as the summary.
def keywords_for(keyword_df: pd.DataFrame, by: str):
    if keyword_df.empty:
        return keyword_df
    if "by" not in keyword_df.columns:
        print(f"[warn] keywords file has no grouping column; ignoring keywords for --by {by}")
        return keyword_df.iloc[0:0]
    matched = keyword_df[keyword_df["by"] == by]
    if matched.empty:
        found = sorted(keyword_df["by"].dropna().astype(str).unique())
        print(f"[warn] keywords were extracted by {found}, not {by}; run keywords.py --by {by}")
    return matched


def top_keywords(keyword_df: pd.DataFrame, group: str, limit: int = 10):
    group_keywords = {}
    if keyword_df.empty:
        return group_keywords
    subset = keyword_df[keyword_df["group"] == group]
    for bucket in subset["bucket"].unique():
        terms = subset[subset["bucket"] == bucket].sort_values("score", ascending=False)
        group_keywords[bucket] = terms.head(limit)[["term", "score"]].to_dict(orient="records")
    return group_keywords


# Per-group rows sorted by net score, plus the nested JSON form.
def summarize_groups(df: pd.DataFrame, by: str, keyword_df: pd.DataFrame):
    df = add_group_column(df, by)
    keyword_df = keywords_for(keyword_df, by)
    rows = []
    summary_json: Dict[str, dict] = {}

    for group, subset in df.groupby("group", sort=True):
        group = str(group)
        summ = sentiment_summary(subset)

        # Net score: positive - negative percentage
        score = summ["pos_pct"] - summ["neg_pct"]
        group_keywords = top_keywords(keyword_df, group)

        rows.append(
            {
                by: group,
                **summ,
                "score": score,
                "top_pos_terms": group_keywords.get("pos", []),
                "top_neg_terms": group_keywords.get("neg", []),
            }
        )
        summary_json[group] = {
            "metrics": {k: v for k, v in summ.items()},
            "score": score,
            "keywords": group_keywords,
        }

    compare_df = pd.DataFrame(rows)
    if not compare_df.empty:
        compare_df = compare_df.sort_values("score", ascending=False).reset_index(drop=True)
    return compare_df, summary_json


# Load scored posts, group them, merge keywords, and write comparison files.
def main():
    args = parse_args()
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    inp = Path(args.inp)
    if not inp.exists():
        print(f"[warn] scored posts not found: {inp}")
        return
    df = pd.read_csv(inp, dtype={"post_id": str})
    if "sentiment_label" not in df.columns:
        raise ValueError(f"Missing sentiment_label column in {inp}; run sentiment.py first")

    keywords_path = Path(args.keywords) if args.keywords else out_dir / f"keywords_{args.by}.csv"
    keyword_df = load_keywords(keywords_path)
    compare_df, summary_json = summarize_groups(df, args.by, keyword_df)

    compare_path = out_dir / f"by_{args.by}.csv"
    compare_df.to_csv(compare_path, index=False)

    json_path = out_dir / f"by_{args.by}.json"
    json_path.write_text(json.dumps(summary_json, indent=2, default=float), encoding="utf-8")

    print(f"[ok] wrote {len(compare_df)} {args.by} groups -> {compare_path} and {json_path}")


if __name__ == "__main__":
    main()
