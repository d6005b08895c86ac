# Corpus-level descriptive statistics over the scored posts and lexicon joins.
# Outputs (default to data/outputs/):
# - stats.json              : score summaries, correlations, label agreement, lexicon coverage
# - nrc_totals.csv          : token counts per NRC category
# - afinn_contributions.csv : words ranked by total AFINN contribution
# - nrc_top_words.csv       : most frequent words per NRC category

import argparse
import json
from pathlib import Path

import pandas as pd

from lexicons import NRC_CATEGORIES


SCORE_COLUMNS = ["n_tokens", "afinn_score", "afinn_mean", "nrc_net", "vader_compound"]


def parse_args():
    parser = argparse.ArgumentParser(description="Descriptive statistics for the sentiment study.")
    parser.add_argument("--clean_dir", default="data/clean", help="Directory with tokens/afinn/nrc/with_sentiment CSVs")
    parser.add_argument("--out", default="data/outputs", help="Output directory")
    parser.add_argument("--top_n", type=int, default=10, help="Words to keep per NRC category")
    return parser.parse_args()


def _present(df: pd.DataFrame):
    return [c for c in SCORE_COLUMNS if c in df.columns]


def describe_scores(df: pd.DataFrame):
    cols = _present(df)
    if df.empty or not cols:
        return {}
    described = df[cols].apply(pd.to_numeric, errors="coerce").describe()
    return {col: {k: _clean_float(v) for k, v in described[col].items()} for col in cols}


def score_correlations(df: pd.DataFrame):
    cols = [c for c in ["afinn_score", "nrc_net", "vader_compound"] if c in df.columns]
    if len(df) < 2 or len(cols) < 2:
        return {}
    scores = df[cols].apply(pd.to_numeric, errors="coerce")
    return {
        method: {a: {b: _clean_float(v) for b, v in row.items()} for a, row in scores.corr(method=method).iterrows()}
        for method in ("pearson", "spearman")
    }


# Share of posts where the AFINN label and the VADER label agree.
def label_agreement(df: pd.DataFrame):
    if df.empty or "vader_label" not in df.columns:
        return {}
    agree = float((df["sentiment_label"] == df["vader_label"]).mean())
    table = pd.crosstab(df["sentiment_label"], df["vader_label"])
    return {
        "agreement": agree,
        "crosstab": {str(a): {str(b): int(n) for b, n in row.items()} for a, row in table.iterrows()},
    }


def lexicon_coverage(tokens: pd.DataFrame, afinn_tokens: pd.DataFrame, nrc_tokens: pd.DataFrame):
    total = len(tokens)
    # NRC joins repeat a token once per category; count each token once.
    nrc_hits = len(nrc_tokens.drop_duplicates(subset=["post_id", "position"]))
    return {
        "tokens": total,
        "distinct_words": int(tokens["word"].nunique()),
        "afinn_tokens": len(afinn_tokens),
        "afinn_words": int(afinn_tokens["word"].nunique()),
        "afinn_share": len(afinn_tokens) / total if total else 0.0,
        "nrc_tokens": nrc_hits,
        "nrc_words": int(nrc_tokens["word"].nunique()),
        "nrc_share": nrc_hits / total if total else 0.0,
    }


def nrc_totals(nrc_tokens: pd.DataFrame):
    counts = nrc_tokens["sentiment"].value_counts()
    totals = pd.DataFrame({"sentiment": list(NRC_CATEGORIES)})
    totals["n"] = totals["sentiment"].map(counts).fillna(0).astype(int)
    return totals.sort_values(["n", "sentiment"], ascending=[False, True]).reset_index(drop=True)


def word_contributions(afinn_tokens: pd.DataFrame):
    counts = afinn_tokens.groupby(["word", "value"]).size().reset_index(name="n")
    counts["contribution"] = counts["n"] * counts["value"]
    counts = counts.assign(_abs=counts["contribution"].abs())
    counts = counts.sort_values(["_abs", "word"], ascending=[False, True]).drop(columns="_abs")
    return counts[["word", "n", "value", "contribution"]].reset_index(drop=True)


def top_words_by_category(nrc_tokens: pd.DataFrame, n: int = 10):
    counts = nrc_tokens.groupby(["sentiment", "word"]).size().reset_index(name="n")
    counts = counts.sort_values(["sentiment", "n", "word"], ascending=[True, False, True])
    return counts.groupby("sentiment", sort=True).head(n).reset_index(drop=True)


def _clean_float(v):
    return None if pd.isna(v) else float(v)


def main():
    args = parse_args()
    clean_dir = Path(args.clean_dir)
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        name: clean_dir / f"{name}.csv" for name in ["with_sentiment", "tokens", "afinn_tokens", "nrc_tokens"]
    }
    missing = [p for p in paths.values() if not p.exists()]
    if missing:
        print(f"[warn] inputs not found: {', '.join(str(p) for p in missing)}")
        return
    frames = {name: pd.read_csv(path, dtype={"post_id": str}) for name, path in paths.items()}
    posts = frames["with_sentiment"]

    summary = {
        "posts": len(posts),
        "labels": {str(k): int(v) for k, v in posts["sentiment_label"].value_counts().items()},
        "scores": describe_scores(posts),
        "correlations": score_correlations(posts),
        "label_agreement": label_agreement(posts),
        "coverage": lexicon_coverage(frames["tokens"], frames["afinn_tokens"], frames["nrc_tokens"]),
    }
    json_path = out_dir / "stats.json"
    json_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")

    nrc_totals(frames["nrc_tokens"]).to_csv(out_dir / "nrc_totals.csv", index=False)
    word_contributions(frames["afinn_tokens"]).to_csv(out_dir / "afinn_contributions.csv", index=False)
    top_words_by_category(frames["nrc_tokens"], args.top_n).to_csv(out_dir / "nrc_top_words.csv", index=False)

    cov = summary["coverage"]
    print(
        f"[info] {summary['posts']} posts, {cov['tokens']} tokens; "
        f"AFINN covers {cov['afinn_share']:.1%}, NRC covers {cov['nrc_share']:.1%}"
    )
    print(f"[ok] wrote statistics -> {out_dir}")


if __name__ == "__main__":
    main()
