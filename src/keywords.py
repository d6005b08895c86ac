# Extract top keywords/phrases per post group and sentiment bucket using TF-IDF.

import argparse
import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pandas as pd
from sklearn.feature_extraction.text import TfidfVectorizer

from aggregate import GROUP_CHOICES, add_group_column
from tokens import build_stop_words, tokenize_text


def parse_args():
    parser = argparse.ArgumentParser(description="Extract TF-IDF keywords per post group.")
    parser.add_argument("--inp", default="data/clean/with_sentiment.csv", help="Scored posts from sentiment.py")
    parser.add_argument("--out", default="data/outputs", help="Directory to write keywords JSON/CSV")
    parser.add_argument("--by", default="flair", choices=GROUP_CHOICES, help="Grouping column")
    parser.add_argument("--label_col", default="sentiment_label", help="Column holding pos/neg/neu buckets")
    parser.add_argument("--stop_words", default=None, help="Optional file with extra stop words, one per line")
    parser.add_argument("--min_df", type=int, default=2, help="Minimum doc frequency")
    parser.add_argument("--max_features", type=int, default=2000, help="Max TF-IDF features")
    parser.add_argument("--top_k", type=int, default=20, help="Top terms to keep per bucket")
    return parser.parse_args()


# Unigram+bigram TF-IDF over the tokens.py tokenizer and stop words.
def build_vectorizer(min_df: int, max_features: int, stop: Optional[Set[str]] = None):
    return TfidfVectorizer(
        tokenizer=tokenize_text,
        token_pattern=None,
        lowercase=False,
        stop_words=sorted(stop if stop is not None else build_stop_words()),
        ngram_range=(1, 2),
        min_df=min_df,
        max_features=max_features,
    )


def _is_noise(term: str, extra_stop: Set[str]):
    tokens = term.split()
    return any(tok in extra_stop for tok in tokens)


def extract_top_terms(texts: List[str], top_k: int, vectorizer: TfidfVectorizer, stop: Set[str]):
    if not texts:
        return []
    try:
        X = vectorizer.fit_transform(texts)
    except ValueError:
        # Too few documents for min_df, or nothing left after stop words.
        return []
    scores = X.sum(axis=0).A1
    terms = vectorizer.get_feature_names_out()
    paired = list(zip(terms, scores))
    paired = [(t, float(s)) for t, s in paired if not _is_noise(t, stop)]
    paired.sort(key=lambda x: x[1], reverse=True)
    return paired[:top_k]


def group_terms(df: pd.DataFrame, by: str, label_col: str, args: argparse.Namespace, stop: Set[str]):
    df = add_group_column(df, by)
    results: Dict[str, Dict[str, List[Tuple[str, float]]]] = {}
    for group, subset in df.groupby("group", sort=True):
        buckets: Dict[str, List[str]] = defaultdict(list)
        if label_col in subset.columns:
            for label in ["pos", "neg", "neu"]:
                buckets[label] = subset.loc[subset[label_col] == label, "text"].dropna().astype(str).tolist()
        else:
            buckets["all"] = subset["text"].dropna().astype(str).tolist()
        results[str(group)] = {
            bucket: extract_top_terms(texts, args.top_k, build_vectorizer(args.min_df, args.max_features, stop), stop)
            for bucket, texts in buckets.items()
        }
    return results


def main():
    # Extract top terms per group/bucket and write JSON/CSV artifacts.
    args = parse_args()
    inp = Path(args.inp)
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    if not inp.exists():
        print(f"[warn] scored posts not found: {inp}")
        return
    df = pd.read_csv(inp, dtype={"post_id": str})
    if "text" not in df.columns:
        print(f"[warn] skipping {inp.name}: missing text column")
        return

    stop = build_stop_words(Path(args.stop_words) if args.stop_words else None)
    records = group_terms(df, args.by, args.label_col, args, stop)

    csv_rows = []
    for group, buckets in records.items():
        for bucket, terms in buckets.items():
            for term, score in terms:
                csv_rows.append({"by": args.by, "group": group, "bucket": bucket, "term": term, "score": score})

    json_path = out_dir / f"keywords_{args.by}.json"
    json_path.write_text(json.dumps({"by": args.by, "groups": records}, indent=2), encoding="utf-8")
    csv_path = out_dir / f"keywords_{args.by}.csv"
    pd.DataFrame(csv_rows, columns=["by", "group", "bucket", "term", "score"]).to_csv(csv_path, index=False)
    print(f"[ok] wrote keywords ({args.by}) -> {json_path}, {csv_path}")


if __name__ == "__main__":
    main()
