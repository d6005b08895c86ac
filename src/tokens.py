# Split cleaned posts into a one-word-per-row token table and strip stop words.

import argparse
import html
import re
from pathlib import Path
from typing import List, Optional, Set

import pandas as pd
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS


URL_RE = re.compile(r"(https?://\S+|www\.\S+)")
# Subreddit and user references such as r/python or /u/someone.
REF_RE = re.compile(r"(?<![a-z0-9])/?[ru]/[a-z0-9_-]+")
TOKEN_RE = re.compile(r"[a-z]+(?:'[a-z]+)*")

EXTRA_STOP = {
    "amp",
    "nbsp",
    "http",
    "https",
    "www",
    "com",
    "reddit",
    "removed",
    "deleted",
    "x200b",
    "edit",
    "im",
    "ive",
    "dont",
    "didnt",
    "doesnt",
    "isnt",
    "cant",
    "wont",
    "i'm",
    "i've",
    "i'd",
    "i'll",
    "it's",
    "don't",
    "didn't",
    "doesn't",
    "isn't",
    "can't",
    "won't",
    "that's",
    "there's",
    "you're",
    "they're",
    "we're",
    "let's",
}


def parse_args():
    parser = argparse.ArgumentParser(description="Tokenize cleaned posts.")
    parser.add_argument("--inp", default="data/clean/posts.csv", help="Cleaned posts CSV from clean.py")
    parser.add_argument("--out", default="data/clean", help="Output directory for tokens.csv")
    parser.add_argument("--outputs", default="data/outputs", help="Output directory for word_counts.csv")
    parser.add_argument("--stop_words", default=None, help="Optional file with extra stop words, one per line")
    parser.add_argument("--min_token_length", type=int, default=2, help="Drop tokens shorter than this")
    return parser.parse_args()


def normalize_text(text: str):
    text = html.unescape(str(text or "")).lower()
    text = text.replace("’", "'").replace("‘", "'")
    text = URL_RE.sub(" ", text)
    return REF_RE.sub(" ", text)


def tokenize_text(text: str) -> List[str]:
    return TOKEN_RE.findall(normalize_text(text))


def build_stop_words(extra_path: Optional[Path] = None) -> Set[str]:
    # Static list plus forum noise plus an optional user file.
    stop: Set[str] = set(ENGLISH_STOP_WORDS) | EXTRA_STOP
    if extra_path is None:
        return stop
    if not extra_path.exists():
        print(f"[warn] stop-word file not found: {extra_path}")
        return stop
    for line in extra_path.read_text(encoding="utf-8").splitlines():
        word = line.strip().lower()
        if word and not word.startswith("#"):
            stop.add(word)
    return stop


# Long token table (post_id, position, word); position is the index before stop words are removed.
def tokenize_frame(posts: pd.DataFrame, stop: Set[str], min_token_length: int = 2):
    rows = []
    for post_id, text in zip(posts["post_id"], posts["text"].fillna("")):
        for position, word in enumerate(tokenize_text(text)):
            if len(word) < min_token_length or word in stop:
                continue
            rows.append({"post_id": post_id, "position": position, "word": word})
    return pd.DataFrame(rows, columns=["post_id", "position", "word"])


def word_counts(tokens: pd.DataFrame):
    counts = tokens.groupby("word").size().reset_index(name="n")
    return counts.sort_values(["n", "word"], ascending=[False, True]).reset_index(drop=True)


def main():
    args = parse_args()
    inp = Path(args.inp)
    out_dir = Path(args.out)
    outputs = Path(args.outputs)
    out_dir.mkdir(parents=True, exist_ok=True)
    outputs.mkdir(parents=True, exist_ok=True)

    if not inp.exists():
        print(f"[warn] cleaned posts not found: {inp}")
        return
    posts = pd.read_csv(inp, dtype={"post_id": str})
    if "text" not in posts.columns:
        raise ValueError(f"Missing text column in {inp}; run clean.py first")

    stop = build_stop_words(Path(args.stop_words) if args.stop_words else None)
    tokens = tokenize_frame(posts, stop, min_token_length=args.min_token_length)
    tokens_path = out_dir / "tokens.csv"
    tokens.to_csv(tokens_path, index=False)

    counts_path = outputs / "word_counts.csv"
    word_counts(tokens).to_csv(counts_path, index=False)
    print(f"[ok] {len(posts)} posts -> {len(tokens)} tokens ({tokens['word'].nunique()} distinct) -> {tokens_path}")


if __name__ == "__main__":
    main()
