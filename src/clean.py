import argparse
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
from dateutil import parser as dateparser


# Reddit API field names accepted in place of the study's column names.
COLUMN_ALIASES = {
    "id": "post_id",
    "selftext": "body",
    "link_flair_text": "flair",
    "ups": "score",
}
REQUIRED_COLUMNS = {"post_id", "title"}
REMOVED_BODIES = {"[removed]", "[deleted]"}
NO_FLAIR = "(none)"


def parse_args():
    parser = argparse.ArgumentParser(description="Clean the raw forum posts CSV.")
    parser.add_argument("--inp", default="data/raw/posts.csv", help="Raw posts CSV")
    parser.add_argument("--out", default="data/clean", help="Output directory for posts.csv")
    parser.add_argument("--min_length", type=int, default=3, help="Minimum title+body length to keep")
    parser.add_argument("--flairs", nargs="*", default=None, help="Only keep posts with these flairs")
    return parser.parse_args()


# Read the raw CSV, rename API aliases and validate required columns.
def load_posts(path: Path):
    df = pd.read_csv(path, dtype={"post_id": str, "id": str})
    df = df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if k in df.columns and v not in df.columns})
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns in posts CSV: {sorted(missing)}")
    return df


# Clean a single DataFrame of posts.
def clean_frame(df: pd.DataFrame, min_length: int, flairs: Optional[Iterable[str]] = None):
    df = df[df["post_id"].notna()].copy()
    if "body" not in df.columns:
        df["body"] = ""

    # Normalize text fields
    for col in ["title", "body", "flair", "author"]:
        if col in df.columns:
            df[col] = df[col].fillna("").astype(str).str.strip()
    df.loc[df["body"].isin(REMOVED_BODIES), "body"] = ""
    df["post_id"] = df["post_id"].astype(str).str.strip()

    df["text"] = (df["title"] + " " + df["body"]).str.strip()
    df = df[(df["post_id"] != "") & (df["text"].str.len() >= min_length)].copy()

    # Coerce counts
    for col in ["score", "num_comments"]:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).astype(int)

    if "created_utc" in df.columns:
        df["created_date"] = df["created_utc"].apply(_safe_parse_date)

    if "flair" in df.columns:
        df.loc[df["flair"] == "", "flair"] = NO_FLAIR
    else:
        df["flair"] = NO_FLAIR
    if flairs:
        wanted = {f.strip().lower() for f in flairs}
        df = df[df["flair"].str.lower().isin(wanted)]

    # Drop duplicate post ids then duplicate texts
    df = df.drop_duplicates(subset=["post_id"])
    df = df.drop_duplicates(subset=["text"])

    return df.reset_index(drop=True)


# Safe date parse to ISO string; numbers are epoch seconds.
def _safe_parse_date(val):
    if val is None or (isinstance(val, float) and pd.isna(val)):
        return ""
    try:
        epoch = float(val)
    except (TypeError, ValueError):
        epoch = None
    if epoch is not None:
        ts = pd.to_datetime(epoch, unit="s", utc=True, errors="coerce")
        return "" if pd.isna(ts) else ts.date().isoformat()
    try:
        dt = dateparser.parse(str(val))
        if dt:
            return dt.date().isoformat()
    except (ValueError, OverflowError):
        return ""
    return ""


def main():
    # Clean data/raw/posts.csv and write data/clean/posts.csv.
    args = parse_args()
    inp = Path(args.inp)
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    if not inp.exists():
        print(f"[warn] posts file not found: {inp}")
        return

    raw = load_posts(inp)
    cleaned = clean_frame(raw, min_length=args.min_length, flairs=args.flairs)
    out_path = out_dir / "posts.csv"
    cleaned.to_csv(out_path, index=False)
    print(f"[ok] {inp.name} -> {out_path} ({len(raw)} raw, {len(cleaned)} kept)")


if __name__ == "__main__":
    main()
