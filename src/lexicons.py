# Load the AFINN and NRC sentiment lexicons into word-keyed DataFrames.

from pathlib import Path
from typing import List, Tuple

import pandas as pd


NRC_CATEGORIES = (
    "anger",
    "anticipation",
    "disgust",
    "fear",
    "joy",
    "negative",
    "positive",
    "sadness",
    "surprise",
    "trust",
)

AFINN_FILENAME = "AFINN-en-165.txt"
NRC_FILENAME = "NRC-Emotion-Lexicon-Wordlevel-v0.92.txt"


def _read_tab_lines(path: Path) -> List[Tuple[int, List[str]]]:
    lines = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        lines.append((lineno, line.split("\t")))
    return lines


def _read_csv_lexicon(path: Path, columns: List[str]):
    df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=False)
    missing = set(columns) - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns in lexicon {path.name}: {sorted(missing)}")
    # Header is line 1, so row i sits on line i + 2; blank lines keep their row.
    df = df[columns].fillna("")
    df = df[(df != "").any(axis=1)]
    for idx, row in df.iterrows():
        for col in columns:
            if not str(row[col]).strip():
                raise ValueError(f"Malformed lexicon line {idx + 2} in {path.name}: empty {col}")
    return df.copy()


# AFINN as a (word, value) frame, from the distributed word<TAB>score file or a word,value CSV.
def load_afinn(path: Path):
    if path.suffix.lower() == ".csv":
        df = _read_csv_lexicon(path, ["word", "value"])
        values = []
        for idx, score in df["value"].items():
            try:
                values.append(int(score.strip()))
            except ValueError:
                raise ValueError(f"Malformed AFINN score on line {idx + 2} in {path.name}: {score!r}") from None
        df["value"] = pd.Series(values, index=df.index, dtype=int)
    else:
        rows = []
        for lineno, parts in _read_tab_lines(path):
            if len(parts) != 2:
                raise ValueError(f"Malformed AFINN line {lineno} in {path.name}: expected word<TAB>score")
            word, score = parts
            try:
                value = int(score)
            except ValueError:
                raise ValueError(f"Malformed AFINN score on line {lineno} in {path.name}: {score!r}") from None
            rows.append({"word": word, "value": value})
        df = pd.DataFrame(rows, columns=["word", "value"])

    df["word"] = df["word"].astype(str).str.strip().str.lower()
    return df.drop_duplicates(subset=["word"]).reset_index(drop=True)


# NRC as a (word, sentiment) frame; the word-level file keeps only associations flagged 1.
def load_nrc(path: Path):
    if path.suffix.lower() == ".csv":
        df = _read_csv_lexicon(path, ["word", "sentiment"])
    else:
        rows = []
        for lineno, parts in _read_tab_lines(path):
            if len(parts) != 3:
                raise ValueError(f"Malformed NRC line {lineno} in {path.name}: expected word<TAB>category<TAB>flag")
            word, category, flag = parts
            if flag.strip() not in {"0", "1"}:
                raise ValueError(f"Malformed NRC flag on line {lineno} in {path.name}: {flag!r}")
            if flag.strip() == "1":
                rows.append({"word": word, "sentiment": category})
        df = pd.DataFrame(rows, columns=["word", "sentiment"])

    df["word"] = df["word"].astype(str).str.strip().str.lower()
    df["sentiment"] = df["sentiment"].astype(str).str.strip().str.lower()
    unknown = set(df["sentiment"]) - set(NRC_CATEGORIES)
    if unknown:
        raise ValueError(f"Unknown NRC categories in {path.name}: {sorted(unknown)}")
    return df.drop_duplicates().reset_index(drop=True)
