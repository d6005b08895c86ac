# Download the AFINN-165 and NRC Emotion lexicons into data/lexicons/ if they
# are not already present. Both are plain word lists; sentiment.py loads them
# through lexicons.py.

import argparse
import io
import sys
import zipfile
from pathlib import Path

import requests

from lexicons import AFINN_FILENAME, NRC_FILENAME


AFINN_URL = "https://raw.githubusercontent.com/fnielsen/afinn/master/afinn/data/AFINN-en-165.txt"
NRC_URL = "https://saifmohammad.com/WebDocs/Lexicons/NRC-Emotion-Lexicon.zip"
NRC_MEMBER_SUFFIX = "Wordlevel-v0.92.txt"


def parse_args():
    parser = argparse.ArgumentParser(description="Download the AFINN and NRC lexicons.")
    parser.add_argument("--out_dir", default="data/lexicons", help="Directory for lexicon files")
    parser.add_argument("--afinn_url", default=AFINN_URL, help="AFINN-165 download URL")
    parser.add_argument("--nrc_url", default=NRC_URL, help="NRC Emotion Lexicon zip URL")
    parser.add_argument("--timeout", type=int, default=30, help="HTTP request timeout in seconds")
    return parser.parse_args()


def _download(url: str, timeout: int):
    print(f"[info] downloading {url}")
    with requests.get(url, stream=True, timeout=timeout) as r:
        r.raise_for_status()
        buf = io.BytesIO()
        for chunk in r.iter_content(chunk_size=1024 * 1024):
            if chunk:
                buf.write(chunk)
    return buf.getvalue()


def ensure_afinn(out_dir: Path, url: str = AFINN_URL, timeout: int = 30):
    out_dir.mkdir(parents=True, exist_ok=True)
    dest = out_dir / AFINN_FILENAME
    if dest.exists():
        return dest
    dest.write_bytes(_download(url, timeout))
    print(f"[ok] downloaded {dest}")
    return dest


def extract_nrc_member(payload: bytes):
    # The archive layout has changed between releases; match on the file name only.
    with zipfile.ZipFile(io.BytesIO(payload)) as zf:
        for name in zf.namelist():
            if name.endswith(NRC_MEMBER_SUFFIX) and "__MACOSX" not in name:
                return zf.read(name)
    raise ValueError(f"No member ending in {NRC_MEMBER_SUFFIX} found in NRC archive")


def ensure_nrc(out_dir: Path, url: str = NRC_URL, timeout: int = 30):
    out_dir.mkdir(parents=True, exist_ok=True)
    dest = out_dir / NRC_FILENAME
    if dest.exists():
        return dest
    dest.write_bytes(extract_nrc_member(_download(url, timeout)))
    print(f"[ok] extracted {dest}")
    return dest


def main():
    args = parse_args()
    out_dir = Path(args.out_dir)
    try:
        ensure_afinn(out_dir, args.afinn_url, timeout=args.timeout)
        ensure_nrc(out_dir, args.nrc_url, timeout=args.timeout)
    except requests.RequestException as exc:
        print(f"[error] lexicon download failed: {exc}", file=sys.stderr)
        return
    print(f"[ok] lexicons ready in {out_dir}")


if __name__ == "__main__":
    main()
