#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Load and prepare labelled text data:
- Clean text (HTML/url/email/user -> placeholders, lowercase/normalize)
- Read a CSV into Document records, one per row
- Stratified / weighted sampling and a stratified train/test split
"""
from __future__ import annotations

import html
import json
import re
import unicodedata
from pathlib import Path
from typing import List, Tuple

import numpy as np
import pandas as pd
from loguru import logger

from .core.errors import EmptyInput
from .core.feature_matrix import Document

TAG_RE = re.compile(r"<[^>]+>")
URL_RE = re.compile(r"(https?://\S+|www\.\S+)")
EMAIL_RE = re.compile(r"\b[\w\.-]+@[\w\.-]+\.\w+\b")
USER_RE = re.compile(r"(^|[^A-Za-z0-9_])@([A-Za-z0-9_]{1,15})")


def strip_control_chars(s: str) -> str:
    return "".join(ch for ch in s if ch.isprintable())


def normalize_text(text) -> str:
    s = "" if text is None else str(text)
    s = html.unescape(s).replace("<br />", " ")
    s = TAG_RE.sub(" ", s)
    s = unicodedata.normalize("NFKC", s)
    s = URL_RE.sub(" url ", s)
    s = EMAIL_RE.sub(" email ", s)
    s = USER_RE.sub(r"\1user", s)
    s = s.lower()
    s = strip_control_chars(s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def load_documents(
    csv_path,
    text_col: str = "text",
    label_col: str = "label",
    clean: bool = False,
) -> List[Document]:
    """Read ``csv_path`` into Documents.

    Rows with a missing label are dropped; a missing text becomes ``""`` so the
    row still produces a feature vector.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")
    df = pd.read_csv(csv_path)
    missing = [c for c in (text_col, label_col) if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns {missing}; has {list(df.columns)}")

    before = len(df)
    df = df.dropna(subset=[label_col])
    if len(df) < before:
        logger.warning("[data] dropped {} rows without a label", before - len(df))

    texts = df[text_col].fillna("").astype(str)
    if clean:
        texts = texts.map(normalize_text)
    docs = [Document(t, y) for t, y in zip(texts.tolist(), df[label_col].tolist())]
    logger.info("[data] {} documents from {}", len(docs), csv_path)
    return docs


def stratified_sample(
    df: pd.DataFrame,
    label_col: str,
    n_per_class: int | None = None,
    frac: float | None = None,
    random_state: int = 42,
) -> pd.DataFrame:
    if (n_per_class is None) == (frac is None):
        raise ValueError("choose n_per_class OR frac")
    parts = []
    for _, g in df.groupby(label_col, sort=False):
        if n_per_class is not None:
            parts.append(g.sample(n=min(n_per_class, len(g)), random_state=random_state))
        else:
            parts.append(g.sample(frac=frac, random_state=random_state))
    return (
        pd.concat(parts)
        .sample(frac=1.0, random_state=random_state)
        .reset_index(drop=True)
    )


def weighted_sample(
    df: pd.DataFrame,
    n: int,
    weight_col: str,
    replace: bool = False,
    random_state: int = 42,
) -> pd.DataFrame:
    """Draw ``n`` rows with probability proportional to ``weight_col`` (e.g. word frequency)."""
    if weight_col not in df.columns:
        raise ValueError(f"no column {weight_col!r}")
    if len(df) == 0:
        raise EmptyInput("sampling frame")
    w = pd.to_numeric(df[weight_col], errors="raise")
    if w.isna().any() or (w < 0).any():
        raise ValueError("weights must be non-negative numbers")
    if not replace and n > int((w > 0).sum()):
        raise ValueError(f"cannot draw {n} rows without replacement from {int((w > 0).sum())} positive weights")
    return df.sample(n=n, weights=w, replace=replace, random_state=random_state).reset_index(drop=True)


def train_test_split_documents(
    documents: List[Document], test_size: float = 0.25, random_state: int = 42
) -> Tuple[List[Document], List[Document]]:
    """Stratified split; every label keeps at least one row on the training side."""
    if not documents:
        raise EmptyInput()
    if not 0.0 < test_size < 1.0:
        raise ValueError("test_size must be in (0, 1)")
    rng = np.random.default_rng(random_state)
    by_label = {}
    for i, d in enumerate(documents):
        by_label.setdefault(d.label, []).append(i)
    test_idx = set()
    for idx in by_label.values():
        n_test = min(int(round(len(idx) * test_size)), len(idx) - 1)
        test_idx.update(rng.permutation(idx)[:n_test].tolist())
    train = [d for i, d in enumerate(documents) if i not in test_idx]
    test = [d for i, d in enumerate(documents) if i in test_idx]
    return train, test


def prepare_dataset(
    src_path: str | Path,
    outdir: str | Path = "data",
    text_col: str = "text",
    label_col: str = "label",
    n_per_class: int | None = None,
    random_state: int = 42,
) -> dict:
    """
    Clean a raw labelled CSV and write ``<outdir>/clean.csv`` (text,label).

    Args:
        src_path: raw CSV file
        outdir: output directory
        text_col, label_col: source column names
        n_per_class: also write a balanced subset with this many rows per label
        random_state: random seed for reproducibility

    Returns:
        Dictionary with metadata about the processing
    """
    src = Path(src_path)
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    df = pd.read_csv(src)
    missing = [c for c in (text_col, label_col) if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns {missing}")
    df = df.rename(columns={text_col: "text", label_col: "label"})

    before = len(df)
    df = df.dropna(subset=["text", "label"]).drop_duplicates(subset=["text", "label"])
    after = len(df)
    df["text"] = df["text"].map(normalize_text)

    clean_path = outdir / "clean.csv"
    df[["text", "label"]].to_csv(clean_path, index=False, encoding="utf-8")

    sub_info = {}
    if n_per_class:
        sub = stratified_sample(df[["text", "label"]], "label", n_per_class=n_per_class, random_state=random_state)
        sub_path = outdir / "balanced.csv"
        sub.to_csv(sub_path, index=False, encoding="utf-8")
        sub_info = {"balanced": str(sub_path)}

    return {
        "src": str(src),
        "out_clean": str(clean_path),
        "dropped_rows": before - after,
        "final_rows": int(len(df)),
        "class_balance": {str(k): int(v) for k, v in df["label"].value_counts().items()},
        **sub_info,
    }


def main():
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--src", required=True, help="Raw CSV with a text and a label column")
    parser.add_argument("--outdir", default="data", help="Output root directory")
    parser.add_argument("--text-col", default="text")
    parser.add_argument("--label-col", default="label")
    parser.add_argument("--per-class", type=int, default=None, help="Also write a balanced subset")
    args = parser.parse_args()

    meta = prepare_dataset(
        src_path=args.src,
        outdir=args.outdir,
        text_col=args.text_col,
        label_col=args.label_col,
        n_per_class=args.per_class,
    )
    print(json.dumps(meta, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
