#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Runner: word-vector features -> (optional PCA) -> cross-validated logistic regression.
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from docvec.core.lookup_table import load_keyed_vectors, load_lookup_table
from docvec.experiments.experimental_pipeline import ExperimentalPipeline
from docvec.log_setup import setup_logging
from docvec.prepare_dataset import load_documents


def main() -> None:
    ap = argparse.ArgumentParser(description="Run the feature + classifier experiment")
    ap.add_argument("--csv", type=Path, required=True, help="CSV with text,label columns")
    ap.add_argument("--vectors", type=Path, required=True, help="Word-vector file")
    ap.add_argument("--gensim", action="store_true", help="Load --vectors through gensim")
    ap.add_argument("--results-dir", type=Path, default=Path("results"))
    ap.add_argument("--reduction", default="sum", choices=["sum", "mean", "max", "min"])
    ap.add_argument("--pca", type=int, default=None)
    ap.add_argument("--k", type=int, default=5, help="Cross-validation folds")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--full", action="store_true", help="Search the full grid (l1/l2/elastic-net)")
    ap.add_argument("--log-file", default=None)
    args = ap.parse_args()

    setup_logging("INFO", args.log_file)

    docs = load_documents(args.csv)
    print(f"[data] rows={len(docs)}, balance={dict(Counter(d.label for d in docs))}")

    table = load_keyed_vectors(args.vectors) if args.gensim else load_lookup_table(args.vectors)
    exp = ExperimentalPipeline(
        table,
        {
            "reduction": args.reduction,
            "pca_components": args.pca,
            "cv_folds": args.k,
            "seed": args.seed,
            "fast": not args.full,
        },
        results_dir=str(args.results_dir),
    )
    exp.run(docs)
    out = exp.save_results()
    print(f"Saved summary: {out}")


if __name__ == "__main__":
    main()
