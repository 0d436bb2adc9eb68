#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Turn every text in a labelled CSV into a word-vector document feature and save it.

Outputs (under --outdir):
  features.csv           label + one column per vector dimension (+ tokens)
  features.npy           the numeric matrix only
  pca.csv / pca_meta.json  when --pca is given
"""
import argparse
import json
from pathlib import Path

import numpy as np

from docvec.core.lookup_table import load_keyed_vectors, load_lookup_table
from docvec.log_setup import setup_logging
from docvec.pipeline import FeaturePipeline
from docvec.prepare_dataset import load_documents


def _parse_args():
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", required=True, help="CSV with a text and a label column")
    ap.add_argument("--vectors", required=True, help="Word-vector file (GloVe text layout, or gensim .kv)")
    ap.add_argument("--outdir", default="", help="Output directory (default: features/ next to the CSV)")
    ap.add_argument("--text-col", default="text")
    ap.add_argument("--label-col", default="label")
    ap.add_argument("--clean", action="store_true", help="Normalize text (HTML, URLs, e-mails) before tokenizing")
    ap.add_argument("--gensim", action="store_true", help="Load --vectors through gensim KeyedVectors")
    ap.add_argument("--reduction", default="sum", choices=["sum", "mean", "max", "min"])
    ap.add_argument("--keep-tokens", action="store_true")
    ap.add_argument("--pca", type=int, default=None, help="Number of principal components to keep")
    ap.add_argument("--n-jobs", type=int, default=1)
    ap.add_argument("--log-level", default="INFO")
    return ap.parse_args()


def main():
    args = _parse_args()
    setup_logging(args.log_level)

    csv_path = Path(args.csv)
    out_dir = Path(args.outdir) if args.outdir else csv_path.parent / "features"
    out_dir.mkdir(parents=True, exist_ok=True)

    table = load_keyed_vectors(args.vectors) if args.gensim else load_lookup_table(args.vectors)
    docs = load_documents(csv_path, args.text_col, args.label_col, clean=args.clean)

    pipe = FeaturePipeline(
        table,
        {
            "reduction": args.reduction,
            "keep_tokens": args.keep_tokens,
            "pca_components": args.pca,
            "n_jobs": args.n_jobs,
        },
    )
    fm, reduced = pipe.run(docs)

    fm.to_frame().to_csv(out_dir / "features.csv", index=False)
    np.save(out_dir / "features.npy", fm.vectors)
    print(f"[features] {fm.n_rows} x {fm.dim} -> {out_dir / 'features.csv'}")

    if reduced is not None:
        reduced.to_frame().to_csv(out_dir / "pca.csv", index=False)
        meta = {
            "n_components": reduced.n_components,
            "explained_variance_ratio": reduced.explained_variance_ratio.tolist(),
        }
        (out_dir / "pca_meta.json").write_text(json.dumps(meta, indent=2), encoding="utf-8")
        print(f"[PCA] {reduced.n_rows} x {reduced.n_components} -> {out_dir / 'pca.csv'}")


if __name__ == "__main__":
    main()
