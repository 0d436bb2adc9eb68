#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Plot the outputs of extract_features.py / run_experiment.py.
"""

import argparse
import json
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from docvec.log_setup import setup_logging
from docvec.experiments.visualization import (
    plot_activations,
    plot_explained_variance,
    plot_variable_importance,
)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--results", type=Path, required=True, help="experiment_results_*.json")
    ap.add_argument("--outdir", type=Path, default=Path("results"))
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()
    setup_logging(args.log_level)

    if not args.results.exists():
        print(f"Error: Results file not found: {args.results}")
        return

    data = json.loads(args.results.read_text(encoding="utf-8"))
    args.outdir.mkdir(parents=True, exist_ok=True)
    print("\nGenerating visualizations...")

    jobs = []
    if "pca" in data:
        jobs.append(("explained_variance.png",
                     lambda p: plot_explained_variance(data["pca"]["explained_variance_ratio"], save_path=p)))
    if "variable_importance" in data:
        jobs.append(("variable_importance.png",
                     lambda p: plot_variable_importance(pd.DataFrame(data["variable_importance"]), save_path=p)))
    jobs.append(("activations.png", lambda p: plot_activations(save_path=p)))

    for name, job in jobs:
        try:
            job(args.outdir / name)
            print(f"✓ {name} saved to {args.outdir}")
        except (KeyError, ValueError, OSError) as e:
            print(f"✗ Error generating {name}: {e}")
        finally:
            plt.close("all")

    print("\nVisualization complete!")


if __name__ == "__main__":
    main()
