# visualization.py
from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from ..core.activations import activation_table
from ..core.feature_matrix import ReducedFeatureMatrix


def _finish(fig, save_path):
    fig.tight_layout()
    if save_path is not None:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=200, bbox_inches="tight")
    return fig


def boxplot_with_violin(data: pd.DataFrame, x: str, save_path=None):
    """Distribution of one numeric column: violin outline with a narrow boxplot on top."""
    fig, ax = plt.subplots(figsize=(7, 3))
    sns.violinplot(x=data[x], ax=ax, color="pink", linewidth=0, inner=None)
    sns.boxplot(x=data[x], ax=ax, width=0.1, fill=False, color="black", linewidth=1.1)
    ax.set_yticks([])
    ax.set_ylabel("")
    ax.tick_params(axis="x", labelrotation=90)
    return _finish(fig, save_path)


def scatter(data: pd.DataFrame, x: str, y: str, smooth: Optional[str] = None, save_path=None):
    """Bivariate scatter with an optional smoothing line.

    ``smooth="linear"`` draws a least-squares line with its confidence band,
    ``smooth="lowess"`` a locally weighted fit (needs statsmodels).
    """
    if smooth not in (None, "linear", "lowess"):
        raise ValueError(f"unknown smoother {smooth!r}; use None, \"linear\" or \"lowess\"")
    fig, ax = plt.subplots(figsize=(6, 5))
    if smooth is not None:
        sns.regplot(
            data=data, x=x, y=y, ax=ax, color="grey",
            lowess=(smooth == "lowess"),
            scatter_kws={"s": 12}, line_kws={"color": "C0"},
        )
    else:
        sns.scatterplot(data=data, x=x, y=y, ax=ax, color="0.2")
    return _finish(fig, save_path)


def plot_explained_variance(reduced, save_path=None):
    """Scree plot: per-component ratio (bars) and cumulative ratio (line)."""
    ratio = (
        reduced.explained_variance_ratio
        if isinstance(reduced, ReducedFeatureMatrix)
        else np.asarray(reduced, dtype=float)
    )
    idx = np.arange(1, len(ratio) + 1)
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.bar(idx, ratio, color="C0", label="component")
    ax.plot(idx, np.cumsum(ratio), color="C3", marker="o", label="cumulative")
    ax.set_xticks(idx)
    ax.set_xticklabels([f"PC{i}" for i in idx], rotation=90)
    ax.set_ylabel("Explained variance ratio")
    ax.set_ylim(0, 1.05)
    ax.legend()
    return _finish(fig, save_path)


def plot_variable_importance(vi: pd.DataFrame, top_n: int = 20, save_path=None):
    """Horizontal bars of |coefficient|, coloured by coefficient sign."""
    top = vi.head(top_n).iloc[::-1]
    fig, ax = plt.subplots(figsize=(7, max(3, 0.3 * len(top))))
    colors = ["C0" if s == "POS" else "C3" for s in top["sign"]]
    ax.barh(top["feature"], top["importance"], color=colors)
    ax.set_xlabel("Importance (|coefficient|)")
    return _finish(fig, save_path)


def plot_components(reduced: ReducedFeatureMatrix, x: int = 1, y: int = 2, save_path=None):
    if max(x, y) > reduced.n_components:
        raise ValueError(f"only {reduced.n_components} components available")
    df = reduced.to_frame()
    fig, ax = plt.subplots(figsize=(6, 5))
    hue = "label" if df["label"].notna().any() else None
    sns.scatterplot(data=df, x=f"PC{x}", y=f"PC{y}", hue=hue, ax=ax, alpha=0.6, s=15)
    return _finish(fig, save_path)


def plot_activations(xs: Optional[Sequence[float]] = None, names=None, save_path=None):
    xs = np.linspace(-5, 5, 201) if xs is None else xs
    df = activation_table(xs, names)
    fig, ax = plt.subplots(figsize=(7, 4))
    sns.lineplot(data=df, x="x", y="y", hue="activation", ax=ax)
    ax.axhline(0, color="0.7", linewidth=0.8)
    ax.axvline(0, color="0.7", linewidth=0.8)
    return _finish(fig, save_path)
