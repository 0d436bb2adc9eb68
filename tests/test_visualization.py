# tests/test_visualization.py
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from docvec.core.aggregator import Aggregator
from docvec.core.reducer import reduce_features
from docvec.experiments import visualization as viz
from docvec.models import EmbeddingLogRegEstimator


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def reduced(sentiment_table, sentiment_docs):
    return reduce_features(Aggregator(sentiment_table).transform(sentiment_docs), 2)


def test_boxplot_and_scatter(tmp_path):
    rng = np.random.default_rng(0)
    df = pd.DataFrame({"a": rng.normal(size=50), "b": rng.normal(size=50)})
    viz.boxplot_with_violin(df, "a", save_path=tmp_path / "box.png")
    viz.scatter(df, "a", "b", smooth="linear", save_path=tmp_path / "sc.png")
    fig = viz.scatter(df, "a", "b")
    assert fig.axes
    assert (tmp_path / "box.png").exists()
    assert (tmp_path / "sc.png").exists()


def test_explained_variance_plot(reduced, tmp_path):
    out = tmp_path / "plots" / "scree.png"
    fig = viz.plot_explained_variance(reduced, save_path=out)
    assert out.exists()
    assert len(fig.axes[0].patches) == 2
    viz.plot_explained_variance([0.6, 0.3])


def test_components_plot(reduced):
    fig = viz.plot_components(reduced)
    assert fig.axes[0].get_xlabel() == "PC1"
    with pytest.raises(ValueError):
        viz.plot_components(reduced, x=1, y=3)


def test_variable_importance_plot(sentiment_table, sentiment_docs, tmp_path):
    fm = Aggregator(sentiment_table).transform(sentiment_docs)
    vi = EmbeddingLogRegEstimator().fit(fm).variable_importance()
    viz.plot_variable_importance(vi, top_n=2, save_path=tmp_path / "vi.png")
    assert (tmp_path / "vi.png").exists()


def test_activation_plot(tmp_path):
    viz.plot_activations(save_path=tmp_path / "act.png")
    assert (tmp_path / "act.png").exists()


def test_scatter_lowess_smoother(tmp_path):
    rng = np.random.default_rng(1)
    x = np.linspace(0, 6, 60)
    df = pd.DataFrame({"a": x, "b": np.sin(x) + rng.normal(scale=0.1, size=60)})
    fig = viz.scatter(df, "a", "b", smooth="lowess", save_path=tmp_path / "lowess.png")
    assert (tmp_path / "lowess.png").exists()
    # scatter points plus the smoothing curve
    assert len(fig.axes[0].lines) == 1
    with pytest.raises(ValueError):
        viz.scatter(df, "a", "b", smooth="spline")
