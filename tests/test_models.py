# tests/test_models.py
import numpy as np
import pytest

from docvec.core.aggregator import Aggregator
from docvec.models import EmbeddingLogRegEstimator, get_factory_and_grid


def test_fit_predict_on_feature_matrix(sentiment_table, sentiment_docs):
    fm = Aggregator(sentiment_table).transform(sentiment_docs)
    est = EmbeddingLogRegEstimator(C=10.0).fit(fm)
    pred = est.predict(fm)
    assert len(pred) == fm.n_rows
    assert np.mean(pred == np.asarray(fm.labels)) == 1.0
    proba = est.predict_proba(fm)
    assert proba.shape == (fm.n_rows, 2)
    np.testing.assert_allclose(proba.sum(axis=1), 1.0)
    assert set(est.classes_) == {"neg", "pos"}


def test_variable_importance_sorted(sentiment_table, sentiment_docs):
    fm = Aggregator(sentiment_table).transform(sentiment_docs)
    vi = EmbeddingLogRegEstimator(C=10.0).fit(fm).variable_importance()
    assert list(vi.columns) == ["feature", "importance", "sign"]
    assert set(vi["feature"]) == set(fm.feature_columns)
    assert vi["importance"].is_monotonic_decreasing
    # the sentiment axis is the first dimension
    assert vi.loc[0, "feature"] == "wordembed_text_d1"


def test_penalties(sentiment_table, sentiment_docs):
    fm = Aggregator(sentiment_table).transform(sentiment_docs)
    for params in ({"penalty": "l1", "C": 1.0}, {"penalty": "elasticnet", "C": 1.0, "l1_ratio": 0.5}):
        est = EmbeddingLogRegEstimator(max_iter=5000, **params).fit(fm)
        assert len(est.predict(fm)) == fm.n_rows
    with pytest.raises(ValueError):
        EmbeddingLogRegEstimator(penalty="l3").fit(fm)


def test_plain_arrays_and_errors():
    X = np.array([[0.0, 1.0], [1.0, 0.0], [0.1, 0.9], [0.9, 0.1]])
    est = EmbeddingLogRegEstimator()
    with pytest.raises(RuntimeError):
        est.predict(X)
    with pytest.raises(ValueError):
        est.fit(X, None)
    with pytest.raises(ValueError):
        est.fit(X, [1, 1, 1, 1])
    est.fit(X, [0, 1, 0, 1])
    assert list(est.variable_importance()["feature"]) != []
    assert set(est.variable_importance()["feature"]) == {"x1", "x2"}


def test_registry():
    factory, grid = get_factory_and_grid("lr", fast=True)
    assert len(grid) == 3
    assert isinstance(factory(grid[0]), EmbeddingLogRegEstimator)
    _, full = get_factory_and_grid("logreg", fast=False)
    assert {g["penalty"] for g in full} == {"l1", "l2", "elasticnet"}
    with pytest.raises(ValueError):
        get_factory_and_grid("bilstm")
