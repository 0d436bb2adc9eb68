# tests/test_cross_validation.py
import numpy as np
import pytest

from docvec.core.cross_validation import cross_validate, grid_search, stratified_kfold_indices
from docvec.models.logistic_regression import create_lr_factory


def _blobs(n_per_class=15, seed=0):
    rng = np.random.default_rng(seed)
    X = np.vstack([rng.normal(-3, 0.5, size=(n_per_class, 2)), rng.normal(3, 0.5, size=(n_per_class, 2))])
    y = ["neg"] * n_per_class + ["pos"] * n_per_class
    return X, y


def test_folds_partition_and_stratify():
    y = [0] * 10 + [1] * 10
    folds = stratified_kfold_indices(y, 5, seed=1)
    assert len(folds) == 5
    seen = []
    for train, val in folds:
        assert len(val) == 4
        assert sum(y[i] for i in val) == 2
        assert not set(train) & set(val)
        assert len(train) + len(val) == 20
        seen.extend(val)
    assert sorted(seen) == list(range(20))


def test_folds_are_seeded():
    y = [0, 1] * 10
    assert stratified_kfold_indices(y, 4, seed=3) == stratified_kfold_indices(y, 4, seed=3)


def test_folds_need_enough_rows():
    with pytest.raises(ValueError):
        stratified_kfold_indices([0, 0, 1], 2)
    with pytest.raises(ValueError):
        stratified_kfold_indices([0, 1] * 5, 1)


def test_cross_validate_separable_data():
    X, y = _blobs()
    res = cross_validate(X, y, create_lr_factory(), {"C": 1.0}, k=3)
    assert len(res["fold_scores"]) == 3
    assert res["mean_f1"] > 0.9
    assert res["params"] == {"C": 1.0}


def test_grid_search_picks_best():
    X, y = _blobs()
    grid = [{"C": 0.1}, {"C": 1.0}]
    best, results = grid_search(X, y, create_lr_factory(), grid, k=3)
    assert len(results) == 2
    assert best["mean_f1"] == max(r["mean_f1"] for r in results)
    with pytest.raises(ValueError):
        grid_search(X, y, create_lr_factory(), [], k=3)
