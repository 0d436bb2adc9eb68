# cross_validation.py
from typing import Any, Callable, Dict, List, Tuple
import random

import numpy as np
from loguru import logger

from .metrics import accuracy_score, f1_score


def stratified_kfold_indices(y, k: int, seed: int = 42) -> List[Tuple[List[int], List[int]]]:
    """(train, val) index lists for k folds, each label spread evenly over the folds."""
    if k < 2:
        raise ValueError("k must be >= 2")
    rng = random.Random(seed)
    # bucket indices by label
    buckets: Dict[Any, List[int]] = {}
    for i, yi in enumerate(y):
        buckets.setdefault(yi, []).append(i)
    if any(len(b) < k for b in buckets.values()):
        raise ValueError(f"every label needs at least k={k} rows")

    val_splits: List[List[int]] = [[] for _ in range(k)]
    for label in sorted(buckets, key=str):
        b = buckets[label]
        rng.shuffle(b)
        n = len(b)
        size = n // k
        for j in range(k):
            lo = j * size
            hi = n if j == k - 1 else (j + 1) * size
            val_splits[j].extend(b[lo:hi])

    all_idx = set(range(len(y)))
    out = []
    for j in range(k):
        val_idx = sorted(val_splits[j])
        train_idx = sorted(all_idx - set(val_idx))
        out.append((train_idx, val_idx))
    return out


def cross_validate(
    X,
    y,
    estimator_factory: Callable[[Dict[str, Any]], Any],
    params: Dict[str, Any],
    k: int = 5,
    seed: int = 42,
) -> Dict[str, Any]:
    """Fit a fresh estimator per fold and score it on the held-out rows (macro F1)."""
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(list(y))
    folds = stratified_kfold_indices(y.tolist(), k, seed)

    fold_scores = []
    for fi, (tr, va) in enumerate(folds, 1):
        est = estimator_factory(params)
        est.fit(X[tr], y[tr])
        pred = est.predict(X[va])
        f1 = f1_score(y[va], pred, average="macro")
        acc = accuracy_score(y[va], pred)
        fold_scores.append({"f1": f1, "accuracy": acc})
        logger.info("[cv] fold {}/{}  F1={:.4f}  Acc={:.4f}", fi, k, f1, acc)

    f1s = [s["f1"] for s in fold_scores]
    res = {
        "params": params,
        "fold_scores": fold_scores,
        "mean_f1": float(np.mean(f1s)),
        "std_f1": float(np.std(f1s)),
        "mean_accuracy": float(np.mean([s["accuracy"] for s in fold_scores])),
    }
    logger.info("[cv] mean F1: {:.4f} ± {:.4f}", res["mean_f1"], res["std_f1"])
    return res


def grid_search(X, y, estimator_factory, param_grid: List[Dict[str, Any]], k: int = 5, seed: int = 42):
    """Cross-validate every parameter set; return (best_result, all_results)."""
    if not param_grid:
        raise ValueError("param_grid is empty")
    results = []
    for pi, p in enumerate(param_grid, 1):
        logger.info("[cv] [{}/{}] params={}", pi, len(param_grid), p)
        results.append(cross_validate(X, y, estimator_factory, p, k, seed))
    best = max(results, key=lambda r: r["mean_f1"])
    return best, results
