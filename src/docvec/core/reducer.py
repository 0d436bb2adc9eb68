# reducer.py
"""
Standardize aggregate features and project them onto principal components.

The projection itself is sklearn's PCA; this module owns the column checks,
the standardization and the row/label bookkeeping around it.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger
from sklearn.decomposition import PCA

from .errors import DegenerateColumn, EmptyInput
from .feature_matrix import FeatureMatrix, ReducedFeatureMatrix


def standardize(
    matrix: np.ndarray, columns: Optional[Sequence[str]] = None
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Centre each column and divide by its sample standard deviation.

    Returns ``(scaled, means, stds)``. Raises ``DegenerateColumn`` for the
    first column whose standard deviation is zero (up to rounding) or undefined.
    """
    X = np.asarray(matrix, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError(f"expected a 2-d matrix, got shape {X.shape}")
    if X.shape[0] == 0:
        raise EmptyInput("feature matrix")
    if X.shape[0] < 2:
        raise DegenerateColumn(
            columns[0] if columns else 0, "at least two rows are needed"
        )

    means = X.mean(axis=0)
    stds = X.std(axis=0, ddof=1)
    # rounding leaves a constant column with a tiny nonzero std; scale the cutoff to the column
    tol = np.finfo(np.float64).eps * np.sqrt(X.shape[0]) * np.maximum(1.0, np.abs(X).max(axis=0))
    bad = np.flatnonzero(~np.isfinite(stds) | (stds <= tol))
    if bad.size:
        j = int(bad[0])
        raise DegenerateColumn(columns[j] if columns else j)
    return (X - means) / stds, means, stds


class DimensionalityReducer:
    """Standardize + PCA with ``n_components`` output columns."""

    def __init__(self, n_components: int, random_state: int = 42):
        if int(n_components) < 1:
            raise ValueError("n_components must be >= 1")
        self.n_components = int(n_components)
        self.random_state = random_state
        self.means_: Optional[np.ndarray] = None
        self.stds_: Optional[np.ndarray] = None
        self._pca: Optional[PCA] = None

    @staticmethod
    def _unpack(fm: Union[FeatureMatrix, np.ndarray]):
        if isinstance(fm, FeatureMatrix):
            return fm.vectors, fm.labels, fm.feature_columns
        X = np.asarray(fm, dtype=np.float64)
        return X, (None,) * X.shape[0], None

    def fit_transform(self, fm: Union[FeatureMatrix, np.ndarray]) -> ReducedFeatureMatrix:
        X, labels, columns = self._unpack(fm)
        if X.ndim != 2 or X.shape[0] == 0:
            raise EmptyInput("feature matrix")
        n, d = X.shape
        k = self.n_components
        if k > d:
            raise ValueError(f"n_components={k} exceeds feature dimension {d}")
        if k > n:
            raise ValueError(f"n_components={k} exceeds row count {n}")

        scaled, self.means_, self.stds_ = standardize(X, columns)
        self._pca = PCA(n_components=k, svd_solver="full", random_state=self.random_state)
        comps = self._pca.fit_transform(scaled)
        ratio = self._pca.explained_variance_ratio_
        logger.info(
            "[pca] {} x {} -> {} components, cumulative explained variance {:.3f}",
            n, d, k, float(ratio.sum()),
        )
        return ReducedFeatureMatrix(components=comps, labels=labels, explained_variance_ratio=ratio)

    def transform(self, fm: Union[FeatureMatrix, np.ndarray]) -> ReducedFeatureMatrix:
        """Project new rows with the standardization and axes learned in ``fit_transform``."""
        if self._pca is None:
            raise RuntimeError("DimensionalityReducer is not fitted")
        X, labels, _ = self._unpack(fm)
        if X.ndim != 2 or X.shape[0] == 0:
            raise EmptyInput("feature matrix")
        if X.shape[1] != self.means_.shape[0]:
            raise ValueError(
                f"expected {self.means_.shape[0]} feature columns, got {X.shape[1]}"
            )
        comps = self._pca.transform((X - self.means_) / self.stds_)
        return ReducedFeatureMatrix(
            components=comps,
            labels=labels,
            explained_variance_ratio=self._pca.explained_variance_ratio_,
        )

    @property
    def explained_variance_ratio_(self) -> np.ndarray:
        if self._pca is None:
            raise RuntimeError("DimensionalityReducer is not fitted")
        return self._pca.explained_variance_ratio_

    @property
    def loadings_(self) -> np.ndarray:
        """Component axes, shape (K, D), in standardized feature space."""
        if self._pca is None:
            raise RuntimeError("DimensionalityReducer is not fitted")
        return self._pca.components_


def reduce_features(fm: FeatureMatrix, n_components: int) -> ReducedFeatureMatrix:
    return DimensionalityReducer(n_components).fit_transform(fm)
