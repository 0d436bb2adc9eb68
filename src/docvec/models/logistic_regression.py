# logistic_regression.py
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from loguru import logger
from sklearn.linear_model import LogisticRegression

from ..core.feature_matrix import FeatureMatrix, ReducedFeatureMatrix


def _split_xy(X, y):
    """Accept a (Reduced)FeatureMatrix with its labels, or plain arrays."""
    if isinstance(X, (FeatureMatrix, ReducedFeatureMatrix)):
        names = X.feature_columns
        if y is None:
            y = X.labels
        X = X.vectors
    else:
        X = np.asarray(X, dtype=np.float64)
        names = [f"x{j + 1}" for j in range(X.shape[1])]
    return X, (None if y is None else np.asarray(list(y))), names


class EmbeddingLogRegEstimator:
    """Regularized logistic regression over document feature vectors.

    params:
      - penalty:  "l2" (default), "l1" or "elasticnet"
      - C:        inverse regularization strength
      - l1_ratio: elastic-net mixing, only with penalty="elasticnet"
      - solver, max_iter: passed to sklearn
    """

    def __init__(self, **params: Dict[str, Any]):
        self.p = params
        self.model: Optional[LogisticRegression] = None
        self.feature_names_: List[str] = []

    def _build(self) -> LogisticRegression:
        penalty = self.p.get("penalty", "l2")
        if penalty not in {"l1", "l2", "elasticnet"}:
            raise ValueError(f"unsupported penalty: {penalty}")
        # lbfgs only supports l2; saga covers l1 and elastic-net for any number of classes
        default_solver = "lbfgs" if penalty == "l2" else "saga"
        kwargs = dict(
            penalty=penalty,
            C=self.p.get("C", 1.0),
            solver=self.p.get("solver", default_solver),
            max_iter=self.p.get("max_iter", 1000),
        )
        if penalty == "elasticnet":
            kwargs["l1_ratio"] = self.p.get("l1_ratio", 0.5)
        return LogisticRegression(**kwargs)

    def fit(self, X, y=None):
        X, y, names = _split_xy(X, y)
        if y is None:
            raise ValueError("labels are required to fit")
        if len(set(y.tolist())) < 2:
            raise ValueError("need at least two label levels to fit")
        self.model = self._build()
        self.model.fit(X, y)
        self.feature_names_ = names
        logger.debug("[LR] fitted on {} rows x {} features, classes={}", X.shape[0], X.shape[1], list(self.model.classes_))
        return self

    def _check(self):
        if self.model is None:
            raise RuntimeError("estimator is not fitted")

    def predict(self, X):
        self._check()
        X, _, _ = _split_xy(X, None)
        return self.model.predict(X)

    def predict_proba(self, X):
        self._check()
        X, _, _ = _split_xy(X, None)
        return self.model.predict_proba(X)

    @property
    def classes_(self):
        self._check()
        return self.model.classes_

    def variable_importance(self) -> pd.DataFrame:
        """|coefficient| per feature, largest first; ``sign`` is from the first row of coef_."""
        self._check()
        coef = np.atleast_2d(self.model.coef_)
        df = pd.DataFrame(
            {
                "feature": self.feature_names_,
                "importance": np.abs(coef).mean(axis=0),
                "sign": np.where(coef[0] >= 0, "POS", "NEG"),
            }
        )
        return df.sort_values("importance", ascending=False, kind="mergesort").reset_index(drop=True)


def create_lr_factory():
    def factory(params: Dict[str, Any]):
        return EmbeddingLogRegEstimator(**params)

    return factory
