# feature_matrix.py
"""Value types passed between pipeline stages. All of them are immutable."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
import pandas as pd

DEFAULT_PREFIX = "wordembed_text_d"
COMPONENT_PREFIX = "PC"


def _frozen(a, ndim: int) -> np.ndarray:
    a = np.array(a, dtype=np.float64, copy=True)
    if a.ndim != ndim:
        raise ValueError(f"expected a {ndim}-d array, got shape {a.shape}")
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class Document:
    text: str
    label: Any = None


@dataclass(frozen=True, eq=False)
class FeatureMatrix:
    """One aggregate vector per document, in input order."""

    vectors: np.ndarray
    labels: Tuple[Any, ...]
    tokens: Optional[Tuple[Tuple[str, ...], ...]] = None
    prefix: str = DEFAULT_PREFIX

    def __post_init__(self):
        object.__setattr__(self, "vectors", _frozen(self.vectors, 2))
        object.__setattr__(self, "labels", tuple(self.labels))
        if len(self.labels) != self.vectors.shape[0]:
            raise ValueError(
                f"{len(self.labels)} labels for {self.vectors.shape[0]} rows"
            )
        if self.tokens is not None:
            toks = tuple(tuple(t) for t in self.tokens)
            if len(toks) != self.vectors.shape[0]:
                raise ValueError(f"{len(toks)} token rows for {self.vectors.shape[0]} rows")
            object.__setattr__(self, "tokens", toks)

    @property
    def n_rows(self) -> int:
        return self.vectors.shape[0]

    @property
    def dim(self) -> int:
        return self.vectors.shape[1]

    @property
    def feature_columns(self):
        return [f"{self.prefix}{j + 1}" for j in range(self.dim)]

    def __len__(self) -> int:
        return self.n_rows

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(self.vectors, columns=self.feature_columns)
        df.insert(0, "label", list(self.labels))
        if self.tokens is not None:
            df["tokens"] = [list(t) for t in self.tokens]
        return df


@dataclass(frozen=True, eq=False)
class ReducedFeatureMatrix:
    """Documents projected onto K principal components."""

    components: np.ndarray
    labels: Tuple[Any, ...]
    explained_variance_ratio: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "components", _frozen(self.components, 2))
        object.__setattr__(self, "labels", tuple(self.labels))
        object.__setattr__(
            self, "explained_variance_ratio", _frozen(self.explained_variance_ratio, 1)
        )
        if len(self.labels) != self.components.shape[0]:
            raise ValueError(
                f"{len(self.labels)} labels for {self.components.shape[0]} rows"
            )
        if self.explained_variance_ratio.shape[0] != self.components.shape[1]:
            raise ValueError("one explained-variance ratio per component is required")

    @property
    def n_rows(self) -> int:
        return self.components.shape[0]

    @property
    def n_components(self) -> int:
        return self.components.shape[1]

    @property
    def feature_columns(self):
        return [f"{COMPONENT_PREFIX}{j + 1}" for j in range(self.n_components)]

    # so models can consume either matrix type
    @property
    def vectors(self) -> np.ndarray:
        return self.components

    def __len__(self) -> int:
        return self.n_rows

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(self.components, columns=self.feature_columns)
        df.insert(0, "label", list(self.labels))
        df.attrs["explained_variance_ratio"] = self.explained_variance_ratio.tolist()
        return df
