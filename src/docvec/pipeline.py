# pipeline.py
"""
Entry point: documents -> tokens -> aggregate vectors -> optional PCA.

Each stage takes its predecessor's output plus read-only configuration and
returns a new value. The only shared state is the lookup table, passed in
explicitly.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple

from loguru import logger

from .config import resolve_params, tokenizer_params
from .core.aggregator import Aggregator
from .core.feature_matrix import Document, FeatureMatrix, ReducedFeatureMatrix
from .core.lookup_table import VectorLookupTable
from .core.reducer import DimensionalityReducer
from .core.tokenizer import Tokenizer


class FeaturePipeline:
    def __init__(self, table: VectorLookupTable, params: Optional[Dict[str, Any]] = None):
        self.table = table
        self.params = resolve_params(params)
        self.tokenizer = Tokenizer(**tokenizer_params(self.params))
        self.aggregator = Aggregator(
            table,
            tokenizer=self.tokenizer,
            reduction=self.params["reduction"],
            keep_tokens=self.params["keep_tokens"],
            n_jobs=self.params["n_jobs"],
        )
        k = self.params["pca_components"]
        self.reducer = DimensionalityReducer(k, random_state=self.params["seed"]) if k else None

    def features(self, documents: Iterable[Document]) -> FeatureMatrix:
        return self.aggregator.transform(documents)

    def run(
        self, documents: Iterable[Document]
    ) -> Tuple[FeatureMatrix, Optional[ReducedFeatureMatrix]]:
        """Aggregate, then fit the reducer on the whole matrix when PCA is configured."""
        fm = self.features(documents)
        logger.info("[pipeline] feature matrix {} x {}", fm.n_rows, fm.dim)
        if self.reducer is None:
            return fm, None
        return fm, self.reducer.fit_transform(fm)


def build_features(
    documents: Iterable[Document],
    table: VectorLookupTable,
    params: Optional[Dict[str, Any]] = None,
) -> Tuple[FeatureMatrix, Optional[ReducedFeatureMatrix]]:
    return FeaturePipeline(table, params).run(documents)
