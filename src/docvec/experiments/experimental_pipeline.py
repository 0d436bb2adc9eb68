#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Experimental pipeline: word-vector document features + regularized logistic regression.

The pipeline coordinates:
1. Feature extraction (tokenize -> look up -> aggregate)
2. Optional principal-component reduction
3. Cross-validated grid search over the classifier
4. A final fit for variable importance
5. Results collection (JSON)
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from ..core.cross_validation import grid_search
from ..core.feature_matrix import Document
from ..core.lookup_table import VectorLookupTable
from ..models.models_registry import get_factory_and_grid
from ..pipeline import FeaturePipeline


class ExperimentalPipeline:
    """
    Runs one feature configuration end to end and keeps the results in ``self.results``.
    """

    def __init__(
        self,
        table: VectorLookupTable,
        params: Optional[Dict[str, Any]] = None,
        results_dir: str = "results",
    ):
        self.features = FeaturePipeline(table, params)
        self.params = self.features.params
        self.results_dir = Path(results_dir)
        self.results: Dict[str, Any] = {}
        self.estimator = None
        self.feature_matrix = None
        self.reduced = None

    def run(self, documents: List[Document]) -> Dict[str, Any]:
        logger.info("=" * 60)
        logger.info("STEP 1: Feature extraction")
        logger.info("=" * 60)
        self.feature_matrix, self.reduced = self.features.run(documents)
        data = self.reduced if self.reduced is not None else self.feature_matrix

        self.results["features"] = {
            "rows": self.feature_matrix.n_rows,
            "dim": self.feature_matrix.dim,
            "reduction": str(self.params["reduction"]),
        }
        if self.reduced is not None:
            self.results["pca"] = {
                "n_components": self.reduced.n_components,
                "explained_variance_ratio": self.reduced.explained_variance_ratio.tolist(),
            }

        logger.info("=" * 60)
        logger.info("STEP 2: Cross-validated grid search")
        logger.info("=" * 60)
        factory, grid = get_factory_and_grid(self.params["model"], fast=self.params["fast"])
        best, all_results = grid_search(
            data.vectors,
            data.labels,
            factory,
            grid,
            k=int(self.params["cv_folds"]),
            seed=int(self.params["seed"]),
        )
        self.results["grid_search"] = all_results
        self.results["best_params"] = best["params"]
        self.results["best_mean_f1"] = best["mean_f1"]
        logger.info("Best params: {} (F1={:.4f})", best["params"], best["mean_f1"])

        logger.info("=" * 60)
        logger.info("STEP 3: Final fit")
        logger.info("=" * 60)
        self.estimator = factory(best["params"]).fit(data)
        vi = self.estimator.variable_importance()
        self.results["variable_importance"] = vi.head(20).to_dict(orient="records")
        return self.results

    def save_results(self, name: Optional[str] = None) -> Path:
        self.results_dir.mkdir(parents=True, exist_ok=True)
        name = name or f"experiment_results_{datetime.now():%Y%m%d_%H%M%S}.json"
        out = self.results_dir / name
        out.write_text(json.dumps(self.results, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
        logger.info("Saved results: {}", out)
        return out
