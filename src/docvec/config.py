# config.py
"""Default pipeline parameters. Callers override a subset with a plain dict."""
from typing import Any, Dict, Optional

DEFAULT_PIPELINE_PARAMS: Dict[str, Any] = {
    # tokenizer
    "lowercase": True,
    "strip_punctuation": True,
    "strip_numeric": False,
    "stopwords": None,
    # aggregator
    "reduction": "sum",
    "keep_tokens": False,
    "n_jobs": 1,
    # reducer; None skips PCA
    "pca_components": None,
    # evaluation
    "model": "lr",
    "cv_folds": 5,
    "fast": True,
    "seed": 42,
}

TOKENIZER_KEYS = ("lowercase", "strip_punctuation", "strip_numeric", "stopwords")


def resolve_params(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Defaults merged with ``overrides``; unknown keys are rejected."""
    params = dict(DEFAULT_PIPELINE_PARAMS)
    if not overrides:
        return params
    unknown = sorted(set(overrides) - set(params))
    if unknown:
        raise ValueError(f"unknown pipeline parameters: {unknown}")
    params.update(overrides)

    k = params["pca_components"]
    if k is not None and int(k) < 1:
        raise ValueError("pca_components must be >= 1 or None")
    if int(params["cv_folds"]) < 2:
        raise ValueError("cv_folds must be >= 2")
    return params


def tokenizer_params(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: params[k] for k in TOKENIZER_KEYS}
