# models_registry.py
from typing import Tuple

from .logistic_regression import create_lr_factory


def get_factory_and_grid(model: str, fast: bool = True) -> Tuple:
    """
    Return (factory, param_grid). factory: params(dict) -> estimator,
    param_grid: List[dict]
    """
    model = model.lower()

    if model in {"lr", "logreg", "logistic"}:
        factory = create_lr_factory()
        if fast:
            grid = [
                {"penalty": "l2", "C": c, "max_iter": 500}
                for c in (0.1, 1.0, 10.0)
            ]
        else:
            grid = [
                {"penalty": pen, "C": c, "max_iter": 5000}
                for c in (0.01, 0.1, 1.0, 10.0)
                for pen in ("l1", "l2")
            ] + [
                {"penalty": "elasticnet", "C": c, "l1_ratio": r, "max_iter": 5000}
                for c in (0.1, 1.0)
                for r in (0.25, 0.5, 0.75)
            ]
        return factory, grid

    raise ValueError(f"Unknown model: {model}")
