# Models fitted on document feature matrices

from .logistic_regression import EmbeddingLogRegEstimator, create_lr_factory
from .models_registry import get_factory_and_grid

__all__ = [
    "EmbeddingLogRegEstimator",
    "create_lr_factory",
    "get_factory_and_grid",
]
