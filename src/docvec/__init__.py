"""
Document feature pipeline over pretrained word vectors.

Raw texts are tokenized, each token is looked up in a fixed-dimension vector
table, the matched vectors of a document are reduced to one vector (sum, mean,
max or min), and the resulting matrix can be standardized and projected onto
principal components before a regularized logistic regression is fitted.

Key modules:
- core.tokenizer / core.lookup_table / core.aggregator / core.reducer: the pipeline
- core.metrics, core.cross_validation: evaluation
- models: regularized logistic regression
- experiments: orchestration and plots
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .pipeline import FeaturePipeline, build_features

__version__ = "0.1.0"

__all__ = list(_core_all) + ["FeaturePipeline", "build_features"]
