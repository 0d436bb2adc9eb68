# tests/conftest.py
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from docvec.core.feature_matrix import Document
from docvec.core.lookup_table import VectorLookupTable


@pytest.fixture
def toy_table() -> VectorLookupTable:
    """{"good": [1,0], "bad": [-1,0], "day": [0,1]}, D=2."""
    return VectorLookupTable([("good", [1, 0]), ("bad", [-1, 0]), ("day", [0, 1])])


@pytest.fixture
def sentiment_table() -> VectorLookupTable:
    return VectorLookupTable.from_dict(
        {
            "good": [1.0, 0.0, 0.1],
            "great": [0.9, 0.1, 0.0],
            "bad": [-1.0, 0.0, 0.2],
            "awful": [-0.9, 0.2, 0.0],
            "day": [0.0, 1.0, 0.0],
            "movie": [0.0, 0.5, 0.5],
        }
    )


@pytest.fixture
def sentiment_docs():
    pos = ["good day", "great movie", "good great movie", "great day", "good movie", "good great day"]
    neg = ["bad day", "awful movie", "bad awful movie", "awful day", "bad movie", "bad awful day"]
    docs = [Document(t, "pos") for t in pos] + [Document(t, "neg") for t in neg]
    # interleave so folds see both labels in order
    return [d for pair in zip(docs[:6], docs[6:]) for d in pair]


@pytest.fixture
def random_matrix():
    rng = np.random.default_rng(0)
    return rng.normal(size=(20, 5))
