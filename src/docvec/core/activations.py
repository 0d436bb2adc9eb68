# activations.py
"""Scalar activation functions, vectorised over numpy input."""
from typing import Callable, Dict, Iterable

import numpy as np
import pandas as pd
from scipy.special import expit


def sigmoid(x):
    return expit(x)


def tanh(x):
    return np.tanh(x)


def relu(x):
    return np.maximum(0.0, x)


def leaky_relu(x, alpha: float = 0.01):
    x = np.asarray(x, dtype=np.float64)
    return np.where(x > 0, x, alpha * x)


def softplus(x):
    # log(1 + e^x) without overflow for large x
    return np.logaddexp(0.0, x)


def swish(x):
    return np.asarray(x, dtype=np.float64) * expit(x)


ACTIVATIONS: Dict[str, Callable] = {
    "sigmoid": sigmoid,
    "tanh": tanh,
    "relu": relu,
    "leaky_relu": leaky_relu,
    "softplus": softplus,
    "swish": swish,
}


def activation_table(xs: Iterable[float], names=None) -> pd.DataFrame:
    """Long-format table (x, activation, y) for plotting several functions together."""
    xs = np.asarray(list(xs), dtype=np.float64)
    names = list(names) if names is not None else list(ACTIVATIONS)
    frames = []
    for name in names:
        if name not in ACTIVATIONS:
            raise ValueError(f"unknown activation {name!r}")
        frames.append(pd.DataFrame({"x": xs, "activation": name, "y": ACTIVATIONS[name](xs)}))
    return pd.concat(frames, ignore_index=True)
