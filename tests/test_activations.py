# tests/test_activations.py
import numpy as np
import pytest

from docvec.core.activations import (
    ACTIVATIONS,
    activation_table,
    leaky_relu,
    relu,
    sigmoid,
    softplus,
    swish,
    tanh,
)


def test_scalar_values():
    assert sigmoid(0.0) == pytest.approx(0.5)
    assert tanh(0.0) == pytest.approx(0.0)
    assert relu(-2.0) == 0.0
    assert relu(3.0) == 3.0
    assert float(leaky_relu(-1.0)) == pytest.approx(-0.01)
    assert float(leaky_relu(-1.0, alpha=0.2)) == pytest.approx(-0.2)
    assert softplus(0.0) == pytest.approx(np.log(2.0))
    assert float(swish(0.0)) == pytest.approx(0.0)


def test_extremes_do_not_overflow():
    assert sigmoid(-1000.0) == pytest.approx(0.0)
    assert softplus(1000.0) == pytest.approx(1000.0)


def test_vectorised():
    xs = np.linspace(-3, 3, 7)
    np.testing.assert_allclose(relu(xs), np.clip(xs, 0, None))
    assert np.all(np.diff(sigmoid(xs)) > 0)


def test_activation_table():
    df = activation_table([-1.0, 0.0, 1.0])
    assert len(df) == 3 * len(ACTIVATIONS)
    assert list(df.columns) == ["x", "activation", "y"]
    sub = activation_table([0.0], names=["sigmoid"])
    assert sub.loc[0, "y"] == pytest.approx(0.5)
    with pytest.raises(ValueError):
        activation_table([0.0], names=["gelu?"])
