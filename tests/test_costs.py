import numpy as np
import pytest

from clean_ffnn.activations import ActivationFunction
from clean_ffnn.costs import CostFunction, get_cost
from clean_ffnn.exceptions import DimensionMismatchError


def test_quadratic_derivative_zero_when_prediction_equals_target():
    a = np.array([[0.2], [0.7], [0.1]])
    for activation in ActivationFunction:
        delta = CostFunction.QUADRATIC.derivative(a, a.copy(), activation)
        np.testing.assert_array_equal(delta, np.zeros((3, 1)))


def test_quadratic_derivative_scales_by_activation_slope():
    a = np.array([[3.5], [-1.5]])
    y = np.array([[2.0], [1.0]])
    delta = CostFunction.QUADRATIC.derivative(a, y, ActivationFunction.SIGMOID)
    np.testing.assert_allclose(delta, [[-13.125], [9.375]])


def test_cross_entropy_derivative_ignores_activation():
    a = np.array([[0.9], [0.2]])
    y = np.array([[1.0], [0.0]])
    for activation in ActivationFunction:
        np.testing.assert_allclose(CostFunction.CROSS_ENTROPY.derivative(a, y, activation), [[-0.1], [0.2]])


def test_derivative_shape_mismatch():
    with pytest.raises(DimensionMismatchError):
        CostFunction.QUADRATIC.derivative(np.zeros((3, 1)), np.zeros((2, 1)), ActivationFunction.SIGMOID)
    with pytest.raises(DimensionMismatchError):
        CostFunction.CROSS_ENTROPY.derivative(np.zeros((3, 1)), np.zeros((1, 3)), ActivationFunction.SIGMOID)


def test_cost_values():
    a = np.array([[0.5], [0.5]])
    y = np.array([[1.0], [0.0]])
    assert CostFunction.QUADRATIC.cost(a, y) == pytest.approx(0.25)
    assert CostFunction.CROSS_ENTROPY.cost(a, y) == pytest.approx(2 * np.log(2))
    assert CostFunction.CROSS_ENTROPY.cost(y, y) == pytest.approx(0.0, abs=1e-12)


def test_get_cost():
    assert get_cost('Cross_Entropy') is CostFunction.CROSS_ENTROPY
    assert get_cost(CostFunction.QUADRATIC) is CostFunction.QUADRATIC
    with pytest.raises(ValueError, match="Unknown cost function"):
        get_cost('hinge')
