import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from clean_ffnn import Dataset, Instance, Network


@pytest.fixture
def fixed_parameters():
    """Weights and biases of a [3, 2, 4] network."""
    weights = [
        np.array([[4.0, 3.0, -2.5],
                  [1.5, 0.0, -1.0]]),
        np.array([[1.0, -2.5],
                  [2.0, 3.5],
                  [0.0, 1.0],
                  [-2.0, 1.5]]),
    ]
    biases = [
        np.array([[1.0], [-0.5]]),
        np.array([[-3.0], [1.5], [0.0], [-1.5]]),
    ]
    return weights, biases


@pytest.fixture
def fixed_network(fixed_parameters):
    weights, biases = fixed_parameters
    return Network([3, 2, 4], 'quadratic', 'sigmoid', weights=weights, biases=biases)


@pytest.fixture
def dummy_dataset():
    return Dataset([
        Instance([1.0, -0.5, 3.0], [0.1, 0.8, 0.05, 0.05]),
        Instance([0.0, 7.0, -0.5], [0.0, 0.0, 0.1, 0.9]),
        Instance([1.5, -1.0, 5.0], [0.0, 0.9, 0.1, 0.0]),
        Instance([0.0, 6.0, 0.0], [0.0, 0.1, 0.0, 0.9]),
    ])
