import numpy as np
import matplotlib.pyplot as plt
import pytest

from clean_ffnn import Dataset, Instance, Network
from clean_ffnn.plotting import plot_decision_boundary, plot_training_history


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def test_plot_training_history():
    np.random.seed(5)
    network = Network([2, 3, 2])
    dataset = Dataset([Instance([0.0, 1.0], [1.0, 0.0]), Instance([1.0, 0.0], [0.0, 1.0])])
    history = network.train(dataset, num_epochs=3, learning_rate=1.0, mini_batch_size=1, track_loss=True)
    fig = plot_training_history(history)
    assert len(fig.axes) == 2
    assert len(fig.axes[0].lines) == 1


def test_plot_training_history_without_loss():
    history = {'epoch': [0, 1], 'loss': [None, None], 'time_per_epoch': [0.1, 0.2]}
    fig = plot_training_history(history)
    assert len(fig.axes[0].lines) == 0


@pytest.mark.parametrize("output_size", [1, 2])
def test_plot_decision_boundary(output_size):
    np.random.seed(6)
    network = Network([2, 3, output_size])
    X = np.random.randn(10, 2)
    y_raw = (X[:, 0] > 0).astype(int)
    fig = plot_decision_boundary(X, y_raw, network, step=0.25)
    assert fig.axes[0].get_title() == "Decision Boundary"
