import numpy as np
from typing import Dict, List, Optional
import logging

import matplotlib.pyplot as plt


def plot_training_history(history: Dict[str, List], title: str = "Training History") -> plt.Figure:
    """Plots the per-epoch loss (when tracked) and time of a training history.

    Args:
        history: The dictionary returned by Network.train.
        title: Figure title.

    Returns:
        The created figure.
    """
    fig = plt.figure(title, figsize=(12, 5))

    plt.subplot(1, 2, 1)
    losses = [loss for loss in history['loss'] if loss is not None]
    if losses:
        epochs = [epoch for epoch, loss in zip(history['epoch'], history['loss']) if loss is not None]
        plt.plot(epochs, losses, label='Training Loss')
        plt.ylim(bottom=0)
        plt.legend()
    else:
        logging.info("No loss recorded in the training history; train with track_loss=True to plot it.")
    plt.xlabel('Epoch')
    plt.ylabel('Loss')
    plt.title('Training Loss')
    plt.grid(True, alpha=0.3)

    plt.subplot(1, 2, 2)
    plt.plot(history['epoch'], history['time_per_epoch'], label='Time per Epoch (s)')
    plt.xlabel('Epoch')
    plt.ylabel('Time (seconds)')
    plt.title('Epoch Training Time')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.ylim(bottom=0)

    plt.tight_layout()
    return fig


def plot_decision_boundary(X: np.ndarray, y_raw: np.ndarray, network, step: float = 0.02,
                           title: Optional[str] = "Decision Boundary") -> plt.Figure:
    """Plots the decision boundary of a trained network over 2D inputs.

    Args:
        X: Input features, shape (n_samples, 2). Used for the axis limits and
           the scatter points.
        y_raw: Integer class labels of the inputs, shape (n_samples,).
        network: Trained Network with an input layer of size 2.
        step: Step size of the mesh.
        title: Figure title.

    Returns:
        The created figure.
    """
    # Define bounds of the plot, based on data range
    x_min, x_max = X[:, 0].min() - 0.5, X[:, 0].max() + 0.5
    y_min, y_max = X[:, 1].min() - 0.5, X[:, 1].max() + 0.5
    xx, yy = np.meshgrid(np.arange(x_min, x_max, step),
                         np.arange(y_min, y_max, step))

    # Predict classifications for each point in mesh grid
    mesh_points = np.c_[xx.ravel(), yy.ravel()]
    Z_probs = network.predict(mesh_points)

    if Z_probs.shape[1] > 1:
        Z = np.argmax(Z_probs, axis=1)
    else:
        Z = (Z_probs >= 0.5).astype(int).ravel()
    Z = Z.reshape(xx.shape)

    fig = plt.figure(title, figsize=(10, 8))
    cmap = plt.cm.Spectral
    plt.contourf(xx, yy, Z, cmap=cmap, alpha=0.8)
    plt.scatter(X[:, 0], X[:, 1], c=y_raw, cmap=cmap, edgecolor='k', s=35)
    plt.xlabel("Feature 1")
    plt.ylabel("Feature 2")
    plt.title(title)
    plt.xlim(xx.min(), xx.max())
    plt.ylim(yy.min(), yy.max())
    plt.grid(True, alpha=0.2)
    return fig
