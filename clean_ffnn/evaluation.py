"""Evaluation metrics computed from network predictions and gold standard labels."""
import numpy as np
from typing import List, Tuple
import logging

from sklearn.metrics import accuracy_score
from sklearn.preprocessing import normalize

from .dataset import Dataset
from .exceptions import DatasetInitializationError, DimensionMismatchError


def _stack(predictions: List[np.ndarray], golds: List[np.ndarray]) -> Tuple[np.ndarray, np.ndarray]:
    """Checks the pairs and stacks them as (num_samples, output_dim) matrices."""
    if len(predictions) < 1 or len(predictions) != len(golds):
        raise DatasetInitializationError(
            f"Predictions and gold standard labels are not valid: "
            f"{len(predictions)} predictions, {len(golds)} golds")
    for i, (pred, gold) in enumerate(zip(predictions, golds)):
        if np.shape(pred) != np.shape(gold):
            raise DimensionMismatchError(
                f"Prediction {i} has shape {np.shape(pred)}, gold label has shape {np.shape(gold)}")
    P = np.vstack([np.ravel(pred) for pred in predictions])
    G = np.vstack([np.ravel(gold) for gold in golds])
    return P, G


def predict_dataset(network, dataset: Dataset) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """
    Feeds forward every labelled instance of the dataset.

    Args:
        network: A trained Network.
        dataset: Instances to predict; unlabelled ones are skipped.

    Returns:
        Tuple of (predictions, gold labels), aligned by position.
    """
    predictions = []
    golds = []
    for instance in dataset:
        if instance.is_labelled():
            predictions.append(network.feed_forward(instance.features))
            golds.append(instance.labels)
    logging.debug(f"Predicted {len(predictions)} of {len(dataset)} instances")
    return predictions, golds


def accuracy(predictions: List[np.ndarray], golds: List[np.ndarray]) -> float:
    """
    Fraction of predictions whose maximum entry is at the same index as the
    maximum entry of the gold label.

    Raises:
        DatasetInitializationError: If the lists are empty or differ in length.
    """
    P, G = _stack(predictions, golds)
    return float(accuracy_score(np.argmax(G, axis=1), np.argmax(P, axis=1)))


def average_cosine(predictions: List[np.ndarray], golds: List[np.ndarray]) -> float:
    """
    Average cosine similarity between each prediction and its gold label.

    Pairs where either vector is all zeros have no defined cosine and are
    left out of the average. Returns 0.0 if no pair qualifies.

    Raises:
        DatasetInitializationError: If the lists are empty or differ in length.
    """
    P, G = _stack(predictions, golds)
    valid = (np.linalg.norm(P, axis=1) > 0) & (np.linalg.norm(G, axis=1) > 0)
    if not np.any(valid):
        logging.warning("No prediction/gold pair with non-zero norms, average cosine is 0.")
        return 0.0
    cosines = np.sum(normalize(P[valid]) * normalize(G[valid]), axis=1)
    return float(np.mean(cosines))
