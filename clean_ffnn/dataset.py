import numpy as np
from typing import Iterator, List, Optional
import logging

from .exceptions import NoLabelError


def _as_column(values, name: str) -> np.ndarray:
    """Copy `values` into a read-only float column vector."""
    array = np.array(values, dtype=float)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    elif array.ndim != 2 or array.shape[1] != 1:
        raise ValueError(f"Instance {name} must be a 1D array or a column vector, got shape {array.shape}")
    array.setflags(write=False)
    return array


class Instance:
    """
    One input object of the network: a feature column vector and, for
    training or testing, a label column vector.

    For n-class classification the labels are typically a one-hot (n, 1)
    vector. Instances are immutable: both arrays are copied on construction
    and marked read-only.
    """

    def __init__(self, features: np.ndarray, labels: Optional[np.ndarray] = None):
        self._features = _as_column(features, "features")
        self._labels = _as_column(labels, "labels") if labels is not None else None

    @property
    def features(self) -> np.ndarray:
        return self._features

    @property
    def labels(self) -> np.ndarray:
        """
        The labels of the instance.

        Raises:
            NoLabelError: If the instance does not have a label.
        """
        if self._labels is None:
            raise NoLabelError("labels are not set")
        return self._labels

    def is_labelled(self) -> bool:
        return self._labels is not None

    def __repr__(self):
        labels_shape = self._labels.shape if self._labels is not None else None
        return f"Instance(features={self._features.shape}, labels={labels_shape})"


class Dataset:
    """
    Ordered collection of instances.

    Insertion order is kept until `shuffle` is called. Subsets share their
    Instance objects with the dataset they were taken from.
    """

    def __init__(self, instances: Optional[List[Instance]] = None):
        self._instances: List[Instance] = list(instances) if instances is not None else []

    @classmethod
    def random(cls, num_features: int, num_instances: int, num_labels: Optional[int] = None) -> 'Dataset':
        """
        Builds a dataset of instances with standard normal features (and labels,
        when `num_labels` is given). Useful for smoke tests and benchmarks.
        """
        instances = []
        for _ in range(num_instances):
            features = np.random.randn(num_features, 1)
            labels = np.random.randn(num_labels, 1) if num_labels is not None else None
            instances.append(Instance(features, labels))
        return cls(instances)

    def add(self, instance: Instance):
        self._instances.append(instance)

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[Instance]:
        return iter(self._instances)

    def __getitem__(self, i: int) -> Instance:
        return self._instances[i]

    @property
    def instances(self) -> List[Instance]:
        """A shallow copy of the instance list, in the current order."""
        return list(self._instances)

    def shuffle(self):
        """Shuffles the order of the instances in place."""
        np.random.shuffle(self._instances)

    def get_subset(self, start_idx: int, end_idx: int) -> 'Dataset':
        """
        Returns the instances in [start_idx, end_idx) as a new dataset.

        The Instance objects are shared, not copied.
        """
        return Dataset(self._instances[start_idx:end_idx])

    def remove_unlabelled_instances(self) -> int:
        """Drops every unlabelled instance. Returns how many were removed."""
        before = len(self._instances)
        self._instances = [instance for instance in self._instances if instance.is_labelled()]
        removed = before - len(self._instances)
        logging.info(f"Removed {removed} unlabelled instances")
        return removed

    def __repr__(self):
        return f"Dataset(size={len(self._instances)})"
