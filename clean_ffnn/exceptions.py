"""Errors raised by the network, its data types and the dataset readers.

All of them derive from ValueError so callers that already guard numpy
shape or argument errors with ``except ValueError`` keep working.
"""


class NetworkInitializationError(ValueError):
    """Invalid layer sizes, inconsistent parameters or invalid SGD hyperparameters."""


class NoLabelError(ValueError):
    """Labels were requested from an instance that has none."""


class DimensionMismatchError(ValueError):
    """Two arrays that must agree in shape do not."""


class DatasetInitializationError(ValueError):
    """A dataset file or an evaluation input is malformed."""
