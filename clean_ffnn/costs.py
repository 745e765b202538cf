import numpy as np
from enum import Enum
from typing import Callable, Dict, Tuple, Union

from .activations import ActivationFunction
from .exceptions import DimensionMismatchError

# --- Cost Functions ---

CostType = Callable[[np.ndarray, np.ndarray], float]
DeltaType = Callable[[np.ndarray, np.ndarray, ActivationFunction], np.ndarray]


def _check_shapes(name: str, activations: np.ndarray, labels: np.ndarray):
    if activations.shape != labels.shape:
        raise DimensionMismatchError(
            f"{name}: Output shape {activations.shape} must match target shape {labels.shape}"
        )


def quadratic_cost(activations: np.ndarray, labels: np.ndarray) -> float:
    """
    Computes the quadratic cost of one instance.

    Cost = 0.5 * Σ(a_i - y_i)^2

    Args:
        activations: Output layer activations, shape (output_size, 1).
        labels: Target labels, same shape.

    Returns:
        The quadratic cost.
    """
    _check_shapes("Quadratic cost", activations, labels)
    return float(0.5 * np.sum((activations - labels) ** 2))


def quadratic_delta(activations: np.ndarray, labels: np.ndarray,
                    activation_fn: ActivationFunction) -> np.ndarray:
    """
    Computes the output layer error of the quadratic cost w.r.t. the pre-activation.

    delta = (a - y) * f'(a)

    Args:
        activations: Output layer activations, shape (output_size, 1).
        labels: Target labels, same shape.
        activation_fn: Activation function used by the output layer.

    Returns:
        The error signal delta, same shape as `activations`.
    """
    _check_shapes("Quadratic cost", activations, labels)
    return (activations - labels) * activation_fn.derivative(activations)


def cross_entropy_cost(activations: np.ndarray, labels: np.ndarray) -> float:
    """
    Computes the cross-entropy cost of one instance (sigmoid outputs).

    Cost = - Σ [ y * log(a) + (1 - y) * log(1 - a) ]
    """
    _check_shapes("Cross-entropy cost", activations, labels)
    # Clip activations to avoid log(0)
    epsilon = 1e-15
    clipped = np.clip(activations, epsilon, 1.0 - epsilon)
    return float(-np.sum(labels * np.log(clipped) + (1 - labels) * np.log(1 - clipped)))


def cross_entropy_delta(activations: np.ndarray, labels: np.ndarray,
                        activation_fn: ActivationFunction) -> np.ndarray:
    """
    Computes the output layer error of the cross-entropy cost w.r.t. the pre-activation.

    delta = (a - y)

    The activation derivative does not appear: with a sigmoid output layer it
    cancels analytically against the derivative of the cost. Paired with any
    other activation (tanh) this delta is unscaled and does not follow the
    true gradient; the network warns about that pairing but keeps it.
    """
    _check_shapes("Cross-entropy cost", activations, labels)
    return activations - labels


# Dictionary mapping cost names to (cost, delta) functions
COST_FUNCTIONS: Dict[str, Tuple[CostType, DeltaType]] = {
    'quadratic': (quadratic_cost, quadratic_delta),
    'cross_entropy': (cross_entropy_cost, cross_entropy_delta),
}


class CostFunction(Enum):
    """Cost functions supported by the network."""

    QUADRATIC = 'quadratic'
    CROSS_ENTROPY = 'cross_entropy'

    def cost(self, activations: np.ndarray, labels: np.ndarray) -> float:
        return COST_FUNCTIONS[self.value][0](activations, labels)

    def derivative(self, activations: np.ndarray, labels: np.ndarray,
                   activation_fn: ActivationFunction) -> np.ndarray:
        return COST_FUNCTIONS[self.value][1](activations, labels, activation_fn)


def get_cost(name: Union[str, CostFunction]) -> CostFunction:
    """Resolve a cost function by name (case-insensitive) or member.

    Raises:
        ValueError: If the cost function name is not recognized.
    """
    if isinstance(name, CostFunction):
        return name
    name_lower = str(name).lower()
    if name_lower not in COST_FUNCTIONS:
        raise ValueError(
            f"Unknown cost function '{name}'. "
            f"Available functions: {list(COST_FUNCTIONS.keys())}"
        )
    return CostFunction(name_lower)
