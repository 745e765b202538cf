import numpy as np
from enum import Enum
from typing import Union
import logging


class Activation:
    """Base class for the activation function implementations."""

    def activate(self, zetas: np.ndarray) -> np.ndarray:
        """Compute the activation function value.

        Args:
            zetas: Pre-activation values (w * a_prev + b) of a layer.

        Returns:
            Activated output, same shape as `zetas`.
        """
        raise NotImplementedError

    def derivative(self, activations: np.ndarray) -> np.ndarray:
        """Compute the derivative of the activation function.
           Note: the derivative is expressed in terms of the *output* activations
           of the layer (a = f(z)), not of the pre-activation values.

        Args:
            activations: Activations of the layer.

        Returns:
            Derivative of the activation function, same shape as `activations`.
        """
        raise NotImplementedError


class Sigmoid(Activation):
    """Sigmoid activation function.

    Mathematical form:
        activate: f(z) = 1 / (1 + e^-z)
        derivative: f'(z) = a * (1 - a), where a = f(z)
    """

    def activate(self, zetas: np.ndarray) -> np.ndarray:
        """Compute sigmoid activation with clipping for numerical stability."""
        logging.debug(f"Sigmoid activate - input shape: {zetas.shape}")
        # Clip input to avoid overflow in exp(-z) for large negative z
        clipped = np.clip(zetas, -500, 500)
        result = 1.0 / (1.0 + np.exp(-clipped))
        # float64 rounds to exactly 1.0 for z > ~37, keep the output inside (0, 1)
        return np.clip(result, np.nextafter(0.0, 1.0), np.nextafter(1.0, 0.0))

    def derivative(self, activations: np.ndarray) -> np.ndarray:
        """Compute sigmoid derivative from the activations: a * (1 - a)"""
        return activations * (1.0 - activations)


class Tanh(Activation):
    """Hyperbolic tangent activation function.

    Mathematical form:
        activate: f(z) = tanh(z) = (e^z - e^-z)/(e^z + e^-z)
        derivative: f'(z) = 1 - a^2, where a = f(z)
    """

    def activate(self, zetas: np.ndarray) -> np.ndarray:
        """Compute tanh activation"""
        logging.debug(f"Tanh activate - input shape: {zetas.shape}")
        return np.tanh(zetas)

    def derivative(self, activations: np.ndarray) -> np.ndarray:
        """Compute tanh derivative from the activations: 1 - a^2 (element-wise)"""
        return 1.0 - activations * activations


# Dictionary mapping activation function names to their implementations
ACTIVATION_FUNCTIONS = {
    'sigmoid': Sigmoid(),
    'tanh': Tanh(),
}


class ActivationFunction(Enum):
    """Activation functions supported by the network.

    The set is closed: each member dispatches to the implementation registered
    under its value in ACTIVATION_FUNCTIONS.
    """

    SIGMOID = 'sigmoid'
    TANH = 'tanh'

    def activate(self, zetas: np.ndarray) -> np.ndarray:
        return ACTIVATION_FUNCTIONS[self.value].activate(zetas)

    def derivative(self, activations: np.ndarray) -> np.ndarray:
        return ACTIVATION_FUNCTIONS[self.value].derivative(activations)


def get_activation(name: Union[str, ActivationFunction]) -> ActivationFunction:
    """Resolve an activation function by name (case-insensitive) or member.

    Args:
        name: Name of the activation function ('sigmoid', 'tanh') or an
              ActivationFunction member.

    Returns:
        The matching ActivationFunction member.

    Raises:
        ValueError: If the activation function name is not recognized.
    """
    if isinstance(name, ActivationFunction):
        return name
    name_lower = str(name).lower()
    if name_lower not in ACTIVATION_FUNCTIONS:
        raise ValueError(
            f"Unknown activation function '{name}'. "
            f"Available functions: {list(ACTIVATION_FUNCTIONS.keys())}"
        )
    return ActivationFunction(name_lower)
