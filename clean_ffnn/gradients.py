import numpy as np
from typing import List


class ParameterGradients:
    """
    Output of one backpropagation pass: the derivative of the cost of a single
    instance with respect to every layer's weights and biases.

    Attributes:
        weight_gradients: One (layer_size[i+1], layer_size[i]) matrix per layer.
        bias_gradients: One (layer_size[i+1], 1) vector per layer.
    """

    def __init__(self, weight_gradients: List[np.ndarray], bias_gradients: List[np.ndarray]):
        if len(weight_gradients) != len(bias_gradients):
            raise ValueError(f"Got {len(weight_gradients)} weight gradients "
                             f"but {len(bias_gradients)} bias gradients.")
        self.weight_gradients = weight_gradients
        self.bias_gradients = bias_gradients

    def __len__(self) -> int:
        return len(self.weight_gradients)

    def norm(self) -> float:
        """L2 norm over every weight and bias gradient entry."""
        total = sum(np.sum(g ** 2) for g in self.weight_gradients)
        total += sum(np.sum(g ** 2) for g in self.bias_gradients)
        return float(np.sqrt(total))
