import numpy as np
from typing import List, Dict, Optional, Union
import logging
import numbers
import time

from .activations import ActivationFunction, get_activation
from .costs import CostFunction, get_cost
from .dataset import Dataset, Instance
from .exceptions import DimensionMismatchError, NetworkInitializationError, NoLabelError
from .gradients import ParameterGradients

MAX_NUM_LAYERS = 10
MAX_LAYER_SIZE = 10000

# Gradient norms above this are reported before an update
LARGE_GRADIENT_NORM = 1e6


class Network:
    """
    A simple feedforward neural network trained by stochastic gradient descent.

    Weights and biases are stored per layer as numpy arrays:
        weights[i]: shape (layer_sizes[i+1], layer_sizes[i])
        biases[i]:  shape (layer_sizes[i+1], 1)

    Every layer uses the same activation function. Supported pairs:
        cost functions: quadratic, cross_entropy
        activation functions: sigmoid, tanh
    The cross-entropy error signal is only exact with sigmoid outputs.
    """

    MAX_NUM_LAYERS = MAX_NUM_LAYERS
    MAX_LAYER_SIZE = MAX_LAYER_SIZE

    def __init__(
        self,
        layer_sizes: List[int],
        cost_function: Union[str, CostFunction] = CostFunction.QUADRATIC,
        activation_function: Union[str, ActivationFunction] = ActivationFunction.SIGMOID,
        weights: Optional[List[np.ndarray]] = None,  # List of (layer_sizes[i+1], layer_sizes[i]) arrays
        biases: Optional[List[np.ndarray]] = None,   # List of (layer_sizes[i+1], 1) arrays
    ):
        """
        Initializes the neural network.

        Without `weights` and `biases` every parameter is drawn independently
        from a standard normal distribution. With them, the supplied matrices
        are validated against `layer_sizes` and copied.

        Args:
            layer_sizes: Number of neurons of each layer, input layer first.
                         Example: [784, 30, 10] for MNIST.
            cost_function: Cost function name or CostFunction member.
            activation_function: Activation function name or ActivationFunction member.
            weights: Optional explicit weight matrices, one per layer.
            biases: Optional explicit bias vectors, one per layer.

        Raises:
            NetworkInitializationError: If the layer sizes are out of range or
                                        the supplied parameters do not match them.
        """
        self._validate_layers(layer_sizes)
        self._layer_sizes = [int(size) for size in layer_sizes]
        self.num_layers = len(self._layer_sizes)

        try:
            self.cost_function = get_cost(cost_function)
            self.activation_function = get_activation(activation_function)
        except ValueError as e:
            raise NetworkInitializationError(str(e)) from e

        if (weights is None) != (biases is None):
            raise NetworkInitializationError("Weights and biases must be supplied together.")

        if weights is None:
            self._random_initialization()
            logging.info(f"Random initialization completed for architecture: {self._layer_sizes}")
        else:
            self._validate_parameters(weights, biases)
            self._weights = [np.array(w, dtype=float) for w in weights]
            self._biases = [np.array(b, dtype=float) for b in biases]
            logging.info(f"Initialization from supplied parameters completed for architecture: {self._layer_sizes}")

        if (self.cost_function is CostFunction.CROSS_ENTROPY
                and self.activation_function is not ActivationFunction.SIGMOID):
            logging.warning(f"Cross-entropy cost with {self.activation_function.value} activation: "
                            f"the output error omits the activation derivative and is only exact for sigmoid.")

        # Training history tracking
        self.training_history: Dict[str, List] = {
            'epoch': [],
            'loss': [],
            'learning_rate': [],
            'batch_size': [],
            'num_batches': [],
            'skipped': [],
            'time_per_epoch': []
        }

    # --- Validation ---

    def _validate_layers(self, layer_sizes: List[int]):
        """Checks the number of layers and the number of neurons of each layer."""
        if len(layer_sizes) < 2 or len(layer_sizes) > self.MAX_NUM_LAYERS:
            raise NetworkInitializationError(
                f"Number of layers must be between 2 and {self.MAX_NUM_LAYERS}, got {len(layer_sizes)}")
        for size in layer_sizes:
            if (not isinstance(size, numbers.Integral) or isinstance(size, bool)
                    or size < 1 or size > self.MAX_LAYER_SIZE):
                raise NetworkInitializationError(
                    f"Layer size must be an integer between 1 and {self.MAX_LAYER_SIZE}, got {size}")

    def _validate_parameters(self, weights: List[np.ndarray], biases: List[np.ndarray]):
        """Checks that the supplied weights and biases conform to the layer sizes."""
        num_connections = self.num_layers - 1
        if len(weights) != num_connections or len(biases) != num_connections:
            raise NetworkInitializationError(
                f"Expected {num_connections} weight matrices and bias vectors, "
                f"got {len(weights)} and {len(biases)}")
        for i in range(num_connections):
            expected_w = (self._layer_sizes[i + 1], self._layer_sizes[i])
            expected_b = (self._layer_sizes[i + 1], 1)
            w_shape = np.shape(weights[i])
            b_shape = np.shape(biases[i])
            if w_shape != expected_w or b_shape != expected_b:
                raise NetworkInitializationError(
                    f"Layer {i + 1}: weight shape {w_shape} and bias shape {b_shape} "
                    f"must be {expected_w} and {expected_b}")

    def _random_initialization(self):
        """Draws every weight and bias from a standard normal distribution."""
        self._weights = []
        self._biases = []
        for i in range(1, self.num_layers):
            self._biases.append(np.random.randn(self._layer_sizes[i], 1))
            self._weights.append(np.random.randn(self._layer_sizes[i], self._layer_sizes[i - 1]))
            logging.debug(f"Layer {i}: initialized weights {self._weights[-1].shape}, biases {self._biases[-1].shape}")

    def _as_input(self, inputs: np.ndarray) -> np.ndarray:
        """Returns `inputs` as an input layer column vector, checking its size."""
        inputs = np.asarray(inputs, dtype=float)
        if inputs.ndim == 1:
            inputs = inputs.reshape(-1, 1)
        if inputs.shape != (self._layer_sizes[0], 1):
            raise DimensionMismatchError(
                f"Expected input of shape ({self._layer_sizes[0]}, 1), got {inputs.shape}")
        return inputs

    # --- Parameters ---

    @property
    def layer_sizes(self) -> List[int]:
        return list(self._layer_sizes)

    @property
    def weights(self) -> List[np.ndarray]:
        """Copies of the weight matrices."""
        return [w.copy() for w in self._weights]

    @property
    def biases(self) -> List[np.ndarray]:
        """Copies of the bias vectors."""
        return [b.copy() for b in self._biases]

    # --- Inference ---

    def feed_forward(self, inputs: np.ndarray) -> np.ndarray:
        """
        Computes the network output for one input.

        For each layer: z = w * a_prev + b, a = activation(z).

        Args:
            inputs: Input column vector of shape (layer_sizes[0], 1), or a 1D
                    array of length layer_sizes[0].

        Returns:
            Output layer activations, shape (layer_sizes[-1], 1).

        Raises:
            DimensionMismatchError: If the input has the wrong size.
        """
        layer_output = self._as_input(inputs)
        for w, b in zip(self._weights, self._biases):
            zetas = np.dot(w, layer_output) + b
            layer_output = self.activation_function.activate(zetas)
        return layer_output

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Feeds forward every row of X.

        Args:
            X: Input data (num_samples, input_dim), or a single 1D sample.

        Returns:
            Network predictions (num_samples, output_dim).
        """
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        elif X.ndim != 2:
            raise DimensionMismatchError(f"Input X must be a 1D or 2D array, got {X.ndim}D.")
        if X.shape[0] == 0:
            return np.empty((0, self._layer_sizes[-1]))
        return np.hstack([self.feed_forward(row) for row in X]).T

    # --- Training ---

    def backpropagate(self, instance: Instance) -> ParameterGradients:
        """
        Computes the gradient of the cost of one labelled instance.

        Notation:
            a = activations of a layer, a[0] being the instance features
            z = zeta, i.e. w * a_prev + b
            d = delta, i.e. the derivative of the cost w.r.t. z

        Args:
            instance: The instance to backpropagate.

        Returns:
            Weight and bias gradients for every layer.

        Raises:
            NoLabelError: If the instance has no label.
            DimensionMismatchError: If features or labels do not fit the network.
        """
        labels = instance.labels
        if labels.shape != (self._layer_sizes[-1], 1):
            raise DimensionMismatchError(
                f"Expected labels of shape ({self._layer_sizes[-1]}, 1), got {labels.shape}")

        weight_grads = [None] * (self.num_layers - 1)
        bias_grads = [None] * (self.num_layers - 1)

        # 1. Forward pass, keeping every layer's activations
        activations = [self._as_input(instance.features)]
        for w, b in zip(self._weights, self._biases):
            zetas = np.dot(w, activations[-1]) + b
            activations.append(self.activation_function.activate(zetas))

        # 2. Output layer: d = cost'(a, y)
        last = self.num_layers - 1
        delta = self.cost_function.derivative(activations[last], labels, self.activation_function)
        weight_grads[last - 1] = np.dot(delta, activations[last - 1].T)
        bias_grads[last - 1] = delta

        # 3. Hidden layers: d = (w_next^T * d_next) @ f'(a)
        for layer in range(last - 1, 0, -1):
            delta = np.dot(self._weights[layer].T, delta) * self.activation_function.derivative(activations[layer])
            weight_grads[layer - 1] = np.dot(delta, activations[layer - 1].T)
            bias_grads[layer - 1] = delta
            logging.debug(f"Backward pass - layer {layer} delta shape: {delta.shape}")

        return ParameterGradients(weight_grads, bias_grads)

    def update_parameters(self, batch: Dataset, learning_rate: float, batch_size: Optional[int] = None) -> int:
        """
        Backpropagates every instance of the batch and updates the parameters.

        Each instance's gradient is applied as soon as it is computed:
            w = w - learning_rate * dw / batch_size
            b = b - learning_rate * db / batch_size
        so later instances of the batch see the partially updated parameters.
        This differs from textbook mini-batch SGD, which averages all
        gradients against one snapshot of the parameters.

        Unlabelled instances are skipped with a warning and contribute nothing.

        Args:
            batch: The instances to learn from.
            learning_rate: The learning rate for the update step.
            batch_size: Denominator of the update. Defaults to the number of
                        labelled instances in the batch.

        Returns:
            The number of skipped (unlabelled) instances.
        """
        if batch_size is None:
            batch_size = sum(1 for instance in batch if instance.is_labelled())
        elif batch_size < 1:
            raise ValueError(f"Batch size must be positive for gradient averaging, got {batch_size}.")
        skipped = 0
        for instance in batch:
            try:
                gradients = self.backpropagate(instance)
            except NoLabelError:
                logging.warning("Found instance without label, skipping it. Learning may be unstable.")
                skipped += 1
                continue

            grad_norm = gradients.norm()
            if grad_norm > LARGE_GRADIENT_NORM:
                logging.warning(f"Large gradient norm detected ({grad_norm:.2e}) before update.")

            scale = learning_rate / batch_size
            for i in range(self.num_layers - 1):
                self._weights[i] = self._weights[i] - scale * gradients.weight_gradients[i]
                self._biases[i] = self._biases[i] - scale * gradients.bias_gradients[i]
        return skipped

    def compute_loss(self, dataset: Dataset) -> Optional[float]:
        """Mean cost over the labelled instances of `dataset`, None if there are none."""
        costs = [self.cost_function.cost(self.feed_forward(instance.features), instance.labels)
                 for instance in dataset if instance.is_labelled()]
        if not costs:
            return None
        return float(np.mean(costs))

    def train(
        self,
        training_set: Dataset,
        num_epochs: int,
        learning_rate: float,
        mini_batch_size: int,
        verbose: bool = False,
        log_every: int = 1,
        track_loss: bool = False
    ) -> Dict[str, List]:
        """
        Trains the network with mini-batch stochastic gradient descent.

        Every epoch shuffles `training_set` in place, splits it into
        contiguous mini-batches of `mini_batch_size` instances (the last one
        holds the remainder) and updates the parameters batch by batch.

        Args:
            training_set: The labelled instances to learn from.
            num_epochs: Number of full passes over the training set.
            learning_rate: Learning rate for parameter updates.
            mini_batch_size: Number of instances per parameter update.
            verbose: Whether to log training progress.
            log_every: Log progress every `log_every` epochs.
            track_loss: Whether to compute the mean training cost after each epoch.

        Returns:
            The training history (see `training_history`).

        Raises:
            NetworkInitializationError: If the training set is empty or a
                                        hyperparameter is out of range.
        """
        if (len(training_set) < 1 or num_epochs < 1 or mini_batch_size < 1
                or not np.isfinite(learning_rate) or learning_rate <= 0):
            raise NetworkInitializationError(
                f"Invalid gradient descent parameters: {len(training_set)} instances, "
                f"num_epochs={num_epochs}, learning_rate={learning_rate}, mini_batch_size={mini_batch_size}")

        num_instances = len(training_set)
        num_batches = -(-num_instances // mini_batch_size)  # ceil division

        for epoch in range(num_epochs):
            epoch_start_time = time.time()
            training_set.shuffle()
            logging.debug(f"Gradient descent epoch: {epoch}")

            skipped = 0
            for batch_idx in range(num_batches):
                start_idx = batch_idx * mini_batch_size
                end_idx = min(start_idx + mini_batch_size, num_instances)
                logging.debug(f"  Minibatch {batch_idx}: instances [{start_idx}, {end_idx})")
                skipped += self.update_parameters(training_set.get_subset(start_idx, end_idx), learning_rate)

            epoch_time = time.time() - epoch_start_time
            epoch_loss = self.compute_loss(training_set) if track_loss else None

            # Record history for this epoch
            self.training_history['epoch'].append(epoch)
            self.training_history['loss'].append(epoch_loss)
            self.training_history['learning_rate'].append(learning_rate)
            self.training_history['batch_size'].append(mini_batch_size)
            self.training_history['num_batches'].append(num_batches)
            self.training_history['skipped'].append(skipped)
            self.training_history['time_per_epoch'].append(epoch_time)

            if verbose and (epoch % max(1, log_every) == 0 or epoch == num_epochs - 1):
                msg = f"Epoch {epoch + 1}/{num_epochs}"
                if epoch_loss is not None:
                    msg += f" - loss: {epoch_loss:.5f}"
                if skipped:
                    msg += f" - skipped: {skipped}"
                msg += f" - time: {epoch_time:.2f}s"
                logging.info(msg)

        logging.info("Training finished.")
        return self.training_history

    # --- Persistence ---

    def save_weights(self, filename: str) -> str:
        """
        Saves the network's weights, biases and configuration to a compressed .npz file.

        Args:
            filename: Path of the file. '.npz' is appended if missing.

        Returns:
            The path actually written.
        """
        save_dict = {
            'layer_sizes': np.array(self._layer_sizes),
            'cost_function': np.array(self.cost_function.value),
            'activation_function': np.array(self.activation_function.value),
        }
        for i, (w, b) in enumerate(zip(self._weights, self._biases)):
            save_dict[f'layer_{i}_weights'] = w
            save_dict[f'layer_{i}_biases'] = b

        if not filename.endswith('.npz'):
            filename += '.npz'

        np.savez_compressed(filename, **save_dict)
        logging.info(f"Network weights and configuration saved to {filename}")
        return filename

    @classmethod
    def load_weights(cls, filename: str) -> 'Network':
        """
        Creates a network from a file written by `save_weights`.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is incomplete.
            NetworkInitializationError: If the stored parameters are inconsistent.
        """
        with np.load(filename) as data:
            try:
                layer_sizes = data['layer_sizes'].tolist()
                cost_name = str(data['cost_function'].item())
                activation_name = str(data['activation_function'].item())
                num_connections = len(layer_sizes) - 1
                weights = [data[f'layer_{i}_weights'] for i in range(num_connections)]
                biases = [data[f'layer_{i}_biases'] for i in range(num_connections)]
            except KeyError as e:
                logging.error(f"Missing expected key in weight file {filename}: {e}")
                raise ValueError(f"Incompatible or incomplete weight file: {filename}") from e

        network = cls(layer_sizes, cost_name, activation_name, weights=weights, biases=biases)
        logging.info(f"Network loaded successfully from {filename}")
        return network

    def summary(self) -> str:
        """
        Generates a text summary of the network architecture and parameters.
        """
        summary_str = "\n" + "="*50 + "\n"
        summary_str += "Neural Network Summary\n"
        summary_str += "="*50 + "\n"
        summary_str += f"Cost: {self.cost_function.value}, Activation: {self.activation_function.value}\n"
        summary_str += "-"*50 + "\n"
        total_params = 0
        for i, (w, b) in enumerate(zip(self._weights, self._biases)):
            layer_params = w.size + b.size
            total_params += layer_params
            summary_str += f"Layer {i + 1}: {self._layer_sizes[i]} -> {self._layer_sizes[i + 1]}\n"
            summary_str += f"  Weight Shape: {w.shape}\n"
            summary_str += f"  Bias Shape: {b.shape}\n"
            summary_str += f"  Parameters: {layer_params}\n"
            summary_str += "-"*50 + "\n"

        summary_str += f"Total Parameters: {total_params}\n"
        summary_str += "="*50 + "\n"
        return summary_str

    def __repr__(self):
        return (f"Network(layer_sizes={self._layer_sizes}, "
                f"cost_function={self.cost_function.value}, "
                f"activation_function={self.activation_function.value})")
