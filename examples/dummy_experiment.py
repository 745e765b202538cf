"""Trains a small network on four hand-written instances and predicts a fifth.

Shows the minimal use of the Network class.
"""
import logging
import numpy as np

from clean_ffnn import Dataset, Instance, Network


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    logger = logging.getLogger("DummyExperiment")

    # --- Data ---
    train_set = Dataset([
        Instance([1.0, -0.5, 3.0], [0.1, 0.8, 0.05, 0.05]),
        Instance([0.0, 7.0, -0.5], [0.0, 0.0, 0.1, 0.9]),
        Instance([1.5, -1.0, 5.0], [0.0, 0.9, 0.1, 0.0]),
        Instance([0.0, 6.0, 0.0], [0.0, 0.1, 0.0, 0.9]),
    ])

    # --- Network ---
    network = Network([3, 5, 4], cost_function='quadratic', activation_function='sigmoid')
    logger.info(network.summary())

    # --- Training ---
    network.train(train_set, num_epochs=100, learning_rate=3.0, mini_batch_size=2,
                  verbose=True, log_every=20, track_loss=True)

    # --- Prediction ---
    output = network.feed_forward(np.array([0.0, 8.0, 0.5]))
    print("Prediction for input instance:")
    print(np.array2string(output.ravel(), precision=3))


if __name__ == "__main__":
    main()
