import time
import logging
import numpy as np
import matplotlib.pyplot as plt
from sklearn.datasets import make_moons

from clean_ffnn import Dataset, Instance, Network
from clean_ffnn.evaluation import accuracy, predict_dataset
from clean_ffnn.plotting import plot_decision_boundary, plot_training_history


def make_moons_dataset(n_samples: int = 300, noise: float = 0.1):
    """Normalized make_moons data as a Dataset with one-hot labels over two classes."""
    X_original, y_raw = make_moons(n_samples=n_samples, noise=noise, random_state=42)
    X = (X_original - X_original.mean(axis=0)) / (X_original.std(axis=0) + 1e-8)
    one_hot = np.eye(2)[y_raw]
    dataset = Dataset([Instance(x, y) for x, y in zip(X, one_hot)])
    return X, y_raw, dataset


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    logger = logging.getLogger("MakeMoonsExample")

    # --- Data Preparation ---
    logger.info("Generating make_moons dataset...")
    X, y_raw, dataset = make_moons_dataset()

    # --- Network Definition ---
    network = Network([2, 16, 16, 2], cost_function='cross_entropy', activation_function='sigmoid')
    print(network.summary())

    # --- Training ---
    start_time = time.time()
    history = network.train(dataset, num_epochs=300, learning_rate=0.5, mini_batch_size=16,
                            verbose=True, log_every=50, track_loss=True)
    logger.info(f"Total training time: {time.time() - start_time:.2f} seconds")

    # --- Evaluation ---
    predictions, golds = predict_dataset(network, dataset)
    print(f"Training accuracy: {accuracy(predictions, golds):.4f}")

    # --- Plots ---
    plot_training_history(history, title="Make Moons Training History")
    plot_decision_boundary(X, y_raw, network)
    plt.show()


if __name__ == "__main__":
    main()
