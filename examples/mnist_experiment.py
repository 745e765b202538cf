"""Trains a network on MNIST and reports test accuracy and average cosine.

Download the four IDX files from http://yann.lecun.com/exdb/mnist/ and
decompress them into one directory, then run:

    python examples/mnist_experiment.py --data-dir data/mnist
    python examples/mnist_experiment.py --data-dir data/mnist --binary 1 8
"""
import os
import time
import logging
import argparse

from clean_ffnn import Network
from clean_ffnn.evaluation import accuracy, average_cosine, predict_dataset
from clean_ffnn.mnist import get_binary_dataset, read_mnist


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Feedforward network on MNIST')
    parser.add_argument('--data-dir', default='data/mnist',
                        help='Directory holding the decompressed MNIST IDX files')
    parser.add_argument('--hidden', type=int, nargs='*', default=[30],
                        help='Hidden layer sizes')
    parser.add_argument('--epochs', type=int, default=30, help='Number of training epochs')
    parser.add_argument('--lr', type=float, default=3.0, help='Learning rate')
    parser.add_argument('--batch-size', type=int, default=10, help='Mini-batch size')
    parser.add_argument('--cost', default='quadratic', choices=['quadratic', 'cross_entropy'])
    parser.add_argument('--activation', default='sigmoid', choices=['sigmoid', 'tanh'])
    parser.add_argument('--train-size', type=int, default=None,
                        help='Only read the first N training instances')
    parser.add_argument('--binary', type=int, nargs=2, metavar=('DIGIT_A', 'DIGIT_B'), default=None,
                        help='Train and test on two digits only')
    parser.add_argument('--binary-size', type=int, default=1000,
                        help='Instances per digit in binary mode (training; half of it for test)')
    parser.add_argument('--save', default=None, help='Save the trained weights to this .npz file')
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    logger = logging.getLogger("MnistExperiment")

    # --- Data ---
    scale = 1.0 / 255.0
    training_set = read_mnist(os.path.join(args.data_dir, 'train-labels-idx1-ubyte'),
                              os.path.join(args.data_dir, 'train-images-idx3-ubyte'),
                              scale=scale, limit=args.train_size)
    test_set = read_mnist(os.path.join(args.data_dir, 't10k-labels-idx1-ubyte'),
                          os.path.join(args.data_dir, 't10k-images-idx3-ubyte'),
                          scale=scale)
    if args.binary is not None:
        digit_a, digit_b = args.binary
        training_set = get_binary_dataset(training_set, digit_a, digit_b, args.binary_size)
        test_set = get_binary_dataset(test_set, digit_a, digit_b, args.binary_size // 2)

    # --- Network ---
    layer_sizes = [784] + args.hidden + [10]
    network = Network(layer_sizes, cost_function=args.cost, activation_function=args.activation)
    logger.info(network.summary())

    # --- Training ---
    logger.info(f"Training on {len(training_set)} instances...")
    start_time = time.time()
    network.train(training_set, num_epochs=args.epochs, learning_rate=args.lr,
                  mini_batch_size=args.batch_size, verbose=True)
    logger.info(f"Training finished in {time.time() - start_time:.2f} seconds")

    # --- Evaluation ---
    predictions, golds = predict_dataset(network, test_set)
    print(f"Test accuracy: {accuracy(predictions, golds):.4f}")
    print(f"Average cosine: {average_cosine(predictions, golds):.4f}")

    if args.save:
        network.save_weights(args.save)


if __name__ == "__main__":
    main()
