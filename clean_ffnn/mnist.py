"""Readers for the MNIST handwritten digits dataset (http://yann.lecun.com/exdb/mnist/).

The dataset ships as two IDX files per split: one with the labels (digits
0 to 9) and one with the 28x28 grey-scale images. Every image becomes an
Instance whose features are the pixel values and whose labels are a one-hot
vector over the ten digits.
"""
import numpy as np
from typing import Optional
import logging

from .dataset import Dataset, Instance
from .exceptions import DatasetInitializationError

LABEL_MAGIC = 2049
IMAGE_MAGIC = 2051

# IDX headers are big-endian unsigned 32-bit integers
_HEADER_DTYPE = np.dtype('>u4')


def _read_header(buffer: bytes, num_fields: int, path: str) -> np.ndarray:
    header_size = num_fields * _HEADER_DTYPE.itemsize
    if len(buffer) < header_size:
        raise DatasetInitializationError(f"{path}: file too short for an IDX header")
    return np.frombuffer(buffer, dtype=_HEADER_DTYPE, count=num_fields)


def read_mnist(
    label_file: str,
    image_file: str,
    num_classes: int = 10,
    scale: float = 1.0,
    limit: Optional[int] = None
) -> Dataset:
    """
    Reads an MNIST split into a Dataset.

    Args:
        label_file: Path of the IDX1 label file (e.g. train-labels-idx1-ubyte).
        image_file: Path of the IDX3 image file (e.g. train-images-idx3-ubyte).
        num_classes: Size of the one-hot label vectors.
        scale: Factor applied to the raw pixel values (0-255), e.g. 1/255.
        limit: Optional maximum number of instances to read.

    Returns:
        A dataset with one labelled instance per image, in file order.

    Raises:
        DatasetInitializationError: On a wrong magic number, a mismatch between
                                    the number of labels and images, or a
                                    truncated file.
    """
    logging.info("Reading MNIST dataset")
    with open(label_file, 'rb') as f:
        label_buffer = f.read()
    with open(image_file, 'rb') as f:
        image_buffer = f.read()

    # check file consistency
    magic, num_labels = _read_header(label_buffer, 2, label_file)
    if magic != LABEL_MAGIC:
        raise DatasetInitializationError(
            f"Label file has wrong magic number: {magic} (should be {LABEL_MAGIC})")
    magic, num_images, num_rows, num_cols = _read_header(image_buffer, 4, image_file)
    if magic != IMAGE_MAGIC:
        raise DatasetInitializationError(
            f"Image file has wrong magic number: {magic} (should be {IMAGE_MAGIC})")
    if num_labels != num_images:
        raise DatasetInitializationError(
            f"Image file and label file do not contain the same number of entries: "
            f"{num_labels} labels, {num_images} images")

    num_instances = int(num_labels) if limit is None else min(int(num_labels), limit)
    image_size = int(num_rows) * int(num_cols)

    labels = np.frombuffer(label_buffer, dtype=np.uint8, offset=8)
    images = np.frombuffer(image_buffer, dtype=np.uint8, offset=16)
    if len(labels) < num_instances or len(images) < num_instances * image_size:
        raise DatasetInitializationError(
            f"MNIST files are truncated: expected {num_instances} instances of {image_size} pixels")

    dataset = Dataset()
    for i in range(num_instances):
        label = int(labels[i])
        if label >= num_classes:
            raise DatasetInitializationError(f"Instance {i}: label {label} out of range for {num_classes} classes")
        label_vector = np.zeros((num_classes, 1))
        label_vector[label] = 1.0
        pixels = images[i * image_size:(i + 1) * image_size].astype(float) * scale
        dataset.add(Instance(pixels, label_vector))
        if (i + 1) % 1000 == 0:
            logging.info(f" read {i + 1} of {num_instances} instances")
    logging.info(f"Completed: read {num_instances} instances")
    return dataset


def get_binary_dataset(dataset: Dataset, label_one: int, label_two: int, max_size: int) -> Dataset:
    """
    Keeps at most `max_size` instances of each of two digits, in dataset order.

    Labels stay one-hot over all the classes, so the network keeps its
    output layer size.
    """
    binary_dataset = Dataset()
    label_one_count = 0
    label_two_count = 0
    for instance in dataset:
        if not instance.is_labelled():
            continue
        digit = int(np.argmax(instance.labels))
        if digit == label_one and label_one_count < max_size:
            binary_dataset.add(instance)
            label_one_count += 1
        elif digit == label_two and label_two_count < max_size:
            binary_dataset.add(instance)
            label_two_count += 1
        if label_one_count >= max_size and label_two_count >= max_size:
            break
    logging.info(f"Binary dataset: {label_one_count} instances of {label_one}, "
                 f"{label_two_count} instances of {label_two}")
    return binary_dataset
