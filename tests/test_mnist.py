import numpy as np
import pytest

from clean_ffnn.exceptions import DatasetInitializationError
from clean_ffnn.mnist import get_binary_dataset, read_mnist


def write_idx(tmp_path, labels, images, label_magic=2049, image_magic=2051, num_images=None):
    """Writes MNIST-style IDX label and image files for (n, rows, cols) images."""
    labels = np.asarray(labels, dtype=np.uint8)
    images = np.asarray(images, dtype=np.uint8)
    n, rows, cols = images.shape
    label_path = tmp_path / "labels-idx1-ubyte"
    image_path = tmp_path / "images-idx3-ubyte"
    label_path.write_bytes(np.array([label_magic, len(labels)], dtype='>u4').tobytes() + labels.tobytes())
    header = np.array([image_magic, n if num_images is None else num_images, rows, cols], dtype='>u4')
    image_path.write_bytes(header.tobytes() + images.tobytes())
    return str(label_path), str(image_path)


@pytest.fixture
def three_images():
    images = np.arange(3 * 2 * 2, dtype=np.uint8).reshape(3, 2, 2) * 10
    return [7, 1, 8], images


def test_read_mnist(tmp_path, three_images):
    labels, images = three_images
    dataset = read_mnist(*write_idx(tmp_path, labels, images))
    assert len(dataset) == 3
    first = dataset[0]
    assert first.features.shape == (4, 1)
    np.testing.assert_allclose(first.features.ravel(), [0, 10, 20, 30])
    assert first.labels.shape == (10, 1)
    assert int(np.argmax(first.labels)) == 7
    assert first.labels.sum() == 1.0
    assert int(np.argmax(dataset[2].labels)) == 8


def test_read_mnist_scale_and_limit(tmp_path, three_images):
    labels, images = three_images
    dataset = read_mnist(*write_idx(tmp_path, labels, images), scale=0.1, limit=2)
    assert len(dataset) == 2
    np.testing.assert_allclose(dataset[1].features.ravel(), [4.0, 5.0, 6.0, 7.0])


def test_read_mnist_wrong_magic(tmp_path, three_images):
    labels, images = three_images
    with pytest.raises(DatasetInitializationError, match="magic number"):
        read_mnist(*write_idx(tmp_path, labels, images, label_magic=2051))
    with pytest.raises(DatasetInitializationError, match="magic number"):
        read_mnist(*write_idx(tmp_path, labels, images, image_magic=2049))


def test_read_mnist_count_mismatch(tmp_path, three_images):
    labels, images = three_images
    with pytest.raises(DatasetInitializationError, match="same number"):
        read_mnist(*write_idx(tmp_path, labels[:2], images))


def test_read_mnist_truncated(tmp_path, three_images):
    labels, images = three_images
    with pytest.raises(DatasetInitializationError, match="truncated"):
        read_mnist(*write_idx(tmp_path, labels + [3], images, num_images=4))


def test_read_mnist_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_mnist(str(tmp_path / "missing-labels"), str(tmp_path / "missing-images"))


def test_get_binary_dataset(tmp_path):
    labels = [1, 8, 3, 1, 1, 8, 8]
    images = np.zeros((len(labels), 2, 2))
    dataset = read_mnist(*write_idx(tmp_path, labels, images))
    binary = get_binary_dataset(dataset, 1, 8, max_size=2)
    assert [int(np.argmax(instance.labels)) for instance in binary] == [1, 8, 1, 8]
    assert binary[0] is dataset[0]
