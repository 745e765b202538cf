import numpy as np
import pytest

from clean_ffnn import Dataset, Instance
from clean_ffnn.exceptions import NoLabelError


def make_dataset(size):
    return Dataset([Instance([float(i), -float(i)], [1.0, 0.0]) for i in range(size)])


def test_instance_reshapes_to_column_vectors():
    instance = Instance([1.0, 2.0, 3.0], [0.0, 1.0])
    assert instance.features.shape == (3, 1)
    assert instance.labels.shape == (2, 1)
    assert instance.is_labelled()


def test_instance_is_immutable_copy():
    features = np.array([[1.0], [2.0]])
    instance = Instance(features)
    features[0, 0] = 99.0
    assert instance.features[0, 0] == 1.0
    with pytest.raises(ValueError):
        instance.features[0, 0] = 5.0


def test_instance_rejects_row_vectors():
    with pytest.raises(ValueError):
        Instance(np.ones((1, 3)))


def test_unlabelled_instance_raises_on_labels():
    instance = Instance([1.0, 2.0])
    assert not instance.is_labelled()
    with pytest.raises(NoLabelError, match="labels are not set"):
        instance.labels


def test_subsets_concatenate_to_original_order():
    dataset = make_dataset(7)
    for n in range(len(dataset) + 1):
        head = dataset.get_subset(0, n)
        tail = dataset.get_subset(n, len(dataset))
        assert head.instances + tail.instances == dataset.instances


def test_subset_shares_instances():
    dataset = make_dataset(4)
    subset = dataset.get_subset(1, 3)
    assert len(subset) == 2
    assert subset[0] is dataset[1]
    assert subset[1] is dataset[2]


def test_shuffle_reorders_in_place_without_copying():
    np.random.seed(3)
    dataset = make_dataset(20)
    before = dataset.instances
    dataset.shuffle()
    after = dataset.instances
    assert len(after) == len(before)
    assert set(map(id, after)) == set(map(id, before))
    assert after != before


def test_remove_unlabelled_instances():
    dataset = Dataset([Instance([1.0]), Instance([2.0], [1.0]), Instance([3.0]), Instance([4.0], [0.0])])
    assert dataset.remove_unlabelled_instances() == 2
    assert len(dataset) == 2
    assert all(instance.is_labelled() for instance in dataset)


def test_random_dataset_shapes():
    np.random.seed(0)
    labelled = Dataset.random(num_features=5, num_instances=3, num_labels=2)
    assert len(labelled) == 3
    assert labelled[0].features.shape == (5, 1)
    assert labelled[0].labels.shape == (2, 1)
    unlabelled = Dataset.random(num_features=5, num_instances=2)
    assert not any(instance.is_labelled() for instance in unlabelled)
