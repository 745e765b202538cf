import numpy as np
import pytest

from clean_ffnn import Dataset, Instance
from clean_ffnn.evaluation import accuracy, average_cosine, predict_dataset
from clean_ffnn.exceptions import DatasetInitializationError, DimensionMismatchError


def column(*values):
    return np.array(values, dtype=float).reshape(-1, 1)


def test_accuracy_counts_argmax_matches():
    predictions = [column(0.9, 0.1, 0.0), column(0.2, 0.7, 0.1), column(0.3, 0.3, 0.4), column(0.6, 0.3, 0.1)]
    golds = [column(1, 0, 0), column(0, 1, 0), column(1, 0, 0), column(0, 0, 1)]
    assert accuracy(predictions, golds) == pytest.approx(0.5)


def test_average_cosine():
    predictions = [column(1, 0), column(1, 1), column(0, 0)]
    golds = [column(1, 0), column(0, 1), column(1, 0)]
    # the all-zero prediction has no cosine and is left out
    assert average_cosine(predictions, golds) == pytest.approx((1.0 + np.sqrt(0.5)) / 2)


def test_average_cosine_orthogonal_and_degenerate():
    assert average_cosine([column(1, 0)], [column(0, 1)]) == pytest.approx(0.0)
    assert average_cosine([column(0, 0)], [column(0, 0)]) == 0.0


@pytest.mark.parametrize("metric", [accuracy, average_cosine])
def test_invalid_inputs(metric):
    with pytest.raises(DatasetInitializationError):
        metric([], [])
    with pytest.raises(DatasetInitializationError):
        metric([column(1, 0)], [column(1, 0), column(0, 1)])
    with pytest.raises(DimensionMismatchError):
        metric([column(1, 0)], [column(1, 0, 0)])


def test_predict_dataset_skips_unlabelled(fixed_network):
    dataset = Dataset([Instance([1.0, 2.0, 3.0], [0, 1, 0, 0]),
                       Instance([0.0, 0.0, 0.0]),
                       Instance([-1.0, 0.5, 2.0], [1, 0, 0, 0])])
    predictions, golds = predict_dataset(fixed_network, dataset)
    assert len(predictions) == len(golds) == 2
    np.testing.assert_allclose(predictions[1], fixed_network.feed_forward(dataset[2].features))
    assert golds[0] is dataset[0].labels
