import numpy as np
import pytest

from sklmbkmeans import kmeans_plusplus
from sklmbkmeans.utils import weighted_sample_with_replacement


def _blobs():
    rng = np.random.RandomState(0)
    centers = np.array([[0.0, 0.0], [20.0, 0.0], [0.0, 20.0], [20.0, 20.0]])
    return np.vstack([c + rng.normal(scale=0.1, size=(25, 2)) for c in centers])


@pytest.mark.parametrize("n_clusters", [1, 2, 4, 7])
def test_kmeans_plusplus_returns_n_clusters_rows(n_clusters):
    X = _blobs()
    centers, indices = kmeans_plusplus(X, n_clusters, random_state=0)
    assert centers.shape == (n_clusters, X.shape[1])
    assert indices.shape == (n_clusters,)
    np.testing.assert_array_equal(centers, X[indices])


def test_kmeans_plusplus_sizing_error():
    X = np.zeros((3, 2))
    with pytest.raises(ValueError, match="n_samples=3 should be >= n_clusters=4"):
        kmeans_plusplus(X, 4)


def test_kmeans_plusplus_copies_samples():
    X = _blobs()
    centers, indices = kmeans_plusplus(X, 3, random_state=0)
    centers[:] = -1.0
    assert np.all(X[indices] != -1.0)


def test_kmeans_plusplus_spreads_over_far_groups():
    X = _blobs()
    for seed in range(10):
        _, indices = kmeans_plusplus(X, 4, random_state=seed)
        # one seed per well separated group
        assert sorted(indices // 25) == [0, 1, 2, 3]


def test_kmeans_plusplus_all_identical_points():
    X = np.ones((5, 3))
    centers, _ = kmeans_plusplus(X, 3, random_state=0)
    np.testing.assert_array_equal(centers, np.ones((3, 3)))


def test_kmeans_plusplus_callable_kernel():
    calls = []

    def l1(a, b):
        calls.append(1)
        return float(np.abs(a - b).sum())

    X = _blobs()
    _, indices = kmeans_plusplus(X, 4, kernel=l1, random_state=0)
    assert sorted(indices // 25) == [0, 1, 2, 3]
    assert calls


def test_kmeans_plusplus_is_reproducible():
    X = _blobs()
    a, ia = kmeans_plusplus(X, 4, kernel="manhattan", random_state=3)
    b, ib = kmeans_plusplus(X, 4, kernel="manhattan", random_state=3)
    np.testing.assert_array_equal(ia, ib)
    np.testing.assert_array_equal(a, b)


def test_weighted_sample_respects_zero_weights():
    weights = np.array([0.0, 3.0, 0.0, 1.0])
    draws = weighted_sample_with_replacement(weights, 2000, random_state=0)
    assert set(np.unique(draws)) <= {1, 3}
    assert np.mean(draws == 1) == pytest.approx(0.75, abs=0.05)


def test_weighted_sample_single_positive_weight():
    draws = weighted_sample_with_replacement([0.0, 0.0, 5.0], 50, random_state=0)
    assert np.all(draws == 2)


def test_weighted_sample_all_zero_is_uniform():
    draws = weighted_sample_with_replacement(np.zeros(4), 4000, random_state=0)
    counts = np.bincount(draws, minlength=4) / 4000
    np.testing.assert_allclose(counts, 0.25, atol=0.05)


@pytest.mark.parametrize("weights", [[], [-1.0, 2.0], [np.nan, 1.0], [[1.0, 2.0]]])
def test_weighted_sample_rejects_bad_weights(weights):
    with pytest.raises(ValueError, match="weights"):
        weighted_sample_with_replacement(weights, 1)
