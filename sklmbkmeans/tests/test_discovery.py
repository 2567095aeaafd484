"""Tests for discovery utilities in sklmbkmeans."""
import pytest

from sklmbkmeans import MiniBatchKMeans
from sklmbkmeans.utils import all_displays, all_estimators, all_functions


def test_all_estimators():
    ests = all_estimators()
    assert ests == [("MiniBatchKMeans", MiniBatchKMeans)]


def test_all_estimators_type_filter():
    assert [name for name, _ in all_estimators(type_filter="cluster")] == [
        "MiniBatchKMeans"
    ]
    assert [name for name, _ in all_estimators(type_filter=["transformer"])] == [
        "MiniBatchKMeans"
    ]
    assert all_estimators(type_filter="classifier") == []
    with pytest.raises(ValueError, match="type_filter"):
        all_estimators(type_filter="bogus")


def test_all_displays():
    # No displays defined yet
    assert len(all_displays()) == 0


def test_all_functions():
    names = [name for name, _ in all_functions()]
    assert names == [
        "all_displays",
        "all_estimators",
        "all_functions",
        "kmeans_plusplus",
        "weighted_sample_with_replacement",
    ]
