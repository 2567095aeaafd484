"""Public API for the :mod:`sklmbkmeans` package.

The package exposes a mini-batch K-Means clustering estimator and its
seeding routine:

* :class:`~sklmbkmeans.MiniBatchKMeans` – K-Means trained on shuffled
    mini-batches with an online centroid update and k-means++ seeding.
* :func:`~sklmbkmeans.kmeans_plusplus` – k-means++ initial center
    selection for any supported distance kernel.

The estimator follows the scikit-learn estimator API (``fit``, ``predict``,
``transform``, ``score``).
"""

from ._kmeans import MiniBatchKMeans, kmeans_plusplus

__all__ = ["MiniBatchKMeans", "kmeans_plusplus"]

# Light-weight version attribute for now; adjust if setuptools_scm is adopted.
__version__ = "0.1.0"
