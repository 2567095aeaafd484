"""Mini-batch K-Means clustering with k-means++ seeding.

This module implements :class:`MiniBatchKMeans`, a centroid-based hard
clustering estimator trained on shuffled mini-batches, and the
:func:`kmeans_plusplus` seeding routine it uses. Centroids are refined with
an online exponential moving average whose learning rate is the inverse of a
running per-cluster size counter, so no historical assignments need to be
stored. Training stops once fewer than ``min_change`` samples change cluster
during an epoch, or after ``max_epochs`` epochs.

The implementation follows the structure of scikit-learn's k-means
estimators where practical, but the internal update rules differ.

References
----------

.. [1] D. Arthur and S. Vassilvitskii. *k-means++: The Advantages of
   Careful Seeding*, Proceedings of the 18th annual ACM-SIAM Symposium on
   Discrete Algorithms, 2007.
.. [2] D. Sculley. *Web-Scale K-Means Clustering*, Proceedings of the 19th
   International Conference on World Wide Web, 2010.
"""

from __future__ import annotations

import warnings
from numbers import Integral

import numpy as np
from sklearn.base import BaseEstimator, ClusterMixin, TransformerMixin, _fit_context
from sklearn.exceptions import ConvergenceWarning
from sklearn.metrics.pairwise import (
    euclidean_distances,
    manhattan_distances,
    pairwise_distances,
)
from sklearn.utils import check_array, check_random_state
from sklearn.utils._param_validation import Interval, StrOptions
from sklearn.utils.validation import check_is_fitted, validate_data

from .utils import weighted_sample_with_replacement

# Optional numba acceleration (soft dependency)
try:  # pragma: no cover - optional path
    from numba import njit, prange  # type: ignore

    _NUMBA_AVAILABLE = True
except Exception:  # pragma: no cover - optional path
    _NUMBA_AVAILABLE = False

_EPSILON = np.finfo(float).eps

###############################################################################
# Helper utilities


def _pairwise_distance(X, Y, kernel="euclidean"):
    if callable(kernel):
        return pairwise_distances(X, Y, metric=kernel)
    if kernel == "euclidean":
        return euclidean_distances(X, Y, squared=False)
    if kernel == "manhattan":
        return manhattan_distances(X, Y)
    raise ValueError(f"Unsupported distance kernel: {kernel!r}")


def _kernel_name(kernel):
    if callable(kernel):
        return getattr(kernel, "__name__", repr(kernel))
    return kernel


def _check_n_samples(n_samples, n_clusters):
    if n_samples < n_clusters:
        raise ValueError(
            f"n_samples={n_samples} should be >= n_clusters={n_clusters}."
        )


def _nearest_centroid(X, centers, kernel="euclidean"):
    # np.argmin keeps the first minimum, so ties go to the lowest index
    return np.argmin(_pairwise_distance(X, centers, kernel), axis=1).astype(
        np.int64, copy=False
    )


if _NUMBA_AVAILABLE:  # pragma: no cover - exercised only when numba present

    @njit(parallel=True)
    def _nearest_centroid_numba(X, centers, manhattan):  # type: ignore
        n_samples, n_features = X.shape
        n_clusters = centers.shape[0]
        labels = np.empty(n_samples, dtype=np.int64)
        for i in prange(n_samples):
            best = np.inf
            pos = 0
            for k in range(n_clusters):
                d = 0.0
                for j in range(n_features):
                    diff = X[i, j] - centers[k, j]
                    if manhattan:
                        d += abs(diff)
                    else:
                        d += diff * diff
                if d < best:
                    best = d
                    pos = k
            labels[i] = pos
        return labels


def _record_reassignments(labels, sizes, batch_idx, new_labels):
    """Record new labels for a batch and update the running cluster sizes.

    Every sample whose label differs from its previous one (including a
    first assignment, marked by ``-1``) adds one to its new cluster and
    removes one from its old cluster.

    Returns
    -------
    changed : int
        Number of reassigned samples in the batch.
    """
    previous = labels[batch_idx]
    moved = new_labels != previous
    np.add.at(sizes, new_labels[moved], 1)
    left = previous[moved]
    np.subtract.at(sizes, left[left >= 0], 1)
    labels[batch_idx] = new_labels
    return int(np.count_nonzero(moved))


def kmeans_plusplus(X, n_clusters, *, kernel="euclidean", random_state=None):
    """Select initial cluster centers with the k-means++ scheme.

    The first center is drawn uniformly. Every following center is drawn
    with probability proportional to the squared kernel distance between a
    sample and its nearest already chosen center.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Data to pick seeds from.
    n_clusters : int
        Number of centers to select.
    kernel : {'euclidean', 'manhattan'} or callable, default='euclidean'
        Distance kernel. A callable receives two 1d arrays and returns a
        nonnegative float.
    random_state : int, RandomState instance or None, default=None
        Source of randomness for the weighted draws.

    Returns
    -------
    centers : ndarray of shape (n_clusters, n_features)
        Initial centers. Rows are copies of the selected samples.
    indices : ndarray of shape (n_clusters,)
        Row indices of the selected samples in ``X``. Indices may repeat
        since draws are made with replacement.

    Raises
    ------
    ValueError
        If ``X`` holds fewer samples than ``n_clusters``.
    """
    X = check_array(X, dtype=[np.float64, np.float32])
    rng = check_random_state(random_state)
    n_samples, n_features = X.shape
    _check_n_samples(n_samples, n_clusters)

    weights = np.full(n_samples, 1.0 / n_samples)
    closest = np.full(n_samples, np.inf)
    centers = np.empty((n_clusters, n_features), dtype=np.float64)
    indices = np.empty(n_clusters, dtype=np.int64)

    for c in range(n_clusters):
        idx = weighted_sample_with_replacement(weights, 1, random_state=rng)[0]
        centers[c] = X[idx]
        indices[c] = idx
        if c == n_clusters - 1:
            break
        dist = _pairwise_distance(X, centers[c : c + 1], kernel)[:, 0]
        closest = np.minimum(closest, dist)
        weights = closest**2
        weights /= weights.sum() or _EPSILON
    return centers, indices


###############################################################################
# Core estimator: mini-batch K-Means


class MiniBatchKMeans(TransformerMixin, ClusterMixin, BaseEstimator):
    """Mini-batch K-Means clustering.

    A fast centroid-based hard clustering algorithm for linearly separable
    data. Centers are seeded with k-means++ and refined epoch by epoch on
    shuffled mini-batches. After each batch the centers move toward the
    batch mean with a learning rate equal to the inverse of each cluster's
    running size, an exponential moving average that never recomputes the
    cluster means from scratch.

    Parameters are validated when the estimator is constructed and again
    each time :meth:`fit` is called.

    Parameters
    ----------
    n_clusters : int, default=8
        The number of clusters to form as well as the number of centroids
        to generate.
    batch_size : int, default=100
        Number of samples per mini-batch. The last batch of an epoch may be
        smaller.
    kernel : {'euclidean', 'manhattan'} or callable, default='euclidean'
        Distance kernel used for seeding and for assigning samples to
        centers. A callable must accept two 1d arrays of equal length and
        return a nonnegative float that is zero only for identical inputs.
    min_change : int, default=1
        Minimum number of reassigned samples during an epoch for training
        to continue.
    max_epochs : int, default=300
        Maximum number of full passes over the training data.
    centroid_update : {'batch', 'cluster'}, default='batch'
        Rule used to move the centers after each mini-batch.

        * 'batch' : every center moves toward the mean of the whole batch,
          ``c <- (1 - 1/size_c) * c + (1/size_c) * mean(batch)``. Empty
          clusters use a learning rate of machine epsilon.
        * 'cluster' : only the clusters represented in the batch move,
          each toward the mean of its own members with learning rate
          ``members_in_batch / size_c``.
    random_state : int, RandomState instance or None, default=None
        Controls seeding and the per-epoch shuffling. Pass an int for
        reproducible results.
    verbose : int, default=0
        Verbosity level. ``0`` is silent; higher values print a progress
        message after every epoch.
    use_numba : bool, default=False
        If ``True`` and :mod:`numba` is installed (see ``[speed]`` extra),
        use a JIT-compiled kernel for nearest-center assignment. Ignored for
        callable kernels.

    Attributes
    ----------
    cluster_centers_ : ndarray of shape (n_clusters, n_features)
        Final cluster centers (read-only).
    labels_ : ndarray of shape (n_samples,)
        Index of the nearest final center for each training sample.
    cluster_sizes_ : ndarray of shape (n_clusters,)
        Running cluster sizes maintained during training.
    n_epochs_ : int
        Number of epochs run.
    n_changed_ : list of int
        Number of reassigned samples in each epoch.
    converged_ : bool
        Whether training stopped because an epoch reassigned fewer than
        ``min_change`` samples.
    inertia_ : float
        Sum of squared kernel distances of the training samples to their
        nearest center.
    n_features_in_ : int
        Number of features seen during :meth:`fit`.

    See Also
    --------
    kmeans_plusplus : The seeding routine used by :meth:`fit`.

    Notes
    -----
    With ``centroid_update='batch'`` every center is nudged by every batch,
    including centers that received no sample from it. This mirrors the
    classic online scheme this estimator reproduces; use
    ``centroid_update='cluster'`` for the per-cluster variant.

    A cluster whose running size is zero is moved with a learning rate of
    machine epsilon, so it stays put. This differs from dividing by epsilon,
    which would send the center far outside the data.

    Examples
    --------

    >>> from sklmbkmeans import MiniBatchKMeans
    >>> import numpy as np
    >>> X = np.array([[0, 0], [0, 1], [10, 0], [10, 1]])
    >>> km = MiniBatchKMeans(n_clusters=2, batch_size=4,
    ...                      centroid_update="cluster", random_state=0).fit(X)
    >>> np.bincount(km.predict(X)).tolist()
    [2, 2]
    """

    _parameter_constraints = {
        "n_clusters": [Interval(Integral, 1, None, closed="left")],
        "batch_size": [Interval(Integral, 1, None, closed="left")],
        "kernel": [StrOptions({"euclidean", "manhattan"}), callable],
        "min_change": [Interval(Integral, 1, None, closed="left")],
        "max_epochs": [Interval(Integral, 1, None, closed="left")],
        "centroid_update": [StrOptions({"batch", "cluster"})],
        "random_state": ["random_state"],
        "verbose": ["verbose"],
        "use_numba": ["boolean"],
    }

    def __init__(
        self,
        n_clusters=8,
        *,
        batch_size=100,
        kernel="euclidean",
        min_change=1,
        max_epochs=300,
        centroid_update="batch",
        random_state=None,
        verbose=0,
        use_numba=False,
    ):
        self.n_clusters = n_clusters
        self.batch_size = batch_size
        self.kernel = kernel
        self.min_change = min_change
        self.max_epochs = max_epochs
        self.centroid_update = centroid_update
        self.random_state = random_state
        self.verbose = verbose
        self.use_numba = use_numba
        self._validate_params()

    def __sklearn_is_fitted__(self):
        return hasattr(self, "cluster_centers_")

    @property
    def trained(self):
        """bool : Whether the estimator holds a set of fitted centers."""
        return self.__sklearn_is_fitted__()

    # ---------------- internal helpers ----------------
    def _assign(self, X, centers):
        """Return the index of the nearest center for each row of ``X``."""
        if self.use_numba and _NUMBA_AVAILABLE and not callable(self.kernel):
            return _nearest_centroid_numba(  # type: ignore
                np.ascontiguousarray(X, dtype=np.float64),
                np.ascontiguousarray(centers, dtype=np.float64),
                self.kernel == "manhattan",
            )
        return _nearest_centroid(X, centers, self.kernel)

    def _update_centers(self, centers, Xb, batch_labels, sizes):
        """Move ``centers`` in place after one mini-batch.

        Parameters
        ----------
        centers : ndarray of shape (n_clusters, n_features)
            Current centers, updated in place.
        Xb : ndarray of shape (batch_size, n_features)
            Samples of the batch.
        batch_labels : ndarray of shape (batch_size,)
            Labels just assigned to the batch.
        sizes : ndarray of shape (n_clusters,)
            Running cluster sizes, already updated for this batch.
        """
        if self.centroid_update == "batch":
            step = Xb.mean(axis=0)
            rate = np.full(sizes.shape[0], _EPSILON)
            nonempty = sizes > 0
            rate[nonempty] = 1.0 / sizes[nonempty]
            centers *= (1.0 - rate)[:, None]
            centers += rate[:, None] * step
        else:
            for k in np.unique(batch_labels):
                members = Xb[batch_labels == k]
                rate = members.shape[0] / sizes[k]
                centers[k] = (1.0 - rate) * centers[k] + rate * members.mean(axis=0)

    # ---------------- public API ----------------
    @_fit_context(prefer_skip_nested_validation=True)
    def fit(self, X, y=None):
        """Compute mini-batch K-Means clustering.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Training instances. Must hold at least ``n_clusters`` samples.
        y : Ignored
            Present for API consistency.

        Returns
        -------
        self : object
            Fitted estimator.
        """
        # size check runs before validate_data resets n_features_in_, so a
        # rejected refit leaves a previous fit usable
        _check_n_samples(
            check_array(
                X, accept_sparse=False, dtype=[np.float64, np.float32], estimator=self
            ).shape[0],
            self.n_clusters,
        )
        X = validate_data(
            self,
            X,
            accept_sparse=False,
            reset=True,
            dtype=[np.float64, np.float32],
            order="C",
            accept_large_sparse=False,
        )
        rng = check_random_state(self.random_state)
        n_samples = X.shape[0]
        K = self.n_clusters
        verbose = self.verbose

        if verbose:
            print(
                f"Estimator initialized w/ n_clusters={K}, "
                f"kernel={_kernel_name(self.kernel)}, max_epochs={self.max_epochs}"
            )

        centers, _ = kmeans_plusplus(X, K, kernel=self.kernel, random_state=rng)
        if verbose:
            print("Initialization complete")

        labels = np.full(n_samples, -1, dtype=np.int64)
        sizes = np.zeros(K, dtype=np.int64)
        n_changed = []
        converged = False

        for epoch in range(1, self.max_epochs + 1):
            order = rng.permutation(n_samples)
            changed = 0
            for start in range(0, n_samples, self.batch_size):
                batch_idx = order[start : start + self.batch_size]
                Xb = X[batch_idx]
                batch_labels = self._assign(Xb, centers)
                changed += _record_reassignments(labels, sizes, batch_idx, batch_labels)
                self._update_centers(centers, Xb, batch_labels, sizes)

            n_changed.append(changed)
            if verbose:
                print(
                    f"[MiniBatchKMeans] epoch {epoch}/{self.max_epochs}  changed={changed}"
                )
            if changed < self.min_change:
                converged = True
                if verbose:
                    print(
                        f"[MiniBatchKMeans] Converged at epoch {epoch} "
                        f"(changed={changed} < min_change={self.min_change})."
                    )
                break
        else:
            if verbose:
                print(
                    f"[MiniBatchKMeans] Reached max_epochs {self.max_epochs} "
                    f"(changed={n_changed[-1]} >= min_change={self.min_change})."
                )

        final_labels = self._assign(X, centers)
        distinct_clusters = len(set(final_labels))
        if distinct_clusters < K:
            warnings.warn(
                "Number of distinct clusters ({}) found smaller than "
                "n_clusters ({}). Possibly due to duplicate points in X, "
                "or to centroid_update='{}' pulling centers toward the "
                "same batch means.".format(
                    distinct_clusters, K, self.centroid_update
                ),
                ConvergenceWarning,
                stacklevel=2,
            )

        D = _pairwise_distance(X, centers, self.kernel)
        centers.setflags(write=False)

        self.cluster_centers_ = centers
        self.labels_ = final_labels
        self.cluster_sizes_ = sizes
        self.n_epochs_ = epoch
        self.n_changed_ = n_changed
        self.converged_ = converged
        self.inertia_ = float(np.sum(D[np.arange(n_samples), final_labels] ** 2))

        if verbose:
            print("Training complete")
        return self

    def predict(self, X):
        """Predict the closest cluster index for each sample in ``X``.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            New samples.

        Returns
        -------
        labels : ndarray of shape (n_samples,)
            Index of the closest learned cluster center for each sample.
        """
        check_is_fitted(self)
        X = validate_data(
            self,
            X,
            accept_sparse=False,
            reset=False,
            dtype=[np.float64, np.float32],
            order="C",
            accept_large_sparse=False,
        )
        return self._assign(X, self.cluster_centers_)

    def transform(self, X):
        """Compute kernel distances of samples to each cluster center.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Samples to transform.

        Returns
        -------
        distances : ndarray of shape (n_samples, n_clusters)
            Distances to `cluster_centers_` under the configured kernel.
        """
        check_is_fitted(self)
        X = validate_data(
            self,
            X,
            accept_sparse=False,
            reset=False,
            dtype=[np.float64, np.float32],
            order="C",
            accept_large_sparse=False,
        )
        return _pairwise_distance(X, self.cluster_centers_, self.kernel)

    def fit_predict(self, X, y=None):
        """Fit the model to ``X`` and return cluster indices.

        Equivalent to calling ``fit(X)`` followed by ``predict(X)``.
        """
        return self.fit(X, y).labels_

    def score(self, X, y=None):
        """Opposite of the sum of squared distances to the nearest center.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Samples to score.
        y : Ignored
            Present for API consistency.

        Returns
        -------
        score : float
            Negative inertia of ``X`` under the fitted centers.
        """
        check_is_fitted(self)
        X = validate_data(
            self,
            X,
            accept_sparse=False,
            reset=False,
            dtype=[np.float64, np.float32],
            order="C",
            accept_large_sparse=False,
        )
        labels = self._assign(X, self.cluster_centers_)
        D = _pairwise_distance(X, self.cluster_centers_, self.kernel)
        return -float(np.sum(D[np.arange(X.shape[0]), labels] ** 2))
