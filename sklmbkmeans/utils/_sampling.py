"""Weighted random sampling helpers."""

import numpy as np
from sklearn.utils import check_random_state


def weighted_sample_with_replacement(weights, n_draws=1, random_state=None):
    """Draw indices with replacement, proportionally to ``weights``.

    The draw is a scan of the cumulative distribution of the normalised
    weights. A weight vector summing to zero degrades to uniform sampling.

    Parameters
    ----------
    weights : array-like of shape (n_samples,)
        Nonnegative sampling weights. They do not need to sum to one.
    n_draws : int, default=1
        Number of indices to draw.
    random_state : int, RandomState instance or None, default=None
        Source of randomness. Pass an int for reproducible draws.

    Returns
    -------
    indices : ndarray of shape (n_draws,)
        Sampled row indices.
    """
    rng = check_random_state(random_state)
    weights = np.asarray(weights, dtype=float)
    if weights.ndim != 1 or weights.shape[0] == 0:
        raise ValueError("weights must be a non-empty 1d array.")
    if np.any(weights < 0) or not np.all(np.isfinite(weights)):
        raise ValueError("weights must be finite and nonnegative.")

    total = weights.sum()
    if total <= 0:
        return rng.randint(weights.shape[0], size=n_draws)

    cumulative = np.cumsum(weights / total)
    draws = rng.uniform(0.0, cumulative[-1], size=n_draws)
    indices = np.searchsorted(cumulative, draws, side="right")
    # guards against rounding in the last cumulative bucket
    return np.minimum(indices, weights.shape[0] - 1)
