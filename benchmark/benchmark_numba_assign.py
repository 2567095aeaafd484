"""Numba acceleration benchmark for MiniBatchKMeans.

Measures wall-clock speed of MiniBatchKMeans with and without ``use_numba``
over several repeats on a synthetic (optionally imbalanced) dataset. If
``numba`` is not installed the script still runs the pure NumPy path and
prints an informational message.

Run:

    python benchmark/benchmark_numba_assign.py
"""

import time
import statistics
import numpy as np
from sklmbkmeans import MiniBatchKMeans

try:
    from numba import njit  # noqa: F401
    HAVE_NUMBA = True
except Exception:
    HAVE_NUMBA = False


def make_data(n_samples=12000, n_features=16, n_clusters=5, imbalance=True, seed=42):
    rng = np.random.RandomState(seed)
    if imbalance:
        base = n_samples // (2 * n_clusters)
        # geometric progression of cluster sizes
        sizes = [base * (2 ** (n_clusters - k - 1)) for k in range(n_clusters)]
        ssum = sum(sizes)
        sizes = [max(5, int(sz * n_samples / ssum)) for sz in sizes]
        sizes[-1] += n_samples - sum(sizes)
    else:
        sizes = [n_samples // n_clusters] * n_clusters
        sizes[-1] += n_samples - sum(sizes)

    centers_true = rng.uniform(-5, 5, size=(n_clusters, n_features))
    X_parts = []
    y = []
    for k, sz in enumerate(sizes):
        cov = np.diag(rng.uniform(0.3, 1.2, size=n_features))
        X_parts.append(rng.multivariate_normal(centers_true[k], cov, size=sz))
        y.append(np.full(sz, k))
    return np.vstack(X_parts), np.concatenate(y), centers_true


def time_run(X, n_clusters, use_numba, repeats=3, max_epochs=50, batch_size=256):
    durations = []
    inertia = None
    label_hist = None
    for r in range(repeats):
        # same seed for every repeat so both variants do identical work
        model = MiniBatchKMeans(n_clusters=n_clusters, batch_size=batch_size,
                                max_epochs=max_epochs, random_state=1234,
                                use_numba=use_numba)
        t0 = time.time()
        model.fit(X)
        t1 = time.time()
        durations.append(t1 - t0)
        if inertia is None:
            inertia = model.inertia_
            label_hist = np.bincount(model.labels_, minlength=model.n_clusters)
    return {
        'use_numba': use_numba,
        'durations': durations,
        'mean': statistics.mean(durations),
        'std': statistics.pstdev(durations) if len(durations) > 1 else 0.0,
        'inertia': inertia,
        'label_hist': label_hist,
    }


def maybe_warmup(X, n_clusters):
    if not HAVE_NUMBA:
        return
    print('[Warmup] Running one unmeasured JIT warm-up (numba).')
    MiniBatchKMeans(n_clusters=n_clusters, max_epochs=2, random_state=999,
                    use_numba=True).fit(X[: min(2000, len(X))])


def main():
    X, y, centers_true = make_data()
    n_clusters = centers_true.shape[0]

    if HAVE_NUMBA:
        maybe_warmup(X, n_clusters)
    else:
        print('[Info] numba not installed; only measuring pure NumPy path.')

    repeats = 5 if HAVE_NUMBA else 3

    res_no = time_run(X, n_clusters, use_numba=False, repeats=repeats)
    res_yes = time_run(X, n_clusters, use_numba=True, repeats=repeats) if HAVE_NUMBA else None

    print('\n=== MiniBatchKMeans numba Benchmark ===')
    header = f"{'Variant':15s} {'Mean(s)':>10s} {'Std(s)':>9s} {'Inertia':>14s} {'Hist':>24s}" \
             + ("  Durations" )
    print(header)
    print('-'*len(header))
    print(f"{'No numba':15s} {res_no['mean']:10.4f} {res_no['std']:9.4f} {res_no['inertia']:14.4f} {str(res_no['label_hist']):>24s}  {res_no['durations']}")
    if res_yes:
        print(f"{'With numba':15s} {res_yes['mean']:10.4f} {res_yes['std']:9.4f} {res_yes['inertia']:14.4f} {str(res_yes['label_hist']):>24s}  {res_yes['durations']}")

    if res_yes and not np.isclose(res_no['inertia'], res_yes['inertia']):
        print('[Warn] Inertias differ. Check for near-tie assignments.')

    speedup = (res_no['mean'] / res_yes['mean']) if (res_yes and res_yes['mean'] > 0) else None
    if speedup:
        print(f"\nApprox speedup (No numba / With numba): {speedup:.2f}x")

    print('\nDone.')

if __name__ == '__main__':
    main()
