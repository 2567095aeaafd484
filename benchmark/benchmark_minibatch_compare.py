import time
import numpy as np
from sklearn.cluster import MiniBatchKMeans as SkMiniBatchKMeans
from sklearn.metrics import adjusted_rand_score, normalized_mutual_info_score
from sklmbkmeans import MiniBatchKMeans

try:
    import matplotlib.pyplot as plt
    _HAVE_PLT = True
except Exception:
    _HAVE_PLT = False


def make_imbalanced(seed=0):
    rng = np.random.RandomState(seed)
    # Three Gaussian clusters with heavy imbalance
    n_big, n_mid, n_small = 2000, 50, 30
    mu_big = np.array([-5.0, -2.0])
    mu_mid = np.array([0.0, 0.0])
    mu_small = np.array([5.0, 5.0])
    cov = np.eye(2)
    X_big = rng.multivariate_normal(mu_big, cov, size=n_big)
    X_mid = rng.multivariate_normal(mu_mid, cov, size=n_mid)
    X_small = rng.multivariate_normal(mu_small, cov, size=n_small)
    X = np.vstack([X_big, X_mid, X_small])
    y = np.hstack([
        np.zeros(n_big, dtype=int),
        np.ones(n_mid, dtype=int),
        np.full(n_small, 2, dtype=int)
    ])
    return X, y


def run_and_report(name, fit_callable, X, y):
    t0 = time.time()
    model = fit_callable()
    t1 = time.time()
    labels = model.predict(X)
    return {
        'name': name,
        'model': model,
        'time_sec': t1 - t0,
        'ARI': adjusted_rand_score(y, labels),
        'NMI': normalized_mutual_info_score(y, labels),
        'inertia': -model.score(X),
        'cluster_sizes': np.bincount(labels, minlength=model.n_clusters),
        'epochs_or_iters': getattr(model, 'n_epochs_', getattr(model, 'n_steps_', None)),
    }


def main():
    X, y = make_imbalanced(seed=42)
    n_clusters = 3

    # every center follows every batch mean
    def batch_update():
        return MiniBatchKMeans(n_clusters=n_clusters, batch_size=256, max_epochs=30,
                               centroid_update='batch', random_state=42).fit(X)

    # only represented centers follow their own members
    def cluster_update():
        return MiniBatchKMeans(n_clusters=n_clusters, batch_size=256, max_epochs=30,
                               centroid_update='cluster', random_state=42).fit(X)

    def sklearn_reference():
        return SkMiniBatchKMeans(n_clusters=n_clusters, batch_size=256, max_iter=30,
                                 n_init=1, random_state=42).fit(X)

    results = [
        run_and_report('MBK-batch', batch_update, X, y),
        run_and_report('MBK-cluster', cluster_update, X, y),
        run_and_report('sklearn-MBK', sklearn_reference, X, y),
    ]

    print("\n=== Comparison Results ===")
    header = f"{'Method':14s} {'Time(s)':>8s} {'ARI':>7s} {'NMI':>7s} {'Inertia':>12s} {'Epoch/Iter':>10s}  Cluster Sizes"
    print(header)
    print('-'*len(header))
    for r in results:
        print(f"{r['name']:14s} {r['time_sec']:8.3f} {r['ARI']:7.3f} {r['NMI']:7.3f} {r['inertia']:12.4f} {str(r['epochs_or_iters']):>10s}  {r['cluster_sizes']}")

    if _HAVE_PLT:
        fig, axes = plt.subplots(1, 4, figsize=(16, 4))
        axes[0].scatter(X[:, 0], X[:, 1], c=y, s=10, cmap='viridis', alpha=0.6)
        axes[0].set_title('True labels')
        for ax, r in zip(axes[1:], results):
            model = r['model']
            ax.scatter(X[:, 0], X[:, 1], c=model.predict(X), s=10, cmap='viridis', alpha=0.6)
            ax.scatter(model.cluster_centers_[:, 0], model.cluster_centers_[:, 1], c='red', s=60, marker='x')
            ax.set_title(r['name'])
        plt.tight_layout()
        plt.show()

if __name__ == '__main__':
    main()
