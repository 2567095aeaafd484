"""
Centroid update rules of MiniBatchKMeans
========================================

This example fits :class:`~sklmbkmeans.MiniBatchKMeans` on three Gaussian
blobs with both centroid update rules and compares them with
scikit-learn's own mini-batch k-means.

* ``centroid_update='batch'`` moves every center toward the mean of each
  mini-batch, so centers drift toward the global mean.
* ``centroid_update='cluster'`` moves only the centers represented in the
  batch, toward the mean of their own members.

It is intended for the gallery and requires matplotlib to render plots.
"""

import time

import matplotlib.pyplot as plt
from sklearn.cluster import MiniBatchKMeans as SkMiniBatchKMeans
from sklearn.datasets import make_blobs
from sklearn.metrics import adjusted_rand_score

from sklmbkmeans import MiniBatchKMeans


def _plot(ax, X, labels, title, *, centers=None, runtime=None, ari=None):
    ax.scatter(X[:, 0], X[:, 1], c=labels, s=10, cmap="tab10")
    ax.set_title(title)
    ax.set_xticks([])
    ax.set_yticks([])
    notes = []
    if ari is not None:
        notes.append(f"ARI={ari:.2f}")
    if runtime is not None:
        notes.append((f"{runtime:.2f}s").lstrip("0"))
    if notes:
        ax.text(
            0.99,
            0.01,
            "  ".join(notes),
            transform=ax.transAxes,
            fontsize=9,
            ha="right",
            va="bottom",
        )
    if centers is not None:
        ax.scatter(
            centers[:, 0],
            centers[:, 1],
            s=80,
            c="red",
            marker="x",
            linewidths=1.5,
        )


def main():
    X, y = make_blobs(n_samples=3000, centers=3, cluster_std=1.0, random_state=0)

    fig, axes = plt.subplots(1, 4, figsize=(14, 4), constrained_layout=True)
    _plot(axes[0], X, y, "Ground truth")

    estimators = [
        ("batch update", MiniBatchKMeans(n_clusters=3, batch_size=100, random_state=0)),
        (
            "cluster update",
            MiniBatchKMeans(
                n_clusters=3, batch_size=100, centroid_update="cluster", random_state=0
            ),
        ),
        ("sklearn MiniBatchKMeans", SkMiniBatchKMeans(n_clusters=3, batch_size=100, random_state=0)),
    ]
    for ax, (title, est) in zip(axes[1:], estimators):
        t0 = time.perf_counter()
        est.fit(X)
        t1 = time.perf_counter()
        _plot(
            ax,
            X,
            est.labels_,
            title,
            centers=est.cluster_centers_,
            runtime=(t1 - t0),
            ari=adjusted_rand_score(y, est.labels_),
        )

    plt.show()


if __name__ == "__main__":
    main()
