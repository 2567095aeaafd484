import numpy as np

from sklmbkmeans import MiniBatchKMeans, kmeans_plusplus

# X is an (N, P) matrix
X = np.array([[0, 0], [0, 1], [10, 0], [10, 1]], dtype=float)

centers, indices = kmeans_plusplus(X, 2, random_state=0)
print("k-means++ seeds:\n", centers)
print("seed rows:", indices)

model = MiniBatchKMeans(n_clusters=2, batch_size=4, max_epochs=50, random_state=0, verbose=1)
labels = model.fit_predict(X)
print("cluster labels:", labels)
print("cluster centers:\n", model.cluster_centers_)
print("running cluster sizes:", model.cluster_sizes_)
print("reassignments per epoch:", model.n_changed_)
print("converged:", model.converged_, "after", model.n_epochs_, "epochs")

# per-cluster update rule
model = MiniBatchKMeans(n_clusters=2, batch_size=4, centroid_update="cluster", random_state=0)
model.fit(X)
print("\ncluster centers (cluster update):\n", model.cluster_centers_)

# predict new data
X_new = np.array([[1.0, 0.2], [9.0, 0.8]])
print("predicted clusters:", model.predict(X_new))
# transform gives the distance matrix
print("distance matrix:\n", model.transform(X_new))
print("score (negative inertia):", model.score(X_new))

# any callable works as the distance kernel
def chebyshev(a, b):
    return float(np.max(np.abs(a - b)))

model = MiniBatchKMeans(n_clusters=2, batch_size=2, kernel=chebyshev, random_state=0).fit(X)
print("\ncluster labels (chebyshev):", model.labels_)
