"""
K-means clustering implementation.

This module provides the k-means routine used by the cluster-count selector,
with the four classic algorithm variants (Hartigan-Wong, Lloyd, Forgy and
MacQueen), multiple random starts and per-cluster within sum-of-squares.
"""

import logging
import warnings
import numpy as np
import pandas as pd
from typing import List, Optional, Union, Any
from sklearn.exceptions import ConvergenceWarning
from sklearn.utils import check_random_state

logger = logging.getLogger(__name__)

ALGORITHMS = ('Hartigan-Wong', 'Lloyd', 'Forgy', 'MacQueen')


class KMeansFit:
    """
    Result of a k-means fit.
    """

    def __init__(self,
                centers: np.ndarray,
                labels: np.ndarray,
                data: np.ndarray,
                iterations: int,
                converged: bool,
                algorithm: str,
                feature_names: Optional[List[Any]] = None):
        """
        Initialize a fit from its final centers and assignments.

        Args:
            centers: Final cluster centers (k x p)
            labels: Zero-based cluster index of each row
            data: The data matrix that was clustered
            iterations: Number of iterations used by the winning start
            converged: Whether the winning start converged
            algorithm: Algorithm variant used
            feature_names: Optional names of the data columns
        """
        self.centers = np.asarray(centers, dtype=float)
        self.labels = np.asarray(labels, dtype=int)
        self.iterations = iterations
        self.converged = converged
        self.algorithm = algorithm
        if feature_names is None:
            feature_names = list(range(self.centers.shape[1]))
        self.feature_names = list(feature_names)

        k = self.centers.shape[0]
        self.size = np.bincount(self.labels, minlength=k)
        self.withinss = within_sum_of_squares(data, self.centers, self.labels)
        self.totss = float(np.sum((data - data.mean(axis=0)) ** 2))
        self.tot_withinss = float(np.sum(self.withinss))
        self.betweenss = self.totss - self.tot_withinss

    @property
    def cluster(self) -> np.ndarray:
        """One-based cluster labels."""
        return self.labels + 1

    @property
    def k(self) -> int:
        """Number of clusters."""
        return self.centers.shape[0]

    def centers_frame(self) -> pd.DataFrame:
        """Centers as a DataFrame indexed by one-based cluster label."""
        return pd.DataFrame(
            self.centers,
            columns=self.feature_names,
            index=pd.RangeIndex(1, self.k + 1)
        )

    def __repr__(self) -> str:
        """String representation of the fit."""
        return (f"KMeansFit(k={self.k}, algorithm={self.algorithm!r}, "
                f"tot_withinss={self.tot_withinss:.4f})")


def validate_algorithm(algorithm: str) -> str:
    """
    Check that an algorithm name is one of the supported variants.

    Args:
        algorithm: Algorithm name

    Returns:
        The algorithm name
    """
    if algorithm not in ALGORITHMS:
        choices = ', '.join(f"'{a}'" for a in ALGORITHMS)
        raise ValueError(f"'algorithm' should be one of {choices}, got {algorithm!r}")
    return algorithm


def as_data_matrix(data: Union[pd.DataFrame, np.ndarray, List[List[float]]]) -> np.ndarray:
    """
    Convert the input to a finite 2-D float matrix.

    Args:
        data: DataFrame, array or nested list

    Returns:
        2-D numpy array
    """
    if isinstance(data, pd.DataFrame):
        non_numeric = [c for c in data.columns if not pd.api.types.is_numeric_dtype(data[c])
                       or pd.api.types.is_bool_dtype(data[c])]
        if non_numeric:
            raise TypeError(f"data must be numeric, found non-numeric columns: {non_numeric}")
        matrix = data.to_numpy(dtype=float)
    else:
        array = np.asarray(data)
        if array.dtype.kind not in 'iuf':
            raise TypeError("data must be numeric")
        matrix = array.astype(float)

    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2:
        raise ValueError("data must be two dimensional")
    if not np.all(np.isfinite(matrix)):
        raise ValueError("data must not contain NaN or infinite values")

    return matrix


def squared_distances(data: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    Squared Euclidean distance from every row to every center.

    Args:
        data: Data matrix (n x p)
        centers: Centers (k x p)

    Returns:
        Matrix of squared distances (n x k)
    """
    diff = data[:, np.newaxis, :] - centers[np.newaxis, :, :]
    return np.einsum('ijk,ijk->ij', diff, diff)


def init_centers(data: np.ndarray, k: int, rng: np.random.RandomState) -> np.ndarray:
    """
    Pick k distinct rows of the data as starting centers.

    Args:
        data: Data matrix
        k: Number of clusters
        rng: Random state used for the draw

    Returns:
        Starting centers (k x p)
    """
    distinct = np.unique(data, axis=0)
    if distinct.shape[0] < k:
        raise ValueError("more cluster centers than distinct data points.")

    chosen = rng.choice(distinct.shape[0], size=k, replace=False)
    return distinct[chosen].copy()


def assign_points(data: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    Assign each data point to the nearest center.

    Args:
        data: Data matrix
        centers: Current centers

    Returns:
        Zero-based index of the nearest center for each row
    """
    return np.argmin(squared_distances(data, centers), axis=1)


def update_centers(data: np.ndarray, labels: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    Recompute each center as the mean of its members.

    Centers without members keep their current position.

    Args:
        data: Data matrix
        labels: Zero-based cluster assignments
        centers: Current centers

    Returns:
        Updated centers
    """
    new_centers = centers.copy()
    for j in range(centers.shape[0]):
        members = labels == j
        if np.any(members):
            new_centers[j] = data[members].mean(axis=0)
    return new_centers


def within_sum_of_squares(data: np.ndarray, centers: np.ndarray, labels: np.ndarray) -> np.ndarray:
    """
    Within-cluster sum of squares for each cluster.

    Args:
        data: Data matrix
        centers: Cluster centers
        labels: Zero-based cluster assignments

    Returns:
        Array of length k
    """
    residuals = data - centers[labels]
    per_point = np.sum(residuals ** 2, axis=1)
    return np.bincount(labels, weights=per_point, minlength=centers.shape[0])


def _lloyd(data: np.ndarray, centers: np.ndarray, iter_max: int):
    """Batch k-means: reassign everything, then move every center."""
    labels = assign_points(data, centers)
    centers = update_centers(data, labels, centers)

    for iteration in range(1, iter_max + 1):
        new_labels = assign_points(data, centers)
        if np.array_equal(new_labels, labels):
            return centers, labels, iteration, True
        labels = new_labels
        centers = update_centers(data, labels, centers)

    return centers, labels, iter_max, False


def _macqueen(data: np.ndarray, centers: np.ndarray, iter_max: int):
    """Online k-means: centers move as soon as a point changes cluster."""
    labels = assign_points(data, centers)
    centers = update_centers(data, labels, centers)
    counts = np.bincount(labels, minlength=centers.shape[0]).astype(float)

    for iteration in range(1, iter_max + 1):
        moved = False
        for i, point in enumerate(data):
            nearest = int(np.argmin(np.sum((centers - point) ** 2, axis=1)))
            current = labels[i]
            if nearest == current:
                continue

            # Remove from the old cluster and add to the new one
            counts[current] -= 1
            if counts[current] > 0:
                centers[current] += (centers[current] - point) / counts[current]
            counts[nearest] += 1
            centers[nearest] += (point - centers[nearest]) / counts[nearest]
            labels[i] = nearest
            moved = True

        if not moved:
            return centers, labels, iteration, True

    return centers, labels, iter_max, False


def _hartigan_wong(data: np.ndarray, centers: np.ndarray, iter_max: int):
    """
    Hartigan's single-point transfer method.

    A point leaves its cluster l for cluster j when the increase in
    within-SS from adding it to j, n_j/(n_j+1) * d(x, c_j)^2, is smaller than
    the decrease from removing it from l, n_l/(n_l-1) * d(x, c_l)^2.
    """
    labels = assign_points(data, centers)
    centers = update_centers(data, labels, centers)
    counts = np.bincount(labels, minlength=centers.shape[0]).astype(float)

    for iteration in range(1, iter_max + 1):
        moved = False
        for i, point in enumerate(data):
            current = labels[i]
            if counts[current] <= 1:
                continue

            dists = np.sum((centers - point) ** 2, axis=1)
            removal = counts[current] / (counts[current] - 1) * dists[current]
            addition = counts / (counts + 1) * dists
            addition[current] = np.inf
            best = int(np.argmin(addition))

            if addition[best] >= removal:
                continue

            counts[current] -= 1
            centers[current] += (centers[current] - point) / counts[current]
            counts[best] += 1
            centers[best] += (point - centers[best]) / counts[best]
            labels[i] = best
            moved = True

        if not moved:
            return centers, labels, iteration, True

    return centers, labels, iter_max, False


_RUNNERS = {
    'Hartigan-Wong': _hartigan_wong,
    'Lloyd': _lloyd,
    'Forgy': _lloyd,
    'MacQueen': _macqueen,
}


def kmeans(data: Union[pd.DataFrame, np.ndarray],
          centers: Union[int, np.ndarray],
          nstart: int = 1,
          iter_max: int = 10,
          algorithm: str = 'Hartigan-Wong',
          random_state: Optional[Union[int, np.random.RandomState]] = None) -> KMeansFit:
    """
    Perform k-means clustering on the data.

    Args:
        data: Data matrix or numeric DataFrame
        centers: Number of clusters, or an explicit matrix of starting centers
        nstart: Number of random starts; the start with the lowest total
            within sum of squares wins
        iter_max: Maximum number of iterations per start
        algorithm: One of 'Hartigan-Wong', 'Lloyd', 'Forgy', 'MacQueen'
        random_state: Seed or RandomState used for the random starts

    Returns:
        KMeansFit for the best start
    """
    algorithm = validate_algorithm(algorithm)
    if int(nstart) < 1:
        raise ValueError("'nstart' must be at least 1")
    if int(iter_max) < 1:
        raise ValueError("'iter_max' must be at least 1")

    feature_names = list(data.columns) if isinstance(data, pd.DataFrame) else None
    matrix = as_data_matrix(data)
    rng = check_random_state(random_state)

    if np.ndim(centers) == 0:
        k = int(centers)
        if k < 1:
            raise ValueError("number of cluster centers must be at least 1")
        starts = [init_centers(matrix, k, rng) for _ in range(int(nstart))]
    else:
        given = np.asarray(centers, dtype=float)
        if np.unique(given, axis=0).shape[0] < given.shape[0]:
            raise ValueError("initial centers are not distinct")
        if given.shape[1] != matrix.shape[1]:
            raise ValueError("must have same number of columns in 'data' and 'centers'")
        k = given.shape[0]
        starts = [given.copy()]

    runner = _RUNNERS[algorithm]
    best = None

    for start in starts:
        if k == 1:
            labels = np.zeros(matrix.shape[0], dtype=int)
            result = (matrix.mean(axis=0, keepdims=True), labels, 1, True)
        else:
            result = runner(matrix, start, int(iter_max))

        fit_centers, labels, iterations, converged = result
        tot = float(np.sum(within_sum_of_squares(matrix, fit_centers, labels)))
        if best is None or tot < best[0]:
            best = (tot, fit_centers, labels, iterations, converged)

    _, fit_centers, labels, iterations, converged = best

    if not converged:
        warnings.warn(
            f"{algorithm} k-means did not converge in {iter_max} iterations",
            ConvergenceWarning
        )

    fit = KMeansFit(fit_centers, labels, matrix, iterations, converged, algorithm, feature_names)
    logger.debug(f"Fitted {fit}")
    return fit
