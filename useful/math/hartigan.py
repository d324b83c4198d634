"""
Hartigan's rule for choosing the number of k-means clusters.

A series of k-means models is fit for increasing cluster counts and each
consecutive pair is compared with Hartigan's statistic. Adding the k-th
cluster is considered worthwhile when the statistic exceeds 10.
"""

import logging
import numpy as np
import pandas as pd
from typing import Optional, Sequence, Union
from sklearn.utils import check_random_state

from useful.math.clusters import as_data_matrix, kmeans, validate_algorithm

logger = logging.getLogger(__name__)

HARTIGAN_THRESHOLD = 10

ZERO_DIVISION_POLICIES = ('inf', 'raise')


def compute_hartigan(fit_actual_wss: Sequence[float],
                     fit_plus1_wss: Sequence[float],
                     nrow: int,
                     zero_division: str = 'inf') -> float:
    """
    Compute Hartigan's statistic for a k-cluster fit against a (k+1)-cluster fit.

    Args:
        fit_actual_wss: Within-cluster sum of squares of the smaller fit
        fit_plus1_wss: Within-cluster sum of squares of the larger fit
        nrow: Number of observations in the data
        zero_division: What to do when the larger fit has zero total
            within sum of squares: 'inf' lets the division produce inf
            (or nan for 0/0), 'raise' raises ZeroDivisionError

    Returns:
        Hartigan's statistic
    """
    if zero_division not in ZERO_DIVISION_POLICIES:
        raise ValueError(f"'zero_division' should be one of {ZERO_DIVISION_POLICIES}, got {zero_division!r}")

    actual = np.asarray(fit_actual_wss, dtype=float)
    plus1 = np.asarray(fit_plus1_wss, dtype=float)
    actual_total = np.float64(np.sum(actual))
    plus1_total = np.float64(np.sum(plus1))

    if plus1_total == 0 and zero_division == 'raise':
        raise ZeroDivisionError(
            f"the {plus1.size}-cluster fit has zero within-cluster sum of squares"
        )

    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = actual_total / plus1_total

    return float((ratio - 1) * (nrow - actual.size - 1))


def select_cluster_count(data: Union[pd.DataFrame, np.ndarray],
                         max_clusters: int = 12,
                         restarts: int = 1,
                         max_iterations: int = 10,
                         algorithm: str = 'Hartigan-Wong',
                         seed: Optional[int] = None,
                         spectral: bool = False,
                         zero_division: str = 'inf') -> pd.DataFrame:
    """
    Fit a series of k-means models and apply Hartigan's rule.

    For each cluster count k from 2 to max_clusters - 1, a model with k - 1
    centers and a model with k centers are fit and compared. When a seed is
    given, the random state is reset before every single fit, so each row
    only depends on the seed and its own two fits.

    Args:
        data: Numeric data (rows are observations)
        max_clusters: Upper bound (exclusive) on the cluster counts reported
        restarts: Number of random starts per fit
        max_iterations: Maximum iterations per fit
        algorithm: One of 'Hartigan-Wong', 'Lloyd', 'Forgy', 'MacQueen'
        seed: Optional random seed
        spectral: Whether the columns are a spectral embedding; if so the
            fit with k centers only uses the first k columns
        zero_division: Policy passed to compute_hartigan

    Returns:
        DataFrame with columns Clusters, Hartigan and AddCluster
    """
    algorithm = validate_algorithm(algorithm)

    if int(max_clusters) < 2:
        raise ValueError("'max_clusters' must be at least 2")
    if int(restarts) < 1:
        raise ValueError("'restarts' must be at least 1")
    if int(max_iterations) < 1:
        raise ValueError("'max_iterations' must be at least 1")
    if zero_division not in ZERO_DIVISION_POLICIES:
        raise ValueError(f"'zero_division' should be one of {ZERO_DIVISION_POLICIES}, got {zero_division!r}")

    matrix = as_data_matrix(data)
    n_rows, n_cols = matrix.shape
    cluster_counts = list(range(2, int(max_clusters)))

    if spectral and cluster_counts and cluster_counts[-1] > n_cols:
        raise ValueError(
            f"spectral fitting with {cluster_counts[-1]} clusters needs at least "
            f"{cluster_counts[-1]} columns, data has {n_cols}"
        )

    # Shared unseeded state so consecutive fits draw different starts
    shared_rng = None if seed is not None else check_random_state(None)

    def fit(k: int):
        columns = matrix[:, :k] if spectral else matrix
        rng = np.random.RandomState(seed) if seed is not None else shared_rng
        return kmeans(columns, k, nstart=restarts, iter_max=max_iterations,
                      algorithm=algorithm, random_state=rng)

    statistics = []
    for i in cluster_counts:
        fit_actual = fit(i - 1)
        fit_plus1 = fit(i)
        statistic = compute_hartigan(fit_actual.withinss, fit_plus1.withinss,
                                     n_rows, zero_division=zero_division)
        logger.debug(f"Hartigan statistic for {i} clusters: {statistic}")
        statistics.append(statistic)

    hartigan = pd.DataFrame({
        'Clusters': pd.Series(cluster_counts, dtype=int),
        'Hartigan': pd.Series(statistics, dtype=float),
    })
    hartigan['AddCluster'] = hartigan['Hartigan'] > HARTIGAN_THRESHOLD

    logger.info(f"Evaluated Hartigan's rule for {len(hartigan)} cluster counts "
                f"using {algorithm}")
    return hartigan
