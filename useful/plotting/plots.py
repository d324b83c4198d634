"""
Plots for k-means diagnostics.

Hartigan's rule results are drawn against the threshold of 10, and k-means
fits are drawn on a two dimensional classical scaling of the data.
"""

import logging
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.ticker import FuncFormatter
from scipy.spatial.distance import pdist, squareform
from typing import Optional

from useful.math.clusters import KMeansFit
from useful.math.hartigan import HARTIGAN_THRESHOLD
from useful.utils.formatters import format_multiple

logger = logging.getLogger(__name__)

LEGEND_POSITIONS = {
    'right': dict(loc='center left', bbox_to_anchor=(1.02, 0.5)),
    'bottom': dict(loc='upper center', bbox_to_anchor=(0.5, -0.12), ncol=4),
    'left': dict(loc='center right', bbox_to_anchor=(-0.12, 0.5)),
    'top': dict(loc='lower center', bbox_to_anchor=(0.5, 1.08), ncol=4),
    'none': None,
}


def _get_axes(ax: Optional[Axes]) -> Axes:
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))
    return ax


def multiple_axis_formatter(**kwargs) -> FuncFormatter:
    """
    Axis tick formatter producing order-of-magnitude labels.

    Args:
        **kwargs: Keyword arguments of format_multiple

    Returns:
        matplotlib FuncFormatter
    """
    def label(value, pos=None) -> str:
        return format_multiple([value], **kwargs)[0]

    return FuncFormatter(label)


def plot_hartigan(hartigan: pd.DataFrame,
                  title: str = "Hartigan's Rule",
                  smooth: bool = False,
                  linecolor: str = 'grey',
                  linestyle: str = '--',
                  linewidth: float = 1.0,
                  minor: bool = True,
                  ax: Optional[Axes] = None) -> Axes:
    """
    Plot the results of Hartigan's rule.

    Args:
        hartigan: Table from select_cluster_count
        title: Plot title
        smooth: Draw a fitted y ~ log(x) curve instead of joining the points
        linecolor: Color of the reference line at 10
        linestyle: Style of the reference line at 10
        linewidth: Width of the reference line at 10
        minor: Whether to show minor ticks at every cluster count
        ax: Axes to draw on (a new figure is created if None)

    Returns:
        The Axes
    """
    ax = _get_axes(ax)
    clusters = hartigan['Clusters'].to_numpy(dtype=float)
    values = hartigan['Hartigan'].to_numpy(dtype=float)
    add = hartigan['AddCluster'].to_numpy(dtype=bool)

    ax.axhline(HARTIGAN_THRESHOLD, color=linecolor, linestyle=linestyle, linewidth=linewidth)

    finite = np.isfinite(values)
    if smooth and np.count_nonzero(finite) >= 2:
        slope, intercept = np.polyfit(np.log(clusters[finite]), values[finite], 1)
        grid = np.linspace(clusters.min(), clusters.max(), 100)
        ax.plot(grid, intercept + slope * np.log(grid), color='steelblue')
    else:
        ax.plot(clusters, values, color='black')

    for flag, color in ((False, 'tab:red'), (True, 'tab:cyan')):
        mask = add == flag
        if np.any(mask):
            ax.scatter(clusters[mask], values[mask], color=color, label=str(flag), zorder=3)

    if len(clusters) and minor:
        ax.set_xticks(np.arange(1, clusters.max() + 2), minor=True)
        ax.grid(True, which='minor', alpha=0.2)

    ax.legend(title='Add Cluster')
    ax.set_xlabel('Clusters')
    ax.set_ylabel('Hartigan')
    ax.set_title(title)
    return ax


def classical_mds(points: np.ndarray, k: int = 2) -> np.ndarray:
    """
    Classical multidimensional scaling of Euclidean distances.

    Args:
        points: Data matrix
        k: Number of dimensions to keep

    Returns:
        Matrix of coordinates (n x k)
    """
    points = np.asarray(points, dtype=float)
    n = points.shape[0]
    if n == 1:
        return np.zeros((1, k))

    squared = squareform(pdist(points)) ** 2
    centering = np.eye(n) - np.ones((n, n)) / n
    b = -0.5 * centering @ squared @ centering

    eigenvalues, eigenvectors = np.linalg.eigh(b)
    order = np.argsort(eigenvalues)[::-1][:k]
    scale = np.sqrt(np.clip(eigenvalues[order], 0, None))
    coords = eigenvectors[:, order] * scale

    if coords.shape[1] < k:
        coords = np.hstack([coords, np.zeros((n, k - coords.shape[1]))])
    return coords


def fortify_kmeans(model: KMeansFit, data: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    """
    Build a plotting frame from a k-means fit.

    Args:
        model: Fitted k-means model
        data: Data that was clustered; if None only the centers are scaled

    Returns:
        DataFrame with .x, .y and .Cluster columns (appended to data if given)
    """
    if data is None:
        coords = classical_mds(model.centers)
        centers = pd.DataFrame(coords, columns=['.x', '.y'])
        centers['.Cluster'] = pd.Categorical(np.arange(1, model.k + 1))
        return centers

    frame = pd.DataFrame(data).copy()
    if all(name in frame.columns for name in model.feature_names):
        used = frame[model.feature_names]
    else:
        # Fitted on an unnamed matrix; take the leading columns by position
        used = frame.iloc[:, :model.centers.shape[1]]
    coords = classical_mds(used.to_numpy(dtype=float))
    frame['.x'] = coords[:, 0]
    frame['.y'] = coords[:, 1]
    frame['.Cluster'] = pd.Categorical(model.cluster)
    return frame


def plot_kmeans(model: KMeansFit,
                data: Optional[pd.DataFrame] = None,
                class_column: Optional[str] = None,
                size: float = 20,
                legend_position: str = 'right',
                title: str = 'K-Means Results',
                xlabel: str = 'Principal Component 1',
                ylabel: str = 'Principal Component 2',
                ax: Optional[Axes] = None) -> Axes:
    """
    Scatter plot of a k-means fit on a two dimensional scaling.

    Args:
        model: Fitted k-means model
        data: Data that was clustered (None plots the centers)
        class_column: Optional column of known classes, drawn as marker shapes
        size: Marker size
        legend_position: One of right, bottom, left, top, none
        title: Plot title
        xlabel: x axis label
        ylabel: y axis label
        ax: Axes to draw on

    Returns:
        The Axes
    """
    if legend_position not in LEGEND_POSITIONS:
        choices = ', '.join(f"'{p}'" for p in LEGEND_POSITIONS)
        raise ValueError(f"'legend_position' should be one of {choices}, got {legend_position!r}")

    to_plot = fortify_kmeans(model, data)
    ax = _get_axes(ax)
    colors = plt.get_cmap('tab10')
    markers = ['o', '^', 's', 'D', 'v', 'P', 'X', '*']

    if class_column is not None:
        classes = pd.Categorical(to_plot[class_column])
        shapes = {c: markers[i % len(markers)] for i, c in enumerate(classes.categories)}
    else:
        classes = None

    for i, cluster in enumerate(to_plot['.Cluster'].cat.categories):
        in_cluster = (to_plot['.Cluster'] == cluster).to_numpy()
        color = colors(i % 10)
        if classes is None:
            ax.scatter(to_plot.loc[in_cluster, '.x'], to_plot.loc[in_cluster, '.y'],
                       s=size, color=color, label=str(cluster))
            continue
        for category, marker in shapes.items():
            mask = in_cluster & (np.asarray(classes) == category)
            if np.any(mask):
                ax.scatter(to_plot.loc[mask, '.x'], to_plot.loc[mask, '.y'],
                           s=size, color=color, marker=marker)
        ax.scatter([], [], color=color, label=str(cluster))

    legend_kwargs = LEGEND_POSITIONS[legend_position]
    if legend_kwargs is not None:
        ax.legend(title='Cluster', **legend_kwargs)

    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    return ax
