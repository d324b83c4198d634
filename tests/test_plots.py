"""
Tests for the plotting helpers.
"""

import pytest
import numpy as np
import pandas as pd
from matplotlib.axes import Axes
from scipy.spatial.distance import pdist

from useful.math.clusters import kmeans
from useful.plotting.plots import (
    LEGEND_POSITIONS, classical_mds, fortify_kmeans, multiple_axis_formatter,
    plot_hartigan, plot_kmeans
)

HARTIGAN = pd.DataFrame({
    'Clusters': [2, 3, 4, 5],
    'Hartigan': [50.0, 20.0, 8.0, 3.0],
    'AddCluster': [True, True, False, False],
})


class TestPlotHartigan:
    """Tests for plot_hartigan."""

    def test_returns_axes(self):
        """The plot is drawn and returned."""
        ax = plot_hartigan(HARTIGAN)

        assert isinstance(ax, Axes)
        assert ax.get_title() == "Hartigan's Rule"
        assert ax.get_xlabel() == 'Clusters'
        assert ax.get_ylabel() == 'Hartigan'

    def test_title(self):
        """A custom title is used."""
        ax = plot_hartigan(HARTIGAN, title='Nonsense')

        assert ax.get_title() == 'Nonsense'

    def test_reference_line(self):
        """The threshold line sits at 10."""
        ax = plot_hartigan(HARTIGAN, linecolor='red')

        assert np.allclose(ax.lines[0].get_ydata(), [10, 10])

    def test_legend(self):
        """Points are colored by whether adding a cluster is worthwhile."""
        ax = plot_hartigan(HARTIGAN)
        legend = ax.get_legend()

        assert legend.get_title().get_text() == 'Add Cluster'
        assert [text.get_text() for text in legend.get_texts()] == ['False', 'True']

    def test_smooth(self):
        """The smoothed curve replaces the joined line."""
        ax = plot_hartigan(HARTIGAN, smooth=True, minor=False)

        assert len(ax.lines[1].get_xdata()) == 100


    def test_smooth_without_finite_values(self):
        """A table of infinite statistics falls back to the joined line."""
        hartigan = pd.DataFrame({
            'Clusters': [2, 3],
            'Hartigan': [np.inf, np.inf],
            'AddCluster': [True, True],
        })
        ax = plot_hartigan(hartigan, smooth=True)

        assert list(ax.lines[1].get_xdata()) == [2, 3]


class TestKMeansPlots:
    """Tests for the k-means plots."""

    def test_classical_mds_preserves_distances(self):
        """Two dimensional data is reproduced up to rotation."""
        points = np.random.RandomState(0).normal(size=(12, 2))
        coords = classical_mds(points)

        assert coords.shape == (12, 2)
        assert np.allclose(pdist(coords), pdist(points))

    def test_fortify_with_data(self, iris):
        """The plotting frame has one row per observation."""
        fit = kmeans(iris, 3, random_state=0)
        frame = fortify_kmeans(fit, iris)

        assert len(frame) == 150
        assert list(frame.columns[-3:]) == ['.x', '.y', '.Cluster']
        assert set(frame['.Cluster'].cat.categories) == {1, 2, 3}

    def test_fortify_unnamed_fit(self, iris):
        """A fit on a plain array matches the data columns by position."""
        fit = kmeans(iris.to_numpy(), 3, random_state=0)
        frame = fortify_kmeans(fit, iris)

        assert len(frame) == 150
        assert frame['.Cluster'].tolist() == fit.cluster.tolist()

    def test_fortify_centers(self, iris):
        """Without data only the centers are scaled."""
        fit = kmeans(iris, 3, random_state=0)
        frame = fortify_kmeans(fit)

        assert frame.shape == (3, 3)
        assert frame['.Cluster'].tolist() == [1, 2, 3]

    def test_plot_kmeans(self, iris):
        """The k-means plot has one legend entry per cluster."""
        fit = kmeans(iris, 3, random_state=0)
        ax = plot_kmeans(fit, iris, title='Iris')

        assert ax.get_title() == 'Iris'
        assert ax.get_xlabel() == 'Principal Component 1'
        assert len(ax.get_legend().get_texts()) == 3

    def test_plot_kmeans_classes(self, iris):
        """A class column adds marker shapes."""
        data = iris.copy()
        data['Species'] = np.repeat(['setosa', 'versicolor', 'virginica'], 50)
        fit = kmeans(iris, 3, random_state=0)

        ax = plot_kmeans(fit, data, class_column='Species', legend_position='bottom')
        assert len(ax.get_legend().get_texts()) == 3

    def test_legend_position(self, iris):
        """Only the known legend positions are accepted."""
        fit = kmeans(iris, 2, random_state=0)

        assert plot_kmeans(fit, iris, legend_position='none').get_legend() is None
        with pytest.raises(ValueError):
            plot_kmeans(fit, iris, legend_position='nowhere')
        assert set(LEGEND_POSITIONS) == {'right', 'bottom', 'left', 'top', 'none'}


class TestAxisFormatter:
    """Tests for the tick formatter."""

    def test_labels(self):
        """Ticks get order-of-magnitude labels."""
        formatter = multiple_axis_formatter(unit='M', prefix='$', digits=1)

        assert formatter(1500000, 0) == '$1.5M'
        assert multiple_axis_formatter()(1500) == '2K'
