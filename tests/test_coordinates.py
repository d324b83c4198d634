"""
Tests for coordinate conversion and interval mapping.
"""

import numpy as np
import pandas as pd

from useful.math.coordinates import cart2pol, map_to_interval, pol2cart


class TestPolarConversion:
    """Tests for pol2cart and cart2pol."""

    def test_pol2cart(self):
        """Polar points land on the expected axes."""
        result = pol2cart([1, 2], [0, np.pi / 2])

        assert list(result.columns) == ['x', 'y', 'r', 'theta']
        assert np.allclose(result['x'], [1, 0])
        assert np.allclose(result['y'], [0, 2])

    def test_pol2cart_degrees(self):
        """Angles in degrees are converted before use."""
        result = pol2cart(1, 90, degrees=True)

        assert np.allclose(result[['x', 'y']].to_numpy(), [[0, 1]])
        assert np.isclose(result['theta'].iloc[0], np.pi / 2)

    def test_cart2pol(self):
        """Cartesian points give radius and angle."""
        result = cart2pol([1, 0, -1], [1, 1, 0])

        assert list(result.columns) == ['r', 'theta', 'x', 'y']
        assert np.allclose(result['r'], [np.sqrt(2), 1, 1])
        assert np.allclose(result['theta'], [np.pi / 4, np.pi / 2, np.pi])

    def test_cart2pol_degrees(self):
        """Angles can be returned in degrees."""
        result = cart2pol(0, 1, degrees=True)

        assert np.isclose(result['theta'].iloc[0], 90)

    def test_round_trip_positions(self):
        """Converting there and back recovers the points."""
        x = np.array([3.0, -2.0, 0.5])
        y = np.array([4.0, 1.0, -7.0])
        polar = cart2pol(x, y)
        back = pol2cart(polar['r'], polar['theta'])

        assert np.allclose(back['x'], x)
        assert np.allclose(back['y'], y)


class TestMapToInterval:
    """Tests for map_to_interval."""

    def test_identity_mapping(self):
        """1..10 onto [1, 10] is unchanged."""
        assert np.allclose(map_to_interval(np.arange(1, 11), 1, 10), np.arange(1, 11))

    def test_rescale(self):
        """Values are stretched linearly onto the interval."""
        assert np.allclose(map_to_interval([1, 2, 3], 1, 5), [1, 3, 5])
        assert np.allclose(map_to_interval([10, 20, 30], 0, 1), [0, 0.5, 1])
        assert np.allclose(map_to_interval(pd.Series([-1, 1]), -3, 3), [-3, 3])

    def test_nan(self):
        """NaN is skipped when computing the range unless asked otherwise."""
        result = map_to_interval([1, np.nan, 3], 0, 1)
        assert np.isclose(result[0], 0) and np.isnan(result[1]) and np.isclose(result[2], 1)

        assert np.all(np.isnan(map_to_interval([1, np.nan, 3], 0, 1, skipna=False)))
