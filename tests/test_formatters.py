"""
Tests for the magnitude formatter.
"""

import pytest
import numpy as np
import pandas as pd

from useful.utils.formatters import (
    UNITS, MultipleStyle, format_multiple, multiple_format,
    multiple_dollar, multiple_comma, multiple_identity
)

VECT = [1000, 1500, 23450, 21784, 875003780]


class TestFormatMultiple:
    """Tests for format_multiple without presets."""

    def test_length_preserved(self):
        """Output has one label per input value."""
        for values in ([], [1.0], VECT, np.arange(37) * 1000):
            assert len(format_multiple(values)) == len(values)

    def test_thousands(self):
        """Default formatting rounds to whole thousands with commas."""
        assert format_multiple([1000], unit='K', digits=0) == ['1K']
        assert format_multiple([875003780], unit='K', digits=0) == ['875,004K']
        assert format_multiple(VECT) == ['1K', '2K', '23K', '22K', '875,004K']

    def test_prefix(self):
        """The prefix goes in front of the number."""
        assert format_multiple([1000], unit='K', prefix='$') == ['$1K']

    def test_digits(self):
        """Decimals are aligned across values, up to the requested digits."""
        assert format_multiple([21784], unit='K', digits=5) == ['21.784K']
        assert format_multiple(VECT, digits=5) == [
            '1.000K', '1.500K', '23.450K', '21.784K', '875,003.780K'
        ]

    def test_millions(self):
        """Upper and lower case millions share the divisor but not the suffix."""
        assert format_multiple(VECT, unit='M') == ['0M', '0M', '0M', '0M', '875M']
        assert format_multiple(VECT, unit='m', digits=5) == [
            '0.00100m', '0.00150m', '0.02345m', '0.02178m', '875.00378m'
        ]

    def test_other_units(self):
        """Billions, trillions and hundreds use their own divisors."""
        assert format_multiple([2.5e9], unit='B', digits=1) == ['2.5B']
        assert format_multiple([3e12], unit='T') == ['3T']
        assert format_multiple([12345], unit='H') == ['123H']
        assert format_multiple([12345], unit='h') == ['123h']

    def test_separator(self):
        """A custom separator replaces the comma."""
        assert format_multiple([875003780], separator=' ') == ['875 004K']
        assert format_multiple([875003780], separator='') == ['875004K']

    def test_half_to_even(self):
        """Rounding uses round half to even."""
        assert format_multiple([1500, 2500, 3500]) == ['2K', '2K', '4K']

    def test_negative(self):
        """Negative values keep their sign inside the prefix."""
        assert format_multiple([-1200000], unit='M', digits=1, prefix='$') == ['$-1.2M']

    def test_negative_zero(self):
        """Values that round to zero are shown without a sign."""
        assert format_multiple([-1, -400], unit='K') == ['0K', '0K']
        assert multiple_identity([-1], unit='M') == ['0M']
        assert multiple_dollar([-300, 200000000], digits=5) == ['$0K', '$200,000K']
        assert format_multiple([-1], scientific=True) == ['0e+00K']

    def test_scientific(self):
        """Scientific notation renders the mantissa with an exponent."""
        assert format_multiple([1500], digits=1, scientific=True) == ['1.5e+00K']
        assert format_multiple([2e9], unit='K', scientific=True) == ['2e+06K']

    def test_non_finite(self):
        """NaN and infinities are labelled and do not affect the other values."""
        result = format_multiple([np.nan, np.inf, -np.inf, 1500], digits=1)
        assert result == ['NaNK', 'InfK', '-InfK', '1.5K']

    def test_accepts_scalars_and_series(self):
        """Scalars, arrays and Series are all accepted."""
        assert format_multiple(2000) == ['2K']
        assert format_multiple(np.array([2000, 3000])) == ['2K', '3K']
        assert format_multiple(pd.Series([2000, 3000])) == ['2K', '3K']

    def test_invalid_unit(self):
        """Unknown units are rejected."""
        with pytest.raises(ValueError, match='unit'):
            format_multiple([1], unit='Q')

    def test_non_numeric(self):
        """Non-numeric input is a type error."""
        with pytest.raises(TypeError):
            format_multiple(['a', 'b'])
        with pytest.raises(TypeError):
            format_multiple([True, False])
        with pytest.raises(TypeError):
            format_multiple([1, None])

    def test_invalid_digits(self):
        """Digits must be a non-negative integer."""
        with pytest.raises(ValueError):
            format_multiple([1], digits=-1)
        with pytest.raises(ValueError):
            format_multiple([1], digits=1.5)

    def test_all_units_recognized(self):
        """Every unit token formats without error."""
        for unit in UNITS:
            assert format_multiple([100], unit=unit)[0].endswith(unit)


class TestStyles:
    """Tests for the dollar, comma and identity presets."""

    def test_style_by_name(self):
        """Styles can be given by name."""
        assert format_multiple(VECT, style='dollar') == format_multiple(VECT, style=MultipleStyle.DOLLAR)
        with pytest.raises(ValueError, match='style'):
            format_multiple(VECT, style='euro')

    def test_dollar(self):
        """Dollar amounts above 100,000 are shown as whole numbers."""
        expected = ['$1K', '$2K', '$23K', '$22K', '$875,004K']
        assert format_multiple(VECT, style=MultipleStyle.DOLLAR) == expected
        assert multiple_dollar(VECT) == expected
        assert multiple_dollar(VECT, digits=5) == expected
        assert multiple_dollar(VECT, unit='h') == ['$10h', '$15h', '$234h', '$218h', '$8,750,038h']
        assert multiple_dollar(VECT, unit='h', digits=5) == ['$10h', '$15h', '$234h', '$218h', '$8,750,038h']
        assert format_multiple(VECT, unit='M', style='dollar') == ['$0M', '$0M', '$0M', '$0M', '$875M']

    def test_dollar_cents(self):
        """Small fractional dollar amounts keep their cents."""
        assert multiple_dollar([1500, 2000], digits=2) == ['$1.50K', '$2.00K']

    def test_comma(self):
        """Comma style always shows exactly `digits` decimals."""
        assert multiple_comma(VECT) == ['1K', '2K', '23K', '22K', '875,004K']
        assert multiple_comma(VECT, digits=5) == [
            '1.00000K', '1.50000K', '23.45000K', '21.78400K', '875,003.78000K'
        ]
        assert multiple_comma(VECT, unit='h') == ['10h', '15h', '234h', '218h', '8,750,038h']
        assert multiple_comma(VECT, unit='h', digits=5) == [
            '10.00000h', '15.00000h', '234.50000h', '217.84000h', '8,750,037.80000h'
        ]

    def test_identity(self):
        """Identity style shows each value in its shortest form."""
        assert multiple_identity(VECT) == ['1K', '2K', '23K', '22K', '875004K']
        assert multiple_identity(VECT, digits=5) == ['1K', '1.5K', '23.45K', '21.784K', '875003.78K']
        assert multiple_identity(VECT, unit='h') == ['10h', '15h', '234h', '218h', '8750038h']
        assert multiple_identity(VECT, unit='h', digits=5) == ['10h', '15h', '234.5h', '217.84h', '8750037.8h']
        assert format_multiple(VECT, unit='m', style='identity', digits=5) == [
            '0.001m', '0.0015m', '0.02345m', '0.02178m', '875.00378m'
        ]

    def test_preset_overrides_arguments(self):
        """Presets replace the separator or prefix they fix."""
        assert multiple_identity([875003780], separator=',') == ['875004K']
        assert multiple_dollar([1000], prefix='EUR') == ['$1K']
        assert multiple_dollar([875003780], separator=' ') == ['$875 004K']


class TestMultipleFormat:
    """Tests for the bound formatter."""

    def test_closure_matches_direct_call(self):
        """The bound formatter gives the same labels as a direct call."""
        configs = [
            {},
            {'style': 'dollar'},
            {'digits': 5},
            {'style': 'identity', 'digits': 5},
            {'unit': 'M'},
            {'unit': 'm', 'digits': 5},
        ]
        for config in configs:
            assert multiple_format(**config)(VECT) == format_multiple(VECT, **config)

    def test_closure_validates_on_call(self):
        """Configuration errors surface when the formatter is used."""
        formatter = multiple_format(unit='Z')
        with pytest.raises(ValueError):
            formatter(VECT)
