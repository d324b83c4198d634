"""
Order-of-magnitude number formatting.

Numbers are scaled to thousands, millions, billions, trillions or hundreds
and rendered as short labels such as ``875,004K`` or ``$1.5M``.
"""

import math
import numpy as np
from enum import Enum
from functools import partial
from typing import Callable, List, Optional, Union

UNITS = ('K', 'M', 'B', 'T', 'H', 'k', 'm', 'b', 't', 'h')

DIVIDERS = {
    'K': 1e3,
    'M': 1e6,
    'B': 1e9,
    'T': 1e12,
    'H': 1e2,
}

# Significant digits shown when aligning decimals across values
SIGNIFICANT_DIGITS = 7

# Dollar amounts at or above this are never shown with cents
LARGEST_WITH_CENTS = 100000


class MultipleStyle(Enum):
    """
    Named formatting presets.

    Each preset fixes a thousands separator and/or a prefix (None leaves the
    caller's value in place).
    """

    DOLLAR = ('dollar', None, '$')
    COMMA = ('comma', ',', None)
    IDENTITY = ('identity', '', None)

    def __init__(self, label: str, separator: Optional[str], prefix: Optional[str]):
        self.label = label
        self.separator = separator
        self.prefix = prefix

    @classmethod
    def coerce(cls, style: Union['MultipleStyle', str, None]) -> Optional['MultipleStyle']:
        """
        Resolve a style given by member or by name.

        Args:
            style: MultipleStyle, its name (case-insensitive) or None

        Returns:
            The matching MultipleStyle, or None
        """
        if style is None or isinstance(style, cls):
            return style
        if isinstance(style, str):
            for member in cls:
                if member.label == style.lower():
                    return member
        choices = ', '.join(member.label for member in cls)
        raise ValueError(f"'style' should be one of {choices}, got {style!r}")


def _as_numeric_array(values) -> np.ndarray:
    array = np.asarray(values)
    if array.dtype.kind not in 'iuf':
        raise TypeError(f"values must be numeric, got dtype {array.dtype}")
    return np.atleast_1d(array.astype(float)).ravel()


def _decimals_needed(value: float, significant: int = SIGNIFICANT_DIGITS) -> int:
    """Number of decimals needed to show value at the given significant digits."""
    text = np.format_float_positional(value, precision=significant, unique=False,
                                      fractional=False, trim='-')
    if '.' not in text:
        return 0
    return len(text.split('.')[1])


def _grouped(value: float, decimals: int, separator: str) -> str:
    # Drop the sign of values that round to zero
    value = round(value, decimals) + 0.0
    return f"{value:_.{decimals}f}".replace('_', separator)


def _non_finite(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    return 'Inf' if value > 0 else '-Inf'


def _render_numbers(scaled: np.ndarray,
                    style: Optional[MultipleStyle],
                    separator: str,
                    digits: int,
                    scientific: bool) -> List[str]:
    finite = scaled[np.isfinite(scaled)]

    if scientific:
        render = lambda v: np.format_float_scientific(v, trim='-', exp_digits=2)
    elif style is MultipleStyle.IDENTITY:
        render = lambda v: np.format_float_positional(v, trim='-')
    elif style is MultipleStyle.COMMA:
        render = lambda v: _grouped(v, digits, separator)
    elif style is MultipleStyle.DOLLAR:
        has_cents = (finite.size > 0
                     and np.max(np.abs(finite)) < LARGEST_WITH_CENTS
                     and not np.all(finite == np.floor(finite)))
        render = partial(_grouped, decimals=2 if has_cents else 0, separator=separator)
    else:
        decimals = max((_decimals_needed(v) for v in finite), default=0)
        render = partial(_grouped, decimals=min(decimals, digits), separator=separator)

    return [render(v) if np.isfinite(v) else _non_finite(v) for v in scaled]


def format_multiple(values,
                    unit: str = 'K',
                    separator: str = ',',
                    style: Union[MultipleStyle, str, None] = None,
                    digits: int = 0,
                    prefix: str = '',
                    scientific: bool = False) -> List[str]:
    """
    Format numbers as multiples of a chosen order of magnitude.

    Each value is divided by the unit's divisor and rounded to ``digits``
    decimals (round half to even). The result for each value is
    ``prefix + number + unit``.

    Args:
        values: Number or sequence of numbers
        unit: One of K, M, B, T, H (thousand, million, billion, trillion,
            hundred) or their lower-case forms, which use the same divisor
            and keep the lower-case suffix
        separator: Thousands separator
        style: Optional preset (MultipleStyle or 'dollar', 'comma', 'identity')
            overriding separator and/or prefix
        digits: Number of decimals to round to
        prefix: Text placed before each number, e.g. '$'
        scientific: Whether to use exponent notation

    Returns:
        List of strings, one per input value
    """
    scaled = _as_numeric_array(values)

    if unit not in UNITS:
        choices = ', '.join(f'"{u}"' for u in UNITS)
        raise ValueError(f"'unit' should be one of {choices}, got {unit!r}")
    if isinstance(digits, bool) or int(digits) != digits or digits < 0:
        raise ValueError(f"'digits' must be a non-negative integer, got {digits!r}")
    digits = int(digits)

    style = MultipleStyle.coerce(style)
    if style is not None:
        if style.separator is not None:
            separator = style.separator
        if style.prefix is not None:
            prefix = style.prefix

    scaled = np.round(scaled / DIVIDERS[unit.upper()], digits) + 0.0
    numbers = _render_numbers(scaled, style, separator, digits, scientific)

    return [f"{prefix}{number}{unit}" for number in numbers]


def multiple_format(**kwargs) -> Callable[..., List[str]]:
    """
    Bind a formatting configuration for later use.

    Args:
        **kwargs: Any keyword arguments of format_multiple

    Returns:
        Function taking values and returning their formatted labels
    """
    def formatter(values) -> List[str]:
        return format_multiple(values, **kwargs)

    return formatter


def multiple_dollar(values, **kwargs) -> List[str]:
    """Format as dollar amounts, e.g. ``$23K``."""
    return format_multiple(values, style=MultipleStyle.DOLLAR, **kwargs)


def multiple_comma(values, **kwargs) -> List[str]:
    """Format with comma separators and exactly ``digits`` decimals."""
    return format_multiple(values, style=MultipleStyle.COMMA, **kwargs)


def multiple_identity(values, **kwargs) -> List[str]:
    """Format each value in its shortest form without separators."""
    return format_multiple(values, style=MultipleStyle.IDENTITY, **kwargs)
