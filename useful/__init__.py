"""
Useful utilities for data frames, number formatting and k-means diagnostics.

Order-of-magnitude number formatting, Hartigan's rule for choosing the number
of k-means clusters, and a collection of small data-frame and string helpers.
"""

__version__ = '0.1.0'

from useful.utils.formatters import (
    format_multiple, multiple_format, multiple_dollar, multiple_comma,
    multiple_identity, MultipleStyle
)
from useful.math.clusters import kmeans, KMeansFit
from useful.math.hartigan import compute_hartigan, select_cluster_count
