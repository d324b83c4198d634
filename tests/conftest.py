"""
Shared fixtures for the test suite.
"""

import os
import sys

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest
from sklearn.datasets import load_iris

# Add the parent directory to the path to import the module
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture
def iris() -> pd.DataFrame:
    """The four numeric iris measurements (150 rows)."""
    return load_iris(as_frame=True).data


@pytest.fixture
def two_blobs() -> np.ndarray:
    """Two well separated groups of 20 points each."""
    rng = np.random.RandomState(7)
    return np.vstack([
        rng.normal(0.0, 0.1, size=(20, 2)),
        rng.normal(5.0, 0.1, size=(20, 2)),
    ])


@pytest.fixture(autouse=True)
def close_figures():
    """Close any figures a test opened."""
    yield
    import matplotlib.pyplot as plt
    plt.close('all')
