"""
Setup script for useful package.
"""

from setuptools import setup, find_packages

setup(
    name="useful",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        # Core numerical dependencies
        "numpy>=1.20.0",
        "pandas>=1.3.0",
        "scipy>=1.7.0",
        "scikit-learn>=1.0.0",

        # Plotting
        "matplotlib>=3.4.0",

        # Utilities
        "pyyaml>=6.0.0",
    ],
    extras_require={
        # Testing
        "test": [
            "pytest>=6.0.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'useful=useful.__main__:main',
        ],
    },
    description="Data-frame, number formatting and k-means diagnostic utilities",
    keywords="formatting, kmeans, hartigan, clustering, data frames",
    python_requires=">=3.8",
)
