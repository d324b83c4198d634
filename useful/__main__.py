"""
Command line entry point for useful.

Formats numbers by order of magnitude, or runs Hartigan's rule on a CSV file.
"""

import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd

from useful.components.config import ConfigManager, read_config_file
from useful.math.clusters import ALGORITHMS
from useful.math.hartigan import select_cluster_count
from useful.utils.formatters import UNITS, format_multiple

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    'debug': 'DEBUG',
    'info': 'INFO',
    'warn': 'WARNING',
    'warning': 'WARNING',
    'error': 'ERROR',
    'critical': 'CRITICAL',
}


def setup_logging(level: str = 'WARNING') -> None:
    """
    Set up logging.

    Args:
        level: Logging level
    """
    logging.basicConfig(
        level=getattr(logging, LOG_LEVELS.get(level.lower(), level.upper())),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler()
        ]
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Arguments (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description='Number formatting and k-means diagnostics')

    parser.add_argument(
        '--config',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    fmt = subparsers.add_parser('format', help='Format numbers by order of magnitude')
    fmt.add_argument('values', nargs='+', type=float, help='Numbers to format')
    fmt.add_argument('--unit', choices=UNITS, help='Magnitude unit')
    fmt.add_argument('--digits', type=int, help='Number of decimals')
    fmt.add_argument('--separator', help='Thousands separator')
    fmt.add_argument('--prefix', help='Prefix such as $')
    fmt.add_argument('--style', choices=['dollar', 'comma', 'identity'], help='Formatting preset')
    fmt.add_argument('--scientific', action='store_true', default=None, help='Use exponent notation')

    hart = subparsers.add_parser('hartigan', help="Apply Hartigan's rule to the numeric columns of a CSV file")
    hart.add_argument('csv', help='Path to CSV file')
    hart.add_argument('--columns', nargs='+', help='Columns to use (default: all numeric)')
    hart.add_argument('--max-clusters', type=int, help='Largest cluster count (exclusive)')
    hart.add_argument('--restarts', type=int, help='Random starts per fit')
    hart.add_argument('--max-iterations', type=int, help='Iterations per fit')
    hart.add_argument('--algorithm', choices=ALGORITHMS, help='K-means algorithm')
    hart.add_argument('--seed', type=int, help='Random seed')
    hart.add_argument('--plot', help='Save a plot of the results to this path')

    return parser.parse_args(argv)


def _pick(value, config, path):
    return config.get(path) if value is None else value


def run_format(args: argparse.Namespace, config) -> int:
    """
    Print formatted numbers, one per line.
    """
    labels = format_multiple(
        args.values,
        unit=_pick(args.unit, config, 'formatting.unit'),
        separator=_pick(args.separator, config, 'formatting.separator'),
        style=args.style,
        digits=_pick(args.digits, config, 'formatting.digits'),
        prefix=_pick(args.prefix, config, 'formatting.prefix'),
        scientific=_pick(args.scientific, config, 'formatting.scientific'),
    )
    for label in labels:
        print(label)
    return 0


def run_hartigan(args: argparse.Namespace, config) -> int:
    """
    Print the Hartigan's rule table for a CSV file.
    """
    data = pd.read_csv(args.csv)
    if args.columns:
        data = data[args.columns]
    else:
        data = data.select_dtypes(include='number')
    logger.info(f"Loaded {len(data)} rows and {data.shape[1]} columns from {args.csv}")

    hartigan = select_cluster_count(
        data,
        max_clusters=_pick(args.max_clusters, config, 'hartigan.max-clusters'),
        restarts=_pick(args.restarts, config, 'hartigan.restarts'),
        max_iterations=_pick(args.max_iterations, config, 'hartigan.max-iterations'),
        algorithm=_pick(args.algorithm, config, 'hartigan.algorithm'),
        seed=_pick(args.seed, config, 'hartigan.seed'),
        zero_division=config.get('hartigan.zero-division', 'inf'),
    )
    print(hartigan.to_string(index=False))

    if args.plot:
        import matplotlib
        matplotlib.use('Agg')
        from useful.plotting.plots import plot_hartigan

        ax = plot_hartigan(
            hartigan,
            linecolor=config.get('plotting.line-color'),
            linestyle=config.get('plotting.line-style'),
            linewidth=config.get('plotting.line-width'),
        )
        ax.figure.savefig(args.plot, bbox_inches='tight')
        logger.info(f"Saved plot to {args.plot}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.
    """
    # Parse arguments
    args = parse_args(argv)

    # Create overrides from the configuration file
    overrides = {}
    if args.config:
        overrides.update(read_config_file(args.config))

    # Initialize configuration
    config = ConfigManager.get_config(overrides)

    # Set up logging
    setup_logging(args.log_level or config.get('logging.level', 'warn'))

    if args.command == 'format':
        return run_format(args, config)
    return run_hartigan(args, config)


if __name__ == '__main__':
    sys.exit(main())
