#!/usr/bin/env python3
"""
K-Means Snapshot Tool

Clusters 2D points from a CSV file with Lloyd's algorithm and writes an
SVG snapshot of every iteration until the centroids converge.

Usage:
    python kmeans_snapshots.py [--dataset=data] [--cluster-size=10] [--output-dir=svg]
    python kmeans_snapshots.py --input points.csv --columns d1,d2,index
"""

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Optional

from lloyd_kmeans import (
    normalize_raw_data,
    divide_and_set_clusters,
    iterate_clusters,
)
from lloyd_kmeans.types import Err
from lloyd_kmeans.parsing import DATASETS, DATA_COLUMNS, load_rows
from lloyd_kmeans.initialize import ELEMENTS_PER_CLUSTER
from lloyd_kmeans.clustering import (
    HD_X,
    HD_Y,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
)
from lloyd_kmeans.output import print_cluster_summary


def parse_columns(value: str) -> tuple[str, ...]:
    """Parse a comma-separated column layout such as 'd1,d2,index'."""
    return tuple(part.strip() for part in value.split(","))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cluster 2D points with k-means and write an SVG per iteration"
    )
    parser.add_argument(
        "--dataset",
        choices=sorted(DATASETS),
        default="data",
        help="Bundled dataset to cluster (default: data)",
    )
    parser.add_argument("--input", help="CSV file to cluster instead of a bundled dataset")
    parser.add_argument(
        "--columns",
        type=parse_columns,
        default=DATA_COLUMNS,
        help="Column layout of --input, in file order (default: index,d1,d2)",
    )
    parser.add_argument(
        "--cluster-size",
        type=int,
        default=ELEMENTS_PER_CLUSTER,
        help=f"Points per initial cluster (default: {ELEMENTS_PER_CLUSTER})",
    )
    parser.add_argument(
        "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        help=f"Snapshot directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument("--width", type=int, default=HD_X, help=f"Canvas width (default: {HD_X})")
    parser.add_argument("--height", type=int, default=HD_Y, help=f"Canvas height (default: {HD_Y})")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=DEFAULT_MAX_ITERATIONS,
        help=f"Iteration ceiling (default: {DEFAULT_MAX_ITERATIONS})",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help="Centroid movement counted as converged; 0 means exact (default: 0)",
    )
    parser.add_argument("--seed", type=int, help="Seed for cluster colors")
    parser.add_argument("--verbose", action="store_true", help="Log every iteration")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.seed is not None:
        random.seed(args.seed)

    if args.input:
        source, columns = Path(args.input), args.columns
    else:
        source, columns = DATASETS[args.dataset]

    if args.cluster_size <= 0:
        print(f"Error: cluster size must be positive: {args.cluster_size}", file=sys.stderr)
        return 1

    print(f"Input: {source}")
    print(f"Output: {args.output_dir}")
    print()

    result = load_rows(source, columns)
    if isinstance(result, Err):
        print(f"Error: {result.message}", file=sys.stderr)
        return 1

    rows = result.value
    if not rows:
        print("No rows found to cluster")
        return 1

    points = normalize_raw_data(rows)
    clusters = divide_and_set_clusters(points, args.cluster_size)
    print_cluster_summary(clusters)

    print("\nIterating clusters...")
    outcome = iterate_clusters(
        clusters,
        output_dir=Path(args.output_dir),
        width=args.width,
        height=args.height,
        max_iterations=args.max_iterations,
        tolerance=args.tolerance,
    )

    state = "converged" if outcome.converged else "stopped at the iteration limit"
    print(f"Iterations: {outcome.iterations} ({state})")
    print(f"Snapshots written: {len(outcome.snapshots)} to {args.output_dir}")
    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
