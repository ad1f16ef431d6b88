"""
Lloyd's k-means over 2D points.

Loads points from CSV, rescales them into the unit square, partitions
them into fixed-size starting clusters and iterates reassignment and
centroid updates until convergence, writing an SVG per iteration.
"""

from .types import (
    Point,
    Cluster,
    RawRow,
    Bounds,
    IterationResult,
    KMeansError,
    UndefinedCentroidError,
    UndefinedPointError,
)
from .parsing import parse_rows, load_rows, load_dataset
from .normalize import normalize_raw_data, normalize_cluster
from .initialize import divide_data_set_clusters, divide_and_set_clusters
from .clustering import reassign, iterate, hash_centroids, iterate_clusters
from .output import create_cluster_svg, write_snapshot

__all__ = [
    "Point",
    "Cluster",
    "RawRow",
    "Bounds",
    "IterationResult",
    "KMeansError",
    "UndefinedCentroidError",
    "UndefinedPointError",
    "parse_rows",
    "load_rows",
    "load_dataset",
    "normalize_raw_data",
    "normalize_cluster",
    "divide_data_set_clusters",
    "divide_and_set_clusters",
    "reassign",
    "iterate",
    "hash_centroids",
    "iterate_clusters",
    "create_cluster_svg",
    "write_snapshot",
]
