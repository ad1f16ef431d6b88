"""
Initial partitioning of ordered input into fixed-size clusters.

Every cluster_size-th element opens a new cluster with a fresh random
color. The last cluster holds the remainder when the input length is
not a multiple of cluster_size.
"""

from typing import Callable, Iterable, Optional, Sequence, TypeVar

from .types import Point, Cluster, RawRow
from .colors import get_random_color
from .geometry import average
from .normalize import to_number


ELEMENTS_PER_CLUSTER = 10

T = TypeVar("T")


def _partition(
    items: Iterable[T],
    cluster_size: int,
    to_point: Callable[[T, str], Point],
    color_source: Callable[[], str],
) -> list[list[Point]]:
    if cluster_size <= 0:
        raise ValueError(f"cluster_size must be positive, got {cluster_size}")

    groups: list[list[Point]] = []
    color = ""
    for i, item in enumerate(items):
        if i % cluster_size == 0:
            color = color_source()
            groups.append([])
        groups[-1].append(to_point(item, color))
    return groups


def _with_centroids(groups: list[list[Point]]) -> list[Cluster]:
    clusters = []
    for points in groups:
        # Groups are never empty here, but keep the centroid unset if one were.
        centroid = average(points, points[0].color) if points else None
        clusters.append(Cluster(points=tuple(points), centroid=centroid))
    return clusters


def divide_data_set_clusters(
    rows: Sequence[RawRow],
    cluster_size: int = ELEMENTS_PER_CLUSTER,
    color_source: Optional[Callable[[], str]] = None,
) -> list[Cluster]:
    """
    Split raw rows into clusters without normalizing them.

    d1 and d2 are parsed as x and y. Each centroid takes the color of its
    cluster's first point.

    Args:
        rows: Ingested rows in their original order
        cluster_size: Points per cluster
        color_source: Callable returning a new color per cluster

    Returns:
        Clusters with points and initial centroids

    Raises:
        ValueError: If cluster_size is not positive
    """
    groups = _partition(
        rows,
        cluster_size,
        lambda row, color: Point(to_number(row.d1), to_number(row.d2), color),
        color_source or get_random_color,
    )
    return _with_centroids(groups)


def divide_and_set_clusters(
    points: Sequence[Point],
    cluster_size: int,
    color_source: Optional[Callable[[], str]] = None,
) -> list[Cluster]:
    """
    Split already-numeric points into clusters.

    Each point is re-tagged with its cluster's color.

    Args:
        points: Points in their original order
        cluster_size: Points per cluster
        color_source: Callable returning a new color per cluster

    Returns:
        Clusters with points and initial centroids

    Raises:
        ValueError: If cluster_size is not positive
    """
    groups = _partition(
        points,
        cluster_size,
        lambda point, color: point.with_color(color),
        color_source or get_random_color,
    )
    return _with_centroids(groups)
