"""
Numeric helpers shared by the clustering steps.

Distance and averaging for the iterative loop, plus a small synthetic
data generator for experimenting without an input file.
"""

import math
import random
from typing import Iterable, Optional

from .types import Point, Cluster, UndefinedPointError
from .colors import get_random_color


DEFAULT_CENTROID_COLOR = "red"


def euclidean_distance(p1: Optional[Point], p2: Optional[Point]) -> float:
    """
    Compute the Euclidean distance between two points.

    Args:
        p1: First point
        p2: Second point

    Returns:
        sqrt(dx² + dy²)

    Raises:
        UndefinedPointError: If either point is None
    """
    if p1 is None or p2 is None:
        raise UndefinedPointError()
    return p1.distance_to(p2)


def average(points: Iterable[Point], color: Optional[str] = DEFAULT_CENTROID_COLOR) -> Point:
    """
    Compute the coordinate-wise arithmetic mean of a set of points.

    An empty set has no mean; its coordinates come back as nan so that a
    cluster emptied by reassignment keeps a (meaningless) centroid
    instead of aborting the run.

    Args:
        points: Points to average
        color: Color tag for the resulting point

    Returns:
        New Point at the mean position
    """
    sum_x = 0.0
    sum_y = 0.0
    count = 0
    for point in points:
        sum_x += point.x
        sum_y += point.y
        count += 1

    if count == 0:
        return Point(math.nan, math.nan, color)
    return Point(sum_x / count, sum_y / count, color)


def random_point(
    color: Optional[str] = DEFAULT_CENTROID_COLOR,
    rng: Optional[random.Random] = None,
) -> Point:
    """Generate a point uniformly in [0, 1] x [0, 1]."""
    source = rng if rng is not None else random
    return Point(source.random(), source.random(), color)


def random_points(count: int, rng: Optional[random.Random] = None) -> list[Point]:
    """Generate count random points, all with the default color."""
    return [random_point(rng=rng) for _ in range(count)]


def _clamp(value: float) -> float:
    # Values above 1 are capped, negative values are mirrored back into range.
    return abs(min(1.0, value))


def random_cluster(
    center: Point,
    radius: float,
    count: int,
    rng: Optional[random.Random] = None,
) -> Cluster:
    """
    Scatter points around a center and wrap them in a cluster.

    Each coordinate is drawn uniformly from [center - radius, center + radius]
    and then folded into [0, 1]. All points take the center's color.

    Args:
        center: Point to scatter around; its color tags the whole cluster
        radius: Maximum offset along each axis before folding
        count: Number of points to generate
        rng: Optional random source

    Returns:
        Cluster whose centroid is the mean of the generated points
    """
    source = rng if rng is not None else random
    points = []
    for _ in range(count):
        raw_x = center.x + (source.random() * radius * 2 - radius)
        raw_y = center.y + (source.random() * radius * 2 - radius)
        points.append(Point(_clamp(raw_x), _clamp(raw_y), center.color))

    return Cluster(points=tuple(points), centroid=average(points, center.color))


def create_clusters(
    radius: float,
    cluster_count: int,
    elements_per_cluster: int = 10,
    rng: Optional[random.Random] = None,
) -> list[Cluster]:
    """
    Build synthetic clusters around random centers.

    Args:
        radius: Scatter radius for every cluster
        cluster_count: Number of clusters to create
        elements_per_cluster: Points generated per cluster
        rng: Optional random source

    Returns:
        List of clusters, each with its own random color
    """
    clusters = []
    for _ in range(cluster_count):
        color = get_random_color(rng)
        center = random_point(color, rng)
        clusters.append(random_cluster(center, radius, elements_per_cluster, rng))
    return clusters
