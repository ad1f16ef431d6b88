"""
Rescaling of raw coordinates into the unit square.

Normalization uses the global minimum and maximum of the dataset so
that every point lands in [0, 1] x [0, 1]. Input rows are never
modified; numeric coercion happens on local values only.
"""

import math
from typing import Iterable, Optional, Sequence, Union

from .types import Point, Cluster, RawRow, Bounds
from .colors import get_random_color
from .geometry import average


def to_number(value: Union[str, float]) -> float:
    """Coerce a CSV field (string or number) to float."""
    return float(value)


def _bounds_of(coords: Iterable[tuple[float, float]]) -> Bounds:
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for x, y in coords:
        min_x = min(min_x, x)
        min_y = min(min_y, y)
        max_x = max(max_x, x)
        max_y = max(max_y, y)

    return Bounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)


def _scale(value: float, low: float, span: float) -> float:
    # A zero-width axis has no meaningful position; mirror 0/0.
    if span == 0:
        return math.nan
    return (value - low) / span


def raw_data_bounds(rows: Iterable[RawRow]) -> Bounds:
    """
    Find the min and max of d1 (x) and d2 (y) across raw rows.

    Args:
        rows: Ingested rows; string fields are parsed as floats

    Returns:
        Bounds over all rows
    """
    return _bounds_of((to_number(row.d1), to_number(row.d2)) for row in rows)


def point_bounds(cluster: Cluster) -> Bounds:
    """Find the min and max coordinates of one cluster's points."""
    return _bounds_of(p.as_tuple() for p in cluster.points)


def normalize_raw_data(rows: Sequence[RawRow], color: Optional[str] = None) -> list[Point]:
    """
    Convert raw rows to points in the unit square.

    Every point of the batch shares one color, drawn once per call
    unless given.

    Args:
        rows: Ingested rows
        color: Optional color for the whole batch

    Returns:
        One Point per row, in input order
    """
    bounds = raw_data_bounds(rows)
    batch_color = color if color is not None else get_random_color()

    points = []
    for row in rows:
        x = _scale(to_number(row.d1), bounds.min_x, bounds.width)
        y = _scale(to_number(row.d2), bounds.min_y, bounds.height)
        points.append(Point(x, y, batch_color))
    return points


def normalize_cluster(cluster: Cluster) -> Cluster:
    """
    Rescale a single cluster by its own extent.

    Point colors are kept; the centroid is recomputed from the rescaled
    points with the default centroid color.

    Args:
        cluster: Cluster to rescale

    Returns:
        New Cluster with points in [0, 1] x [0, 1]
    """
    bounds = point_bounds(cluster)
    points = tuple(
        Point(
            _scale(p.x, bounds.min_x, bounds.width),
            _scale(p.y, bounds.min_y, bounds.height),
            p.color,
        )
        for p in cluster.points
    )
    return Cluster(points=points, centroid=average(points))
