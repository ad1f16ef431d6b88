"""
Lloyd's k-means iteration.

Alternates nearest-centroid reassignment with centroid recomputation,
writing one SVG snapshot per round, until the centroids stop changing.
"""

import hashlib
import json
import logging
import math
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .types import Point, Cluster, IterationResult, UndefinedCentroidError
from .geometry import average, euclidean_distance
from .output import snapshot_path, write_snapshot


logger = logging.getLogger(__name__)

HD_X = 1920
HD_Y = 1080

DEFAULT_OUTPUT_DIR = Path("svg")
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_TOLERANCE = 0.0


def re_center(cluster: Cluster) -> Point:
    """
    Recompute a cluster's centroid from its current points.

    Args:
        cluster: Cluster with an existing centroid

    Returns:
        New centroid carrying the old centroid's color

    Raises:
        UndefinedCentroidError: If the cluster has no centroid yet
    """
    centroid = cluster.require_centroid()
    return average(cluster.points, centroid.color)


def find_nearest_centroid(point: Point, centroids: Sequence[Optional[Point]]) -> int:
    """
    Index of the centroid closest to a point.

    Centroids are scanned in order and only a strictly smaller distance
    replaces the current best, so ties go to the lowest index.

    Args:
        point: Point to place
        centroids: Current centroids, in cluster order

    Returns:
        Winning index, or -1 if there are no centroids

    Raises:
        UndefinedCentroidError: If any centroid is None
    """
    min_distance = math.inf
    closest = -1

    for j, centroid in enumerate(centroids):
        if centroid is None:
            raise UndefinedCentroidError()
        d = euclidean_distance(centroid, point)
        if d < min_distance:
            min_distance = d
            closest = j

    return closest


def assign_points(
    points: Iterable[Point],
    centroids: Sequence[Optional[Point]],
) -> list[list[Point]]:
    """
    Group points by their nearest centroid.

    Each point is recolored to match the centroid it lands on. A point
    that matches no centroid (only possible with no centroids at all)
    is logged and dropped.

    Args:
        points: Pooled points
        centroids: Centroids in cluster order

    Returns:
        One list of recolored points per centroid

    Raises:
        UndefinedCentroidError: If any centroid is None
    """
    groups: list[list[Point]] = [[] for _ in centroids]

    for point in points:
        closest = find_nearest_centroid(point, centroids)
        if closest == -1:
            logger.warning("Point (%s, %s) could not be assigned to any cluster", point.x, point.y)
            continue
        groups[closest].append(point.with_color(centroids[closest].color))

    return groups


def reassign(clusters: Sequence[Cluster]) -> list[Cluster]:
    """
    Move every point to the cluster with the nearest centroid.

    All points are pooled first, so previous membership has no effect.
    Each point takes the color of the centroid it lands on. Centroids
    are left unchanged.

    Args:
        clusters: Current clusters, each with a centroid

    Returns:
        New clusters in the same order with rebuilt point tuples

    Raises:
        UndefinedCentroidError: If any centroid is None
    """
    centroids = [cluster.centroid for cluster in clusters]
    if any(centroid is None for centroid in centroids):
        raise UndefinedCentroidError()

    pool = [point for cluster in clusters for point in cluster.points]
    new_points = assign_points(pool, centroids)

    return [
        Cluster(points=tuple(points), centroid=cluster.centroid)
        for cluster, points in zip(clusters, new_points)
    ]


def iterate(clusters: Sequence[Cluster]) -> list[Cluster]:
    """
    Recompute every centroid from its cluster's current points.

    Points are not moved; see reassign(). Centroid colors carry over
    from the previous centroids.

    Args:
        clusters: Clusters with centroids

    Returns:
        New clusters sharing the same point tuples

    Raises:
        UndefinedCentroidError: If any centroid is None
    """
    return [
        Cluster(points=cluster.points, centroid=re_center(cluster))
        for cluster in clusters
    ]


def hash_centroids(clusters: Sequence[Cluster]) -> str:
    """
    Fingerprint the centroid list.

    SHA-256 over the JSON list of centroids (coordinates and color).
    Two states hash equal only if every centroid matches bit for bit.

    Args:
        clusters: Clusters to fingerprint

    Returns:
        Hex digest
    """
    payload = [
        cluster.centroid.to_dict() if cluster.centroid is not None else None
        for cluster in clusters
    ]
    message = json.dumps(payload).encode("utf-8")
    return hashlib.sha256(message).hexdigest()


def _coord_close(a: float, b: float, tolerance: float) -> bool:
    if math.isnan(a) and math.isnan(b):
        return True
    return math.isclose(a, b, rel_tol=0.0, abs_tol=tolerance)


def centroids_converged(
    previous: Sequence[Cluster],
    current: Sequence[Cluster],
    tolerance: float,
) -> bool:
    """
    Check whether no centroid moved by more than tolerance.

    Colors must match exactly; coordinates are compared per axis.

    Args:
        previous: Clusters before the update
        current: Clusters after the update
        tolerance: Largest per-axis change still counted as unchanged

    Returns:
        True if every centroid is unchanged within tolerance

    Raises:
        UndefinedCentroidError: If any centroid is None
    """
    if len(previous) != len(current):
        return False

    for before, after in zip(previous, current):
        a = before.require_centroid()
        b = after.require_centroid()
        if a.color != b.color:
            return False
        if not (_coord_close(a.x, b.x, tolerance) and _coord_close(a.y, b.y, tolerance)):
            return False

    return True


def iterate_clusters(
    clusters: Sequence[Cluster],
    output_dir: Path = DEFAULT_OUTPUT_DIR,
    width: int = HD_X,
    height: int = HD_Y,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> IterationResult:
    """
    Run reassignment and centroid updates until the centroids settle.

    Each round reassigns points, writes the reassigned state to
    points_0{i}.svg in output_dir, then recomputes centroids. The first
    fingerprint is taken before any reassignment, so at least one full
    round always runs.

    With tolerance 0 the loop stops when two consecutive fingerprints
    are equal. With a positive tolerance it stops when no centroid moved
    further than tolerance along either axis. It always stops after
    max_iterations rounds.

    Args:
        clusters: Initialized clusters, each with a centroid
        output_dir: Directory for snapshot files (created if missing)
        width: Snapshot canvas width
        height: Snapshot canvas height
        max_iterations: Upper bound on rounds
        tolerance: Per-axis centroid movement still counted as unchanged

    Returns:
        IterationResult with the final clusters and loop history

    Raises:
        UndefinedCentroidError: If any centroid is None
        OSError: If a snapshot cannot be written
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    current = list(clusters)
    fingerprint = hash_centroids(current)
    fingerprints = [fingerprint]
    snapshots: list[Path] = []
    converged = False
    i = 0

    while i < max_iterations:
        reassigned = reassign(current)

        path = snapshot_path(output_dir, i)
        write_snapshot(path, reassigned, width, height)
        snapshots.append(path)

        updated = iterate(reassigned)
        new_fingerprint = hash_centroids(updated)
        fingerprints.append(new_fingerprint)

        if tolerance > 0:
            converged = centroids_converged(reassigned, updated, tolerance)
        else:
            converged = new_fingerprint == fingerprint

        logger.debug(
            "Iteration %d: sizes=%s fingerprint=%s",
            i,
            [c.size for c in updated],
            new_fingerprint[:12],
        )

        current = updated
        fingerprint = new_fingerprint
        i += 1

        if converged:
            break

    if converged:
        logger.info("Converged after %d iterations", i)
    else:
        logger.warning("Stopped after %d iterations without converging", i)

    return IterationResult(
        clusters=tuple(current),
        iterations=i,
        converged=converged,
        fingerprints=tuple(fingerprints),
        snapshots=tuple(snapshots),
    )
