"""
Immutable data types for k-means clustering.

All types are frozen dataclasses to enforce immutability.
State transitions return new instances rather than mutating.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Tuple, Union
import math


class KMeansError(Exception):
    """Base class for broken clustering preconditions."""


class UndefinedCentroidError(KMeansError):
    """A centroid-dependent operation ran on a cluster without a centroid."""

    def __init__(self, message: str = "Cluster centroid is undefined"):
        super().__init__(message)


class UndefinedPointError(KMeansError):
    """A point-dependent operation received no point."""

    def __init__(self, message: str = "Point is undefined"):
        super().__init__(message)


@dataclass(frozen=True)
class Point:
    """
    2D point tagged with the color of the cluster it belongs to.

    The color is membership, not identity: moving a point to another
    cluster produces a new Point with the new cluster's color.
    """
    x: float
    y: float
    color: Optional[str] = None

    def distance_to(self, other: "Point") -> float:
        """Compute Euclidean distance to another point."""
        dx = other.x - self.x
        dy = other.y - self.y
        return math.sqrt(dx * dx + dy * dy)

    def with_color(self, color: Optional[str]) -> "Point":
        """Return a copy of this point carrying a different color."""
        return replace(self, color=color)

    def as_tuple(self) -> Tuple[float, float]:
        """Return coordinates as a tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Plain mapping used for fingerprinting."""
        return {"x": self.x, "y": self.y, "color": self.color}


@dataclass(frozen=True)
class Cluster:
    """
    A group of points and their representative centroid.

    The centroid is None only before it is first computed. The cluster
    owns its point tuple; points hold no reference back to it.
    """
    points: Tuple[Point, ...]
    centroid: Optional[Point] = None

    @property
    def size(self) -> int:
        """Number of points currently in this cluster."""
        return len(self.points)

    def require_centroid(self) -> Point:
        """Return the centroid, raising if it was never computed."""
        if self.centroid is None:
            raise UndefinedCentroidError()
        return self.centroid


@dataclass(frozen=True)
class RawRow:
    """
    One ingested row before normalization.

    Fields arrive as strings from CSV and are coerced by the normalizer
    without touching the row itself.
    """
    index: Union[str, float]
    d1: Union[str, float]
    d2: Union[str, float]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned extent of a set of coordinates."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class IterationResult:
    """
    Outcome of running the convergence loop.

    fingerprints holds one digest per centroid state, starting with the
    initial clusters. snapshots lists every SVG file written, in order.
    """
    clusters: Tuple[Cluster, ...]
    iterations: int
    converged: bool
    fingerprints: Tuple[str, ...]
    snapshots: Tuple[Path, ...]

    @property
    def total_points(self) -> int:
        """Number of points across all final clusters."""
        return sum(c.size for c in self.clusters)


class IngestError(Enum):
    """Error types for reading tabular input."""
    FILE_NOT_FOUND = auto()
    READ_FAILED = auto()
    MALFORMED_ROW = auto()
    UNKNOWN_COLUMN = auto()


@dataclass(frozen=True)
class Ok:
    """Success result wrapper."""
    value: object


@dataclass(frozen=True)
class Err:
    """Error result wrapper."""
    error: IngestError
    message: str
