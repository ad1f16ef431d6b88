"""
SVG output generation for cluster snapshots.

Draws every point as a small diamond in its cluster color and every
centroid as a crosshair, on a plain background.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence

from .types import Point, Cluster


SVG_NS = "http://www.w3.org/2000/svg"

BACKGROUND_COLOR = "lightgray"
POINT_SIZE = 5.0  # diamond half-diagonal, in pixels
CENTROID_SIZE = 10.0  # crosshair arm length, in pixels
UNTAGGED_COLOR = "red"


def _fmt(value: float) -> str:
    """Format a coordinate compactly for SVG attributes."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _color(point: Point) -> str:
    """Color of a marker; untagged points fall back to a default."""
    return point.color if point.color is not None else UNTAGGED_COLOR


def create_svg_root(width: int, height: int) -> ET.Element:
    """
    Create an SVG root element with a filled background.

    Args:
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        SVG root Element
    """
    ET.register_namespace("", SVG_NS)

    root = ET.Element("svg")
    root.set("xmlns", SVG_NS)
    root.set("width", str(width))
    root.set("height", str(height))

    background = ET.SubElement(root, "rect")
    background.set("width", "100%")
    background.set("height", "100%")
    background.set("fill", BACKGROUND_COLOR)

    return root


def create_point_element(point: Point, width: int, height: int) -> ET.Element:
    """
    Create a diamond marker for a point.

    The marker size is fixed in pixels and does not scale with the canvas.

    Args:
        point: Point in unit coordinates
        width: Canvas width used to scale x
        height: Canvas height used to scale y

    Returns:
        Polygon Element
    """
    cx = point.x * width
    cy = point.y * height
    corners = [
        (cx, cy - POINT_SIZE),
        (cx + POINT_SIZE, cy),
        (cx, cy + POINT_SIZE),
        (cx - POINT_SIZE, cy),
    ]

    elem = ET.Element("polygon")
    elem.set("points", " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in corners))
    elem.set("fill", _color(point))
    elem.set("stroke", "black")
    elem.set("stroke-width", "0.5")
    return elem


def create_centroid_elements(centroid: Point, width: int, height: int) -> list[ET.Element]:
    """
    Create the two lines of a centroid crosshair.

    Args:
        centroid: Centroid in unit coordinates
        width: Canvas width used to scale x
        height: Canvas height used to scale y

    Returns:
        [horizontal line, vertical line]
    """
    cx = centroid.x * width
    cy = centroid.y * height
    half = CENTROID_SIZE / 2

    lines = []
    for x1, y1, x2, y2 in (
        (cx - half, cy, cx + half, cy),
        (cx, cy - half, cx, cy + half),
    ):
        line = ET.Element("line")
        line.set("x1", _fmt(x1))
        line.set("y1", _fmt(y1))
        line.set("x2", _fmt(x2))
        line.set("y2", _fmt(y2))
        line.set("stroke", _color(centroid))
        line.set("stroke-width", "2")
        lines.append(line)
    return lines


def build_cluster_svg(
    clusters: Sequence[Cluster],
    width: int = 640,
    height: int = 480,
) -> ET.Element:
    """
    Build the SVG element tree for a cluster set.

    Args:
        clusters: Clusters to draw
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        SVG root Element

    Raises:
        UndefinedCentroidError: If any cluster has no centroid
    """
    root = create_svg_root(width, height)

    for cluster in clusters:
        for point in cluster.points:
            root.append(create_point_element(point, width, height))

        centroid = cluster.require_centroid()
        for line in create_centroid_elements(centroid, width, height):
            root.append(line)

    return root


def create_cluster_svg(
    clusters: Sequence[Cluster],
    width: int = 640,
    height: int = 480,
) -> str:
    """Render a cluster set to an SVG document string."""
    root = build_cluster_svg(clusters, width, height)
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode")


def snapshot_path(output_dir: Path, index: int) -> Path:
    """
    Path of the snapshot written for a loop iteration.

    Names carry a single leading zero: points_00.svg ... points_09.svg,
    then points_010.svg and so on.
    """
    return Path(output_dir) / f"points_0{index}.svg"


def write_snapshot(
    output_path: Path,
    clusters: Sequence[Cluster],
    width: int = 640,
    height: int = 480,
) -> None:
    """
    Write a cluster set to an SVG file.

    Write errors are not caught.

    Args:
        output_path: Path to write the SVG file
        clusters: Clusters to draw
        width: Canvas width in pixels
        height: Canvas height in pixels
    """
    root = build_cluster_svg(clusters, width, height)

    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")

    with open(output_path, "wb") as f:
        tree.write(f, encoding="UTF-8", xml_declaration=True)


def print_cluster_summary(clusters: Sequence[Cluster]) -> None:
    """
    Print cluster count and the first cluster's size and centroid.

    Args:
        clusters: Clusters to report on
    """
    print(f"Clusters created: {len(clusters)}")
    if not clusters:
        return

    first = clusters[0]
    print(f"First cluster points: {first.size}")
    print(f"First cluster centroid: {first.centroid}")
