"""
Copyright 2026 fiber-ray-optics authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Path Geometry Analysis

Utilities for analyzing ray paths against the fiber core with Shapely:
- Core and wall geometry as Shapely objects
- Path length and length ratio (the extra distance a zig-zag ray travels
  compared with an axial ray, which is what causes modal dispersion)
- Reflection points and containment checks
"""

import math
from typing import List, Sequence, Tuple

from shapely.geometry import LineString, Polygon, box

from ..core.constants import GEOMETRY_TOLERANCE
from ..core.geometry import Point


def core_polygon(start_x: float, fiber_length: float, core_height: float) -> Polygon:
    """
    Build the fiber core as a Shapely rectangle.

    Args:
        start_x: X where the core begins.
        fiber_length: Length of the core along X.
        core_height: Height of the core, centred on y = 0.

    Returns:
        A Shapely Polygon spanning [start_x, start_x + fiber_length] x
        [-core_height/2, core_height/2].
    """
    half = core_height / 2
    return box(start_x, -half, start_x + fiber_length, half)


def ray_path_to_linestring(points: Sequence[Point]) -> LineString:
    """
    Convert a ray path to a Shapely LineString.

    Raises:
        ValueError: If the path has fewer than two points.
    """
    if len(points) < 2:
        raise ValueError(
            f"A ray path needs at least two points to form a line, got {len(points)}."
        )
    return LineString([(p.x, p.y) for p in points])


def path_length(points: Sequence[Point]) -> float:
    """
    Geometric length of a ray path in scene units.

    Returns:
        Length of the polyline; 0.0 for paths with fewer than two points.
    """
    if len(points) < 2:
        return 0.0
    return ray_path_to_linestring(points).length


def path_length_ratio(points: Sequence[Point]) -> float:
    """
    Ratio of the path length to its horizontal extent.

    An axial ray has ratio 1; steeper rays travel further for the same fiber
    length. Returns NaN if the path does not advance along X.
    """
    if len(points) < 2:
        return float('nan')
    extent = points[-1].x - points[0].x
    if extent <= 0:
        return float('nan')
    return path_length(points) / extent


def reflection_points(points: Sequence[Point], core_height: float,
                      tolerance: float = GEOMETRY_TOLERANCE) -> List[Point]:
    """
    Points of a path where the ray reflects off a core wall.

    The first and last points are the launch and exit points and are never
    counted, even if they happen to lie on a wall.

    Args:
        points: Ray path.
        core_height: Core height used to generate the path.
        tolerance: Allowed distance from the wall.

    Returns:
        Interior points lying on y = +/- core_height/2.
    """
    half = core_height / 2
    return [
        p for p in points[1:-1]
        if math.isclose(abs(p.y), half, rel_tol=0.0, abs_tol=tolerance)
    ]


def count_reflections(points: Sequence[Point], core_height: float,
                      tolerance: float = GEOMETRY_TOLERANCE) -> int:
    """Number of wall reflections along a path."""
    return len(reflection_points(points, core_height, tolerance))


def path_within_core(points: Sequence[Point], start_x: float,
                     fiber_length: float, core_height: float,
                     tolerance: float = GEOMETRY_TOLERANCE) -> bool:
    """
    Check that a path stays inside the core (walls included).

    Args:
        points: Ray path.
        start_x: X where the core begins.
        fiber_length: Length of the core.
        core_height: Height of the core.
        tolerance: Buffer applied to the core to absorb rounding.

    Returns:
        True if every part of the path lies in the buffered core.
    """
    if not points:
        return True
    core = core_polygon(start_x, fiber_length, core_height).buffer(tolerance)
    if len(points) == 1:
        return core.covers(points[0].to_shapely())
    return core.covers(ray_path_to_linestring(points))


def wall_contact_counts(points: Sequence[Point], core_height: float,
                        tolerance: float = GEOMETRY_TOLERANCE) -> Tuple[int, int]:
    """
    Count reflections on each wall.

    Returns:
        Tuple (upper, lower) with the number of reflections on each wall.
    """
    upper = 0
    lower = 0
    for p in reflection_points(points, core_height, tolerance):
        if p.y > 0:
            upper += 1
        else:
            lower += 1
    return upper, lower
