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

===============================================================================
RAY PATH GENERATOR
===============================================================================
Traces a straight ray bouncing between the two walls of a horizontal slab
(the fiber core, seen in longitudinal cross-section) and returns the polyline
of reflection points.

The slab spans y in [-core_height/2, +core_height/2]. Boundaries are fixed in
that frame, so path y values are offsets from the fiber axis and start_y is
expected to lie inside the core.

The incidence angle is measured from the boundary normal. The angle between
the ray and the fiber axis is therefore 90 - incidence_angle: large incidence
angles give shallow rays with few bounces, small ones give steep rays that
bounce rapidly.
===============================================================================
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from .constants import DEFAULT_MAX_RAY_POINTS
from .geometry import Point

logger = logging.getLogger(__name__)


def generate_ray_path(
    start_x: float,
    start_y: float,
    fiber_length: float,
    core_height: float,
    incidence_angle_deg: float,
    max_points: Optional[int] = DEFAULT_MAX_RAY_POINTS,
) -> List[Point]:
    """
    Generate the reflection points of a ray travelling along the fiber core.

    Args:
        start_x: X coordinate where the ray enters the core.
        start_y: Y coordinate (offset from the fiber axis) of the entry point.
        fiber_length: Length of the fiber along X.
        core_height: Full height of the core; walls sit at +/- core_height/2.
        incidence_angle_deg: Angle of incidence on the walls, in degrees.
            Must be below 90; exactly 90 yields a straight axial ray.
        max_points: Maximum number of points to return. When reached, the
            partial path is returned and a warning is logged. None disables
            the limit.

    Returns:
        List of Points in increasing x order. The first point is
        (start_x, start_y); the last lies at x = start_x + fiber_length unless
        the path was truncated. Intermediate points lie exactly on a wall.
    """
    end_x = start_x + fiber_length
    current_x = start_x
    current_y = start_y

    # Angle from the fiber axis
    angle_rad = math.radians(90 - incidence_angle_deg)
    slope = math.tan(angle_rad)

    points = [Point(current_x, current_y)]

    upper_boundary = core_height / 2
    lower_boundary = -core_height / 2

    direction = math.copysign(1, slope) if slope != 0 else 1
    stalled = False

    while current_x < end_x:
        if slope == 0:
            # Axial ray: no wall interaction
            points.append(Point(end_x, current_y))
            break

        if max_points is not None and len(points) >= max_points:
            logger.warning(
                "Ray path truncated at %d points (x=%.6g of %.6g, angle=%.6g deg)",
                len(points), current_x, end_x, incidence_angle_deg,
            )
            break

        next_boundary = upper_boundary if direction > 0 else lower_boundary
        distance_to_boundary = abs((next_boundary - current_y) / slope)

        if current_x + distance_to_boundary > end_x:
            final_y = current_y + slope * (end_x - current_x)
            points.append(Point(end_x, final_y))
            break

        next_x = current_x + distance_to_boundary
        if next_x <= current_x:
            # A ray starting on a wall legitimately takes one zero-length
            # step. Two in a row means it cannot progress any more.
            if stalled:
                logger.warning(
                    "Ray path stalled at x=%.6g (core_height=%.6g, angle=%.6g deg)",
                    current_x, core_height, incidence_angle_deg,
                )
                break
            stalled = True
        else:
            stalled = False

        current_x = next_x
        current_y = next_boundary
        points.append(Point(current_x, current_y))

        # Specular reflection off the wall
        direction = -direction
        slope = -slope

    logger.debug(
        "Generated ray path with %d points for angle=%.6g deg",
        len(points), incidence_angle_deg,
    )
    return points

