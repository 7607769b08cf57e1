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

Fiber scene: everything the fiber view shows for one parameter set.

A scene holds the primary ray, the secondary rays fanned around it (these
illustrate modal dispersion: step-index fibers spread them wider than
graded-index ones) and the relative intensity of each ray when attenuation is
enabled. Scenes are built fresh from a FiberParameters record and never
updated in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .constants import (
    CORE_HEIGHT,
    FIBER_LENGTH,
    GRADED_INDEX_ANGLE_VARIATIONS,
    INTENSITY_LEVELS,
    MAX_INCIDENCE_ANGLE,
    MIN_SECONDARY_ANGLE,
    RAY_START_X,
    RAY_START_Y,
    REFLECTION_DISTANCE_KM,
    STEP_INDEX_ANGLE_VARIATIONS,
)
from .fiber import FiberParameters
from .geometry import Point
from .optics import (
    calculate_attenuation,
    calculate_na,
    critical_angle,
    is_total_internal_reflection,
)
from .ray_path import generate_ray_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RayTrace:
    """
    One ray of a fiber scene.

    Attributes:
        points: Polyline produced by generate_ray_path
        angle: Incidence angle used for this ray, degrees
        intensity: Relative power 0-1 used as rendering opacity
        primary: True for the ray launched at the selected angle
    """
    points: Tuple[Point, ...]
    angle: float
    intensity: float = 1.0
    primary: bool = False


@dataclass(frozen=True)
class FiberScene:
    """
    Computed state of the fiber view.

    Attributes:
        params: Parameters the scene was built from
        fiber_length: Fiber length in scene units
        core_height: Core height in scene units
        start_x: X where rays enter the core
        start_y: Y offset where rays enter the core
        is_tir: Whether the primary ray is totally internally reflected
        critical_angle: Critical angle in degrees
        numerical_aperture: Numerical aperture of the index pair
        primary: The primary ray
        secondaries: Secondary rays, ordered (upper, lower) per variation
        intensities: Intensity levels; index 0 belongs to the primary ray
    """
    params: FiberParameters
    fiber_length: float
    core_height: float
    start_x: float
    start_y: float
    is_tir: bool
    critical_angle: float
    numerical_aperture: float
    primary: RayTrace
    secondaries: Tuple[RayTrace, ...] = field(default_factory=tuple)
    intensities: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def rays(self) -> List[RayTrace]:
        """All rays in drawing order (secondaries first, primary on top)."""
        return list(self.secondaries) + [self.primary]

    @property
    def power_percent(self) -> float:
        """Power left in the primary ray, in percent."""
        return self.primary.intensity * 100

    @property
    def end_x(self) -> float:
        return self.start_x + self.fiber_length


def secondary_angles(incidence_angle: float, graded_index: bool) -> List[float]:
    """
    Incidence angles of the secondary rays around a primary ray.

    Each variation contributes an upper ray (capped at 89 deg) and a lower
    ray (floored at 1 deg), in that order.
    """
    variations = (GRADED_INDEX_ANGLE_VARIATIONS if graded_index
                  else STEP_INDEX_ANGLE_VARIATIONS)
    angles = []
    for variation in variations:
        angles.append(min(incidence_angle + variation, MAX_INCIDENCE_ANGLE))
        angles.append(max(incidence_angle - variation, MIN_SECONDARY_ANGLE))
    return angles


def ray_intensities(
    primary_points: Sequence[Point],
    show_attenuation: bool,
    attenuation_db_per_km: float,
) -> List[float]:
    """
    Relative intensities for the primary ray and four secondary levels.

    The travelled distance is estimated from the number of path segments
    (REFLECTION_DISTANCE_KM per segment); secondary level i travels
    (1 + 0.1 * i) times further. The primary level itself is never
    attenuated, matching the front end's display.
    """
    if not show_attenuation:
        return [1.0] * INTENSITY_LEVELS

    segment_count = len(primary_points) - 1
    distance_km = segment_count * REFLECTION_DISTANCE_KM

    intensities = [1.0]
    for i in range(1, INTENSITY_LEVELS):
        ray_distance = distance_km * (1 + i * 0.1)
        intensities.append(calculate_attenuation(ray_distance, attenuation_db_per_km))
    return intensities


def build_fiber_scene(
    params: FiberParameters,
    fiber_length: float = FIBER_LENGTH,
    core_height: float = CORE_HEIGHT,
    start_x: float = RAY_START_X,
    start_y: float = RAY_START_Y,
) -> FiberScene:
    """
    Compute the fiber scene for a parameter set.

    Args:
        params: Fiber parameters. They are used as given; call
            params.clamped() first if they come from unchecked input.
        fiber_length: Length of the fiber in scene units.
        core_height: Height of the core in scene units.
        start_x: X coordinate where rays enter the core.
        start_y: Y offset where rays enter the core.

    Returns:
        The computed FiberScene.
    """
    angle = params.incidence_angle
    n1 = params.core_index
    n2 = params.cladding_index

    primary_points = generate_ray_path(start_x, start_y, fiber_length,
                                       core_height, angle)
    intensities = ray_intensities(primary_points, params.show_attenuation,
                                  params.attenuation_db_per_km)

    secondaries = []
    for index, secondary_angle in enumerate(secondary_angles(angle, params.graded_index)):
        points = generate_ray_path(start_x, start_y, fiber_length,
                                   core_height, secondary_angle)
        level = min(index + 1, len(intensities) - 1)
        secondaries.append(RayTrace(
            points=tuple(points),
            angle=secondary_angle,
            intensity=intensities[level],
        ))

    primary = RayTrace(
        points=tuple(primary_points),
        angle=angle,
        intensity=intensities[0],
        primary=True,
    )

    scene = FiberScene(
        params=params,
        fiber_length=fiber_length,
        core_height=core_height,
        start_x=start_x,
        start_y=start_y,
        is_tir=is_total_internal_reflection(n1, n2, angle),
        critical_angle=critical_angle(n1, n2),
        numerical_aperture=calculate_na(n1, n2),
        primary=primary,
        secondaries=tuple(secondaries),
        intensities=tuple(intensities),
    )
    logger.debug(
        "Built fiber scene: angle=%.3g n1=%.4g n2=%.4g tir=%s rays=%d",
        angle, n1, n2, scene.is_tir, len(scene.rays),
    )
    return scene
