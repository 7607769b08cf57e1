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
OPTICS CALCULATOR
===============================================================================
Stateless formulas for light guided in a step-index fiber: critical angle,
total internal reflection, Snell refraction, numerical aperture, modal
dispersion and attenuation.

Angles are in degrees and measured from the boundary normal.

None of these functions raise on physically meaningless inputs. An index pair
with n2 > n1 gives NaN (critical angle, NA) and a missing refraction angle is
reported as None. Callers are expected to validate indices upstream
(see FiberParameters.clamped / FiberParameters.validate).
===============================================================================
"""

from __future__ import annotations

import math
from typing import Optional

from .constants import MODAL_DISPERSION_SCALE, SPEED_OF_LIGHT


def _asin_deg(value: float) -> float:
    # math.asin raises outside [-1, 1]; the calculator reports NaN instead
    if math.isnan(value) or abs(value) > 1.0:
        return float('nan')
    return math.degrees(math.asin(value))


def _index_ratio(numerator: float, denominator: float) -> float:
    # A zero index gives an infinite ratio (NaN for 0/0) instead of raising
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return float('nan')
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def critical_angle(n1: float, n2: float) -> float:
    """
    Compute the critical angle for total internal reflection at the
    core/cladding boundary.

    Args:
        n1: Refractive index of the core.
        n2: Refractive index of the cladding.

    Returns:
        Critical angle in degrees, or NaN when n2 > n1 (no TIR possible).
    """
    return _asin_deg(_index_ratio(n2, n1))


def is_total_internal_reflection(
    n1: float, n2: float, incidence_angle_deg: float
) -> bool:
    """
    Decide whether a ray hitting the core/cladding boundary is totally
    internally reflected.

    The comparison is strict: a ray exactly at the critical angle is not
    considered trapped.

    Args:
        n1: Refractive index of the core.
        n2: Refractive index of the cladding.
        incidence_angle_deg: Angle of incidence in degrees.

    Returns:
        True if the incidence angle exceeds the critical angle. False
        otherwise, including when the critical angle is undefined.
    """
    return incidence_angle_deg > critical_angle(n1, n2)


def calculate_reflection_angle(incidence_angle_deg: float) -> float:
    """Specular reflection: the angle of reflection equals the angle of incidence."""
    return incidence_angle_deg


def calculate_refraction_angle(
    n1: float, n2: float, incidence_angle_deg: float
) -> Optional[float]:
    """
    Compute the refraction angle using Snell's law.

    Args:
        n1: Refractive index of the incident medium (core).
        n2: Refractive index of the transmitting medium (cladding).
        incidence_angle_deg: Angle of incidence in degrees.

    Returns:
        Refraction angle in degrees within [-90, 90], or None when
        |(n1/n2) * sin(theta)| > 1 (total internal reflection). NaN when
        the ratio is undefined (both indices zero, or n2 = 0 at normal
        incidence).
    """
    sin_refraction = _index_ratio(n1, n2) * math.sin(math.radians(incidence_angle_deg))
    if abs(sin_refraction) > 1.0:
        return None
    return math.degrees(math.asin(sin_refraction))


def calculate_attenuation(distance: float, attenuation_coefficient: float) -> float:
    """
    Compute the fraction of optical power left after a given distance.

    Args:
        distance: Distance travelled (same length unit as the coefficient).
        attenuation_coefficient: Loss in dB per unit distance.

    Returns:
        Linear power ratio; 1.0 at zero distance, decreasing with distance.
    """
    attenuation_db = attenuation_coefficient * distance
    return 10 ** (-attenuation_db / 10)


def calculate_modal_dispersion(
    core_radius: float, core_index: float, na: float
) -> float:
    """
    Estimate modal dispersion of a step-index fiber in ns/km.

    Uses c = 3e8 m/s. ``core_radius`` is accepted for interface compatibility
    and does not enter the formula.

    Args:
        core_radius: Radius of the fiber core (unused).
        core_index: Refractive index of the core.
        na: Numerical aperture of the fiber.

    Returns:
        Modal dispersion figure in ns/km.
    """
    return (core_index * na * na) / (2 * SPEED_OF_LIGHT) * MODAL_DISPERSION_SCALE


def calculate_na(n1: float, n2: float) -> float:
    """
    Compute the numerical aperture sqrt(n1^2 - n2^2).

    Args:
        n1: Refractive index of the core.
        n2: Refractive index of the cladding.

    Returns:
        Numerical aperture, or NaN when n2 > n1.
    """
    radicand = n1 * n1 - n2 * n2
    if radicand < 0:
        return float('nan')
    return math.sqrt(radicand)


def acceptance_angle(n1: float, n2: float) -> float:
    """
    Half-angle of the acceptance cone for light launched from air.

    Args:
        n1: Refractive index of the core.
        n2: Refractive index of the cladding.

    Returns:
        Acceptance half-angle in degrees, or NaN when NA is undefined or
        exceeds 1 (every launch angle from air is guided).
    """
    return _asin_deg(calculate_na(n1, n2))
