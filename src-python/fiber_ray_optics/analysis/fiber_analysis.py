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
FIBER ANALYSIS
===============================================================================
Summaries and parameter sweeps built on the optics calculator. These answer
"what should I expect?" for an index pair and launch angle without building a
scene or rendering anything.

All functions return values; no print() side effects.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import numpy as np

from ..core.constants import MAX_INCIDENCE_ANGLE, MIN_INCIDENCE_ANGLE
from ..core.optics import (
    acceptance_angle,
    calculate_attenuation,
    calculate_modal_dispersion,
    calculate_na,
    calculate_reflection_angle,
    calculate_refraction_angle,
    critical_angle,
    is_total_internal_reflection,
)


def fiber_summary(
    n1: float,
    n2: float,
    incidence_angle_deg: float,
    core_radius: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Compute every optics figure for one index pair and incidence angle.

    Args:
        n1: Refractive index of the core.
        n2: Refractive index of the cladding.
        incidence_angle_deg: Angle of incidence on the core wall, degrees.
        core_radius: Passed through to calculate_modal_dispersion.

    Returns:
        Dict with keys:
        - ``regime``: ``"tir"`` when the ray is guided, else ``"leaky"``
        - ``n1``, ``n2``, ``incidence_angle_deg``
        - ``critical_angle_deg``: NaN if n2 > n1
        - ``tir_margin_deg``: incidence angle minus critical angle
        - ``reflection_angle_deg``
        - ``refraction_angle_deg``: None in the TIR regime
        - ``numerical_aperture``
        - ``acceptance_angle_deg``: NaN if NA is undefined or above 1
        - ``modal_dispersion_ns_per_km``
    """
    theta_c = critical_angle(n1, n2)
    na = calculate_na(n1, n2)
    guided = is_total_internal_reflection(n1, n2, incidence_angle_deg)

    return {
        'regime': 'tir' if guided else 'leaky',
        'n1': n1,
        'n2': n2,
        'incidence_angle_deg': incidence_angle_deg,
        'critical_angle_deg': theta_c,
        'tir_margin_deg': incidence_angle_deg - theta_c,
        'reflection_angle_deg': calculate_reflection_angle(incidence_angle_deg),
        'refraction_angle_deg': calculate_refraction_angle(n1, n2, incidence_angle_deg),
        'numerical_aperture': na,
        'acceptance_angle_deg': acceptance_angle(n1, n2),
        'modal_dispersion_ns_per_km': calculate_modal_dispersion(core_radius, n1, na),
    }


def angle_scan(
    n1: float,
    n2: float,
    angles_deg: Optional[Sequence[float]] = None,
    step_deg: float = 0.5,
) -> Dict[str, np.ndarray]:
    """
    Sweep the incidence angle and record TIR status and refraction angle.

    Args:
        n1: Refractive index of the core.
        n2: Refractive index of the cladding.
        angles_deg: Angles to evaluate. Defaults to the control range
            [0, 89] in steps of ``step_deg``.
        step_deg: Step of the default angle grid.

    Returns:
        Dict of equally long arrays:
        - ``angle_deg``
        - ``is_tir``: boolean array
        - ``refraction_angle_deg``: NaN where the ray is totally reflected
    """
    if angles_deg is None:
        angles = np.arange(MIN_INCIDENCE_ANGLE, MAX_INCIDENCE_ANGLE + step_deg / 2, step_deg)
    else:
        angles = np.asarray(angles_deg, dtype=float)

    is_tir = np.array(
        [is_total_internal_reflection(n1, n2, float(a)) for a in angles], dtype=bool
    )
    refraction = np.full(angles.shape, np.nan)
    for i, a in enumerate(angles):
        theta_t = calculate_refraction_angle(n1, n2, float(a))
        if theta_t is not None:
            refraction[i] = theta_t

    return {
        'angle_deg': angles,
        'is_tir': is_tir,
        'refraction_angle_deg': refraction,
    }


def attenuation_curve(
    attenuation_db_per_km: float,
    max_distance_km: float,
    num: int = 50,
) -> Dict[str, np.ndarray]:
    """
    Remaining power fraction as a function of distance.

    Args:
        attenuation_db_per_km: Attenuation coefficient.
        max_distance_km: Last distance of the curve.
        num: Number of samples, including 0 and ``max_distance_km``.

    Returns:
        Dict with ``distance_km`` and ``power_ratio`` arrays.
    """
    distances = np.linspace(0.0, max_distance_km, num)
    return {
        'distance_km': distances,
        'power_ratio': calculate_attenuation(distances, attenuation_db_per_km),
    }
