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

Fiber parameters and material presets.

A FiberParameters record holds everything a recomputation of the fiber view
needs. It is immutable: changing a control produces a new record via
dataclasses.replace() or with_preset(), and the scene is rebuilt from it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Dict, Tuple

from .constants import (
    MAX_ATTENUATION_DB_PER_KM,
    MAX_CORE_INDEX,
    MAX_INCIDENCE_ANGLE,
    MIN_ATTENUATION_DB_PER_KM,
    MIN_CLADDING_INDEX,
    MIN_CORE_INDEX,
    MIN_INCIDENCE_ANGLE,
    MIN_INDEX_CONTRAST,
)
from .optics import calculate_na, critical_angle

CUSTOM_PRESET_NAME = 'Custom'


@dataclass(frozen=True)
class MaterialPreset:
    """
    A named core/cladding refractive index pair.

    Attributes:
        name: Display name of the preset
        core_index: Refractive index of the core (n1)
        cladding_index: Refractive index of the cladding (n2)
    """
    name: str
    core_index: float
    cladding_index: float


GLASS_AIR = MaterialPreset('Glass-Air', 1.5, 1.0)
SILICA_FIBER = MaterialPreset('Silica Fiber', 1.47, 1.45)
PLASTIC_FIBER = MaterialPreset('Plastic Fiber', 1.49, 1.39)

MATERIAL_PRESETS: Tuple[MaterialPreset, ...] = (GLASS_AIR, SILICA_FIBER, PLASTIC_FIBER)


def get_preset(name: str) -> MaterialPreset:
    """
    Look up a material preset by name (case-insensitive).

    Raises:
        KeyError: If no preset has that name.
    """
    for preset in MATERIAL_PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    raise KeyError(
        f"Unknown material preset {name!r}. "
        f"Available: {', '.join(p.name for p in MATERIAL_PRESETS)}"
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class FiberParameters:
    """
    Input parameters of one fiber computation.

    Attributes:
        incidence_angle: Angle of incidence on the core wall, degrees
        core_index: Refractive index of the core (n1)
        cladding_index: Refractive index of the cladding (n2)
        graded_index: Draw a graded-index fiber (narrower ray spread)
        show_attenuation: Apply attenuation to ray intensities
        attenuation_db_per_km: Attenuation coefficient in dB/km
    """
    incidence_angle: float = 45.0
    core_index: float = SILICA_FIBER.core_index
    cladding_index: float = SILICA_FIBER.cladding_index
    graded_index: bool = False
    show_attenuation: bool = False
    attenuation_db_per_km: float = 1.0

    @property
    def critical_angle(self) -> float:
        return critical_angle(self.core_index, self.cladding_index)

    @property
    def numerical_aperture(self) -> float:
        return calculate_na(self.core_index, self.cladding_index)

    @property
    def preset_name(self) -> str:
        """Name of the preset whose indices match exactly, or 'Custom'."""
        for preset in MATERIAL_PRESETS:
            if (preset.core_index == self.core_index and
                    preset.cladding_index == self.cladding_index):
                return preset.name
        return CUSTOM_PRESET_NAME

    def with_preset(self, preset: MaterialPreset) -> 'FiberParameters':
        """Return a copy using the preset's core and cladding indices."""
        return replace(self, core_index=preset.core_index,
                       cladding_index=preset.cladding_index)

    def clamped(self) -> 'FiberParameters':
        """
        Return a copy with every value inside the control ranges.

        The cladding index is clamped after the core index, so the result
        always satisfies core_index > cladding_index.
        """
        core_index = _clamp(self.core_index, MIN_CORE_INDEX, MAX_CORE_INDEX)
        cladding_index = _clamp(self.cladding_index, MIN_CLADDING_INDEX,
                                core_index - MIN_INDEX_CONTRAST)
        return replace(
            self,
            incidence_angle=_clamp(self.incidence_angle,
                                   MIN_INCIDENCE_ANGLE, MAX_INCIDENCE_ANGLE),
            core_index=core_index,
            cladding_index=cladding_index,
            attenuation_db_per_km=_clamp(self.attenuation_db_per_km,
                                         MIN_ATTENUATION_DB_PER_KM,
                                         MAX_ATTENUATION_DB_PER_KM),
        )

    def validate(self) -> None:
        """
        Check that the parameters describe a guiding fiber.

        Raises:
            ValueError: If a value is not finite, an index is not positive,
                the core index does not exceed the cladding index, the angle
                is outside [0, 90) or the attenuation is not positive.
        """
        for field_name in ('incidence_angle', 'core_index', 'cladding_index',
                           'attenuation_db_per_km'):
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise ValueError(f"{field_name} must be finite, got {value!r}")

        if self.cladding_index <= 0:
            raise ValueError(
                f"cladding_index must be positive, got {self.cladding_index}"
            )
        if self.core_index <= self.cladding_index:
            raise ValueError(
                f"No guiding possible: core_index={self.core_index} must be "
                f"greater than cladding_index={self.cladding_index}."
            )
        if not 0 <= self.incidence_angle < 90:
            raise ValueError(
                f"incidence_angle must be in [0, 90), got {self.incidence_angle}"
            )
        if self.attenuation_db_per_km <= 0:
            raise ValueError(
                f"attenuation_db_per_km must be positive, "
                f"got {self.attenuation_db_per_km}"
            )

    def to_dict(self) -> Dict[str, object]:
        return {
            'incidence_angle': self.incidence_angle,
            'core_index': self.core_index,
            'cladding_index': self.cladding_index,
            'graded_index': self.graded_index,
            'show_attenuation': self.show_attenuation,
            'attenuation_db_per_km': self.attenuation_db_per_km,
            'preset': self.preset_name,
        }
