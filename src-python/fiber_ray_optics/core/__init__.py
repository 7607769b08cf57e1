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
"""

from .geometry import Point, distance
from . import constants
from .optics import (
    critical_angle,
    is_total_internal_reflection,
    calculate_reflection_angle,
    calculate_refraction_angle,
    calculate_attenuation,
    calculate_modal_dispersion,
    calculate_na,
    acceptance_angle,
)
from .ray_path import generate_ray_path
from .fiber import FiberParameters, MaterialPreset, MATERIAL_PRESETS, get_preset
from .scene import FiberScene, RayTrace, build_fiber_scene
from .svg_renderer import FiberSVGRenderer, render_fiber_scene

__all__ = [
    'Point', 'distance',
    'constants',
    'critical_angle',
    'is_total_internal_reflection',
    'calculate_reflection_angle',
    'calculate_refraction_angle',
    'calculate_attenuation',
    'calculate_modal_dispersion',
    'calculate_na',
    'acceptance_angle',
    'generate_ray_path',
    'FiberParameters', 'MaterialPreset', 'MATERIAL_PRESETS', 'get_preset',
    'FiberScene', 'RayTrace', 'build_fiber_scene',
    'FiberSVGRenderer', 'render_fiber_scene',
]
