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

Fiber Ray Optics
================

Ray-optics calculations for light guided in an optical fiber by total
internal reflection, with SVG rendering of the fiber cross-section.

Main modules:
- core: Optics calculator, ray path generator, fiber parameters, scene
  builder and SVG renderer
- analysis: Shapely-based path geometry, fiber summaries and data export
- examples: Example renderings

Quick start:
    from fiber_ray_optics import FiberParameters, build_fiber_scene
    from fiber_ray_optics.core.svg_renderer import render_fiber_scene

    scene = build_fiber_scene(FiberParameters(incidence_angle=60))
    svg = render_fiber_scene(scene)
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.optics import (
    is_total_internal_reflection,
    calculate_reflection_angle,
    calculate_refraction_angle,
    calculate_attenuation,
    calculate_modal_dispersion,
    calculate_na,
)
from .core.ray_path import generate_ray_path
from .core.geometry import Point
from .core.fiber import FiberParameters
from .core.scene import build_fiber_scene

__all__ = [
    'is_total_internal_reflection',
    'calculate_reflection_angle',
    'calculate_refraction_angle',
    'calculate_attenuation',
    'calculate_modal_dispersion',
    'calculate_na',
    'generate_ray_path',
    'Point',
    'FiberParameters',
    'build_fiber_scene',
    '__version__',
]
