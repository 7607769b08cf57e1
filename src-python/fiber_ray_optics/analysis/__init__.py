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

Analysis utilities for fiber ray paths: Shapely path geometry, optics
summaries and parameter sweeps, and CSV export.
"""

from .path_geometry import (
    core_polygon,
    ray_path_to_linestring,
    path_length,
    path_length_ratio,
    reflection_points,
    count_reflections,
    path_within_core,
    wall_contact_counts,
)
from .fiber_analysis import (
    fiber_summary,
    angle_scan,
    attenuation_curve,
)
from .saving import (
    save_ray_path_csv,
    save_scene_csv,
)

__all__ = [
    # Path geometry (Shapely)
    'core_polygon',
    'ray_path_to_linestring',
    'path_length',
    'path_length_ratio',
    'reflection_points',
    'count_reflections',
    'path_within_core',
    'wall_contact_counts',
    # Optics summaries and sweeps
    'fiber_summary',
    'angle_scan',
    'attenuation_curve',
    # Export
    'save_ray_path_csv',
    'save_scene_csv',
]
