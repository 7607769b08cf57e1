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
Ray Path Export Utilities
===============================================================================
Export ray paths and fiber scenes to CSV for plotting or inspection in other
tools. One row per path point.
===============================================================================
"""

import csv
import logging
import math
from pathlib import Path
from typing import Sequence, Union

from ..core.geometry import Point, distance
from ..core.scene import FiberScene

logger = logging.getLogger(__name__)


def save_ray_path_csv(
    points: Sequence[Point],
    output_path: Union[str, Path],
    filename: str = "ray_path.csv",
    core_height: float = None,
    precision_coords: int = 4,
) -> Path:
    """
    Export a single ray path to a CSV file.

    Args:
        points: Ray path as returned by generate_ray_path.
        output_path: Directory where the CSV file will be saved.
        filename: Name of the output CSV file (default: "ray_path.csv").
        core_height: If given, an ``on_wall`` column flags points lying on a
            core wall.
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the directory cannot be created or the file cannot be written.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / filename

    coord_fmt = f"{{:.{precision_coords}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        header = ['point_index', 'x', 'y', 'segment_length', 'cumulative_length']
        if core_height is not None:
            header.append('on_wall')
        writer.writerow(header)

        cumulative = 0.0
        for i, p in enumerate(points):
            segment = distance(points[i - 1], p) if i > 0 else 0.0
            cumulative += segment
            row = [
                i,
                coord_fmt.format(p.x),
                coord_fmt.format(p.y),
                coord_fmt.format(segment),
                coord_fmt.format(cumulative),
            ]
            if core_height is not None:
                row.append(math.isclose(abs(p.y), core_height / 2, abs_tol=1e-9))
            writer.writerow(row)

    logger.info("Saved %d ray path points to %s", len(points), csv_file)
    return csv_file


def save_scene_csv(
    scene: FiberScene,
    output_path: Union[str, Path],
    filename: str = "fiber_scene.csv",
    precision_coords: int = 4,
    precision_intensity: int = 6,
) -> Path:
    """
    Export every ray of a fiber scene to a CSV file.

    Rays are written in drawing order (secondary rays first, then the
    primary ray).

    Args:
        scene: Scene produced by build_fiber_scene.
        output_path: Directory where the CSV file will be saved.
        filename: Name of the output CSV file (default: "fiber_scene.csv").
        precision_coords: Decimal places for coordinate values (default: 4).
        precision_intensity: Decimal places for intensities (default: 6).

    Returns:
        Path: Full path to the created CSV file.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / filename

    coord_fmt = f"{{:.{precision_coords}f}}"
    intensity_fmt = f"{{:.{precision_intensity}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'ray_index', 'primary', 'angle_deg', 'intensity', 'is_tir',
            'point_index', 'x', 'y',
        ])
        for ray_index, trace in enumerate(scene.rays):
            for point_index, p in enumerate(trace.points):
                writer.writerow([
                    ray_index,
                    trace.primary,
                    f"{trace.angle:g}",
                    intensity_fmt.format(trace.intensity),
                    scene.is_tir,
                    point_index,
                    coord_fmt.format(p.x),
                    coord_fmt.format(p.y),
                ])

    logger.info("Saved %d rays to %s", len(scene.rays), csv_file)
    return csv_file
