import sys
import os
import logging

# Add parent directories to path to import fiber_ray_optics modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from fiber_ray_optics.core.fiber import FiberParameters, MATERIAL_PRESETS
from fiber_ray_optics.core.scene import build_fiber_scene
from fiber_ray_optics.core.svg_renderer import FiberSVGRenderer
from fiber_ray_optics.analysis import (
    count_reflections,
    fiber_summary,
    path_length_ratio,
    save_scene_csv,
)
from fiber_ray_optics.logging_config import setup_logging


def fiber_demo():
    """Guided vs. leaky rays in the material presets.

    Physics Background
    Critical angle: θ_c = arcsin(n₂/n₁)
    Silica fiber (1.47 / 1.45): θ_c ≈ 80.6°, only shallow rays are guided
    Glass-air (1.5 / 1.0): θ_c ≈ 41.8°, most launch angles are guided

    Plan
    For every preset, render one ray launched just above and one just below
    the critical angle, with attenuation enabled, and print the summary.
    """
    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    os.makedirs(output_dir, exist_ok=True)
    print("Rendering fiber presets...\n")

    for preset in MATERIAL_PRESETS:
        base = FiberParameters(show_attenuation=True).with_preset(preset)
        theta_c = base.critical_angle

        for label, angle in (('guided', theta_c + 2.0), ('leaky', theta_c - 2.0)):
            params = FiberParameters(
                incidence_angle=angle,
                core_index=base.core_index,
                cladding_index=base.cladding_index,
                show_attenuation=True,
                attenuation_db_per_km=2.0,
            ).clamped()
            scene = build_fiber_scene(params)

            renderer = FiberSVGRenderer(viewbox=(0, -200, scene.fiber_length + 100, 400))
            renderer.draw_scene(scene)
            slug = preset.name.lower().replace(' ', '_')
            svg_file = os.path.join(output_dir, f'{slug}_{label}.svg')
            renderer.save(svg_file)

            summary = fiber_summary(params.core_index, params.cladding_index,
                                    params.incidence_angle)
            points = scene.primary.points
            print(f"{preset.name:14s} {label:6s} angle={params.incidence_angle:5.1f}° "
                  f"θc={summary['critical_angle_deg']:5.1f}° "
                  f"NA={summary['numerical_aperture']:.3f} "
                  f"regime={summary['regime']:5s} "
                  f"reflections={count_reflections(points, scene.core_height):3d} "
                  f"length ratio={path_length_ratio(points):.3f} "
                  f"power={scene.power_percent:.1f}%")

    graded = build_fiber_scene(FiberParameters(incidence_angle=85, graded_index=True))
    csv_file = save_scene_csv(graded, output_dir, filename='graded_index_scene.csv')
    print(f"\nGraded-index scene exported to: {csv_file}")
    print(f"SVG files written to: {output_dir}")


if __name__ == '__main__':
    setup_logging(logging.INFO)
    fiber_demo()
