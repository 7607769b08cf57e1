"""
===============================================================================
Fiber Parameters and Scene Builder - Feature Verification
===============================================================================

Tests:
1. Material presets and preset lookup
2. FiberParameters clamping and validation
3. build_fiber_scene: TIR status, secondary ray angles, intensities, order

USAGE
-----
    python -m fiber_ray_optics.developer_tests.test_fiber_scene

===============================================================================
"""

import sys
import os
import math
from dataclasses import FrozenInstanceError, replace

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from fiber_ray_optics.core.constants import REFLECTION_DISTANCE_KM
from fiber_ray_optics.core.fiber import (
    GLASS_AIR,
    MATERIAL_PRESETS,
    PLASTIC_FIBER,
    SILICA_FIBER,
    FiberParameters,
    get_preset,
)
from fiber_ray_optics.core.geometry import Point
from fiber_ray_optics.core.optics import calculate_attenuation, critical_angle
from fiber_ray_optics.core.ray_path import generate_ray_path
from fiber_ray_optics.core.scene import (
    build_fiber_scene,
    ray_intensities,
    secondary_angles,
)


# =============================================================================
# Presets
# =============================================================================

def test_preset_table():
    """Test 1: The three material presets carry the expected indices."""
    print("\nTest 1: preset table")
    assert [p.name for p in MATERIAL_PRESETS] == ['Glass-Air', 'Silica Fiber', 'Plastic Fiber']
    assert (GLASS_AIR.core_index, GLASS_AIR.cladding_index) == (1.5, 1.0)
    assert (SILICA_FIBER.core_index, SILICA_FIBER.cladding_index) == (1.47, 1.45)
    assert (PLASTIC_FIBER.core_index, PLASTIC_FIBER.cladding_index) == (1.49, 1.39)
    for preset in MATERIAL_PRESETS:
        assert preset.core_index > preset.cladding_index
    print("  PASS")


def test_get_preset_lookup():
    """Test 2: Presets are found case-insensitively; unknown names raise."""
    print("\nTest 2: get_preset")
    assert get_preset('glass-air') is GLASS_AIR
    assert get_preset('Plastic Fiber') is PLASTIC_FIBER
    try:
        get_preset('Sapphire')
    except KeyError as e:
        assert 'Sapphire' in str(e)
    else:
        raise AssertionError("Expected KeyError for unknown preset")
    print("  PASS")


def test_preset_name_and_with_preset():
    """Test 3: Defaults match the silica preset; custom indices are 'Custom'."""
    print("\nTest 3: preset_name / with_preset")
    params = FiberParameters()
    assert params.preset_name == 'Silica Fiber'

    glass = params.with_preset(GLASS_AIR)
    assert glass.preset_name == 'Glass-Air'
    assert glass.incidence_angle == params.incidence_angle

    custom = replace(params, cladding_index=1.44)
    assert custom.preset_name == 'Custom'
    print("  PASS")


# =============================================================================
# Clamping and validation
# =============================================================================

def test_parameters_are_immutable():
    """Test 4: FiberParameters cannot be modified in place."""
    print("\nTest 4: immutability")
    params = FiberParameters()
    try:
        params.incidence_angle = 10
    except FrozenInstanceError:
        pass
    else:
        raise AssertionError("FiberParameters should be frozen")
    print("  PASS")


def test_clamped_ranges():
    """Test 5: clamped() applies the control ranges."""
    print("\nTest 5: clamping")
    params = FiberParameters(
        incidence_angle=95,
        core_index=2.5,
        cladding_index=3.0,
        attenuation_db_per_km=50,
    ).clamped()
    assert params.incidence_angle == 89
    assert params.core_index == 2.0
    assert params.cladding_index == 2.0 - 0.01
    assert params.attenuation_db_per_km == 10

    low = FiberParameters(incidence_angle=-5, core_index=1.0, cladding_index=0.5,
                          attenuation_db_per_km=0).clamped()
    assert low.incidence_angle == 0
    assert low.core_index == 1.1
    assert low.cladding_index == 1.0
    assert low.attenuation_db_per_km == 0.1
    assert low.core_index > low.cladding_index
    print("  PASS")


def test_clamped_keeps_valid_values():
    """Test 6: Values already in range are left untouched."""
    print("\nTest 6: clamping is a no-op for valid input")
    params = FiberParameters(incidence_angle=60, core_index=1.49,
                             cladding_index=1.39, attenuation_db_per_km=2.5)
    assert params.clamped() == params
    print("  PASS")


def test_validate():
    """Test 7: validate() accepts guiding fibers and rejects the rest."""
    print("\nTest 7: validate")
    FiberParameters().validate()
    FiberParameters(incidence_angle=0).validate()

    bad_cases = [
        (FiberParameters(core_index=1.4, cladding_index=1.45), 'core_index'),
        (FiberParameters(core_index=1.45, cladding_index=1.45), 'core_index'),
        (FiberParameters(cladding_index=0), 'cladding_index'),
        (FiberParameters(incidence_angle=90), 'incidence_angle'),
        (FiberParameters(incidence_angle=-1), 'incidence_angle'),
        (FiberParameters(incidence_angle=float('nan')), 'incidence_angle'),
        (FiberParameters(core_index=float('inf')), 'core_index'),
        (FiberParameters(attenuation_db_per_km=0), 'attenuation_db_per_km'),
    ]
    for params, field_name in bad_cases:
        try:
            params.validate()
        except ValueError as e:
            assert field_name in str(e), f"{field_name!r} not in {e}"
        else:
            raise AssertionError(f"Expected ValueError for {params}")
    print(f"  PASS: {len(bad_cases)} invalid parameter sets rejected")


def test_derived_properties():
    """Test 8: critical_angle / numerical_aperture / to_dict."""
    print("\nTest 8: derived properties")
    params = FiberParameters().with_preset(GLASS_AIR)
    assert abs(params.critical_angle - math.degrees(math.asin(1 / 1.5))) < 1e-12
    assert abs(params.numerical_aperture - math.sqrt(1.25)) < 1e-12
    data = params.to_dict()
    assert data['preset'] == 'Glass-Air'
    assert data['core_index'] == 1.5
    print("  PASS")


# =============================================================================
# Scene builder
# =============================================================================

def test_secondary_angles_step_and_graded():
    """Test 9: Step index spreads secondaries by 1.5/3 deg, graded by 0.5/1."""
    print("\nTest 9: secondary angles")
    assert secondary_angles(45, graded_index=False) == [46.5, 43.5, 48.0, 42.0]
    assert secondary_angles(45, graded_index=True) == [45.5, 44.5, 46.0, 44.0]
    # Upper rays capped at 89, lower rays floored at 1
    assert secondary_angles(88, graded_index=False) == [89, 86.5, 89, 85.0]
    assert secondary_angles(2, graded_index=False) == [3.5, 1, 5.0, 1]
    print("  PASS")


def test_intensities_without_attenuation():
    """Test 10: All rays at full intensity when attenuation is off."""
    print("\nTest 10: intensities (attenuation off)")
    points = generate_ray_path(50, 0, 700, 100, 45)
    assert ray_intensities(points, False, 5.0) == [1.0] * 5
    print("  PASS")


def test_intensities_with_attenuation():
    """Test 11: Distance proxy is segments * 0.2 km, scaled per level."""
    print("\nTest 11: intensities (attenuation on)")
    points = [Point(0, 0), Point(1, 1), Point(2, -1), Point(3, 0)]
    intensities = ray_intensities(points, True, 2.0)
    distance = 3 * REFLECTION_DISTANCE_KM
    assert len(intensities) == 5
    assert intensities[0] == 1.0
    for i in range(1, 5):
        expected = calculate_attenuation(distance * (1 + i * 0.1), 2.0)
        assert abs(intensities[i] - expected) < 1e-15
    assert intensities[1:] == sorted(intensities[1:], reverse=True)
    print(f"  PASS: {[round(v, 4) for v in intensities]}")


def test_scene_default_is_leaky():
    """Test 12: 45 deg in silica is below the ~80.6 deg critical angle."""
    print("\nTest 12: default scene")
    scene = build_fiber_scene(FiberParameters())
    assert scene.is_tir is False
    assert abs(scene.critical_angle - critical_angle(1.47, 1.45)) < 1e-12
    assert len(scene.secondaries) == 4
    assert len(scene.rays) == 5
    assert scene.rays[-1] is scene.primary
    assert scene.primary.primary is True
    assert scene.primary.points[0] == Point(50, 0)
    assert abs(scene.primary.points[-1].x - 750) < 1e-9
    assert scene.end_x == 750
    assert scene.power_percent == 100
    print("  PASS")


def test_scene_tir_and_secondary_rays():
    """Test 13: Secondary rays use the clamped angles and level intensities."""
    print("\nTest 13: TIR scene")
    params = FiberParameters(incidence_angle=85, show_attenuation=True,
                             attenuation_db_per_km=3.0)
    scene = build_fiber_scene(params)
    assert scene.is_tir is True

    angles = [ray.angle for ray in scene.secondaries]
    assert angles == [86.5, 83.5, 88.0, 82.0]
    for k, ray in enumerate(scene.secondaries):
        assert ray.primary is False
        assert ray.intensity == scene.intensities[min(k + 1, 4)]
        assert list(ray.points) == generate_ray_path(50, 0, 700, 100, ray.angle)
    assert scene.primary.intensity == scene.intensities[0] == 1.0
    print("  PASS")


def test_scene_custom_geometry():
    """Test 14: Geometry arguments are passed through to the ray paths."""
    print("\nTest 14: custom geometry")
    scene = build_fiber_scene(FiberParameters(incidence_angle=60, graded_index=True),
                              fiber_length=200, core_height=40, start_x=0)
    assert scene.primary.points[0] == Point(0, 0)
    assert abs(scene.primary.points[-1].x - 200) < 1e-9
    for p in scene.primary.points[1:-1]:
        assert abs(p.y) == 20
    assert [ray.angle for ray in scene.secondaries] == [60.5, 59.5, 61.0, 59.0]
    print("  PASS")


# =============================================================================
# Main
# =============================================================================

def main():
    print("=" * 70)
    print("Fiber Parameters and Scene Builder - Feature Verification")
    print("=" * 70)

    tests = [
        test_preset_table,
        test_get_preset_lookup,
        test_preset_name_and_with_preset,
        test_parameters_are_immutable,
        test_clamped_ranges,
        test_clamped_keeps_valid_values,
        test_validate,
        test_derived_properties,
        test_secondary_angles_step_and_graded,
        test_intensities_without_attenuation,
        test_intensities_with_attenuation,
        test_scene_default_is_leaky,
        test_scene_tir_and_secondary_rays,
        test_scene_custom_geometry,
    ]
    failed = []
    for test in tests:
        try:
            test()
        except AssertionError as e:
            print(f"  FAIL: {e}")
            failed.append(test.__name__)

    print("\n" + "=" * 70)
    print(f"Results: {len(tests) - len(failed)}/{len(tests)} tests passed")
    print("=" * 70)
    if failed:
        sys.exit(1)


if __name__ == '__main__':
    main()
