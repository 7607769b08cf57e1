"""
===============================================================================
Ray Path Generator - Feature Verification
===============================================================================

Tests generate_ray_path:
1. Path invariants (start point, end x, wall snapping, increasing x)
2. 45 deg and 90 deg reference scenarios
3. Degenerate inputs (negative length, zero core height)
4. Point cap truncation and its warning

USAGE
-----
    python -m fiber_ray_optics.developer_tests.test_ray_path

===============================================================================
"""

import sys
import os
import logging
import math

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from fiber_ray_optics.core.geometry import Point
from fiber_ray_optics.core.ray_path import generate_ray_path


# =============================================================================
# Helpers
# =============================================================================

class _RecordingHandler(logging.Handler):
    """Collects log records emitted by the ray path module."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def capture_ray_path_logs():
    logger = logging.getLogger('fiber_ray_optics.core.ray_path')
    handler = _RecordingHandler()
    logger.addHandler(handler)
    return logger, handler


def assert_path_invariants(points, start_x, start_y, fiber_length, core_height):
    """Check the invariants every non-truncated path satisfies."""
    half = core_height / 2
    assert points[0] == Point(start_x, start_y), f"Bad first point {points[0]}"
    assert abs(points[-1].x - (start_x + fiber_length)) < 1e-9, (
        f"Last point {points[-1]} is not at the fiber end"
    )
    for p in points[1:-1]:
        assert p.y == half or p.y == -half, f"Intermediate point {p} not on a wall"
    for previous, current in zip(points, points[1:]):
        assert current.x > previous.x, f"x not increasing: {previous} -> {current}"


# =============================================================================
# Reference scenarios
# =============================================================================

def test_45_degree_scenario():
    """Test 1: Slope 1 in a 20-high core: first wall at x=10, then every 20."""
    print("\nTest 1: 45 deg scenario")
    points = generate_ray_path(0, 0, 100, 20, 45)
    assert_path_invariants(points, 0, 0, 100, 20)

    # Start on the axis, walls at x = 10, 30, 50, 70, 90, exit at x = 100
    assert len(points) == 7, f"Expected 7 points, got {len(points)}"
    for k, p in enumerate(points[1:-1]):
        assert abs(p.x - (10 + 20 * k)) < 1e-9, f"Bounce {k} at {p}"
        assert p.y == (10 if k % 2 == 0 else -10)
    # Half way back from the upper wall when the fiber ends
    assert abs(points[-1].y) < 1e-9
    print(f"  PASS: {len(points)} points")


def test_90_degree_is_axial():
    """Test 2: 90 deg incidence travels along the axis: exactly two points."""
    print("\nTest 2: 90 deg axial ray")
    points = generate_ray_path(0, 0, 100, 20, 90)
    assert points == [Point(0, 0), Point(100, 0)], f"Got {points}"
    print("  PASS")


def test_axial_ray_keeps_offset():
    """Test 3: An axial ray launched off-axis stays at its height."""
    print("\nTest 3: off-axis axial ray")
    points = generate_ray_path(50, 5, 700, 100, 90)
    assert points == [Point(50, 5), Point(750, 5)]
    print("  PASS")


def test_shallow_ray_single_segment():
    """Test 4: 89 deg never reaches a wall over 700 units of a 100-high core."""
    print("\nTest 4: shallow ray")
    points = generate_ray_path(50, 0, 700, 100, 89)
    assert len(points) == 2
    assert points[-1].x == 750
    assert abs(points[-1].y - 700 * math.tan(math.radians(1))) < 1e-9
    print(f"  PASS: exit height={points[-1].y:.3f}")


def test_invariants_across_angles():
    """Test 5: Invariants hold for the visualizer geometry at many angles."""
    print("\nTest 5: invariants over angles")
    for step in range(2, 179):
        angle = step * 0.5
        points = generate_ray_path(50, 0, 700, 100, angle)
        assert_path_invariants(points, 50, 0, 700, 100)
    print("  PASS: angles 1.0 .. 89.0")


def test_first_bounce_goes_up():
    """Test 6: Rays leave the axis towards the upper wall first."""
    print("\nTest 6: initial direction")
    points = generate_ray_path(0, 0, 1000, 20, 30)
    assert points[1].y == 10
    assert points[2].y == -10
    print("  PASS")


def test_steeper_rays_bounce_more():
    """Test 7: Smaller incidence angles give more reflections."""
    print("\nTest 7: bounce count vs angle")
    counts = [len(generate_ray_path(0, 0, 700, 100, angle))
              for angle in (10, 30, 60, 80)]
    assert counts == sorted(counts, reverse=True), f"Counts {counts}"
    assert counts[0] > counts[-1]
    print(f"  PASS: point counts {counts}")


def test_paths_are_deterministic():
    """Test 8: Identical inputs give identical, independent lists."""
    print("\nTest 8: determinism")
    first = generate_ray_path(50, 0, 700, 100, 37.5)
    second = generate_ray_path(50, 0, 700, 100, 37.5)
    assert first == second
    assert first is not second
    print("  PASS")


# =============================================================================
# Degenerate inputs and hardening
# =============================================================================

def test_negative_length_returns_start_only():
    """Test 9: A negative fiber length yields only the start point."""
    print("\nTest 9: negative fiber length")
    assert generate_ray_path(10, 0, -50, 20, 45) == [Point(10, 0)]
    assert generate_ray_path(10, 0, 0, 20, 45) == [Point(10, 0)]
    assert generate_ray_path(10, 0, -50, 20, 90) == [Point(10, 0)]
    print("  PASS")


def test_point_cap_truncates_and_warns():
    """Test 10: Dense zig-zags stop at max_points with a warning."""
    print("\nTest 10: point cap")
    logger, handler = capture_ray_path_logs()
    try:
        points = generate_ray_path(50, 0, 700, 100, 0.5, max_points=50)
    finally:
        logger.removeHandler(handler)

    assert len(points) == 50
    assert points[-1].x < 750
    warnings = [r for r in handler.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1, f"Expected one warning, got {len(warnings)}"
    assert 'truncated' in warnings[0].getMessage()
    print(f"  PASS: truncated at x={points[-1].x:.2f}")


def test_point_cap_can_be_disabled():
    """Test 11: max_points=None lets the path reach the fiber end."""
    print("\nTest 11: uncapped path")
    points = generate_ray_path(50, 0, 700, 100, 0.5, max_points=None)
    assert_path_invariants(points, 50, 0, 700, 100)
    assert len(points) > 700
    print(f"  PASS: {len(points)} points")


def test_zero_core_height_terminates():
    """Test 12: A zero-height core cannot be traversed; the loop still ends."""
    print("\nTest 12: zero core height")
    logger, handler = capture_ray_path_logs()
    try:
        points = generate_ray_path(0, 0, 100, 0, 45)
    finally:
        logger.removeHandler(handler)

    assert points[0] == Point(0, 0)
    assert len(points) <= 2
    assert any('stalled' in r.getMessage() for r in handler.records)
    print(f"  PASS: {len(points)} points")


def test_start_on_wall():
    """Test 13: Starting on the upper wall reflects immediately and continues."""
    print("\nTest 13: start on wall")
    points = generate_ray_path(0, 10, 100, 20, 45)
    assert points[0] == Point(0, 10)
    assert points[1] == Point(0, 10)
    assert abs(points[2].x - 20) < 1e-9 and points[2].y == -10
    assert abs(points[-1].x - 100) < 1e-9
    print(f"  PASS: {len(points)} points")


# =============================================================================
# Main
# =============================================================================

def main():
    print("=" * 70)
    print("Ray Path Generator - Feature Verification")
    print("=" * 70)

    tests = [
        test_45_degree_scenario,
        test_90_degree_is_axial,
        test_axial_ray_keeps_offset,
        test_shallow_ray_single_segment,
        test_invariants_across_angles,
        test_first_bounce_goes_up,
        test_steeper_rays_bounce_more,
        test_paths_are_deterministic,
        test_negative_length_returns_start_only,
        test_point_cap_truncates_and_warns,
        test_point_cap_can_be_disabled,
        test_zero_core_height_terminates,
        test_start_on_wall,
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
