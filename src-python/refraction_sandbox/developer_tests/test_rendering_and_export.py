"""
===============================================================================
RENDERING, EXPORT AND ANALYSIS TESTS
===============================================================================

1. SVG RENDERER
   - Objects, rays and the light source land in the SVG with their ids
   - Paths with non-finite vertices are skipped
   - Saving to disk, flipped viewbox

2. CSV EXPORT AND STATISTICS
   - One row per path vertex with its event label
   - TIR filtering and summary statistics

3. PATH ANALYSIS
   - Deviation, displacement, length, exit point
   - Objects crossed (Shapely)

Run with:
    python developer_tests/test_rendering_and_export.py

Or with pytest:
    pytest developer_tests/test_rendering_and_export.py -v
===============================================================================
"""

import csv
import sys
import math
import tempfile
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


TOLERANCE = 1e-6


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def _slab_scene():
    """A 40-wide n=1.5 slab at the origin and a bare Simulator on it."""
    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene import Scene
    from refraction_sandbox.core.simulator import Simulator
    from refraction_sandbox.optical_elements.prisms import create_block

    scene = Scene()
    scene.add_object(create_block(Vector2(0, 0), width=40, height=200,
                                  refractive_index=1.5, name='Slab'))
    return scene, Simulator(scene)


# =============================================================================
# SVG RENDERER
# =============================================================================

def test_svg_scene():
    """Every object, ray and the light source are drawn."""
    print("\n" + "=" * 60)
    print("TEST: SVG scene")
    print("=" * 60)

    from refraction_sandbox.core.simulator import render_frame
    from refraction_sandbox.core.svg_renderer import SVGRenderer
    from refraction_sandbox.optical_elements.demo_scenes import reconvergence

    scene = reconvergence()
    scene.select(scene.handles[2])
    paths = render_frame(scene)

    renderer = SVGRenderer(width=1200, height=600)
    assert renderer.draw_scene(scene, paths, draw_labels=True)
    svg = renderer.to_string()

    for obj in scene.objs:
        assert f'{obj.kind.value}-{obj.uuid}' in svg
    for path in paths[:5]:
        assert f'ray-{path.uuid}' in svg
    assert svg.count('<polyline') == len(paths)
    assert svg.count('<polygon') == 3
    assert 'data-channel="R"' in svg and 'data-channel="B"' in svg
    assert 'mix-blend-mode: screen' in svg
    # Selected lens is highlighted
    assert '#ff00de' in svg
    assert 'Prism 1' in svg
    print(f"  {len(svg)} characters, {len(paths)} polylines")


def test_svg_skips_non_finite():
    print("\n" + "=" * 60)
    print("TEST: SVG skips non-finite paths")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.ray import RayPath
    from refraction_sandbox.core.svg_renderer import SVGRenderer

    renderer = SVGRenderer(draw_grid=False)
    bad = RayPath(points=[Vector2(0, 0), Vector2(float('nan'), 10)])
    short = RayPath(points=[Vector2(0, 0)])
    good = RayPath(points=[Vector2(0, 0), Vector2(10, -0.0)], escaped=True)

    assert not renderer.draw_ray_path(bad)
    assert not renderer.draw_ray_path(short)
    assert renderer.draw_ray_path(good, color='#123456')

    svg = renderer.to_string()
    assert svg.count('<polyline') == 1
    assert '#123456' in svg
    assert 'data-escaped="true"' in svg
    assert '-0.0' not in svg
    print("  NaN path dropped, valid path drawn")


def test_svg_save_and_flip():
    print("\n" + "=" * 60)
    print("TEST: SVG save and flip_y")
    print("=" * 60)

    from refraction_sandbox.core.simulator import render_frame
    from refraction_sandbox.core.svg_renderer import SVGRenderer
    from refraction_sandbox.optical_elements.demo_scenes import pink_floyd

    flipped = SVGRenderer(width=400, height=300, flip_y=True)
    assert flipped.viewbox == (0, -300, 400, 300)
    plain = SVGRenderer(width=400, height=300, viewbox=(-50, -50, 500, 400))
    assert plain.viewbox == (-50, -50, 500, 400)

    scene = pink_floyd()
    renderer = SVGRenderer(width=1200, height=600)
    renderer.draw_scene(scene, render_frame(scene))

    with tempfile.TemporaryDirectory() as tmp:
        target = Path(tmp) / 'pink_floyd.svg'
        renderer.save(target)
        content = target.read_text(encoding='utf-8')
    assert content.startswith('<?xml')
    assert '<svg' in content
    print(f"  saved {len(content)} bytes")


# =============================================================================
# CSV EXPORT AND STATISTICS
# =============================================================================

def test_csv_export():
    """One row per vertex, labelled origin / refract / tir / escape."""
    print("\n" + "=" * 60)
    print("TEST: CSV export")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene_objs.light_source import DEFAULT_CHANNELS
    from refraction_sandbox.analysis.saving import save_paths_csv

    _, sim = _slab_scene()
    red = DEFAULT_CHANNELS[0]
    paths = [
        sim.trace_ray(Vector2(-200, 0), Vector2(1, 0), n_offset=red.n_offset, channel=red),
        sim.trace_ray(Vector2(-200, 500), Vector2(1, 0)),
    ]

    with tempfile.TemporaryDirectory() as tmp:
        csv_file = save_paths_csv(paths, Path(tmp) / 'nested', filename='rays.csv')
        assert csv_file.name == 'rays.csv'
        with open(csv_file, newline='', encoding='utf-8') as f:
            rows = list(csv.DictReader(f))

    assert len(rows) == 4 + 2
    assert list(rows[0].keys()) == [
        'path_index', 'path_uuid', 'channel', 'color', 'n_offset',
        'point_index', 'x', 'y', 'event', 'escaped'
    ]
    assert [r['event'] for r in rows[:4]] == ['origin', 'refract', 'refract', 'escape']
    assert rows[0]['channel'] == 'R' and rows[0]['color'] == '#ff0000'
    assert rows[0]['n_offset'] == '-0.0400'
    assert rows[1]['x'] == '-20.0000' and rows[1]['y'] == '0.0000'
    assert rows[4]['channel'] == '' and rows[4]['path_index'] == '1'
    assert [r['event'] for r in rows[4:]] == ['origin', 'escape']
    assert all(r['escaped'] == 'True' for r in rows)
    print(f"  {len(rows)} rows")


def test_statistics_and_filter():
    print("\n" + "=" * 60)
    print("TEST: Statistics and TIR filter")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene import Scene
    from refraction_sandbox.core.simulator import Simulator
    from refraction_sandbox.optical_elements.prisms import create_block
    from refraction_sandbox.analysis.saving import filter_tir_paths, get_path_statistics

    scene = Scene()
    scene.add_object(create_block(Vector2(0, 0), width=120, height=80, refractive_index=1.5))
    sim = Simulator(scene)
    rad = math.radians(45)
    trapped = sim.trace_ray(Vector2(0, 0), Vector2(math.cos(rad), math.sin(rad)))
    straight = sim.trace_ray(Vector2(-200, 0), Vector2(1, 0))

    paths = [trapped, straight]
    assert filter_tir_paths(paths) == [trapped]
    assert filter_tir_paths(paths, tir_only=False) == [straight]

    stats = get_path_statistics(paths)
    assert stats['total_paths'] == 2
    assert stats['escaped_paths'] == 1
    assert stats['truncated_paths'] == 1
    assert stats['tir_paths'] == 1
    assert stats['total_bounces'] == 12 + 2
    assert stats['max_bounces'] == 12
    assert stats['channels'] == {None}

    assert get_path_statistics([])['max_bounces'] == 0
    print(f"  {stats}")


# =============================================================================
# PATH ANALYSIS
# =============================================================================

def test_path_measurements():
    print("\n" + "=" * 60)
    print("TEST: Path measurements")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.ray import RayPath
    from refraction_sandbox.analysis.path_analysis import (
        deviation_angle, exit_point, lateral_displacement, path_length
    )

    _, sim = _slab_scene()
    path = sim.trace_ray(Vector2(-200, 0), Vector2(1, 0))

    assert_close(path_length(path), 220, msg="length")
    assert_close(path_length(path, include_escape=True), 2220, msg="length with escape")
    assert_close(exit_point(path).x, 20, msg="exit x")
    assert_close(deviation_angle(path), 0.0, msg="deviation")
    assert_close(lateral_displacement(path), 0.0, msg="displacement")

    untraced = RayPath(points=[Vector2(0, 0)])
    for func in (deviation_angle, lateral_displacement):
        try:
            func(untraced)
        except ValueError:
            continue
        raise AssertionError(f"{func.__name__} accepted an untraced path")
    print(f"  length {path_length(path)}")


def test_objects_crossed():
    """Shapely agrees with the tracer on which objects a path touches."""
    print("\n" + "=" * 60)
    print("TEST: Objects crossed")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.optical_elements.prisms import create_lens
    from refraction_sandbox.analysis.path_analysis import objects_crossed, path_to_linestring

    scene, sim = _slab_scene()
    lens = create_lens(Vector2(300, 400), name='Side lens')
    scene.add_object(lens)

    path = sim.trace_ray(Vector2(-200, 0), Vector2(1, 0))
    assert objects_crossed(path, scene) == ['Slab']
    assert path_to_linestring(path).length > 2000

    path = sim.trace_ray(Vector2(-200, 400), Vector2(1, 0))
    assert objects_crossed(path, scene) == ['Side lens']
    assert path.bounce_count == 2
    print("  slab and lens crossings found")


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("RENDERING, EXPORT AND ANALYSIS TESTS")
    print("=" * 78)

    tests = [
        ("SVG scene", test_svg_scene),
        ("SVG non-finite", test_svg_skips_non_finite),
        ("SVG save and flip", test_svg_save_and_flip),
        ("CSV export", test_csv_export),
        ("Statistics and filter", test_statistics_and_filter),
        ("Path measurements", test_path_measurements),
        ("Objects crossed", test_objects_crossed),
    ]

    passed = 0
    failed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            failed += 1
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
