"""
===============================================================================
SCENE AND LIGHT SOURCE TESTS
===============================================================================

1. HANDLES
   - Handles are unique and never reused after removal
   - Unknown handles raise KeyError

2. SELECTION AND PICKING
   - Removing the selected object clears the selection
   - pick() returns the topmost (last added) object under the point
   - The light source can be grabbed and moved

3. LIGHT SOURCE
   - Fan angles cover [angle - spread, angle + spread]
   - Invalid parameters raise ValueError

4. PRESETS

Run with:
    python developer_tests/test_scene.py

Or with pytest:
    pytest developer_tests/test_scene.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def assert_raises(exc_type, func, *args, **kwargs):
    """Assert that calling func raises exc_type."""
    try:
        func(*args, **kwargs)
    except exc_type:
        return
    raise AssertionError(f"{func.__name__} did not raise {exc_type.__name__}")


# =============================================================================
# HANDLES
# =============================================================================

def test_handles_not_reused():
    """A removed handle stays dead; new objects get fresh handles."""
    print("\n" + "=" * 60)
    print("TEST: Handles are never reused")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene import Scene
    from refraction_sandbox.optical_elements.prisms import create_block, create_lens

    scene = Scene()
    a = scene.add_object(create_block(Vector2(0, 0)))
    b = scene.add_object(create_lens(Vector2(200, 0)))
    assert a != b
    assert len(scene) == 2

    removed = scene.remove_object(a)
    assert removed.kind.value == 'polygon'
    assert len(scene) == 1
    assert_raises(KeyError, scene.get_object, a)
    assert_raises(KeyError, scene.remove_object, a)

    c = scene.add_object(create_block(Vector2(400, 0)))
    assert c not in (a, b)
    assert scene.handles == [b, c]
    assert [obj.kind.value for obj in scene.objs] == ['lens', 'polygon']
    print(f"  handles a={a}, b={b}, c={c}")


def test_clear_keeps_light_source():
    print("\n" + "=" * 60)
    print("TEST: clear()")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene import Scene
    from refraction_sandbox.core.scene_objs.light_source import LightSource
    from refraction_sandbox.optical_elements.prisms import create_block

    source = LightSource(Vector2(10, 20))
    scene = Scene(light_source=source)
    handle = scene.add_object(create_block(Vector2(0, 0)))
    scene.select(handle)

    scene.clear()
    assert len(scene) == 0
    assert scene.selected_handle is None
    assert scene.light_source is source

    # Handles keep counting after a clear
    assert scene.add_object(create_block(Vector2(0, 0))) > handle
    print("  objects removed, light source kept")


# =============================================================================
# SELECTION AND PICKING
# =============================================================================

def test_selection():
    """Selecting, deselecting and removing the selected object."""
    print("\n" + "=" * 60)
    print("TEST: Selection")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene import Scene
    from refraction_sandbox.optical_elements.prisms import create_block

    scene = Scene()
    a = scene.add_object(create_block(Vector2(0, 0)))
    b = scene.add_object(create_block(Vector2(300, 0)))
    assert scene.selected_object is None

    scene.select(b)
    assert scene.selected_handle == b
    assert scene.selected_object is scene.get_object(b)

    # Removing another object keeps the selection
    scene.remove_object(a)
    assert scene.selected_handle == b

    scene.remove_object(b)
    assert scene.selected_handle is None
    assert scene.selected_object is None

    assert_raises(KeyError, scene.select, 99)
    scene.select(None)
    assert scene.selected_handle is None
    print("  selection follows removals")


def test_pick_topmost():
    """Overlapping objects: the one added last wins."""
    print("\n" + "=" * 60)
    print("TEST: pick()")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene import Scene
    from refraction_sandbox.optical_elements.prisms import (
        create_block, create_equilateral_prism
    )

    scene = Scene()
    block = scene.add_object(create_block(Vector2(0, 0), width=200, height=200))
    prism = scene.add_object(create_equilateral_prism(Vector2(0, 0)))

    assert scene.pick(Vector2(0, 0)) == prism
    assert scene.pick(Vector2(90, 90)) == block
    assert scene.pick(Vector2(500, 500)) is None

    scene.remove_object(prism)
    assert scene.pick(Vector2(0, 0)) == block
    print("  topmost object picked")


def test_drag_object():
    """Moving a picked object moves its hit region."""
    print("\n" + "=" * 60)
    print("TEST: Drag")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene import Scene
    from refraction_sandbox.optical_elements.prisms import create_block

    scene = Scene()
    handle = scene.add_object(create_block(Vector2(100, 100)))
    grabbed = scene.pick(Vector2(110, 95))
    assert grabbed == handle

    scene.get_object(grabbed).move(50, -20)
    obj = scene.get_object(handle)
    assert_close(obj.position.x, 150, msg="x")
    assert_close(obj.position.y, 80, msg="y")
    assert scene.pick(Vector2(150, 80)) == handle
    assert scene.pick(Vector2(45, 100)) is None
    print(f"  moved to ({obj.position.x}, {obj.position.y})")


def test_light_source_grab():
    print("\n" + "=" * 60)
    print("TEST: Light source grab")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene_objs.light_source import LightSource

    source = LightSource(Vector2(100, 300))
    assert source.hit_test(Vector2(110, 300))
    assert not source.hit_test(Vector2(115, 300))
    assert not source.hit_test(Vector2(100, 320))

    source.move(-40, 10)
    assert_close(source.position.x, 60, msg="x")
    assert_close(source.position.y, 310, msg="y")
    assert source.hit_test(Vector2(60, 310))
    print(f"  {source}")


# =============================================================================
# LIGHT SOURCE
# =============================================================================

def test_fan_angles():
    """Ray i of N leaves at angle + (i/(N-1) - 0.5) * 2 * spread."""
    print("\n" + "=" * 60)
    print("TEST: Fan angles")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene_objs.light_source import LightSource

    source = LightSource(Vector2(0, 0), angle=10, spread=20, ray_count=5)
    angles = source.get_ray_angles()
    for actual, expected in zip(angles, [-10, 0, 10, 20, 30]):
        assert_close(actual, expected, msg="fan angle")

    rays = source.emit()
    assert len(rays) == 5
    for ray, angle in zip(rays, angles):
        assert ray.origin == source.position
        assert_close(ray.direction.x, math.cos(math.radians(angle)), msg="dir x")
        assert_close(ray.direction.y, math.sin(math.radians(angle)), msg="dir y")

    # Degenerate fans collapse onto the central direction
    assert LightSource(Vector2(0, 0), angle=15, spread=0, ray_count=4).get_ray_angles() == [15] * 4
    assert LightSource(Vector2(0, 0), angle=15, spread=30, ray_count=1).get_ray_angles() == [15]
    print(f"  angles {angles}")


def test_light_source_validation():
    print("\n" + "=" * 60)
    print("TEST: Light source validation")
    print("=" * 60)

    from refraction_sandbox.core.geometry import Vector2
    from refraction_sandbox.core.scene_objs.light_source import (
        LightSource, WavelengthChannel, DEFAULT_CHANNELS
    )

    assert_raises(ValueError, LightSource, Vector2(0, 0), spread=-1)
    assert_raises(ValueError, LightSource, Vector2(0, 0), ray_count=0)
    assert_raises(ValueError, LightSource, Vector2(0, 0), ray_count=2.5)
    assert_raises(ValueError, LightSource, Vector2(0, 0), channels=[])

    source = LightSource(Vector2(0, 0))
    assert source.channels == DEFAULT_CHANNELS
    assert [c.label for c in source.channels] == ['R', 'G', 'B']
    assert [c.n_offset for c in source.channels] == [-0.04, 0.0, 0.04]

    mono = LightSource(Vector2(0, 0), channels=[WavelengthChannel('Y', '#ffff00', 0.01)])
    assert isinstance(mono.channels, tuple) and len(mono.channels) == 1
    print("  invalid parameters rejected")


# =============================================================================
# PRESETS
# =============================================================================

def test_presets():
    """Preset layouts scale with the canvas."""
    print("\n" + "=" * 60)
    print("TEST: Presets")
    print("=" * 60)

    from refraction_sandbox.optical_elements.demo_scenes import (
        default_scene, pink_floyd, reconvergence
    )

    scene = default_scene(1000, 500)
    assert len(scene) == 1
    assert_close(scene.objs[0].position.x, 500, msg="default prism x")
    assert_close(scene.light_source.position.y, 300, msg="default light y")

    scene = pink_floyd(1000, 500)
    prism = scene.objs[0]
    assert prism.refractive_index == 1.5
    assert prism.get_display_name() == 'Prism'
    assert_close(scene.light_source.position.x, 250, msg="light x")
    assert scene.light_source.ray_count == 1

    scene = reconvergence(1000, 500)
    assert [obj.get_display_name() for obj in scene.objs] == ['Prism 1', 'Prism 2', 'Lens']
    assert_close(scene.objs[1].rotation, math.pi, msg="inverted prism")
    lens = scene.objs[2]
    assert lens.curvature == 0.01 and lens.refractive_index == 1.45
    assert scene.light_source.ray_count == 50 and scene.light_source.spread == 20
    print("  default, pink_floyd, reconvergence")


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SCENE AND LIGHT SOURCE TESTS")
    print("=" * 78)

    tests = [
        ("Handles not reused", test_handles_not_reused),
        ("clear()", test_clear_keeps_light_source),
        ("Selection", test_selection),
        ("pick()", test_pick_topmost),
        ("Drag", test_drag_object),
        ("Light source grab", test_light_source_grab),
        ("Fan angles", test_fan_angles),
        ("Light source validation", test_light_source_validation),
        ("Presets", test_presets),
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
