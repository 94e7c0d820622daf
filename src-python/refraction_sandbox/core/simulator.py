"""
Copyright 2026 refraction-sandbox authors and contributors

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

import math
from typing import List, Optional, Tuple, TYPE_CHECKING

from .geometry import geometry, Vector2
from .ray import Hit, RayPath
from .constants import (
    AIR_INDEX, ESCAPE_DISTANCE, MAX_BOUNCES, MAX_HIT_DISTANCE, MIN_EFFECTIVE_INDEX,
    TRACE_HIT_EPSILON
)

if TYPE_CHECKING:
    from .scene import Scene
    from .scene_objs.light_source import LightSource, WavelengthChannel


def snell_direction(
    direction: Vector2,
    normal: Vector2,
    n1: float,
    n2: float
) -> Tuple[Vector2, bool]:
    """
    Vector form of Snell's law with total internal reflection.

    Args:
        direction: Unit direction of the incident ray.
        normal: Unit surface normal facing the incident ray (dot < 0).
        n1: Refractive index on the incident side.
        n2: Refractive index on the far side.

    Returns:
        (new_direction, is_tir). When k = 1 - eta^2 (1 - cosI^2) is negative
        the ray is mirrored about the normal and is_tir is True. Otherwise the
        refracted direction is returned; it is unit length by construction.
    """
    eta = n1 / n2
    cos_i = -geometry.dot(direction, normal)
    k = 1 - eta * eta * (1 - cos_i * cos_i)

    if k < 0:
        d_dot_n = geometry.dot(direction, normal)
        return geometry.sub(direction, geometry.scale(normal, 2 * d_dot_n)), True

    factor = eta * cos_i - math.sqrt(k)
    return geometry.add(geometry.scale(direction, eta), geometry.scale(normal, factor)), False


def redirect_ray(
    direction: Vector2,
    hit: Hit,
    n_offset: float = 0.0,
    verbose: int = 0
) -> Tuple[Vector2, str]:
    """
    New direction of a ray after it meets the surface of `hit.obj`.

    The object's effective index is its base index plus `n_offset`, floored
    at MIN_EFFECTIVE_INDEX so a large negative offset cannot reach zero. A ray
    travelling against the outward normal enters the object (air -> glass);
    otherwise it leaves it (glass -> air) and the normal is flipped to face it.

    Args:
        direction: Unit direction of the incoming ray.
        hit: The surface hit.
        n_offset: Refractive index offset of the wavelength channel.
        verbose: Verbosity level (2 prints the refraction detail).

    Returns:
        (new_direction, event) where event is 'refract' or 'tir'.
    """
    n = max(MIN_EFFECTIVE_INDEX, hit.obj.refractive_index + n_offset)
    normal = hit.normal

    if geometry.dot(direction, normal) < 0:
        n1, n2 = AIR_INDEX, n
        entering = True
    else:
        n1, n2 = n, AIR_INDEX
        normal = geometry.scale(normal, -1)
        entering = False

    new_direction, is_tir = snell_direction(direction, normal, n1, n2)

    if verbose >= 2:
        cos_i = max(-1.0, min(1.0, -geometry.dot(direction, normal)))
        print(f"    {'entering' if entering else 'exiting'} {hit.obj.get_display_name()}: "
              f"n1={n1:.4f}, n2={n2:.4f}, incidence={math.degrees(math.acos(cos_i)):.3f} deg"
              f"{', TIR' if is_tir else ''}")
        print(f"    new direction=({new_direction.x:.6f}, {new_direction.y:.6f})")

    return new_direction, 'tir' if is_tir else 'refract'


class Simulator:
    """
    Bounce-loop ray tracer.

    Each ray is followed from hit to hit: the nearest surface across the
    whole scene is found, the ray is refracted or totally internally
    reflected there, and tracing resumes from the hit point. A ray stops when
    it escapes the scene or when `max_bounces` surfaces have been met.

    The simulator only reads the scene; every call retraces from scratch.

    Attributes:
        scene (Scene): The scene to trace
        max_bounces (int): Maximum surface interactions per ray
        verbose (int): Verbosity level
            0 = silent
            1 = show per-ray progress
            2 = also show per-bounce refraction detail
        truncated_ray_count (int): Rays cut short by the bounce limit in the
            last run()
    """

    def __init__(self, scene: 'Scene', max_bounces: int = MAX_BOUNCES, verbose: int = 0) -> None:
        self.scene: 'Scene' = scene
        self.max_bounces = max_bounces
        self.verbose: int = verbose
        self.truncated_ray_count: int = 0

    @property
    def max_bounces(self) -> int:
        return self._max_bounces

    @max_bounces.setter
    def max_bounces(self, value: int) -> None:
        if int(value) != value or value < 1:
            raise ValueError(f"max_bounces must be an integer >= 1, got {value}")
        self._max_bounces = int(value)

    def run(self, light_source: Optional['LightSource'] = None) -> List[RayPath]:
        """
        Trace every ray of the light source in every wavelength channel.

        Args:
            light_source: Source to trace. Defaults to `scene.light_source`.

        Returns:
            Paths grouped by channel: all rays of the first channel, then all
            rays of the next one. Empty if there is no light source.
        """
        self.truncated_ray_count = 0
        source = light_source if light_source is not None else self.scene.light_source
        if source is None:
            if self.verbose >= 1:
                print("### SIMULATOR: no light source, nothing to trace")
            return []

        rays = source.emit()
        paths = []
        for channel in source.channels:
            for i, ray in enumerate(rays):
                path = self.trace_ray(
                    ray.origin, ray.direction,
                    n_offset=channel.n_offset,
                    channel=channel,
                    source_label=f"{channel.label}{i}"
                )
                paths.append(path)

        if self.verbose >= 1:
            print(f"### SIMULATOR traced {len(paths)} paths "
                  f"({len(source.channels)} channels x {len(rays)} rays), "
                  f"{self.truncated_ray_count} truncated")
        return paths

    def trace_ray(
        self,
        origin: Vector2,
        direction: Vector2,
        n_offset: float = 0.0,
        channel: Optional['WavelengthChannel'] = None,
        source_label: Optional[str] = None
    ) -> RayPath:
        """
        Follow one ray through the scene.

        Args:
            origin: Start point.
            direction: Initial direction. It is normalized first, so every
                segment, including the escape segment, is measured along
                the unit direction.
            n_offset: Refractive index offset added to every object.
            channel: Wavelength channel the ray belongs to, if any.
            source_label: Optional label stored on the path.

        Returns:
            The traced RayPath. Its points start at `origin`; if the ray
            escapes the last point lies ESCAPE_DISTANCE ahead of the last hit
            along the normalized direction.
        """
        origin = Vector2(*origin)
        direction = geometry.normalize(Vector2(*direction))
        path = RayPath(points=[origin], n_offset=n_offset, channel=channel,
                       source_label=source_label)

        if self.verbose >= 1:
            print(f"\n### SIMULATOR tracing ray {source_label or ''} "
                  f"from ({origin.x:.4f}, {origin.y:.4f}) "
                  f"dir=({direction.x:.4f}, {direction.y:.4f}), n_offset={n_offset:+.3f}")

        for _ in range(self.max_bounces):
            hit = self._find_nearest_hit(origin, direction)

            if hit is None:
                escape_point = geometry.add(origin, geometry.scale(direction, ESCAPE_DISTANCE))
                path.points.append(escape_point)
                path.directions.append(direction)
                path.escaped = True
                break

            path.points.append(hit.point)
            path.directions.append(direction)
            path.hit_objects.append(hit.obj.uuid)

            direction, event = redirect_ray(direction, hit, n_offset, verbose=self.verbose)
            path.events.append(event)
            origin = hit.point

            if self.verbose >= 1:
                print(f"  {event} at ({hit.point.x:.4f}, {hit.point.y:.4f}) "
                      f"on {hit.obj.get_display_name()}")

        path.final_direction = direction
        if not path.escaped:
            self.truncated_ray_count += 1
            if self.verbose >= 1:
                print(f"  bounce limit ({self.max_bounces}) reached, path truncated")

        return path

    def _find_nearest_hit(self, origin: Vector2, direction: Vector2) -> Optional[Hit]:
        """
        Nearest hit across all objects of the scene.

        Only hits with TRACE_HIT_EPSILON < t < MAX_HIT_DISTANCE count; on a
        tie the object added first wins.
        """
        nearest = None
        min_t = MAX_HIT_DISTANCE
        for obj in self.scene.objs:
            hit = obj.intersect(origin, direction)
            if hit is not None and TRACE_HIT_EPSILON < hit.t < min_t:
                min_t = hit.t
                nearest = hit
        return nearest


def render_frame(
    scene: 'Scene',
    light_source: Optional['LightSource'] = None,
    max_bounces: int = MAX_BOUNCES,
    verbose: int = 0
) -> List[RayPath]:
    """
    Trace one frame: every ray of the light source in every channel.

    Nothing is kept between calls, so a caller redraws by calling this again
    after editing the scene.

    Args:
        scene: Scene to trace.
        light_source: Source to trace. Defaults to `scene.light_source`.
        max_bounces: Maximum surface interactions per ray.
        verbose: Verbosity level.

    Returns:
        List of RayPath, grouped by channel.
    """
    return Simulator(scene, max_bounces=max_bounces, verbose=verbose).run(light_source)
