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

import uuid as _uuid_mod
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from .geometry import Vector2

if TYPE_CHECKING:
    from .scene_objs.base_scene_obj import OpticalObject
    from .scene_objs.light_source import WavelengthChannel


@dataclass(frozen=True)
class Ray:
    """
    A ray emitted by the light source.

    Attributes:
        origin: Starting point
        direction: Unit direction vector
    """
    origin: Vector2
    direction: Vector2


@dataclass(frozen=True)
class Hit:
    """
    Nearest intersection of a ray with one scene object.

    Attributes:
        t: Ray parameter of the hit (distance, since directions are unit length)
        point: World-space intersection point
        normal: Unit outward surface normal at `point`, in world space
        obj: The object that was hit
    """
    t: float
    point: Vector2
    normal: Vector2
    obj: 'OpticalObject'


@dataclass
class RayPath:
    """
    The polyline followed by one traced ray in one wavelength channel.

    This is what the simulator hands to a renderer. `points` always starts
    with the ray origin and holds at least two vertices once tracing is done.

    Attributes:
        points: Path vertices (origin, every bounce point, and the escape
            point if the ray left the scene)
        directions: Direction of travel along each segment
            (len(directions) == len(points) - 1)
        events: One entry per bounce, 'refract' or 'tir'
        hit_objects: UUIDs of the objects hit, one per bounce
        escaped: True if the ray left the scene, False if the bounce limit
            cut the path short
        final_direction: Direction of the ray when tracing stopped
        n_offset: Refractive index offset applied to every object
        channel: Wavelength channel the path belongs to (None for a bare trace)
        source_label: Optional human-readable label (e.g. "R", "ray 3")
        uuid: Unique identifier for this path (auto-generated)
    """
    points: List[Vector2] = field(default_factory=list)
    directions: List[Vector2] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    hit_objects: List[str] = field(default_factory=list)
    escaped: bool = False
    final_direction: Optional[Vector2] = None
    n_offset: float = 0.0
    channel: Optional['WavelengthChannel'] = None
    source_label: Optional[str] = None
    uuid: str = field(default_factory=lambda: str(_uuid_mod.uuid4()))

    @property
    def bounce_count(self) -> int:
        return len(self.events)

    @property
    def tir_count(self) -> int:
        """Number of total internal reflections along the path."""
        return sum(1 for event in self.events if event == 'tir')

    @property
    def refraction_count(self) -> int:
        return sum(1 for event in self.events if event == 'refract')

    @property
    def truncated(self) -> bool:
        """True if the bounce limit stopped the trace before the ray escaped."""
        return not self.escaped

    @property
    def initial_direction(self) -> Optional[Vector2]:
        return self.directions[0] if self.directions else None

    @property
    def color(self) -> str:
        """CSS color of the channel, white for a bare trace."""
        if self.channel is None:
            return '#ffffff'
        return self.channel.color

    def __repr__(self) -> str:
        status = 'escaped' if self.escaped else 'truncated'
        label_str = f", label='{self.source_label}'" if self.source_label else ""
        return (f"RayPath(points={len(self.points)}, bounces={self.bounce_count}, "
                f"tir={self.tir_count}, {status}, n_offset={self.n_offset:+.3f}"
                f"{label_str}, uuid={self.uuid[:8]}...)")
