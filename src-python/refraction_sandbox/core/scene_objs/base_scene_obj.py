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
import uuid as uuid_module
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from ..geometry import geometry, Vector2

if TYPE_CHECKING:
    from shapely.geometry import Polygon as ShapelyPolygon
    from ..ray import Hit


class ShapeKind(str, Enum):
    """Discriminant of the optical object variants."""
    POLYGON = 'polygon'
    LENS = 'lens'


class OpticalObject:
    """
    Base class for the refracting shapes placed in a scene.

    Every object owns a local frame given by `position` and `rotation`.
    Geometry is stored in that frame; the transforms below map points and
    directions between the local frame and the world.

    Subclasses provide the capability set used by the tracer and by the
    picking/drawing layers:
        - intersect(origin, direction) -> Hit or None
        - hit_test(point) -> bool
        - outline() -> world-space boundary points for drawing

    Attributes:
        position: Origin of the local frame in world space
        rotation: Rotation of the local frame in radians (counterclockwise)
        refractive_index: Base refractive index of the material (> 0)
    """

    kind: ShapeKind = None
    """The variant of the object."""

    defaults = {
        'rotation': 0.0,
        'refractive_index': 1.1
    }

    def __init__(
        self,
        position: Vector2,
        rotation: Optional[float] = None,
        refractive_index: Optional[float] = None
    ) -> None:
        self.position = Vector2(*position)
        self.rotation = self.defaults['rotation'] if rotation is None else rotation
        self.refractive_index = (self.defaults['refractive_index']
                                 if refractive_index is None else refractive_index)

        self._uuid: str = str(uuid_module.uuid4())
        self._name: Optional[str] = None

    @property
    def refractive_index(self) -> float:
        return self._refractive_index

    @refractive_index.setter
    def refractive_index(self, value: float) -> None:
        """Set the refractive index with validation."""
        if value <= 0:
            raise ValueError(
                f"refractive_index must be > 0, got {value}"
            )
        self._refractive_index = value

    @property
    def rotation_degrees(self) -> float:
        """Rotation in degrees, as edited by the rotation slider."""
        return math.degrees(self.rotation)

    @rotation_degrees.setter
    def rotation_degrees(self, value: float) -> None:
        self.rotation = math.radians(value)

    # ==================== Frame Transforms ====================

    def to_local(self, world_point: Vector2) -> Vector2:
        """
        Transform a world point into the object frame.

        Args:
            world_point: Point in world coordinates.

        Returns:
            The same point in local coordinates.
        """
        return geometry.rotate(geometry.sub(world_point, self.position), -self.rotation)

    def to_world(self, local_point: Vector2) -> Vector2:
        """
        Transform a local point into world coordinates.

        Args:
            local_point: Point in local coordinates.

        Returns:
            The same point in world coordinates.
        """
        return geometry.add(geometry.rotate(local_point, self.rotation), self.position)

    def dir_to_world(self, local_direction: Vector2) -> Vector2:
        """Rotate a local direction (or normal) into the world frame."""
        return geometry.rotate(local_direction, self.rotation)

    def dir_to_local(self, world_direction: Vector2) -> Vector2:
        """Rotate a world direction into the object frame."""
        return geometry.rotate(world_direction, -self.rotation)

    def move(self, diff_x: float, diff_y: float) -> None:
        """
        Move the object.

        Args:
            diff_x: X displacement.
            diff_y: Y displacement.
        """
        self.position = Vector2(self.position.x + diff_x, self.position.y + diff_y)

    # ==================== Geometry Capabilities ====================

    def intersect(self, origin: Vector2, direction: Vector2) -> Optional['Hit']:
        """
        Find the nearest forward intersection of a ray with the object boundary.

        Args:
            origin: Ray origin in world space.
            direction: Unit ray direction in world space.

        Returns:
            The nearest Hit, or None if the ray misses.
        """
        raise NotImplementedError

    def hit_test(self, point: Vector2) -> bool:
        """
        Check whether a world point falls on the object (used for picking).

        Args:
            point: Point in world space.

        Returns:
            True if the point selects the object.
        """
        raise NotImplementedError

    def outline(self) -> List[Vector2]:
        """
        Return the object boundary as world-space points, for drawing.

        Returns:
            Closed loop of points (last point connects back to the first).
        """
        raise NotImplementedError

    def to_shapely(self) -> 'ShapelyPolygon':
        """
        Return the drawn region of the object as a Shapely Polygon.

        Returns:
            Polygon built from `outline()`.
        """
        from shapely.geometry import Polygon as ShapelyPolygon
        return ShapelyPolygon([(p.x, p.y) for p in self.outline()])

    # ==================== Identification ====================

    @property
    def uuid(self) -> str:
        """Auto-generated unique identifier for this object instance."""
        return self._uuid

    @property
    def name(self) -> Optional[str]:
        """Optional human-readable name of the object."""
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value

    def get_display_name(self) -> str:
        """
        Get a display name for the object.

        Returns the user-defined name if set, otherwise returns a combination
        of the kind and a short UUID suffix.

        Returns:
            A string suitable for display (e.g., "Main Prism" or "polygon_a1b2c3d4").
        """
        if self._name:
            return self._name
        kind_name = self.kind.value if self.kind else self.__class__.__name__
        return f"{kind_name}_{self._uuid[:8]}"

    def __repr__(self) -> str:
        return (f"<{self.__class__.__name__} '{self.get_display_name()}' "
                f"at ({self.position.x:.2f}, {self.position.y:.2f}), "
                f"n={self.refractive_index}>")
