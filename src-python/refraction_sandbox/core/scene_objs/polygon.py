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
from typing import List, Optional, Sequence

from .base_scene_obj import OpticalObject, ShapeKind
from ..geometry import geometry, Vector2
from ..ray import Hit
from ..constants import PARALLEL_EPSILON, SURFACE_HIT_EPSILON


class Polygon(OpticalObject):
    """
    Flat-faceted glass shape (prism, block, or any closed polygon).

    The boundary is an ordered loop of local-space vertices: edge i runs from
    vertex i to vertex i+1, and the last vertex connects back to the first.
    Convex and concave loops are both supported.

    Attributes:
        vertices: Local-space vertices (at least 3), in edge order.

    Notes:
        - Edge normals are oriented outward from the sign of the loop's signed
          area, so either winding order gives outward normals.
        - `hit_test` uses an even-odd crossing test and is independent of
          `intersect`.
    """

    kind = ShapeKind.POLYGON

    def __init__(
        self,
        position: Vector2,
        vertices: Sequence[Vector2],
        rotation: Optional[float] = None,
        refractive_index: Optional[float] = None
    ) -> None:
        """
        Create a polygon.

        Args:
            position: Origin of the local frame in world space.
            vertices: Local-space vertices, in edge order.
            rotation: Rotation in radians.
            refractive_index: Base refractive index.

        Raises:
            ValueError: If fewer than 3 vertices are given.
        """
        super().__init__(position, rotation, refractive_index)
        if len(vertices) < 3:
            raise ValueError(
                f"Polygon needs at least 3 vertices, got {len(vertices)}"
            )
        self.vertices: List[Vector2] = [Vector2(*v) for v in vertices]
        # +1 for clockwise loops in a Y-up frame (clockwise on a Y-down screen
        # is counterclockwise here), -1 otherwise
        self._normal_sign = 1.0 if geometry.signed_area(self.vertices) < 0 else -1.0

    def get_world_vertices(self) -> List[Vector2]:
        return [self.to_world(v) for v in self.vertices]

    def outline(self) -> List[Vector2]:
        return self.get_world_vertices()

    def _edge_normal(self, edge: Vector2) -> Vector2:
        edge_dir = geometry.normalize(edge)
        return Vector2(-edge_dir.y * self._normal_sign, edge_dir.x * self._normal_sign)

    def intersect(self, origin: Vector2, direction: Vector2) -> Optional[Hit]:
        """
        Intersect a ray with every edge and return the nearest forward hit.

        Each edge p1->p2 is treated as the segment p1 + t2 * (p2 - p1) and the
        ray as origin + t1 * direction. Edges nearly parallel to the ray are
        skipped; a hit needs t1 >= SURFACE_HIT_EPSILON and 0 <= t2 <= 1.
        On exact ties the first edge in loop order wins.

        Args:
            origin: Ray origin in world space.
            direction: Unit ray direction in world space.

        Returns:
            Hit with the outward edge normal, or None.
        """
        verts = self.get_world_vertices()
        perp = Vector2(-direction.y, direction.x)

        closest = None
        min_t = math.inf
        for i in range(len(verts)):
            p1 = verts[i]
            p2 = verts[(i + 1) % len(verts)]

            edge = geometry.sub(p2, p1)
            to_origin = geometry.sub(origin, p1)

            det = geometry.dot(edge, perp)
            if abs(det) < PARALLEL_EPSILON:
                continue

            t1 = geometry.cross(edge, to_origin) / det
            t2 = geometry.dot(to_origin, perp) / det

            if t1 >= SURFACE_HIT_EPSILON and 0 <= t2 <= 1 and t1 < min_t:
                min_t = t1
                closest = Hit(
                    t=t1,
                    point=geometry.add(origin, geometry.scale(direction, t1)),
                    normal=self._edge_normal(edge),
                    obj=self
                )

        return closest

    def hit_test(self, point: Vector2) -> bool:
        """
        Even-odd point-in-polygon test against the world-space vertices.

        Args:
            point: Point in world space.

        Returns:
            True if the point is inside the polygon.
        """
        verts = self.get_world_vertices()
        inside = False

        j = len(verts) - 1
        for i in range(len(verts)):
            xi, yi = verts[i].x, verts[i].y
            xj, yj = verts[j].x, verts[j].y
            crosses = (yi > point.y) != (yj > point.y)
            if crosses and point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi:
                inside = not inside
            j = i

        return inside

    def signed_area(self) -> float:
        """Signed area of the local vertex loop."""
        return geometry.signed_area(self.vertices)
