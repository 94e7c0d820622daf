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
from dataclasses import dataclass
from typing import Dict, Iterator, Sequence

from shapely.geometry import Point as ShapelyPoint


@dataclass(frozen=True)
class Vector2:
    """
    A point or direction in 2D space.

    Immutable: every operation in `Geometry` returns a new Vector2.
    Can be converted to/from Shapely Point objects.
    """
    x: float
    y: float

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Vector2':
        """Create Vector2 from Shapely Point."""
        return cls(sp.x, sp.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vector2(x={self.x}, y={self.y})"


class Geometry:
    """
    Stateless 2D vector operations.

    All functions reproduce the plain Euclidean formulas; the only special
    case is `normalize`, which maps the zero vector to itself.
    """

    @staticmethod
    def point(x: float, y: float) -> Vector2:
        """
        Create a point.

        Args:
            x: The x-coordinate of the point.
            y: The y-coordinate of the point.

        Returns:
            Vector2 object
        """
        return Vector2(x, y)

    @staticmethod
    def add(v1: Vector2, v2: Vector2) -> Vector2:
        return Vector2(v1.x + v2.x, v1.y + v2.y)

    @staticmethod
    def sub(v1: Vector2, v2: Vector2) -> Vector2:
        return Vector2(v1.x - v2.x, v1.y - v2.y)

    @staticmethod
    def scale(v: Vector2, factor: float) -> Vector2:
        return Vector2(v.x * factor, v.y * factor)

    @staticmethod
    def dot(v1: Vector2, v2: Vector2) -> float:
        """
        Calculate the dot product of two vectors.

        Args:
            v1: First vector
            v2: Second vector

        Returns:
            Dot product
        """
        return v1.x * v2.x + v1.y * v2.y

    @staticmethod
    def cross(v1: Vector2, v2: Vector2) -> float:
        """
        Calculate the cross product of two vectors.

        Args:
            v1: First vector
            v2: Second vector

        Returns:
            Cross product (z-component in 2D)
        """
        return v1.x * v2.y - v1.y * v2.x

    @staticmethod
    def magnitude(v: Vector2) -> float:
        return math.sqrt(v.x * v.x + v.y * v.y)

    @staticmethod
    def normalize(v: Vector2) -> Vector2:
        """
        Normalize the given vector.

        Args:
            v: Vector to normalize

        Returns:
            Unit vector in the same direction, or the zero vector if `v` has
            zero length.
        """
        m = math.sqrt(v.x * v.x + v.y * v.y)
        if m == 0:
            return Vector2(0.0, 0.0)
        return Vector2(v.x / m, v.y / m)

    @staticmethod
    def rotate(v: Vector2, angle: float) -> Vector2:
        """
        Rotate the given vector by the given angle in radians.

        Args:
            v: Vector to rotate
            angle: Rotation angle in radians

        Returns:
            Rotated vector
        """
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(
            v.x * cos_a - v.y * sin_a,
            v.x * sin_a + v.y * cos_a
        )

    @staticmethod
    def distance(v1: Vector2, v2: Vector2) -> float:
        return math.hypot(v1.x - v2.x, v1.y - v2.y)

    @staticmethod
    def signed_area(points: Sequence[Vector2]) -> float:
        """
        Signed area of a closed polygon (shoelace formula).

        Positive for counterclockwise order in a Y-up frame, negative for
        clockwise order.

        Args:
            points: Polygon vertices in order (the loop is closed implicitly)

        Returns:
            Signed area
        """
        n = len(points)
        area = 0.0
        for i in range(n):
            p1 = points[i]
            p2 = points[(i + 1) % n]
            area += p1.x * p2.y - p2.x * p1.y
        return area / 2


# Create a singleton instance for convenience
geometry = Geometry()


# Example usage and testing
if __name__ == "__main__":
    p1 = geometry.point(0, 0)
    p2 = geometry.point(3, 4)

    print(f"Distance between {p1} and {p2}: {geometry.distance(p1, p2)}")
    print(f"Dot product: {geometry.dot(p1, p2)}")
    print(f"Cross product: {geometry.cross(geometry.point(1, 0), geometry.point(0, 1))}")
    print(f"Normalized vector of {p2}: {geometry.normalize(p2)}")
    print(f"Normalized zero vector: {geometry.normalize(p1)}")
    print(f"Rotated vector (90 degrees): {geometry.rotate(geometry.point(1, 0), math.pi / 2)}")
