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

===============================================================================
Ray Path Geometry
===============================================================================
Measurements on traced paths, for comparing a trace with closed-form optics:

- Deviation angle between the entry and exit directions
- Lateral displacement of the exit ray relative to the entry line
- Shapely views of paths (LineString) and the objects a path crosses
===============================================================================
"""

import math
from typing import List

from shapely.geometry import LineString

from ..core.geometry import geometry, Vector2
from ..core.ray import RayPath


def deviation_angle(path: RayPath) -> float:
    """
    Signed angle (degrees) from the initial to the final direction.

    Positive is counterclockwise in the math convention (clockwise on a
    Y-down screen). The result lies in (-180, 180].

    Raises:
        ValueError: If the path has not been traced.
    """
    if path.initial_direction is None or path.final_direction is None:
        raise ValueError("deviation_angle needs a traced path")
    d0 = path.initial_direction
    d1 = path.final_direction
    return math.degrees(math.atan2(geometry.cross(d0, d1), geometry.dot(d0, d1)))


def lateral_displacement(path: RayPath) -> float:
    """
    Perpendicular distance between the entry line and the exit line.

    Meaningful when the exit ray is parallel to the entry ray (e.g. a slab).
    Measured from the last bounce point to the line through the origin
    along the initial direction; signed like `geometry.cross`.

    Raises:
        ValueError: If the path has no bounce.
    """
    if path.bounce_count == 0:
        raise ValueError("lateral_displacement needs at least one bounce")
    d0 = geometry.normalize(path.initial_direction)
    last_hit = path.points[path.bounce_count]
    return geometry.cross(d0, geometry.sub(last_hit, path.points[0]))


def path_length(path: RayPath, include_escape: bool = False) -> float:
    """
    Length of the path.

    Args:
        path: The traced path.
        include_escape: Count the final escape segment (default: False).
    """
    points = path.points
    if path.escaped and not include_escape:
        points = points[:-1]
    return sum(geometry.distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def path_to_linestring(path: RayPath) -> LineString:
    """Convert a traced path to a Shapely LineString."""
    return LineString([(p.x, p.y) for p in path.points])


def objects_crossed(path: RayPath, scene) -> List[str]:
    """
    Display names of the scene objects whose drawn region the path touches.

    Uses Shapely for the intersection test, independently of the tracer.
    """
    line = path_to_linestring(path)
    return [obj.get_display_name() for obj in scene.objs
            if line.intersects(obj.to_shapely())]


def exit_point(path: RayPath) -> Vector2:
    """Last bounce point of the path (the origin if nothing was hit)."""
    return path.points[path.bounce_count]
