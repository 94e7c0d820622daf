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
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from .base_scene_obj import OpticalObject, ShapeKind
from ..geometry import geometry, Vector2
from ..ray import Hit
from ..constants import MIN_CURVATURE, SURFACE_HIT_EPSILON


class LensType(str, Enum):
    CONVERGING = 'converging'
    DIVERGING = 'diverging'


@dataclass(frozen=True)
class LensProfile:
    """
    Per-type parameters of the double-circle lens construction.

    Attributes:
        center_offset: Maps (radius, width) to the distance of each circle
            center from the lens origin along local x.
        normal_sign: +1 if the outward normal points away from the circle
            center (convex faces), -1 if it points toward it (concave faces).
    """
    center_offset: Callable[[float, float], float]
    normal_sign: float


LENS_PROFILES: Dict[LensType, LensProfile] = {
    # Biconvex: the face near -x belongs to the circle centered at +x and
    # vice versa, so each face bulges outward.
    LensType.CONVERGING: LensProfile(
        center_offset=lambda radius, width: radius - width / 2,
        normal_sign=1.0
    ),
    # Biconcave: the circles sit outside the lens and the faces curve inward.
    LensType.DIVERGING: LensProfile(
        center_offset=lambda radius, width: radius + width / 4,
        normal_sign=-1.0
    ),
}


class Lens(OpticalObject):
    """
    Analytic lens bounded by two circular arcs.

    The lens is centered on its local origin with the optical axis along
    local x. Both faces have radius 1/curvature (curvature floored at
    MIN_CURVATURE); where the circle centers sit is given by the lens type's
    entry in LENS_PROFILES.

    Attributes:
        lens_type: LensType.CONVERGING or LensType.DIVERGING.
        height: Aperture (extent along local y).
        width: Axial thickness parameter (extent along local x).
        curvature: Reciprocal of the face radius.
    """

    kind = ShapeKind.LENS

    defaults = {
        **OpticalObject.defaults,
        'lens_type': LensType.CONVERGING,
        'height': 120.0,
        'width': 20.0,
        'curvature': 0.008
    }

    def __init__(
        self,
        position: Vector2,
        lens_type: Union[LensType, str, None] = None,
        height: Optional[float] = None,
        width: Optional[float] = None,
        curvature: Optional[float] = None,
        rotation: Optional[float] = None,
        refractive_index: Optional[float] = None
    ) -> None:
        """
        Create a lens.

        Args:
            position: Lens center in world space.
            lens_type: LensType or its string value ('converging'/'diverging').
            height: Aperture, must be > 0.
            width: Axial thickness, must be > 0.
            curvature: Face curvature (values below MIN_CURVATURE are clamped
                when the radius is computed).
            rotation: Rotation in radians.
            refractive_index: Base refractive index.

        Raises:
            ValueError: If the lens type is unknown or a dimension is not positive.
        """
        super().__init__(position, rotation, refractive_index)
        self.lens_type = self.defaults['lens_type'] if lens_type is None else lens_type
        self.height = self.defaults['height'] if height is None else height
        self.width = self.defaults['width'] if width is None else width
        self.curvature = self.defaults['curvature'] if curvature is None else curvature

    # ==================== Parameters ====================

    @property
    def lens_type(self) -> LensType:
        return self._lens_type

    @lens_type.setter
    def lens_type(self, value: Union[LensType, str]) -> None:
        try:
            self._lens_type = LensType(value)
        except ValueError:
            raise ValueError(
                f"lens_type must be one of {[t.value for t in LensType]}, got {value!r}"
            ) from None

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"height must be > 0, got {value}")
        self._height = value

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"width must be > 0, got {value}")
        self._width = value

    @property
    def profile(self) -> LensProfile:
        return LENS_PROFILES[self.lens_type]

    @property
    def radius(self) -> float:
        """Radius of both faces."""
        return 1 / max(MIN_CURVATURE, self.curvature)

    def get_centers(self) -> Tuple[Vector2, Vector2]:
        """Local-space centers of the two face circles, (-x side, +x side)."""
        cx = self.profile.center_offset(self.radius, self.width)
        return Vector2(-cx, 0.0), Vector2(cx, 0.0)

    # ==================== Geometry Capabilities ====================

    def intersect(self, origin: Vector2, direction: Vector2) -> Optional[Hit]:
        """
        Intersect a ray with both face circles and return the nearest valid hit.

        The ray is moved into the local frame and each circle is solved as
        |o + t*d - c|^2 = r^2 (a = 1 for a unit direction). A root counts if
        t > SURFACE_HIT_EPSILON and the point lies inside |y| < height/2 and
        |x| < width.

        Args:
            origin: Ray origin in world space.
            direction: Unit ray direction in world space.

        Returns:
            Hit with the outward face normal in world space, or None.
        """
        local_origin = self.to_local(origin)
        local_dir = self.dir_to_local(direction)
        radius = self.radius
        normal_sign = self.profile.normal_sign

        best = None
        for center in self.get_centers():
            to_origin = geometry.sub(local_origin, center)
            b = 2 * geometry.dot(local_dir, to_origin)
            c = geometry.dot(to_origin, to_origin) - radius * radius
            disc = b * b - 4 * c
            if disc < 0:
                continue

            sqrt_disc = math.sqrt(disc)
            for t in ((-b - sqrt_disc) / 2, (-b + sqrt_disc) / 2):
                if t <= SURFACE_HIT_EPSILON:
                    continue
                if best is not None and t >= best.t:
                    continue

                p_local = geometry.add(local_origin, geometry.scale(local_dir, t))
                if abs(p_local.y) >= self.height / 2 or abs(p_local.x) >= self.width:
                    continue

                n_local = geometry.scale(geometry.normalize(geometry.sub(p_local, center)), normal_sign)
                best = Hit(
                    t=t,
                    point=self.to_world(p_local),
                    normal=self.dir_to_world(n_local),
                    obj=self
                )

        return best

    def hit_test(self, point: Vector2) -> bool:
        """Check whether a world point falls inside the lens bounding box."""
        p_local = self.to_local(point)
        return abs(p_local.x) < self.width and abs(p_local.y) < self.height / 2

    def get_half_angle(self) -> float:
        """
        Half of the angle subtended by each drawn face arc at its circle center.

        The arcs span the aperture, except that the faces of a converging
        lens stop where they meet (at y = sqrt(r^2 - cx^2)) so the outline
        never crosses itself.
        """
        radius = self.radius
        half_height = self.height / 2
        if self.lens_type == LensType.CONVERGING:
            cx = self.profile.center_offset(radius, self.width)
            half_height = min(half_height, math.sqrt(max(0.0, radius * radius - cx * cx)))
        return math.asin(min(1.0, half_height / radius))

    def outline(self, samples: int = 32) -> List[Vector2]:
        """
        Sample the two face arcs into a closed world-space loop.

        Args:
            samples: Number of points per arc.

        Returns:
            2 * samples points, the -x face first.
        """
        radius = self.radius
        angle = self.get_half_angle()
        left_center, right_center = self.get_centers()

        if self.lens_type == LensType.CONVERGING:
            # Each face is the near side of the circle on the opposite side
            arcs = [
                (right_center, np.linspace(math.pi - angle, math.pi + angle, samples)),
                (left_center, np.linspace(-angle, angle, samples)),
            ]
        else:
            arcs = [
                (left_center, np.linspace(-angle, angle, samples)),
                (right_center, np.linspace(math.pi - angle, math.pi + angle, samples)),
            ]

        points = []
        for center, thetas in arcs:
            xs = center.x + radius * np.cos(thetas)
            ys = center.y + radius * np.sin(thetas)
            points.extend(self.to_world(Vector2(float(x), float(y))) for x, y in zip(xs, ys))
        return points

    def __repr__(self) -> str:
        return (f"<Lens '{self.get_display_name()}' {self.lens_type.value} "
                f"at ({self.position.x:.2f}, {self.position.y:.2f}), "
                f"h={self.height}, w={self.width}, curvature={self.curvature}, "
                f"n={self.refractive_index}>")
