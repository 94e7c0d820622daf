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
from typing import List, Optional, Sequence, Tuple

from ..geometry import geometry, Vector2
from ..ray import Ray
from ..constants import (
    DISPERSION_STRENGTH, LIGHT_PICK_RADIUS,
    RED_WAVELENGTH, GREEN_WAVELENGTH, BLUE_WAVELENGTH
)


@dataclass(frozen=True)
class WavelengthChannel:
    """
    One color channel traced by the light source.

    Dispersion is modelled as a fixed offset added to the refractive index
    of every object while this channel is traced.

    Attributes:
        label: Short name of the channel (e.g. "R")
        color: CSS color used to draw the channel's rays
        n_offset: Signed refractive index offset
        wavelength: Nominal wavelength in nm (informational)
    """
    label: str
    color: str
    n_offset: float
    wavelength: Optional[float] = None


DEFAULT_CHANNELS: Tuple[WavelengthChannel, ...] = (
    WavelengthChannel('R', '#ff0000', -DISPERSION_STRENGTH, RED_WAVELENGTH),
    WavelengthChannel('G', '#00ff00', 0.0, GREEN_WAVELENGTH),
    WavelengthChannel('B', '#0088ff', DISPERSION_STRENGTH, BLUE_WAVELENGTH),
)


class LightSource:
    """
    Point source emitting a fan of rays in each wavelength channel.

    Attributes:
        position: Source position in world space.
        angle: Central emission direction in degrees.
        spread: Half-width of the fan in degrees (>= 0).
        ray_count: Number of rays in the fan (>= 1).
        channels: Wavelength channels traced for every ray.

    Notes:
        - Ray i of N leaves at angle + (i/(N-1) - 0.5) * 2 * spread, so the
          fan covers [angle - spread, angle + spread].
        - With spread 0 or a single ray every ray leaves at `angle`.
    """

    defaults = {
        'angle': 0.0,
        'spread': 0.0,
        'ray_count': 1,
        'channels': DEFAULT_CHANNELS
    }

    def __init__(
        self,
        position: Vector2,
        angle: Optional[float] = None,
        spread: Optional[float] = None,
        ray_count: Optional[int] = None,
        channels: Optional[Sequence[WavelengthChannel]] = None
    ) -> None:
        self.position = Vector2(*position)
        self.angle = self.defaults['angle'] if angle is None else angle
        self.spread = self.defaults['spread'] if spread is None else spread
        self.ray_count = self.defaults['ray_count'] if ray_count is None else ray_count
        self.channels = self.defaults['channels'] if channels is None else channels

    @property
    def spread(self) -> float:
        return self._spread

    @spread.setter
    def spread(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"spread must be >= 0, got {value}")
        self._spread = value

    @property
    def ray_count(self) -> int:
        return self._ray_count

    @ray_count.setter
    def ray_count(self, value: int) -> None:
        if int(value) != value or value < 1:
            raise ValueError(f"ray_count must be an integer >= 1, got {value}")
        self._ray_count = int(value)

    @property
    def channels(self) -> Tuple[WavelengthChannel, ...]:
        return self._channels

    @channels.setter
    def channels(self, value: Sequence[WavelengthChannel]) -> None:
        value = tuple(value)
        if not value:
            raise ValueError("channels must contain at least one WavelengthChannel")
        self._channels = value

    def get_ray_angles(self) -> List[float]:
        """
        Emission angle of every ray of the fan.

        Returns:
            ray_count angles in degrees.
        """
        n = self.ray_count
        if self.spread > 0 and n > 1:
            return [self.angle + (i / (n - 1) - 0.5) * self.spread * 2 for i in range(n)]
        return [self.angle] * n

    def emit(self) -> List[Ray]:
        """
        Build the rays of the fan (shared by every channel).

        Returns:
            One Ray per fan angle, starting at the source position.
        """
        rays = []
        for angle_deg in self.get_ray_angles():
            rad = math.radians(angle_deg)
            rays.append(Ray(self.position, Vector2(math.cos(rad), math.sin(rad))))
        return rays

    def hit_test(self, point: Vector2) -> bool:
        """Check whether a point is close enough to grab the source."""
        return geometry.distance(point, self.position) < LIGHT_PICK_RADIUS

    def move(self, diff_x: float, diff_y: float) -> None:
        self.position = Vector2(self.position.x + diff_x, self.position.y + diff_y)

    def __repr__(self) -> str:
        labels = ''.join(c.label for c in self.channels)
        return (f"<LightSource at ({self.position.x:.2f}, {self.position.y:.2f}), "
                f"angle={self.angle}, spread={self.spread}, rays={self.ray_count}, "
                f"channels={labels}>")
