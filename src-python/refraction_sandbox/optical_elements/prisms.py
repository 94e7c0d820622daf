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
SCENE-AUTHORING FACTORIES
===============================================================================
Ready-made shapes with the sandbox's default sizes.

Equilateral prism vertex layout (local frame, screen convention +Y down):

            V2 (apex)
           /  \
          /    \
         V0----V1      base at y = +h/3, apex at y = -2h/3

    The centroid sits at the local origin, so `rotation` spins the prism
    about its center. V0->V1->V2 is clockwise on screen.

Rectangular block: corners at (+-w/2, +-h/2), centered on the origin.
===============================================================================
"""

from __future__ import annotations

import math
from typing import Optional, Tuple, Union

from ..core.geometry import Vector2
from ..core.scene_objs.polygon import Polygon
from ..core.scene_objs.lens import Lens, LensType

DEFAULT_PRISM_SIDE = 100.0
DEFAULT_BLOCK_WIDTH = 120.0
DEFAULT_BLOCK_HEIGHT = 80.0


def equilateral_prism_vertices(side_length: float) -> Tuple[Vector2, Vector2, Vector2]:
    """
    Local vertices of an equilateral triangle centered on its centroid.

    Args:
        side_length: Length of each side.

    Returns:
        (base left, base right, apex).
    """
    h = side_length * math.sqrt(3) / 2
    return (
        Vector2(-side_length / 2, h / 3),
        Vector2(side_length / 2, h / 3),
        Vector2(0.0, -2 * h / 3),
    )


def create_equilateral_prism(
    position: Vector2,
    side_length: float = DEFAULT_PRISM_SIDE,
    refractive_index: Optional[float] = None,
    rotation: float = 0.0,
    name: Optional[str] = None
) -> Polygon:
    """
    Create a 60-60-60 dispersing prism.

    Args:
        position: Centroid in world space.
        side_length: Length of each side (default 100).
        refractive_index: Base refractive index (default: object default 1.1).
        rotation: Rotation in radians.
        name: Optional display name.

    Raises:
        ValueError: If side_length is not positive.
    """
    if side_length <= 0:
        raise ValueError(f"side_length must be > 0, got {side_length}")
    prism = Polygon(position, equilateral_prism_vertices(side_length),
                    rotation=rotation, refractive_index=refractive_index)
    prism.name = name
    return prism


def create_block(
    position: Vector2,
    width: float = DEFAULT_BLOCK_WIDTH,
    height: float = DEFAULT_BLOCK_HEIGHT,
    refractive_index: Optional[float] = None,
    rotation: float = 0.0,
    name: Optional[str] = None
) -> Polygon:
    """
    Create a rectangular glass block (a slab when wide and thin).

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Block dimensions must be > 0, got width={width}, height={height}")
    vertices = [
        Vector2(-width / 2, -height / 2),
        Vector2(width / 2, -height / 2),
        Vector2(width / 2, height / 2),
        Vector2(-width / 2, height / 2),
    ]
    block = Polygon(position, vertices, rotation=rotation, refractive_index=refractive_index)
    block.name = name
    return block


def create_lens(
    position: Vector2,
    lens_type: Union[LensType, str] = LensType.CONVERGING,
    curvature: Optional[float] = None,
    refractive_index: Optional[float] = None,
    rotation: float = 0.0,
    name: Optional[str] = None
) -> Lens:
    """Create a lens with the default aperture and thickness."""
    lens = Lens(position, lens_type, curvature=curvature, rotation=rotation,
                refractive_index=refractive_index)
    lens.name = name
    return lens
