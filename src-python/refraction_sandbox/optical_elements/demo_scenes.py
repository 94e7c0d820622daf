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
PRESET SCENES
===============================================================================
Positions are fractions of the canvas size (screen convention, +Y down),
so every preset scales with the canvas it is drawn on.

- default_scene:  one default prism at the canvas center, light at (100, 300)
- pink_floyd:     a single white ray split into R/G/B by one prism
- reconvergence:  a 50-ray fan through prism -> lens -> inverted prism
===============================================================================
"""

from __future__ import annotations

import math

from ..core.geometry import Vector2
from ..core.scene import Scene
from ..core.scene_objs.lens import LensType
from ..core.scene_objs.light_source import LightSource
from .prisms import create_equilateral_prism, create_lens

DEFAULT_CANVAS_WIDTH = 1200
DEFAULT_CANVAS_HEIGHT = 600


def default_scene(width: float = DEFAULT_CANVAS_WIDTH,
                  height: float = DEFAULT_CANVAS_HEIGHT) -> Scene:
    """Start-up scene of the sandbox."""
    scene = Scene(light_source=LightSource(Vector2(100, 300)))
    scene.name = 'Default'
    scene.add_object(create_equilateral_prism(Vector2(width / 2, height / 2)))
    return scene


def pink_floyd(width: float = DEFAULT_CANVAS_WIDTH,
               height: float = DEFAULT_CANVAS_HEIGHT) -> Scene:
    """
    Dispersion of a single ray by one n=1.5 prism.

    Returns:
        Scene with one prism (side 120) and a one-ray light source.
    """
    scene = Scene(light_source=LightSource(
        Vector2(width * 0.25, height * 0.6), angle=0, spread=0, ray_count=1
    ))
    scene.name = 'Pink Floyd'
    scene.add_object(create_equilateral_prism(
        Vector2(width * 0.55, height * 0.55), side_length=120,
        refractive_index=1.5, name='Prism'
    ))
    return scene


def reconvergence(width: float = DEFAULT_CANVAS_WIDTH,
                  height: float = DEFAULT_CANVAS_HEIGHT) -> Scene:
    """
    A fan dispersed by one prism, focused by a lens and recombined by a
    second prism turned upside down.

    Returns:
        Scene with two prisms, a converging lens and a 50-ray, 20 degree
        spread light source.
    """
    scene = Scene(light_source=LightSource(
        Vector2(width * 0.2, height * 0.6), angle=0, spread=20, ray_count=50
    ))
    scene.name = 'Reconvergence'
    scene.add_object(create_equilateral_prism(
        Vector2(width * 0.45, height * 0.55), refractive_index=1.5, name='Prism 1'
    ))
    scene.add_object(create_equilateral_prism(
        Vector2(width * 0.65, height * 0.55), refractive_index=1.5,
        rotation=math.pi, name='Prism 2'
    ))
    scene.add_object(create_lens(
        Vector2(width * 0.55, height * 0.5), LensType.CONVERGING,
        curvature=0.01, refractive_index=1.45, name='Lens'
    ))
    return scene


PRESETS = {
    'default': default_scene,
    'pink_floyd': pink_floyd,
    'reconvergence': reconvergence,
}
