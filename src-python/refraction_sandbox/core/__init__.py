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

from .geometry import geometry, Geometry, Vector2
from . import constants
from .ray import Ray, Hit, RayPath
from .scene import Scene
from .simulator import Simulator, render_frame, snell_direction
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Geometry', 'Vector2',
    'constants',
    'Ray', 'Hit', 'RayPath',
    'Scene',
    'Simulator', 'render_frame', 'snell_direction',
    'SVGRenderer'
]
