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

Refraction Sandbox
==================

2D geometric optics: prisms, blocks and lenses refracting a fan of rays in
three wavelength channels, with total internal reflection.

Main modules:
- core: Geometry, scene objects, scene container, tracer and SVG output
- optical_elements: Shape factories, preset scenes, closed-form optics
- analysis: Path measurements and CSV export

Quick start:
    from refraction_sandbox.optical_elements import pink_floyd
    from refraction_sandbox.core.simulator import render_frame
    paths = render_frame(pink_floyd())
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator, render_frame
from .core.ray import Ray, RayPath
from .core.geometry import Vector2

__all__ = [
    'Scene',
    'Simulator',
    'render_frame',
    'Ray',
    'RayPath',
    'Vector2',
    '__version__',
]
