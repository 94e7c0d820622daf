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

"""
Constants used throughout the refraction sandbox.

Kept in one module so the scene objects, the simulator and the renderer can
share them without circular imports.
"""

# Maximum number of intersection-and-redirect events traced per ray
MAX_BOUNCES = 12

# Smallest ray parameter accepted by a surface's own intersect()
# (keeps a ray from re-hitting the surface it starts on)
SURFACE_HIT_EPSILON = 0.001

# Smallest hit distance accepted by the tracer across the whole scene
TRACE_HIT_EPSILON = 0.01

# Hits at or beyond this distance are ignored by the tracer
MAX_HIT_DISTANCE = 3000.0

# Length of the final segment drawn for a ray that leaves the scene
ESCAPE_DISTANCE = 2000.0

# Determinant threshold below which a ray and a polygon edge count as parallel
PARALLEL_EPSILON = 1e-6

# Lens curvature floor (1 / MIN_CURVATURE is the flattest possible face radius)
MIN_CURVATURE = 0.001

# Refractive index of the surrounding medium
AIR_INDEX = 1.0

# Floor for base index + channel offset when a ray meets a surface
MIN_EFFECTIVE_INDEX = 0.001

# Index offset between neighbouring wavelength channels
DISPERSION_STRENGTH = 0.04

# Picking radius around the light source
LIGHT_PICK_RADIUS = 15.0

# Nominal wavelengths (in nanometers) of the default color channels
RED_WAVELENGTH = 650
GREEN_WAVELENGTH = 532
BLUE_WAVELENGTH = 450
