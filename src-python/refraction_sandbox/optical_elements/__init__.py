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

Optical Elements
================

Scene-authoring factories, preset scenes and closed-form optics helpers.
"""

from .prisms import (
    create_equilateral_prism,
    create_block,
    create_lens,
    equilateral_prism_vertices,
)
from .demo_scenes import default_scene, pink_floyd, reconvergence, PRESETS
from .optics_utils import (
    critical_angle,
    is_total_internal_reflection,
    minimum_deviation,
    incidence_for_minimum_deviation,
    deviation_at_incidence,
)

__all__ = [
    'create_equilateral_prism', 'create_block', 'create_lens', 'equilateral_prism_vertices',
    'default_scene', 'pink_floyd', 'reconvergence', 'PRESETS',
    'critical_angle', 'is_total_internal_reflection',
    'minimum_deviation', 'incidence_for_minimum_deviation', 'deviation_at_incidence',
]
