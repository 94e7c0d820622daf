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

Analysis utilities for traced ray paths: measurements and export.
"""

from .path_analysis import (
    deviation_angle,
    lateral_displacement,
    path_length,
    path_to_linestring,
    objects_crossed,
    exit_point,
)
from .saving import (
    save_paths_csv,
    filter_tir_paths,
    get_path_statistics,
)

__all__ = [
    'deviation_angle', 'lateral_displacement', 'path_length',
    'path_to_linestring', 'objects_crossed', 'exit_point',
    'save_paths_csv', 'filter_tir_paths', 'get_path_statistics',
]
