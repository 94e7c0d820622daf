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
Ray Path Export Utilities
===============================================================================
- CSV: one row per path vertex, with the event that produced the vertex
- Filtering and summary statistics over a list of traced paths
===============================================================================
"""

import csv
from pathlib import Path
from typing import List, Union

from ..core.ray import RayPath


def _vertex_event(path: RayPath, index: int) -> str:
    """Label of the vertex at `index`: origin, refract, tir or escape."""
    if index == 0:
        return 'origin'
    if index <= len(path.events):
        return path.events[index - 1]
    return 'escape'


def save_paths_csv(
    paths: List[RayPath],
    output_path: Union[str, Path],
    filename: str = "ray_paths.csv",
    precision_coords: int = 4,
) -> Path:
    """
    Export traced ray paths to a CSV file.

    Args:
        paths: List of RayPath objects to export.
        output_path: Directory where the CSV file will be saved.
            Can be a string or Path object.
        filename: Name of the output CSV file (default: "ray_paths.csv").
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.

    Example:
        >>> paths = render_frame(pink_floyd())
        >>> output_file = save_paths_csv(paths, "./output")
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        writer.writerow([
            'path_index',
            'path_uuid',
            'channel',
            'color',
            'n_offset',
            'point_index',
            'x',
            'y',
            'event',
            'escaped',
        ])

        coord_fmt = f"{{:.{precision_coords}f}}"

        for i, path in enumerate(paths):
            channel = path.channel.label if path.channel is not None else ''
            for j, point in enumerate(path.points):
                writer.writerow([
                    i,
                    path.uuid,
                    channel,
                    path.color,
                    f"{path.n_offset:+.4f}",
                    j,
                    coord_fmt.format(point.x),
                    coord_fmt.format(point.y),
                    _vertex_event(path, j),
                    path.escaped,
                ])

    return csv_file


def filter_tir_paths(paths: List[RayPath], tir_only: bool = True) -> List[RayPath]:
    """
    Filter paths on whether they contain a total internal reflection.

    Args:
        paths: List of RayPath objects to filter.
        tir_only: If True, return only paths with at least one TIR.
            If False, return paths without any TIR.
    """
    if tir_only:
        return [path for path in paths if path.tir_count > 0]
    else:
        return [path for path in paths if path.tir_count == 0]


def get_path_statistics(paths: List[RayPath]) -> dict:
    """
    Compute statistics about a collection of traced paths.

    Returns:
        dict: Dictionary containing:
            - total_paths: Number of paths
            - escaped_paths: Paths that left the scene
            - truncated_paths: Paths cut short by the bounce limit
            - tir_paths: Paths with at least one TIR
            - total_bounces: Sum of bounces over all paths
            - max_bounces: Largest bounce count of any path
            - channels: Set of channel labels (None for bare traces)
    """
    return {
        'total_paths': len(paths),
        'escaped_paths': sum(1 for path in paths if path.escaped),
        'truncated_paths': sum(1 for path in paths if path.truncated),
        'tir_paths': sum(1 for path in paths if path.tir_count > 0),
        'total_bounces': sum(path.bounce_count for path in paths),
        'max_bounces': max((path.bounce_count for path in paths), default=0),
        'channels': {path.channel.label if path.channel else None for path in paths},
    }
