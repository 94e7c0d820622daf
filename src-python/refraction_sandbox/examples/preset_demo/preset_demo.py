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

import sys
import os

# Add parent directories to path to import refraction_sandbox
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from refraction_sandbox.core.simulator import Simulator
from refraction_sandbox.core.svg_renderer import SVGRenderer
from refraction_sandbox.optical_elements import PRESETS, minimum_deviation
from refraction_sandbox.analysis import (
    deviation_angle, get_path_statistics, save_paths_csv
)

WIDTH = 1200
HEIGHT = 600


def preset_demo(verbose: int = 0):
    """Trace every preset scene and write one SVG and one CSV per preset.

    Pink Floyd
    One ray through an n=1.5 equilateral prism. The three channels see
    n = 1.46, 1.50 and 1.54, so blue bends most and the ray fans out.

    Reconvergence
    A 50-ray fan is dispersed by the first prism, focused by the lens and
    partly recombined by the second (inverted) prism.
    """
    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    if not os.path.exists(output_dir):
        os.makedirs(output_dir)

    for preset_name, build_scene in PRESETS.items():
        print(f"\n--- {preset_name} ---")
        scene = build_scene(WIDTH, HEIGHT)

        # verbose levels: 0=silent (default), 1=per-ray, 2=per-bounce refraction detail
        simulator = Simulator(scene, verbose=verbose)
        paths = simulator.run()

        stats = get_path_statistics(paths)
        print(f"Paths traced: {stats['total_paths']} "
              f"(escaped {stats['escaped_paths']}, truncated {stats['truncated_paths']})")
        print(f"TIR paths: {stats['tir_paths']}, max bounces: {stats['max_bounces']}")

        if preset_name == 'pink_floyd':
            for path in paths:
                print(f"  {path.channel.label}: n={1.5 + path.n_offset:.2f} "
                      f"deviation={deviation_angle(path):+.3f} deg "
                      f"(minimum possible {minimum_deviation(60.0, 1.5 + path.n_offset):.3f} deg)")

        renderer = SVGRenderer(width=WIDTH, height=HEIGHT)
        renderer.draw_scene(scene, paths, draw_labels=True)
        output_file = os.path.join(output_dir, f'{preset_name}.svg')
        renderer.save(output_file)
        print(f"Saved to: {output_file}")

        csv_file = save_paths_csv(paths, output_dir, filename=f'{preset_name}.csv')
        print(f"Saved to: {csv_file}")


if __name__ == '__main__':
    preset_demo()
