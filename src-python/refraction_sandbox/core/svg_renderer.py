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

import svgwrite


BACKGROUND_COLOR = '#080808'
GRID_COLOR = '#1a1a1a'
GRID_STEP = 50
OBJECT_FILL = 'rgb(200, 230, 255)'
OBJECT_FILL_OPACITY = 0.15
OBJECT_STROKE = '#00d2ff'
SELECTED_FILL = 'rgb(255, 0, 222)'
SELECTED_FILL_OPACITY = 0.2
SELECTED_STROKE = '#ff00de'
LIGHT_COLOR = '#fff'
LIGHT_RADIUS = 6
LIGHT_TICK_LENGTH = 20


class SVGRenderer:
    """
    SVG renderer for traced scenes.

    The SVG is organized into layers (bottom to top):
    - grid: background grid
    - objects: prisms, blocks and lenses
    - rays: traced ray paths, blended with mix-blend-mode 'screen' so
      overlapping channels add up toward white
    - labels: light source marker and text

    Coordinate System:
        By default the renderer uses the screen convention of the sandbox
        (positive Y points down), so scene coordinates map straight to SVG
        user units. With flip_y=True every layer is wrapped in a vertical
        flip so positive Y points up.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG viewBox (min_x, min_y, width, height)
        dwg (svgwrite.Drawing): The SVG drawing object
        layer_grid, layer_objects, layer_rays, layer_labels (svgwrite.Group)
    """

    def __init__(self, width=1280, height=720, viewbox=None, flip_y=False, draw_grid=True):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 1280)
            height (int): Canvas height in pixels (default: 720)
            viewbox (tuple or None): SVG viewBox as (min_x, min_y, width, height).
                If None, uses (0, 0, width, height)
            flip_y (bool): Draw with positive Y pointing up (default: False)
            draw_grid (bool): Draw the background grid (default: True)
        """
        self.width = width
        self.height = height
        self.flip_y = flip_y
        self.user_viewbox = viewbox if viewbox is not None else (0, 0, width, height)

        min_x, min_y, vb_width, vb_height = self.user_viewbox
        if flip_y:
            # Y-up viewbox: min_y becomes -(min_y + height) in SVG space
            self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)
        else:
            self.viewbox = tuple(self.user_viewbox)

        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill=BACKGROUND_COLOR
        ))

        layer_kwargs = {'transform': 'scale(1, -1)'} if flip_y else {}
        self.layer_grid = self.dwg.add(self.dwg.g(id='layer-grid', **layer_kwargs))
        self.layer_objects = self.dwg.add(self.dwg.g(id='layer-objects', **layer_kwargs))
        self.layer_rays = self.dwg.add(self.dwg.g(
            id='layer-rays', style='mix-blend-mode: screen', **layer_kwargs))
        self.layer_labels = self.dwg.add(self.dwg.g(id='layer-labels', **layer_kwargs))

        if draw_grid:
            self.draw_grid()

    def _normalize_coord(self, value):
        """
        Normalize a coordinate value to handle edge cases.

        Handles:
        - Negative zero (-0.0) -> positive zero (0.0)
        - Very small values near zero -> zero
        """
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _normalize_point(self, point):
        return (self._normalize_coord(point.x), self._normalize_coord(point.y))

    @staticmethod
    def _is_finite(point):
        return math.isfinite(point.x) and math.isfinite(point.y)

    def draw_grid(self, step=GRID_STEP, color=GRID_COLOR):
        """
        Draw grid lines covering the user viewbox.

        Args:
            step (float): Grid spacing in scene units (default: 50)
            color (str): Line color
        """
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        max_x = min_x + vb_width
        max_y = min_y + vb_height

        x = math.floor(min_x / step) * step
        while x <= max_x:
            self.layer_grid.add(self.dwg.line(start=(x, min_y), end=(x, max_y),
                                              stroke=color, stroke_width=1))
            x += step
        y = math.floor(min_y / step) * step
        while y <= max_y:
            self.layer_grid.add(self.dwg.line(start=(min_x, y), end=(max_x, y),
                                              stroke=color, stroke_width=1))
            y += step

    def draw_object(self, obj, selected=False, stroke_width=2):
        """
        Draw an optical object as a filled closed outline.

        Args:
            obj: OpticalObject (polygon or lens)
            selected (bool): Use the selection colors (default: False)
            stroke_width (float): Outline width (default: 2)
        """
        points = obj.outline()
        if len(points) < 3 or not all(self._is_finite(p) for p in points):
            return

        polygon = self.dwg.polygon(
            points=[self._normalize_point(p) for p in points],
            fill=SELECTED_FILL if selected else OBJECT_FILL,
            fill_opacity=SELECTED_FILL_OPACITY if selected else OBJECT_FILL_OPACITY,
            stroke=SELECTED_STROKE if selected else OBJECT_STROKE,
            stroke_width=stroke_width,
            stroke_linejoin='round'
        )
        polygon['id'] = f'{obj.kind.value}-{obj.uuid}'
        polygon['class'] = obj.kind.value
        polygon['data-refractive-index'] = f'{obj.refractive_index:.4f}'
        self.layer_objects.add(polygon)

    def draw_ray_path(self, path, color=None, opacity=1.0, stroke_width=1.5):
        """
        Draw a traced ray path as a polyline.

        Paths with NaN or infinite vertices are skipped.

        Args:
            path (RayPath): The path to draw
            color (str or None): CSS color (default: the path's channel color)
            opacity (float): Opacity 0.0-1.0 (default: 1.0)
            stroke_width (float): Line width (default: 1.5)

        Returns:
            bool: True if the path was drawn.
        """
        if len(path.points) < 2 or not all(self._is_finite(p) for p in path.points):
            return False

        polyline = self.dwg.polyline(
            points=[self._normalize_point(p) for p in path.points],
            fill='none',
            stroke=color if color is not None else path.color,
            stroke_width=stroke_width,
            stroke_opacity=opacity
        )
        polyline['id'] = f'ray-{path.uuid}'
        polyline['class'] = 'ray'
        if path.channel is not None:
            polyline['data-channel'] = path.channel.label
        polyline['data-events'] = ','.join(path.events)
        polyline['data-escaped'] = 'true' if path.escaped else 'false'
        self.layer_rays.add(polyline)
        return True

    def draw_light_source(self, light_source, color=LIGHT_COLOR):
        """
        Draw the light source as a dot with a tick along its central direction.

        Args:
            light_source (LightSource): The source to draw
            color (str): Fill and stroke color
        """
        pos = light_source.position
        rad = math.radians(light_source.angle)
        cx, cy = self._normalize_point(pos)

        self.layer_labels.add(self.dwg.circle(center=(cx, cy), r=LIGHT_RADIUS, fill=color))
        self.layer_labels.add(self.dwg.line(
            start=(cx, cy),
            end=(cx + math.cos(rad) * LIGHT_TICK_LENGTH, cy + math.sin(rad) * LIGHT_TICK_LENGTH),
            stroke=color,
            stroke_width=1
        ))

    def draw_label(self, position, text, color='#ccc', font_size='10px'):
        """Draw a text label at a point (kept upright when flip_y is set)."""
        x, y = self._normalize_point(position)
        kwargs = {}
        if self.flip_y:
            y = -y
            kwargs['transform'] = 'scale(1, -1)'
        self.layer_labels.add(self.dwg.text(
            text, insert=(x, y), fill=color, font_size=font_size,
            font_family='sans-serif', **kwargs
        ))

    def draw_scene(self, scene, paths=None, draw_labels=False, **ray_kwargs):
        """
        Draw all objects of a scene, the traced paths and the light source.

        Args:
            scene: The Scene to draw
            paths (list or None): RayPath list, e.g. from render_frame
            draw_labels (bool): Write each object's display name at its position
            **ray_kwargs: Passed to draw_ray_path (e.g. stroke_width)

        Returns:
            bool: True on success.
        """
        selected = scene.selected_object
        for obj in scene.objs:
            self.draw_object(obj, selected=obj is selected)
            if draw_labels:
                self.draw_label(obj.position, obj.get_display_name())

        for path in paths or []:
            self.draw_ray_path(path, **ray_kwargs)

        if scene.light_source is not None:
            self.draw_light_source(scene.light_source)

        return True

    def save(self, filename=None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(str(filename))

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()
