"""
Copyright 2026 fiber-ray-optics authors and contributors

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

import logging
import math

import svgwrite

from .constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CLADDING_THICKNESS,
    SOURCE_X,
)

logger = logging.getLogger(__name__)

RAY_COLOR = '#F97316'
ANGLE_COLOR = '#6E59A5'
CORE_COLOR = '#D6BCFA'
CLADDING_COLOR = '#E5DEFF'
BOUNDARY_COLOR = '#9b87f5'
LABEL_COLOR = '#1A1F2C'
SIGNAL_COLOR = '#10b981'
NO_SIGNAL_COLOR = '#ef4444'
MUTED_TEXT_COLOR = '#6b7280'


class FiberSVGRenderer:
    """
    SVG renderer for a fiber cross-section and its rays.

    The SVG is organized into four layers, bottom to top:
    - objects: cladding, core, core boundaries, light source
    - graphic annotations: angle indicator, signal indicator
    - rays: light rays
    - labels: text annotations

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward)
        with the fiber axis at y = 0. A vertical flip is applied to every
        layer; text is flipped back so it stays readable.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG viewBox (min_x, min_y, width, height), Y-down
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(self, width=CANVAS_WIDTH, height=CANVAS_HEIGHT, viewbox=None,
                 metadata_level='full'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 400)
            viewbox (tuple or None): viewBox as (min_x, min_y, width, height)
                in Y-up coordinates. If None, a box of the canvas size
                centred vertically on the fiber axis is used.
            metadata_level (str): Controls how much metadata to embed.
                - 'none': No metadata (smallest files)
                - 'standard': id + inkscape:label + class
                - 'full': All of 'standard' plus data-* attributes
        """
        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self.user_viewbox = (viewbox if viewbox is not None
                             else (0, -height / 2, width, height))

        # Y-up user viewbox -> Y-down SVG viewbox
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        # profile='full' allows data-* attributes; debug=False disables
        # svgwrite's validation, which rejects the inkscape namespace.
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill='white'
        ))

        self.layer_objects = self._add_layer('layer-objects', 'Objects')
        self.layer_graphic_symb = self._add_layer('layer-graphic-symb',
                                                  'Graphic Annotations')
        self.layer_rays = self._add_layer('layer-rays', 'Rays')
        self.layer_labels = self._add_layer('layer-labels', 'Labels')

    def _add_layer(self, layer_id, label):
        return self.dwg.add(self.dwg.g(
            id=layer_id,
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': label}
        ))

    def _normalize_coord(self, value):
        """
        Normalize a coordinate value: -0.0 and values within 1e-10 of zero
        become 0.0.
        """
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _set_metadata(self, element, element_id, css_class, label=None):
        if self.metadata_level == 'none':
            return
        element['id'] = element_id
        element['class'] = css_class
        if label:
            element['inkscape:label'] = label

    def _text(self, content, x, y, color=LABEL_COLOR, font_size='12px',
              anchor='middle', **extra):
        # Labels live in a flipped layer: insert at -y and flip back
        return self.dwg.text(
            content,
            insert=(self._normalize_coord(x), self._normalize_coord(-y)),
            fill=color,
            font_size=font_size,
            font_family='sans-serif',
            text_anchor=anchor,
            dominant_baseline='middle',
            transform='scale(1, -1)',
            **extra
        )

    def draw_fiber(self, fiber_length, core_height, graded_index=False,
                   cladding_thickness=CLADDING_THICKNESS):
        """
        Draw cladding, core and the dashed core/cladding boundaries.

        Args:
            fiber_length (float): Fiber length along X
            core_height (float): Core height; the core spans +/- core_height/2
            graded_index (bool): Fill the core with a radial gradient
            cladding_thickness (float): Cladding thickness on each side
        """
        total_height = core_height + cladding_thickness * 2

        cladding = self.dwg.rect(
            insert=(0, -total_height / 2),
            size=(fiber_length, total_height),
            rx=total_height / 2,
            ry=total_height / 2,
            fill=CLADDING_COLOR,
            fill_opacity=0.8,
        )
        self._set_metadata(cladding, 'cladding', 'cladding', 'Cladding')
        self.layer_objects.add(cladding)

        if graded_index:
            gradient = self.dwg.radialGradient(
                center=('50%', '50%'), r='50%', focal=('50%', '50%'),
                id='gradedCoreGradient'
            )
            gradient.add_stop_color(0, CORE_COLOR, 1)
            gradient.add_stop_color(0.8, CORE_COLOR, 0.8)
            gradient.add_stop_color(1, CLADDING_COLOR, 0.6)
            self.dwg.defs.add(gradient)
            core_fill = gradient.get_paint_server()
            core_opacity = 1.0
        else:
            core_fill = CORE_COLOR
            core_opacity = 0.9

        core = self.dwg.rect(
            insert=(0, -core_height / 2),
            size=(fiber_length, core_height),
            rx=4,
            ry=core_height / 2,
            fill=core_fill,
            fill_opacity=core_opacity,
        )
        self._set_metadata(core, 'core', 'core graded' if graded_index else 'core',
                           'Core')
        if self.metadata_level == 'full':
            core['data-graded-index'] = str(bool(graded_index)).lower()
        self.layer_objects.add(core)

        for name, y in (('upper', core_height / 2), ('lower', -core_height / 2)):
            boundary = self.dwg.line(
                start=(0, self._normalize_coord(y)),
                end=(fiber_length, self._normalize_coord(y)),
                stroke=BOUNDARY_COLOR,
                stroke_width=1,
                stroke_dasharray='5,5',
                stroke_opacity=0.6,
            )
            self._set_metadata(boundary, f'boundary-{name}', 'core-boundary')
            self.layer_objects.add(boundary)

    def draw_ray(self, trace, is_tir=True, color=RAY_COLOR, stroke_width=None,
                 ray_id=None):
        """
        Draw one ray as a polyline path.

        Args:
            trace (RayTrace): Ray to draw; its intensity is used as opacity
            is_tir (bool): Whether the ray is guided (sets the CSS class)
            color (str): Stroke color
            stroke_width (float or None): Line width; defaults to 2.5 for the
                primary ray and 1.2 for secondary rays
            ray_id (str or None): Element id

        Returns:
            bool: False if the ray was skipped (empty or non-finite points)
        """
        points = trace.points
        if not points:
            return False
        if not all(p.is_finite() for p in points):
            logger.warning("Skipping ray at %.3g deg with non-finite points",
                           trace.angle)
            return False

        if stroke_width is None:
            stroke_width = 2.5 if trace.primary else 1.2

        commands = []
        for index, p in enumerate(points):
            x = self._normalize_coord(p.x)
            y = self._normalize_coord(p.y)
            commands.append(f"{'M' if index == 0 else 'L'} {x},{y}")

        path = self.dwg.path(
            d=' '.join(commands),
            fill='none',
            stroke=color,
            stroke_width=stroke_width,
            stroke_opacity=trace.intensity,
        )

        if ray_id is None:
            ray_id = 'ray-primary' if trace.primary else f'ray-{trace.angle:g}'
        self._set_metadata(
            path, ray_id,
            'ray ray-tir' if is_tir else 'ray ray-leaky',
            f'{trace.angle:g} deg I={trace.intensity:.3f}',
        )
        if self.metadata_level == 'full':
            path['data-angle'] = f'{trace.angle:g}'
            path['data-intensity'] = f'{trace.intensity:.6f}'
            path['data-points'] = str(len(points))
            path['data-primary'] = str(trace.primary).lower()

        self.layer_rays.add(path)
        return True

    def draw_source(self, x=SOURCE_X, y=0, radius=15, is_tir=True):
        """Draw the light source circle (dimmed when the ray is not guided)."""
        circle = self.dwg.circle(
            center=(x, self._normalize_coord(y)),
            r=radius,
            fill=RAY_COLOR,
            fill_opacity=1.0 if is_tir else 0.5,
        )
        self._set_metadata(circle, 'light-source', 'light-source', 'Light source')
        self.layer_objects.add(circle)

    def draw_angle_indicator(self, origin_x, incidence_angle, length=30):
        """
        Draw the launch direction, an arc from the axis and the angle value.

        Args:
            origin_x (float): X of the ray entry point (on the axis)
            incidence_angle (float): Incidence angle in degrees
            length (float): Length of the direction line
        """
        axis_angle = math.radians(90 - incidence_angle)
        group = self.dwg.g(transform=f'translate({origin_x}, 0)')
        self._set_metadata(group, 'angle-indicator', 'angle-indicator')

        tip_x = self._normalize_coord(length * math.cos(axis_angle))
        tip_y = self._normalize_coord(length * math.sin(axis_angle))
        group.add(self.dwg.path(
            d=f'M 0 0 L {tip_x} {tip_y}',
            stroke=ANGLE_COLOR,
            stroke_width=1.5,
            stroke_dasharray='3,2',
            stroke_opacity=0.8,
            fill='none',
        ))

        arc_x = self._normalize_coord(5 + 5 * math.cos(axis_angle))
        arc_y = self._normalize_coord(5 * math.sin(axis_angle))
        group.add(self.dwg.path(
            d=f'M 5 0 A 5 5 0 0 1 {arc_x} {arc_y}',
            stroke=ANGLE_COLOR,
            stroke_width=1,
            fill='none',
        ))
        self.layer_graphic_symb.add(group)

        label_angle = math.radians(90 - incidence_angle / 2)
        text = self._text(
            f'{incidence_angle:.0f}°',
            origin_x + 15 * math.cos(label_angle),
            15 * math.sin(label_angle),
            color=ANGLE_COLOR,
            font_size='10px',
        )
        self.layer_labels.add(text)

    def draw_labels(self, fiber_length, core_height, core_index, cladding_index):
        """Draw the cladding and core labels with their refractive indices."""
        self.layer_labels.add(self._text(
            f'Cladding (n₂ = {cladding_index:.2f})',
            fiber_length / 2, core_height / 2 + 20,
        ))
        self.layer_labels.add(self._text(
            f'Core (n₁ = {core_index:.2f})',
            fiber_length / 2, 0,
        ))

    def draw_signal_indicator(self, x, is_tir, intensity=1.0, show_power=False):
        """
        Draw the signal status at the fiber end.

        Args:
            x (float): X position of the indicator
            is_tir (bool): Whether the signal reaches the end of the fiber
            intensity (float): Primary ray intensity (opacity when guided)
            show_power (bool): Print the remaining power percentage
        """
        color = SIGNAL_COLOR if is_tir else NO_SIGNAL_COLOR
        circle = self.dwg.circle(
            center=(x, 0),
            r=15,
            fill=color,
            fill_opacity=intensity if is_tir else 0.3,
        )
        self._set_metadata(circle, 'signal-indicator', 'signal-indicator',
                           'Signal' if is_tir else 'No Signal')
        self.layer_graphic_symb.add(circle)

        self.layer_labels.add(self._text(
            'Signal' if is_tir else 'No Signal',
            x, -30, color=color, font_size='11px', font_weight='bold',
        ))
        if show_power and is_tir:
            self.layer_labels.add(self._text(
                f'{intensity * 100:.1f}% Power',
                x, -45, color=MUTED_TEXT_COLOR, font_size='10px',
            ))

    def draw_scene(self, scene, cladding_thickness=CLADDING_THICKNESS):
        """
        Draw a complete FiberScene.

        Args:
            scene (FiberScene): Scene produced by build_fiber_scene
            cladding_thickness (float): Cladding thickness on each side
        """
        params = scene.params
        self.draw_fiber(scene.fiber_length, scene.core_height,
                        graded_index=params.graded_index,
                        cladding_thickness=cladding_thickness)
        self.draw_source(is_tir=scene.is_tir)

        for index, trace in enumerate(scene.secondaries):
            self.draw_ray(trace, is_tir=scene.is_tir,
                          ray_id=f'ray-secondary-{index}')
        self.draw_ray(scene.primary, is_tir=scene.is_tir, ray_id='ray-primary')

        self.draw_angle_indicator(scene.start_x, params.incidence_angle)
        self.draw_labels(scene.fiber_length, scene.core_height,
                         params.core_index, params.cladding_index)
        self.draw_signal_indicator(scene.fiber_length + 20, scene.is_tir,
                                   intensity=scene.primary.intensity,
                                   show_power=params.show_attenuation)

    def save(self, filename: str = None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'fiber.svg')
        """
        if filename is None:
            filename = 'fiber.svg'
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()


def render_fiber_scene(scene, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
                       metadata_level='full'):
    """
    Render a FiberScene to an SVG string.

    The viewbox covers the fiber plus 100 units for the signal indicator,
    centred on the fiber axis.
    """
    viewbox = (0, -height / 2, scene.fiber_length + 100, height)
    renderer = FiberSVGRenderer(width=width, height=height, viewbox=viewbox,
                                metadata_level=metadata_level)
    renderer.draw_scene(scene)
    return renderer.to_string()
