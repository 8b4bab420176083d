"""
Geometry to SVG markup.

Produces one ``<g>`` element per shape, concatenated in placement order with
no separators. The result is an SVG fragment; wrapping it in an ``<svg>``
document is the output writer's job.
"""

from typing import Iterable, Union

from markupsafe import escape

from .layout import Circle, Geometry, Rectangle, Shape

__all__ = ["SvgSerializer"]

TEXT_STYLE = 'style="fill:black" font-size="6"'


class SvgSerializer:
    """Render placed shapes as SVG markup."""

    def render(self, geometry: Union[Geometry, Iterable[Shape]]) -> str:
        shapes = geometry.shapes if isinstance(geometry, Geometry) else geometry
        return "".join(self.render_shape(shape) for shape in shapes)

    def render_shape(self, shape: Shape) -> str:
        if isinstance(shape, Circle):
            return self.render_circle(shape)
        if isinstance(shape, Rectangle):
            return self.render_rectangle(shape)
        raise TypeError(f"Cannot render {type(shape).__name__}")

    @staticmethod
    def render_circle(circle: Circle) -> str:
        x, y = circle.center
        return (
            f'<g style="fill:{escape(circle.color)}" transform="translate({x},{y})">'
            f"<title>{escape(circle.tooltip)}</title>"
            f'<circle r="{circle.radius}" />'
            f'<text {TEXT_STYLE} alignment-baseline="middle" text-anchor="middle" >'
            f"{escape(circle.label)}</text>"
            "</g>"
        )

    @staticmethod
    def render_rectangle(rectangle: Rectangle) -> str:
        x, y = rectangle.origin
        return (
            f'<g transform="translate({x},{y})">'
            f'<rect fill="none" stroke-width="0.5" stroke="black" '
            f'width="{rectangle.width}" height="{rectangle.height}" />'
            f'<text {TEXT_STYLE} transform="translate(-1,-1)" >{escape(rectangle.label)}</text>'
            "</g>"
        )
