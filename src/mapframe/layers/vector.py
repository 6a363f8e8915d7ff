"""Vector overlays drawn from geographic coordinates."""
from typing import Sequence, Tuple

from PIL import Image, ImageDraw

from ..geo import Location
from ..viewport import RenderContext
from .base import check_opacity

Color = Tuple[int, int, int, int]


class LineString:
    """Polyline through a sequence of locations.

    Parameters
    ----------
    locations : sequence of Location
        Vertices in drawing order.
    stroke_color : tuple of int, optional
        RGBA line color, by default opaque blue.
    stroke_width : int, optional
        Line width in pixels, by default 3.
    opacity : float, optional
        Layer opacity, by default 1.
    """

    def __init__(self, locations: Sequence[Location], stroke_color: Color = (0, 0, 255, 255),
                 stroke_width: int = 3, opacity: float = 1.0):
        self.locations = list(locations)
        self.stroke_color = tuple(stroke_color)
        self.stroke_width = stroke_width
        self.opacity = check_opacity(opacity)

    def draw(self, canvas: Image.Image, context: RenderContext) -> None:
        if len(self.locations) < 2:
            return
        points = [tuple(context.to_canvas(loc)) for loc in self.locations]
        draw = ImageDraw.Draw(canvas, mode="RGBA")
        draw.line(points, fill=self.stroke_color, width=self.stroke_width, joint="curve")


class Markers:
    """Circular markers centered on locations."""

    def __init__(self, locations: Sequence[Location], radius: int = 4,
                 fill: Color = (255, 0, 0, 255), outline: Color = (0, 0, 0, 255),
                 opacity: float = 1.0):
        self.locations = list(locations)
        self.radius = radius
        self.fill = tuple(fill)
        self.outline = tuple(outline)
        self.opacity = check_opacity(opacity)

    def draw(self, canvas: Image.Image, context: RenderContext) -> None:
        draw = ImageDraw.Draw(canvas, mode="RGBA")
        r = self.radius
        for location in self.locations:
            x, y = context.to_canvas(location)
            draw.ellipse((x - r, y - r, x + r, y + r), fill=self.fill, outline=self.outline)
