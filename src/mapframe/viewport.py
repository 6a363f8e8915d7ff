"""Viewport placement: render offsets and the bounds-fitting zoom search.

The offset is the world pixel coordinate that lands on canvas pixel
``(0, 0)``. It is computed once per render by :func:`compute_offset` and
carried in an immutable :class:`RenderContext`; the fitting search tries
zoom levels with exactly the same formula so that its result matches
what is eventually drawn.
"""
from dataclasses import dataclass

from .geo import BoundingBox, Location, Padding, Point
from .projection import Projection
from .utils import vprint

NO_DELTA = Point(0, 0)


def compute_offset(projection, location, zoom, width, height, center_delta=NO_DELTA):
    """World pixel coordinate of the top-left canvas corner.

    Parameters
    ----------
    projection : Projection
        Projection used for the render.
    location : Location
        Center of the map.
    zoom : int
        Zoom level.
    width, height : int
        Canvas size in pixels.
    center_delta : Point, optional
        Pixel nudge applied to the center, by default no nudge.

    Returns
    -------
    Point
        Offset to subtract from world pixels to get canvas pixels.
    """
    center = projection.unproject(location, zoom)
    return Point(center.x - width // 2 + center_delta.x,
                 center.y - height // 2 + center_delta.y)


@dataclass(frozen=True)
class RenderContext:
    """Everything a layer needs to draw itself for one render.

    Attributes
    ----------
    width, height : int
        Canvas size in pixels.
    location : Location
        Map center.
    zoom : int
        Zoom level.
    projection : Projection
        Projection shared by all layers.
    offset : Point
        World pixel coordinate of canvas pixel ``(0, 0)``.
    """

    width: int
    height: int
    location: Location
    zoom: int
    projection: Projection
    offset: Point

    @classmethod
    def prepare(cls, projection, location, zoom, width, height, center_delta=NO_DELTA):
        """Build a context with its offset computed for this render."""
        offset = compute_offset(projection, location, zoom, width, height, center_delta)
        return cls(width=width, height=height, location=location, zoom=zoom,
                   projection=projection, offset=offset)

    @property
    def tile_size(self):
        return self.projection.tile_size

    def to_canvas(self, location):
        """Canvas pixel position of `location`."""
        return self.projection.unproject(location, self.zoom) - self.offset

    def from_canvas(self, point):
        """Location shown at canvas pixel `point`."""
        return self.projection.project(Point(*point) + self.offset, self.zoom)

    def canvas_corners(self):
        """Locations of the top-left and bottom-right canvas corners."""
        return (self.from_canvas(Point(0, 0)),
                self.from_canvas(Point(self.width, self.height)))


def fit_bounds(target, width, height, projection, min_zoom=3, max_zoom=20,
               padding=Padding()):
    """Find the center and zoom that show `target` on a canvas.

    Zoom levels are tried one by one, from just below `max_zoom`
    downwards. At each level the canvas, inset by `padding`, is projected
    back to a box which must contain every edge of `target`. Containment
    is not guaranteed to be monotonic once padding is involved, so the
    search is linear rather than binary.

    Parameters
    ----------
    target : BoundingBox
        Area that should be visible.
    width, height : int
        Canvas size in pixels.
    projection : Projection
        Projection used for the eventual render.
    min_zoom : int, optional
        Lowest zoom to return, by default 3.
    max_zoom : int, optional
        Upper end of the search, by default 20. Must not be below
        `min_zoom`.
    padding : Padding, optional
        Canvas insets in pixels; larger values give lower zoom levels.

    Returns
    -------
    tuple of (Location, int)
        Center of `target` and the chosen zoom. When no zoom level fits,
        `min_zoom` is returned.
    """
    center = target.center
    vprint(f"Trying to fit: {target}")

    zoom = max_zoom
    while True:
        zoom -= 1
        if zoom < min_zoom:
            zoom = min_zoom
            break

        offset = compute_offset(projection, center, zoom, width, height)
        top_left = projection.project(
            Point(offset.x + padding.left, offset.y + padding.top), zoom)
        bottom_right = projection.project(
            Point(offset.x + width - padding.right, offset.y + height - padding.bottom), zoom)

        # Built top edge first, see BoundingBox.contains.
        candidate = BoundingBox(xmin=top_left.longitude, xmax=bottom_right.longitude,
                                ymin=top_left.latitude, ymax=bottom_right.latitude)
        vprint(f"Trying with {zoom}: {candidate}", level=1)
        if candidate.contains(target, inclusive=True):
            break

    return center, zoom
