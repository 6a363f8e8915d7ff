"""The static map: a canvas size, a view and an ordered stack of layers.

Example:
    from mapframe import StaticMap, BoundingBox
    from mapframe.layers import preset_layer, LineString

    smap = StaticMap(800, 600)
    smap.add_layer(preset_layer("osm"))
    smap.add_layer(LineString(track))
    smap.fit_bounds(BoundingBox.from_locations(track))
    smap.draw_into("track.png")
"""
import pathlib
from typing import List, Optional

from . import config
from .geo import Location, Padding
from .layers.base import Layer, compose
from .projection import MercatorProjection, Projection
from .viewport import NO_DELTA, RenderContext, fit_bounds


class LocationNotSetError(Exception):
    pass


class StaticMap:
    """Static map image of a given size in pixels.

    Parameters
    ----------
    width, height : int
        Output size in pixels.
    projection : Projection, optional
        Projection shared by all layers. Defaults to
        :class:`MercatorProjection` with the ``tile_size`` setting.
    """

    def __init__(self, width: int, height: int, projection: Optional[Projection] = None):
        self.width = width
        self.height = height
        self.projection = projection or MercatorProjection(config.get("tile_size"))
        self.location: Optional[Location] = None
        self.zoom = 3
        self._layers: List[Layer] = []

    def __repr__(self):
        return (f"StaticMap({self.width}x{self.height}, location={self.location}, "
                f"zoom={self.zoom}, layers={len(self._layers)})")

    def set_location(self, latitude, longitude):
        self.location = Location(latitude, longitude)

    def set_size(self, width, height):
        self.width = width
        self.height = height

    @property
    def layers(self):
        """Layers in drawing order (a copy)."""
        return list(self._layers)

    def add_layer(self, layer):
        """Add `layer` on top of the existing layers."""
        self._layers.append(layer)

    def insert_layer(self, layer, index):
        """Insert `layer` at `index` in the drawing order."""
        self._layers.insert(index, layer)

    def remove_layer(self, layer):
        self._layers.remove(layer)

    def fit_bounds(self, bounds, min_zoom=None, max_zoom=None, padding=None):
        """Set location and zoom so that `bounds` is visible.

        The padding is only honored while choosing the zoom; the final
        margins are not guaranteed to match it exactly.

        Parameters
        ----------
        bounds : BoundingBox
            Area to show.
        min_zoom, max_zoom : int, optional
            Zoom search range. If None, uses the ``min_zoom`` and
            ``max_zoom`` settings.
        padding : Padding, optional
            Minimum free space in pixels on each side.
        """
        min_zoom = config.get("min_zoom") if min_zoom is None else min_zoom
        max_zoom = config.get("max_zoom") if max_zoom is None else max_zoom
        self.location, self.zoom = fit_bounds(bounds, self.width, self.height,
                                              self.projection, min_zoom=min_zoom,
                                              max_zoom=max_zoom,
                                              padding=padding or Padding())

    def prepare(self, center_delta=NO_DELTA):
        """Compute the render context for the current view.

        Raises
        ------
        LocationNotSetError
            If no location has been set or fitted yet.
        """
        if self.location is None:
            raise LocationNotSetError("Set a location or fit bounds before rendering")
        return RenderContext.prepare(self.projection, self.location, self.zoom,
                                     self.width, self.height, center_delta)

    def to_pixel(self, location, center_delta=NO_DELTA):
        """Canvas pixel position of `location` in the current view."""
        return self.prepare(center_delta).to_canvas(location)

    def from_pixel(self, point, center_delta=NO_DELTA):
        """Location shown at canvas pixel `point` in the current view."""
        return self.prepare(center_delta).from_canvas(point)

    def render(self, center_delta=NO_DELTA):
        """Draw all layers and return the RGBA image."""
        return compose(self._layers, self.prepare(center_delta))

    def draw_into(self, target, format="PNG", center_delta=NO_DELTA):
        """Render and save to a file path or a binary stream.

        Parameters
        ----------
        target : str, pathlib.Path or file object
            Destination. Parent directories of a path are created.
        format : str, optional
            Pillow format name, by default "PNG".

        Returns
        -------
        PIL.Image.Image
            The rendered image.
        """
        image = self.render(center_delta)
        if isinstance(target, (str, pathlib.Path)):
            target = pathlib.Path(target)
            target.parent.mkdir(parents=True, exist_ok=True)
        image.save(target, format=format)
        return image


def render(width, height, location, zoom, layers, projection=None):
    """Render `layers` centered on `location` at `zoom`.

    Returns
    -------
    PIL.Image.Image
        RGBA image of ``width x height`` pixels.
    """
    smap = StaticMap(width, height, projection=projection)
    smap.location = Location(*location)
    smap.zoom = zoom
    for layer in layers:
        smap.add_layer(layer)
    return smap.render()
