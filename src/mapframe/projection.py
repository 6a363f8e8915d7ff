"""Spherical Mercator projection between WGS84 and world pixel space.

World pixel space covers the whole projected globe at a given zoom level
with ``tile_size * 2**zoom`` pixels on each axis, origin at the north-west
corner.
"""
import math
from typing import Protocol

from .geo import Location, Point

WEBMERCATOR_RADIUS = 6378137.0
DEFAULT_TILE_SIZE = 256
# Latitude at which the square Web Mercator world ends.
MAX_LATITUDE = 85.0511287798


class Projection(Protocol):
    """Anything that maps locations to world pixels and back."""

    tile_size: int

    def unproject(self, location: Location, zoom: int) -> Point:
        ...

    def project(self, point: Point, zoom: int) -> Location:
        ...


class MercatorProjection:
    """Web Mercator (slippy map) projection.

    Parameters
    ----------
    tile_size : int, optional
        Edge length of a tile in pixels, by default 256.
    """

    def __init__(self, tile_size: int = DEFAULT_TILE_SIZE):
        self.tile_size = tile_size

    def __repr__(self):
        return f"MercatorProjection(tile_size={self.tile_size})"

    def world_size(self, zoom: int) -> int:
        """Edge length of world pixel space at `zoom`."""
        return self.tile_size * 2**zoom

    def unproject(self, location: Location, zoom: int) -> Point:
        """Convert a location to world pixel coordinates.

        The result is not offset by any viewport. Latitudes beyond
        ``MAX_LATITUDE`` are clamped, so the poles land on the world edge.

        Parameters
        ----------
        location : Location
            WGS84 coordinate in degrees.
        zoom : int
            Zoom level (>= 0).

        Returns
        -------
        Point
            World pixel coordinate.
        """
        world = self.world_size(zoom)
        x = (location.longitude + 180) / 360 * world
        phi = math.radians(max(-MAX_LATITUDE, min(MAX_LATITUDE, location.latitude)))
        merc_n = math.log(math.tan(math.pi / 4 + phi / 2))
        y = world * (0.5 - merc_n / (2 * math.pi))
        return Point(x, y)

    def project(self, point: Point, zoom: int) -> Location:
        """Convert world pixel coordinates back to a location.

        Parameters
        ----------
        point : Point
            World pixel coordinate, viewport offset already added.
        zoom : int
            Zoom level (>= 0).

        Returns
        -------
        Location
            WGS84 coordinate in degrees.
        """
        world = self.world_size(zoom)
        longitude = point.x / world * 360 - 180
        n = math.pi * (1 - 2 * point.y / world)
        latitude = math.degrees(2 * math.atan(math.exp(n)) - math.pi / 2)
        return Location(latitude, longitude)

    def resolution(self, zoom: int, latitude: float = 0.0) -> float:
        """Ground resolution in meters per pixel at `zoom` and `latitude`."""
        return (2 * math.pi * WEBMERCATOR_RADIUS * math.cos(math.radians(latitude))
                / self.world_size(zoom))
