"""Tile pyramid addressing.

Conversions between longitude/latitude and the discrete ``(x, y, z)``
indices of the standard power-of-two tile pyramid. The formulas derive
from the same spherical Mercator relation as
:class:`mapframe.projection.MercatorProjection`, so tile edges land on
whole multiples of the tile size in world pixel space.
"""
import math

import mercantile

from .geo import Location
from .projection import MAX_LATITUDE


def tile_x_from_longitude(lon: float, z: int) -> int:
    """Column of the tile containing longitude `lon` at zoom `z`."""
    return math.floor((lon + 180) / 360 * 2**z)


def tile_y_from_latitude(lat: float, z: int) -> int:
    """Row of the tile containing latitude `lat` at zoom `z`.

    Latitudes beyond the pyramid are clamped first, so the poles give the
    first or last row.
    """
    phi = math.radians(clamp_latitude(lat))
    merc_n = math.log(math.tan(math.pi / 4 + phi / 2))
    return math.floor((1 - merc_n / math.pi) * 0.5 * 2**z)


def longitude_from_tile(x: int, z: int) -> float:
    """Longitude of the left edge of tile column `x`."""
    return x / 2**z * 360 - 180


def latitude_from_tile(y: int, z: int) -> float:
    """Latitude of the top edge of tile row `y`."""
    n = math.pi - 2 * math.pi * y / 2**z
    return math.degrees(math.atan(math.exp(n))) * 2 - 90


def clamp_latitude(lat: float) -> float:
    """Limit `lat` to the latitudes covered by the tile pyramid."""
    return max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))


def clamp_tile_index(index: int, z: int) -> int:
    """Limit a row or column index to ``[0, 2**z - 1]``."""
    return max(0, min(2**z - 1, index))


def tile_for_location(location: Location, z: int, clamp: bool = True) -> mercantile.Tile:
    """Tile containing `location` at zoom `z`.

    Parameters
    ----------
    location : Location
        Position to look up.
    z : int
        Zoom level.
    clamp : bool, optional
        Keep the result inside the pyramid, by default True. Locations
        beyond the antimeridian or the Mercator latitude limit then map to
        the nearest edge tile.

    Returns
    -------
    mercantile.Tile
    """
    if clamp:
        x = clamp_tile_index(tile_x_from_longitude(location.longitude, z), z)
        y = clamp_tile_index(tile_y_from_latitude(clamp_latitude(location.latitude), z), z)
    else:
        x = tile_x_from_longitude(location.longitude, z)
        y = tile_y_from_latitude(location.latitude, z)
    return mercantile.Tile(x, y, z)


def tile_origin(tile: mercantile.Tile) -> Location:
    """Top-left (north-west) corner of `tile`."""
    return Location(latitude_from_tile(tile.y, tile.z),
                    longitude_from_tile(tile.x, tile.z))


def tile_range(top_left: mercantile.Tile, bottom_right: mercantile.Tile):
    """All tiles between two corner tiles, both ends included, row by row."""
    return [mercantile.Tile(x, y, top_left.z)
            for y in range(top_left.y, bottom_right.y + 1)
            for x in range(top_left.x, bottom_right.x + 1)]
