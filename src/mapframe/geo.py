"""Geometry primitives: locations, world pixels, bounding boxes and padding.

All geographic values are WGS84 degrees. Bounding boxes follow the
``x = longitude, y = latitude`` convention.
"""
import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

# Degrees of arc to meters: nautical miles per degree -> statute miles -> meters.
METERS_PER_DEGREE = 60 * 1.1515 * 1609.344


class Location(NamedTuple):
    """A WGS84 coordinate in degrees."""

    latitude: float
    longitude: float

    def distance_to(self, other):
        """Great-circle distance to `other` in meters."""
        return distance_between(self, other)


class Point(NamedTuple):
    """A coordinate in world pixel space at an implicit zoom level."""

    x: float
    y: float

    def __add__(self, other):
        return Point(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Point(self.x - other[0], self.y - other[1])


class Padding(NamedTuple):
    """Pixel insets applied while fitting a map to bounds."""

    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0


def distance_between(a, b):
    """Great-circle distance between two locations in meters.

    Uses the spherical law of cosines. Degenerate input (identical or
    antipodal points, where rounding pushes the cosine out of ``[-1, 1]``)
    yields 0 rather than NaN.

    Parameters
    ----------
    a, b : Location
        End points.

    Returns
    -------
    float
        Distance in meters.
    """
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    theta = math.radians(a.longitude - b.longitude)
    cos_dist = (math.sin(lat1) * math.sin(lat2)
                + math.cos(lat1) * math.cos(lat2) * math.cos(theta))
    if not -1.0 <= cos_dist <= 1.0:
        return 0.0
    dist = math.degrees(math.acos(cos_dist)) * METERS_PER_DEGREE
    if not math.isfinite(dist):
        return 0.0
    return dist


@dataclass
class BoundingBox:
    """Axis-aligned longitude/latitude rectangle.

    The constructor does not check that ``xmin <= xmax`` or
    ``ymin <= ymax``; callers are expected to pass ordered bounds.

    Attributes
    ----------
    xmin : float
        Smallest longitude.
    xmax : float
        Largest longitude.
    ymin : float
        Smallest latitude.
    ymax : float
        Largest latitude.
    """

    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @classmethod
    def from_locations(cls, locations):
        """Smallest box holding every location.

        Raises
        ------
        ValueError
            If `locations` is empty.
        """
        if len(locations) == 0:
            raise ValueError("At least one location is required")
        coords = np.array([(loc.longitude, loc.latitude) for loc in locations],
                          dtype=np.float64)
        lons, lats = coords[:, 0], coords[:, 1]
        return cls(xmin=float(lons.min()), xmax=float(lons.max()),
                   ymin=float(lats.min()), ymax=float(lats.max()))

    @classmethod
    def parse_bbox(cls, text):
        """Parse an ``"xmin,ymin,xmax,ymax"`` string.

        Returns
        -------
        BoundingBox or None
            None when a token is not a number or the field count is wrong.
        """
        parts = text.split(",")
        if len(parts) != 4:
            return None
        try:
            xmin, ymin, xmax, ymax = (float(p) for p in parts)
        except ValueError:
            return None
        return cls(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)

    @classmethod
    def around(cls, location, distance):
        """Box reaching `distance` meters from `location` in each direction.

        Meters per degree are measured at the location's latitude with two
        half-degree steps on each side of the center. At a pole, where a
        degree of longitude has no length, the box spans all longitudes.
        """
        lat, lon = location
        m_per_deg_lon = distance_between(Location(lat, lon - 0.5),
                                         Location(lat, lon + 0.5))
        m_per_deg_lat = distance_between(Location(lat - 0.5, lon),
                                         Location(lat + 0.5, lon))
        dlat = distance / m_per_deg_lat
        if m_per_deg_lon > 0:
            dlon = distance / m_per_deg_lon
            xmin, xmax = lon - dlon, lon + dlon
        else:
            xmin, xmax = -180.0, 180.0
        return cls(xmin=xmin, xmax=xmax, ymin=lat - dlat, ymax=lat + dlat)

    @property
    def center(self):
        """Arithmetic midpoint of the box."""
        return Location(self.ymin + (self.ymax - self.ymin) / 2,
                        self.xmin + (self.xmax - self.xmin) / 2)

    @property
    def width(self):
        return self.xmax - self.xmin

    @property
    def height(self):
        return self.ymax - self.ymin

    def to_string(self):
        return f"{self.xmin},{self.ymin},{self.xmax},{self.ymax}"

    __str__ = to_string

    def to_wkt(self):
        """Well-Known-Text polygon of the box, closed on its first corner."""
        corners = [(self.xmin, self.ymin), (self.xmin, self.ymax),
                   (self.xmax, self.ymax), (self.xmax, self.ymin),
                   (self.xmin, self.ymin)]
        return "POLYGON((" + ",".join(f"{x} {y}" for x, y in corners) + "))"

    def area_km2(self):
        """Approximate area in square kilometers, measured along the south-west edges."""
        south_west = Location(self.ymin, self.xmin)
        width = distance_between(south_west, Location(self.ymin, self.xmax)) / 1000
        height = distance_between(south_west, Location(self.ymax, self.xmin)) / 1000
        return width * height

    def contains_location(self, location):
        """True if `location` lies strictly inside the box."""
        y, x = location
        return self.ymin < y < self.ymax and self.xmin < x < self.xmax

    def contains(self, other, inclusive=True):
        """Test `other` against this box edge by edge.

        Each of the four edges of `other` that falls strictly between the
        matching bounds of this box counts once. With ``inclusive`` all four
        must count, otherwise one is enough.

        The latitude checks compare against ``(ymax, ymin)``, i.e. they
        expect this box to be built top edge first, as the fitting search
        does with the projected canvas corners.
        """
        count = 0
        if self.xmin < other.xmin < self.xmax:
            count += 1
        if self.xmin < other.xmax < self.xmax:
            count += 1
        if self.ymax < other.ymin < self.ymin:
            count += 1
        if self.ymax < other.ymax < self.ymin:
            count += 1
        if inclusive:
            return count == 4
        return count > 0
