"""Static map rendering from web map tiles.

Projects WGS84 coordinates into Web Mercator pixel space, picks a center
and zoom level that fit a bounding box, and composites tile and vector
layers into a single RGBA image.
"""

from . import config, geo, projection, tiles, viewport, layers
from .geo import BoundingBox, Location, Padding, Point, distance_between
from .projection import MercatorProjection, Projection
from .viewport import RenderContext, compute_offset, fit_bounds
from .staticmap import LocationNotSetError, StaticMap, render

__version__ = "0.1.0"
