"""Map layers and compositing.

Layers paint onto the map canvas in insertion order. Tile layers place
bitmaps from a tile provider on the tile grid; vector layers draw
overlays from geographic coordinates.
"""

from .base import Layer, TileProvider, compose
from .tile_layer import TileLayer, draw_tiles, fetch_tiles, visible_tiles
from .sources import TileSource, TilePreset, TILE_SOURCES, list_available_sources, tms_layer, preset_layer
from .vector import LineString, Markers

__all__ = [
    "Layer",
    "TileProvider",
    "compose",
    "TileLayer",
    "draw_tiles",
    "fetch_tiles",
    "visible_tiles",
    "TileSource",
    "TilePreset",
    "TILE_SOURCES",
    "list_available_sources",
    "tms_layer",
    "preset_layer",
    "LineString",
    "Markers",
]
