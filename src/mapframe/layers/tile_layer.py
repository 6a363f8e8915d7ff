"""Tile-backed layers.

The visible part of the tile pyramid is worked out from the render
context, all tiles in that range are fetched in parallel, and the
bitmaps are then pasted one by one on the rendering thread at their
world pixel position minus the render offset.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Optional, Tuple

from PIL import Image
from tqdm import tqdm

from .. import config
from ..geo import Point
from ..tiles import tile_for_location, tile_origin, tile_range
from ..viewport import RenderContext
from .base import TileProvider, check_opacity

logger = logging.getLogger(__name__)


def visible_tiles(context: RenderContext):
    """Corner tiles of the area shown by `context`.

    Returns
    -------
    tuple of mercantile.Tile
        Top-left and bottom-right tile, both inside the pyramid.
    """
    top_left, bottom_right = context.canvas_corners()
    return (tile_for_location(top_left, context.zoom),
            tile_for_location(bottom_right, context.zoom))


def fetch_tiles(provider: TileProvider, tiles, max_workers: Optional[int] = None
                ) -> Dict[Tuple[int, int], Optional[Image.Image]]:
    """Fetch `tiles` concurrently from `provider`.

    Parameters
    ----------
    provider : TileProvider
        Source of tile bitmaps.
    tiles : list of mercantile.Tile
        Tiles to fetch.
    max_workers : int, optional
        Number of worker threads. If None, uses the
        ``parallel_downloads`` setting.

    Returns
    -------
    dict
        Bitmap (or None when unavailable) keyed by ``(x, y)``. A tile
        whose fetch raised is logged and recorded as None.
    """
    max_workers = max_workers or config.get("parallel_downloads")
    results = {}
    if not tiles:
        return results

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(provider.get_tile, tile.x, tile.y, tile.z): tile
            for tile in tiles
        }
        with tqdm(total=len(futures), desc="Fetching tiles", unit="tile",
                  disable=not config.get("verbose")) as pbar:
            for future in as_completed(futures):
                tile = futures[future]
                try:
                    results[(tile.x, tile.y)] = future.result()
                except Exception as e:
                    logger.warning(f"Error fetching tile {tile.z}/{tile.x}/{tile.y}: {e}")
                    results[(tile.x, tile.y)] = None
                pbar.update(1)
    return results


def draw_tiles(provider: TileProvider, canvas: Image.Image, context: RenderContext,
               max_workers: Optional[int] = None) -> int:
    """Paste the tiles of `provider` covering `context` onto `canvas`.

    Parameters
    ----------
    provider : TileProvider
        Source of tile bitmaps.
    canvas : PIL.Image.Image
        RGBA image to draw on.
    context : RenderContext
        Prepared render state.
    max_workers : int, optional
        Fetch threads, see :func:`fetch_tiles`.

    Returns
    -------
    int
        Number of tiles drawn.
    """
    tile_size = context.tile_size
    zoom = context.zoom
    top_left, bottom_right = visible_tiles(context)
    tiles = tile_range(top_left, bottom_right)
    bitmaps = fetch_tiles(provider, tiles, max_workers=max_workers)

    # Computed once; every tile is placed relative to this corner.
    origin = context.projection.unproject(tile_origin(top_left), zoom)

    drawn = 0
    for tile in tiles:
        bitmap = bitmaps.get((tile.x, tile.y))
        if bitmap is None:
            continue
        world_pos = Point(origin.x + (tile.x - top_left.x) * tile_size,
                          origin.y + (tile.y - top_left.y) * tile_size)
        pos = world_pos - context.offset
        if bitmap.size != (tile_size, tile_size):
            bitmap = bitmap.resize((tile_size, tile_size), Image.Resampling.LANCZOS)
        if bitmap.mode != "RGBA":
            bitmap = bitmap.convert("RGBA")
        canvas.paste(bitmap, (round(pos.x), round(pos.y)))
        drawn += 1
    logger.debug(f"Drew {drawn}/{len(tiles)} tiles at zoom {zoom}")
    return drawn


class TileLayer:
    """Layer drawing bitmaps from a tile provider.

    Parameters
    ----------
    source : TileProvider
        Object answering ``get_tile(x, y, z)``, e.g. a
        :class:`mapframe.layers.sources.TileSource`.
    opacity : float, optional
        Blend opacity between 0 and 1, by default 1.
    max_workers : int, optional
        Fetch threads. If None, uses the ``parallel_downloads`` setting.
    """

    def __init__(self, source: TileProvider, opacity: float = 1.0,
                 max_workers: Optional[int] = None):
        self.source = source
        self.opacity = check_opacity(opacity)
        self.max_workers = max_workers

    def __repr__(self):
        return f"TileLayer({self.source!r}, opacity={self.opacity})"

    def get_tile(self, x: int, y: int, z: int) -> Optional[Image.Image]:
        return self.source.get_tile(x, y, z)

    def draw(self, canvas: Image.Image, context: RenderContext) -> None:
        draw_tiles(self, canvas, context, max_workers=self.max_workers)
