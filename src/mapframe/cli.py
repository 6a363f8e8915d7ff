"""Command-line interface for mapframe.

Provides commands to fit a view to a bounding box and to render a map
image, using the Typer framework.
"""
import random
from pathlib import Path
from typing import Optional

import typer

from . import config
from .geo import BoundingBox, Location, Padding
from .layers.sources import TileSource
from .layers.tile_layer import TileLayer
from .staticmap import StaticMap

app = typer.Typer(help="Render static map images from web map tiles.")


@app.callback()
def callback():
    """Static map rendering: fit a view to a bounding box and composite
    web map tiles into a PNG image.
    """


def _use_env(env):
    typer.echo(f"Environment: {env}")
    if env != "DEFAULT":
        config.change_env(env)


def _parse_bbox(text):
    bounds = BoundingBox.parse_bbox(text)
    if bounds is None:
        raise typer.BadParameter(f"Expected 'xmin,ymin,xmax,ymax', got {text!r}")
    return bounds


def _parse_center(text):
    try:
        lat, lon = (float(v) for v in text.split(","))
    except ValueError:
        raise typer.BadParameter(f"Expected 'lat,lon', got {text!r}")
    return Location(lat, lon)


@app.command()
def fit(
    bbox: str = typer.Argument(..., help="Bounds as 'xmin,ymin,xmax,ymax' (lon/lat)."),
    width: int = typer.Option(800, help="Image width in pixels."),
    height: int = typer.Option(600, help="Image height in pixels."),
    min_zoom: Optional[int] = typer.Option(None, help="Lowest zoom level."),
    max_zoom: Optional[int] = typer.Option(None, help="Upper end of the zoom search."),
    padding: int = typer.Option(0, help="Padding in pixels on every side."),
    env: str = typer.Option("DEFAULT", help="Settings environment."),
):
    """Print the center and zoom level that fit a bounding box."""
    _use_env(env)
    smap = StaticMap(width, height)
    smap.fit_bounds(_parse_bbox(bbox), min_zoom=min_zoom, max_zoom=max_zoom,
                    padding=Padding(padding, padding, padding, padding))
    typer.echo(f"Center: {smap.location.latitude:.6f},{smap.location.longitude:.6f}")
    typer.echo(f"Zoom: {smap.zoom}")


@app.command()
def render(
    output: Path = typer.Argument(..., help="Where to write the PNG image."),
    bbox: Optional[str] = typer.Option(None, help="Fit to 'xmin,ymin,xmax,ymax' (lon/lat)."),
    center: Optional[str] = typer.Option(None, help="Map center as 'lat,lon'."),
    zoom: Optional[int] = typer.Option(None, help="Zoom level, required with --center."),
    width: int = typer.Option(800, help="Image width in pixels."),
    height: int = typer.Option(600, help="Image height in pixels."),
    source: Optional[str] = typer.Option(None, help="Preset tile source name."),
    url: Optional[str] = typer.Option(None, help="Tile URL template, overrides --source."),
    padding: int = typer.Option(0, help="Padding in pixels used with --bbox."),
    seed: Optional[int] = typer.Option(None, help="Seed for subdomain selection."),
    env: str = typer.Option("DEFAULT", help="Settings environment."),
):
    """Render a map image from a tile source."""
    _use_env(env)
    rng = random.Random(seed)
    if url:
        tiles = TileSource(url, rng=rng)
    else:
        try:
            tiles = TileSource.from_preset(source or config.get("default_source"), rng=rng)
        except ValueError as e:
            raise typer.BadParameter(str(e))

    smap = StaticMap(width, height)
    smap.add_layer(TileLayer(tiles))
    if bbox:
        smap.fit_bounds(_parse_bbox(bbox), padding=Padding(padding, padding, padding, padding))
    elif center and zoom is not None:
        smap.location = _parse_center(center)
        smap.zoom = zoom
    else:
        raise typer.BadParameter("Give either --bbox or both --center and --zoom")

    smap.draw_into(output)
    typer.echo(f"Wrote {output} (zoom {smap.zoom})")
