"""HTTP tile sources.

A :class:`TileSource` turns a tile index into a URL from a template with
``{x}``, ``{y}``, ``{z}`` and ``{s}`` placeholders, downloads it with
requests and decodes it with Pillow. Any failure is logged and reported
as a missing tile, so one bad tile never aborts a render.

Example:
    from mapframe.layers.sources import TileSource, tms_layer

    osm = TileSource.from_preset("osm")
    topo = tms_layer("https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png", opacity=0.5)
"""
import io
import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import requests
from PIL import Image

from .. import config
from .tile_layer import TileLayer

logger = logging.getLogger(__name__)

DEFAULT_SUBDOMAINS = ("a", "b", "c")


@dataclass(frozen=True)
class TilePreset:
    """A well-known tile service.

    Attributes:
        name: Display name of the service.
        url_template: URL template with {z}, {x}, {y} and optional {s}.
        attribution: Attribution text required by the provider.
        max_zoom: Highest zoom level served.
        subdomains: Values substituted for {s}.
    """
    name: str
    url_template: str
    attribution: str = ""
    max_zoom: int = 19
    subdomains: Sequence[str] = DEFAULT_SUBDOMAINS


TILE_SOURCES = {
    "osm": TilePreset(
        name="OpenStreetMap",
        url_template="https://tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution="© OpenStreetMap contributors",
        max_zoom=19,
    ),
    "opentopomap": TilePreset(
        name="OpenTopoMap",
        url_template="https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png",
        attribution="© OpenStreetMap, © SRTM, © OpenTopoMap",
        max_zoom=17,
    ),
    "cartodb_positron": TilePreset(
        name="CartoDB Positron",
        url_template="https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}.png",
        attribution="© OpenStreetMap, © CartoDB",
        max_zoom=19,
        subdomains=("a", "b", "c", "d"),
    ),
    "cartodb_darkmatter": TilePreset(
        name="CartoDB Dark Matter",
        url_template="https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}.png",
        attribution="© OpenStreetMap, © CartoDB",
        max_zoom=19,
        subdomains=("a", "b", "c", "d"),
    ),
    "esri_worldimagery": TilePreset(
        name="ESRI World Imagery",
        url_template="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attribution="© Esri, Maxar, Earthstar Geographics",
        max_zoom=19,
    ),
}


def list_available_sources():
    """List available pre-defined tile sources."""
    return list(TILE_SOURCES.keys())


@dataclass
class TileSource:
    """Fetch tiles from a templated URL.

    Attributes:
        url_template: URL with {x}, {y}, {z} and optional {s} placeholders.
        subdomains: Candidates for {s}; one is picked at random per request.
        headers: Extra HTTP headers. A User-Agent is always sent.
        timeout: Request timeout in seconds. None uses the ``timeout`` setting.
        rng: Random generator for subdomain selection. Pass a seeded
            ``random.Random`` for reproducible URLs.
        session: requests session to reuse; created on first use if None.
    """
    url_template: str
    subdomains: Sequence[str] = DEFAULT_SUBDOMAINS
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    rng: random.Random = field(default_factory=random.Random)
    session: Optional[requests.Session] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False,
                                  repr=False, compare=False)

    @classmethod
    def from_preset(cls, preset_name: str, **kwargs) -> "TileSource":
        """Create a source for a pre-defined service.

        Args:
            preset_name: Name from TILE_SOURCES (e.g., 'osm', 'opentopomap').
            **kwargs: Passed on to the constructor.

        Raises:
            ValueError: If the preset is unknown.
        """
        if preset_name not in TILE_SOURCES:
            available = ", ".join(TILE_SOURCES.keys())
            raise ValueError(f"Unknown preset '{preset_name}'. Available: {available}")
        preset = TILE_SOURCES[preset_name]
        kwargs.setdefault("subdomains", preset.subdomains)
        return cls(url_template=preset.url_template, **kwargs)

    def _get_session(self) -> requests.Session:
        with self._lock:
            if self.session is None:
                self.session = requests.Session()
            return self.session

    def _subdomain(self) -> str:
        if not self.subdomains:
            return ""
        with self._lock:
            return self.rng.choice(self.subdomains)

    def build_url(self, x: int, y: int, z: int) -> str:
        """Fill the URL template for one tile."""
        url = self.url_template
        if "{s}" in url:
            url = url.replace("{s}", self._subdomain())
        return (url.replace("{x}", str(x))
                   .replace("{y}", str(y))
                   .replace("{z}", str(z)))

    def get_tile(self, x: int, y: int, z: int) -> Optional[Image.Image]:
        """Download and decode one tile.

        Returns:
            RGBA image, or None if the request or decoding failed.
        """
        url = self.build_url(x, y, z)
        headers = {"User-Agent": config.get("user_agent")}
        headers.update(self.headers)
        timeout = self.timeout if self.timeout is not None else config.get("timeout")

        try:
            response = self._get_session().get(url, headers=headers, timeout=timeout)
            response.raise_for_status()
            img = Image.open(io.BytesIO(response.content))
            img.load()
        except (requests.RequestException, OSError) as e:
            logger.warning(f"Failed to fetch tile {url}: {e}")
            return None

        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return img


def tms_layer(url_template: str, opacity: float = 1.0,
              max_workers: Optional[int] = None, **source_kwargs) -> TileLayer:
    """Tile layer backed by a :class:`TileSource` for `url_template`."""
    return TileLayer(TileSource(url_template, **source_kwargs),
                     opacity=opacity, max_workers=max_workers)


def preset_layer(preset_name: str, opacity: float = 1.0,
                 max_workers: Optional[int] = None, **source_kwargs) -> TileLayer:
    """Tile layer for a pre-defined service, see :data:`TILE_SOURCES`."""
    return TileLayer(TileSource.from_preset(preset_name, **source_kwargs),
                     opacity=opacity, max_workers=max_workers)
