"""Shared pytest fixtures for mapframe tests."""

import tempfile
from pathlib import Path

import pytest
from PIL import Image

from mapframe.geo import BoundingBox, Location
from mapframe.projection import MercatorProjection


class SolidTileProvider:
    """Tile provider returning single-color tiles and recording requests."""

    def __init__(self, color=(255, 0, 0, 255), size=256):
        self.color = color
        self.size = size
        self.calls = []

    def get_tile(self, x, y, z):
        self.calls.append((x, y, z))
        return Image.new("RGBA", (self.size, self.size), self.color)


class IndexedTileProvider:
    """Tile provider coloring each tile from its column and row."""

    def get_tile(self, x, y, z):
        return Image.new("RGB", (256, 256), (x * 60, y * 60, 0))


class MissingTileProvider:
    """Tile provider for which every tile is unavailable."""

    def get_tile(self, x, y, z):
        return None


class FailingTileProvider:
    """Tile provider raising on every request."""

    def get_tile(self, x, y, z):
        raise RuntimeError(f"no tile {z}/{x}/{y}")


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def projection():
    """Provide the default 256 pixel Mercator projection."""
    return MercatorProjection()


@pytest.fixture
def solid_provider():
    return SolidTileProvider()


@pytest.fixture
def indexed_provider():
    return IndexedTileProvider()


@pytest.fixture
def missing_provider():
    return MissingTileProvider()


@pytest.fixture
def failing_provider():
    return FailingTileProvider()


@pytest.fixture
def cluster_locations():
    """Provide a cluster of points around Corsica spanning 0.06 x 0.04 degrees.

    On a 1000 x 1000 canvas the cluster fits at zoom 14 but not at 15.
    """
    return [
        Location(42.467529, 8.8496785),
        Location(42.507529, 8.9096785),
        Location(42.4800, 8.8700),
        Location(42.4950, 8.8900),
        Location(42.4700, 8.9050),
        Location(42.5050, 8.8550),
    ]


@pytest.fixture
def cluster_bounds(cluster_locations):
    return BoundingBox.from_locations(cluster_locations)


@pytest.fixture
def provider_cls():
    """Provide the solid tile provider class for custom colors and sizes."""
    return SolidTileProvider
