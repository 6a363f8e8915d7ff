"""Layer capability and the compositing loop.

A layer is anything with a ``draw(canvas, context)`` method. Layers are
composited in order, first one at the bottom. Each layer paints on its
own transparent overlay which is then blended onto the canvas with the
layer's ``opacity`` (1.0 when the layer has none), so one layer's
opacity never affects another.
"""
from typing import Iterable, Optional, Protocol, runtime_checkable

import numpy as np
from PIL import Image

from ..viewport import RenderContext

BACKGROUND = (255, 255, 255, 255)


@runtime_checkable
class Layer(Protocol):
    """Something that can paint itself onto a canvas."""

    def draw(self, canvas: Image.Image, context: RenderContext) -> None:
        ...


@runtime_checkable
class TileProvider(Protocol):
    """Resolves a tile index to a bitmap, or None when it is unavailable."""

    def get_tile(self, x: int, y: int, z: int) -> Optional[Image.Image]:
        ...


def check_opacity(opacity: float) -> float:
    """Validate a layer opacity.

    Raises
    ------
    ValueError
        If `opacity` is outside ``[0, 1]``.
    """
    opacity = float(opacity)
    if not 0.0 <= opacity <= 1.0:
        raise ValueError(f"Opacity must be between 0 and 1, got {opacity}")
    return opacity


def apply_opacity(image: Image.Image, opacity: float) -> Image.Image:
    """Return `image` with its alpha channel scaled by `opacity`."""
    if opacity >= 1.0:
        return image
    rgba = np.array(image, dtype=np.float32)
    rgba[..., 3] *= opacity
    return Image.fromarray(np.round(rgba).astype(np.uint8), mode="RGBA")


def new_canvas(width: int, height: int, color=BACKGROUND) -> Image.Image:
    return Image.new("RGBA", (width, height), color)


def compose(layers: Iterable[Layer], context: RenderContext,
            background=BACKGROUND) -> Image.Image:
    """Draw `layers` in order onto a fresh canvas.

    Parameters
    ----------
    layers : iterable of Layer
        Layers, bottom first.
    context : RenderContext
        Prepared render state shared by all layers.
    background : tuple of int, optional
        RGBA fill of the canvas, by default opaque white.

    Returns
    -------
    PIL.Image.Image
        RGBA image of ``context.width x context.height`` pixels.
    """
    canvas = new_canvas(context.width, context.height, background)
    for layer in layers:
        overlay = new_canvas(context.width, context.height, (0, 0, 0, 0))
        layer.draw(overlay, context)
        overlay = apply_opacity(overlay, getattr(layer, "opacity", 1.0))
        canvas.alpha_composite(overlay)
    return canvas
