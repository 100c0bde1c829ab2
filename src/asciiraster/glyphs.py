import logging

import numpy as np

from asciiraster.errors import GlyphBufferError, GlyphOverflowError
from asciiraster.fonts import GlyphFont

logger = logging.getLogger(__name__)


def rasterize_glyph(char: str, font: GlyphFont, cell_size: int) -> np.ndarray:
    """Render ``char`` dark-on-white, centered in a ``cell_size`` square.

    The glyph is requested one pixel shorter than the cell to leave a margin.
    Raises GlyphOverflowError if the ink box is larger than the cell and
    GlyphBufferError if the font returned fewer coverage samples than its box needs.
    """
    metrics, bitmap = font.rasterize(char, cell_size - 1)

    if metrics.height > cell_size or metrics.width > cell_size:
        raise GlyphOverflowError(
            char, f"Rastered glyph ({metrics.width}x{metrics.height}) won't fit in {cell_size}px bounding box:"
        )
    needed = metrics.width * metrics.height
    if len(bitmap) < needed:
        raise GlyphBufferError(char, f"Rasterized glyph buffer too small ({len(bitmap)} < {needed}):")

    tile = np.full((cell_size, cell_size), 255, dtype=np.uint8)
    if needed == 0:
        return tile

    coverage = np.frombuffer(bitmap, dtype=np.uint8, count=needed).reshape(metrics.height, metrics.width)
    dx = (cell_size - metrics.width) // 2
    dy = (cell_size - metrics.height) // 2
    tile[dy : dy + metrics.height, dx : dx + metrics.width] = 255 - coverage
    return tile


def build_glyph_cache(ramp: str, font: GlyphFont, cell_size: int) -> dict[str, np.ndarray]:
    """Rasterize every distinct ramp character once."""
    cache = {char: rasterize_glyph(char, font, cell_size) for char in dict.fromkeys(ramp)}
    logger.debug("Built %d glyph tiles at %dpx", len(cache), cell_size)
    return cache


def build_atlas(ramp: str, cache: dict[str, np.ndarray]) -> np.ndarray:
    """Stack cached tiles in ramp order, shape (len(ramp), cell, cell), so ramp indices select tiles."""
    return np.stack([cache[char] for char in ramp])
