import logging

import numpy as np
from PIL import Image

from asciiraster.glyphs import build_atlas
from asciiraster.quantize import quantize_grid

logger = logging.getLogger(__name__)


def _luma(image: Image.Image) -> np.ndarray:
    return np.asarray(image.convert("L"), dtype=np.uint8).reshape(image.height, image.width)


def text_grid(image: Image.Image, ramp: str) -> list[str]:
    """One character per pixel, one string per row."""
    indices = quantize_grid(_luma(image), len(ramp))
    return ["".join(ramp[i] for i in row) for row in indices]


def composite(
    image: Image.Image,
    ramp: str,
    cache: dict[str, np.ndarray],
    cell_size: int,
    colour: Image.Image | None = None,
) -> Image.Image:
    """Replace every pixel with the cached glyph tile of its ramp character.

    The canvas is ``cell_size`` times the source size in each direction. When
    ``colour`` is given (an RGB image of the same size) each tile's ink is
    tinted with that pixel's colour and an RGB canvas is returned.
    """
    indices = quantize_grid(_luma(image), len(ramp))
    rows, cols = indices.shape
    tiles = build_atlas(ramp, cache)[indices]  # (rows, cols, cell, cell)
    logger.debug("Compositing %dx%d cells into %dx%d canvas", cols, rows, cols * cell_size, rows * cell_size)
    if rows == 0 or cols == 0:
        return Image.new("RGB" if colour is not None else "L", (cols * cell_size, rows * cell_size))

    if colour is None:
        canvas = tiles.transpose(0, 2, 1, 3).reshape(rows * cell_size, cols * cell_size)
        return Image.fromarray(canvas)

    rgb = np.asarray(colour.convert("RGB"), dtype=np.float64)[:, :, None, None, :]
    paper = tiles[..., None] / 255.0
    tinted = paper * 255.0 + (1.0 - paper) * rgb  # (rows, cols, cell, cell, 3)
    canvas = tinted.transpose(0, 2, 1, 3, 4).reshape(rows * cell_size, cols * cell_size, 3)
    return Image.fromarray(np.clip(np.rint(canvas), 0, 255).astype(np.uint8))
