import io
import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from PIL import Image, ImageDraw, ImageFont

from asciiraster.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_FONT = "monospace"

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    "C:\\Windows\\Fonts\\consola.ttf",
]


@dataclass(frozen=True)
class GlyphMetrics:
    width: int
    height: int


class GlyphFont(Protocol):
    def rasterize(self, char: str, px_height: int) -> tuple[GlyphMetrics, bytes]:
        """Return the ink box of ``char`` and its row-major 8-bit coverage bitmap."""
        ...


class PillowGlyphFont:
    """GlyphFont backed by a TrueType/OpenType byte stream rendered through FreeType."""

    def __init__(self, data: bytes, name: str = "<memory>"):
        self.data = data
        self.name = name
        self._sizes: dict[int, ImageFont.FreeTypeFont] = {}

    def _font(self, px_height: int) -> ImageFont.FreeTypeFont:
        if px_height not in self._sizes:
            self._sizes[px_height] = ImageFont.truetype(io.BytesIO(self.data), px_height)
        return self._sizes[px_height]

    def rasterize(self, char: str, px_height: int) -> tuple[GlyphMetrics, bytes]:
        font = self._font(px_height)
        # Draw with room on every side, then crop to the inked pixels
        img = Image.new("L", (px_height * 4, px_height * 4), 0)
        draw = ImageDraw.Draw(img)
        draw.text((px_height, px_height), char, fill=255, font=font)
        bbox = img.getbbox()
        if bbox is None:
            return GlyphMetrics(0, 0), b""

        ink = img.crop(bbox)
        return GlyphMetrics(ink.width, ink.height), ink.tobytes()


def _find_default_font() -> str | None:
    """Ask fontconfig for the default monospace font, then try well-known paths."""
    try:
        result = subprocess.run(
            ["fc-match", "-f", "%{file}", DEFAULT_FONT],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        result = None
    if result is not None and result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    for path in _FONT_CANDIDATES:
        if os.path.exists(path):
            return path
    return None


def load_font(path: str | Path | None = None) -> PillowGlyphFont:
    """Load a font file, or the system default monospace font when ``path`` is None."""
    if path is None:
        found = _find_default_font()
        if found is None:
            raise ResourceNotFoundError("Can not find a default monospace font!")
        path = found
    path = Path(path)
    if not path.exists():
        raise ResourceNotFoundError("Can not find font file!")
    logger.debug("Using font %s", path)
    return PillowGlyphFont(path.read_bytes(), name=str(path))
