import shutil
import subprocess

import pytest

from asciiraster.fonts import GlyphMetrics

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if shutil.os.path.exists(path):
            return path
    result = shutil.which("fc-match")
    if result:
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip():
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")

COVERAGE = {"#": 255, "@": 255, " ": 0}


class FakeFont:
    """Deterministic GlyphFont: a solid box per character.

    The box is half as wide as it is tall and exactly as tall as the requested
    pixel height unless ``width``/``height`` override it. ``short`` drops that
    many samples from the end of the bitmap.
    """

    def __init__(self, width=None, height=None, short=0):
        self.width = width
        self.height = height
        self.short = short
        self.calls = []

    def rasterize(self, char, px_height):
        self.calls.append((char, px_height))
        width = self.width(px_height) if callable(self.width) else self.width
        height = self.height(px_height) if callable(self.height) else self.height
        width = px_height // 2 if width is None else width
        height = px_height if height is None else height
        ink = COVERAGE.get(char, 128)
        bitmap = bytes([ink]) * (width * height - self.short)
        return GlyphMetrics(width, height), bitmap


@pytest.fixture
def fake_font():
    return FakeFont()
