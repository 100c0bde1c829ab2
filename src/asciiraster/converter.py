import logging
from pathlib import Path

from PIL import Image

from asciiraster.compositor import composite, text_grid
from asciiraster.config import RenderOptions
from asciiraster.errors import ResourceNotFoundError
from asciiraster.fonts import GlyphFont, load_font
from asciiraster.formatter import format_grid
from asciiraster.glyphs import build_glyph_cache
from asciiraster.scaling import scale

logger = logging.getLogger(__name__)


def _open(image: Image.Image | str | Path) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    path = Path(image)
    if not path.exists():
        raise ResourceNotFoundError("Can not find input image!")
    with Image.open(path) as img:
        img.load()
        return img


def image_to_text(image: Image.Image | str | Path, options: RenderOptions | None = None) -> str:
    options = options or RenderOptions()
    gray = scale(_open(image).convert("L"), options.scale, options.filter)
    return format_grid(text_grid(gray, options.ramp))


def image_to_raster(
    image: Image.Image | str | Path,
    options: RenderOptions | None = None,
    font: GlyphFont | None = None,
) -> Image.Image:
    options = options or RenderOptions(raster=True)
    source = _open(image)
    if font is None:
        font = load_font(options.font_path)

    # Every glyph is rendered before compositing starts; overflow aborts here
    cache = build_glyph_cache(options.ramp, font, options.cell_size)

    gray = scale(source.convert("L"), options.scale, options.filter)
    colour = scale(source.convert("RGB"), options.scale, options.filter) if options.colour else None
    return composite(gray, options.ramp, cache, options.cell_size, colour=colour)


def convert(input_path: str | Path, output_path: str | Path, options: RenderOptions) -> None:
    """Read an image, render it in the selected mode and write the result."""
    image = _open(input_path)
    if options.raster:
        result = image_to_raster(image, options)
        result.save(output_path)
        logger.debug("Wrote %dx%d raster to %s", result.width, result.height, output_path)
    else:
        text = image_to_text(image, options)
        Path(output_path).write_text(text, encoding="utf-8", newline="")
        logger.debug("Wrote %d characters to %s", len(text), output_path)
