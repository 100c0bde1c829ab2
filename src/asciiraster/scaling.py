import logging
import math
from dataclasses import dataclass

import numpy as np
from PIL import Image

from asciiraster.errors import ConfigurationError, ScaleSpecError

logger = logging.getLogger(__name__)

# Gaussian kernel: sigma 0.5, evaluated over a support of 3 source pixels
GAUSSIAN_SIGMA = 0.5
GAUSSIAN_SUPPORT = 3.0

PILLOW_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "triangle": Image.Resampling.BILINEAR,
    # Pillow's bicubic uses a = -0.5, which is the Catmull-Rom spline
    "catmull-rom": Image.Resampling.BICUBIC,
    "lanczos3": Image.Resampling.LANCZOS,
}
FILTERS = (*PILLOW_FILTERS, "gaussian")
DEFAULT_FILTER = "lanczos3"

MAX_DIMENSION = 2**32 - 1


def check_filter(name: str) -> str:
    if name not in FILTERS:
        raise ConfigurationError(f"Unsupported filter type: {name!r} (choose from {', '.join(FILTERS)})")
    return name


def _parse_dimension(field: str) -> int | None:
    if field == "_":
        return None
    digits = field[1:] if field.startswith("+") else field
    if not (digits.isascii() and digits.isdigit()) or int(digits) > MAX_DIMENSION:
        raise ScaleSpecError(f"Couldn't parse scale value {field!r} as an unsigned 32-bit integer")
    return int(digits)


@dataclass(frozen=True)
class ScaleSpec:
    """Target (width, height); a missing side is derived from the source aspect ratio."""

    width: int | None = None
    height: int | None = None

    @classmethod
    def parse(cls, text: str) -> "ScaleSpec":
        """Parse ``"W"``, ``"W:H"``, ``"W:_"`` or ``"_:H"``.

        A single value applies to both sides.
        """
        fields = text.split(":")
        if len(fields) > 2:
            raise ScaleSpecError(f"Invalid scale value: {text!r}")
        sizes = [_parse_dimension(f) for f in fields]
        if len(sizes) == 1:
            return cls(sizes[0], sizes[0])
        return cls(sizes[0], sizes[1])

    @property
    def is_identity(self) -> bool:
        return self.width is None and self.height is None

    def target_size(self, width: int, height: int) -> tuple[int, int]:
        """Resolve the output size for a source of ``width`` x ``height``."""
        if self.width is not None and self.height is not None:
            return self.width, self.height
        if self.width is not None:
            return self.width, int(self.width * (height / width))
        if self.height is not None:
            return int(self.height * (width / height)), self.height
        return width, height


def scale(image: Image.Image, spec: ScaleSpec, filter: str = DEFAULT_FILTER) -> Image.Image:
    """Resample ``image`` to ``spec``. With no target sides the image is returned as a copy."""
    if spec.is_identity:
        return image.copy()
    size = spec.target_size(image.width, image.height)
    logger.debug("Resizing %dx%d -> %dx%d (%s)", image.width, image.height, size[0], size[1], filter)
    if 0 in size:
        return Image.new(image.mode, size)
    if filter == "gaussian":
        return _gaussian_resize(image, size)
    return image.resize(size, PILLOW_FILTERS[check_filter(filter)])


def _gaussian(x: np.ndarray) -> np.ndarray:
    return np.exp(-(x**2) / (2 * GAUSSIAN_SIGMA**2)) / (math.sqrt(2 * math.pi) * GAUSSIAN_SIGMA)


def _weights(in_size: int, out_size: int) -> np.ndarray:
    """Build the (out_size, in_size) normalised resampling matrix for one axis."""
    ratio = in_size / out_size
    # Widen the kernel when shrinking so every source pixel contributes
    sratio = max(ratio, 1.0)
    support = GAUSSIAN_SUPPORT * sratio

    weights = np.zeros((out_size, in_size))
    for out in range(out_size):
        center = (out + 0.5) * ratio
        left = min(max(int(math.floor(center - support)), 0), in_size - 1)
        right = min(max(int(math.ceil(center + support)), left + 1), in_size)
        taps = np.arange(left, right)
        w = _gaussian((taps - (center - 0.5)) / sratio)
        total = w.sum()
        weights[out, left:right] = w / total if total > 0 else w
    return weights


def _gaussian_resize(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Separable Gaussian resample, applied along rows then columns."""
    width, height = size
    arr = np.asarray(image, dtype=np.float64)
    vertical = np.tensordot(_weights(image.height, height), arr, axes=(1, 0))
    result = np.tensordot(_weights(image.width, width), vertical, axes=(1, 1)).swapaxes(0, 1)
    return Image.fromarray(np.clip(np.rint(result), 0, 255).astype(np.uint8))
