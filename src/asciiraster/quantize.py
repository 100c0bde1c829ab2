import numpy as np

from asciiraster.errors import EmptyRampError


def check_ramp(ramp: str) -> str:
    if not ramp:
        raise EmptyRampError()
    return ramp


def quantize(sample: int, ramp_length: int) -> int:
    """Map an 8-bit luminance sample to a ramp index, 0 = darkest.

    Truncates rather than rounds, so mid-range samples lean dark.
    """
    return int(sample / 255.0 * (ramp_length - 1))


def quantize_grid(gray: np.ndarray, ramp_length: int) -> np.ndarray:
    """Vectorised :func:`quantize` over a (rows, cols) uint8 array."""
    return np.floor(gray.astype(np.float64) / 255.0 * (ramp_length - 1)).astype(np.intp)
