from dataclasses import dataclass, field
from pathlib import Path

from asciiraster.charsets import DEFAULT_RAMP
from asciiraster.errors import ConfigurationError
from asciiraster.quantize import check_ramp
from asciiraster.scaling import DEFAULT_FILTER, ScaleSpec, check_filter

DEFAULT_CELL_SIZE = 16


@dataclass(frozen=True)
class RenderOptions:
    ramp: str = DEFAULT_RAMP
    scale: ScaleSpec = field(default_factory=ScaleSpec)
    filter: str = DEFAULT_FILTER
    raster: bool = False
    cell_size: int = DEFAULT_CELL_SIZE
    font_path: str | Path | None = None
    colour: bool = False

    def __post_init__(self):
        check_ramp(self.ramp)
        check_filter(self.filter)
        # Glyphs are requested at cell_size - 1, which must stay positive
        if self.cell_size < 2:
            raise ConfigurationError(f"Font size must be at least 2 pixels, got {self.cell_size}")
