class AsciiRasterError(Exception):
    """Base class for every failure raised by the conversion pipeline."""


class ConfigurationError(AsciiRasterError, ValueError):
    pass


class ScaleSpecError(ConfigurationError):
    pass


class EmptyRampError(ConfigurationError):
    def __init__(self):
        super().__init__("Character ramp must contain at least one character")


class GlyphError(AsciiRasterError):
    """A glyph could not be placed in its cell. Carries the offending character."""

    def __init__(self, char: str, message: str):
        super().__init__(f"{message} {char!r}")
        self.char = char


class GlyphOverflowError(GlyphError):
    pass


class GlyphBufferError(GlyphError):
    pass


class ResourceNotFoundError(AsciiRasterError, FileNotFoundError):
    pass
