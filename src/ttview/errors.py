class TtviewError(Exception):
    """Base class for errors raised while resizing or rendering an image."""


class InvalidDimensions(TtviewError, ValueError):
    """Requested or computed output dimensions are unusable."""


class EmptyGradientRamp(TtviewError, ValueError):
    """A gradient style was built without any glyphs."""
