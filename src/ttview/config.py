from dataclasses import dataclass, field

from ttview.resizing import Filter
from ttview.styling import Braille, Color, Dithered, DitheredBraille, Gradient, Greyscale, Style

DEFAULT_WIDTH = 80

FILTERS = {f.value: f for f in Filter}

STYLES: dict[str, Style] = {
    "color": Color(),
    "greyscale": Greyscale(),
    "braille": Braille(),
    "dithered-braille": DitheredBraille(),
    "dithered": Dithered(),
}


def parse_filter(name: str | None) -> Filter:
    if name is None:
        return Filter.GAUSSIAN
    try:
        return FILTERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown filter: {name!r}") from None


def parse_style(name: str | None = None, gradient: str | None = None) -> Style:
    """Map a style name, or a gradient ramp, to a display style.

    A gradient ramp takes precedence; an empty ramp raises EmptyGradientRamp.
    """
    if gradient is not None:
        return Gradient(gradient)
    if name is None:
        return Color()
    try:
        return STYLES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown style: {name!r}") from None


@dataclass
class RenderOptions:
    width: int | None = None
    height: int | None = None
    filter: Filter = Filter.GAUSSIAN
    style: Style = field(default_factory=Color)

    def dimensions(self) -> tuple[int | None, int | None]:
        """Requested (width, height), falling back to DEFAULT_WIDTH when neither is set."""
        if self.width is None and self.height is None:
            return (DEFAULT_WIDTH, None)
        return (self.width, self.height)
