from dataclasses import dataclass

import numpy as np

from ttview.charsets import (
    BRAILLE_BASE,
    BRAILLE_CELL_HEIGHT,
    BRAILLE_CELL_WIDTH,
    BRAILLE_OFFSETS,
    UPPER_HALF_BLOCK,
)
from ttview.errors import EmptyGradientRamp

RESET = "\033[0m"

# Floyd-Steinberg shares of the residual for the unvisited neighbours
_RIGHT = 7 / 16
_BELOW_LEFT = 3 / 16
_BELOW = 5 / 16
_BELOW_RIGHT = 1 / 16


class Style:
    """Display style. Exactly one of the variants below governs a render."""


@dataclass(frozen=True)
class Color(Style):
    """24 bit color with the upper half block character."""


@dataclass(frozen=True)
class Greyscale(Style):
    """Half blocks coloured by the brightness of each pixel."""


@dataclass(frozen=True)
class Gradient(Style):
    """Monochrome glyphs picked by brightness; ``ramp`` runs darkest to lightest."""

    ramp: str

    def __post_init__(self):
        if len(self.ramp) == 0:
            raise EmptyGradientRamp("Gradient ramp must contain at least one glyph")


@dataclass(frozen=True)
class Braille(Style):
    """Braille dots for every pixel darker than half brightness."""


@dataclass(frozen=True)
class DitheredBraille(Style):
    """Braille after Floyd-Steinberg dithering."""


@dataclass(frozen=True)
class Dithered(Style):
    """Greyscale half blocks after Floyd-Steinberg dithering."""


def brightness(pixels: np.ndarray) -> np.ndarray:
    """Weighted luma of the last (RGB) axis: 0.299 R + 0.587 G + 0.114 B."""
    pixels = np.asarray(pixels)
    return (299 * pixels[..., 0] + 587 * pixels[..., 1] + 114 * pixels[..., 2]) / 1000


def fg(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"


def bg(r: int, g: int, b: int) -> str:
    return f"\033[48;2;{r};{g};{b}m"


def _to_bytes(image: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(image * 255.0), 0, 255).astype(np.uint8)


def _grey(image: np.ndarray) -> np.ndarray:
    return np.repeat(brightness(image)[..., None], 3, axis=-1)


def greyscale(image: np.ndarray) -> None:
    """Replace every pixel with its brightness on all channels, in place."""
    image[...] = brightness(image)[..., None]


def _diffuse(plane: np.ndarray) -> np.ndarray:
    """Floyd-Steinberg over one 2-D plane, as Python floats."""
    height, width = plane.shape
    rows = plane.astype(np.float64).tolist()
    for y in range(height):
        row = rows[y]
        below = rows[y + 1] if y + 1 < height else None
        for x in range(width):
            old = row[x]
            new = 0.0 if old < 0.5 else 1.0
            row[x] = new
            error = old - new
            if x + 1 < width:
                row[x + 1] += error * _RIGHT
            if below is not None:
                if x > 0:
                    below[x - 1] += error * _BELOW_LEFT
                below[x] += error * _BELOW
                if x + 1 < width:
                    below[x + 1] += error * _BELOW_RIGHT
    return np.array(rows, dtype=np.float64).reshape(height, width)


def floyd_steinberg(image: np.ndarray) -> None:
    """Quantize each channel to 0 or 1 in place, diffusing the residual.

    Pixels are visited in raster order. Residual that would land outside the
    image is dropped. A grey image is dithered once and copied to every channel.
    """
    channels = image.shape[-1]
    if all(np.array_equal(image[..., 0], image[..., c]) for c in range(1, channels)):
        image[...] = _diffuse(image[..., 0])[..., None]
        return
    for c in range(channels):
        image[..., c] = _diffuse(image[..., c])


def _half_blocks(image: np.ndarray) -> str:
    """Two image rows per line: top pixel in the foreground, bottom in the background."""
    colours = _to_bytes(image)
    height = colours.shape[0]
    out = []
    for y in range(0, height, 2):
        top = colours[y].tolist()
        bottom = colours[y + 1].tolist() if y + 1 < height else None
        for x, upper in enumerate(top):
            out.append(fg(*upper))
            # Odd final row: the lower half keeps the terminal background
            if bottom is not None:
                out.append(bg(*bottom[x]))
            out.append(UPPER_HALF_BLOCK + RESET)
        out.append("\n")
    return "".join(out)


def _gradient(image: np.ndarray, ramp: str) -> str:
    values = brightness(image)
    height = values.shape[0]
    last = len(ramp) - 1
    out = []
    for y in range(0, height, 2):
        row = values[y]
        if y + 1 < height:
            row = (row + values[y + 1]) / 2
        indices = np.clip(np.floor(last * row).astype(np.int64), 0, last)
        out.extend(ramp[i] + RESET for i in indices.tolist())
        out.append("\n")
    return "".join(out)


def braille_codes(image: np.ndarray) -> np.ndarray:
    """Dot bytes for every 2x4 block; blocks on the edge leave missing dots unset."""
    dark = brightness(image) < 0.5
    height, width = dark.shape
    rows = -(-height // BRAILLE_CELL_HEIGHT)
    cols = -(-width // BRAILLE_CELL_WIDTH)

    padded = np.zeros((rows * BRAILLE_CELL_HEIGHT, cols * BRAILLE_CELL_WIDTH), dtype=bool)
    padded[:height, :width] = dark

    codes = np.zeros((rows, cols), dtype=np.uint8)
    for bit, (dx, dy) in enumerate(BRAILLE_OFFSETS):
        dots = padded[dy::BRAILLE_CELL_HEIGHT, dx::BRAILLE_CELL_WIDTH]
        codes |= dots.astype(np.uint8) << bit
    return codes


def _braille(image: np.ndarray) -> str:
    return "".join("".join(chr(BRAILLE_BASE + c) for c in row) + "\n" for row in braille_codes(image).tolist())


def render(image: np.ndarray, style: Style) -> str:
    """Convert a (height, width, 3) float image in [0, 1] to terminal text.

    Dithered and DitheredBraille desaturate and quantize ``image`` in place
    before rendering. Pass a copy if the original pixels are needed afterwards.
    """
    if isinstance(style, Color):
        return _half_blocks(image)
    if isinstance(style, Greyscale):
        return _half_blocks(_grey(image))
    if isinstance(style, Gradient):
        return _gradient(image, style.ramp)
    if isinstance(style, Braille):
        return _braille(image)
    if isinstance(style, DitheredBraille):
        greyscale(image)
        floyd_steinberg(image)
        return _braille(image)
    if isinstance(style, Dithered):
        greyscale(image)
        floyd_steinberg(image)
        return _half_blocks(_grey(image))
    raise TypeError(f"Unsupported style: {style!r}")
