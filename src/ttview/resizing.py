import logging
import math
from enum import Enum

import numpy as np
from PIL import Image

from ttview.errors import InvalidDimensions

log = logging.getLogger(__name__)


class Filter(Enum):
    """Interpolation kernel used when resampling an image."""

    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULL_ROM = "catmull-rom"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"


# Pillow's BICUBIC uses a = -0.5, which is Catmull-Rom
_RESAMPLE = {
    Filter.NEAREST: Image.Resampling.NEAREST,
    Filter.TRIANGLE: Image.Resampling.BILINEAR,
    Filter.CATMULL_ROM: Image.Resampling.BICUBIC,
    Filter.LANCZOS3: Image.Resampling.LANCZOS,
}

# Pillow has no Gaussian filter: sigma 0.5, support of 3 source pixels
GAUSSIAN_SIGMA = 0.5
GAUSSIAN_SUPPORT = 3.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def target_dimensions(size: tuple[int, int], request: tuple[int | None, int | None]) -> tuple[int, int]:
    """Resolve a (width, height) request against a source (width, height).

    A single dimension keeps the source aspect ratio; both dimensions stretch
    the image to exactly that size.
    """
    src_width, src_height = size
    width, height = request
    if src_width < 1 or src_height < 1:
        raise InvalidDimensions(f"Cannot resize an empty {src_width}x{src_height} image")
    if width is None and height is None:
        raise InvalidDimensions("Neither width nor height was given")

    if height is None:
        height = _round_half_up(width * src_height / src_width)
    elif width is None:
        width = _round_half_up(height * src_width / src_height)

    if width < 1 or height < 1:
        raise InvalidDimensions(f"Output size {width}x{height} is smaller than 1x1")
    return width, height


def _gaussian_weights(in_size: int, out_size: int) -> tuple[np.ndarray, np.ndarray]:
    """Window start and normalised weights for each output sample along one axis.

    Returns ``starts`` of shape (out_size,) and ``weights`` of shape
    (out_size, taps). When shrinking, the kernel is widened by the scale ratio.
    """
    ratio = in_size / out_size
    scale = max(ratio, 1.0)
    radius = GAUSSIAN_SUPPORT * scale
    taps = min(int(math.ceil(radius)) * 2 + 1, in_size)

    centres = (np.arange(out_size) + 0.5) * ratio
    starts = np.clip(np.floor(centres - radius).astype(np.int64), 0, in_size - taps)
    positions = starts[:, None] + np.arange(taps)[None, :]
    distance = (positions + 0.5 - centres[:, None]) / scale

    weights = np.where(
        np.abs(distance) < GAUSSIAN_SUPPORT,
        np.exp(-(distance**2) / (2.0 * GAUSSIAN_SIGMA**2)),
        0.0,
    )
    totals = weights.sum(axis=1, keepdims=True)
    safe_totals = np.where(totals != 0, totals, 1.0)
    return starts, weights / safe_totals


def _gaussian_axis(pixels: np.ndarray, out_size: int, axis: int) -> np.ndarray:
    """Resample ``pixels`` along ``axis`` with the Gaussian kernel."""
    starts, weights = _gaussian_weights(pixels.shape[axis], out_size)
    moved = np.moveaxis(pixels, axis, 0)
    out = np.zeros((out_size,) + moved.shape[1:], dtype=np.float64)
    for tap in range(weights.shape[1]):
        gathered = moved[starts + tap]
        out += gathered * weights[:, tap].reshape((-1,) + (1,) * (moved.ndim - 1))
    return np.moveaxis(out, 0, axis)


def _resize_gaussian(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    out = _gaussian_axis(pixels, height, axis=0)
    return _gaussian_axis(out, width, axis=1)


def _resize_pillow(pixels: np.ndarray, width: int, height: int, resample: Image.Resampling) -> np.ndarray:
    """Resize each channel as a 32 bit float ("F") Pillow image."""
    channels = []
    for c in range(pixels.shape[2]):
        plane = Image.fromarray(np.ascontiguousarray(pixels[..., c], dtype=np.float32))
        channels.append(np.asarray(plane.resize((width, height), resample), dtype=np.float32))
    return np.stack(channels, axis=-1)


def resize(
    image: np.ndarray,
    dimensions: tuple[int | None, int | None],
    filter: Filter = Filter.GAUSSIAN,
) -> np.ndarray:
    """Resample a (height, width, 3) float image to the requested size.

    Returns a new float32 array with channels clamped to [0, 1]; the input is
    left untouched.
    """
    src_height, src_width = image.shape[:2]
    width, height = target_dimensions((src_width, src_height), dimensions)
    log.debug("Resizing %dx%d to %dx%d using %s", src_width, src_height, width, height, filter.value)

    pixels = np.asarray(image, dtype=np.float32)
    if filter is Filter.GAUSSIAN:
        out = _resize_gaussian(pixels, width, height)
    else:
        out = _resize_pillow(pixels, width, height, _RESAMPLE[filter])
    return np.ascontiguousarray(np.clip(out, 0.0, 1.0), dtype=np.float32)
