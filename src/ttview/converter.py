import logging
from pathlib import Path

import numpy as np
from PIL import Image

from ttview.config import RenderOptions
from ttview.resizing import Filter, resize
from ttview.styling import Color, Style, render

log = logging.getLogger(__name__)


def load_image(image: Image.Image | str | Path) -> np.ndarray:
    """Decode an image into a writable (height, width, 3) float32 array in [0, 1]."""
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    image = image.convert("RGB")
    log.debug("Loaded %dx%d image", image.width, image.height)
    return np.asarray(image, dtype=np.float32) / 255.0


def image_to_text(
    image: Image.Image | str | Path,
    width: int | None = None,
    height: int | None = None,
    filter: Filter = Filter.GAUSSIAN,
    style: Style | None = None,
) -> str:
    options = RenderOptions(width=width, height=height, filter=filter, style=style if style is not None else Color())
    return convert(image, options)


def convert(image: Image.Image | str | Path, options: RenderOptions) -> str:
    pixels = load_image(image)
    pixels = resize(pixels, options.dimensions(), options.filter)
    log.debug("Rendering %dx%d pixels as %s", pixels.shape[1], pixels.shape[0], type(options.style).__name__)
    return render(pixels, options.style)
