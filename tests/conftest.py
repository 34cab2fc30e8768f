import numpy as np
import pytest


@pytest.fixture
def solid():
    """Factory for (height, width, 3) float images filled with one colour."""

    def make(height, width, colour=(0.0, 0.0, 0.0)):
        if np.isscalar(colour):
            colour = (colour,) * 3
        image = np.empty((height, width, 3), dtype=np.float32)
        image[...] = colour
        return image

    return make
