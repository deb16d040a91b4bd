"""
Pytest fixtures for RasterStag tests
"""

import numpy as np
import pytest

from rasterstag import Image


@pytest.fixture
def make_gray():
    """
    Returns a factory creating an opaque gray image from a 2D list of values.
    """

    def factory(values, alpha=255) -> Image:
        plane = np.asarray(values, dtype=np.uint8)
        alpha_plane = np.full(plane.shape, alpha, dtype=np.uint8)
        return Image(np.stack([plane, plane, plane, alpha_plane], axis=2))

    return factory


@pytest.fixture
def step_image(make_gray) -> Image:
    """
    A 4x3 image, black in the left half and white in the right half.
    """
    return make_gray([[0, 0, 255, 255]] * 3)


@pytest.fixture
def counting_image(make_gray) -> Image:
    """
    A 3x3 image with the values 0..8 in row-major order.
    """
    return make_gray(np.arange(9).reshape(3, 3))
