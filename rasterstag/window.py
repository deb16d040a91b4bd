"""
Extraction of rectangular pixel neighborhoods.
"""

from __future__ import annotations

import numpy as np

from .boundary import BoundaryPolicy, sample_grid
from .image import Image


def sample_window(
    image: Image,
    left: int,
    top: int,
    width: int,
    height: int,
    policy: BoundaryPolicy | str = BoundaryPolicy.STRETCH,
) -> np.ndarray:
    """Sample a rectangular window of single channel values.

    Only the low byte of each packed pixel (the blue channel) is read, so
    images should be converted to grayscale first if luminance is wanted.
    Cells outside of the image are resolved with the boundary policy.

    Args:
        image: The source image
        left: X coordinate of the window's top left cell
        top: Y coordinate of the window's top left cell
        width: Window width in cells
        height: Window height in cells
        policy: Boundary policy for cells outside of the image

    Returns:
        Flat uint8 array of length width*height in row-major order
    """
    if width < 0 or height < 0:
        raise ValueError(f"Invalid window size {width}x{height}")
    xs = np.arange(left, left + width)
    ys = np.arange(top, top + height)
    return sample_grid(image.blue_plane(), xs, ys, policy).reshape(-1)


__all__ = ["sample_window"]
