"""Max-range contrast stretch.

Linearly maps the observed intensity range [min, max] of an image onto
0..255. Only the low byte of each pixel (the blue channel) is read, so the
filter is meant for grayscale input such as edge detection results.

Usage:
    from rasterstag.filters.levels import max_range_stretch

    stretched = max_range_stretch(edges)
"""
import logging

import numpy as np

from rasterstag.errors import DegenerateRangeError, EmptyImageError
from rasterstag.image import Image

from .grayscale import opaque_gray

logger = logging.getLogger(__name__)


def intensity_range(image: Image) -> tuple[int, int]:
    """Find the minimum and maximum low byte value.

    Args:
        image: Non-empty image

    Returns:
        Tuple (min, max)
    """
    plane = image.blue_plane()
    if plane.size == 0:
        raise EmptyImageError("An empty image has no intensity range")
    return int(plane.min()), int(plane.max())


def max_range_stretch(image: Image, strict: bool = True) -> Image:
    """Stretch the intensity range of an image to 0..255.

    Every value v is mapped to (v - min) * 255 / (max - min), truncated.

    Args:
        image: Grayscale image
        strict: Raise a DegenerateRangeError for images with a single
            intensity level. If False such images are returned unchanged.

    Returns:
        Opaque gray image
    """
    if image.width == 0 or image.height == 0:
        return image.copy()

    low, high = intensity_range(image)
    if low == high:
        if strict:
            raise DegenerateRangeError(low)
        logger.debug(f"Single intensity level {low}, returning image unchanged")
        return image.copy()

    plane = image.blue_plane().astype(np.int32)
    values = (plane - low) * 255 // (high - low)
    return opaque_gray(values.astype(np.uint8))


__all__ = ['max_range_stretch', 'intensity_range']
