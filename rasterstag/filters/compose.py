"""Saturating image composition.

Adds two images channel by channel, clamping at 255. The result covers the
extent of both inputs. Where only one image has pixels, the other one
contributes black. The output is always fully opaque.

Usage:
    from rasterstag.filters.compose import compose

    result = compose(first, second)
"""
import numpy as np

from rasterstag.image import Image


def compose(first: Image, second: Image) -> Image:
    """Add two images with per channel saturation.

    Args:
        first: First summand
        second: Second summand, may differ in size

    Returns:
        Image of size max(widths) x max(heights) with alpha 255
    """
    width = max(first.width, second.width)
    height = max(first.height, second.height)

    total = np.zeros((height, width, 3), dtype=np.uint16)
    for image in (first, second):
        total[:image.height, :image.width] += image.pixels[:, :, :3]

    result = np.empty((height, width, 4), dtype=np.uint8)
    result[:, :, :3] = np.minimum(total, 255)
    result[:, :, 3] = 255
    return Image(result)


__all__ = ['compose']
