"""Grayscale conversion.

Converts RGBA images to gray using the ITU-R BT.601 luma coefficients:
Y = 0.299*R + 0.587*G + 0.114*B

The weighted sum is truncated towards zero. It is computed in integer
arithmetic (per mille weights) so gray input maps exactly onto itself.

Usage:
    from rasterstag.filters.grayscale import grayscale

    gray = grayscale(image)
"""
import numpy as np

from rasterstag.image import Image

LUMA_WEIGHTS = (299, 587, 114)
"Per mille weights of red, green and blue"


def luminance(image: Image) -> np.ndarray:
    """Compute the truncated luma of every pixel.

    Args:
        image: RGBA image

    Returns:
        uint8 array (H, W)
    """
    pixels = image.pixels.astype(np.uint32)
    weighted = (LUMA_WEIGHTS[0] * pixels[:, :, 0] +
                LUMA_WEIGHTS[1] * pixels[:, :, 1] +
                LUMA_WEIGHTS[2] * pixels[:, :, 2])
    return (weighted // 1000).astype(np.uint8)


def grayscale(image: Image) -> Image:
    """Convert an image to grayscale.

    Args:
        image: RGBA image

    Returns:
        New image with R=G=B=luma and the source alpha
    """
    gray = luminance(image)
    return Image(np.stack([gray, gray, gray, image.pixels[:, :, 3]], axis=2))


def opaque_gray(values: np.ndarray) -> Image:
    """Build a fully opaque gray image from single channel values.

    Args:
        values: uint8 array (H, W)

    Returns:
        Image with R=G=B=values and alpha 255
    """
    alpha = np.full(values.shape, 255, dtype=np.uint8)
    return Image(np.stack([values, values, values, alpha], axis=2))


__all__ = ['grayscale', 'luminance', 'opaque_gray', 'LUMA_WEIGHTS']
