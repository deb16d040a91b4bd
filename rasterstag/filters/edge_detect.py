"""Directional gradient (edge) detection.

Each gradient filter converts the image to grayscale, convolves it with a
3x3 Sobel kernel while stretching the border pixels, and stores the
absolute, truncated response as opaque gray. Edge detection sums both
directions with saturating addition instead of the gradient magnitude.

Usage:
    from rasterstag.filters.edge_detect import edge_detect, gradient_vertical

    edges = edge_detect(image)
    vertical = gradient_vertical(image)
"""
import numpy as np

from rasterstag.boundary import BoundaryPolicy
from rasterstag.convolution import SOBEL_HORIZONTAL, SOBEL_VERTICAL, convolve
from rasterstag.image import Image

from .compose import compose
from .grayscale import grayscale, opaque_gray


def gradient(
    image: Image,
    kernel,
    policy: BoundaryPolicy | str = BoundaryPolicy.STRETCH,
) -> Image:
    """Compute the absolute gradient response for an arbitrary kernel.

    Args:
        image: RGBA image
        kernel: Odd sized kernel, see :func:`rasterstag.convolution.make_kernel`
        policy: Boundary policy for samples outside of the image

    Returns:
        Opaque gray image with the absolute response clamped to 0..255
    """
    response = convolve(grayscale(image), kernel, policy)
    values = np.clip(np.trunc(np.abs(response)), 0, 255).astype(np.uint8)
    return opaque_gray(values)


def gradient_vertical(image: Image) -> Image:
    """Detect vertical edges (intensity changes along x)."""
    return gradient(image, SOBEL_VERTICAL)


def gradient_horizontal(image: Image) -> Image:
    """Detect horizontal edges (intensity changes along y)."""
    return gradient(image, SOBEL_HORIZONTAL)


def edge_detect(image: Image) -> Image:
    """Detect edges in both directions.

    Returns:
        Saturating sum of the horizontal and the vertical gradient
    """
    return compose(gradient_horizontal(image), gradient_vertical(image))


__all__ = ['gradient', 'gradient_vertical', 'gradient_horizontal', 'edge_detect']
