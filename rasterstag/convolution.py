"""
Weighted convolution of single channel image data.

A kernel is a 2D array of weights with an odd width and height. The filter
response of a pixel is the weighted sum of its neighborhood divided by the
sum of the absolute weights, so the response of an integer kernel on 8-bit
data always stays within -255..255.

Usage:
    from rasterstag.convolution import SOBEL_VERTICAL, convolve

    response = convolve(gray_image, SOBEL_VERTICAL)
"""

from __future__ import annotations

import math

import numpy as np

from .boundary import BoundaryPolicy, sample_grid
from .errors import DegenerateKernelError, KernelShapeError, SizeMismatchError
from .image import Image


# ============================================================================
# Kernels
# ============================================================================

def make_kernel(weights, width: int | None = None, height: int | None = None) -> np.ndarray:
    """Create an immutable convolution kernel.

    Args:
        weights: Nested rows of weights or a flat row-major sequence
        width: Kernel width for flat weights (square kernel if omitted)
        height: Kernel height for flat weights

    Returns:
        Read-only int64 (or float64 for non-integer weights) array of shape
        (height, width)
    """
    kernel = np.array(weights)
    if kernel.dtype == np.bool_ or not np.issubdtype(kernel.dtype, np.number):
        raise TypeError(f"Kernel weights must be numeric, got {kernel.dtype}")
    if kernel.ndim == 1:
        count = kernel.size
        if width is None and height is None:
            side = math.isqrt(count)
            width = height = side
        elif width is None:
            width = count // height if height else 0
        elif height is None:
            height = count // width if width else 0
        if width * height != count:
            raise KernelShapeError(
                f"{count} weights can not form a {width}x{height} kernel"
            )
        kernel = kernel.reshape(height, width)
    if kernel.ndim != 2:
        raise KernelShapeError(f"Expected 2D kernel, got shape {kernel.shape}")
    kernel_height, kernel_width = kernel.shape
    if kernel_width % 2 == 0 or kernel_height % 2 == 0:
        raise KernelShapeError(
            f"Kernel width and height must be odd, got {kernel_width}x{kernel_height}"
        )
    if np.issubdtype(kernel.dtype, np.integer):
        kernel = kernel.astype(np.int64)
    else:
        kernel = kernel.astype(np.float64)
    if not np.any(kernel):
        raise DegenerateKernelError("The absolute kernel weights sum up to zero")
    kernel.flags.writeable = False
    return kernel


SOBEL_VERTICAL = make_kernel([
    -1, 0, 1,
    -2, 0, 2,
    -1, 0, 1,
])
"Responds to vertical edges, i.e. intensity changes along x"

SOBEL_HORIZONTAL = make_kernel([
    1, 2, 1,
    0, 0, 0,
    -1, -2, -1,
])
"Responds to horizontal edges, i.e. intensity changes along y"


# ============================================================================
# Weighted average
# ============================================================================

def _accumulator_dtype(*arrays: np.ndarray):
    if all(np.issubdtype(a.dtype, np.integer) for a in arrays):
        return np.int64
    return np.float64


def weighted_average(samples, weights) -> float:
    """Compute the weighted average of a sampled window.

    Returns ``sum(weights[i] * samples[i]) / sum(abs(weights[i]))``.
    Integer inputs are summed exactly and divided once.

    Args:
        samples: Sample values
        weights: One weight per sample

    Returns:
        The weighted average
    """
    samples = np.asarray(samples).reshape(-1)
    weights = np.asarray(weights).reshape(-1)
    if len(samples) != len(weights):
        raise SizeMismatchError(
            f"pixels and weights array size mismatch ({len(samples)} vs {len(weights)})"
        )
    dtype = _accumulator_dtype(samples, weights)
    weights = weights.astype(dtype)
    divisor = np.abs(weights).sum()
    if divisor == 0:
        raise DegenerateKernelError("The absolute kernel weights sum up to zero")
    total = (samples.astype(dtype) * weights).sum()
    return total.item() / divisor.item()


# ============================================================================
# Convolution
# ============================================================================

def convolve(
    image: Image,
    kernel,
    policy: BoundaryPolicy | str = BoundaryPolicy.STRETCH,
) -> np.ndarray:
    """Convolve the low byte channel of an image with a kernel.

    For every pixel (x, y) the kernel sized window anchored at
    (x - width // 2, y - height // 2) is sampled with the boundary policy and
    reduced via :func:`weighted_average`.

    Args:
        image: The source image, usually a grayscale one
        kernel: The kernel, see :func:`make_kernel`
        policy: Boundary policy for samples outside of the image

    Returns:
        float64 array of shape (height, width) with the filter responses
    """
    kernel = make_kernel(kernel)
    plane = image.blue_plane()
    height, width = plane.shape
    if width == 0 or height == 0:
        return np.zeros((height, width), dtype=np.float64)

    kernel_height, kernel_width = kernel.shape
    radius_x, radius_y = kernel_width // 2, kernel_height // 2
    padded = sample_grid(
        plane,
        np.arange(-radius_x, width + radius_x),
        np.arange(-radius_y, height + radius_y),
        policy,
    )

    dtype = _accumulator_dtype(kernel)
    padded = padded.astype(dtype)
    total = np.zeros((height, width), dtype=dtype)
    for ky in range(kernel_height):
        for kx in range(kernel_width):
            weight = kernel[ky, kx]
            if weight:
                total += weight * padded[ky:ky + height, kx:kx + width]
    divisor = np.abs(kernel).sum().item()
    return total / divisor


__all__ = [
    "make_kernel",
    "weighted_average",
    "convolve",
    "SOBEL_VERTICAL",
    "SOBEL_HORIZONTAL",
]
