"""
RasterStag - Pixel and neighborhood based raster image filters for Python
"""

from .color import Color, Colors
from .image import Image
from .boundary import BoundaryPolicy, resolve_sample, sample_grid
from .window import sample_window
from .convolution import (
    make_kernel,
    weighted_average,
    convolve,
    SOBEL_VERTICAL,
    SOBEL_HORIZONTAL,
)
from .errors import (
    RasterStagError,
    ChannelRangeError,
    SizeMismatchError,
    KernelShapeError,
    DegenerateKernelError,
    DegenerateRangeError,
    EmptyImageError,
    ImageLoadError,
    ImageWriteError,
)
from .filters import (
    grayscale,
    gradient,
    gradient_vertical,
    gradient_horizontal,
    edge_detect,
    max_range_stretch,
    compose,
)

__all__ = [
    # Core types
    "Color",
    "Colors",
    "Image",
    # Sampling
    "BoundaryPolicy",
    "resolve_sample",
    "sample_grid",
    "sample_window",
    # Convolution
    "make_kernel",
    "weighted_average",
    "convolve",
    "SOBEL_VERTICAL",
    "SOBEL_HORIZONTAL",
    # Filters
    "grayscale",
    "gradient",
    "gradient_vertical",
    "gradient_horizontal",
    "edge_detect",
    "max_range_stretch",
    "compose",
    # Errors
    "RasterStagError",
    "ChannelRangeError",
    "SizeMismatchError",
    "KernelShapeError",
    "DegenerateKernelError",
    "DegenerateRangeError",
    "EmptyImageError",
    "ImageLoadError",
    "ImageWriteError",
]

__version__ = "0.1.0"
