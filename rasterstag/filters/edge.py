# RasterStag Filters - Edge Detection
"""
Edge detection filters based on weighted convolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from .base import Filter, FilterContext, register_filter, register_alias
from .edge_detect import edge_detect, gradient
from rasterstag.boundary import BoundaryPolicy
from rasterstag.convolution import SOBEL_HORIZONTAL, SOBEL_VERTICAL, make_kernel

if TYPE_CHECKING:
    from rasterstag.image import Image

NAMED_KERNELS: dict[str, np.ndarray] = {
    'vertical': SOBEL_VERTICAL,
    'horizontal': SOBEL_HORIZONTAL,
}
"Kernels which can be referred to by name"


@register_filter
@dataclass
class Gradient(Filter):
    """Directional gradient detection.

    Converts to grayscale, convolves with the kernel and keeps the absolute
    response as opaque gray.

    Parameters:
        kernel: 'vertical', 'horizontal' or a flat list of odd-square weights
        policy: Boundary policy for the image border
            (wrap, stretch, black, white or gray)

    Example:
        'gradient horizontal' or 'gradient kernel=vertical policy=wrap'
    """

    kernel: str | list[int] = 'vertical'
    policy: BoundaryPolicy = BoundaryPolicy.STRETCH

    _primary_param: ClassVar[str] = 'kernel'

    def __post_init__(self):
        """Convert string values to enums and validate the kernel."""
        self.policy = BoundaryPolicy.parse(self.policy)
        if isinstance(self.kernel, np.ndarray):
            self.kernel = self.kernel.tolist()
        elif isinstance(self.kernel, str):
            self.kernel = self.kernel.strip().lower()
            if ',' in self.kernel:
                # flat weight list as given on the command line: '1,0,-1,...'
                self.kernel = [int(w) for w in self.kernel.split(',')]
        self.get_kernel()

    def get_kernel(self) -> np.ndarray:
        """Returns the kernel as immutable array."""
        if isinstance(self.kernel, str):
            if self.kernel not in NAMED_KERNELS:
                raise ValueError(
                    f"Unknown kernel '{self.kernel}', valid are {sorted(NAMED_KERNELS)}"
                )
            return NAMED_KERNELS[self.kernel]
        return make_kernel(self.kernel)

    def apply(self, image: Image, context: FilterContext | None = None) -> Image:
        return gradient(image, self.get_kernel(), self.policy)


@register_filter
@dataclass
class EdgeDetect(Filter):
    """Edge detection in both directions.

    Sums the horizontal and the vertical gradient with saturation.

    Example:
        'edges'
    """

    def apply(self, image: Image, context: FilterContext | None = None) -> Image:
        return edge_detect(image)


register_alias('vgrad', Gradient, kernel='vertical')
register_alias('hgrad', Gradient, kernel='horizontal')
register_alias('edges', EdgeDetect)
