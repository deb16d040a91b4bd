# RasterStag Filters - Intensity Adjustments
"""
Intensity filters: Grayscale and MaxRange.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from .base import Filter, FilterContext, register_filter, register_alias
from .grayscale import grayscale
from .levels import intensity_range, max_range_stretch

if TYPE_CHECKING:
    from rasterstag.image import Image


@register_filter
@dataclass
class Grayscale(Filter):
    """Convert to grayscale.

    Uses the luma weights 0.299, 0.587 and 0.114 and keeps the alpha channel.
    """

    def apply(self, image: Image, context: FilterContext | None = None) -> Image:
        return grayscale(image)


@register_filter
@dataclass
class MaxRange(Filter):
    """Stretch the intensity range to 0..255.

    The observed (min, max) range is stored in the context under
    'intensity_range'.

    Parameters:
        strict: Fail on images with a single intensity level (default true).
            If false such images pass unchanged.

    Example:
        'maxrange' or 'maxrange(false)'
    """

    strict: bool = True

    _primary_param: ClassVar[str] = 'strict'

    def apply(self, image: Image, context: FilterContext | None = None) -> Image:
        if context is not None and image.width and image.height:
            context['intensity_range'] = intensity_range(image)
        return max_range_stretch(image, strict=self.strict)


register_alias('gray', Grayscale)
register_alias('stretch', MaxRange)
