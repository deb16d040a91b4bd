# RasterStag Filters - Combiners
"""
Filters which combine multiple named input images into one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from .base import Filter, FilterContext, register_filter, register_alias
from .compose import compose

if TYPE_CHECKING:
    from rasterstag.image import Image


@dataclass
class CombinerFilter(Filter):
    """Base class for filters that combine multiple inputs."""

    inputs: list[str] = field(default_factory=list)  # Input names

    def apply_multi(
        self,
        images: dict[str, Image],
        contexts: dict[str, FilterContext] | None = None
    ) -> Image:
        """Apply filter to multiple named inputs.

        :param images: Dict mapping input names to their images
        :param contexts: Dict mapping input names to their contexts (optional)
        :returns: Combined image
        """
        raise NotImplementedError

    def apply(self, image: Image, context: FilterContext | None = None) -> Image:
        """Combiners have no single input form, use :meth:`apply_multi`."""
        raise ValueError(f"{self.type} requires named inputs, use apply_multi")


@register_filter
@dataclass
class Add(CombinerFilter):
    """Saturating addition of two images.

    The result covers both inputs, missing pixels count as black and the
    alpha channel is always opaque.
    """

    _input_ports: ClassVar[list[dict]] = [
        {'name': 'first', 'description': 'First summand'},
        {'name': 'second', 'description': 'Second summand'},
    ]

    def apply_multi(
        self,
        images: dict[str, Image],
        contexts: dict[str, FilterContext] | None = None
    ) -> Image:
        names = self.inputs or [port['name'] for port in self._input_ports]
        if len(names) != 2:
            raise ValueError(f"Add requires exactly 2 inputs, got {len(names)}")
        missing = [name for name in names if name not in images]
        if missing:
            raise KeyError(f"Missing inputs: {', '.join(missing)}")
        return compose(images[names[0]], images[names[1]])


register_alias('compose', Add)
