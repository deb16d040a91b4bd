# RasterStag Filters - Pipeline
"""
FilterPipeline for chaining multiple filters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
import logging
import re

from .base import Filter, FilterContext, register_filter
from .graph import CombinerFilter

if TYPE_CHECKING:
    from rasterstag.image import Image

logger = logging.getLogger(__name__)


def _stage(stage: Filter | dict[str, Any]) -> Filter:
    """Validate a pipeline stage, deserializing it if given as dictionary."""
    if isinstance(stage, dict):
        stage = Filter.from_dict(stage)
    if isinstance(stage, CombinerFilter):
        raise ValueError(
            f"{stage.type} combines several named inputs and can not be a pipeline stage"
        )
    return stage


@register_filter
@dataclass
class FilterPipeline(Filter):
    """Chain of filters applied in sequence.

    Every stage receives the previous stage's output. The input image is
    never modified. Stages may be given as filters or as dictionaries.
    """
    filters: list[Filter] = field(default_factory=list)

    def __post_init__(self):
        self.filters = [_stage(f) for f in self.filters]

    def apply(self, image: 'Image', context: FilterContext | None = None) -> 'Image':
        """Apply all filters in sequence."""
        result = image
        for index, f in enumerate(self.filters):
            logger.debug("Stage %d/%d: %s on %s", index + 1, len(self.filters), f, result)
            result = f.apply(result, context)
        if result is image:
            # an empty pipeline still hands out a new buffer
            result = image.copy()
        return result

    def append(self, filter: Filter) -> 'FilterPipeline':
        """Add filter to pipeline (chainable)."""
        self.filters.append(_stage(filter))
        return self

    def extend(self, filters: list[Filter]) -> 'FilterPipeline':
        """Add multiple filters to pipeline (chainable)."""
        self.filters.extend(_stage(f) for f in filters)
        return self

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self):
        return iter(self.filters)

    def __getitem__(self, index: int) -> Filter:
        return self.filters[index]

    def to_dict(self) -> dict[str, Any]:
        """Serialize pipeline to dictionary."""
        return {
            'type': 'FilterPipeline',
            'filters': [f.to_dict() for f in self.filters]
        }

    @classmethod
    def parse(cls, text: str) -> 'FilterPipeline':
        """Parse filter string into pipeline.

        Examples:
            'edges|maxrange'
            'gray;gradient horizontal wrap'
        """
        parts = [part.strip() for part in re.split(r'[|;]', text or '')]
        return cls(filters=[Filter.parse(part) for part in parts if part])

    def to_string(self) -> str:
        """Convert pipeline to compact string format."""
        return '|'.join(f.to_string() for f in self.filters)
