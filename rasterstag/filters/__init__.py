# RasterStag Filters
"""
Image filters for RasterStag.

Functional API (Image in, new Image out):
    grayscale, gradient, gradient_vertical, gradient_horizontal,
    edge_detect, max_range_stretch, compose

Filter objects for pipelines:
    Grayscale, Gradient, EdgeDetect, MaxRange, Add, FilterPipeline

Usage:
    from rasterstag.filters import FilterPipeline, edge_detect

    edges = edge_detect(image)
    pipeline = FilterPipeline.parse('edges|maxrange')
    result = pipeline.apply(image)
"""

from .base import (
    Filter,
    FilterContext,
    FILTER_REGISTRY,
    FILTER_ALIASES,
    register_filter,
    register_alias,
)
from .grayscale import grayscale, luminance
from .compose import compose
from .levels import max_range_stretch, intensity_range
from .edge_detect import gradient, gradient_vertical, gradient_horizontal, edge_detect
from .color import Grayscale, MaxRange
from .edge import Gradient, EdgeDetect, NAMED_KERNELS
from .graph import CombinerFilter, Add
from .pipeline import FilterPipeline

__all__ = [
    # Base
    'Filter',
    'FilterContext',
    'FILTER_REGISTRY',
    'FILTER_ALIASES',
    'register_filter',
    'register_alias',
    # Functions
    'grayscale',
    'luminance',
    'compose',
    'max_range_stretch',
    'intensity_range',
    'gradient',
    'gradient_vertical',
    'gradient_horizontal',
    'edge_detect',
    # Filters
    'Grayscale',
    'MaxRange',
    'Gradient',
    'EdgeDetect',
    'NAMED_KERNELS',
    'CombinerFilter',
    'Add',
    'FilterPipeline',
]
