"""Color-adjustment engine: compose a 4x5 color matrix and render images with it."""

from .processing.adjustments import AdjustmentState
from .processing.filters import FilterPreset, FILTERS, NONE_FILTER, get_filter
from .processing.color_matrix import compose
from .processing.renderer import OutputOptions, RenderResult, render

__version__ = "0.1.0"

__all__ = [
    'AdjustmentState',
    'FilterPreset',
    'FILTERS',
    'NONE_FILTER',
    'get_filter',
    'compose',
    'OutputOptions',
    'RenderResult',
    'render',
]
