# Processing package initialization
from .adjustments import AdjustmentState
from .filters import (
    FilterPreset, FilterBaseline, TintColor, NONE_FILTER, FILTERS, FILTER_CATEGORIES,
    parse_tint_color, resolve_baseline, get_filter, get_filters_by_category,
    search_filters, get_popular_filters,
)
from .color_matrix import IDENTITY_MATRIX, compose, multiply_color_matrices, as_affine, apply_to_color
from .renderer import OutputOptions, RenderResult, RenderSurface, render
from .batch import BatchRenderOutcome, render_batch, submit_render
from .user_presets import UserPreset, UserPresetStore, EditClipboard, apply_preset
