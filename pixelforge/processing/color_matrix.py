# Color matrix composition
"""
Builds the single 4x5 affine color matrix applied to every pixel.

Matrices are row-major arrays of 20 floats: rows are output R, G, B, A and
columns are input R, G, B, A plus a constant offset. Offsets are in the
normalized 0-1 channel range. Alpha always passes through unchanged.

Composition order is saturation, contrast, brightness, temperature, tint.
Each step is multiplied onto the right of the running matrix with
``multiply_color_matrices``, which multiplies the 4x4 linear blocks but adds
the offset columns. That shortcut is not a homogeneous 5x5 product and must
stay as it is; rendered output depends on it.

Everything here is pure and holds no shared state.
"""

from typing import Optional, Sequence

import numpy as np

from .adjustments import AdjustmentState
from .filters import FilterPreset, resolve_baseline

# Per-channel luminance contribution used for desaturation
LUMA_WEIGHTS = (0.213, 0.715, 0.072)

# Fraction of the slider value applied to the channel gain
TEMPERATURE_SCALE = 0.1
TINT_SCALE = 0.1

IDENTITY_MATRIX = np.array([
    1, 0, 0, 0, 0,
    0, 1, 0, 0, 0,
    0, 0, 1, 0, 0,
    0, 0, 0, 1, 0,
], dtype=np.float64)
IDENTITY_MATRIX.setflags(write=False)


def _as_rows(matrix: Sequence[float]) -> np.ndarray:
    rows = np.asarray(matrix, dtype=np.float64)
    if rows.size != 20:
        raise ValueError(f"Color matrix must have 20 elements, got {rows.size}")
    return rows.reshape(4, 5)


def as_affine(matrix: Sequence[float]) -> np.ndarray:
    """Return the matrix as a 4x5 float64 array (a copy)."""
    return _as_rows(matrix).copy()


def multiply_color_matrices(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    """Compose two color matrices, ``b`` applied after ``a``.

    For the linear columns: ``C[r][c] = sum_k A[r][k] * B[k][c]``, summed in
    order k = 0..3. For the offset column: ``C[r][4] = A[r][4] + B[r][4]``.
    """
    A = _as_rows(a)
    B = _as_rows(b)
    result = np.empty((4, 5), dtype=np.float64)
    # Explicit left-to-right sum keeps results identical across BLAS builds
    result[:, :4] = (
        A[:, 0:1] * B[0, :4]
        + A[:, 1:2] * B[1, :4]
        + A[:, 2:3] * B[2, :4]
        + A[:, 3:4] * B[3, :4]
    )
    result[:, 4] = A[:, 4] + B[:, 4]
    return result.reshape(20)


def saturation_matrix(s: float) -> np.ndarray:
    """Luminance-preserving saturation. 0 is grayscale, 1 is identity."""
    # Complements are written out as literals (1 - 0.213 is not exactly 0.787)
    return np.array([
        0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s, 0, 0,
        0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s, 0, 0,
        0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s, 0, 0,
        0, 0, 0, 1, 0,
    ], dtype=np.float64)


def contrast_matrix(c: float) -> np.ndarray:
    """Scale R, G, B by ``c`` around mid-gray."""
    offset = 0.5 * (1 - c)
    return np.array([
        c, 0, 0, 0, offset,
        0, c, 0, 0, offset,
        0, 0, c, 0, offset,
        0, 0, 0, 1, 0,
    ], dtype=np.float64)


def brightness_matrix(b: float) -> np.ndarray:
    return np.array([
        1, 0, 0, 0, b,
        0, 1, 0, 0, b,
        0, 0, 1, 0, b,
        0, 0, 0, 1, 0,
    ], dtype=np.float64)


def temperature_matrix(temperature: float) -> np.ndarray:
    """Positive values warm (boost red, cut blue), negative values cool."""
    t = temperature * TEMPERATURE_SCALE
    return np.array([
        1 + t, 0, 0, 0, 0,
        0, 1, 0, 0, 0,
        0, 0, 1 - t, 0, 0,
        0, 0, 0, 1, 0,
    ], dtype=np.float64)


def tint_matrix(tint: float) -> np.ndarray:
    """Positive values push toward green, negative toward magenta."""
    t = tint * TINT_SCALE
    return np.array([
        1, 0, 0, 0, 0,
        0, 1 + t, 0, 0, 0,
        0, 0, 1, 0, 0,
        0, 0, 0, 1, 0,
    ], dtype=np.float64)


def compose(adjustments: AdjustmentState, filter_preset: Optional[FilterPreset] = None) -> np.ndarray:
    """Combine the user's adjustments and a filter's baseline into one matrix.

    Brightness merges additively with the filter, contrast and saturation
    multiplicatively. Temperature and tint only come from ``adjustments``.
    Values are never clamped; out-of-range input yields a well-defined
    out-of-range matrix.

    Returns:
        numpy.ndarray: 20 float64 values, row-major 4x5.
    """
    baseline = resolve_baseline(filter_preset)
    brightness = adjustments.brightness + baseline.brightness
    contrast = adjustments.contrast * baseline.contrast
    saturation = adjustments.saturation * baseline.saturation

    matrix = IDENTITY_MATRIX.copy()
    matrix = multiply_color_matrices(matrix, saturation_matrix(saturation))
    matrix = multiply_color_matrices(matrix, contrast_matrix(contrast))
    matrix = multiply_color_matrices(matrix, brightness_matrix(brightness))

    if adjustments.temperature != 0:
        matrix = multiply_color_matrices(matrix, temperature_matrix(adjustments.temperature))
    if adjustments.tint != 0:
        matrix = multiply_color_matrices(matrix, tint_matrix(adjustments.tint))

    return matrix


def apply_to_color(matrix: Sequence[float], rgba: Sequence[float]) -> np.ndarray:
    """Apply a color matrix to a single normalized RGBA color (no clamping)."""
    rows = _as_rows(matrix)
    color = np.asarray(rgba, dtype=np.float64)
    if color.shape != (4,):
        raise ValueError("Color must have exactly 4 components (R, G, B, A)")
    return rows[:, :4] @ color + rows[:, 4]
