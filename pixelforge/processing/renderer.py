# Render pipeline: decode, color-filter, tint, encode
"""
Applies a composed color matrix (and an optional flat tint overlay) to an
image and encodes the result.

Each call owns its decoded source, its drawing surface and its snapshot and
releases all three before returning, on success and on every failure path.
Calls share no mutable state and may run concurrently.
"""

from dataclasses import dataclass, field
from typing import Optional

import cv2
import numpy as np

from ..config import settings
from ..io.image_loader import decode_image, image_to_float
from ..io.image_saver import OUTPUT_FORMATS, encode_image, normalize_format, write_encoded
from ..utils.errors import SurfaceAllocationError
from ..utils.logger import get_logger
from .adjustments import AdjustmentState
from .color_matrix import as_affine, compose
from .filters import FilterPreset, TintColor

logger = get_logger(__name__)


@dataclass
class OutputOptions:
    """Encoding and persistence settings for a render call."""
    format: str = settings.RENDER_DEFAULTS["format"]
    quality: int = settings.RENDER_DEFAULTS["quality"]
    png_compression: int = settings.RENDER_DEFAULTS["png_compression"]
    persist: bool = False
    output_dir: Optional[str] = None
    file_prefix: str = settings.RENDER_DEFAULTS["file_prefix"]


@dataclass
class RenderResult:
    """Encoded output of one render call."""
    data: bytes = field(repr=False)
    width: int
    height: int
    format: str
    path: Optional[str] = None


class RenderSurface:
    """
    A same-size RGBA drawing surface with 8-bit channel semantics.

    Pixels are held as float32 in 0-1. Every draw stores its result clamped
    to that range, which is where out-of-range matrix output is limited.
    """

    def __init__(self, width: int, height: int, pixels: np.ndarray):
        self.width = width
        self.height = height
        self._pixels = pixels

    @classmethod
    def allocate(cls, width: int, height: int) -> "RenderSurface":
        """
        Create a transparent surface.

        Raises:
            SurfaceAllocationError: For non-positive sizes or when memory runs out.
        """
        if width <= 0 or height <= 0:
            raise SurfaceAllocationError(
                f"Cannot create a {width}x{height} render surface", width=width, height=height
            )
        try:
            pixels = np.zeros((height, width, 4), dtype=np.float32)
        except (MemoryError, ValueError) as e:
            raise SurfaceAllocationError(
                f"Failed to create {width}x{height} render surface", width=width, height=height, original_error=e
            ) from e
        return cls(width, height, pixels)

    @property
    def disposed(self) -> bool:
        return self._pixels is None

    def _require_pixels(self) -> np.ndarray:
        if self._pixels is None:
            raise RuntimeError("Render surface has been disposed")
        return self._pixels

    def draw_with_color_matrix(self, source: np.ndarray, matrix) -> None:
        """Draw a full-size float RGBA source through a 4x5 color matrix."""
        pixels = self._require_pixels()
        if source.shape != pixels.shape:
            raise ValueError(f"Source shape {source.shape} does not match surface {pixels.shape}")
        # cv2.transform treats a 4x5 matrix on 4 channels as an affine map
        transformed = cv2.transform(source, as_affine(matrix).astype(np.float32))
        np.clip(transformed, 0.0, 1.0, out=pixels)

    def fill_overlay(self, tint: TintColor) -> None:
        """Composite a flat color over the whole surface (alpha-over)."""
        pixels = self._require_pixels()
        r, g, b, alpha = tint.normalized()
        if alpha <= 0.0:
            return
        color = np.array([r, g, b], dtype=np.float32)

        # Unpremultiplied alpha-over; out_alpha >= alpha > 0
        dst_alpha = pixels[:, :, 3:4]
        out_alpha = alpha + dst_alpha * (1.0 - alpha)
        weighted = color * alpha + pixels[:, :, :3] * dst_alpha * (1.0 - alpha)
        pixels[:, :, :3] = weighted / out_alpha
        pixels[:, :, 3:4] = out_alpha
        np.clip(pixels, 0.0, 1.0, out=pixels)

    def snapshot(self) -> np.ndarray:
        """Return the surface content as a new uint8 RGBA array."""
        pixels = self._require_pixels()
        return np.rint(pixels * 255.0).astype(np.uint8)

    def dispose(self) -> None:
        self._pixels = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()
        return False


def render(
    source,
    adjustments: Optional[AdjustmentState] = None,
    filter_preset: Optional[FilterPreset] = None,
    options: Optional[OutputOptions] = None,
) -> RenderResult:
    """Render a source image with adjustments and an optional filter.

    Steps: decode at the exact source size, compose the color matrix, draw
    the source into a same-size surface through that matrix, composite the
    filter's tint overlay if it has one, snapshot, encode, and persist when
    ``options.persist`` is set.

    Args:
        source: Path, encoded bytes, binary file object or uint8 RGB(A) array.
        adjustments: Slider values; neutral when omitted.
        filter_preset: Active filter, or None.
        options: Output format, quality and persistence settings.

    Returns:
        RenderResult: Encoded bytes plus the written path when persisted.

    Raises:
        DecodeError, SurfaceAllocationError, EncodeError, StorageError
    """
    adjustments = adjustments if adjustments is not None else AdjustmentState()
    options = options if options is not None else OutputOptions()
    # Validate the format before doing any pixel work
    output_format = normalize_format(options.format)

    decoded = None
    surface = None
    frame = None
    try:
        decoded = decode_image(source)
        width, height = decoded.size
        pixels = image_to_float(decoded)

        matrix = compose(adjustments, filter_preset)

        surface = RenderSurface.allocate(width, height)
        surface.draw_with_color_matrix(pixels, matrix)
        del pixels

        tint = filter_preset.tint if filter_preset is not None else None
        if tint is not None:
            surface.fill_overlay(tint)

        frame = surface.snapshot()
        data = encode_image(
            frame,
            fmt=output_format,
            quality=options.quality,
            png_compression=options.png_compression,
        )
        logger.debug(
            "Rendered %dx%d image (filter=%s) to %d bytes of %s",
            width, height, filter_preset.id if filter_preset else None, len(data), output_format,
        )

        path = None
        if options.persist:
            path = write_encoded(data, options.output_dir, options.file_prefix, OUTPUT_FORMATS[output_format])

        return RenderResult(data=data, width=width, height=height, format=output_format, path=path)
    finally:
        frame = None
        if surface is not None:
            surface.dispose()
        if decoded is not None:
            decoded.close()
