# Encoding and persistence of rendered images using Pillow
import io
import os
import time
import uuid
from typing import Optional

import appdirs
import numpy as np
from PIL import Image

from ..config import settings
from ..utils.errors import EncodeError, StorageError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Pillow format name -> file extension
OUTPUT_FORMATS = {
    "JPEG": ".jpg",
    "PNG": ".png",
    "WEBP": ".webp",
}

_FORMAT_ALIASES = {"JPG": "JPEG"}


def normalize_format(fmt: str) -> str:
    """Returns the canonical Pillow format name, raising EncodeError if unsupported."""
    name = str(fmt).upper()
    name = _FORMAT_ALIASES.get(name, name)
    if name not in OUTPUT_FORMATS:
        raise EncodeError(
            f"Unsupported output format '{fmt}'. Choose one of: {', '.join(OUTPUT_FORMATS)}",
            output_format=str(fmt),
        )
    return name


def _composite_on_black(rgba: np.ndarray) -> np.ndarray:
    """Flatten uint8 RGBA onto black; opaque pixels are unchanged."""
    alpha = rgba[:, :, 3:4].astype(np.uint16)
    rgb = (rgba[:, :, :3].astype(np.uint16) * alpha + 127) // 255
    return rgb.astype(np.uint8)


def encode_image(
    pixels: np.ndarray,
    fmt: str = settings.RENDER_DEFAULTS["format"],
    quality: int = settings.RENDER_DEFAULTS["quality"],
    png_compression: int = settings.RENDER_DEFAULTS["png_compression"],
) -> bytes:
    """Encodes a uint8 RGBA (or RGB) pixel array into image file bytes.

    JPEG has no alpha channel, so RGBA is composited onto black for it.
    PNG and WebP keep alpha.

    Args:
        pixels (numpy.ndarray): HxWx4 or HxWx3 uint8 array.
        fmt (str): Output format name ('JPEG', 'PNG' or 'WEBP').
        quality (int): Quality for JPEG/WebP (1-100, higher is better).
        png_compression (int): Compression level for PNG (0-9).

    Returns:
        bytes: The encoded image.

    Raises:
        EncodeError: If the format is unsupported or encoding fails.
    """
    name = normalize_format(fmt)

    if pixels is None or pixels.size == 0:
        raise EncodeError("Cannot encode an empty image.", output_format=name)
    if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise EncodeError(
            f"Expected a uint8 HxWx3/4 array, got {pixels.dtype} {pixels.shape}",
            output_format=name,
        )
    if not isinstance(quality, int) or isinstance(quality, bool):
        raise EncodeError(f"Quality must be an int, got {quality!r}", output_format=name)

    save_kwargs = {}
    if name == "JPEG":
        save_kwargs['quality'] = max(1, min(100, quality))
        save_kwargs['optimize'] = True
        if pixels.shape[2] == 4:
            pixels = _composite_on_black(pixels)
    elif name == "PNG":
        save_kwargs['compress_level'] = max(0, min(9, png_compression))
    elif name == "WEBP":
        save_kwargs['quality'] = max(0, min(100, quality))

    buffer = io.BytesIO()
    img = None
    try:
        img = Image.fromarray(np.ascontiguousarray(pixels))
        img.save(buffer, format=name, **save_kwargs)
        return buffer.getvalue()
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode image as {name}: {e}", output_format=name, original_error=e) from e
    finally:
        if img is not None:
            img.close()
        buffer.close()


def _ensure_writable_dir(directory: str) -> bool:
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError:
        logger.warning("Could not create output directory '%s'", directory)
        return False
    return os.access(directory, os.W_OK)


def resolve_output_dir(directory: Optional[str] = None) -> str:
    """Returns a writable directory for persisted renders.

    Uses ``directory`` when given. Otherwise falls back to the per-user cache
    directory, then the per-user data directory.

    Raises:
        StorageError: If no candidate directory is writable.
    """
    if directory:
        candidates = [os.fspath(directory)]
    else:
        candidates = [
            appdirs.user_cache_dir(settings.APP_NAME, settings.APP_AUTHOR),
            appdirs.user_data_dir(settings.APP_NAME, settings.APP_AUTHOR),
        ]

    for candidate in candidates:
        if _ensure_writable_dir(candidate):
            return candidate

    raise StorageError(
        f"No writable directory available for saving (tried: {', '.join(candidates)})",
        path=candidates[0],
    )


def make_output_name(prefix: str, extension: str) -> str:
    """Returns a file name unique per call: ``<prefix>-<epoch ms>-<6 hex>.<ext>``."""
    stamp = int(time.time() * 1000)
    return f"{prefix}-{stamp}-{uuid.uuid4().hex[:6]}{extension}"


def write_encoded(data: bytes, directory: Optional[str], prefix: str, extension: str) -> str:
    """Writes encoded image bytes to a freshly named file.

    Returns:
        str: The full path of the written file.

    Raises:
        StorageError: If the directory is unavailable or the write fails.
    """
    output_dir = resolve_output_dir(directory)
    output_path = os.path.join(output_dir, make_output_name(prefix, extension))
    try:
        # 'xb' refuses to overwrite an existing file
        with open(output_path, 'xb') as f:
            f.write(data)
    except OSError as e:
        raise StorageError(f"Failed to write '{output_path}': {e}", path=output_path, original_error=e) from e

    logger.info("Successfully saved image to: '%s'", output_path)
    return output_path
