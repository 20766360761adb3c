# Image decoding using Pillow
import io
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..utils.errors import DecodeError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _describe(source):
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    if isinstance(source, np.ndarray):
        return f"<array {source.shape}>"
    return f"<{type(source).__name__}>"


# DecompressionBombError is not an OSError
_PIL_DECODE_ERRORS = (Image.DecompressionBombError, OSError, ValueError, SyntaxError)


def _decode_failure(label, error):
    if isinstance(error, UnidentifiedImageError):
        message = f"Could not identify image format for {label}"
    elif isinstance(error, Image.DecompressionBombError):
        message = f"Image {label} exceeds the decoded pixel limit: {error}"
    else:
        message = f"Could not decode image {label}: {error}"
    return DecodeError(message, source=label, original_error=error)


def _from_array(array):
    if array.dtype != np.uint8 or array.ndim != 3 or array.shape[2] not in (3, 4):
        raise DecodeError(
            f"Pixel arrays must be uint8 HxWx3 or HxWx4, got {array.dtype} {array.shape}",
            source=_describe(array),
        )
    return Image.fromarray(np.ascontiguousarray(array))


def decode_image(source):
    """Decodes a source image into an RGBA Pillow image.

    The exact stored width and height are preserved: no EXIF orientation is
    applied and nothing is resampled.

    Args:
        source: A file path (str or PathLike), encoded bytes, a binary file
                object, or a uint8 RGB/RGBA numpy array.

    Returns:
        PIL.Image.Image: A fully loaded image in 'RGBA' mode. The caller owns
                         it and must close it.

    Raises:
        DecodeError: If the source is missing, unreadable or not an image.
    """
    label = _describe(source)

    if isinstance(source, np.ndarray):
        decoded = _from_array(source)
    else:
        if isinstance(source, (str, os.PathLike)):
            if not os.path.isfile(source):
                raise DecodeError(f"Source image not found: '{label}'", source=label)
            stream = source
        elif isinstance(source, (bytes, bytearray)):
            if not source:
                raise DecodeError("Source image data is empty", source=label)
            stream = io.BytesIO(bytes(source))
        elif hasattr(source, 'read'):
            stream = source
        else:
            raise DecodeError(f"Unsupported image source type: {type(source).__name__}", source=label)

        decoded = None
        try:
            decoded = Image.open(stream)
            # Force the pixel data to be read now so truncated files fail here
            decoded.load()
        except _PIL_DECODE_ERRORS as e:
            if decoded is not None:
                # Releases the file handle Image.open holds for path sources
                decoded.close()
            raise _decode_failure(label, e) from e

    if decoded.mode == 'RGBA':
        return decoded

    try:
        converted = decoded.convert('RGBA')
    except (OSError, ValueError) as e:
        raise DecodeError(f"Could not convert {label} from mode '{decoded.mode}'", source=label, original_error=e) from e
    finally:
        decoded.close()
    logger.debug("Converted %s to RGBA", label)
    return converted


def image_to_float(image):
    """Returns the RGBA image as a float32 HxWx4 array with channels in 0-1."""
    pixels = np.array(image, dtype=np.float32)
    pixels /= 255.0
    return pixels
