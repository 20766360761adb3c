# IO package initialization
from .image_loader import (
    decode_image,
    image_to_float,
)
from .image_saver import (
    encode_image,
    normalize_format,
    resolve_output_dir,
    make_output_name,
    write_encoded,
    OUTPUT_FORMATS,
)
from .storage import JsonKeyValueStore, default_store_path

__all__ = [
    'decode_image',
    'image_to_float',
    'encode_image',
    'normalize_format',
    'resolve_output_dir',
    'make_output_name',
    'write_encoded',
    'OUTPUT_FORMATS',
    'JsonKeyValueStore',
    'default_store_path',
]
