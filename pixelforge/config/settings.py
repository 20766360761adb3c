# Application settings

APP_NAME = "PixelForge"
APP_AUTHOR = "PixelForge"

# --- Render Parameters ---
RENDER_DEFAULTS = {
    # Encoded output format and quality used when the caller does not override them
    "format": "JPEG",
    "quality": 90,
    "png_compression": 6,
    # Persisted renders are written as <file_prefix>-<epoch ms>-<suffix>.<ext>
    "file_prefix": "PixelForge",
}

# --- Adjustment Sliders ---
# Neutral tuple: applying these values leaves every pixel unchanged
ADJUSTMENT_DEFAULTS = {
    "brightness": 0.0,
    "contrast": 1.0,
    "saturation": 1.0,
    "temperature": 0.0,
    "tint": 0.0,
}

# Slider domains (min, max). The matrix composer accepts values outside these.
ADJUSTMENT_RANGES = {
    "brightness": (-1.0, 1.0),
    "contrast": (0.0, 1.5),
    "saturation": (0.0, 2.0),
    "temperature": (-1.0, 1.0),
    "tint": (-1.0, 1.0),
}

# --- Storage ---
STORAGE_DEFAULTS = {
    "store_file": "storage.json",
    "presets_key": "@presets",
    "clipboard_key": "@clipboard",
}

# --- Editing / Batch ---
HISTORY_MAX_SIZE = 50
BATCH_MAX_WORKERS = 4

# --- Logging ---
LOGGING_LEVEL = "INFO" # Options: DEBUG, INFO, WARNING, ERROR
