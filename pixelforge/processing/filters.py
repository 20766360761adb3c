# Filter presets and the static filter catalog
"""
Named filter presets.

A filter carries optional baseline values for brightness, contrast and
saturation plus an optional flat tint overlay. Absent fields contribute no
change; ``resolve_baseline`` is the one place that turns them into numbers.
The catalog is built once at import time and is read-only afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

from ..utils.errors import PresetError

_RGBA_PATTERN = re.compile(
    r"^\s*rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*"
    r"((?:\d+(?:\.\d*)?|\.\d+))\s*\)\s*$",
    re.IGNORECASE,
)


class TintColor(NamedTuple):
    """A flat overlay color: r, g, b in 0-255 and alpha in 0-1."""
    r: int
    g: int
    b: int
    a: float

    def normalized(self) -> Tuple[float, float, float, float]:
        """Return (r, g, b, a) with every component in 0-1."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a)

    def to_css(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a:g})"


def parse_tint_color(text: str) -> TintColor:
    """Parse the ``rgba(r, g, b, a)`` notation used by filter tints.

    Raises:
        ValueError: if the text is not in that form or a component is out of range.
    """
    if not isinstance(text, str):
        raise ValueError(f"Tint color must be a string, got {type(text).__name__}")
    match = _RGBA_PATTERN.match(text)
    if not match:
        raise ValueError(f"Invalid tint color '{text}': expected rgba(r, g, b, a)")

    r, g, b = (int(match.group(i)) for i in range(1, 4))
    a = float(match.group(4))
    if any(channel > 255 for channel in (r, g, b)):
        raise ValueError(f"Invalid tint color '{text}': channels must be 0-255")
    if a > 1.0:
        raise ValueError(f"Invalid tint color '{text}': alpha must be 0-1")
    return TintColor(r, g, b, a)


@dataclass(frozen=True)
class FilterPreset:
    """An immutable named bundle of optional baseline adjustments."""
    id: str
    name: str
    category: str
    icon: str = ""
    brightness: Optional[float] = None
    contrast: Optional[float] = None
    saturation: Optional[float] = None
    tint_color: Optional[str] = None

    def __post_init__(self):
        if self.tint_color is not None:
            # Fail at definition time rather than mid-render
            parse_tint_color(self.tint_color)

    @property
    def tint(self) -> Optional[TintColor]:
        if self.tint_color is None:
            return None
        return parse_tint_color(self.tint_color)

    def is_identity(self) -> bool:
        return (self.brightness is None and self.contrast is None
                and self.saturation is None and self.tint_color is None)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "icon": self.icon,
        }
        for key in ("brightness", "contrast", "saturation"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.tint_color is not None:
            data["tintColor"] = self.tint_color
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterPreset":
        """Build a preset from its stored form (``tintColor`` key as in share payloads)."""
        if not isinstance(data, Mapping):
            raise PresetError("Filter must be an object")
        for key in ("id", "name"):
            if not isinstance(data.get(key), str) or not data[key].strip():
                raise PresetError(f"Filter is missing a valid '{key}'")

        numeric = {}
        for key in ("brightness", "contrast", "saturation"):
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise PresetError(f"Filter '{data['id']}' has non-numeric '{key}': {value!r}")
            numeric[key] = float(value)

        tint_color = data.get("tintColor", data.get("tint_color"))
        try:
            return cls(
                id=data["id"],
                name=data["name"],
                category=str(data.get("category", "")),
                icon=str(data.get("icon", "")),
                tint_color=tint_color,
                **numeric,
            )
        except ValueError as e:
            raise PresetError(f"Filter '{data['id']}' is invalid: {e}", original_error=e) from e


class FilterBaseline(NamedTuple):
    """Numeric effect of a filter once absent fields are resolved."""
    brightness: float
    contrast: float
    saturation: float


NEUTRAL_BASELINE = FilterBaseline(brightness=0.0, contrast=1.0, saturation=1.0)


def resolve_baseline(filter_preset: Optional[FilterPreset]) -> FilterBaseline:
    """Resolve a filter (or no filter) into its brightness/contrast/saturation baseline."""
    if filter_preset is None:
        return NEUTRAL_BASELINE
    return FilterBaseline(
        brightness=NEUTRAL_BASELINE.brightness if filter_preset.brightness is None else filter_preset.brightness,
        contrast=NEUTRAL_BASELINE.contrast if filter_preset.contrast is None else filter_preset.contrast,
        saturation=NEUTRAL_BASELINE.saturation if filter_preset.saturation is None else filter_preset.saturation,
    )


FILTER_CATEGORIES: Tuple[str, ...] = (
    "Popular",
    "Vintage",
    "Modern",
    "Black & White",
    "Warm",
    "Cool",
    "Vibrant",
    "Muted",
    "Cinematic",
    "Portrait",
    "Landscape",
    "Food",
    "Urban",
    "Nature",
    "Artistic",
)

FILTERS: Tuple[FilterPreset, ...] = (
    FilterPreset("none", "Original", "Popular", "⚪"),
    FilterPreset("vivid", "Vivid", "Popular", "🌈", brightness=0.05, contrast=1.15, saturation=1.4),
    FilterPreset("dramatic", "Dramatic", "Popular", "⚡", brightness=-0.1, contrast=1.5, saturation=1.2),
    FilterPreset("natural", "Natural", "Popular", "🍃", brightness=0.02, contrast=1.05, saturation=0.95),
    FilterPreset("classic", "Classic", "Popular", "📷", contrast=1.2, saturation=0.9),
    FilterPreset("soft", "Soft", "Popular", "☁️", brightness=0.1, contrast=0.85, saturation=0.9),
    FilterPreset("vintage", "Vintage", "Vintage", "📸", brightness=0.05, contrast=0.95, saturation=0.8, tint_color="rgba(255, 230, 200, 0.08)"),
    FilterPreset("retro", "Retro", "Vintage", "🎞️", contrast=1.15, saturation=1.2, tint_color="rgba(255, 200, 150, 0.06)"),
    FilterPreset("sepia", "Sepia", "Vintage", "🟤", brightness=0.05, saturation=0.4, tint_color="rgba(112, 66, 20, 0.25)"),
    FilterPreset("faded", "Faded", "Vintage", "🌫️", brightness=0.15, contrast=0.8, saturation=0.7),
    FilterPreset("oldfilm", "Old Film", "Vintage", "🎬", contrast=1.1, saturation=0.6, tint_color="rgba(230, 220, 180, 0.1)"),
    FilterPreset("polaroid", "Polaroid", "Vintage", "📷", brightness=0.08, contrast=1.05, saturation=0.85, tint_color="rgba(255, 240, 220, 0.07)"),
    FilterPreset("kodachrome", "Kodachrome", "Vintage", "🎨", brightness=-0.05, contrast=1.2, saturation=1.3),
    FilterPreset("1977", "1977", "Vintage", "✨", brightness=0.1, contrast=1.05, saturation=1.1, tint_color="rgba(255, 180, 180, 0.08)"),
    FilterPreset("modern", "Modern", "Modern", "💎", brightness=0.03, contrast=1.25, saturation=1.1),
    FilterPreset("crisp", "Crisp", "Modern", "✨", brightness=0.05, contrast=1.35, saturation=1.05),
    FilterPreset("clean", "Clean", "Modern", "⚪", brightness=0.08, contrast=1.1, saturation=0.95),
    FilterPreset("bright", "Bright", "Modern", "☀️", brightness=0.2, contrast=1.05, saturation=1.15),
    FilterPreset("airy", "Airy", "Modern", "🤍", brightness=0.15, contrast=0.9, saturation=0.85),
    FilterPreset("minimalist", "Minimalist", "Modern", "⬜", brightness=0.1, contrast=1.15, saturation=0.7),
    FilterPreset("bw", "B&W", "Black & White", "⚫", contrast=1.1, saturation=0),
    FilterPreset("noir", "Noir", "Black & White", "🎭", brightness=-0.1, contrast=1.5, saturation=0),
    FilterPreset("mono", "Mono", "Black & White", "⬛", contrast=1.2, saturation=0),
    FilterPreset("grayscale", "Grayscale", "Black & White", "🌑", saturation=0),
    FilterPreset("stark", "Stark", "Black & White", "⚪", brightness=0.05, contrast=1.8, saturation=0),
    FilterPreset("soft-bw", "Soft B&W", "Black & White", "🌫️", brightness=0.1, contrast=0.9, saturation=0),
    FilterPreset("high-contrast", "High Contrast", "Black & White", "⚡", contrast=2, saturation=0),
    FilterPreset("vintage-bw", "Vintage B&W", "Black & White", "📷", brightness=-0.05, contrast=0.95, saturation=0, tint_color="rgba(80, 70, 60, 0.15)"),
    FilterPreset("warm", "Warm", "Warm", "🔥", saturation=1.1, tint_color="rgba(255, 200, 100, 0.08)"),
    FilterPreset("golden", "Golden", "Warm", "✨", contrast=1.1, saturation=1.15, tint_color="rgba(255, 215, 0, 0.1)"),
    FilterPreset("sunset", "Sunset", "Warm", "🌅", brightness=0.05, saturation=1.2, tint_color="rgba(255, 140, 80, 0.12)"),
    FilterPreset("amber", "Amber", "Warm", "🟠", saturation=1.05, tint_color="rgba(255, 180, 0, 0.09)"),
    FilterPreset("autumn", "Autumn", "Warm", "🍂", contrast=1.1, saturation=1.25, tint_color="rgba(200, 100, 50, 0.1)"),
    FilterPreset("honey", "Honey", "Warm", "🍯", brightness=0.05, saturation=1.15, tint_color="rgba(255, 200, 100, 0.11)"),
    FilterPreset("copper", "Copper", "Warm", "🟤", contrast=1.15, tint_color="rgba(184, 115, 51, 0.13)"),
    FilterPreset("sunrise", "Sunrise", "Warm", "🌄", brightness=0.1, saturation=1.2, tint_color="rgba(255, 165, 100, 0.1)"),
    FilterPreset("cool", "Cool", "Cool", "❄️", saturation=1.05, tint_color="rgba(100, 150, 255, 0.08)"),
    FilterPreset("arctic", "Arctic", "Cool", "🧊", brightness=0.1, saturation=0.9, tint_color="rgba(150, 200, 255, 0.1)"),
    FilterPreset("ocean", "Ocean", "Cool", "🌊", saturation=1.15, tint_color="rgba(0, 150, 200, 0.1)"),
    FilterPreset("midnight", "Midnight", "Cool", "🌙", brightness=-0.15, contrast=1.2, tint_color="rgba(50, 80, 150, 0.15)"),
    FilterPreset("frosted", "Frosted", "Cool", "❄️", brightness=0.15, saturation=0.85, tint_color="rgba(180, 220, 255, 0.12)"),
    FilterPreset("winter", "Winter", "Cool", "⛄", brightness=0.1, tint_color="rgba(200, 220, 255, 0.09)"),
    FilterPreset("steel", "Steel", "Cool", "⚙️", contrast=1.2, saturation=0.8, tint_color="rgba(100, 120, 140, 0.1)"),
    FilterPreset("nordic", "Nordic", "Cool", "🏔️", brightness=0.05, saturation=0.95, tint_color="rgba(150, 180, 220, 0.08)"),
    FilterPreset("vibrant", "Vibrant", "Vibrant", "🌈", contrast=1.2, saturation=1.6),
    FilterPreset("pop", "Pop", "Vibrant", "💥", brightness=0.05, contrast=1.3, saturation=1.8),
    FilterPreset("neon", "Neon", "Vibrant", "🌟", brightness=0.1, contrast=1.4, saturation=2),
    FilterPreset("electric", "Electric", "Vibrant", "⚡", contrast=1.35, saturation=1.7),
    FilterPreset("candy", "Candy", "Vibrant", "🍭", brightness=0.15, saturation=1.5, tint_color="rgba(255, 150, 200, 0.05)"),
    FilterPreset("tropical", "Tropical", "Vibrant", "🌺", brightness=0.08, contrast=1.15, saturation=1.65),
    FilterPreset("rainbow", "Rainbow", "Vibrant", "🌈", brightness=0.1, saturation=1.9),
    FilterPreset("muted", "Muted", "Muted", "🎨", contrast=0.95, saturation=0.6),
    FilterPreset("pastel", "Pastel", "Muted", "🌸", brightness=0.15, contrast=0.9, saturation=0.7),
    FilterPreset("dusty", "Dusty", "Muted", "🏜️", contrast=0.9, saturation=0.65, tint_color="rgba(200, 180, 160, 0.05)"),
    FilterPreset("earthy", "Earthy", "Muted", "🌿", saturation=0.75, tint_color="rgba(140, 120, 100, 0.08)"),
    FilterPreset("subdued", "Subdued", "Muted", "🤎", brightness=-0.05, contrast=0.95, saturation=0.55),
    FilterPreset("haze", "Haze", "Muted", "🌫️", brightness=0.12, contrast=0.8, saturation=0.6),
    FilterPreset("cinematic", "Cinematic", "Cinematic", "🎬", brightness=-0.05, contrast=1.3, saturation=1.1, tint_color="rgba(20, 30, 60, 0.05)"),
    FilterPreset("film", "Film", "Cinematic", "🎞️", contrast=1.25, saturation=1.05, tint_color="rgba(40, 40, 80, 0.04)"),
    FilterPreset("blockbuster", "Blockbuster", "Cinematic", "🍿", contrast=1.4, saturation=1.2, tint_color="rgba(30, 60, 100, 0.06)"),
    FilterPreset("teal-orange", "Teal & Orange", "Cinematic", "🎨", contrast=1.2, saturation=1.3, tint_color="rgba(20, 100, 120, 0.05)"),
    FilterPreset("noir-film", "Film Noir", "Cinematic", "🎭", brightness=-0.2, contrast=1.6, saturation=0.3),
    FilterPreset("hollywood", "Hollywood", "Cinematic", "⭐", brightness=0.05, contrast=1.3, saturation=1.25),
    FilterPreset("portrait", "Portrait", "Portrait", "👤", contrast=1.1, saturation=1.05, tint_color="rgba(255, 220, 200, 0.04)"),
    FilterPreset("skin-tone", "Skin Tone", "Portrait", "✨", brightness=0.05, saturation=1.02, tint_color="rgba(255, 210, 180, 0.05)"),
    FilterPreset("beauty", "Beauty", "Portrait", "💄", brightness=0.08, contrast=1.05, saturation=1.1),
    FilterPreset("studio", "Studio", "Portrait", "💡", brightness=0.1, contrast=1.15, saturation=1.05),
    FilterPreset("fashion", "Fashion", "Portrait", "👗", brightness=0.05, contrast=1.2, saturation=1.25),
    FilterPreset("landscape", "Landscape", "Landscape", "🏞️", contrast=1.15, saturation=1.3),
    FilterPreset("scenic", "Scenic", "Landscape", "🌄", brightness=0.05, contrast=1.2, saturation=1.25),
    FilterPreset("mountain", "Mountain", "Landscape", "⛰️", contrast=1.3, saturation=1.2, tint_color="rgba(100, 120, 150, 0.04)"),
    FilterPreset("desert", "Desert", "Landscape", "🏜️", saturation=1.15, tint_color="rgba(220, 180, 120, 0.08)"),
    FilterPreset("forest", "Forest", "Landscape", "🌲", saturation=1.35, tint_color="rgba(80, 140, 80, 0.05)"),
    FilterPreset("food", "Food", "Food", "🍽️", brightness=0.08, contrast=1.15, saturation=1.4),
    FilterPreset("delicious", "Delicious", "Food", "😋", brightness=0.1, contrast=1.2, saturation=1.5),
    FilterPreset("fresh", "Fresh", "Food", "🥗", brightness=0.15, saturation=1.35),
    FilterPreset("gourmet", "Gourmet", "Food", "👨‍🍳", contrast=1.25, saturation=1.3, tint_color="rgba(255, 200, 150, 0.04)"),
    FilterPreset("urban", "Urban", "Urban", "🏙️", contrast=1.25, saturation=1.1, tint_color="rgba(80, 90, 110, 0.05)"),
    FilterPreset("street", "Street", "Urban", "🛣️", brightness=-0.05, contrast=1.3, saturation=0.95),
    FilterPreset("grunge", "Grunge", "Urban", "🎸", brightness=-0.1, contrast=1.4, saturation=0.8),
    FilterPreset("metro", "Metro", "Urban", "🚇", contrast=1.2, saturation=0.85, tint_color="rgba(60, 70, 90, 0.08)"),
    FilterPreset("nature", "Nature", "Nature", "🌿", contrast=1.1, saturation=1.35),
    FilterPreset("bloom", "Bloom", "Nature", "🌺", brightness=0.1, saturation=1.45),
    FilterPreset("spring", "Spring", "Nature", "🌸", brightness=0.12, saturation=1.3, tint_color="rgba(150, 220, 150, 0.05)"),
    FilterPreset("summer", "Summer", "Nature", "☀️", brightness=0.15, contrast=1.1, saturation=1.4),
    FilterPreset("artistic", "Artistic", "Artistic", "🎨", contrast=1.25, saturation=1.3),
    FilterPreset("painting", "Painting", "Artistic", "🖼️", brightness=0.05, contrast=1.3, saturation=1.4),
    FilterPreset("sketch", "Sketch", "Artistic", "✏️", contrast=1.6, saturation=0.3),
    FilterPreset("watercolor", "Watercolor", "Artistic", "💧", brightness=0.1, contrast=0.9, saturation=1.2),
    FilterPreset("dream", "Dream", "Artistic", "💭", brightness=0.15, contrast=0.85, saturation=1.25),
    FilterPreset("fantasy", "Fantasy", "Artistic", "✨", brightness=0.12, saturation=1.5, tint_color="rgba(200, 150, 255, 0.05)"),
)

NONE_FILTER = FILTERS[0]

_FILTERS_BY_ID = {f.id: f for f in FILTERS}


def get_filter(filter_id: str) -> Optional[FilterPreset]:
    return _FILTERS_BY_ID.get(filter_id)


def get_filters_by_category(category: str) -> List[FilterPreset]:
    return [f for f in FILTERS if f.category == category]


def search_filters(query: str) -> List[FilterPreset]:
    """Case-insensitive search over filter names and categories."""
    lower_query = query.lower()
    return [
        f for f in FILTERS
        if lower_query in f.name.lower() or lower_query in f.category.lower()
    ]


def get_popular_filters() -> List[FilterPreset]:
    return get_filters_by_category("Popular")
