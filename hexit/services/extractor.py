"""Palette extraction: image bytes to named swatches"""
import colorsys
import io
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple
from PIL import Image, UnidentifiedImageError
from hexit.core.config import get_settings
from hexit.core.errors import UnsupportedFormatError
from hexit.core.logging import logger
from hexit.models.schemas import Palette, Swatch, SwatchName

RGB = Tuple[int, int, int]

# Target luma/saturation windows for each tonal category
TARGET_DARK_LUMA = 0.26
MAX_DARK_LUMA = 0.45
MIN_LIGHT_LUMA = 0.55
TARGET_LIGHT_LUMA = 0.74
MIN_NORMAL_LUMA = 0.3
TARGET_NORMAL_LUMA = 0.5
MAX_NORMAL_LUMA = 0.7
TARGET_MUTED_SATURATION = 0.3
MAX_MUTED_SATURATION = 0.4
TARGET_VIBRANT_SATURATION = 1.0
MIN_VIBRANT_SATURATION = 0.35

WEIGHT_SATURATION = 3.0
WEIGHT_LUMA = 6.5
WEIGHT_POPULATION = 0.5

# Pixels more transparent than this are ignored
MIN_ALPHA = 125


class PaletteExtractor(Protocol):
    """Anything that turns image bytes into named swatches"""

    def extract(self, image_bytes: bytes) -> Palette:
        ...


@dataclass(frozen=True)
class _Target:
    name: SwatchName
    target_luma: float
    min_luma: float
    max_luma: float
    target_saturation: float
    min_saturation: float
    max_saturation: float


TARGETS = [
    _Target(SwatchName.VIBRANT, TARGET_NORMAL_LUMA, MIN_NORMAL_LUMA, MAX_NORMAL_LUMA,
            TARGET_VIBRANT_SATURATION, MIN_VIBRANT_SATURATION, 1.0),
    _Target(SwatchName.LIGHT_VIBRANT, TARGET_LIGHT_LUMA, MIN_LIGHT_LUMA, 1.0,
            TARGET_VIBRANT_SATURATION, MIN_VIBRANT_SATURATION, 1.0),
    _Target(SwatchName.DARK_VIBRANT, TARGET_DARK_LUMA, 0.0, MAX_DARK_LUMA,
            TARGET_VIBRANT_SATURATION, MIN_VIBRANT_SATURATION, 1.0),
    _Target(SwatchName.MUTED, TARGET_NORMAL_LUMA, MIN_NORMAL_LUMA, MAX_NORMAL_LUMA,
            TARGET_MUTED_SATURATION, 0.0, MAX_MUTED_SATURATION),
    _Target(SwatchName.LIGHT_MUTED, TARGET_LIGHT_LUMA, MIN_LIGHT_LUMA, 1.0,
            TARGET_MUTED_SATURATION, 0.0, MAX_MUTED_SATURATION),
    _Target(SwatchName.DARK_MUTED, TARGET_DARK_LUMA, 0.0, MAX_DARK_LUMA,
            TARGET_MUTED_SATURATION, 0.0, MAX_MUTED_SATURATION),
]


def rgb_to_hex(rgb: RGB) -> str:
    """Convert RGB tuple to lowercase hex color code"""
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def rgb_to_hsl(rgb: RGB) -> Tuple[float, float, float]:
    """RGB (0-255) to HSL (0-1)"""
    h, l, s = colorsys.rgb_to_hls(*(c / 255.0 for c in rgb))
    return h, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """HSL (0-1) to RGB (0-255)"""
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def _invert_diff(value: float, target: float) -> float:
    return 1.0 - abs(value - target)


def _score(saturation: float, luma: float, population: int, max_population: int,
           target: _Target) -> float:
    """Weighted closeness of a color to a target window"""
    pop_ratio = population / max_population if max_population else 0.0
    weighted = (
        _invert_diff(saturation, target.target_saturation) * WEIGHT_SATURATION
        + _invert_diff(luma, target.target_luma) * WEIGHT_LUMA
        + pop_ratio * WEIGHT_POPULATION
    )
    return weighted / (WEIGHT_SATURATION + WEIGHT_LUMA + WEIGHT_POPULATION)


def classify_swatches(colors: List[Tuple[RGB, int]]) -> Palette:
    """
    Assign quantized colors to the six tonal categories

    Each category takes the best scoring color inside its luma and
    saturation window; a color is used by at most one category. Vibrant and
    DarkVibrant are derived from each other when only one was found.

    Args:
        colors: (rgb, population) pairs from the quantizer

    Returns:
        Palette with every SwatchName as key, None where nothing fits
    """
    max_population = max((pop for _, pop in colors), default=0)
    hsl = [(rgb, pop, rgb_to_hsl(rgb)) for rgb, pop in colors]

    palette: Dict[SwatchName, Optional[Swatch]] = {}
    used = set()
    for target in TARGETS:
        best = None
        best_score = -1.0
        for rgb, pop, (_, s, l) in hsl:
            if rgb in used:
                continue
            if not (target.min_saturation <= s <= target.max_saturation):
                continue
            if not (target.min_luma <= l <= target.max_luma):
                continue
            score = _score(s, l, pop, max_population, target)
            if score > best_score:
                best, best_score = (rgb, pop), score

        if best is None:
            palette[target.name] = None
            continue
        used.add(best[0])
        palette[target.name] = Swatch(name=target.name, hex=rgb_to_hex(best[0]), population=best[1])

    _fill_empty(palette)
    return palette


def _derive(source: Swatch, name: SwatchName, luma: float) -> Swatch:
    h, s, _ = rgb_to_hsl(_hex_to_rgb(source.hex))
    return Swatch(name=name, hex=rgb_to_hex(hsl_to_rgb(h, s, luma)), population=0)


def _hex_to_rgb(value: str) -> RGB:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _fill_empty(palette: Dict[SwatchName, Optional[Swatch]]) -> None:
    vibrant = palette.get(SwatchName.VIBRANT)
    dark_vibrant = palette.get(SwatchName.DARK_VIBRANT)
    if vibrant is None and dark_vibrant is not None:
        palette[SwatchName.VIBRANT] = _derive(dark_vibrant, SwatchName.VIBRANT, TARGET_NORMAL_LUMA)
    elif dark_vibrant is None and vibrant is not None:
        palette[SwatchName.DARK_VIBRANT] = _derive(vibrant, SwatchName.DARK_VIBRANT, TARGET_DARK_LUMA)


class VibrantExtractor:
    """
    Pillow backed extractor:
    - Median-cut quantization of a downscaled copy
    - Population per quantized color
    - Tonal classification into named swatches
    """

    def __init__(self, quantize_colors: Optional[int] = None, max_dimension: Optional[int] = None):
        settings = get_settings()
        self.quantize_colors = quantize_colors or settings.quantize_colors
        self.max_dimension = max_dimension or settings.max_image_dimension

    def load_image(self, image_bytes: bytes) -> Image.Image:
        """Decode bytes into a small RGBA image"""
        try:
            img = Image.open(io.BytesIO(image_bytes))
            img.load()
        except UnidentifiedImageError as e:
            raise UnsupportedFormatError(str(e)) from e
        except (OSError, SyntaxError, ValueError) as e:
            # Truncated or otherwise malformed data
            raise UnsupportedFormatError(f"Could not decode image: {e}") from e

        img = img.convert("RGBA")
        img.thumbnail((self.max_dimension, self.max_dimension))
        return img

    def opaque_pixels(self, img: Image.Image) -> List[RGB]:
        """RGB values of the pixels that are at least MIN_ALPHA opaque"""
        return [(r, g, b) for r, g, b, a in img.getdata() if a >= MIN_ALPHA]

    def quantize(self, pixels: List[RGB]) -> List[Tuple[RGB, int]]:
        """Quantize pixels and return (rgb, population) pairs, near-white removed"""
        if not pixels:
            return []

        strip = Image.new("RGB", (len(pixels), 1))
        strip.putdata(pixels)
        quantized = strip.quantize(colors=self.quantize_colors, method=Image.Quantize.MEDIANCUT)
        flat = quantized.getpalette() or []
        counts = quantized.getcolors(maxcolors=256) or []

        colors = []
        for population, index in counts:
            rgb = tuple(flat[index * 3:index * 3 + 3])
            if len(rgb) != 3:
                continue
            if all(c > 250 for c in rgb):
                continue
            colors.append((rgb, population))
        return colors

    def extract(self, image_bytes: bytes) -> Palette:
        img = self.load_image(image_bytes)
        pixels = self.opaque_pixels(img)
        colors = self.quantize(pixels)
        palette = classify_swatches(colors)
        logger.bind(
            size=f"{img.width}x{img.height}",
            opaque=len(pixels),
            quantized=len(colors),
            swatches=sum(1 for s in palette.values() if s is not None),
        ).debug("Palette extracted")
        return palette
