"""
OKLCH palette generation and WCAG contrast helpers.

Colors travel sRGB -> linear sRGB -> OKLab -> OKLCH and back, using the
matrices published with OKLab by Björn Ottosson. Everything here is pure.
"""
from __future__ import annotations

import math
import re
from typing import Dict, Tuple

RGB = Tuple[float, float, float]
OKLCH = Tuple[float, float, float]

WHITE = "#ffffff"
BLACK = "#000000"

# Inputs duller than this are treated as grays and keep a neutral ramp
ACHROMATIC_CHROMA = 0.02
MIN_PEAK_CHROMA = 0.08
MAX_CHROMA = 0.37

# shade -> (lightness, chroma multiplier). Chroma peaks in the mid-tones.
SHADES: Tuple[Tuple[str, float, float], ...] = (
    ("50", 0.97, 0.15),
    ("100", 0.93, 0.25),
    ("200", 0.86, 0.45),
    ("300", 0.76, 0.70),
    ("400", 0.65, 0.90),
    ("500", 0.55, 1.00),
    ("600", 0.47, 0.95),
    ("700", 0.39, 0.80),
    ("800", 0.32, 0.65),
    ("900", 0.25, 0.50),
    ("950", 0.18, 0.35),
)

_GAMUT_EPSILON = 1e-6

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)


class InvalidColor(ValueError):
    pass


def parse_color(value: str) -> RGB:
    """Parse ``#rgb``, ``#rrggbb`` or ``rgb(r, g, b)`` into sRGB channels in [0, 1]."""
    if not isinstance(value, str):
        raise InvalidColor(f"Color must be a string, got {type(value).__name__}")

    text = value.strip()

    match = _HEX_RE.match(text)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return (
            int(digits[0:2], 16) / 255,
            int(digits[2:4], 16) / 255,
            int(digits[4:6], 16) / 255,
        )

    match = _RGB_RE.match(text)
    if match:
        channels = [int(group) for group in match.groups()]
        if any(channel > 255 for channel in channels):
            raise InvalidColor(f"RGB channel out of range in {value!r}")
        return channels[0] / 255, channels[1] / 255, channels[2] / 255

    raise InvalidColor(f"Unsupported color value: {value!r}")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def srgb_to_linear(channel: float) -> float:
    if channel <= 0.04045:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def linear_to_srgb(channel: float) -> float:
    if channel <= 0.0031308:
        return channel * 12.92
    return 1.055 * channel ** (1 / 2.4) - 0.055


def linear_rgb_to_oklab(r: float, g: float, b: float) -> Tuple[float, float, float]:
    l = 0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b
    m = 0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b
    s = 0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b

    l_, m_, s_ = (math.copysign(abs(v) ** (1 / 3), v) for v in (l, m, s))

    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def oklab_to_linear_rgb(L: float, a: float, b: float) -> RGB:
    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b

    l, m, s = l_ ** 3, m_ ** 3, s_ ** 3

    return (
        4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s,
        -1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s,
        -0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s,
    )


def to_oklch(color: str) -> OKLCH:
    r, g, b = (srgb_to_linear(c) for c in parse_color(color))
    L, a, b_ = linear_rgb_to_oklab(r, g, b)
    chroma = math.hypot(a, b_)
    hue = math.degrees(math.atan2(b_, a)) % 360
    return L, chroma, hue


def oklch_to_linear_rgb(L: float, C: float, H: float) -> RGB:
    radians = math.radians(H)
    return oklab_to_linear_rgb(L, C * math.cos(radians), C * math.sin(radians))


def in_srgb_gamut(L: float, C: float, H: float) -> bool:
    return all(
        -_GAMUT_EPSILON <= channel <= 1 + _GAMUT_EPSILON
        for channel in oklch_to_linear_rgb(L, C, H)
    )


def fit_chroma(L: float, C: float, H: float) -> float:
    """Largest chroma <= ``C`` that keeps (L, C, H) displayable in sRGB."""
    if C <= 0 or in_srgb_gamut(L, C, H):
        return max(C, 0.0)

    low, high = 0.0, C
    for _ in range(24):
        mid = (low + high) / 2
        if in_srgb_gamut(L, mid, H):
            low = mid
        else:
            high = mid
    return low


def generate_palette_oklch(color: str) -> Dict[str, OKLCH]:
    _, source_chroma, hue = to_oklch(color)

    if source_chroma < ACHROMATIC_CHROMA:
        peak_chroma = source_chroma
    else:
        peak_chroma = _clamp(max(source_chroma, MIN_PEAK_CHROMA), 0.0, MAX_CHROMA)

    palette: Dict[str, OKLCH] = {}
    for shade, lightness, chroma_scale in SHADES:
        L = _clamp(lightness, 0.0, 1.0)
        C = fit_chroma(L, peak_chroma * chroma_scale, hue)
        palette[shade] = (L, C, hue)
    return palette


def format_oklch(L: float, C: float, H: float) -> str:
    return f"oklch({round(L, 4):g} {round(C, 4):g} {round(H, 1):g})"


def generate_palette(color: str) -> Dict[str, str]:
    """
    Expand one brand color into the 50..950 shade ramp as CSS ``oklch()`` values.

    Raises InvalidColor for unparseable input.
    """
    return {
        shade: format_oklch(*lch)
        for shade, lch in generate_palette_oklch(color).items()
    }


def relative_luminance(rgb: RGB) -> float:
    r, g, b = (srgb_to_linear(_clamp(c, 0.0, 1.0)) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: float, second: float) -> float:
    lighter, darker = max(first, second), min(first, second)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_text(color: str) -> str:
    """Return white or black, whichever reads better on ``color`` (white on ties)."""
    luminance = relative_luminance(parse_color(color))
    on_white = contrast_ratio(1.0, luminance)
    on_black = contrast_ratio(luminance, 0.0)
    return WHITE if on_white >= on_black else BLACK
