"""
Design token cascade.

Three layers, lowest precedence first:

1. defaults (normally empty, the base stylesheet owns them)
2. generated values: brand palettes, on-primary text color, fonts
3. tenant overrides: preset tokens, then the theme's own design tokens

Keys are bare token names until emission, where they gain the ``--``
custom-property marker. The result is an immutable mapping.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional
from urllib.parse import quote

from .color import InvalidColor, contrast_text, generate_palette
from .presets import get_preset

logger = logging.getLogger(__name__)

FONT_FALLBACK = "ui-sans-serif, system-ui, sans-serif"
GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2"
FONT_WEIGHTS = "300;400;500;600;700;800;900"

_UNSAFE_CSS = re.compile(r"[;{}<>]")


@dataclass(frozen=True)
class BrandColors:
    primary: Optional[str] = None
    secondary: Optional[str] = None


@dataclass(frozen=True)
class Fonts:
    heading: Optional[str] = None
    body: Optional[str] = None


@dataclass(frozen=True)
class ThemeContext:
    variables: Mapping[str, str]
    css: str
    fonts_url: Optional[str]
    color_mode: str
    template: str


def css_var(key: str) -> str:
    key = key.strip()
    return key if key.startswith("--") else f"--{key}"


def palette_variables(brand_colors: BrandColors) -> Dict[str, str]:
    variables: Dict[str, str] = {}

    for role, value in (("primary", brand_colors.primary), ("secondary", brand_colors.secondary)):
        if not value:
            continue
        try:
            palette = generate_palette(value)
        except InvalidColor:
            logger.warning("Ignoring unusable %s brand color %r", role, value)
            continue

        for shade, css_value in palette.items():
            variables[f"color-{role}-{shade}"] = css_value
        if role == "primary":
            variables["color-on-primary"] = contrast_text(value)

    return variables


def font_variables(fonts: Fonts) -> Dict[str, str]:
    variables: Dict[str, str] = {}
    if fonts.heading:
        variables["font-heading"] = f'"{fonts.heading}", {FONT_FALLBACK}'
    if fonts.body:
        variables["font-sans"] = f'"{fonts.body}", {FONT_FALLBACK}'
    return variables


def build_css_variables(
    brand_colors: BrandColors,
    token_overrides: Optional[Mapping[str, str]] = None,
    fonts: Optional[Fonts] = None,
    defaults: Optional[Mapping[str, str]] = None,
) -> Mapping[str, str]:
    """
    Resolve brand colors, fonts and token overrides into CSS custom properties.

    Pure: the same arguments always produce an equal mapping.
    """
    generated = {
        **palette_variables(brand_colors),
        **font_variables(fonts or Fonts()),
    }

    merged: Dict[str, str] = {}
    for layer in (defaults or {}, generated, token_overrides or {}):
        for key, value in layer.items():
            if value is None or not str(key).strip():
                continue
            merged[css_var(str(key))] = str(value).strip()

    return MappingProxyType(merged)


def google_fonts_url(fonts: Fonts) -> Optional[str]:
    """One batched stylesheet URL for every custom font family in use."""
    families = []
    if fonts.heading:
        families.append(fonts.heading)
    if fonts.body and fonts.body != fonts.heading:
        families.append(fonts.body)

    if not families:
        return None

    params = "&".join(
        "family=" + quote(family, safe="") + ":wght@" + FONT_WEIGHTS
        for family in families
    )
    return f"{GOOGLE_FONTS_CSS_URL}?{params}&display=swap"


def render_root_css(variables: Mapping[str, str], selector: str = ":root") -> str:
    declarations = []
    for name, value in variables.items():
        if _UNSAFE_CSS.search(name) or _UNSAFE_CSS.search(value):
            logger.warning("Dropping unsafe design token %s", name)
            continue
        declarations.append(f"  {name}: {value};")
    return selector + " {\n" + "\n".join(declarations) + "\n}"


def theme_overrides(theme) -> Dict[str, str]:
    if theme is None:
        return {}
    return {**get_preset(theme.token_preset), **(theme.design_tokens or {})}


def resolve_theme(site) -> ThemeContext:
    """Build the per-request theme for a site and its optional Theme row."""
    theme = site.theme
    fonts = Fonts(
        heading=theme.font_heading if theme else None,
        body=theme.font_body if theme else None,
    )

    variables = build_css_variables(
        BrandColors(primary=site.primary_color, secondary=site.secondary_color),
        token_overrides=theme_overrides(theme),
        fonts=fonts,
    )

    return ThemeContext(
        variables=variables,
        css=render_root_css(variables),
        fonts_url=google_fonts_url(fonts),
        color_mode=(theme.color_mode if theme else None) or "light",
        template=(theme.template if theme else None) or "modern",
    )
