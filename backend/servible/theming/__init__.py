from .color import InvalidColor, contrast_text, generate_palette, parse_color
from .tokens import (
    BrandColors,
    Fonts,
    ThemeContext,
    build_css_variables,
    google_fonts_url,
    render_root_css,
    resolve_theme,
)
