def normalize_theme(theme):
    return {
        "template": theme.template,
        "color_mode": theme.color_mode,
        "font_heading": theme.font_heading,
        "font_body": theme.font_body,
        "token_preset": theme.token_preset,
        "design_tokens": theme.design_tokens or {},
    }


def normalize_theme_context(context):
    """Serialize a resolved ThemeContext for the admin theme editor."""
    return {
        "variables": dict(context.variables),
        "css": context.css,
        "fonts_url": context.fonts_url,
        "color_mode": context.color_mode,
        "template": context.template,
    }
