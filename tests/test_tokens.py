import logging

import pytest

from servible.theming import (
    BrandColors,
    Fonts,
    build_css_variables,
    google_fonts_url,
    render_root_css,
    resolve_theme,
)
from servible.theming.presets import TOKEN_PRESETS, get_preset


def test_generated_layer_contains_palettes_and_fonts() -> None:
    variables = build_css_variables(
        BrandColors(primary="#2563eb", secondary="#f59e0b"),
        fonts=Fonts(heading="Playfair Display", body="Inter"),
    )
    assert variables["--color-primary-500"].startswith("oklch(")
    assert variables["--color-secondary-950"].startswith("oklch(")
    assert variables["--color-on-primary"] == "#ffffff"
    assert variables["--font-heading"].startswith('"Playfair Display"')
    assert variables["--font-sans"].startswith('"Inter"')


def test_overrides_win_over_generated_and_defaults() -> None:
    variables = build_css_variables(
        BrandColors(primary="#2563eb"),
        token_overrides={"color-primary-500": "red", "--radius-card": "2rem"},
        defaults={"radius-card": "0.5rem", "spacing": "1rem"},
    )
    assert variables["--color-primary-500"] == "red"
    assert variables["--radius-card"] == "2rem"
    assert variables["--spacing"] == "1rem"
    assert "----radius-card" not in variables


def test_result_is_immutable_and_pure() -> None:
    args = (BrandColors(primary="#10b981"), {"radius-card": "1rem"}, Fonts(body="Inter"))
    first = build_css_variables(*args)
    assert first == build_css_variables(*args)
    with pytest.raises(TypeError):
        first["--radius-card"] = "0"  # type: ignore[index]


def test_missing_and_invalid_colors_are_omitted(caplog) -> None:
    assert not [k for k in build_css_variables(BrandColors()) if k.startswith("--color-")]

    with caplog.at_level(logging.WARNING, logger="servible.theming.tokens"):
        variables = build_css_variables(BrandColors(primary="not-a-color", secondary="#f59e0b"))

    assert not [k for k in variables if k.startswith("--color-primary")]
    assert "--color-on-primary" not in variables
    assert "--color-secondary-500" in variables
    assert "not-a-color" in caplog.text


def test_google_fonts_url_batches_distinct_families() -> None:
    url = google_fonts_url(Fonts(heading="Playfair Display", body="Inter"))
    assert url.startswith("https://fonts.googleapis.com/css2?")
    assert "family=Playfair%20Display:wght@300;400;500;600;700;800;900" in url
    assert "family=Inter:wght@" in url
    assert url.endswith("&display=swap")

    same = google_fonts_url(Fonts(heading="Inter", body="Inter"))
    assert same.count("family=") == 1
    assert google_fonts_url(Fonts()) is None


def test_render_root_css_drops_values_that_break_out(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="servible.theming.tokens"):
        css = render_root_css({"--ok": "1rem", "--bad": "red; } body { color: red"})

    assert css.startswith(":root {")
    assert "--ok: 1rem;" in css
    assert "--bad" not in css
    assert "--bad" in caplog.text


def test_presets_are_flat_string_maps() -> None:
    assert set(TOKEN_PRESETS) == {"premiumDark", "cleanMinimal", "boldVibrant", "classicElegant"}
    for preset in TOKEN_PRESETS.values():
        assert all(isinstance(k, str) and isinstance(v, str) for k, v in preset.items())
    assert get_preset("nope") == {}


def test_resolve_theme_layers_preset_then_design_tokens(published_site) -> None:
    theme = published_site.theme
    theme.token_preset = "premiumDark"
    theme.design_tokens = {"radius-card": "3rem"}

    context = resolve_theme(published_site)

    assert context.variables["--heading-weight"] == "800"
    assert context.variables["--radius-card"] == "3rem"
    assert "--radius-card: 3rem;" in context.css
    assert "Playfair%20Display" in context.fonts_url
    assert context.color_mode == "light"
    assert context.template == "modern"
