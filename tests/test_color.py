import re

import pytest

from servible.theming.color import (
    BLACK,
    SHADES,
    WHITE,
    InvalidColor,
    contrast_text,
    generate_palette,
    generate_palette_oklch,
    in_srgb_gamut,
    parse_color,
    to_oklch,
)

OKLCH_RE = re.compile(r"^oklch\(([\d.]+) ([\d.]+) (-?[\d.]+)\)$")


def test_parse_color_accepts_supported_forms() -> None:
    assert parse_color("#fff") == (1.0, 1.0, 1.0)
    assert parse_color("#000000") == (0.0, 0.0, 0.0)
    assert parse_color("rgb(255, 0, 0)") == (1.0, 0.0, 0.0)


@pytest.mark.parametrize("value", ["", "blue", "#12345", "rgb(300, 0, 0)", None])
def test_parse_color_rejects_garbage(value) -> None:
    with pytest.raises(InvalidColor):
        parse_color(value)


def test_white_and_black_round_trip_to_oklch_extremes() -> None:
    L_white, C_white, _ = to_oklch("#ffffff")
    L_black, _, _ = to_oklch("#000000")
    assert L_white == pytest.approx(1.0, abs=1e-3)
    assert C_white == pytest.approx(0.0, abs=1e-3)
    assert L_black == pytest.approx(0.0, abs=1e-3)


def test_palette_has_every_shade_as_oklch() -> None:
    palette = generate_palette("#2563eb")
    assert list(palette) == [shade for shade, _, _ in SHADES]
    for value in palette.values():
        assert OKLCH_RE.match(value), value


@pytest.mark.parametrize("color", ["#2563eb", "#f59e0b", "#10b981", "#000000", "#ffffff", "#ff00ff"])
def test_palette_lightness_strictly_decreases(color) -> None:
    lightness = [L for L, _, _ in generate_palette_oklch(color).values()]
    assert all(a > b for a, b in zip(lightness, lightness[1:]))
    assert all(0.0 <= L <= 1.0 for L in lightness)


@pytest.mark.parametrize("color", ["#ff0000", "#00ff00", "#0000ff", "#ff00ff", "#2563eb"])
def test_palette_shades_are_inside_srgb_gamut(color) -> None:
    for L, C, H in generate_palette_oklch(color).values():
        assert in_srgb_gamut(L, C, H)
        assert 0.0 <= C <= 0.37


def test_gray_input_keeps_a_neutral_ramp() -> None:
    for _, C, _ in generate_palette_oklch("#808080").values():
        assert C < 0.02


def test_contrast_text_is_binary_and_sensible() -> None:
    assert contrast_text("#000000") == WHITE
    assert contrast_text("#ffffff") == BLACK
    assert contrast_text("#2563eb") == WHITE
    assert contrast_text("#fde047") == BLACK
    for color in ("#123456", "#abcdef", "#777777", "#f59e0b"):
        assert contrast_text(color) in (WHITE, BLACK)


def _wcag_luminance(hex_color):
    channels = [int(hex_color[i:i + 2], 16) / 255 for i in (1, 3, 5)]
    r, g, b = (c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4 for c in channels)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def _wcag_ratio(first, second):
    return (max(first, second) + 0.05) / (min(first, second) + 0.05)


def test_contrast_text_always_picks_the_higher_contrast_option() -> None:
    steps = range(0, 256, 17)
    for r in steps:
        for g in steps:
            for b in steps:
                color = f"#{r:02x}{g:02x}{b:02x}"
                luminance = _wcag_luminance(color)
                on_white, on_black = _wcag_ratio(luminance, 1.0), _wcag_ratio(luminance, 0.0)
                expected = WHITE if on_white >= on_black else BLACK
                assert contrast_text(color) == expected, color
