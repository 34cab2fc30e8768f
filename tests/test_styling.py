import re

import numpy as np
import pytest

from ttview.errors import EmptyGradientRamp
from ttview.styling import (
    RESET,
    Braille,
    Color,
    Gradient,
    Greyscale,
    Style,
    bg,
    braille_codes,
    brightness,
    fg,
    render,
)

BLOCK = "▀"


def test_brightness_reference_values():
    assert brightness((1.0, 1.0, 1.0)) == pytest.approx(1.0)
    assert brightness((0.5, 0.5, 0.5)) == pytest.approx(0.5)
    assert brightness((0.0, 0.0, 0.0)) == 0.0
    assert brightness((1.0, 0.0, 0.0)) == pytest.approx(0.299)
    assert brightness((0.0, 1.0, 0.0)) == pytest.approx(0.587)
    assert brightness((0.0, 0.0, 1.0)) == pytest.approx(0.114)


def test_brightness_of_grid(solid):
    result = brightness(solid(3, 4, 0.25))
    assert result.shape == (3, 4)
    np.testing.assert_allclose(result, 0.25, rtol=1e-6)


def test_escape_sequences():
    assert fg(255, 0, 10) == "\033[38;2;255;0;10m"
    assert bg(1, 2, 3) == "\033[48;2;1;2;3m"
    assert RESET == "\033[0m"


def test_color_pairs_rows(solid):
    image = solid(2, 2)
    image[0] = (1.0, 0.0, 0.0)
    image[1] = (0.0, 0.0, 1.0)
    cell = fg(255, 0, 0) + bg(0, 0, 255) + BLOCK + RESET
    assert render(image, Color()) == cell * 2 + "\n"


def test_color_odd_final_row_has_no_background(solid):
    image = solid(3, 1, 1.0)
    lines = render(image, Color()).split("\n")
    assert lines[0] == fg(255, 255, 255) + bg(255, 255, 255) + BLOCK + RESET
    assert lines[1] == fg(255, 255, 255) + BLOCK + RESET
    assert lines[2] == ""


def test_color_channels_clamped(solid):
    image = solid(1, 1, (1.5, -0.2, 0.5))
    assert render(image, Color()).startswith(fg(255, 0, 128))


def test_greyscale_uses_brightness(solid):
    image = solid(2, 1)
    image[0] = (1.0, 0.0, 0.0)
    image[1] = (0.0, 1.0, 0.0)
    expected = fg(76, 76, 76) + bg(150, 150, 150) + BLOCK + RESET + "\n"
    assert render(image, Greyscale()) == expected


def test_color_does_not_mutate(solid):
    image = solid(4, 4, 0.3)
    render(image, Color())
    render(image, Greyscale())
    np.testing.assert_array_equal(image, 0.3 * np.ones((4, 4, 3), dtype=np.float32))


def test_gradient_extremes(solid):
    style = Gradient(" .:#@")
    assert render(solid(2, 2, 0.0), style) == (" " + RESET) * 2 + "\n"
    assert render(solid(2, 2, 1.0), style) == ("@" + RESET) * 2 + "\n"


def test_gradient_averages_row_pairs(solid):
    image = solid(2, 1, 0.0)
    image[1] = 1.0
    assert render(image, Gradient(" .:#@")) == ":" + RESET + "\n"


def test_gradient_odd_final_row_uses_top_only(solid):
    image = solid(3, 1, 0.0)
    image[2] = 1.0
    assert render(image, Gradient(" @")) == " " + RESET + "\n" + "@" + RESET + "\n"


def test_gradient_clamps_out_of_range_brightness(solid):
    assert render(solid(1, 1, 2.0), Gradient("ab")) == "b" + RESET + "\n"
    assert render(solid(1, 1, -1.0), Gradient("ab")) == "a" + RESET + "\n"


def test_gradient_single_glyph(solid):
    assert render(solid(2, 3, 0.7), Gradient("x")) == ("x" + RESET) * 3 + "\n"


def test_gradient_has_no_colour(solid):
    assert "[38;2" not in render(solid(4, 4, 0.6), Gradient("abc"))


def test_empty_gradient_rejected():
    with pytest.raises(EmptyGradientRamp):
        Gradient("")


def test_braille_full_and_empty_blocks(solid):
    assert render(solid(4, 2, 0.0), Braille()) == "⣿\n"
    assert render(solid(4, 2, 1.0), Braille()) == "⠀\n"


@pytest.mark.parametrize(
    "offset, bit",
    [((0, 0), 0), ((0, 1), 1), ((0, 2), 2), ((1, 0), 3), ((1, 1), 4), ((1, 2), 5), ((0, 3), 6), ((1, 3), 7)],
)
def test_braille_dot_order(solid, offset, bit):
    x, y = offset
    image = solid(4, 2, 1.0)
    image[y, x] = 0.0
    assert braille_codes(image).tolist() == [[1 << bit]]


def test_braille_partial_blocks_leave_dots_unset(solid):
    codes = braille_codes(solid(5, 3, 0.0))
    assert codes.tolist() == [[0xFF, 0x47], [0x09, 0x01]]


def test_braille_threshold_is_half(solid):
    assert braille_codes(solid(4, 2, 0.49)).tolist() == [[0xFF]]
    assert braille_codes(solid(4, 2, 0.5)).tolist() == [[0x00]]


def test_braille_lines_and_no_escapes(solid):
    result = render(solid(8, 6, 0.0), Braille())
    assert result == "⣿⣿⣿\n⣿⣿⣿\n"
    assert "\033" not in result


def test_unknown_style_rejected(solid):
    with pytest.raises(TypeError):
        render(solid(2, 2), Style())


def test_styles_compare_by_value():
    assert Color() == Color()
    assert Gradient("ab") == Gradient("ab")
    assert Gradient("ab") != Gradient("ba")
    assert Color() != Greyscale()


def test_truecolor_values_in_byte_range(solid):
    rng = np.random.default_rng(3)
    image = rng.random((6, 5, 3)).astype(np.float32)
    for value in re.findall(r"\[[34]8;2;(\d+);(\d+);(\d+)m", render(image, Color())):
        assert all(0 <= int(v) <= 255 for v in value)
