import numpy as np
import pytest

from mandelpix.palette import BLACK, RGBA, ULTRA_FRACTAL, Palette, color_for, parse_hex_color


def test_pixel_color():
    assert color_for(0, 10) == (0, 0, 0, 255)
    assert color_for(10, 10) == (0, 0, 0, 255)
    assert color_for(4, 10) == (0, 7, 100, 255)


def test_escaping_points_never_get_the_interior_color():
    palette = Palette(colors=((0, 0, 0), (1, 2, 3)), interior=(9, 9, 9))
    colors = {palette.color_for(count, 100) for count in range(1, 100)}
    assert RGBA(9, 9, 9, 255) not in colors
    assert colors == {RGBA(0, 0, 0, 255), RGBA(1, 2, 3, 255)}


def test_colors_cycle_through_the_palette():
    assert len(ULTRA_FRACTAL) == 16
    assert color_for(17, 1000) == color_for(1, 1000) == (25, 7, 26, 255)
    assert color_for(16, 1000) == (66, 30, 15, 255)


def test_counts_beyond_the_limit_are_interior():
    palette = Palette(colors=ULTRA_FRACTAL.colors, interior=(255, 255, 255, 255))
    assert palette.color_for(11, 10) == (255, 255, 255, 255)
    assert palette.color_for(-1, 10) == (255, 255, 255, 255)


def test_colorize_matches_color_for():
    counts = np.arange(0, 40, dtype=np.int32).reshape(5, 8)
    rgba = ULTRA_FRACTAL.colorize(counts, 35)
    assert rgba.shape == (5, 8, 4)
    assert rgba.dtype == np.uint8
    for (row, col), count in np.ndenumerate(counts):
        assert tuple(rgba[row, col]) == ULTRA_FRACTAL.color_for(int(count), 35)


def test_palette_rejects_empty_and_out_of_range_colors():
    with pytest.raises(ValueError):
        Palette(colors=())
    with pytest.raises(ValueError):
        Palette(colors=((0, 0, 256),))
    with pytest.raises(ValueError):
        Palette(colors=((0, 0),))


def test_from_colormap():
    palette = Palette.from_colormap("viridis", size=8, interior=RGBA(1, 2, 3))
    assert len(palette) == 8
    assert palette.interior == (1, 2, 3, 255)
    assert all(color.a == 255 for color in palette.colors)
    assert palette.colors[0] != palette.colors[-1]


def test_from_colormap_unknown_name():
    with pytest.raises(ValueError):
        Palette.from_colormap("no-such-colormap")


def test_parse_hex_color():
    assert parse_hex_color("#0a3ba0") == (10, 59, 160, 255)
    assert parse_hex_color("ff000080") == (255, 0, 0, 128)
    assert parse_hex_color("#000000") == BLACK
    with pytest.raises(ValueError):
        parse_hex_color("#12345")
    with pytest.raises(ValueError):
        parse_hex_color("#zzzzzz")
