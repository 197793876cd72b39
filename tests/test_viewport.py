"""
Preview geometry: zoom limits and the visible tile that gets resized.

Run from project root: pytest tests/test_viewport.py -v
"""

import pytest

from rawconv.ui.viewport import (
    ZOOM_MAX,
    ZOOM_MIN,
    clamp_zoom,
    fit_zoom,
    next_zoom_step,
    scaled_size,
    visible_tile,
)


def test_clamp_zoom():
    assert clamp_zoom(5) == ZOOM_MIN
    assert clamp_zoom(99.6) == 100
    assert clamp_zoom(10_000) == ZOOM_MAX


def test_zoom_steps():
    assert next_zoom_step(100, 1) == 200
    assert next_zoom_step(100, -1) == 50
    assert next_zoom_step(130, 1) == 200
    assert next_zoom_step(ZOOM_MAX, 1) == ZOOM_MAX
    assert next_zoom_step(ZOOM_MIN, -1) == ZOOM_MIN


def test_fit_zoom_picks_largest_fitting_step():
    assert fit_zoom((100, 100), (800, 600)) == 400
    assert fit_zoom((2048, 2048), (800, 600)) == 25
    assert fit_zoom((100000, 10), (800, 600)) == ZOOM_MIN


def test_max_zoom_on_large_image_stays_window_sized():
    """2048x2048 at the top zoom: only about one window of pixels is resized."""
    view = (800, 600)
    tile = visible_tile((2048, 2048), ZOOM_MAX, (0, 0), view)
    scale = ZOOM_MAX / 100
    assert tile.size[0] <= view[0] + 2 * scale
    assert tile.size[1] <= view[1] + 2 * scale
    assert scaled_size((2048, 2048), ZOOM_MAX) == (32768, 32768)


@pytest.mark.parametrize("origin", [(0, 0), (12345.5, 20000.0), (32768 - 800, 32768 - 600), (7, 3)])
def test_panned_view_is_covered(origin):
    """Wherever the view is dragged, the tile covers it and stays bounded."""
    view = (800, 600)
    percent = 1600
    scale = percent / 100
    tile = visible_tile((2048, 2048), percent, origin, view)
    x0, y0, x1, y1 = tile.box
    assert 0 <= x0 < x1 <= 2048 and 0 <= y0 < y1 <= 2048
    assert tile.offset[0] <= origin[0] and tile.offset[1] <= origin[1]
    assert tile.offset[0] + tile.size[0] >= min(origin[0] + view[0], 32768)
    assert tile.offset[1] + tile.size[1] >= min(origin[1] + view[1], 32768)
    assert tile.size[0] * tile.size[1] <= (view[0] + 2 * scale) * (view[1] + 2 * scale)


def test_zoomed_out_image_is_fully_visible():
    tile = visible_tile((300, 200), 50, (0, 0), (800, 600))
    assert tile.box == (0, 0, 300, 200)
    assert tile.offset == (0, 0)
    assert tile.size == (150, 100)


def test_view_outside_image():
    assert visible_tile((10, 10), 100, (50, 50), (20, 20)) is None
    assert visible_tile((0, 0), 100, (0, 0), (20, 20)) is None
