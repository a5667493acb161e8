from __future__ import annotations

from charrain.engine.cell import ASCII_MAX, ASCII_MIN, decode
from charrain.engine.glitch import glitch
from charrain.engine.rain import place_drop


def test_zero_fraction_leaves_grid_untouched(filled_grid, rng):
    place_drop(filled_grid, 6, 4, 9)
    before = filled_grid.snapshot()
    assert glitch(filled_grid, 0.0, rng) == 0
    assert filled_grid.snapshot() == before


def test_draw_count_is_floor_of_fraction(filled_grid, rng):
    # 12 x 20 = 240 cells
    assert glitch(filled_grid, 0.02, rng) == 4
    assert glitch(filled_grid, 0.5, rng) == 120


def test_only_characters_change(filled_grid, rng):
    place_drop(filled_grid, 6, 4, 9)
    place_drop(filled_grid, 11, 15, 20)
    states_before = [decode(c)[1:] for c in filled_grid]
    chars_before = [decode(c)[0] for c in filled_grid]
    drops_before = filled_grid.drop_count

    glitch(filled_grid, 0.5, rng)

    assert [decode(c)[1:] for c in filled_grid] == states_before
    assert filled_grid.drop_count == drops_before
    chars_after = [decode(c)[0] for c in filled_grid]
    assert chars_after != chars_before
    assert all(ASCII_MIN <= ch <= ASCII_MAX for ch in chars_after)
