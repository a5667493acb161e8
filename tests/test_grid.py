from __future__ import annotations

import pytest

from charrain.engine import grid as grid_mod
from charrain.engine.cell import ASCII_MAX, ASCII_MIN, BLANK, CellState, decode, encode
from charrain.engine.grid import Grid
from charrain.errors import ConfigError, GridAllocationError


def test_initialize_allocates_every_cell():
    grid = Grid.initialize(3, 7, 0.1)
    assert grid.size == len(grid) == 21
    assert grid.drop_count == 0
    assert grid.drop_ratio == 0.1


@pytest.mark.parametrize("rows,columns", [(0, 5), (5, 0), (-1, 3)])
def test_rejects_degenerate_dimensions(rows, columns):
    with pytest.raises(ConfigError):
        Grid(rows, columns, 0.1)


@pytest.mark.parametrize("ratio", [0.0, 1.0, -0.5, 1.5])
def test_rejects_ratio_outside_open_interval(ratio):
    with pytest.raises(ValueError):
        Grid(4, 4, ratio)


def test_allocation_failure_is_fatal(monkeypatch):
    def no_memory(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(grid_mod, "array", no_memory)
    with pytest.raises(GridAllocationError):
        Grid(4, 4, 0.1)


@pytest.mark.parametrize("row,column", [(-1, 0), (0, -1), (4, 0), (0, 5), (100, 100)])
def test_get_out_of_range_reads_blank(row, column):
    grid = Grid(4, 5, 0.1)
    assert grid.get(row, column) == BLANK


def test_set_out_of_range_is_ignored():
    grid = Grid(4, 5, 0.1)
    before = grid.snapshot()
    grid.set(4, 0, encode(65, CellState.DROP, 9))
    grid.set(-1, 2, encode(65, CellState.DROP, 9))
    grid.set(0, 5, encode(65, CellState.DROP, 9))
    assert grid.snapshot() == before
    assert grid.drop_count == 0


def test_get_set_roundtrip_is_row_major():
    grid = Grid(3, 4, 0.1)
    cell = encode(ord("k"), CellState.TAIL, 2)
    grid.set(2, 1, cell)
    assert grid.get(2, 1) == cell
    assert grid.data[2 * 4 + 1] == cell


def test_drop_count_follows_writes():
    grid = Grid(3, 3, 0.1)
    grid.set_state(1, 1, CellState.DROP, 10)
    assert grid.drop_count == 1
    # rewriting a drop is not a new drop
    grid.set_state(1, 1, CellState.DROP, 20)
    assert grid.drop_count == 1
    grid.set_state(1, 1, CellState.TAIL, 3)
    assert grid.drop_count == 0
    grid.set_state(0, 0, CellState.DROP, 10)
    grid.set_state(0, 0, CellState.NONE)
    assert grid.drop_count == 0
    assert grid.count_drops() == 0


def test_set_character_keeps_state():
    grid = Grid(2, 2, 0.1)
    grid.set_state(0, 1, CellState.DROP, 15)
    grid.set_character(0, 1, ord("Z"))
    assert decode(grid.get(0, 1)) == (ord("Z"), CellState.DROP, 15)
    assert grid.drop_count == 1


def test_fill_random(rng):
    grid = Grid(8, 9, 0.1)
    grid.set_state(3, 3, CellState.DROP, 12)
    grid.fill_random(rng)

    assert grid.drop_count == 0
    for cell in grid:
        character, state, aux = decode(cell)
        assert ASCII_MIN <= character <= ASCII_MAX
        assert state == CellState.NONE
        assert aux == 0
    # not all the same character
    assert len({decode(c)[0] for c in grid}) > 1


def test_row_and_column_views(filled_grid):
    row = filled_grid.row(2)
    assert len(row) == filled_grid.columns
    assert row[5] == filled_grid.get(2, 5)

    column = filled_grid.column(5)
    assert len(column) == filled_grid.rows
    assert column[2] == filled_grid.get(2, 5)
