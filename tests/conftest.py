# SPDX-License-Identifier: MIT
from __future__ import annotations

import random

import pytest
from typer.testing import CliRunner

from charrain.engine import CellState, Grid, decode


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """
    Keep the user's config file and CHARRAIN_* environment out of the tests.
    """
    for key in ("SPEED", "DROPS", "ERROR", "SEED", "BG", "CONFIG"):
        monkeypatch.delenv(f"CHARRAIN_{key}", raising=False)
    # the default file may be absent; point it at one that is
    monkeypatch.setattr("charrain.config.DEFAULT_CONFIG_PATH", tmp_path / "config.toml")
    yield


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def column_grid() -> Grid:
    """An empty 10x1 grid; every cell is character 0, NONE."""
    return Grid(10, 1, 0.5)


@pytest.fixture()
def filled_grid(rng) -> Grid:
    grid = Grid(12, 20, 0.05)
    grid.fill_random(rng)
    return grid


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def column_states(grid: Grid, column: int = 0):
    """[(state, aux), ...] top to bottom."""
    return [decode(grid.get(r, column))[1:] for r in range(grid.rows)]


def check_invariants(grid: Grid, palette_size: int = 6) -> None:
    """Full-scan checks that must hold after every tick."""
    from charrain.engine import TSIZE_MAX, TSIZE_MIN

    drops = 0
    for cell in grid.data:
        _, state, aux = decode(cell)
        if state == CellState.NONE:
            assert aux == 0
        elif state == CellState.DROP:
            drops += 1
            assert TSIZE_MIN <= aux <= TSIZE_MAX
        else:
            assert 0 <= aux <= palette_size - 1
    assert grid.drop_count == drops
