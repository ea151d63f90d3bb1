import pytest

from gridstar.config import Settings
from gridstar.viewer import (CANVAS_H, CANVAS_W, MAX_DENSITY, MAX_HEIGHT, MAX_WIDTH, MIN_HEIGHT, MIN_WIDTH,
                             StepClock, cell_layout, fit_settings)


def test_step_clock_accumulates() -> None:
    clock = StepClock(4.0)
    assert clock.advance(0.2) == 0
    assert clock.advance(0.1) == 1
    assert clock.advance(1.0) == 4
    clock.reset()
    assert clock.acc == 0.0


def test_step_clock_speed_floor() -> None:
    clock = StepClock(0.0)
    assert clock.interval == pytest.approx(10.0)
    clock.set_speed(4)
    assert clock.advance(0.5) == 2


@pytest.mark.parametrize("w,h", [(64, 36), (16, 9), (120, 80), (5, 5)])
def test_cell_layout_fits_canvas(w: int, h: int) -> None:
    cell, ox, oy = cell_layout(w, h)
    assert cell * w <= CANVAS_W and cell * h <= CANVAS_H
    assert ox + cell * w <= CANVAS_W
    assert oy + cell * h <= CANVAS_H


@pytest.mark.parametrize("w,h", [(600, 36), (64, 400), (3, 2), (1000, 1000)])
def test_fit_settings_keeps_grid_on_canvas(w: int, h: int) -> None:
    s = fit_settings(Settings(width=w, height=h, density=0.9))
    assert MIN_WIDTH <= s.width <= MAX_WIDTH
    assert MIN_HEIGHT <= s.height <= MAX_HEIGHT
    assert s.density == MAX_DENSITY
    cell, ox, oy = cell_layout(s.width, s.height)
    assert ox + cell * s.width <= CANVAS_W
    assert oy + cell * s.height <= CANVAS_H


def test_fit_settings_leaves_supported_values() -> None:
    s = Settings(width=64, height=36, density=0.22, seed="keep")
    assert fit_settings(s) == s
