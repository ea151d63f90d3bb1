import pytest

from gridstar.grid import Grid
from gridstar.reachability import path_exists, shortest_path_length


def test_open_grid() -> None:
    assert path_exists(4, 4, bytearray(16))
    assert shortest_path_length(4, 4, bytearray(16)) == 7


def test_single_cell() -> None:
    assert shortest_path_length(1, 1, bytearray(1)) == 1
    assert not path_exists(1, 1, bytearray(b"\x01"))


def test_blocked_endpoints() -> None:
    m = bytearray(9)
    m[0] = 1
    assert not path_exists(3, 3, m)
    m = bytearray(9)
    m[8] = 1
    assert not path_exists(3, 3, m)


def test_wall_blocks() -> None:
    g = Grid(5, 5)
    m = g.empty_mask()
    for x in range(5):
        m[g.index(x, 2)] = 1
    assert not path_exists(5, 5, m)
    m[g.index(4, 2)] = 0
    assert path_exists(5, 5, m)


def test_no_wraparound_between_rows() -> None:
    # column x=1 blocked: index 2 -> 3 is not a move from (2,0) to (0,1)
    g = Grid(3, 3)
    m = g.empty_mask()
    for y in range(3):
        m[g.index(1, y)] = 1
    assert not path_exists(3, 3, m)


def test_mask_length_checked() -> None:
    with pytest.raises(ValueError):
        path_exists(3, 3, bytearray(4))
