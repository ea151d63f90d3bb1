import pytest

from gridstar.generator import generate_obstacles
from gridstar.grid import Grid


def test_index_and_coord() -> None:
    g = Grid(4, 3)
    assert g.size == 12
    assert g.start == 0 and g.goal == 11
    assert g.index(3, 2) == 11
    assert g.coord(6) == (2, 1)


def test_neighbors_are_bounds_checked() -> None:
    g = Grid(3, 3)
    assert g.neighbors(0) == [1, 3]
    assert g.neighbors(4) == [3, 5, 1, 7]
    assert g.neighbors(8) == [7, 5]
    assert Grid(1, 1).neighbors(0) == []


def test_non_positive_dimensions() -> None:
    with pytest.raises(ValueError):
        Grid(0, 3)
    with pytest.raises(ValueError):
        Grid(3, -2)


def test_toggled_copies_and_protects_endpoints() -> None:
    g = Grid(3, 3)
    m = g.empty_mask()
    t = g.toggled(m, 4)
    assert t[4] == 1 and m[4] == 0
    assert g.toggled(t, 4)[4] == 0
    assert g.toggled(m, 0) == m
    assert g.toggled(m, 8) == m


def test_save_and_load(tmp_path) -> None:
    g = Grid(7, 5)
    gen = generate_obstacles(7, 5, 0.3, "file", True)
    path = tmp_path / "envs" / "grid_000.txt"
    g.save(str(path), gen.mask)
    lines = path.read_text().splitlines()
    assert lines[0] == "GRID 7 5"
    assert len(lines) == 6
    loaded, mask = Grid.load(str(path))
    assert loaded == g
    assert bytes(mask) == gen.mask


def test_load_headerless(tmp_path) -> None:
    path = tmp_path / "legacy.txt"
    path.write_text("0100\n0101\n0000\n")
    g, mask = Grid.load(str(path))
    assert (g.width, g.height) == (4, 3)
    assert [i for i, v in enumerate(mask) if v] == [1, 5, 7]


@pytest.mark.parametrize("text", ["", "GRID 3 2\n000\n", "GRID 3 2\n000\n0a0\n", "GRID 3\n000\n", "01\n011\n"])
def test_load_rejects_malformed(tmp_path, text: str) -> None:
    path = tmp_path / "bad.txt"
    path.write_text(text)
    with pytest.raises(ValueError):
        Grid.load(str(path))
