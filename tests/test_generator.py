import pytest

from gridstar.generator import (MAX_ATTEMPTS, SEED_MARKER, generate_obstacles, random_mask,
                                regenerate_seed)
from gridstar.grid import Grid
from gridstar.reachability import path_exists


def test_same_inputs_same_layout() -> None:
    a = generate_obstacles(5, 5, 0.3, "seed-A", True)
    b = generate_obstacles(5, 5, 0.3, "seed-A", True)
    assert a == b
    assert a.mask == b.mask and a.attempts == b.attempts and a.seed == b.seed


def test_start_and_goal_stay_free() -> None:
    for i in range(20):
        gen = generate_obstacles(6, 4, 0.45, f"corner-{i}", guarantee_solvable=False)
        assert gen.mask[0] == 0
        assert gen.mask[-1] == 0
        assert len(gen.mask) == 24


def test_zero_density_is_clear() -> None:
    gen = generate_obstacles(8, 8, 0.0, "x", True)
    assert not any(gen.mask)
    assert gen.attempts == 1
    assert gen.seed == "x"


def test_full_density_single_attempt() -> None:
    gen = generate_obstacles(4, 3, 1.0, "full", guarantee_solvable=False)
    assert gen.attempts == 1
    assert sum(gen.mask) == 12 - 2


def test_unsolvable_falls_back_to_clear_grid() -> None:
    gen = generate_obstacles(3, 3, 1.0, "s", guarantee_solvable=True)
    assert gen.attempts == MAX_ATTEMPTS
    assert not any(gen.mask)
    assert gen.seed == "s" + SEED_MARKER * MAX_ATTEMPTS
    assert path_exists(3, 3, gen.mask)


@pytest.mark.parametrize("seed", [f"retry-{i}" for i in range(15)])
def test_guaranteed_layouts_are_solvable_and_reproducible(seed: str) -> None:
    gen = generate_obstacles(10, 10, 0.4, seed, guarantee_solvable=True)
    assert path_exists(10, 10, gen.mask)
    assert gen.seed == seed + SEED_MARKER * (gen.attempts - 1)
    assert bytes(random_mask(Grid(10, 10), 0.4, gen.seed)) == gen.mask


def test_without_guarantee_mask_matches_single_draw() -> None:
    gen = generate_obstacles(7, 5, 0.3, "plain", guarantee_solvable=False)
    assert gen.attempts == 1
    assert gen.mask == bytes(random_mask(Grid(7, 5), 0.3, "plain"))


def test_regenerate_seed() -> None:
    assert regenerate_seed("abc") == "abc#"
    assert generate_obstacles(9, 9, 0.3, "abc", False).mask != \
        generate_obstacles(9, 9, 0.3, regenerate_seed("abc"), False).mask


@pytest.mark.parametrize("w,h,density", [(0, 5, 0.2), (5, -1, 0.2), (5, 5, -0.1), (5, 5, 1.5)])
def test_invalid_arguments(w: int, h: int, density: float) -> None:
    with pytest.raises(ValueError):
        generate_obstacles(w, h, density, "bad", True)
