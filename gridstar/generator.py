# gridstar/generator.py
from __future__ import annotations
from dataclasses import dataclass
import logging
from .grid import Grid
from .reachability import path_exists
from .rng import SeededRandom

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 120
SEED_MARKER = "*"        # appended after an unsolvable attempt
REGENERATE_MARKER = "#"  # appended by the "regenerate" control

@dataclass(frozen=True)
class Generation:
    mask: bytes
    seed: str
    attempts: int

def regenerate_seed(seed: str) -> str:
    return seed + REGENERATE_MARKER

def random_mask(grid: Grid, density: float, seed: str) -> bytearray:
    """One attempt: every cell but start and goal is blocked with probability `density`."""
    rng = SeededRandom.from_seed(seed)
    mask = grid.empty_mask()
    for y in range(grid.height):
        for x in range(grid.width):
            i = grid.index(x, y)
            if i == grid.start or i == grid.goal:
                continue
            if rng.random() < density:
                mask[i] = 1
    return mask

def generate_obstacles(width: int, height: int, density: float, seed: str,
                       guarantee_solvable: bool = True) -> Generation:
    """
    Seeded obstacle layout. With `guarantee_solvable`, retries with a perturbed
    seed until the layout is solvable, falling back to an empty mask after
    MAX_ATTEMPTS.
    """
    grid = Grid(width, height)
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be within [0, 1], got {density}")

    max_tries = MAX_ATTEMPTS if guarantee_solvable else 1
    for attempt in range(1, max_tries + 1):
        mask = random_mask(grid, density, seed)
        if not guarantee_solvable or path_exists(width, height, mask):
            return Generation(bytes(mask), seed, attempt)
        logger.debug("attempt %d with seed %r is unsolvable", attempt, seed)
        seed = seed + SEED_MARKER

    logger.warning("no solvable layout in %d attempts (%dx%d, density=%.2f); using an empty grid",
                   max_tries, width, height, density)
    return Generation(bytes(grid.empty_mask()), seed, max_tries)
