# gridstar/reachability.py
from __future__ import annotations
from collections import deque
from typing import Optional
from .grid import Grid
from .types import Mask

def path_exists(width: int, height: int, mask: Mask) -> bool:
    """True if the goal is reachable from the start through free cells."""
    return shortest_path_length(width, height, mask) is not None

def shortest_path_length(width: int, height: int, mask: Mask) -> Optional[int]:
    """
    Breadth-first search from start. Returns the number of cells on a shortest
    start-to-goal path (both ends included), or None when there is none.
    """
    grid = Grid(width, height)
    grid.check_mask(mask)
    start, goal = grid.start, grid.goal
    if mask[start] or mask[goal]:
        return None

    depth = [0] * grid.size
    seen = bytearray(grid.size)
    seen[start] = 1
    depth[start] = 1
    q = deque([start])
    while q:
        i = q.popleft()
        if i == goal:
            return depth[i]
        for j in grid.neighbors(i):
            if seen[j] or mask[j]:
                continue
            seen[j] = 1
            depth[j] = depth[i] + 1
            q.append(j)
    return None
