# gridstar/astar.py
"""
Incremental A* over a 4-connected grid: one expansion per step().

Cost is 1 per move and h is the Manhattan distance to the goal (bottom-right
cell), so the first time the goal is expanded its path is optimal.

Open-set ordering: lowest f, then lowest h, then the order in which the cell
entered the open set (FIFO). The open set is a heap of (f, h, seq, cell) with
lazy deletion; an entry is stale once its cell is closed or its f changed.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import heapq
import logging
from math import inf

from .grid import Grid
from .heuristics import manhattan
from .types import Index, Mask, SearchStatus, StepResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineView:
    """Read-only copy of the engine state, taken after a step."""
    width: int
    height: int
    status: SearchStatus
    current: Optional[Index]
    iterations: int
    open_cells: Tuple[Index, ...]
    closed_mask: bytes
    obstacles: bytes
    path: Tuple[Index, ...]
    current_scores: Optional[Tuple[float, float, float]]

    @property
    def finished(self) -> bool:
        return self.status is not SearchStatus.SEARCHING

    @property
    def succeeded(self) -> bool:
        return self.status is SearchStatus.SUCCEEDED


class AStarEngine:
    def __init__(self, width: int, height: int, obstacles: Mask):
        self.grid = Grid(width, height)
        self.grid.check_mask(obstacles)
        self.obstacles = bytes(obstacles)

        n = self.grid.size
        self.start = self.grid.start
        self.goal = self.grid.goal

        goal_xy = self.grid.coord(self.goal)
        self._h: List[int] = [manhattan(self.grid.coord(i), goal_xy) for i in range(n)]
        self._g: List[float] = [inf] * n
        self._f: List[float] = [inf] * n
        self._came: List[int] = [-1] * n
        self._closed = bytearray(n)

        # cell -> insertion seq; dict order is open-set order
        self._open: Dict[Index, int] = {}
        self._heap: List[Tuple[float, int, int, Index]] = []
        self._seq = 0

        self.status = SearchStatus.SEARCHING
        self.current: Optional[Index] = None
        self.iterations = 0
        self._path: List[Index] = []

        self._g[self.start] = 0
        self._f[self.start] = self._h[self.start]
        # a blocked start is never expanded, so the search exhausts on the first step
        if not self.obstacles[self.start]:
            self._push_open(self.start)

    # ----------------- observers -----------------
    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def finished(self) -> bool:
        return self.status is not SearchStatus.SEARCHING

    @property
    def succeeded(self) -> bool:
        return self.status is SearchStatus.SUCCEEDED

    @property
    def path(self) -> Tuple[Index, ...]:
        return tuple(self._path)

    @property
    def open_cells(self) -> Tuple[Index, ...]:
        return tuple(self._open)

    @property
    def closed_mask(self) -> bytes:
        return bytes(self._closed)

    def is_open(self, i: Index) -> bool:
        return i in self._open

    def is_closed(self, i: Index) -> bool:
        return bool(self._closed[i])

    def g(self, i: Index) -> float:
        return self._g[i]

    def h(self, i: Index) -> int:
        return self._h[i]

    def f(self, i: Index) -> float:
        return self._f[i]

    def current_scores(self) -> Optional[Tuple[float, float, float]]:
        """(g, h, f) of the cell expanded last, None before the first step."""
        if self.current is None:
            return None
        c = self.current
        return self._g[c], self._h[c], self._f[c]

    def snapshot(self) -> EngineView:
        return EngineView(
            width=self.width,
            height=self.height,
            status=self.status,
            current=self.current,
            iterations=self.iterations,
            open_cells=self.open_cells,
            closed_mask=self.closed_mask,
            obstacles=self.obstacles,
            path=self.path,
            current_scores=self.current_scores(),
        )

    # ----------------- stepping -----------------
    def step(self) -> StepResult:
        """Expand one cell. A no-op once the search has finished."""
        if self.finished:
            return self._result()

        u = self._pop_best()
        if u is None:
            self.status = SearchStatus.EXHAUSTED
            logger.debug("open set exhausted after %d expansions, no path", self.iterations)
            return self._result()

        self._closed[u] = 1
        self.current = u
        self.iterations += 1

        if u == self.goal:
            self.status = SearchStatus.SUCCEEDED
            self._path = self._reconstruct_path(u)
            logger.debug("goal reached after %d expansions, path of %d cells",
                         self.iterations, len(self._path))
            return self._result()

        opened: List[Index] = []
        improved: List[Index] = []
        gn = self._g[u] + 1
        for v in self.grid.neighbors(u):
            if self._closed[v] or self.obstacles[v]:
                continue
            if gn >= self._g[v]:
                continue
            self._came[v] = u
            self._g[v] = gn
            self._f[v] = gn + self._h[v]
            if v in self._open:
                heapq.heappush(self._heap, (self._f[v], self._h[v], self._open[v], v))
                improved.append(v)
            else:
                self._push_open(v)
                opened.append(v)

        return self._result(tuple(opened), tuple(improved))

    def run(self, max_steps: Optional[int] = None) -> StepResult:
        """Step until finished, or until `max_steps` expansions were attempted."""
        res = self._result()
        taken = 0
        while not self.finished and (max_steps is None or taken < max_steps):
            res = self.step()
            taken += 1
        return res

    # ----------------- internals -----------------
    def _push_open(self, i: Index) -> None:
        self._seq += 1
        self._open[i] = self._seq
        heapq.heappush(self._heap, (self._f[i], self._h[i], self._seq, i))

    def _pop_best(self) -> Optional[Index]:
        while self._heap:
            f, _, _, i = heapq.heappop(self._heap)
            if i in self._open and f == self._f[i]:
                del self._open[i]
                return i
        return None

    def _reconstruct_path(self, end: Index) -> List[Index]:
        path: List[Index] = []
        cur = end
        while cur != -1:
            path.append(cur)
            cur = self._came[cur]
        path.reverse()
        return path

    def _result(self, opened: Tuple[Index, ...] = (), improved: Tuple[Index, ...] = ()) -> StepResult:
        return StepResult(status=self.status, current=self.current, opened=opened,
                          improved=improved, iterations=self.iterations)
