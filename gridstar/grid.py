# gridstar/grid.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple
import os
from .types import Coord, Index, Mask

@dataclass(frozen=True)
class Grid:
    """
    Rectangular 4-connected grid addressed by flat index i = y * width + x.
    Start is always the top-left cell, goal the bottom-right one.
    """
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def start(self) -> Index:
        return 0

    @property
    def goal(self) -> Index:
        return self.size - 1

    def index(self, x: int, y: int) -> Index:
        return y * self.width + x

    def coord(self, i: Index) -> Coord:
        return i % self.width, i // self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(self, i: Index) -> List[Index]:
        # left, right, up, down
        x, y = self.coord(i)
        out: List[Index] = []
        if x > 0:
            out.append(i - 1)
        if x < self.width - 1:
            out.append(i + 1)
        if y > 0:
            out.append(i - self.width)
        if y < self.height - 1:
            out.append(i + self.width)
        return out

    def empty_mask(self) -> bytearray:
        return bytearray(self.size)

    def check_mask(self, mask: Mask) -> None:
        if len(mask) != self.size:
            raise ValueError(f"mask has {len(mask)} cells, grid {self.width}x{self.height} needs {self.size}")

    def toggled(self, mask: Mask, i: Index) -> bytearray:
        """Copy of `mask` with cell `i` flipped. Start and goal are never toggled."""
        self.check_mask(mask)
        out = bytearray(mask)
        if i in (self.start, self.goal) or not 0 <= i < self.size:
            return out
        out[i] = 0 if out[i] else 1
        return out

    @staticmethod
    def load(path: str) -> Tuple["Grid", bytearray]:
        with open(path, "r") as f:
            lines = [line.strip() for line in f if line.strip()]
        if not lines:
            raise ValueError(f"{path}: empty grid file")

        header = lines[0].split()
        if header and header[0] == "GRID":
            if len(header) != 3:
                raise ValueError(f"{path}: bad header {lines[0]!r}")
            grid = Grid(int(header[1]), int(header[2]))
            rows = lines[1:]
        else:
            # header-less: rows of 0/1, dimensions inferred
            grid = Grid(len(lines[0]), len(lines))
            rows = lines

        if len(rows) != grid.height:
            raise ValueError(f"{path}: expected {grid.height} rows, found {len(rows)}")
        mask = grid.empty_mask()
        for y, row in enumerate(rows):
            if len(row) != grid.width or set(row) - {"0", "1"}:
                raise ValueError(f"{path}: row {y} is not {grid.width} cells of 0/1")
            for x, c in enumerate(row):
                mask[grid.index(x, y)] = 1 if c == "1" else 0
        return grid, mask

    def save(self, path: str, mask: Mask) -> None:
        self.check_mask(mask)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w") as f:
            f.write(f"GRID {self.width} {self.height}\n")
            for y in range(self.height):
                row = mask[y * self.width:(y + 1) * self.width]
                f.write("".join("1" if v else "0" for v in row) + "\n")
