# gridstar/types.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

Index = int                      # y * width + x
Coord = Tuple[int, int]          # (x, y)
Mask = Union[bytes, bytearray]   # one byte per cell, 1 = blocked


class SearchStatus(str, Enum):
    SEARCHING = "searching"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class StepResult:
    status: SearchStatus
    current: Optional[Index] = None
    opened: Tuple[Index, ...] = field(default_factory=tuple)    # newly inserted into the open set
    improved: Tuple[Index, ...] = field(default_factory=tuple)  # already open, cheaper g found
    iterations: int = 0

    @property
    def finished(self) -> bool:
        return self.status is not SearchStatus.SEARCHING
