from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

Coordinate = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Move:
    start: Coordinate
    end: Coordinate
    captured: Optional[Coordinate] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def connects(self, start: Coordinate, end: Coordinate) -> bool:
        return self.start == start and self.end == end

    def __str__(self) -> str:
        from .notation import square_name

        connector = " x " if self.is_capture else " - "
        return f"{square_name(self.start)}{connector}{square_name(self.end)}"
