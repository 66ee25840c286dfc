from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

Direction = tuple[int, int]

ALL_DIRECTIONS: tuple[Direction, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))


class Color(Enum):
    """Side to play. WHITE is Player 1 and starts on rows 0-2."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        return 1 if self is Color.WHITE else -1

    @property
    def promotion_row(self) -> int:
        return 7 if self is Color.WHITE else 0

    @property
    def label(self) -> str:
        number = 1 if self is Color.WHITE else 2
        return f"{self.name} (Player {number})"


@dataclass(frozen=True, slots=True)
class Piece:
    color: Color

    is_king: ClassVar[bool] = False

    def directions(self) -> tuple[Direction, ...]:
        return ()

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self.color.name})"


@dataclass(frozen=True, slots=True, repr=False)
class Man(Piece):
    def directions(self) -> tuple[Direction, ...]:
        forward = self.color.forward
        return tuple(d for d in ALL_DIRECTIONS if d[0] == forward)

    def promote(self) -> "King":
        return King(self.color)


@dataclass(frozen=True, slots=True, repr=False)
class King(Piece):
    is_king: ClassVar[bool] = True

    def directions(self) -> tuple[Direction, ...]:
        return ALL_DIRECTIONS


# Cell queries. ``None`` is an empty square.

def is_king(cell: Optional[Piece]) -> bool:
    return cell is not None and cell.is_king


def belongs_to(cell: Optional[Piece], color: Color) -> bool:
    return cell is not None and cell.color is color


def is_enemy(a: Optional[Piece], b: Optional[Piece]) -> bool:
    if a is None or b is None:
        return False
    return a.color is not b.color
