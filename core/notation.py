"""Coordinate text used by the front-ends.

Files ``a``-``h`` name columns 0-7 and ranks ``1``-``8`` name rows 0-7, so
``b3`` is ``(2, 1)``. Parsing is lenient: the first letter found is the file,
the first digit found is the rank, anything else in the token is ignored.
"""

from __future__ import annotations

from typing import Optional

from .move import Coordinate

FILES = "abcdefgh"
RANKS = "12345678"


def parse_square(token: str) -> Optional[Coordinate]:
    if len(token) < 2:
        return None

    file = next((ch.lower() for ch in token if ch.isalpha()), None)
    rank = next((ch for ch in token if ch.isdigit()), None)
    if file is None or rank is None:
        return None
    if file not in FILES or rank not in RANKS:
        return None
    return (RANKS.index(rank), FILES.index(file))


def square_name(coord: Coordinate) -> str:
    row, col = coord
    return f"{FILES[col]}{RANKS[row]}"
