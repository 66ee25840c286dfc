from __future__ import annotations

import logging
from typing import Iterator, Optional

from .move import Coordinate, Move
from .pieces import Color, Man, Piece, belongs_to, is_enemy

logger = logging.getLogger(__name__)

BOARD_SIZE = 8
START_ROWS = 3

MoveList = tuple[Move, ...]


def is_dark_square(pos: Coordinate) -> bool:
    row, col = pos
    return (row + col) % 2 == 1


class Board:
    """8x8 checkers grid, row 0 is WHITE's home rank.

    Empty squares hold ``None``; pieces are immutable values, so promotion
    replaces the cell rather than mutating the piece.
    """

    def __init__(self) -> None:
        self.board: list[list[Optional[Piece]]] = [
            [None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]
        self.boardSize = BOARD_SIZE
        self._set_start_pieces()

    @classmethod
    def empty(cls) -> "Board":
        board = cls.__new__(cls)
        board.boardSize = BOARD_SIZE
        board.board = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        return board

    def copy(self) -> "Board":
        new_board = Board.empty()
        new_board.board = [list(row) for row in self.board]
        return new_board

    def place(self, pos: Coordinate, piece: Optional[Piece]) -> None:
        """Put ``piece`` (or clear the square with ``None``) while setting up a position."""
        if not self._is_within_bounds(*pos):
            raise ValueError(f"Square {pos} is off the board.")
        if piece is not None and not is_dark_square(pos):
            raise ValueError(f"Pieces can only stand on dark squares, got {pos}.")
        row, col = pos
        self.board[row][col] = piece

    # queries ------------------------------------------------------------

    def getPiece(self, row: int, col: int) -> Optional[Piece]:
        if self._is_within_bounds(row, col):
            return self.board[row][col]
        return None

    def cellAt(self, pos: Coordinate) -> Optional[Piece]:
        return self.getPiece(*pos)

    def dark_squares(self) -> Iterator[Coordinate]:
        for row in range(self.boardSize):
            for col in range(self.boardSize):
                if is_dark_square((row, col)):
                    yield (row, col)

    def pieces(self, color: Optional[Color] = None) -> Iterator[tuple[Coordinate, Piece]]:
        for pos in self.dark_squares():
            piece = self.cellAt(pos)
            if piece is None:
                continue
            if color is None or piece.color is color:
                yield pos, piece

    def countPieces(self, color: Color) -> int:
        return sum(1 for _ in self.pieces(color))

    # move generation ----------------------------------------------------

    def captureMovesFrom(self, pos: Coordinate, color: Color) -> MoveList:
        piece = self.cellAt(pos)
        if not belongs_to(piece, color):
            return ()

        row, col = pos
        moves: list[Move] = []
        for dr, dc in piece.directions():
            mid = (row + dr, col + dc)
            landing = (row + 2 * dr, col + 2 * dc)
            if not self._is_within_bounds(*landing):
                continue
            if self.cellAt(landing) is not None:
                continue
            if is_enemy(piece, self.cellAt(mid)):
                moves.append(Move(start=pos, end=landing, captured=mid))
        return tuple(moves)

    def simpleMovesFrom(self, pos: Coordinate, color: Color) -> MoveList:
        piece = self.cellAt(pos)
        if not belongs_to(piece, color):
            return ()

        row, col = pos
        moves: list[Move] = []
        for dr, dc in piece.directions():
            target = (row + dr, col + dc)
            if self._is_within_bounds(*target) and self.cellAt(target) is None:
                moves.append(Move(start=pos, end=target))
        return tuple(moves)

    def allCaptures(self, color: Color) -> MoveList:
        return tuple(
            move
            for pos, _ in self.pieces(color)
            for move in self.captureMovesFrom(pos, color)
        )

    def allLegalMoves(self, color: Color) -> MoveList:
        captures = self.allCaptures(color)
        if captures:
            return captures
        return tuple(
            move
            for pos, _ in self.pieces(color)
            for move in self.simpleMovesFrom(pos, color)
        )

    # mutation -----------------------------------------------------------

    def applyMove(self, move: Move) -> Optional[Piece]:
        """Move the piece and drop the captured one, returning what was captured.

        Rules are not checked here; callers pick ``move`` from ``allLegalMoves``
        or ``captureMovesFrom``.
        """
        piece = self.cellAt(move.start)
        assert piece is not None, f"No piece at {move.start} to move."
        assert self.cellAt(move.end) is None, f"Destination {move.end} is occupied."

        end_row, end_col = move.end
        start_row, start_col = move.start
        self.board[end_row][end_col] = piece
        self.board[start_row][start_col] = None

        captured: Optional[Piece] = None
        if move.is_capture:
            cap_row, cap_col = move.captured
            captured = self.board[cap_row][cap_col]
            assert is_enemy(piece, captured), f"Capture at {move.captured} is not an enemy piece."
            self.board[cap_row][cap_col] = None
        return captured

    def maybePromote(self, pos: Coordinate) -> bool:
        piece = self.cellAt(pos)
        if isinstance(piece, Man) and pos[0] == piece.color.promotion_row:
            row, col = pos
            self.board[row][col] = piece.promote()
            logger.debug("Promoted %s at %s", piece.color.value, pos)
            return True
        return False

    # helpers ------------------------------------------------------------

    def _set_start_pieces(self) -> None:
        for row, col in self.dark_squares():
            if row < START_ROWS:
                self.board[row][col] = Man(Color.WHITE)
            elif row >= self.boardSize - START_ROWS:
                self.board[row][col] = Man(Color.BLACK)

    def _is_within_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.boardSize and 0 <= col < self.boardSize

    def __repr__(self) -> str:
        rows = []
        for row in self.board:
            line = ""
            for piece in row:
                if piece is None:
                    line += "."
                elif piece.color is Color.WHITE:
                    line += "W" if piece.is_king else "w"
                else:
                    line += "B" if piece.is_king else "b"
            rows.append(line)
        return "\n".join(rows)
