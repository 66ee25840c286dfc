from __future__ import annotations

import logging
import sys
from collections import deque
from typing import Callable, Optional, TextIO

from core.board import Board
from core.game import Game, GameOutcome, MoveResult, Phase, RejectionReason, WinReason
from core.notation import FILES, parse_square, square_name
from core.pieces import Color, Piece

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[H"
ROW_SEPARATOR = "  +" + "----+" * 8

REJECTION_MESSAGES = {
    RejectionReason.NOT_DARK_SQUARE: "You can only move to dark squares.",
    RejectionReason.NOT_OWN_PIECE: "That piece is not yours.",
    RejectionReason.DESTINATION_OCCUPIED: "Destination is not empty.",
    RejectionReason.NOT_IN_LEGAL_SET: "Illegal move.",
    RejectionReason.BAD_SQUARE: "Bad square input.",
    RejectionReason.NOT_A_FORCED_LANDING: "You must continue capturing (choose one of the shown squares).",
    RejectionReason.GAME_OVER: "The game is already over.",
}


def piece_symbol(piece: Optional[Piece]) -> str:
    if piece is None:
        return "    "
    side = "W" if piece.color is Color.WHITE else "B"
    rank = "K" if piece.is_king else "M"
    return f" {side}{rank} "


def render_board(board: Board) -> str:
    lines = [ROW_SEPARATOR]
    for row in range(board.boardSize):
        cells = "|".join(piece_symbol(board.getPiece(row, col)) for col in range(board.boardSize))
        lines.append(f"{row + 1} |{cells}|")
        lines.append(ROW_SEPARATOR)
    lines.append("  " + "".join(f"  {file}  " for file in FILES))
    return "\n".join(lines)


def describe_outcome(outcome: GameOutcome) -> str:
    winner = outcome.winner
    if winner is None:
        return "The game is still in progress."
    if outcome.reason is WinReason.NO_PIECES:
        detail = f"{winner.opponent.name} has no pieces"
    else:
        detail = "opponent has no legal moves"
    return f"GAME OVER! {winner.name} wins ({detail})."


class ConsoleUI:
    """Text front-end: renders the board and feeds typed squares to the engine.

    Moves are entered as two squares (``b3 a4``); during a capture chain only
    the next landing square is asked for. End of input stops the program
    without a result.
    """

    def __init__(
        self,
        game: Game,
        *,
        clear_screen: bool = True,
        show_hints: bool = True,
        read_line: Callable[[str], str] = input,
        output: TextIO = sys.stdout,
    ) -> None:
        self.game = game
        self.clear_screen = clear_screen
        self.show_hints = show_hints
        self.read_line = read_line
        self.output = output
        self.notice: Optional[str] = None
        self._pending: deque[str] = deque()

    def run(self) -> Optional[GameOutcome]:
        try:
            while not self.game.is_over:
                if self.game.phase is Phase.AWAITING_CHAIN_CONTINUATION:
                    self._chain_step()
                else:
                    self._turn_step()
        except EOFError:
            logger.info("Input closed before the game finished.")
            self._print("")
            return None

        self._show_board()
        self._print(describe_outcome(self.game.queryOutcome()))
        return self.game.queryOutcome()

    # steps --------------------------------------------------------------

    def _turn_step(self) -> None:
        self._show_board()
        self._print(f"\nTurn: {self.game.current_player.label}")
        if self.game.captureRequired():
            self._print("Rule: Capture is available => you MUST capture.")
        if self.show_hints:
            moves = ", ".join(str(move) for move in self.game.requestLegalMoves())
            self._print(f"Legal moves: {moves}")
        self._print("Enter move like: b6 a5 (from to)")

        first = self._next_token("> ")
        second = self._next_token("> ")
        origin, destination = parse_square(first), parse_square(second)
        if origin is None or destination is None:
            self._fail("Invalid input format. Use like b6 a5")
            return
        self._report(self.game.submitMove(origin, destination))

    def _chain_step(self) -> None:
        self._show_board()
        position = self.game.chain_position
        landings = " ".join(square_name(square) for square in self.game.forcedLandings())
        self._print(f"\nMulti-capture required from {square_name(position)}")
        self._print(f"Possible next landings: {landings}")
        self._print("Enter next destination (e.g. c3):")

        destination = parse_square(self._next_token("> "))
        if destination is None:
            self._fail(REJECTION_MESSAGES[RejectionReason.BAD_SQUARE])
            return
        self._report(self.game.submitChainContinuation(destination))

    # helpers ------------------------------------------------------------

    def _report(self, result: MoveResult) -> None:
        if not result.accepted:
            message = REJECTION_MESSAGES[result.rejection]
            if result.rejection is RejectionReason.NOT_IN_LEGAL_SET and self.game.captureRequired():
                message += " A capture is available, so you must capture."
            self._fail(message)
            return

        outcome = result.outcome
        self.notice = f"Played {outcome.move}."
        if outcome.promoted:
            self.notice += f" Crowned at {square_name(outcome.move.end)}!"

    def _fail(self, message: str) -> None:
        self.notice = message
        self._pending.clear()

    def _next_token(self, prompt: str) -> str:
        while not self._pending:
            self._pending.extend(self.read_line(prompt).split())
        return self._pending.popleft()

    def _show_board(self) -> None:
        if self.clear_screen:
            self.output.write(CLEAR_SCREEN)
        self._print(render_board(self.game.board))
        if self.notice:
            self._print(self.notice)
            self.notice = None

    def _print(self, text: str) -> None:
        print(text, file=self.output)
