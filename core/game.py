from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, MoveList, is_dark_square
from .move import Coordinate, Move
from .pieces import Color, Piece, belongs_to

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_INITIAL_MOVE = "awaiting_initial_move"
    AWAITING_CHAIN_CONTINUATION = "awaiting_chain_continuation"
    TURN_COMPLETE = "turn_complete"
    GAME_OVER = "game_over"


class WinReason(Enum):
    NO_PIECES = "no_pieces"
    NO_LEGAL_MOVES = "no_legal_moves"


class RejectionReason(str, Enum):
    NOT_DARK_SQUARE = "not_dark_square"
    NOT_OWN_PIECE = "not_own_piece"
    DESTINATION_OCCUPIED = "destination_occupied"
    NOT_IN_LEGAL_SET = "not_in_legal_set"
    BAD_SQUARE = "bad_square"
    NOT_A_FORCED_LANDING = "not_a_forced_landing"
    GAME_OVER = "game_over"


class IllegalPhaseError(RuntimeError):
    """An engine operation was called in a phase that does not accept it."""


@dataclass(frozen=True)
class GameOutcome:
    winner: Optional[Color] = None
    reason: Optional[WinReason] = None

    @property
    def is_over(self) -> bool:
        return self.winner is not None


ONGOING = GameOutcome()


@dataclass(frozen=True)
class MoveOutcome:
    move: Move
    promoted: bool
    continuations: MoveList
    next_player: Color
    outcome: GameOutcome

    @property
    def chain_pending(self) -> bool:
        return bool(self.continuations)


@dataclass(frozen=True)
class MoveResult:
    outcome: Optional[MoveOutcome] = None
    rejection: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "MoveResult":
        return cls(rejection=reason)


@dataclass
class MoveRecord:
    player: Color
    move: Move
    piece_before: Piece
    piece_after: Piece
    captured: Optional[Piece] = None


class Game:
    """Turn and capture-chain state machine for two local players.

    WHITE moves first. A turn starts with ``submitMove``; when a capture leaves
    the same piece with further captures, the turn stays open and only
    ``submitChainContinuation`` to one of ``forcedLandings()`` is accepted.
    Promotion is applied once the turn ends, on the piece's final square.
    """

    def __init__(self, board: Optional[Board] = None, current_player: Color = Color.WHITE) -> None:
        self.board = board if board is not None else Board()
        self.current_player = current_player
        self.phase = Phase.AWAITING_INITIAL_MOVE
        self.outcome = ONGOING
        self.chain_position: Optional[Coordinate] = None
        self.move_history: list[MoveRecord] = []
        self._legal_moves: MoveList = ()
        self._start_turn()

    def reset(self) -> None:
        self.board = Board()
        self.current_player = Color.WHITE
        self.outcome = ONGOING
        self.move_history.clear()
        self._start_turn()

    # queries ------------------------------------------------------------

    def requestLegalMoves(self) -> MoveList:
        return self._legal_moves

    def queryOutcome(self) -> GameOutcome:
        return self.outcome

    def forcedLandings(self) -> tuple[Coordinate, ...]:
        if self.phase is not Phase.AWAITING_CHAIN_CONTINUATION:
            return ()
        return tuple(move.end for move in self._legal_moves)

    def captureRequired(self) -> bool:
        return any(move.is_capture for move in self._legal_moves)

    @property
    def winner(self) -> Optional[Color]:
        return self.outcome.winner

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    # submissions --------------------------------------------------------

    def submitMove(self, origin: Coordinate, destination: Coordinate) -> MoveResult:
        if self.phase is Phase.GAME_OVER:
            return MoveResult.rejected(RejectionReason.GAME_OVER)
        if self.phase is not Phase.AWAITING_INITIAL_MOVE:
            raise IllegalPhaseError(f"submitMove is not accepted during {self.phase.value}.")

        player = self.current_player
        if not is_dark_square(destination):
            return self._reject(RejectionReason.NOT_DARK_SQUARE)
        if not belongs_to(self.board.cellAt(origin), player):
            return self._reject(RejectionReason.NOT_OWN_PIECE)
        if self.board.cellAt(destination) is not None:
            return self._reject(RejectionReason.DESTINATION_OCCUPIED)

        move = next((m for m in self._legal_moves if m.connects(origin, destination)), None)
        if move is None:
            return self._reject(RejectionReason.NOT_IN_LEGAL_SET)
        return MoveResult(outcome=self._play(move))

    def submitChainContinuation(self, destination: Coordinate) -> MoveResult:
        if self.phase is Phase.GAME_OVER:
            return MoveResult.rejected(RejectionReason.GAME_OVER)
        if self.phase is not Phase.AWAITING_CHAIN_CONTINUATION:
            raise IllegalPhaseError(
                f"submitChainContinuation is not accepted during {self.phase.value}."
            )

        if not self.board._is_within_bounds(*destination) or not is_dark_square(destination):
            return self._reject(RejectionReason.BAD_SQUARE)
        move = next((m for m in self._legal_moves if m.end == destination), None)
        if move is None:
            return self._reject(RejectionReason.NOT_A_FORCED_LANDING)
        return MoveResult(outcome=self._play(move))

    # transitions --------------------------------------------------------

    def _play(self, move: Move) -> MoveOutcome:
        player = self.current_player
        piece_before = self.board.cellAt(move.start)
        captured = self.board.applyMove(move)
        logger.debug("%s played %s", player.value, move)

        promoted = False
        continuations: MoveList = ()
        if move.is_capture:
            continuations = self.board.captureMovesFrom(move.end, player)

        if continuations:
            self.phase = Phase.AWAITING_CHAIN_CONTINUATION
            self.chain_position = move.end
            self._legal_moves = continuations
            logger.debug("%s must keep capturing from %s", player.value, move.end)
        else:
            promoted = self.board.maybePromote(move.end)
            self.phase = Phase.TURN_COMPLETE

        self.move_history.append(
            MoveRecord(
                player=player,
                move=move,
                piece_before=piece_before,
                piece_after=self.board.cellAt(move.end),
                captured=captured,
            )
        )

        if self.phase is Phase.TURN_COMPLETE:
            self.current_player = player.opponent
            self._start_turn()

        return MoveOutcome(
            move=move,
            promoted=promoted,
            continuations=continuations,
            next_player=self.current_player,
            outcome=self.outcome,
        )

    def _start_turn(self) -> None:
        player = self.current_player
        self.chain_position = None

        # A side stripped of its last piece loses by count, checked before mobility.
        if self.board.countPieces(player) == 0:
            self._finish(GameOutcome(player.opponent, WinReason.NO_PIECES))
            return
        if self.board.countPieces(player.opponent) == 0:
            self._finish(GameOutcome(player, WinReason.NO_PIECES))
            return

        self._legal_moves = self.board.allLegalMoves(player)
        if not self._legal_moves:
            self._finish(GameOutcome(player.opponent, WinReason.NO_LEGAL_MOVES))
            return

        self.phase = Phase.AWAITING_INITIAL_MOVE

    def _finish(self, outcome: GameOutcome) -> None:
        self.phase = Phase.GAME_OVER
        self.outcome = outcome
        self._legal_moves = ()
        logger.info("Game over: %s wins (%s)", outcome.winner.value, outcome.reason.value)

    def _reject(self, reason: RejectionReason) -> MoveResult:
        logger.debug("Rejected %s submission: %s", self.current_player.value, reason.value)
        return MoveResult.rejected(reason)
