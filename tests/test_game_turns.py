from __future__ import annotations

import sys
import unittest
from pathlib import Path


REPO_DIR = Path(__file__).resolve().parents[1]
if str(REPO_DIR) not in sys.path:
    sys.path.insert(0, str(REPO_DIR))


from core.board import Board  # noqa: E402
from core.game import (  # noqa: E402
    Game,
    IllegalPhaseError,
    Phase,
    RejectionReason,
    WinReason,
)
from core.pieces import Color, King, Man  # noqa: E402


def _game(at: dict, turn: Color = Color.WHITE) -> Game:
    board = Board.empty()
    for pos, piece in at.items():
        board.place(pos, piece)
    return Game(board, current_player=turn)


def _double_jump_game() -> Game:
    return _game(
        {
            (2, 1): Man(Color.WHITE),
            (3, 2): Man(Color.BLACK),
            (5, 4): Man(Color.BLACK),
            (7, 0): Man(Color.BLACK),
        }
    )


class OpeningTurnTests(unittest.TestCase):
    def test_simple_opening_move_flips_turn(self) -> None:
        game = Game()
        self.assertIs(game.phase, Phase.AWAITING_INITIAL_MOVE)

        result = game.submitMove((2, 1), (3, 0))

        self.assertTrue(result.accepted)
        self.assertFalse(result.outcome.chain_pending)
        self.assertIs(result.outcome.next_player, Color.BLACK)
        self.assertIs(game.current_player, Color.BLACK)
        self.assertIs(game.phase, Phase.AWAITING_INITIAL_MOVE)
        self.assertFalse(game.queryOutcome().is_over)
        self.assertEqual(len(game.move_history), 1)

    def test_rejections_leave_state_untouched(self) -> None:
        game = Game()
        cases = [
            (((2, 1), (3, 1)), RejectionReason.NOT_DARK_SQUARE),
            (((5, 0), (4, 1)), RejectionReason.NOT_OWN_PIECE),
            (((3, 0), (4, 1)), RejectionReason.NOT_OWN_PIECE),
            (((1, 0), (2, 1)), RejectionReason.DESTINATION_OCCUPIED),
            (((2, 1), (4, 3)), RejectionReason.NOT_IN_LEGAL_SET),
        ]
        legal_before = game.requestLegalMoves()
        for (origin, destination), reason in cases:
            with self.subTest(origin=origin, destination=destination):
                result = game.submitMove(origin, destination)
                self.assertFalse(result.accepted)
                self.assertIs(result.rejection, reason)
                self.assertIsNone(result.outcome)
        self.assertIs(game.current_player, Color.WHITE)
        self.assertEqual(game.requestLegalMoves(), legal_before)
        self.assertEqual(game.board.countPieces(Color.WHITE), 12)
        self.assertFalse(game.move_history)

    def test_simple_move_is_illegal_while_a_capture_exists(self) -> None:
        game = _game(
            {
                (2, 1): Man(Color.WHITE),
                (3, 2): Man(Color.BLACK),
                (2, 5): Man(Color.WHITE),
                (7, 0): Man(Color.BLACK),
            }
        )
        self.assertTrue(game.captureRequired())
        result = game.submitMove((2, 5), (3, 6))
        self.assertIs(result.rejection, RejectionReason.NOT_IN_LEGAL_SET)
        self.assertTrue(game.submitMove((2, 1), (4, 3)).accepted)
        self.assertIs(game.current_player, Color.BLACK)


class CaptureChainTests(unittest.TestCase):
    def test_chain_keeps_the_same_player_until_it_ends(self) -> None:
        game = _double_jump_game()

        first = game.submitMove((2, 1), (4, 3))
        self.assertTrue(first.accepted)
        self.assertTrue(first.outcome.chain_pending)
        self.assertIs(first.outcome.next_player, Color.WHITE)
        self.assertIs(game.phase, Phase.AWAITING_CHAIN_CONTINUATION)
        self.assertEqual(game.chain_position, (4, 3))
        self.assertEqual(game.forcedLandings(), ((6, 5),))
        self.assertIsNone(game.board.cellAt((3, 2)))

        for bad in ((5, 2), (3, 4)):
            rejected = game.submitChainContinuation(bad)
            self.assertIs(rejected.rejection, RejectionReason.NOT_A_FORCED_LANDING)
        self.assertIs(game.submitChainContinuation((0, 0)).rejection, RejectionReason.BAD_SQUARE)
        self.assertIs(game.submitChainContinuation((9, 1)).rejection, RejectionReason.BAD_SQUARE)
        self.assertIs(game.current_player, Color.WHITE)

        second = game.submitChainContinuation((6, 5))
        self.assertTrue(second.accepted)
        self.assertFalse(second.outcome.chain_pending)
        self.assertIs(game.current_player, Color.BLACK)
        self.assertIs(game.phase, Phase.AWAITING_INITIAL_MOVE)
        self.assertIsNone(game.chain_position)
        self.assertEqual(game.board.cellAt((6, 5)), Man(Color.WHITE))
        self.assertEqual(game.board.countPieces(Color.BLACK), 1)

    def test_starting_another_move_mid_chain_is_a_caller_error(self) -> None:
        game = _double_jump_game()
        game.submitMove((2, 1), (4, 3))
        with self.assertRaises(IllegalPhaseError):
            game.submitMove((7, 0), (6, 1))
        self.assertIs(game.phase, Phase.AWAITING_CHAIN_CONTINUATION)

    def test_continuation_outside_a_chain_is_a_caller_error(self) -> None:
        game = Game()
        with self.assertRaises(IllegalPhaseError):
            game.submitChainContinuation((3, 0))

    def test_promotion_waits_for_the_final_square(self) -> None:
        game = _game(
            {
                (3, 2): Man(Color.WHITE),
                (4, 3): Man(Color.BLACK),
                (6, 5): Man(Color.BLACK),
                (7, 0): Man(Color.BLACK),
            }
        )
        first = game.submitMove((3, 2), (5, 4))
        self.assertFalse(first.outcome.promoted)
        self.assertEqual(game.board.cellAt((5, 4)), Man(Color.WHITE))

        last = game.submitChainContinuation((7, 6))
        self.assertTrue(last.outcome.promoted)
        self.assertEqual(game.board.cellAt((7, 6)), King(Color.WHITE))
        self.assertEqual(game.move_history[-1].piece_before, Man(Color.WHITE))
        self.assertEqual(game.move_history[-1].piece_after, King(Color.WHITE))

    def test_simple_move_onto_back_rank_promotes(self) -> None:
        game = _game({(1, 2): Man(Color.BLACK), (6, 5): Man(Color.WHITE)}, turn=Color.BLACK)
        result = game.submitMove((1, 2), (0, 1))
        self.assertTrue(result.outcome.promoted)
        self.assertEqual(game.board.cellAt((0, 1)), King(Color.BLACK))


class GameOverTests(unittest.TestCase):
    def test_capturing_the_last_piece_wins(self) -> None:
        game = _game({(2, 1): Man(Color.WHITE), (3, 2): Man(Color.BLACK)})
        result = game.submitMove((2, 1), (4, 3))

        outcome = game.queryOutcome()
        self.assertTrue(result.outcome.outcome.is_over)
        self.assertIs(outcome.winner, Color.WHITE)
        self.assertIs(outcome.reason, WinReason.NO_PIECES)
        self.assertIs(game.phase, Phase.GAME_OVER)
        self.assertEqual(game.requestLegalMoves(), ())

        after = game.submitMove((4, 3), (5, 4))
        self.assertIs(after.rejection, RejectionReason.GAME_OVER)
        self.assertIs(game.submitChainContinuation((5, 4)).rejection, RejectionReason.GAME_OVER)
        self.assertEqual(game.board.cellAt((4, 3)), Man(Color.WHITE))

    def test_blocked_player_loses(self) -> None:
        game = _game(
            {
                (2, 1): Man(Color.WHITE),
                (3, 0): Man(Color.BLACK),
                (3, 2): Man(Color.BLACK),
                (4, 3): Man(Color.BLACK),
            }
        )
        outcome = game.queryOutcome()
        self.assertIs(outcome.winner, Color.BLACK)
        self.assertIs(outcome.reason, WinReason.NO_LEGAL_MOVES)
        self.assertTrue(game.is_over)
        self.assertIs(game.submitMove((2, 1), (3, 0)).rejection, RejectionReason.GAME_OVER)

    def test_side_without_pieces_loses_at_turn_start(self) -> None:
        game = _game({(4, 3): King(Color.BLACK)})
        self.assertIs(game.winner, Color.BLACK)
        self.assertIs(game.queryOutcome().reason, WinReason.NO_PIECES)

    def test_reset_starts_a_fresh_game(self) -> None:
        game = _game({(2, 1): Man(Color.WHITE), (3, 2): Man(Color.BLACK)})
        game.submitMove((2, 1), (4, 3))
        game.reset()
        self.assertFalse(game.is_over)
        self.assertIs(game.current_player, Color.WHITE)
        self.assertEqual(game.board.countPieces(Color.BLACK), 12)
        self.assertFalse(game.move_history)


class PlayoutInvariantTests(unittest.TestCase):
    def test_counts_and_capture_rules_hold_over_a_playout(self) -> None:
        game = Game()
        total = 24
        for _ in range(200):
            if game.is_over:
                break
            player = game.current_player
            legal = game.requestLegalMoves()
            self.assertTrue(legal)
            if game.phase is Phase.AWAITING_INITIAL_MOVE and game.board.allCaptures(player):
                self.assertTrue(all(move.is_capture for move in legal))

            move = legal[-1]
            own_before = game.board.countPieces(player)
            enemy_before = game.board.countPieces(player.opponent)
            if move.is_capture:
                self.assertIsNotNone(game.board.cellAt(move.captured))
                self.assertIs(game.board.cellAt(move.captured).color, player.opponent)

            if game.phase is Phase.AWAITING_CHAIN_CONTINUATION:
                result = game.submitChainContinuation(move.end)
            else:
                result = game.submitMove(move.start, move.end)

            self.assertTrue(result.accepted)
            self.assertEqual(game.board.countPieces(player), own_before)
            expected = enemy_before - (1 if move.is_capture else 0)
            self.assertEqual(game.board.countPieces(player.opponent), expected)
            if move.is_capture:
                self.assertIsNone(game.board.cellAt(move.captured))

            current = game.board.countPieces(Color.WHITE) + game.board.countPieces(Color.BLACK)
            self.assertLessEqual(current, total)
            total = current


if __name__ == "__main__":
    unittest.main()
