"""Core checkers engine package."""

from .board import Board, is_dark_square
from .game import (
	Game,
	GameOutcome,
	IllegalPhaseError,
	MoveOutcome,
	MoveResult,
	Phase,
	RejectionReason,
	WinReason,
)
from .move import Coordinate, Move
from .notation import parse_square, square_name
from .pieces import Color, King, Man, Piece

__all__ = [
	"Board",
	"is_dark_square",
	"Game",
	"GameOutcome",
	"IllegalPhaseError",
	"MoveOutcome",
	"MoveResult",
	"Phase",
	"RejectionReason",
	"WinReason",
	"Move",
	"Coordinate",
	"parse_square",
	"square_name",
	"Color",
	"Piece",
	"Man",
	"King",
]
