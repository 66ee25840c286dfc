from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from pydantic import ValidationError

from config import GameConfig
from core.game import Game
from ui.console import ConsoleUI


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Play checkers against a friend on one board.")
	parser.add_argument("--interface", choices=("console", "pygame"), default="console", help="Front-end to play with.")
	parser.add_argument("--no-clear", dest="clear_screen", action="store_false", help="Do not clear the terminal between turns.")
	parser.add_argument("--no-hints", dest="show_hints", action="store_false", help="Do not list the legal moves before each prompt.")
	parser.add_argument("--square-size", type=int, default=80, help="Square size in pixels for the pygame board.")
	parser.add_argument("--log-level", default="warning", help="Logging level.")
	return parser.parse_args(argv)


def load_config(argv: Optional[Sequence[str]] = None) -> GameConfig:
	args = parse_args(argv)
	try:
		return GameConfig(**vars(args))
	except ValidationError as exc:
		raise SystemExit(f"Invalid configuration:\n{exc}") from exc


def run_pygame(game: Game, config: GameConfig) -> None:
	import pygame

	from ui.pygame_gui import CheckersGUI

	pygame.init()
	try:
		gui = CheckersGUI(game, square_size=config.square_size)
		gui.run()
	finally:
		pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
	config = load_config(argv)
	logging.basicConfig(
		level=config.log_level,
		format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
	)

	game = Game()
	if config.interface == "pygame":
		run_pygame(game, config)
		return

	ConsoleUI(game, clear_screen=config.clear_screen, show_hints=config.show_hints).run()


if __name__ == "__main__":
	main()
