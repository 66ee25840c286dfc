from __future__ import annotations

import pygame
from pygame import gfxdraw

from core.game import Game, MoveResult, Phase
from core.move import Coordinate
from core.notation import FILES
from core.pieces import Color, Piece
from ui.console import REJECTION_MESSAGES, describe_outcome


class CheckersGUI:
    def __init__(self, game: Game, square_size: int = 80, info_height: int = 210) -> None:
        self.game = game
        self.square_size = square_size
        self.board_size = self.game.board.boardSize
        self.board_pixels = self.square_size * self.board_size
        self.info_height = info_height

        self.margin = 40
        self.window_width = self.board_pixels + self.margin * 2
        self.window_height = self.board_pixels + self.info_height + self.margin * 2

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Checkers")

        self.font = pygame.font.SysFont("arial", 24)
        self.small_font = pygame.font.SysFont("arial", 16)
        self.title_font = pygame.font.SysFont("arial", 28, bold=True)
        self.king_font = pygame.font.SysFont("arial", 22, bold=True)
        self.clock = pygame.time.Clock()

        self.selected: Coordinate | None = None
        self.destinations: set[Coordinate] = set()
        self.hover_cell: Coordinate | None = None
        self.message = ""
        self.piece_surfaces: dict[tuple[Color, bool], pygame.Surface] = {}

        self.colors = {
            "light": (233, 210, 173),
            "dark": (145, 104, 66),
            "highlight": (246, 227, 90),
            "selected": (252, 142, 80),
            "white_piece": (245, 245, 245),
            "black_piece": (35, 35, 35),
            "outline": (25, 25, 25),
            "background": (30, 34, 45),
            "background_accent": (50, 58, 74),
            "info_bg": (40, 46, 60),
            "panel_border": (86, 94, 110),
            "text": (230, 230, 230),
            "coordinate": (210, 210, 210),
            "board_frame": (82, 54, 29),
            "king": (255, 215, 0),
        }

        self.background_surface = self._build_background_surface(self.window_width, self.window_height)
        self._sync_chain()

    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False
                    elif event.key == pygame.K_r:
                        self.game.reset()
                        self.message = "New game."
                        self._clear_selection()
                elif event.type == pygame.MOUSEMOTION:
                    self.hover_cell = self._board_coords_from_pos(event.pos)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)

            self._draw()
            pygame.display.flip()
            self.clock.tick(60)

    # input --------------------------------------------------------------

    def _handle_click(self, pos: tuple[int, int]) -> None:
        cell = self._board_coords_from_pos(pos)
        if cell is None or self.game.is_over:
            return

        if self.game.phase is Phase.AWAITING_CHAIN_CONTINUATION:
            self._apply(self.game.submitChainContinuation(cell))
            return

        if self.selected is not None and cell != self.selected:
            piece = self.game.board.cellAt(cell)
            if piece is None or piece.color != self.game.current_player:
                self._apply(self.game.submitMove(self.selected, cell))
                return

        piece = self.game.board.cellAt(cell)
        if piece is None or piece.color != self.game.current_player:
            self._clear_selection()
            return

        self.selected = cell
        self.destinations = {move.end for move in self.game.requestLegalMoves() if move.start == cell}
        if not self.destinations and self.game.captureRequired():
            self.message = "A capture is available elsewhere: you must capture."

    def _apply(self, result: MoveResult) -> None:
        if not result.accepted:
            self.message = REJECTION_MESSAGES[result.rejection]
            return

        outcome = result.outcome
        self.message = f"Played {outcome.move}."
        if outcome.promoted:
            self.message += " Crowned!"
        if self.game.is_over:
            self.message = describe_outcome(self.game.queryOutcome())
        self._clear_selection()
        self._sync_chain()

    def _sync_chain(self) -> None:
        if self.game.phase is Phase.AWAITING_CHAIN_CONTINUATION:
            self.selected = self.game.chain_position
            self.destinations = set(self.game.forcedLandings())

    def _clear_selection(self) -> None:
        self.selected = None
        self.destinations = set()

    def _board_coords_from_pos(self, pos: tuple[int, int]) -> Coordinate | None:
        x, y = pos
        x -= self.margin
        y -= self.margin
        if x < 0 or y < 0 or x >= self.board_pixels or y >= self.board_pixels:
            return None
        return (y // self.square_size, x // self.square_size)

    # drawing ------------------------------------------------------------

    def _draw(self) -> None:
        self.screen.blit(self.background_surface, (0, 0))
        self._draw_board()
        self._draw_selection()
        self._draw_pieces()
        self._draw_info_panel()

    def _draw_board(self) -> None:
        board_rect = pygame.Rect(self.margin, self.margin, self.board_pixels, self.board_pixels)
        frame_rect = board_rect.inflate(20, 20)
        pygame.draw.rect(self.screen, self.colors["board_frame"], frame_rect, border_radius=20)

        for row in range(self.board_size):
            for col in range(self.board_size):
                color = self.colors["light"] if (row + col) % 2 == 0 else self.colors["dark"]
                pygame.draw.rect(self.screen, color, self._cell_rect(row, col))

        pygame.draw.rect(self.screen, self.colors["outline"], board_rect, 2, border_radius=4)
        self._draw_coordinates(board_rect)

    def _draw_selection(self) -> None:
        if self.selected is not None:
            pygame.draw.rect(self.screen, self.colors["selected"], self._cell_rect(*self.selected), 4, border_radius=8)

        for dest in self.destinations:
            center = self._center_for_cell(*dest)
            radius = 16 if dest == self.hover_cell else 12
            gfxdraw.filled_circle(self.screen, center[0], center[1], radius, (*self.colors["highlight"], 140))
            gfxdraw.aacircle(self.screen, center[0], center[1], radius, self.colors["outline"])

    def _draw_pieces(self) -> None:
        for (row, col), piece in self.game.board.pieces():
            surface = self._get_piece_surface(piece)
            rect = surface.get_rect(center=self._center_for_cell(row, col))
            self.screen.blit(surface, rect)

    def _draw_info_panel(self) -> None:
        panel_top = self.margin + self.board_pixels + 40
        info_rect = pygame.Rect(self.margin, panel_top, self.board_pixels, self.info_height - 30)
        pygame.draw.rect(self.screen, self.colors["info_bg"], info_rect, border_radius=16)
        pygame.draw.rect(self.screen, self.colors["panel_border"], info_rect, 2, border_radius=16)

        title = self.title_font.render("Match Overview", True, self.colors["text"])
        self.screen.blit(title, (info_rect.left + 20, info_rect.top + 14))

        counts = []
        for color in (Color.WHITE, Color.BLACK):
            pieces = [piece for _, piece in self.game.board.pieces(color)]
            kings = sum(1 for piece in pieces if piece.is_king)
            counts.append(f"{color.value.capitalize()}: {len(pieces)} pieces, {kings} kings")

        winner = self.game.winner
        meta_lines = [
            "   |   ".join(counts),
            f"Current player: {self.game.current_player.label}",
            f"Mandatory capture: {'Yes' if self.game.captureRequired() else 'No'}",
            f"Winner: {winner.name if winner else 'Pending'}",
            self.message,
            "R: New game  |  Esc/Q: Quit",
        ]
        y_offset = info_rect.top + 56
        for line in meta_lines:
            text_surface = self.small_font.render(line, True, self.colors["text"])
            self.screen.blit(text_surface, (info_rect.left + 24, y_offset))
            y_offset += 20

    def _draw_coordinates(self, board_rect: pygame.Rect) -> None:
        for idx in range(self.board_size):
            letter = self.small_font.render(FILES[idx], True, self.colors["coordinate"])
            number = self.small_font.render(str(idx + 1), True, self.colors["coordinate"])

            cx = board_rect.left + idx * self.square_size + self.square_size // 2
            self.screen.blit(letter, letter.get_rect(center=(cx, board_rect.bottom + 22)))

            cy = board_rect.top + idx * self.square_size + self.square_size // 2
            self.screen.blit(number, number.get_rect(center=(board_rect.left - 22, cy)))

    def _build_background_surface(self, width: int, height: int) -> pygame.Surface:
        surface = pygame.Surface((width, height))
        for y in range(height):
            t = y / max(height - 1, 1)
            blended = self._mix_color(self.colors["background_accent"], self.colors["background"], t)
            pygame.draw.line(surface, blended, (0, y), (width, y))
        return surface

    def _cell_rect(self, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + col * self.square_size,
            self.margin + row * self.square_size,
            self.square_size,
            self.square_size,
        )

    def _center_for_cell(self, row: int, col: int) -> tuple[int, int]:
        return (
            self.margin + col * self.square_size + self.square_size // 2,
            self.margin + row * self.square_size + self.square_size // 2,
        )

    def _get_piece_surface(self, piece: Piece) -> pygame.Surface:
        key = (piece.color, piece.is_king)
        if key in self.piece_surfaces:
            return self.piece_surfaces[key]

        diameter = self.square_size - 14
        radius = diameter // 2
        surface = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
        cx, cy = surface.get_width() // 2, surface.get_height() // 2

        base = self.colors["white_piece"] if piece.color == Color.WHITE else self.colors["black_piece"]
        pygame.draw.circle(surface, base, (cx, cy), radius)
        pygame.draw.circle(surface, self.colors["outline"], (cx, cy), radius, 2)

        if piece.is_king:
            king_color = self.colors["outline"] if piece.color == Color.WHITE else self.colors["king"]
            crown = self.king_font.render("K", True, king_color)
            surface.blit(crown, crown.get_rect(center=(cx, cy)))

        self.piece_surfaces[key] = surface
        return surface

    @staticmethod
    def _mix_color(a: tuple[int, int, int], b: tuple[int, int, int], t: float) -> tuple[int, int, int]:
        clamped = max(0.0, min(1.0, t))
        return tuple(int(a[i] * (1.0 - clamped) + b[i] * clamped) for i in range(3))
