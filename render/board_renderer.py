"""
Board renderer for TicTacToe.
Draws game snapshots into images with OpenCV.
"""

import cv2
import numpy as np
from typing import Optional, Tuple
from logic.game_session import GameSnapshot, SessionStatus
from logic.game_state import Board, Player, EMPTY_BOARD
from .config import RenderConfig


class BoardRenderer:
    """
    Turns a GameSnapshot into a BGR image.

    Layout: the 3x3 board on top, a status strip below it.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize the renderer.

        Args:
            config: Render configuration.
        """
        self.config = config or RenderConfig()

    @property
    def image_size(self) -> Tuple[int, int]:
        """(width, height) of rendered images."""
        return (
            self.config.BOARD_OUTPUT_SIZE,
            self.config.BOARD_OUTPUT_SIZE + self.config.STATUS_HEIGHT,
        )

    def cell_origin(self, index: int) -> Tuple[int, int]:
        """Top-left pixel of a cell."""
        row, col = divmod(index, self.config.BOARD_SIZE)
        cell_size = self.config.CELL_OUTPUT_SIZE
        return col * cell_size, row * cell_size

    def cell_center(self, index: int) -> Tuple[int, int]:
        """Center pixel of a cell."""
        x, y = self.cell_origin(index)
        half = self.config.CELL_OUTPUT_SIZE // 2
        return x + half, y + half

    def cell_at(self, x: int, y: int) -> Optional[int]:
        """
        Map a pixel to a cell index.

        Returns:
            Index 0-8, or None if the pixel is outside the board.
        """
        size = self.config.BOARD_OUTPUT_SIZE
        if not (0 <= x < size and 0 <= y < size):
            return None
        cell_size = self.config.CELL_OUTPUT_SIZE
        return (y // cell_size) * self.config.BOARD_SIZE + (x // cell_size)

    def render(self, snapshot: Optional[GameSnapshot]) -> np.ndarray:
        """
        Draw a snapshot.

        Args:
            snapshot: Session snapshot, None before any game.

        Returns:
            BGR image of shape (height, width, 3).
        """
        width, height = self.image_size
        image = np.full((height, width, 3), self.config.BACKGROUND_COLOR, dtype=np.uint8)

        board = snapshot.board if snapshot is not None else EMPTY_BOARD

        # Highlights go under everything else
        if snapshot is not None and snapshot.winning_line:
            for index in snapshot.winning_line:
                self._fill_cell(image, index, self.config.WIN_FILL_COLOR)
        elif snapshot is not None and snapshot.is_tie:
            for index in range(len(board)):
                self._fill_cell(image, index, self.config.TIE_FILL_COLOR)

        self._draw_grid(image)
        self._draw_marks(image, board)

        if snapshot is not None and snapshot.winning_line:
            start = self.cell_center(snapshot.winning_line[0])
            end = self.cell_center(snapshot.winning_line[-1])
            cv2.line(
                image, start, end,
                self.config.WIN_LINE_COLOR,
                self.config.WIN_LINE_THICKNESS,
                cv2.LINE_AA
            )

        self._draw_status(image, self.status_text(snapshot))
        return image

    def status_text(self, snapshot: Optional[GameSnapshot]) -> str:
        """One-line description of the game."""
        if snapshot is None or snapshot.status == SessionStatus.NOT_STARTED:
            return "Press N to start"

        scores = snapshot.scores
        tally = f"X {scores.x}  O {scores.o}  Tie {scores.tie}"

        if snapshot.status == SessionStatus.FINISHED:
            if snapshot.is_tie:
                return f"Tie!   {tally}"
            return f"{snapshot.winner.value} wins!   {tally}"

        return f"{snapshot.current_player.value} to move   {tally}"

    def _fill_cell(self, image: np.ndarray, index: int, color):
        x, y = self.cell_origin(index)
        inset = self.config.FILL_INSET
        cell_size = self.config.CELL_OUTPUT_SIZE
        cv2.rectangle(
            image,
            (x + inset, y + inset),
            (x + cell_size - inset, y + cell_size - inset),
            color,
            -1
        )

    def _draw_grid(self, image: np.ndarray):
        cell_size = self.config.CELL_OUTPUT_SIZE
        size = self.config.BOARD_OUTPUT_SIZE

        for i in range(1, self.config.BOARD_SIZE):
            # Vertical lines
            cv2.line(
                image,
                (i * cell_size, 0),
                (i * cell_size, size),
                self.config.GRID_COLOR,
                self.config.GRID_THICKNESS
            )
            # Horizontal lines
            cv2.line(
                image,
                (0, i * cell_size),
                (size, i * cell_size),
                self.config.GRID_COLOR,
                self.config.GRID_THICKNESS
            )

        # Bottom edge separates the board from the status strip
        cv2.line(image, (0, size), (size, size), self.config.GRID_COLOR, self.config.GRID_THICKNESS)

    def _draw_marks(self, image: np.ndarray, board: Board):
        cell_size = self.config.CELL_OUTPUT_SIZE
        pad = self.config.MARK_PADDING
        thickness = self.config.MARK_THICKNESS

        for index, mark in enumerate(board):
            if mark is None:
                continue

            x, y = self.cell_origin(index)

            if mark == Player.X:
                cv2.line(image, (x + pad, y + pad), (x + cell_size - pad, y + cell_size - pad),
                         self.config.X_COLOR, thickness, cv2.LINE_AA)
                cv2.line(image, (x + cell_size - pad, y + pad), (x + pad, y + cell_size - pad),
                         self.config.X_COLOR, thickness, cv2.LINE_AA)
            else:
                radius = cell_size // 2 - pad
                cv2.circle(image, self.cell_center(index), radius,
                           self.config.O_COLOR, thickness, cv2.LINE_AA)

    def _draw_status(self, image: np.ndarray, text: str):
        baseline_y = self.config.BOARD_OUTPUT_SIZE + (self.config.STATUS_HEIGHT + 20) // 2
        cv2.putText(
            image,
            text,
            (20, baseline_y),
            self.config.FONT,
            self.config.FONT_SCALE,
            self.config.TEXT_COLOR,
            self.config.FONT_THICKNESS
        )

