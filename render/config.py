"""
Render configuration for TicTacToe.
All the settings for drawing the board image.
"""

import cv2


class RenderConfig:
    """
    Configuration class for board drawing.
    Colours are BGR, as OpenCV expects them.
    """

    # ==================== IMAGE SIZE ====================
    # TicTacToe is a 3x3 grid
    BOARD_SIZE = 3

    # Output size for the board area (pixels)
    BOARD_OUTPUT_SIZE = 600
    CELL_OUTPUT_SIZE = BOARD_OUTPUT_SIZE // BOARD_SIZE  # 200 pixels per cell

    # Strip below the board for the status line
    STATUS_HEIGHT = 60

    # ==================== COLOURS (BGR) ====================
    BACKGROUND_COLOR = (46, 26, 26)      # Dark navy
    GRID_COLOR = (128, 128, 128)
    X_COLOR = (113, 113, 248)            # Red
    O_COLOR = (129, 185, 16)             # Green
    WIN_FILL_COLOR = (0, 96, 128)        # Dark gold behind the winning cells
    WIN_LINE_COLOR = (0, 215, 255)       # Gold stroke through the winning line
    TIE_FILL_COLOR = (80, 64, 64)        # Whole board on a tie
    TEXT_COLOR = (255, 255, 255)

    # ==================== STROKES ====================
    GRID_THICKNESS = 4
    MARK_THICKNESS = 12
    WIN_LINE_THICKNESS = 8

    # Gap between a cell's edge and its mark
    MARK_PADDING = 40

    # Gap between a cell's edge and its highlight fill
    FILL_INSET = 6

    # ==================== TEXT ====================
    FONT = cv2.FONT_HERSHEY_SIMPLEX
    FONT_SCALE = 0.8
    FONT_THICKNESS = 2
