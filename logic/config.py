"""
Game configuration for TicTacToe.
All the settings for turn order, computer opponent, and score storage.
"""

import os


class GameConfig:
    """
    Configuration class for game settings.
    Subclass or override attributes on an instance to change them.
    """

    # ==================== SESSION DEFAULTS ====================
    # Values used by start() when the caller does not pass them
    DEFAULT_FIRST_PLAYER = "X"
    DEFAULT_MODE = "pvp"          # "pvp" or "cpu"
    DEFAULT_DIFFICULTY = "hard"   # "easy" or "hard"

    # Which mark the computer plays in CPU mode
    COMPUTER_PLAYER = "O"

    # ==================== COMPUTER TIMING ====================
    # The computer "thinks" for a moment before its move lands (milliseconds)
    CPU_OPENING_DELAY_MS = 350   # Computer moves first
    CPU_REPLY_DELAY_MS = 250     # Computer answers a human move

    # ==================== SEARCH SCORES ====================
    # Terminal values seen from the computer's side. No depth decay.
    WIN_SCORE = 10
    LOSS_SCORE = -10
    TIE_SCORE = 0

    # ==================== SCORE STORAGE ====================
    SCORE_FILE = os.path.join(os.path.expanduser("~"), ".tictactoe_scores.json")
    SCORE_KEY = "ttt_scores"

    # ==================== DIAGNOSTICS ====================
    # Print move traces and search statistics
    VERBOSE = False
