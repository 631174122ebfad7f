"""
Logic module for TicTacToe.
Handles game state, rules, the minimax opponent, and the game session.
"""

from .config import GameConfig
from .game_state import GameState, Player, Board, EMPTY_BOARD, OccupiedCellError, apply_move, empty_cells, format_board
from .win_checker import WinChecker, EvaluationResult, GameStatus, WINNING_LINES, evaluate
from .move_validator import MoveValidator, MoveError, ValidationResult
from .ai_player import AIPlayer, SearchResult, find_best_move
from .difficulty import Difficulty, GameMode, RandomPolicy, MinimaxPolicy, make_policy
from .scheduler import Scheduler, ManualScheduler
from .score_tracker import ScoreTracker, ScoreRecord, ScoreStore, MemoryScoreStore, JsonFileScoreStore
from .game_session import GameSession, GameSettings, GameSnapshot, MoveResult, SessionStatus

__version__ = "1.0.0"
