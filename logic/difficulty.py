"""
Difficulty levels for the computer player.
Each level maps a game state to the cell the computer plays.
"""

import random
from enum import Enum
from typing import Callable, Optional
from .ai_player import AIPlayer
from .game_state import GameState, Player


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "easy"   # Random moves
    HARD = "hard"   # Full minimax


class GameMode(Enum):
    """Who plays against whom."""
    PVP = "pvp"   # Two humans on one board
    CPU = "cpu"   # Human against the computer


# A policy picks the computer's cell for the current state
MovePolicy = Callable[[GameState], int]


class RandomPolicy:
    """Uniform random choice among the empty cells (easy difficulty)."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def __call__(self, game_state: GameState) -> int:
        empty = game_state.get_empty_cells()
        assert game_state.active and empty, "no move to choose"
        return self.rng.choice(empty)


class MinimaxPolicy:
    """Optimal play through the minimax search (hard difficulty)."""

    def __init__(self, player: Player, config=None, verbose: Optional[bool] = None):
        self.ai = AIPlayer(player, config=config, verbose=verbose)

    def __call__(self, game_state: GameState) -> int:
        return self.ai.get_best_move(game_state)


def make_policy(
    difficulty: Difficulty,
    player: Player,
    rng: Optional[random.Random] = None,
    config=None,
    verbose: Optional[bool] = None
) -> MovePolicy:
    """
    Build the move policy for a difficulty level.

    Args:
        difficulty: EASY or HARD.
        player: The mark the computer plays.
        rng: Random source for EASY (seed it for repeatable games).
        config: Game configuration passed to the search.
        verbose: Print search statistics.
    """
    if difficulty == Difficulty.EASY:
        return RandomPolicy(rng)
    return MinimaxPolicy(player, config=config, verbose=verbose)
