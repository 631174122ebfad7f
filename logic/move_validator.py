"""
Move validator for TicTacToe.
Validates that moves follow the rules.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass
from .game_state import GameState, Player, BOARD_CELLS


class MoveError(Enum):
    """Why a move was rejected."""
    GAME_NOT_ACTIVE = "game_not_active"
    INVALID_INDEX = "invalid_index"
    CELL_OCCUPIED = "cell_occupied"
    NOT_YOUR_TURN = "not_your_turn"


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error: Optional[MoveError] = None
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules (checked in this order):
    1. Game must be running
    2. Index must be 0-8
    3. Can only place on empty cells
    4. Only the current player may move
    """

    def validate_move(
        self,
        game_state: Optional[GameState],
        index: int,
        player: Player
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state, None if no game was started.
            index: Cell to place the mark on (0-8).
            player: Player asking to move.

        Returns:
            ValidationResult with is_valid and the rejection reason.
        """
        if game_state is None or not game_state.active:
            return ValidationResult(
                is_valid=False,
                error=MoveError.GAME_NOT_ACTIVE,
                error_message="Game is not active!"
            )

        if isinstance(index, bool) or not isinstance(index, int) \
                or not 0 <= index < BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error=MoveError.INVALID_INDEX,
                error_message=f"Invalid position {index!r}. Must be 0-8."
            )

        occupant = game_state.board[index]
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error=MoveError.CELL_OCCUPIED,
                error_message=f"Cell {index} is already occupied by {occupant.value}"
            )

        if player != game_state.current_player:
            return ValidationResult(
                is_valid=False,
                error=MoveError.NOT_YOUR_TURN,
                error_message=f"It's {game_state.current_player.value}'s turn, not {player.value}'s"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """
        Get all valid moves for the current player.

        Returns:
            Ascending list of empty cell indices, empty once the game is over.
        """
        if not game_state.active:
            return []
        return game_state.get_empty_cells()
