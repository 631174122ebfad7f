"""
Game state management for TicTacToe.
Tracks the board, current player, and whether the game is still running.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass, field


class Player(Enum):
    """The two players in the game."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X


# A cell is either empty (None) or holds a player's mark
Cell = Optional[Player]

# The board is 9 cells, indexed 0-8 row by row:
#   0 | 1 | 2
#   3 | 4 | 5
#   6 | 7 | 8
Board = Tuple[Cell, ...]

BOARD_CELLS = 9
EMPTY_BOARD: Board = (None,) * BOARD_CELLS


class OccupiedCellError(ValueError):
    """Raised when a mark is placed on a cell that already holds one."""

    def __init__(self, index: int, occupant: Player):
        super().__init__(f"Cell {index} is already occupied by {occupant.value}")
        self.index = index
        self.occupant = occupant


def apply_move(board: Board, index: int, player: Player) -> Board:
    """
    Place a mark and return the new board.

    The input board is left untouched.

    Raises:
        OccupiedCellError: If the cell is not empty.
    """
    occupant = board[index]
    if occupant is not None:
        raise OccupiedCellError(index, occupant)
    return board[:index] + (player,) + board[index + 1:]


def empty_cells(board: Board) -> List[int]:
    """Indices of all empty cells, in ascending order."""
    return [i for i, cell in enumerate(board) if cell is None]


def format_board(board: Board) -> str:
    """
    Render the board as text.

    Empty cells show their index so players know what to type.
    """
    lines = ["┌───┬───┬───┐"]

    for row in range(3):
        row_str = "│"
        for col in range(3):
            mark = board[row * 3 + col]
            symbol = mark.value if mark is not None else str(row * 3 + col)
            row_str += f" {symbol} │"
        lines.append(row_str)

        if row < 2:
            lines.append("├───┼───┼───┤")

    lines.append("└───┴───┴───┘")
    return "\n".join(lines)


@dataclass
class GameState:
    """
    The complete state of one TicTacToe game.

    Tracks:
    - The board (immutable tuple, replaced on every move)
    - Current player
    - Whether the game still accepts moves
    """

    board: Board = EMPTY_BOARD

    # Current player's turn
    current_player: Player = Player.X

    # False once the game reached a win or a tie
    active: bool = True

    # Indices in the order they were played
    moves: List[int] = field(default_factory=list)

    def get_empty_cells(self) -> List[int]:
        """Get all empty cell indices."""
        return empty_cells(self.board)

    def copy(self) -> "GameState":
        """Create a copy of the game state."""
        return GameState(
            board=self.board,
            current_player=self.current_player,
            active=self.active,
            moves=list(self.moves),
        )
