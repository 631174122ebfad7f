"""
Win checker for TicTacToe.
Checks if a player has won or if the game is a tie.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass
from .game_state import Board, Player, EMPTY_BOARD, apply_move


# All possible winning lines, checked in this order
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class GameStatus(Enum):
    """Result of evaluating a board."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    TIE = "tie"


@dataclass(frozen=True)
class EvaluationResult:
    """
    What a board says about the game.

    winner and line are only set for a WIN.
    """
    status: GameStatus
    winner: Optional[Player] = None
    line: Optional[Tuple[int, int, int]] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    @property
    def outcome_key(self) -> Optional[str]:
        """Score key for a finished game ("X", "O" or "TIE")."""
        if self.status == GameStatus.WIN:
            return self.winner.value
        if self.status == GameStatus.TIE:
            return "TIE"
        return None


IN_PROGRESS = EvaluationResult(GameStatus.IN_PROGRESS)
TIE = EvaluationResult(GameStatus.TIE)


def evaluate(board: Board) -> EvaluationResult:
    """
    Evaluate a board.

    The first line (in WINNING_LINES order) holding three equal marks wins.
    A full board with no such line is a tie.
    """
    for line in WINNING_LINES:
        a, b, c = line
        mark = board[a]
        if mark is not None and mark == board[b] == board[c]:
            return EvaluationResult(GameStatus.WIN, winner=mark, line=line)

    if all(cell is not None for cell in board):
        return TIE

    return IN_PROGRESS


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 marks of the same player in a row
    (horizontally, vertically, or diagonally)
    """

    WINNING_LINES = WINNING_LINES

    def evaluate(self, board: Board) -> EvaluationResult:
        """Full evaluation of the board."""
        return evaluate(board)

    def check_winner(self, board: Board) -> Optional[Player]:
        """The winning Player, or None if no winner yet."""
        return evaluate(board).winner

    def check_draw(self, board: Board) -> bool:
        """True if the board is full and nobody has won."""
        return evaluate(board).status == GameStatus.TIE

    def get_winning_line(self, board: Board) -> Optional[Tuple[int, int, int]]:
        """The winning line as index triple, or None."""
        return evaluate(board).line


# Quick test
if __name__ == "__main__":
    print("Testing WinChecker...")

    checker = WinChecker()
    X, O = Player.X, Player.O

    # Test 1: Horizontal win
    board = (X, X, X, O, O, None, None, None, None)
    print(f"Test 1 (horizontal): {checker.evaluate(board)}")
    assert checker.check_winner(board) == X

    # Test 2: Diagonal win
    board = EMPTY_BOARD
    for index, player in [(2, O), (0, X), (4, O), (1, X), (6, O)]:
        board = apply_move(board, index, player)
    print(f"Test 2 (diagonal): {checker.evaluate(board)}")
    assert checker.get_winning_line(board) == (2, 4, 6)

    # Test 3: Draw (full board, no winner)
    board = (X, O, X, X, O, O, O, X, X)
    print(f"Test 3 (draw): {checker.evaluate(board)}")
    assert checker.check_draw(board)

    print("\nWinChecker test done!")
