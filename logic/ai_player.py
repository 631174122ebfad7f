"""
AI player for TicTacToe.
Uses the Minimax algorithm to choose the best move.
"""

from typing import Optional, List
from dataclasses import dataclass
from .config import GameConfig
from .game_state import GameState, Player, Board, Cell, BOARD_CELLS, empty_cells
from .win_checker import WinChecker, GameStatus


@dataclass(frozen=True)
class SearchResult:
    """Chosen cell and its minimax value. index is None at a finished board."""
    index: Optional[int]
    score: int


class AIPlayer:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    The AI searches the whole game tree, so it never loses (at worst, a tie).
    Scores carry no depth bonus: every win is worth the same, and among equal
    scores the lowest cell index is kept. Given the same board the AI always
    plays the same move.
    """

    def __init__(self, player: Player = Player.O, config=None, verbose: Optional[bool] = None):
        """
        Initialize the AI player.

        Args:
            player: Which player the AI controls (the maximizing side).
            config: Game configuration (scores, verbosity).
            verbose: Override config.VERBOSE.
        """
        self.player = player
        self.config = config or GameConfig
        self.verbose = self.config.VERBOSE if verbose is None else verbose
        self.win_checker = WinChecker()

        # Keep track of how many positions we've evaluated (for debugging)
        self.moves_evaluated = 0

    def search(self, board: Board, player_to_move: Optional[Player] = None) -> SearchResult:
        """
        Find the best move on a board.

        Args:
            board: Board to search. Never modified.
            player_to_move: Whose turn it is (default: the AI itself).

        Returns:
            SearchResult with the chosen index and its score.
        """
        assert not self.win_checker.evaluate(board).is_terminal, \
            "search called on a finished board"
        assert empty_cells(board), "search called on a full board"

        if player_to_move is None:
            player_to_move = self.player

        self.moves_evaluated = 0
        result = self._minimax(list(board), player_to_move)

        if self.verbose:
            print(f"AI evaluated {self.moves_evaluated} positions. "
                  f"Best move: {result.index} (score: {result.score})")

        return result

    def get_best_move(self, game_state: GameState) -> int:
        """
        Get the best move for the current position.

        Only valid while the game is running and it is the AI's turn.
        """
        assert game_state.active, "game is over"
        assert game_state.current_player == self.player, \
            f"it's {game_state.current_player.value}'s turn, not {self.player.value}'s"
        return self.search(game_state.board, game_state.current_player).index

    def _minimax(self, cells: List[Cell], player: Player) -> SearchResult:
        """
        Plain minimax, no pruning.

        Args:
            cells: Working copy of the board. Every mark placed here is
                removed again before returning.
            player: Player to move at this level.

        Returns:
            The best SearchResult for this level.
        """
        self.moves_evaluated += 1

        # Check terminal states
        result = self.win_checker.evaluate(cells)
        if result.status == GameStatus.WIN:
            if result.winner == self.player:
                return SearchResult(None, self.config.WIN_SCORE)
            return SearchResult(None, self.config.LOSS_SCORE)
        if result.status == GameStatus.TIE:
            return SearchResult(None, self.config.TIE_SCORE)

        is_maximizing = player == self.player
        opponent = player.opposite()
        best: Optional[SearchResult] = None

        for index in range(BOARD_CELLS):
            if cells[index] is not None:
                continue

            # Try this move
            cells[index] = player
            score = self._minimax(cells, opponent).score
            cells[index] = None

            # Strict comparison: the first (lowest) index wins ties
            if best is None:
                best = SearchResult(index, score)
            elif is_maximizing and score > best.score:
                best = SearchResult(index, score)
            elif not is_maximizing and score < best.score:
                best = SearchResult(index, score)

        return best


def find_best_move(board: Board, maximizing_player: Player,
                   player_to_move: Optional[Player] = None) -> SearchResult:
    """Search a board for the best move of maximizing_player."""
    return AIPlayer(maximizing_player).search(board, player_to_move)


# Quick test
if __name__ == "__main__":
    print("Testing AIPlayer...")

    X, O = Player.X, Player.O
    ai = AIPlayer(O, verbose=True)

    # Test 1: AI should block a winning move
    board = (X, X, None,
             None, O, None,
             None, None, None)
    print("\nAI is O. X is about to win with 2!")
    move = ai.search(board).index
    assert move == 2, f"Expected 2, got {move}"
    print("✓ AI correctly blocks the win!")

    # Test 2: AI should take a winning move
    board = (O, O, None,
             X, X, None,
             X, None, None)
    print("\nAI is O. Can win with 2!")
    result = ai.search(board)
    assert result.index == 2 and result.score == 10, f"Got {result}"
    print("✓ AI correctly takes the win!")

    print("\nAIPlayer test done!")
