"""
Main entry point for TicTacToe.

Launches the Tkinter UI by default. With --no-ui the game runs in the
console: type a cell index (0-8) to move, n for a new game, r to reset the
score, q to quit.
"""

import time
from typing import Optional

from logic.config import GameConfig
from logic.difficulty import GameMode
from logic.game_session import GameSession, SessionStatus
from logic.game_state import format_board
from logic.scheduler import ManualScheduler
from logic.score_tracker import ScoreTracker, JsonFileScoreStore, MemoryScoreStore


class ConsoleGame:
    """
    Console front end for a GameSession.

    Game flow:
    1. Show the board
    2. Human types a move (or a command)
    3. In CPU mode, wait the computer's delay and let its move land
    4. Repeat until someone wins or it's a tie, then offer a new game
    """

    def __init__(
        self,
        session: GameSession,
        scheduler: ManualScheduler,
        first_player: str,
        mode: str,
        difficulty: str,
        input_func=None
    ):
        self.session = session
        self.scheduler = scheduler
        self.first_player = first_player
        self.mode = mode
        self.difficulty = difficulty
        self.input_func = input_func or input
        self.is_running = False

    def start(self):
        """Start playing."""
        print("Index map:\n0|1|2\n3|4|5\n6|7|8\n")
        print("Commands: n = new game, r = reset score, q = quit\n")

        self.session.start(self.first_player, self.mode, self.difficulty)
        self.is_running = True

        while self.is_running:
            self._run_computer()
            self._show()

            try:
                command = self.input_func(self._prompt()).strip().lower()
            except EOFError:
                break

            self._handle(command)

        self.is_running = False
        print("Goodbye!")

    def _run_computer(self):
        """Let a scheduled computer move land after its delay."""
        while self.scheduler.pending:
            time.sleep(self.scheduler.next_delay() / 1000.0)
            self.scheduler.run_pending()

    def _show(self):
        snapshot = self.session.snapshot()
        print()
        print(format_board(snapshot.board))

        if snapshot.status == SessionStatus.FINISHED:
            if snapshot.is_tie:
                print("\n🤝 It's a TIE!")
            else:
                print(f"\n🏆 {snapshot.winner.value} WINS!")

        scores = snapshot.scores
        print(f"Score: X {scores.x}  O {scores.o}  Tie {scores.tie}")

    def _prompt(self) -> str:
        snapshot = self.session.snapshot()
        if snapshot.status == SessionStatus.FINISHED:
            return "Game over. n = new game, q = quit: "
        return f"Play {snapshot.current_player.value} at [0-8]: "

    def _handle(self, command: str):
        if command == "q":
            self.is_running = False
        elif command == "n":
            self.session.new_game()
        elif command == "r":
            self.session.reset_scores()
            print("Score reset.")
        else:
            self._move(command)

    def _move(self, command: str):
        try:
            index = int(command)
        except ValueError:
            print("Please type a number 0..8, n, r or q.")
            return

        snapshot = self.session.snapshot()
        if snapshot.settings.mode == GameMode.CPU:
            player = snapshot.settings.human_player
        else:
            player = snapshot.current_player or snapshot.settings.first_player

        result = self.session.submit_move(index, player)
        if not result.accepted:
            print(f"Illegal move: {result.error_message}")


def main(argv: Optional[list] = None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--mode",
        choices=["pvp", "cpu"],
        default=GameConfig.DEFAULT_MODE,
        help="Two players or against the computer"
    )
    parser.add_argument(
        "--difficulty",
        choices=["easy", "hard"],
        default=GameConfig.DEFAULT_DIFFICULTY,
        help="Computer strength"
    )
    parser.add_argument(
        "--first",
        choices=["X", "O"],
        default=GameConfig.DEFAULT_FIRST_PLAYER,
        help="Who moves first"
    )
    parser.add_argument(
        "--score-file",
        default=GameConfig.SCORE_FILE,
        help="Where to keep the score (JSON)"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Keep the score in memory only"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print move traces and search statistics"
    )

    args = parser.parse_args(argv)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        print("\n" + "="*60)
        print("   TicTacToe UI")
        print("="*60 + "\n")
        ui = TicTacToeUI(score_file=args.score_file)
        ui.run()
        return

    # Console mode (--no-ui)
    print("\n" + "="*60)
    print("   TicTacToe")
    print(f"   Mode: {args.mode.upper()}  Difficulty: {args.difficulty.upper()}")
    print("="*60 + "\n")

    store = MemoryScoreStore() if args.no_save else JsonFileScoreStore(args.score_file)
    scheduler = ManualScheduler()
    session = GameSession(
        scheduler=scheduler,
        score_tracker=ScoreTracker(store),
        verbose=args.verbose,
    )

    game = ConsoleGame(session, scheduler, args.first, args.mode, args.difficulty)

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")


if __name__ == "__main__":
    main()
