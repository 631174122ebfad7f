"""
Game session for TicTacToe.

This ties together:
- Logic (game state, move validation, win checking)
- The computer opponent (difficulty policy, deferred move)
- Score tracking
- Observers that draw the game (UI, console)

One GameSession owns one game at a time. Nothing outside it changes the
board; callers go through start(), new_game(), submit_move() and
reset_scores(), and watch snapshots.
"""

import random
from enum import Enum
from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass
from .config import GameConfig
from .difficulty import Difficulty, GameMode, MovePolicy, make_policy
from .game_state import GameState, Player, Board, EMPTY_BOARD, apply_move
from .move_validator import MoveValidator, MoveError
from .scheduler import Scheduler, ManualScheduler
from .score_tracker import ScoreTracker, ScoreRecord
from .win_checker import WinChecker, EvaluationResult


class SessionStatus(Enum):
    """Where the session is in its life cycle."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class GameSettings:
    """Settings latched when a game starts."""
    first_player: Player = Player.X
    mode: GameMode = GameMode.PVP
    difficulty: Difficulty = Difficulty.HARD
    computer_player: Player = Player.O

    @classmethod
    def from_config(cls, config=None) -> "GameSettings":
        config = config or GameConfig
        return cls(
            first_player=Player(config.DEFAULT_FIRST_PLAYER),
            mode=GameMode(config.DEFAULT_MODE),
            difficulty=Difficulty(config.DEFAULT_DIFFICULTY),
            computer_player=Player(config.COMPUTER_PLAYER),
        )

    @property
    def human_player(self) -> Player:
        return self.computer_player.opposite()


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only picture of the session, sent to observers."""
    status: SessionStatus
    board: Board
    current_player: Optional[Player]
    active: bool
    winner: Optional[Player]
    winning_line: Optional[Tuple[int, int, int]]
    outcome: Optional[str]      # "X", "O" or "TIE" once finished
    last_move: Optional[int]
    scores: ScoreRecord
    settings: GameSettings
    generation: int

    @property
    def is_tie(self) -> bool:
        return self.outcome == "TIE"


@dataclass
class MoveResult:
    """Answer to submit_move(). Rejections are values, never exceptions."""
    accepted: bool
    snapshot: GameSnapshot
    error: Optional[MoveError] = None
    error_message: Optional[str] = None


Observer = Callable[[GameSnapshot], None]


class GameSession:
    """
    Turn-taking state machine for one board.

    Game flow:
    1. start() clears the board and hands the turn to the first player
    2. Players alternate through submit_move()
    3. In CPU mode the computer's move is scheduled, not played at once
    4. A win or tie finishes the game and updates the score
    5. new_game() starts over
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        score_tracker: Optional[ScoreTracker] = None,
        config=None,
        rng: Optional[random.Random] = None,
        verbose: Optional[bool] = None
    ):
        """
        Initialize the session.

        Args:
            scheduler: Runs the computer's deferred move.
            score_tracker: Where finished games are counted.
            config: Game configuration.
            rng: Random source for the easy computer.
            verbose: Override config.VERBOSE.
        """
        self.config = config or GameConfig
        self.verbose = self.config.VERBOSE if verbose is None else verbose
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.score_tracker = score_tracker if score_tracker is not None else ScoreTracker()
        self.rng = rng or random.Random()

        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        self.status = SessionStatus.NOT_STARTED
        self.settings = GameSettings.from_config(self.config)
        self.game_state: Optional[GameState] = None
        self.result: Optional[EvaluationResult] = None

        # Bumped on every start; scheduled computer moves carry the value
        # they were scheduled under
        self.generation = 0
        self._pending_handle = None
        self._policy: Optional[MovePolicy] = None
        self._observers: List[Observer] = []

    # ==================== OBSERVERS ====================

    def add_observer(self, observer: Observer):
        self._observers.append(observer)

    def remove_observer(self, observer: Observer):
        if observer in self._observers:
            self._observers.remove(observer)

    def _emit(self):
        snapshot = self.snapshot()
        for observer in list(self._observers):
            # Observer failures never interrupt the turn handling
            try:
                observer(snapshot)
            except Exception as e:
                print(f"Warning: observer failed ({e})")

    def snapshot(self) -> GameSnapshot:
        """Current state of the session."""
        state = self.game_state
        result = self.result
        return GameSnapshot(
            status=self.status,
            board=state.board if state else EMPTY_BOARD,
            current_player=state.current_player if state and state.active else None,
            active=bool(state and state.active),
            winner=result.winner if result else None,
            winning_line=result.line if result else None,
            outcome=result.outcome_key if result else None,
            last_move=state.moves[-1] if state and state.moves else None,
            scores=self.score_tracker.record.copy(),
            settings=self.settings,
            generation=self.generation,
        )

    # ==================== COMMANDS ====================

    def start(
        self,
        first_player=None,
        mode=None,
        difficulty=None,
        computer_player=None
    ) -> GameSnapshot:
        """
        Start a new game on an empty board.

        Arguments left out fall back to the configured defaults. Enum
        members or their string values ("X", "cpu", "hard") are accepted.
        Any computer move still waiting from an earlier game is dropped.
        """
        defaults = GameSettings.from_config(self.config)
        self.settings = GameSettings(
            first_player=Player(first_player or defaults.first_player),
            mode=GameMode(mode or defaults.mode),
            difficulty=Difficulty(difficulty or defaults.difficulty),
            computer_player=Player(computer_player or defaults.computer_player),
        )

        self._cancel_pending()
        self.generation += 1

        self.game_state = GameState(
            board=EMPTY_BOARD,
            current_player=self.settings.first_player,
            active=True,
        )
        self.status = SessionStatus.IN_PROGRESS
        self.result = None

        if self.settings.mode == GameMode.CPU:
            self._policy = make_policy(
                self.settings.difficulty,
                self.settings.computer_player,
                rng=self.rng,
                config=self.config,
                verbose=self.verbose,
            )
        else:
            self._policy = None

        if self.verbose:
            print(f"New game #{self.generation}: {self.settings.mode.value}, "
                  f"{self.settings.difficulty.value}, "
                  f"{self.settings.first_player.value} moves first")

        self._emit()

        if self._is_computer_turn():
            self._schedule_computer_move(self.config.CPU_OPENING_DELAY_MS)

        return self.snapshot()

    def new_game(
        self,
        first_player=None,
        mode=None,
        difficulty=None,
        computer_player=None
    ) -> GameSnapshot:
        """Start again, keeping the last game's settings unless overridden."""
        return self.start(
            first_player=first_player or self.settings.first_player,
            mode=mode or self.settings.mode,
            difficulty=difficulty or self.settings.difficulty,
            computer_player=computer_player or self.settings.computer_player,
        )

    def submit_move(self, index: int, player) -> MoveResult:
        """
        Place player's mark on a cell.

        Returns:
            MoveResult; rejected moves leave the session untouched.
        """
        if isinstance(player, str):
            player = Player(player)

        in_progress = self.status == SessionStatus.IN_PROGRESS
        validation = self.validator.validate_move(
            self.game_state if in_progress else None, index, player
        )

        if not validation.is_valid:
            if self.verbose:
                print(f"Move rejected: {validation.error_message}")
            return MoveResult(
                accepted=False,
                snapshot=self.snapshot(),
                error=validation.error,
                error_message=validation.error_message,
            )

        self._apply_move(index, player)
        return MoveResult(accepted=True, snapshot=self.snapshot())

    def reset_scores(self) -> GameSnapshot:
        """Zero the score and tell observers."""
        self.score_tracker.reset()
        self._emit()
        return self.snapshot()

    # ==================== TURN HANDLING ====================

    @property
    def computer_pending(self) -> bool:
        """True while a computer move is scheduled."""
        return self._pending_handle is not None

    def _apply_move(self, index: int, player: Player):
        """Apply a validated move and advance the state machine."""
        state = self.game_state
        state.board = apply_move(state.board, index, player)
        state.moves.append(index)

        if self.verbose:
            print(f"{player.value} plays {index}")

        result = self.win_checker.evaluate(state.board)

        if result.is_terminal:
            state.active = False
            self.status = SessionStatus.FINISHED
            self.result = result
            self._cancel_pending()

            self.score_tracker.increment(result.winner)
            self.score_tracker.save()

            if self.verbose:
                print(f"Game over: {result.outcome_key}")

            self._emit()
            return

        state.current_player = player.opposite()
        self._emit()

        if self._is_computer_turn():
            self._schedule_computer_move(self.config.CPU_REPLY_DELAY_MS)

    def _is_computer_turn(self) -> bool:
        return (
            self.status == SessionStatus.IN_PROGRESS
            and self.settings.mode == GameMode.CPU
            and self.game_state.current_player == self.settings.computer_player
        )

    def _schedule_computer_move(self, delay_ms: int):
        self._cancel_pending()
        token = self.generation
        self._pending_handle = self.scheduler.call_later(
            delay_ms, lambda: self._play_computer_move(token)
        )

    def _cancel_pending(self):
        if self._pending_handle is not None:
            self.scheduler.cancel(self._pending_handle)
            self._pending_handle = None

    def _play_computer_move(self, token: int):
        """Scheduled callback: play the computer's move if still wanted."""
        if token != self.generation:
            if self.verbose:
                print(f"Dropping computer move from game #{token}")
            return

        self._pending_handle = None

        if not self._is_computer_turn():
            return

        index = self._policy(self.game_state.copy())
        self._apply_move(index, self.settings.computer_player)
