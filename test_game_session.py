"""
Tests for the TicTacToe game session.
Turn handling, rejections, the deferred computer move and scoring.
"""

import dataclasses
import random

import pytest

from logic.difficulty import Difficulty, GameMode
from logic.game_session import GameSession, SessionStatus
from logic.game_state import Player, EMPTY_BOARD
from logic.move_validator import MoveError
from logic.scheduler import ManualScheduler
from logic.score_tracker import ScoreTracker, MemoryScoreStore

X, O = Player.X, Player.O


class LeakyScheduler(ManualScheduler):
    """A scheduler whose cancel() comes too late: callbacks fire anyway."""

    def cancel(self, handle) -> None:
        pass


def make_session(scheduler=None, store=None, rng=None):
    scheduler = scheduler or ManualScheduler()
    tracker = ScoreTracker(store if store is not None else MemoryScoreStore())
    return GameSession(scheduler=scheduler, score_tracker=tracker, rng=rng or random.Random(0))


def play(session, *moves):
    """Alternate moves for whoever is to move."""
    for index in moves:
        result = session.submit_move(index, session.snapshot().current_player)
        assert result.accepted, result.error_message


# ==================== START ====================

def test_session_starts_not_started():
    session = make_session()
    snapshot = session.snapshot()
    assert snapshot.status == SessionStatus.NOT_STARTED
    assert snapshot.board == EMPTY_BOARD
    assert not snapshot.active
    assert snapshot.current_player is None


def test_start_resets_board_and_turn():
    session = make_session()
    snapshot = session.start(first_player=O, mode="pvp", difficulty="hard")
    assert snapshot.status == SessionStatus.IN_PROGRESS
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.current_player == O
    assert snapshot.active
    assert snapshot.settings.mode == GameMode.PVP


def test_submit_before_start_is_rejected():
    session = make_session()
    result = session.submit_move(4, X)
    assert not result.accepted
    assert result.error == MoveError.GAME_NOT_ACTIVE


# ==================== MOVES ====================

def test_players_alternate():
    session = make_session()
    session.start(X, "pvp")
    play(session, 4)
    assert session.snapshot().current_player == O
    play(session, 0)
    assert session.snapshot().current_player == X
    assert session.snapshot().board[4] == X
    assert session.snapshot().board[0] == O
    assert session.snapshot().last_move == 0


def test_occupied_cell_is_rejected_and_board_unchanged():
    session = make_session()
    session.start(X, "pvp")
    play(session, 4)
    before = session.snapshot()

    result = session.submit_move(4, O)

    assert not result.accepted
    assert result.error == MoveError.CELL_OCCUPIED
    assert session.snapshot().board == before.board
    assert session.snapshot().current_player == O


def test_wrong_player_is_rejected():
    session = make_session()
    session.start(X, "pvp")
    result = session.submit_move(0, O)
    assert result.error == MoveError.NOT_YOUR_TURN
    assert session.snapshot().board == EMPTY_BOARD


def test_out_of_range_index_is_rejected():
    session = make_session()
    session.start(X, "pvp")
    assert session.submit_move(9, X).error == MoveError.INVALID_INDEX
    assert session.submit_move(-1, X).error == MoveError.INVALID_INDEX


def test_player_given_as_string():
    session = make_session()
    session.start("X", "pvp")
    assert session.submit_move(0, "X").accepted


# ==================== FINISH ====================

def test_win_finishes_game_and_counts_score():
    store = MemoryScoreStore()
    session = make_session(store=store)
    session.start(X, "pvp")
    play(session, 0, 3, 1, 4, 2)

    snapshot = session.snapshot()
    assert snapshot.status == SessionStatus.FINISHED
    assert not snapshot.active
    assert snapshot.winner == X
    assert snapshot.winning_line == (0, 1, 2)
    assert snapshot.outcome == "X"
    assert snapshot.scores.x == 1
    assert store.data == {"X": 1, "O": 0, "TIE": 0}


def test_tie_finishes_game_and_counts_score():
    session = make_session()
    session.start(X, "pvp")
    play(session, 0, 1, 2, 4, 3, 5, 7, 6, 8)

    snapshot = session.snapshot()
    assert snapshot.status == SessionStatus.FINISHED
    assert snapshot.is_tie
    assert snapshot.winner is None
    assert snapshot.winning_line is None
    assert snapshot.scores.tie == 1


@pytest.mark.parametrize("index", range(9))
def test_finished_game_rejects_every_move(index):
    session = make_session()
    session.start(X, "pvp")
    play(session, 0, 3, 1, 4, 2)

    for player in (X, O):
        result = session.submit_move(index, player)
        assert result.error == MoveError.GAME_NOT_ACTIVE


def test_new_game_leaves_finished_state_and_keeps_score():
    session = make_session()
    session.start(X, "pvp")
    play(session, 0, 3, 1, 4, 2)

    snapshot = session.new_game()

    assert snapshot.status == SessionStatus.IN_PROGRESS
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.scores.x == 1
    assert session.submit_move(0, X).accepted


# ==================== OBSERVERS ====================

def test_observers_see_every_accepted_change():
    session = make_session()
    seen = []
    session.add_observer(seen.append)

    session.start(X, "pvp")
    play(session, 4)
    session.submit_move(4, O)     # rejected, no snapshot
    play(session, 0)

    assert [s.board.count(None) for s in seen] == [9, 8, 7]

    session.remove_observer(seen.append)
    play(session, 1)
    assert len(seen) == 3


def test_failing_observer_does_not_stall_computer(capsys):
    scheduler = ManualScheduler()
    session = make_session(scheduler)
    calls = []

    def broken(snapshot):
        calls.append(snapshot)
        raise RuntimeError("canvas gone")

    session.add_observer(broken)
    session.start(X, "cpu", "easy", computer_player=O)

    result = session.submit_move(4, X)
    assert result.accepted
    assert scheduler.pending == 1
    assert "observer failed" in capsys.readouterr().out

    scheduler.run_pending()
    snapshot = session.snapshot()
    assert snapshot.board.count(O) == 1
    assert snapshot.current_player == X
    assert session.submit_move(snapshot.board.index(None), X).accepted
    assert len(calls) == 4


def test_snapshots_are_immutable():
    session = make_session()
    snapshot = session.start(X, "pvp")
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.active = False
    play(session, 4)
    assert snapshot.board == EMPTY_BOARD


def test_sessions_are_independent():
    first = make_session()
    second = make_session()
    first.start(X, "pvp")
    second.start(X, "pvp")
    play(first, 4)
    assert second.snapshot().board == EMPTY_BOARD


# ==================== COMPUTER ====================

def test_computer_move_is_deferred():
    scheduler = ManualScheduler()
    session = make_session(scheduler)
    session.start(X, "cpu", "hard", computer_player=O)

    play(session, 4)

    assert scheduler.pending == 1
    assert session.computer_pending
    assert session.snapshot().board.count(None) == 8

    scheduler.run_pending()

    snapshot = session.snapshot()
    assert snapshot.board[0] == O      # lowest of the equally good corners
    assert snapshot.current_player == X
    assert not session.computer_pending


def test_computer_opens_when_first():
    scheduler = ManualScheduler()
    session = make_session(scheduler)
    session.start(O, "cpu", "hard", computer_player=O)

    assert session.snapshot().board == EMPTY_BOARD
    assert scheduler.next_delay() == session.config.CPU_OPENING_DELAY_MS

    scheduler.run_pending()
    assert session.snapshot().board[0] == O
    assert session.snapshot().current_player == X


def test_human_cannot_move_during_computer_turn():
    session = make_session()
    session.start(X, "cpu", "hard", computer_player=O)
    play(session, 4)
    result = session.submit_move(0, X)
    assert result.error == MoveError.NOT_YOUR_TURN


def test_restart_cancels_pending_computer_move():
    scheduler = ManualScheduler()
    session = make_session(scheduler)
    session.start(O, "cpu", "hard", computer_player=O)
    assert scheduler.pending == 1

    session.start(X, "pvp")

    assert scheduler.pending == 0
    assert scheduler.run_pending() == 0
    assert session.snapshot().board == EMPTY_BOARD


def test_stale_computer_move_never_lands_on_new_board():
    scheduler = LeakyScheduler()
    session = make_session(scheduler)
    session.start(O, "cpu", "hard", computer_player=O)
    old_generation = session.generation

    session.start(X, "pvp")
    scheduler.run_pending()

    snapshot = session.snapshot()
    assert snapshot.generation == old_generation + 1
    assert snapshot.board == EMPTY_BOARD
    assert snapshot.current_player == X


def test_stale_move_dropped_when_new_game_also_waits_for_computer():
    scheduler = LeakyScheduler()
    session = make_session(scheduler)
    session.start(O, "cpu", "easy", computer_player=O)
    session.start(O, "cpu", "easy", computer_player=O)

    scheduler.run_pending()

    # Only the current game's move landed
    assert session.snapshot().board.count(O) == 1


def test_computer_move_dropped_when_turn_changed():
    scheduler = ManualScheduler()
    session = make_session(scheduler)
    session.start(X, "cpu", "hard", computer_player=O)
    play(session, 4)

    # Someone played O's move through the command interface first
    assert session.submit_move(8, O).accepted
    scheduler.run_pending()

    assert session.snapshot().board.count(O) == 1
    assert session.snapshot().current_player == X


def test_settings_latched_until_next_game():
    session = make_session()
    session.start(X, "cpu", "easy")
    assert session.snapshot().settings.difficulty == Difficulty.EASY

    session.new_game()
    assert session.snapshot().settings.mode == GameMode.CPU
    assert session.snapshot().settings.difficulty == Difficulty.EASY

    session.new_game(mode="pvp")
    assert session.snapshot().settings.mode == GameMode.PVP


def run_cpu_game(session, scheduler):
    """Human always takes the lowest free cell; returns the final snapshot."""
    while session.snapshot().status == SessionStatus.IN_PROGRESS:
        if scheduler.pending:
            scheduler.run_pending()
            continue
        snapshot = session.snapshot()
        index = snapshot.board.index(None)
        assert session.submit_move(index, snapshot.current_player).accepted
    return session.snapshot()


def test_hard_computer_never_loses_full_game():
    scheduler = ManualScheduler()
    session = make_session(scheduler)
    session.start(X, "cpu", "hard", computer_player=O)

    snapshot = run_cpu_game(session, scheduler)

    assert snapshot.status == SessionStatus.FINISHED
    assert snapshot.winner != X


def test_easy_computer_plays_to_the_end():
    scheduler = ManualScheduler()
    session = make_session(scheduler, rng=random.Random(42))
    for _ in range(5):
        session.new_game(X, "cpu", "easy", computer_player=O)
        run_cpu_game(session, scheduler)

    scores = session.snapshot().scores
    assert scores.x + scores.o + scores.tie == 5


def test_easy_computer_is_repeatable_with_seed():
    boards = []
    for _ in range(2):
        scheduler = ManualScheduler()
        session = make_session(scheduler, rng=random.Random(99))
        session.start(X, "cpu", "easy", computer_player=O)
        boards.append(run_cpu_game(session, scheduler).board)
    assert boards[0] == boards[1]


# ==================== SCORES ====================

def test_reset_scores():
    store = MemoryScoreStore({"X": 4, "O": 2, "TIE": 1})
    session = make_session(store=store)
    assert session.snapshot().scores.x == 4

    seen = []
    session.add_observer(seen.append)
    snapshot = session.reset_scores()

    assert (snapshot.scores.x, snapshot.scores.o, snapshot.scores.tie) == (0, 0, 0)
    assert store.data == {"X": 0, "O": 0, "TIE": 0}
    assert len(seen) == 1


class BrokenStore(MemoryScoreStore):
    def read(self):
        raise OSError("disk on fire")

    def write(self, data):
        raise OSError("disk on fire")


def test_storage_failure_does_not_stop_the_game():
    session = make_session(store=BrokenStore())
    session.start(X, "pvp")
    play(session, 0, 3, 1, 4, 2)

    snapshot = session.snapshot()
    assert snapshot.status == SessionStatus.FINISHED
    assert snapshot.scores.x == 1
