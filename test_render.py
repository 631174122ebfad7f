"""
Tests for the board renderer.
"""

import numpy as np
import pytest

from logic.game_session import GameSession
from logic.score_tracker import ScoreTracker, MemoryScoreStore
from render.board_renderer import BoardRenderer
from render.config import RenderConfig


@pytest.fixture
def renderer():
    return BoardRenderer(RenderConfig())


@pytest.fixture
def session():
    return GameSession(score_tracker=ScoreTracker(MemoryScoreStore()))


def cell_patch(image, renderer, index, margin=20):
    """Pixels near a cell's top-left corner, inside the highlight area."""
    x, y = renderer.cell_origin(index)
    return image[y + margin:y + margin + 5, x + margin:x + margin + 5]


def test_image_shape(renderer):
    image = renderer.render(None)
    width, height = renderer.image_size
    assert image.shape == (height, width, 3)
    assert image.dtype == np.uint8


def test_cell_at_maps_pixels_to_indices(renderer):
    cell = renderer.config.CELL_OUTPUT_SIZE
    assert renderer.cell_at(0, 0) == 0
    assert renderer.cell_at(cell + 1, 0) == 1
    assert renderer.cell_at(cell * 2 + 5, cell * 2 + 5) == 8
    assert renderer.cell_at(cell + 5, cell * 2 - 1) == 4
    assert renderer.cell_at(-1, 10) is None
    assert renderer.cell_at(10, renderer.config.BOARD_OUTPUT_SIZE + 5) is None


def test_cell_center_round_trips(renderer):
    for index in range(9):
        assert renderer.cell_at(*renderer.cell_center(index)) == index


def test_marks_change_their_cell(renderer, session):
    session.start("X", "pvp")
    empty = renderer.render(session.snapshot())
    session.submit_move(4, "X")
    marked = renderer.render(session.snapshot())

    # Both strokes of the X cross at the cell center
    cx, cy = renderer.cell_center(4)
    assert tuple(marked[cy, cx]) == renderer.config.X_COLOR
    assert not np.array_equal(empty[:renderer.config.BOARD_OUTPUT_SIZE],
                              marked[:renderer.config.BOARD_OUTPUT_SIZE])

    # Other cells untouched
    assert np.array_equal(cell_patch(empty, renderer, 0), cell_patch(marked, renderer, 0))


def test_winning_line_is_highlighted(renderer, session):
    session.start("X", "pvp")
    for index in (0, 3, 1, 4, 2):
        session.submit_move(index, session.snapshot().current_player)

    image = renderer.render(session.snapshot())

    for index in (0, 1, 2):
        patch = cell_patch(image, renderer, index)
        assert (patch == renderer.config.WIN_FILL_COLOR).all()
    patch = cell_patch(image, renderer, 3)
    assert (patch == renderer.config.BACKGROUND_COLOR).all()


def test_tie_highlights_whole_board(renderer, session):
    session.start("X", "pvp")
    for index in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        session.submit_move(index, session.snapshot().current_player)

    image = renderer.render(session.snapshot())

    for index in range(9):
        patch = cell_patch(image, renderer, index)
        assert (patch == renderer.config.TIE_FILL_COLOR).all()


def test_status_text(renderer, session):
    assert renderer.status_text(None) == "Press N to start"
    session.start("O", "pvp")
    assert renderer.status_text(session.snapshot()).startswith("O to move")
    for index in (0, 3, 1, 4, 2):
        session.submit_move(index, session.snapshot().current_player)
    text = renderer.status_text(session.snapshot())
    assert text.startswith("O wins!")
    assert "O 1" in text
