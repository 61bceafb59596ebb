import itertools
import random

import numpy as np
import pytest

from ricochet_board.games.ricochet_robots.layout import BoardConfig
from ricochet_board.games.ricochet_robots.board import (
    Board,
    Tile,
    UP,
    DOWN,
    LEFT,
    RIGHT,
    DIRECTIONS,
    DIR_MASKS,
    OPPOSITE,
)
from ricochet_board.games.ricochet_robots.errors import (
    ConfigurationError,
    InvalidConnection,
    InvalidCorner,
    InvalidDirection,
    OutOfBounds,
)


def empty_board(*robots):
    board = Board()
    board.robots = [Tile(*r) for r in robots]
    return board


# ---------------------------------------------------------------------------
# Geometry and walls
# ---------------------------------------------------------------------------
def test_edges_always_block():
    board = Board()
    n = board.size
    for x, y in itertools.product(range(n), range(n)):
        for direction in DIRECTIONS:
            if board.neighbor(Tile(x, y), direction) is None:
                assert board.has_wall(Tile(x, y), direction)
                assert not board.has_placed_wall(Tile(x, y), direction)


def test_other_tile_from_raises_at_edge():
    board = Board()
    assert board.other_tile_from(Tile(0, 0), "right") == Tile(1, 0)
    assert board.other_tile_from(Tile(0, 0), DOWN) == Tile(0, 1)
    with pytest.raises(OutOfBounds):
        board.other_tile_from(Tile(0, 0), "up")
    with pytest.raises(OutOfBounds):
        board.other_tile_from(Tile(15, 3), RIGHT)


def test_invalid_direction_is_not_treated_as_blocked():
    board = Board()
    with pytest.raises(InvalidDirection):
        board.other_tile_from(Tile(3, 3), "north")
    with pytest.raises(InvalidDirection):
        board.has_wall(Tile(3, 3), "diagonal")
    with pytest.raises(InvalidDirection):
        board.add_wall(Tile(3, 3), 9)


def test_wall_example_is_found_from_both_sides():
    board = Board()
    board.add_wall(Tile(8, 7), "right")
    assert board.has_wall(Tile(8, 7), "right")
    assert board.has_wall(Tile(9, 7), "left")
    assert not board.has_wall(Tile(8, 7), "left")


def test_wall_symmetry_for_every_direction():
    for direction in DIRECTIONS:
        board = Board()
        tile = Tile(5, 5)
        board.add_wall(tile, direction)
        other = board.neighbor(tile, direction)
        assert board.has_wall(tile, direction)
        assert board.has_wall(other, OPPOSITE[direction])
        assert len(board.walls) == 1


def test_wall_key_is_canonical():
    a, b = Tile(1, 2), Tile(2, 2)
    assert Board.wall_key(a, b) == Board.wall_key(b, a) == (a, b)
    assert Board.wall_key((3, 4), (3, 3)) == (Tile(3, 3), Tile(3, 4))
    with pytest.raises(InvalidConnection):
        Board.wall_key(Tile(0, 0), Tile(1, 1))
    with pytest.raises(InvalidConnection):
        Board.wall_key(Tile(0, 0), Tile(0, 0))


def test_add_wall_off_the_grid_raises():
    board = Board()
    with pytest.raises(OutOfBounds):
        board.add_wall(Tile(0, 5), "left")
    assert board.walls == {}


def test_corner_walls():
    board = Board()
    board.add_corner_wall(Tile(1, 2), "top-left")
    assert board.has_placed_wall(Tile(1, 2), UP)
    assert board.has_placed_wall(Tile(1, 2), LEFT)
    assert not board.has_placed_wall(Tile(1, 2), DOWN)
    assert not board.has_placed_wall(Tile(1, 2), RIGHT)

    board.add_corner_wall(Tile(9, 11), "bottom-right")
    assert board.has_wall(Tile(9, 12), UP)
    assert board.has_wall(Tile(10, 11), LEFT)


def test_corner_off_the_grid_adds_nothing():
    board = Board()
    with pytest.raises(OutOfBounds):
        board.add_corner_wall(Tile(15, 5), "top-right")
    assert board.walls == {}
    with pytest.raises(OutOfBounds):
        board.add_corner_wall(Tile(0, 0), "bottom-left")
    assert board.walls == {}


def test_invalid_corner_adds_nothing():
    board = Board()
    with pytest.raises(InvalidCorner):
        board.add_corner_wall(Tile(4, 4), "middle")
    assert board.walls == {}


def test_default_layout():
    board = Board()
    board.init_default()
    # 7 box walls, 8 edge walls, 17 corners of two walls each
    assert len(board.walls) == 7 + 8 + 17 * 2
    assert len(board.corner_tiles) == 17
    assert board.has_wall(Tile(8, 7), RIGHT)
    assert board.has_wall(Tile(5, 0), LEFT)
    assert board.has_wall(Tile(0, 11), DOWN)
    for tile, corner in board.config.corner_walls:
        placed = [d for d in DIRECTIONS if board.has_placed_wall(tile, d)]
        assert len(placed) >= 2, (tile, corner)


def test_wall_mask():
    board = Board()
    board.add_wall(Tile(8, 7), RIGHT)
    board.add_wall(Tile(3, 3), DOWN)
    mask = board.wall_mask()
    assert mask.shape == (16, 16)
    assert mask.dtype == np.uint8
    assert mask[7, 8] & DIR_MASKS[RIGHT]
    assert mask[7, 9] & DIR_MASKS[LEFT]
    assert mask[3, 3] & DIR_MASKS[DOWN]
    assert mask[4, 3] & DIR_MASKS[UP]
    assert mask[0, 0] == DIR_MASKS[UP] | DIR_MASKS[LEFT]
    inner = board.wall_mask(include_edges=False)
    assert inner[0, 0] == 0
    assert int(inner.astype(bool).sum()) == 4


def test_signature_on_large_board():
    board = Board(BoardConfig(size=300, box_walls=(), edge_walls=()))
    board.add_wall(Tile(298, 299), RIGHT)
    assert isinstance(board.signature(), int)


def test_signature_tracks_walls():
    a, b = Board(), Board()
    a.init_default()
    b.init_default()
    assert a.signature() == b.signature()
    b.add_wall(Tile(2, 2), UP)
    assert a.signature() != b.signature()


# ---------------------------------------------------------------------------
# Movement
# ---------------------------------------------------------------------------
def test_slide_to_far_edge_on_empty_board():
    board = empty_board((0, 0))
    assert board.legal_moves(0) == {DOWN: Tile(0, 15), RIGHT: Tile(15, 0)}
    assert board.can_move_robot(0) == [Tile(0, 15), Tile(15, 0)]


def test_destinations_follow_direction_order():
    board = empty_board((5, 5))
    assert board.can_move_robot(0) == [Tile(5, 0), Tile(5, 15), Tile(0, 5), Tile(15, 5)]


def test_slide_stops_before_robot():
    board = empty_board((0, 0), (5, 0))
    assert board.legal_moves(0)[RIGHT] == Tile(4, 0)
    assert board.legal_moves(1)[LEFT] == Tile(1, 0)


def test_slide_stops_at_wall():
    board = empty_board((0, 0))
    board.add_wall(Tile(3, 0), RIGHT)
    assert board.legal_moves(0)[RIGHT] == Tile(3, 0)
    board.move_robot(0, Tile(3, 0))
    assert RIGHT not in board.legal_moves(0)
    assert board.legal_moves(0)[LEFT] == Tile(0, 0)


def test_no_move_when_boxed_in():
    board = empty_board((1, 1), (2, 1), (1, 2))
    board.add_corner_wall(Tile(1, 1), "top-left")
    assert board.can_move_robot(0) == []

    corner = empty_board((0, 0))
    corner.add_wall(Tile(0, 0), RIGHT)
    corner.add_wall(Tile(0, 0), DOWN)
    assert corner.can_move_robot(0) == []


def test_slides_on_default_layout():
    board = Board()
    board.init_default()
    board.robots = [Tile(1, 2)]
    assert board.can_move_robot(0) == [Tile(1, 14), Tile(9, 2)]


def test_slide_maximality():
    board = Board()
    board.init_default()
    board.robots = [Tile(1, 2), Tile(6, 5), Tile(10, 9), Tile(14, 12)]
    for robot in range(len(board.robots)):
        for direction, dest in board.legal_moves(robot).items():
            beyond = board.neighbor(dest, direction)
            assert (
                beyond is None
                or board.has_wall(dest, direction)
                or board.has_robot(beyond) is not None
            )


def test_has_robot():
    board = empty_board((2, 3), (4, 5))
    assert board.has_robot(Tile(2, 3)) == 0
    assert board.has_robot(Tile(4, 5)) == 1
    assert board.has_robot(Tile(0, 0)) is None


def test_move_robot_win_condition():
    board = empty_board((0, 0), (7, 7))
    board.target = Tile(3, 0)
    board.target_robot = 0
    assert board.move_robot(1, Tile(3, 0)) is False
    board.move_robot(1, Tile(7, 7))
    assert board.move_robot(0, Tile(4, 0)) is False
    assert board.move_robot(0, Tile(3, 0)) is True
    assert board.robots[0] == Tile(3, 0)


def test_robot_index_out_of_range():
    board = empty_board((0, 0), (5, 5))
    for robot in (-1, 2):
        with pytest.raises(IndexError):
            board.move_robot(robot, Tile(9, 9))
        with pytest.raises(IndexError):
            board.can_move_robot(robot)
        with pytest.raises(IndexError):
            board.legal_moves(robot)
    assert board.robots == [Tile(0, 0), Tile(5, 5)]


def test_move_robot_does_not_recheck_legality():
    board = empty_board((0, 0))
    board.move_robot(0, (9, 9))
    assert board.robots[0] == Tile(9, 9)


# ---------------------------------------------------------------------------
# Robots setup and reset
# ---------------------------------------------------------------------------
def test_init_robots_uses_distinct_corner_tiles():
    board = Board()
    board.init_default()
    board.init_robots(random.Random(0))
    assert len(board.robots) == board.num_robots
    assert len(set(board.robots)) == board.num_robots
    assert all(t in board.corner_tiles for t in board.robots)
    assert board.robots_backup == board.robots


def test_failed_placement_keeps_previous_robots():
    board = Board(BoardConfig(max_sampling_attempts=2))
    board.init_default()
    board.robots = [Tile(0, 0), Tile(1, 0), Tile(2, 0), Tile(3, 0)]
    board.backup()
    with pytest.raises(ConfigurationError):
        board.init_robots(random.Random(0))
    assert board.robots == [Tile(0, 0), Tile(1, 0), Tile(2, 0), Tile(3, 0)]
    assert board.robots_backup == board.robots


def test_reset_is_idempotent():
    board = empty_board((0, 0), (5, 5))
    board.backup()
    board.move_robot(0, Tile(15, 0))
    board.move_robot(1, Tile(5, 0))
    board.reset()
    once = list(board.robots)
    board.reset()
    assert board.robots == once == [Tile(0, 0), Tile(5, 5)]


def test_clear():
    board = empty_board((0, 0))
    board.backup()
    board.clear()
    assert board.robots == []
    assert board.robots_backup == []
