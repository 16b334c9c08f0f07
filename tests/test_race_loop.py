import pytest

from racetrack.engine import (
    Direction,
    ExhaustedMovesError,
    RaceLoop,
    TelemetryCollector,
    Vector,
    parse_track,
)
from racetrack.strategy import MoveListStrategy


def _loop(*rows, telemetry=None):
    return RaceLoop(parse_track("\n".join(rows)), telemetry=telemetry)


def test_car_crashes_on_first_wall_cell_of_path():
    loop = _loop(
        "#####",
        "#a  #",
        "#####",
    )
    loop.do_car_turn(Direction.RIGHT)
    assert loop.car_position(0) == Vector(2, 1)

    loop.do_car_turn(Direction.RIGHT)

    car = loop.track.car(0)
    assert car.crashed
    assert car.position == Vector(4, 1)
    assert loop.winner is None
    assert loop.is_finished()


@pytest.mark.parametrize(
    "rows, acceleration, finish",
    [
        (("####", "#a>#", "####"), Direction.RIGHT, Vector(2, 1)),
        (("####", "#<a#", "####"), Direction.LEFT, Vector(1, 1)),
        (("###", "#^#", "#a#", "###"), Direction.UP, Vector(1, 1)),
        (("###", "#a#", "#v#", "###"), Direction.DOWN, Vector(1, 2)),
    ],
)
def test_forward_crossing_wins_in_every_direction(rows, acceleration, finish):
    loop = _loop(*rows)

    loop.do_car_turn(acceleration)

    assert loop.winner == 0
    assert loop.car_position(0) == finish
    assert loop.track.car(0).round_count == 1


def test_wrong_way_and_parallel_crossings_crash():
    backwards = _loop(
        "####",
        "#>a#",
        "####",
    )
    backwards.do_car_turn(Direction.LEFT)
    assert backwards.track.car(0).crashed
    assert backwards.winner is None

    parallel = _loop(
        "###",
        "#>#",
        "#a#",
        "###",
    )
    parallel.do_car_turn(Direction.UP)
    assert parallel.track.car(0).crashed


def test_fast_car_stops_on_the_finish_cell():
    telemetry = TelemetryCollector()
    loop = _loop(
        "############",
        "#a        >#",
        "############",
        telemetry=telemetry,
    )
    for move in (Direction.RIGHT, Direction.RIGHT, Direction.RIGHT, Direction.NONE):
        loop.do_car_turn(move)

    assert loop.winner == 0
    assert loop.car_position(0) == Vector(10, 1)
    assert loop.car_velocity(0).x > 0
    assert [frame.outcome for frame in telemetry.export()] == ["moved", "moved", "moved", "won"]
    assert telemetry.move_list_text("a") == "RIGHT\nRIGHT\nRIGHT\nNONE"


def test_collision_uses_current_positions_and_turn_order_skips_crashed_cars():
    loop = _loop(
        "######",
        "#abc #",
        "######",
    )

    loop.do_car_turn(Direction.RIGHT)

    assert loop.track.car(0).crashed
    assert loop.car_position(0) == Vector(2, 1)
    assert loop.winner is None

    loop.switch_to_next_active_car()
    assert loop.current_car_index == 1
    loop.switch_to_next_active_car()
    assert loop.current_car_index == 2
    loop.switch_to_next_active_car()
    assert loop.current_car_index == 1


def test_wall_crash_leaves_other_cars_in_place():
    loop = _loop(
        "######",
        "#a   #",
        "#b   #",
        "#c   #",
        "######",
    )

    loop.do_car_turn(Direction.LEFT)

    assert loop.track.car(0).crashed
    assert loop.car_position(0) == Vector(0, 1)
    assert loop.car_position(1) == Vector(1, 2)
    assert loop.car_position(2) == Vector(1, 3)
    assert not loop.track.car(1).crashed
    assert not loop.track.car(2).crashed


def test_second_car_into_the_same_cell_crashes_there():
    loop = _loop(
        "######",
        "#a b #",
        "#c   #",
        "######",
    )
    loop.do_car_turn(Direction.RIGHT)
    assert loop.car_position(0) == Vector(2, 1)
    loop.switch_to_next_active_car()

    loop.do_car_turn(Direction.LEFT)

    assert loop.track.car(1).crashed
    assert loop.car_position(1) == Vector(2, 1)
    assert not loop.track.car(0).crashed
    assert loop.winner is None


def test_wreck_shows_over_the_car_it_hit():
    loop = _loop(
        "#####",
        "#ab #",
        "#####",
    )
    loop.do_car_turn(Direction.NONE)
    loop.switch_to_next_active_car()

    loop.do_car_turn(Direction.LEFT)

    assert loop.car_position(1) == Vector(1, 1)
    assert loop.track.render().splitlines()[1] == "#X  #"


def test_wreck_on_the_finish_line_does_not_block_a_forward_crossing():
    loop = _loop(
        "#####",
        "#a>b#",
        "#c  #",
        "#####",
    )
    loop.do_car_turn(Direction.NONE)
    loop.switch_to_next_active_car()
    loop.do_car_turn(Direction.LEFT)
    assert loop.track.car(1).crashed
    assert loop.car_position(1) == Vector(2, 1)
    loop.switch_to_next_active_car()
    loop.do_car_turn(Direction.NONE)
    loop.switch_to_next_active_car()

    loop.do_car_turn(Direction.RIGHT)

    assert loop.winner == 0
    assert loop.car_position(0) == Vector(2, 1)


def test_last_car_standing_wins():
    loop = _loop(
        "######",
        "#a   #",
        "#b   #",
        "######",
    )

    loop.do_car_turn(Direction.LEFT)

    assert loop.track.car(0).crashed
    assert loop.winner == 1
    assert loop.is_finished()
    assert loop.car_position(1) == Vector(1, 2)


def test_turns_after_a_win_are_ignored():
    loop = _loop(
        "####",
        "#a>#",
        "#b #",
        "####",
    )
    loop.do_car_turn(Direction.RIGHT)
    loop.switch_to_next_active_car()

    loop.do_car_turn(Direction.UP)

    assert loop.car_position(1) == Vector(1, 2)
    assert not loop.track.car(1).crashed
    assert loop.turn_index == 1


def test_switch_terminates_when_every_car_crashed():
    loop = _loop(
        "###",
        "#a#",
        "###",
    )
    loop.do_car_turn(Direction.UP)

    loop.switch_to_next_active_car()

    assert loop.current_car_index == 0
    assert loop.is_finished()
    assert loop.winner is None


def test_exhausted_moves_raise():
    loop = _loop(
        "#####",
        "#a >#",
        "#####",
    )
    with pytest.raises(ExhaustedMovesError):
        loop.do_car_turn(None)

    loop.track.car(0).strategy = MoveListStrategy(["RIGHT"])
    assert loop.play_turn() is Direction.RIGHT
    with pytest.raises(ExhaustedMovesError):
        loop.play_turn()


def test_play_turn_requires_a_strategy():
    loop = _loop(
        "#####",
        "#a >#",
        "#####",
    )
    with pytest.raises(RuntimeError):
        loop.play_turn()


def test_bad_car_index_raises():
    loop = _loop(
        "#####",
        "#a >#",
        "#####",
    )
    with pytest.raises(IndexError):
        loop.car_position(3)
    with pytest.raises(IndexError):
        loop.car_id(-1)
