from unittest.mock import MagicMock

import pytest

from racetrack.engine import (
    DegenerateSetupError,
    Direction,
    ExhaustedMovesError,
    RaceTimeoutError,
    TelemetryCollector,
    Vector,
    parse_track,
)
from racetrack.simulation import Race, build_strategy
from racetrack.strategy import (
    DoNotMoveStrategy,
    MoveListStrategy,
    PathFinderStrategy,
    StrategyType,
    UserMoveStrategy,
)

CORRIDOR = "\n".join(
    [
        "############",
        "#a        >#",
        "############",
    ]
)


def test_all_do_not_move_cars_are_rejected():
    race = Race.from_files("tracks/duel.txt", {"a": ("do_not_move", None), "b": ("do_not_move", None)})

    with pytest.raises(DegenerateSetupError):
        race.run_simulation(silent=True)


def test_cars_without_strategy_are_rejected():
    race = Race.from_files("tracks/duel.txt", {"a": ("path_finder", None)}, verbose=False)

    with pytest.raises(ValueError, match="strategy: b"):
        race.run_simulation()


def test_move_list_car_beats_parked_car():
    race = Race.from_files(
        "tracks/duel.txt",
        {"a": ("move_list", "moves/duel-a.txt"), "b": ("do_not_move", None)},
        verbose=False,
    )

    winner = race.run_simulation()

    assert winner.car_id == "a"
    assert winner.position == Vector(12, 1)
    assert race.track.car_by_id("b").position == Vector(1, 2)
    assert race.telemetry.move_list_text("a") == "RIGHT\nRIGHT\nRIGHT\nNONE\nLEFT"
    assert race.telemetry.export()[-1].outcome == "won"


def test_bare_file_names_resolve_to_data_directories():
    race = Race.from_files("corridor.txt", {"a": ("path_follower", "corridor-a.txt")}, verbose=False)

    winner = race.run_simulation()

    assert winner.car_id == "a"
    assert len(race.telemetry.export()) == 8


def test_path_finder_race_prints_result_when_verbose(capsys):
    race = Race(parse_track(CORRIDOR), verbose=True)
    car = race.track.car(0)
    car.strategy = PathFinderStrategy(race.track, car.position)

    winner = race.run_simulation()

    assert winner is car
    assert "Car a won after 4 turns!" in capsys.readouterr().out


def test_silent_run_prints_nothing(capsys):
    race = Race(parse_track(CORRIDOR), {"a": MoveListStrategy(["RIGHT", "RIGHT", "RIGHT", "NONE"])}, verbose=True)

    race.run_simulation(silent=True)

    assert capsys.readouterr().out == ""


def test_user_strategy_asks_the_prompt_for_every_move():
    prompt = MagicMock(side_effect=[Direction.RIGHT, Direction.RIGHT, Direction.RIGHT, Direction.NONE])
    race = Race(parse_track(CORRIDOR), {"a": UserMoveStrategy(prompt)}, verbose=False)

    winner = race.run_simulation()

    assert winner.car_id == "a"
    assert prompt.call_count == 4
    prompt.assert_called_with("Enter direction:")


def test_every_car_crashed_returns_no_winner():
    race = Race(parse_track(CORRIDOR), {"a": MoveListStrategy(["LEFT"])}, verbose=False)

    assert race.run_simulation() is None
    assert race.track.car(0).crashed


def test_exhausted_moves_propagate():
    race = Race(parse_track(CORRIDOR), {"a": MoveListStrategy(["RIGHT"])}, verbose=False)

    with pytest.raises(ExhaustedMovesError):
        race.run_simulation()


def test_turn_limit_raises_timeout():
    telemetry = TelemetryCollector()
    prompt = MagicMock(return_value=Direction.NONE)
    race = Race(
        parse_track("#####\n#ab>#\n#####"),
        {"a": DoNotMoveStrategy(), "b": UserMoveStrategy(prompt)},
        verbose=False,
        telemetry=telemetry,
    )

    with pytest.raises(RaceTimeoutError):
        race.run_simulation(max_turns=5)
    assert len(telemetry.export()) == 5


def test_verbose_defaults_to_environment(monkeypatch):
    monkeypatch.setenv("RACETRACK_VERBOSE", "true")
    assert Race(parse_track(CORRIDOR)).verbose is True

    monkeypatch.setenv("RACETRACK_VERBOSE", "0")
    assert Race(parse_track(CORRIDOR)).verbose is False


def test_build_strategy_needs_its_inputs():
    track = parse_track(CORRIDOR)
    car = track.car(0)

    with pytest.raises(ValueError):
        build_strategy(StrategyType.USER, track, car)
    with pytest.raises(ValueError):
        build_strategy("move_list", track, car)
    with pytest.raises(ValueError):
        build_strategy("path_follower", track, car)
    assert isinstance(build_strategy("do-not-move", track, car), DoNotMoveStrategy)
