from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple

from racetrack.config import data_path, env_flag
from racetrack.engine import (
    Car,
    DegenerateSetupError,
    Direction,
    RaceLoop,
    RaceTimeoutError,
    TelemetryCollector,
    Track,
    load_track,
)
from racetrack.engine.constants import MAX_TURNS
from racetrack.strategy import (
    DoNotMoveStrategy,
    MoveListStrategy,
    MoveStrategy,
    PathFinderStrategy,
    PathFollowerMoveStrategy,
    StrategyType,
    UserMoveStrategy,
)

Prompt = Callable[[str], Optional[Direction]]

_SOURCE_DIRECTORIES = {
    StrategyType.MOVE_LIST: "moves",
    StrategyType.PATH_FOLLOWER: "follower",
}


def build_strategy(
    kind: StrategyType | str,
    track: Track,
    car: Car,
    source: Optional[Path | str] = None,
    prompt: Optional[Prompt] = None,
) -> MoveStrategy:
    """
    Creates the move strategy of one car.

    ``source`` is the move-list or waypoint file for the file driven
    strategies, ``prompt`` the input collaborator for the user strategy.
    """
    if isinstance(kind, str):
        kind = StrategyType.from_str(kind)

    if kind is StrategyType.USER:
        if prompt is None:
            raise ValueError("The user strategy needs a prompt to ask for moves")
        return UserMoveStrategy(prompt)
    if kind is StrategyType.DO_NOT_MOVE:
        return DoNotMoveStrategy()
    if kind is StrategyType.MOVE_LIST:
        if source is None:
            raise ValueError("The move list strategy needs a move file")
        return MoveListStrategy.from_file(source)
    if kind is StrategyType.PATH_FOLLOWER:
        if source is None:
            raise ValueError("The path follower strategy needs a waypoint file")
        return PathFollowerMoveStrategy.from_file(source, car.position)
    return PathFinderStrategy(track, car.position)


class Race:
    """
    One race on one track: checks the setup, runs turns until a car wins
    (or every car crashed) and reports the result.
    """

    def __init__(
        self,
        track: Track,
        strategies: Optional[Mapping[str, MoveStrategy]] = None,
        verbose: Optional[bool] = None,
        telemetry: Optional[TelemetryCollector] = None,
    ) -> None:
        self.track = track
        self.verbose = env_flag("RACETRACK_VERBOSE") if verbose is None else verbose
        self.telemetry = telemetry if telemetry is not None else TelemetryCollector()
        self.loop: Optional[RaceLoop] = None

        for car_id, strategy in (strategies or {}).items():
            self.track.car_by_id(car_id).strategy = strategy

    def __repr__(self):
        return f"<Race | Cars: {self.track.car_count} | Size: {self.track.width}x{self.track.height}>"

    @classmethod
    def from_files(
        cls,
        track_path: Path | str,
        assignments: Mapping[str, Tuple[StrategyType | str, Optional[Path | str]]],
        prompt: Optional[Prompt] = None,
        verbose: Optional[bool] = None,
    ) -> "Race":
        """
        ``assignments`` maps a car id to (strategy type, optional source
        file). Bare file names are looked up in the configured tracks, moves
        and follower directories.
        """
        track = load_track(data_path("tracks", track_path))
        strategies: Dict[str, MoveStrategy] = {}
        for car_id, (kind, source) in assignments.items():
            kind = StrategyType.from_str(kind) if isinstance(kind, str) else kind
            if source is not None:
                source = data_path(_SOURCE_DIRECTORIES.get(kind, "moves"), source)
            car = track.car_by_id(car_id)
            strategies[car_id] = build_strategy(kind, track, car, source=source, prompt=prompt)
        return cls(track, strategies, verbose=verbose)

    def validate_setup(self) -> None:
        missing = [car.car_id for car in self.track.cars if car.strategy is None]
        if missing:
            raise ValueError(f"Cars without a move strategy: {', '.join(missing)}")
        if all(isinstance(car.strategy, DoNotMoveStrategy) for car in self.track.cars):
            raise DegenerateSetupError("Every car chose the do-not-move strategy, nobody could ever win.")

    def run_simulation(self, max_turns: Optional[int] = None, silent: bool = False) -> Optional[Car]:
        """
        Plays the race to the end and returns the winning car, or ``None``
        if every car crashed. Errors raised during a turn propagate.
        """
        self.validate_setup()
        verbose = self.verbose and not silent
        limit = MAX_TURNS if max_turns is None else max_turns

        self.loop = RaceLoop(self.track, telemetry=self.telemetry, verbose=verbose)
        if verbose:
            print(self.track.render())

        turns = 0
        while not self.loop.is_finished():
            if turns >= limit:
                raise RaceTimeoutError(f"No winner after {limit} turns")
            self.loop.play_turn()
            turns += 1

        winner = self.winner
        if verbose:
            print(self.track.render())
            if winner is None:
                print("All cars crashed, nobody won.")
            else:
                print(f"Car {winner.car_id} won after {turns} turns!")
        return winner

    @property
    def winner(self) -> Optional[Car]:
        if self.loop is None or self.loop.winner is None:
            return None
        return self.track.car(self.loop.winner)
