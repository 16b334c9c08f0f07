from __future__ import annotations

from typing import List, Optional

from .constants import MIN_CARS
from .data_models import Car, Direction, SpaceType, Vector
from .errors import ExhaustedMovesError
from .geometry import bresenham_path
from .telemetry import OUTCOME_CRASHED, OUTCOME_MOVED, OUTCOME_WON, TelemetryCollector, TurnFrame
from .track import Track

NO_WINNER = None


class RaceLoop:
    """
    Turn resolver: applies one car's acceleration per turn, walks the
    rasterized path and resolves crashes, finish crossings and turn order.

    The loop holds the only reference to the track; cars are looked up by
    roster index and mutated in place.
    """

    def __init__(
        self,
        track: Track,
        telemetry: Optional[TelemetryCollector] = None,
        verbose: bool = False,
    ) -> None:
        if track.car_count == 0:
            raise ValueError("Track must hold at least one car.")

        self.track = track
        self.telemetry = telemetry
        self.verbose = verbose
        self.turn_index = 0
        self._winner: Optional[int] = NO_WINNER
        self._current_car_index = 0

    # --- state queries ------------------------------------------------

    @property
    def current_car_index(self) -> int:
        return self._current_car_index

    @property
    def current_car(self) -> Car:
        return self.track.car(self._current_car_index)

    @property
    def winner(self) -> Optional[int]:
        """Index of the winning car, or NO_WINNER while the race is open."""
        return self._winner

    def car_id(self, car_index: int) -> str:
        return self.track.car(car_index).car_id

    def car_position(self, car_index: int) -> Vector:
        return self.track.car(car_index).position

    def car_velocity(self, car_index: int) -> Vector:
        return self.track.car(car_index).velocity

    def is_finished(self) -> bool:
        return self._winner is not NO_WINNER or self.track.uncrashed_car_count() == 0

    def calculate_path(self, start: Vector, end: Vector) -> List[Vector]:
        return bresenham_path(start, end)

    # --- turn resolution ----------------------------------------------

    def will_car_crash(self, car_index: int, position: Vector) -> bool:
        """
        True if the car would crash at ``position``: a wall (or off the
        board), a finish line crossed with zero or wrong-sign velocity, or a
        track cell occupied by any other car, crashed or not.
        """
        car = self.track.car(car_index)
        space = self.track.space_type(position)
        if space is SpaceType.WALL:
            return True
        if space.is_finish:
            return space.crossing(car.velocity) <= 0
        return self.track.has_other_car_at(position, car)

    def do_car_turn(self, acceleration: Optional[Direction]) -> None:
        """
        Executes the turn of the current car.

        The velocity is changed by ``acceleration``, then every cell on the
        path to the new position is checked in order. The car stops at the
        first cell where it crashes or crosses the finish line; otherwise it
        ends the turn on the path's last cell. Returns immediately if the
        race already has a winner or the current car is crashed.
        """
        if acceleration is None:
            raise ExhaustedMovesError(f"Car {self.current_car.car_id} has no move left")
        if self._winner is not NO_WINNER:
            return

        car = self.current_car
        if car.crashed:
            return

        start = car.position
        car.accelerate(acceleration)
        outcome = OUTCOME_MOVED

        for cell in self.calculate_path(start, car.next_position())[1:]:
            if self.will_car_crash(self._current_car_index, cell):
                self._crash_car(car, cell)
                outcome = OUTCOME_CRASHED
                break
            space = self.track.space_type(cell)
            if space.is_finish and self._cross_finish_line(car, space, cell):
                outcome = OUTCOME_WON
                break
        else:
            car.move()

        self._record_turn(car, acceleration, start, outcome)
        self.turn_index += 1

    def switch_to_next_active_car(self) -> None:
        """
        Moves the turn to the next uncrashed car in roster order. When every
        car is crashed the index advances by one slot and stops.
        """
        car_count = self.track.car_count
        if self.track.uncrashed_car_count() == 0:
            self._current_car_index = (self._current_car_index + 1) % car_count
            return
        for _ in range(car_count):
            self._current_car_index = (self._current_car_index + 1) % car_count
            if not self.track.car(self._current_car_index).crashed:
                return

    def play_turn(self) -> Direction:
        """Asks the current car's strategy for a move, resolves it and passes the turn on."""
        car = self.current_car
        if car.strategy is None:
            raise RuntimeError(f"Car {car.car_id} has no move strategy assigned")
        direction = car.strategy.next_move()
        if direction is None:
            raise ExhaustedMovesError(f"Move strategy of car {car.car_id} has no further move")
        self.do_car_turn(direction)
        if not self.is_finished():
            self.switch_to_next_active_car()
        return direction

    # --- internals ----------------------------------------------------

    def _cross_finish_line(self, car: Car, space: SpaceType, cell: Vector) -> bool:
        car.change_round_count(space.crossing(car.velocity))
        if car.round_count > 0:
            self._winner = self._current_car_index
            car.set_position(cell)
            return True
        return False

    def _crash_car(self, car: Car, cell: Vector) -> None:
        car.crash()
        car.set_position(cell)
        if self.track.uncrashed_car_count() < MIN_CARS:
            self._set_last_uncrashed_car_as_winner()

    def _set_last_uncrashed_car_as_winner(self) -> None:
        for idx, car in enumerate(self.track.cars):
            if not car.crashed:
                self._winner = idx
                return

    def _record_turn(self, car: Car, acceleration: Direction, start: Vector, outcome: str) -> None:
        if self.verbose:
            print(
                f"Turn {self.turn_index}: car {car.car_id} {acceleration.name} "
                f"{start} -> {car.position} velocity {car.velocity} [{outcome}]"
            )
        if self.telemetry is None:
            return
        self.telemetry.record_frame(
            TurnFrame(
                turn=self.turn_index,
                car_index=self._current_car_index,
                car_id=car.car_id,
                acceleration=acceleration,
                start=start,
                end=car.position,
                velocity=car.velocity,
                outcome=outcome,
            )
        )
