from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .constants import CRASH_INDICATOR, MAX_CARS
from .data_models import Car, SpaceType, Vector
from .track import Track


class InvalidTrackFormatError(ValueError):
    pass


def load_track(path: Path | str) -> Track:
    """Loads a racetrack text file, returning a Track."""

    track_path = Path(path)
    if not track_path.exists():
        raise FileNotFoundError(track_path)

    return parse_track(track_path.read_text(encoding="utf-8"))


def parse_track(text: str) -> Track:
    """
    Parses the textual track format.

    The track is a rectangular block of lines. Leading empty lines are
    skipped and the block ends at the first empty line or the end of the
    data. ``#`` is a wall, a space is open track, ``< > ^ v`` are finish
    lines and any other character is the start position (and id) of a car.
    """
    lines = _track_block(text.splitlines())
    if not lines:
        raise InvalidTrackFormatError("File contains an empty track")

    width = len(lines[0])
    for idx, line in enumerate(lines, start=1):
        if len(line) != width:
            raise InvalidTrackFormatError(
                f"line {idx} has a length of {len(line)}, but should have length {width}."
            )

    grid: List[List[SpaceType]] = []
    cars: List[Car] = []
    for y, line in enumerate(lines):
        row: List[SpaceType] = []
        for x, char in enumerate(line):
            space = SpaceType.from_char(char)
            if space is SpaceType.TRACK and char != SpaceType.TRACK.value:
                _add_car(cars, char, Vector(x, y))
            row.append(space)
        grid.append(row)

    if not cars:
        raise InvalidTrackFormatError("There are no cars on the Track.")
    if len(cars) > MAX_CARS:
        raise InvalidTrackFormatError(f"There are more than {MAX_CARS} (maximum) cars on the track.")

    return Track(grid, cars)


def _track_block(raw_lines: Iterable[str]) -> List[str]:
    lines: List[str] = []
    for raw in raw_lines:
        line = raw.rstrip("\r\n")
        if not line:
            if lines:
                break
            continue
        lines.append(line)
    return lines


def _add_car(cars: List[Car], char: str, position: Vector) -> None:
    if char == CRASH_INDICATOR:
        raise InvalidTrackFormatError(
            f"Car at X: {position.x}, Y: {position.y} has the Crash-Indicator ({CRASH_INDICATOR}) as id"
        )
    if any(car.car_id == char for car in cars):
        raise InvalidTrackFormatError(f"The car with id {char} appears more than once.")
    cars.append(Car(car_id=char, position=position))
