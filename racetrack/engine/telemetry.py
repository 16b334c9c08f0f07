from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from .data_models import Direction, Vector

OUTCOME_MOVED = "moved"
OUTCOME_CRASHED = "crashed"
OUTCOME_WON = "won"


@dataclass(frozen=True)
class TurnFrame:
    turn: int
    car_index: int
    car_id: str
    acceleration: Direction
    start: Vector
    end: Vector
    velocity: Vector
    outcome: str


class TelemetryCollector:
    def __init__(self) -> None:
        self.frames: List[TurnFrame] = []

    def record_frame(self, frame: TurnFrame) -> None:
        self.frames.append(frame)

    def export(self) -> Sequence[TurnFrame]:
        return tuple(self.frames)

    def moves_by_car(self) -> Dict[str, List[Direction]]:
        moves: Dict[str, List[Direction]] = {}
        for frame in self.frames:
            moves.setdefault(frame.car_id, []).append(frame.acceleration)
        return moves

    def move_list_text(self, car_id: str) -> str:
        """Returns the accelerations of one car in the move-list file format."""
        return "\n".join(direction.name for direction in self.moves_by_car().get(car_id, []))
