from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Protocol

from racetrack.engine.data_models import Direction


class StrategyType(Enum):
    USER = "user"
    DO_NOT_MOVE = "do_not_move"
    MOVE_LIST = "move_list"
    PATH_FOLLOWER = "path_follower"
    PATH_FINDER = "path_finder"

    @classmethod
    def from_str(cls, value: str) -> "StrategyType":
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError as exc:
            raise ValueError(f"Unknown move strategy: {value}") from exc


class MoveStrategy(Protocol):
    """Produces the next acceleration for one car; ``None`` means end of input."""

    def next_move(self) -> Optional[Direction]:
        ...


class DoNotMoveStrategy:
    """Never accelerates. A race where every car uses it is rejected."""

    def next_move(self) -> Optional[Direction]:
        return Direction.NONE


class UserMoveStrategy:
    """Asks an external prompt collaborator for every move."""

    def __init__(self, prompt: Callable[[str], Optional[Direction]], message: str = "Enter direction:") -> None:
        self.prompt = prompt
        self.message = message

    def next_move(self) -> Optional[Direction]:
        return self.prompt(self.message)
