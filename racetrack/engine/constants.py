from __future__ import annotations

from racetrack.config import env_int, get_config

MIN_CARS = int(get_config("race.min_cars", 2))
MAX_CARS = int(get_config("race.max_cars", 9))
CRASH_INDICATOR = str(get_config("race.crash_indicator", "X"))
WALL_CHAR = "#"

MAX_TURNS = env_int("RACETRACK_MAX_TURNS", int(get_config("race.max_turns", 10000)))
MAX_SEARCH_STATES = int(get_config("search.max_states", 200000))
