"""
Utility script to run a single race via Race.run_simulation().

Usage:
    python scripts/run_race.py --track tracks/corridor.txt --car a=path_finder
    python scripts/run_race.py --track tracks/duel.txt \
        --car a=move_list:moves/duel-a.txt --car b=do_not_move --silent

Each --car takes ID=STRATEGY[:FILE]. STRATEGY is one of user, do_not_move,
move_list, path_follower or path_finder; move_list and path_follower need
the file argument. --dump-moves writes the accelerations every car played
into DIR/<track>-<car>.txt, in the move list format.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path when script is executed from anywhere
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.append(REPO_ROOT)

from racetrack.engine import Direction  # noqa: E402
from racetrack.simulation import Race  # noqa: E402


def parse_assignment(value: str):
    car_id, sep, rest = value.partition("=")
    if not sep or len(car_id) != 1 or not rest:
        raise argparse.ArgumentTypeError(f"Expected ID=STRATEGY[:FILE], got {value!r}")
    kind, _, source = rest.partition(":")
    return car_id, (kind, source or None)


def console_prompt(message: str) -> Direction:
    while True:
        answer = input(f"{message} ")
        try:
            return Direction.from_name(answer)
        except ValueError:
            print(f"Unknown direction {answer!r}, use one of: {', '.join(d.name for d in Direction)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a racetrack race simulation.")
    parser.add_argument("--track", required=True, help="Track file to race on.")
    parser.add_argument(
        "--car",
        dest="cars",
        action="append",
        type=parse_assignment,
        required=True,
        help="Strategy of one car as ID=STRATEGY[:FILE]; repeat for every car.",
    )
    parser.add_argument("--max-turns", type=int, default=None, help="Abort the race after this many turns.")
    parser.add_argument("--dump-moves", default=None, help="Directory to write the played move lists to.")
    parser.add_argument("--silent", action="store_true", help="Suppress the turn by turn console output.")
    args = parser.parse_args()

    race = Race.from_files(args.track, dict(args.cars), prompt=console_prompt, verbose=not args.silent)
    winner = race.run_simulation(max_turns=args.max_turns, silent=args.silent)

    if winner is None:
        print("Race over: every car crashed.")
    else:
        print(f"Race over: car {winner.car_id} won.")

    if args.dump_moves:
        out_dir = Path(args.dump_moves)
        out_dir.mkdir(parents=True, exist_ok=True)
        track_name = Path(args.track).stem
        for car in race.track.cars:
            target = out_dir / f"{track_name}-{car.car_id}.txt"
            target.write_text(race.telemetry.move_list_text(car.car_id) + "\n", encoding="utf-8")
            if not args.silent:
                print(f"Wrote moves of car {car.car_id} to {target}")


if __name__ == "__main__":
    main()
