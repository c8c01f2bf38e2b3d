#!/usr/bin/env python3
"""
GridRace Runner

Runs a vector race on a JSON track with CPU and human drivers.

Usage:
    python run_race.py examples/tracks/sprint.json
    python run_race.py TRACK --strategies finish,weighted,random
    python run_race.py TRACK --human 0          # Seat 0 is driven by you
    python run_race.py TRACK --export ./race_data
    python run_race.py --help
"""

import argparse
import logging
import sys

from gridrace import setup_logging
from gridrace.errors import InvalidTrackError, RaceStateError
from gridrace.simulation import RaceConfig, RaceEngine, RaceState, render_race
from gridrace.strategy import (
    HumanMoveProvider,
    available_strategies,
    create_strategy,
    select_strategy,
)
from gridrace.telemetry import ExporterConfig, RaceExporter, RaceRecorder
from gridrace.track import load_track


logger = logging.getLogger("gridrace.runner")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="GridRace turn-based vector racing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Two CPU cars, seats alternate finish-seeking and weighted
    python run_race.py examples/tracks/sprint.json

    # Three cars with explicit strategies and a fixed seed
    python run_race.py examples/tracks/hairpin.json --strategies finish,random,weighted --seed 7

    # Drive seat 0 yourself, enter accelerations like "1 0" or "-1,1"
    python run_race.py examples/tracks/sprint.json --human 0
        """,
    )

    parser.add_argument("track", help="Path to a JSON track file")

    seat_group = parser.add_argument_group("Seats")
    seat_group.add_argument(
        "--cars",
        type=int,
        default=None,
        help="Number of cars (default: track's numPlayers, capped by start cells)",
    )
    seat_group.add_argument(
        "--strategies",
        type=str,
        default=None,
        help=f"Comma-separated CPU strategies per seat ({', '.join(available_strategies())})",
    )
    seat_group.add_argument(
        "--human",
        type=int,
        action="append",
        default=[],
        metavar="SEAT",
        help="Seat index driven by a human (repeatable)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for randomized strategies",
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=RaceConfig.max_rounds,
        help="Rounds before the race is called with no winner (0 = unlimited)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the track after every round",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        metavar="DIR",
        help="Write race.csv and race.json to DIR",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write the log to this file",
    )

    return parser.parse_args(argv)


def build_engine(args: argparse.Namespace) -> RaceEngine:
    """Load the track and seat every car."""
    track = load_track(args.track)
    starts = len(track.start_positions())
    count = args.cars if args.cars is not None else min(track.config.num_players, starts)

    names = [n.strip() for n in args.strategies.split(",")] if args.strategies else []

    config = RaceConfig(max_rounds=args.max_rounds or None)
    engine = RaceEngine(track, config)

    for seat in range(count):
        seed = None if args.seed is None else args.seed + seat
        if seat in args.human:
            engine.add_car(f"Human{seat}", HumanMoveProvider(), is_human=True)
        elif seat < len(names):
            strategy = create_strategy(names[seat], seed)
            engine.add_car(f"{strategy.name.title()}{seat}", strategy)
        else:
            strategy = select_strategy(seat, seed)
            engine.add_car(f"{strategy.name.title()}{seat}", strategy)

    return engine


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        engine = build_engine(args)
    except (InvalidTrackError, RaceStateError, KeyError) as e:
        logger.error(str(e))
        return 2

    recorder = RaceRecorder(engine)

    print(render_race(engine.track, engine.cars))
    engine.start()
    while engine.state is RaceState.RUNNING:
        engine.play_round()
        if args.show:
            print(f"******************** ROUND {engine.round_number} ********************")
            print(render_race(engine.track, engine.cars))

    result = engine.result
    print(render_race(engine.track, engine.cars))
    if result.has_winner:
        winner = engine.get_car(result.winner_id)
        print(f"THE WINNER IS {winner.label} (car {winner.car_id}) after {result.rounds} rounds")
    else:
        print(f"NO WINNER ({result.reason.value}) after {result.rounds} rounds")

    if args.export:
        exporter = RaceExporter(ExporterConfig(output_dir=args.export))
        exporter.export_csv(recorder)
        exporter.export_json(recorder)

    return 0


if __name__ == "__main__":
    sys.exit(main())
