#!/usr/bin/env python3
"""
Basic Race Example

This example demonstrates how to:
1. Build a track from text rows
2. Seat CPU cars with different strategies
3. Play the race round by round
4. Inspect the final result

Run with: python run_basic_race.py
"""

from gridrace import RaceEngine, Track
from gridrace.simulation import RaceState, render_race
from gridrace.strategy import FinishSeekingStrategy, WeightedStrategy


TRACK_ROWS = [
    "************************",
    "*++                    *",
    "*                      *",
    "*****************      *",
    "*--                    *",
    "*                      *",
    "************************",
]


def main():
    print("=" * 60)
    print("GridRace Basic Race Example")
    print("=" * 60)

    # Step 1: Build the track
    print("\n1. Building track...")
    track = Track.from_rows(TRACK_ROWS)
    print(f"   Size: {track.width}x{track.height}")
    print(f"   Start cells: {track.start_positions()}")
    print(f"   Finish cells: {track.finish_positions()}")

    # Step 2: Seat the cars
    print("\n2. Seating cars...")
    engine = RaceEngine(track)
    engine.add_car("Seeker", FinishSeekingStrategy())
    engine.add_car("Weigher", WeightedStrategy())
    print(render_race(track, engine.cars))

    # Step 3: Run the race
    print("3. Racing...")
    engine.start()
    while engine.state is RaceState.RUNNING:
        for event in engine.play_round():
            print(f"   Round {event.round_number}: {event.label} "
                  f"{event.old_position} -> {event.new_position} "
                  f"({event.outcome.kind.value})")

    # Step 4: Result
    print("\n4. Result:")
    print(render_race(track, engine.cars))
    result = engine.result
    if result.has_winner:
        print(f"   Winner: {engine.get_car(result.winner_id).label} "
              f"after {result.rounds} rounds")
    else:
        print(f"   No winner ({result.reason.value})")

    print("\n" + "=" * 60)
    print("Race complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
