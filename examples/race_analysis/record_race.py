#!/usr/bin/env python3
"""
Race Recording Example

This example demonstrates how to:
1. Load a track from a JSON file
2. Attach a recorder to the race engine
3. Export the race to CSV and JSON
4. Summarize each car's path

Run with: python record_race.py
"""

from pathlib import Path

from gridrace import RaceEngine, setup_logging
from gridrace.strategy import RandomStrategy, select_strategy
from gridrace.telemetry import ExporterConfig, RaceExporter, RaceRecorder
from gridrace.track import load_track


TRACK_FILE = Path(__file__).parent.parent / "tracks" / "hairpin.json"


def main():
    setup_logging("INFO")

    track = load_track(TRACK_FILE)
    engine = RaceEngine(track)
    engine.add_car("Seeker", select_strategy(0))
    engine.add_car("Weigher", select_strategy(1))
    engine.add_car("Wanderer", RandomStrategy(seed=3))

    recorder = RaceRecorder(engine)
    result = engine.run()

    print("\nSummary:")
    for key, value in recorder.summary().items():
        print(f"   {key}: {value}")

    print("\nPaths:")
    for car in engine.cars:
        print(f"   {car.label} ({car.status.value}): {recorder.path_of(car.car_id)}")

    exporter = RaceExporter(ExporterConfig(output_dir="./race_data"))
    csv_path = exporter.export_csv(recorder)
    json_path = exporter.export_json(recorder)
    print(f"\nExported {csv_path} and {json_path}")
    print(f"Winner: {result.winner_id}")


if __name__ == "__main__":
    main()
