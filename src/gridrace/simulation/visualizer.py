"""
Visualizer - Plain text rendering of a race.
"""

from typing import Iterable, List

from gridrace.car.car import Car, CarStatus, CarView
from gridrace.track.track import CellType, Track


def render_race(track: Track, cars: Iterable[Car | CarView]) -> str:
    """Render the track with cars drawn on it.

    Cars still on the grid (racing or finished) are drawn as the last
    digit of their id. Status lines follow the grid.

    Args:
        track: Race track
        cars: Cars or car snapshots

    Returns:
        Multi-line text
    """
    cars = list(cars)
    rows: List[List[str]] = [list(row) for row in track.to_rows()]

    for car in cars:
        if car.status is CarStatus.CRASHED:
            continue
        x, y = car.position
        rows[y][x] = str(car.car_id)[-1]

    lines = ["".join(row) for row in rows]

    racing = [car for car in cars if car.status is CarStatus.RACING]
    if racing and all(track.cell_at(*car.position) is CellType.START for car in racing):
        lines.append("Players on their marks")

    crashed = [str(car.car_id) for car in cars if car.status is CarStatus.CRASHED]
    if crashed:
        lines.append("Crashed players: " + " ".join(crashed))

    return "\n".join(lines) + "\n"
