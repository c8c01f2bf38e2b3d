"""
Track loader - JSON track files.

File layout:
    {
        "name": "Oval",            (optional)
        "width": 12,
        "height": 5,
        "numPlayers": 2,
        "direction": "cw",
        "track": ["************", "*+        -*", ...]
    }
"""

from pathlib import Path
from typing import Any, Mapping
import json
import logging

from gridrace.errors import InvalidTrackError
from gridrace.track.track import Track, TrackConfig


logger = logging.getLogger(__name__)

MAX_WIDTH = 100
MAX_HEIGHT = 100
MIN_PLAYERS = 2
MAX_PLAYERS = 10
DIRECTIONS = ("cw", "ccw")

REQUIRED_KEYS = ("width", "height", "numPlayers", "direction", "track")


def load_track(path: str | Path) -> Track:
    """Load and validate a track from a JSON file.

    Args:
        path: Path to a .json track file

    Returns:
        Validated track

    Raises:
        InvalidTrackError: If the file is missing, not JSON or invalid
    """
    path = Path(path)
    if path.suffix.lower() != ".json":
        raise InvalidTrackError(f"Not a JSON file: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InvalidTrackError(f"Error reading track file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidTrackError(f"Malformed JSON in {path}: {e}") from e

    if not isinstance(data, Mapping):
        raise InvalidTrackError(f"Track file {path} must hold a JSON object")

    track = parse_track(data, default_name=path.stem)
    logger.info(
        f"Loaded track '{track.name}' ({track.width}x{track.height}, "
        f"{len(track.start_positions())} start cells)"
    )
    return track


def parse_track(data: Mapping[str, Any], default_name: str = "Unnamed Track") -> Track:
    """Build a track from an already-decoded JSON mapping.

    Args:
        data: Mapping with the track file keys
        default_name: Name used when the mapping has none

    Returns:
        Validated track
    """
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise InvalidTrackError(f"Missing track keys: {', '.join(missing)}")

    width = _as_int(data, "width")
    height = _as_int(data, "height")
    num_players = _as_int(data, "numPlayers")
    direction = data["direction"]

    if not 0 < width <= MAX_WIDTH:
        raise InvalidTrackError(f"Width {width} outside 1..{MAX_WIDTH}")
    if not 0 < height <= MAX_HEIGHT:
        raise InvalidTrackError(f"Height {height} outside 1..{MAX_HEIGHT}")
    if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
        raise InvalidTrackError(
            f"Number of players {num_players} outside {MIN_PLAYERS}..{MAX_PLAYERS}"
        )
    if direction not in DIRECTIONS:
        raise InvalidTrackError(f"Direction must be one of {DIRECTIONS}, got {direction!r}")

    rows = data["track"]
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise InvalidTrackError("Track layout is missing or not a list of strings")
    if len(rows) != height:
        raise InvalidTrackError(
            f"Track has {len(rows)} rows, declared height is {height}"
        )
    for y, row in enumerate(rows):
        if len(row) != width:
            raise InvalidTrackError(
                f"Row {y} has length {len(row)}, declared width is {width}"
            )

    config = TrackConfig(
        name=str(data.get("name", default_name)),
        num_players=num_players,
        direction=direction,
    )
    track = Track.from_rows(rows, config)

    if not track.start_positions():
        raise InvalidTrackError("No start cells found for this track")
    if not track.finish_positions():
        raise InvalidTrackError("No finish cells found for this track")
    return track


def _as_int(data: Mapping[str, Any], key: str) -> int:
    value = data[key]
    # bool is an int subclass but never a valid size
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTrackError(f"'{key}' must be an integer, got {value!r}")
    return value
