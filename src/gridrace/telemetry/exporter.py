"""
Race exporter - Write recorded races to files.

Provides:
- CSV export (one row per turn)
- JSON export (track, events, result, summary)
"""

from dataclasses import dataclass
from pathlib import Path
import csv
import json
import logging
import numpy as np

from gridrace.telemetry.recorder import RaceRecorder


logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "round", "car_id", "label",
    "old_x", "old_y", "old_vx", "old_vy",
    "ax", "ay", "outcome",
    "new_x", "new_y", "new_vx", "new_vy",
    "status",
]


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


@dataclass
class ExporterConfig:
    """Exporter configuration."""
    output_dir: str = "./race_data"
    indent: int | None = 2


class RaceExporter:
    """Export recorded races for analysis in external tools."""

    def __init__(self, config: ExporterConfig | None = None):
        """Initialize exporter.

        Args:
            config: Exporter configuration
        """
        self.config = config or ExporterConfig()

        self._output_path = Path(self.config.output_dir)
        self._output_path.mkdir(parents=True, exist_ok=True)

    @property
    def output_path(self) -> Path:
        return self._output_path

    def export_csv(self, recorder: RaceRecorder, filename: str = "race.csv") -> Path:
        """Export turn events to a CSV file.

        Args:
            recorder: Recorder holding the race
            filename: Output filename

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename

        with open(output_file, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_COLUMNS)
            for event in recorder.events:
                writer.writerow([
                    event.round_number, event.car_id, event.label,
                    *event.old_position, *event.old_velocity,
                    *event.acceleration.as_tuple(), event.outcome.kind.value,
                    *event.new_position, *event.new_velocity,
                    event.status.value,
                ])

        logger.info(f"Exported {len(recorder.events)} turns to {output_file}")
        return output_file

    def export_json(self, recorder: RaceRecorder, filename: str = "race.json") -> Path:
        """Export the full race to a JSON file.

        Args:
            recorder: Recorder holding the race
            filename: Output filename

        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        data = {
            "track": recorder.track_state,
            "events": recorder.to_records(),
            "result": recorder.result.to_dict() if recorder.result else None,
            "summary": recorder.summary(),
        }

        with open(output_file, "w") as f:
            json.dump(data, f, cls=NumpyEncoder, indent=self.config.indent)

        logger.info(f"Exported race to {output_file}")
        return output_file
