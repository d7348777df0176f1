"""
JSON exporter for exercise progression data.

Writes the exercise map in the wire format consumed by chart front
ends, plus per-exercise summaries.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any

from .models import Exercise
from .analyzer import calculate_exercise_summary


logger = logging.getLogger(__name__)


def exercises_payload(exercises: Dict[str, Exercise]) -> Dict[str, Any]:
    """Build the {"exercises": {...}} response body."""
    return {"exercises": {name: ex.to_dict() for name, ex in exercises.items()}}


def exercises_error_payload(error: Exception) -> Dict[str, Any]:
    """Build the {"error": ...} response body for a failed fetch/parse."""
    return {"error": str(error) or error.__class__.__name__}


class JsonExporter:
    """Exports exercise data to JSON files."""

    def __init__(self, output_dir: Path):
        """Initialize exporter with an output directory."""
        self._output_dir = output_dir

    def _ensure_dirs(self) -> None:
        """Create output directory if it doesn't exist."""
        self._output_dir.mkdir(parents=True, exist_ok=True)

    def _write_json(self, filename: str, data: Any) -> Path:
        """Write data to JSON file."""
        filepath = self._output_dir / filename
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Exported {filename}")
        return filepath

    def export_exercises(self, exercises: Dict[str, Exercise]) -> Path:
        """Export the full exercise map."""
        return self._write_json("exercises.json", exercises_payload(exercises))

    def export_summaries(self, exercises: Dict[str, Exercise]) -> Path:
        """Export one summary record per exercise."""
        data = [calculate_exercise_summary(ex) for ex in exercises.values()]
        return self._write_json("exercise_summaries.json", data)

    def export_error(self, error: Exception) -> Path:
        """Export an error payload in place of exercise data."""
        self._ensure_dirs()
        return self._write_json("error.json", exercises_error_payload(error))

    def export_all(self, exercises: Dict[str, Exercise]) -> None:
        """Export all data files."""
        self._ensure_dirs()

        logger.info("Exporting exercise data...")
        self.export_exercises(exercises)
        self.export_summaries(exercises)

        logger.info(f"Export complete: {len(exercises)} exercises")
