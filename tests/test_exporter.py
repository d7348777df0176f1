"""
Tests for JSON export.
"""

import json

from liftlog.analyzer import build_exercise_map
from liftlog.exporter import JsonExporter, exercises_payload, exercises_error_payload
from liftlog.sheets_client import SheetsError


GRID = [
    ["Program"],
    [],
    ["", "Squat", "Plank"],
    ["", "60/8", "1 min"],
    ["", "65/8 SD", "rest"],
]


class TestPayloads:
    """Tests for response bodies."""

    def test_exercises_payload(self):
        """Test the wire shape of the exercise map."""
        payload = exercises_payload(build_exercise_map(GRID))

        squat = payload["exercises"]["Squat"]
        assert squat["name"] == "Squat"
        assert squat["parseErrors"] == []
        session = squat["sessions"][0]
        assert session["sessionNumber"] == 1
        assert session["weight"] == 65
        assert session["isPR"] is True
        assert [s["setNumber"] for s in session["sets"]] == [1, 2]

        plank = payload["exercises"]["Plank"]
        assert plank["sessions"][0]["isTime"] is True
        assert plank["parseErrors"] == [{"row": 5, "column": "C", "location": "C5"}]

    def test_payload_is_json_serializable(self):
        json.dumps(exercises_payload(build_exercise_map(GRID)))

    def test_empty(self):
        assert exercises_payload({}) == {"exercises": {}}

    def test_error_payload(self):
        assert exercises_error_payload(SheetsError("no access")) == {"error": "no access"}
        assert exercises_error_payload(RuntimeError()) == {"error": "RuntimeError"}


class TestJsonExporter:
    """Tests for JsonExporter."""

    def test_export_all(self, tmp_path):
        out = tmp_path / "out"

        JsonExporter(out).export_all(build_exercise_map(GRID))

        exercises = json.loads((out / "exercises.json").read_text())
        assert set(exercises["exercises"]) == {"Squat", "Plank"}

        summaries = json.loads((out / "exercise_summaries.json").read_text())
        assert [s["name"] for s in summaries] == ["Squat", "Plank"]
        assert summaries[1]["is_time"] is True

    def test_export_error(self, tmp_path):
        path = JsonExporter(tmp_path / "out").export_error(SheetsError("down"))

        assert json.loads(path.read_text()) == {"error": "down"}
