"""
Tests for progression models.

Tests set promotion, volume properties and wire serialization.
"""

import pytest

from liftlog.models import (
    ParsedEntry,
    ExerciseSet,
    Session,
    ParseError,
    Exercise,
)


def entry(weight, reps, unit="kg", is_time=False):
    return ParsedEntry(
        weight=weight, reps=reps, original_weight=weight, original_unit=unit, is_time=is_time
    )


class TestParsedEntry:
    """Tests for ParsedEntry model."""

    def test_volume_calculation(self):
        """Test volume property calculates correctly."""
        assert entry(100, 10).volume == 1000

    def test_to_dict_omits_false_time_flag(self):
        """Test isTime only appears for time entries."""
        assert "isTime" not in entry(10, 12).to_dict()
        assert entry(60, 1, unit="sec", is_time=True).to_dict()["isTime"] is True


class TestSession:
    """Tests for Session model."""

    def test_start(self):
        """Test a new session holds one set and mirrors it."""
        session = Session.start(entry(20, 10), 3)

        assert session.date == "Session 3"
        assert session.session_number == 3
        assert session.weight == 20
        assert session.reps == 10
        assert session.sets == [ExerciseSet(20, 10, 20, "kg", 1)]
        assert session.is_pr is False

    def test_add_set_promotes_higher_volume(self):
        """Test the summary follows the best set."""
        session = Session.start(entry(20, 10), 1)
        session.add_set(entry(25, 10))

        assert session.set_count == 2
        assert session.sets[1].set_number == 2
        assert session.weight == 25
        assert session.volume == 250

    def test_add_set_keeps_summary_on_tie(self):
        """Test equal volume does not replace the summary."""
        session = Session.start(entry(20, 10), 1)
        session.add_set(entry(10, 20))

        assert session.weight == 20
        assert session.reps == 10

    def test_add_set_keeps_summary_on_lower_volume(self):
        """Test weaker sets are recorded but not promoted."""
        session = Session.start(entry(20, 10), 1)
        session.add_set(entry(15, 8))

        assert session.weight == 20
        assert session.set_count == 2

    def test_promotion_copies_original_unit(self):
        """Test promoted sets bring their display unit along."""
        session = Session.start(entry(5, 10), 1)
        session.add_set(ParsedEntry(weight=9.07, reps=12, original_weight=20, original_unit="lbs"))

        assert session.original_unit == "lbs"
        assert session.original_weight == 20

    def test_total_volume(self):
        """Test total volume sums every set."""
        session = Session.start(entry(20, 10), 1)
        session.add_set(entry(15, 8))

        assert session.total_volume == pytest.approx(200 + 120)

    def test_to_dict(self):
        """Test wire shape of a session."""
        session = Session.start(entry(20, 10), 1)
        session.is_pr = True

        assert session.to_dict() == {
            "date": "Session 1",
            "sessionNumber": 1,
            "weight": 20,
            "reps": 10,
            "originalWeight": 20,
            "originalUnit": "kg",
            "isPR": True,
            "sets": [
                {
                    "weight": 20,
                    "reps": 10,
                    "originalWeight": 20,
                    "originalUnit": "kg",
                    "setNumber": 1,
                }
            ],
        }

    def test_time_session_to_dict(self):
        """Test time sessions carry the isTime flag at both levels."""
        data = Session.start(entry(60, 1, unit="sec", is_time=True), 1).to_dict()

        assert data["isTime"] is True
        assert data["sets"][0]["isTime"] is True
        assert "isPR" not in data


class TestExercise:
    """Tests for Exercise model."""

    def test_to_dict(self):
        """Test wire shape omits the raw value of parse errors."""
        exercise = Exercise(
            name="Squat",
            parse_errors=[ParseError(row=5, column="B", location="B5", value="rest")],
        )

        assert exercise.to_dict() == {
            "name": "Squat",
            "sessions": [],
            "parseErrors": [{"row": 5, "column": "B", "location": "B5"}],
        }

    def test_personal_records(self):
        """Test personal_records lists flagged sessions."""
        first = Session.start(entry(10, 10), 1)
        second = Session.start(entry(12, 10), 2)
        second.is_pr = True
        exercise = Exercise(name="Row", sessions=[first, second])

        assert exercise.personal_records == [second]
        assert exercise.session_count == 2

    def test_is_time_based(self):
        """Test time-based detection requires sessions."""
        assert Exercise(name="Plank").is_time_based is False

        plank = Exercise(
            name="Plank",
            sessions=[Session.start(entry(60, 1, unit="sec", is_time=True), 1)],
        )
        assert plank.is_time_based is True
