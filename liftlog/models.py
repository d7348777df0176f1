"""Data models for workout progression tracking."""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass
class ParsedEntry:
    """A single spreadsheet cell interpreted as weight/reps or a duration."""

    weight: float
    reps: int
    original_weight: float
    original_unit: str
    is_time: bool = False

    @property
    def volume(self) -> float:
        """Calculate volume as weight × reps."""
        return self.weight * self.reps

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "weight": self.weight,
            "reps": self.reps,
            "originalWeight": self.original_weight,
            "originalUnit": self.original_unit,
        }
        if self.is_time:
            data["isTime"] = True
        return data


@dataclass
class ExerciseSet:
    """Represents one recorded set within a session."""

    weight: float
    reps: int
    original_weight: float
    original_unit: str
    set_number: int
    is_time: bool = False

    @property
    def volume(self) -> float:
        """Calculate volume as weight × reps."""
        return self.weight * self.reps

    @classmethod
    def from_entry(cls, entry: ParsedEntry, set_number: int) -> "ExerciseSet":
        """Create a numbered set from a parsed cell."""
        return cls(
            weight=entry.weight,
            reps=entry.reps,
            original_weight=entry.original_weight,
            original_unit=entry.original_unit,
            set_number=set_number,
            is_time=entry.is_time,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "weight": self.weight,
            "reps": self.reps,
            "originalWeight": self.original_weight,
            "originalUnit": self.original_unit,
            "setNumber": self.set_number,
        }
        if self.is_time:
            data["isTime"] = True
        return data


@dataclass
class Session:
    """
    One workout occurrence for an exercise.

    The top-level weight/reps mirror the best set by volume so that
    summary charts can plot a single point per session.
    """

    date: str
    session_number: int
    weight: float
    reps: int
    original_weight: float
    original_unit: str
    sets: List[ExerciseSet] = field(default_factory=list)
    is_time: bool = False
    is_pr: bool = False

    @property
    def volume(self) -> float:
        """Volume of the session's best set."""
        return self.weight * self.reps

    @property
    def total_volume(self) -> float:
        """Calculate total volume across all sets."""
        return sum(s.volume for s in self.sets)

    @property
    def set_count(self) -> int:
        """Count of sets in this session."""
        return len(self.sets)

    @classmethod
    def start(cls, entry: ParsedEntry, session_number: int) -> "Session":
        """Open a new session whose first set is the given entry."""
        return cls(
            date=f"Session {session_number}",
            session_number=session_number,
            weight=entry.weight,
            reps=entry.reps,
            original_weight=entry.original_weight,
            original_unit=entry.original_unit,
            sets=[ExerciseSet.from_entry(entry, 1)],
            is_time=entry.is_time,
        )

    def add_set(self, entry: ParsedEntry) -> ExerciseSet:
        """
        Append a same-day set and promote it to the summary if it beats
        the current best volume.

        Parameters:
            entry: Parsed cell for the additional set.

        Returns:
            The newly created set.
        """
        new_set = ExerciseSet.from_entry(entry, len(self.sets) + 1)
        self.sets.append(new_set)

        if new_set.volume > self.volume:
            self.weight = entry.weight
            self.reps = entry.reps
            self.original_weight = entry.original_weight
            self.original_unit = entry.original_unit
            self.is_time = entry.is_time

        return new_set

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "date": self.date,
            "sessionNumber": self.session_number,
            "weight": self.weight,
            "reps": self.reps,
            "originalWeight": self.original_weight,
            "originalUnit": self.original_unit,
        }
        if self.is_time:
            data["isTime"] = True
        if self.is_pr:
            data["isPR"] = True
        data["sets"] = [s.to_dict() for s in self.sets]
        return data


@dataclass
class ParseError:
    """Location of a cell that could not be interpreted."""

    row: int
    column: str
    location: str
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"row": self.row, "column": self.column, "location": self.location}


@dataclass
class Exercise:
    """All sessions recorded in one spreadsheet column."""

    name: str
    sessions: List[Session] = field(default_factory=list)
    parse_errors: List[ParseError] = field(default_factory=list)

    @property
    def session_count(self) -> int:
        """Count of sessions for this exercise."""
        return len(self.sessions)

    @property
    def personal_records(self) -> List[Session]:
        """Sessions flagged as personal records."""
        return [s for s in self.sessions if s.is_pr]

    @property
    def is_time_based(self) -> bool:
        """True when every session is a timed hold rather than weight/reps."""
        return bool(self.sessions) and all(s.is_time for s in self.sessions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sessions": [s.to_dict() for s in self.sessions],
            "parseErrors": [e.to_dict() for e in self.parse_errors],
        }
