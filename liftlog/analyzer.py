"""
Workout progression analyzer.

Folds spreadsheet columns of parsed cells into sessions, flags personal
records and derives chart-ready progression series per exercise.
"""

import logging
from enum import Enum
from typing import List, Dict, Optional, Sequence, Any

from .models import Exercise, ParseError, ParsedEntry, Session
from .parser import parse_cell, is_same_day


logger = logging.getLogger(__name__)


# =============================================================================
# SHEET LAYOUT
# =============================================================================

# row 3 of the sheet holds exercise names, sessions start on row 4
HEADER_ROW_INDEX = 2
FIRST_DATA_ROW_INDEX = 3
FIRST_EXERCISE_COLUMN = 1


class ChartViewMode(Enum):
    """Series that can be plotted for an exercise."""

    VOLUME = "volume"
    TOTAL_VOLUME = "totalVolume"
    WEIGHT = "weight"
    REPS = "reps"
    BOTH = "both"


def column_letter(index: int) -> str:
    """Convert a 0-based column index to spreadsheet letters (0 -> A, 26 -> AA)."""
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def _is_blank(value: Any) -> bool:
    """Check for a missing or whitespace-only cell."""
    return value is None or (isinstance(value, str) and not value.strip())


# =============================================================================
# SESSION AGGREGATION
# =============================================================================


def _fold_entry(
    exercise: Exercise,
    current: Optional[Session],
    entry: ParsedEntry,
    is_continuation: bool,
    location: str,
) -> Optional[Session]:
    """
    Apply one parsed cell to the exercise and return the current session.

    A continuation (same day) entry becomes an extra set of the current
    session; anything else opens a new session.
    """
    if not is_continuation:
        session = Session.start(entry, len(exercise.sessions) + 1)
        exercise.sessions.append(session)
        return session

    if current is None:
        logger.warning(
            f"Dropping same-day entry at {location} for '{exercise.name}': "
            "no session to attach it to"
        )
        return None

    current.add_set(entry)
    return current


def aggregate_exercise(
    cells: Sequence[Any],
    name: str,
    column: int = FIRST_EXERCISE_COLUMN,
    first_row: int = FIRST_DATA_ROW_INDEX,
) -> Exercise:
    """
    Group a column of raw cells into workout sessions.

    Cells are read top to bottom. Blank cells are skipped, unparseable
    cells are recorded as parse errors, and cells marked "SD" are folded
    into the preceding session as additional sets.

    Parameters:
        cells: Raw cell values in row order.
        name: Exercise name (the column header).
        column: 0-based grid column of the cells, used for error locations.
        first_row: 0-based grid row of the first cell.

    Returns:
        Exercise with its sessions in chronological order.
    """
    exercise = Exercise(name=name)
    letter = column_letter(column)
    current: Optional[Session] = None

    for offset, raw in enumerate(cells):
        if _is_blank(raw):
            continue

        sheet_row = first_row + offset + 1
        location = f"{letter}{sheet_row}"

        entry = parse_cell(raw)
        if entry is None:
            exercise.parse_errors.append(
                ParseError(row=sheet_row, column=letter, location=location, value=raw)
            )
            continue

        current = _fold_entry(exercise, current, entry, is_same_day(raw), location)

    if exercise.parse_errors:
        logger.info(
            f"{name}: {len(exercise.parse_errors)} unparseable cell(s) "
            f"({', '.join(e.location for e in exercise.parse_errors[:5])})"
        )

    return exercise


def annotate_personal_records(exercise: Exercise) -> Exercise:
    """
    Flag every session that reaches the exercise's maximum volume.

    Ties are all marked as personal records.
    """
    if not exercise.sessions:
        return exercise

    max_volume = max(s.volume for s in exercise.sessions)
    for session in exercise.sessions:
        if session.volume == max_volume:
            session.is_pr = True

    return exercise


def _column_cells(rows: Sequence[Sequence[Any]], column: int) -> List[Any]:
    """Read one column from the data rows, treating short rows as blank."""
    return [row[column] if row and column < len(row) else None for row in rows]


def build_exercise_map(grid: Optional[Sequence[Sequence[Any]]]) -> Dict[str, Exercise]:
    """
    Build the exercise map from a raw sheet grid.

    Parameters:
        grid: Rows of cell values. Row 3 holds exercise names from
              column B onwards; subsequent rows hold session entries.

    Returns:
        Mapping of exercise name to Exercise. Empty when the grid has
        fewer than three rows.
    """
    if not grid or len(grid) <= HEADER_ROW_INDEX:
        logger.info("Not enough rows in sheet, no exercises to build")
        return {}

    headers = grid[HEADER_ROW_INDEX] or []
    data_rows = grid[FIRST_DATA_ROW_INDEX:]
    exercises: Dict[str, Exercise] = {}

    for column in range(FIRST_EXERCISE_COLUMN, len(headers)):
        header = headers[column]
        if _is_blank(header):
            continue

        name = str(header).strip()
        if name in exercises:
            logger.warning(
                f"Duplicate exercise '{name}' in column {column_letter(column)}, "
                "replacing earlier column"
            )

        try:
            exercise = aggregate_exercise(
                _column_cells(data_rows, column), name, column=column
            )
            exercises[name] = annotate_personal_records(exercise)
        except Exception:
            logger.exception(
                f"Failed to aggregate column {column_letter(column)} ({name})"
            )

    logger.info(f"Built {len(exercises)} exercises from {len(data_rows)} rows")
    return exercises


# =============================================================================
# PROGRESSION
# =============================================================================


def _series_value(session: Session, mode: ChartViewMode) -> float:
    """Pick the session value plotted for a chart mode."""
    if mode == ChartViewMode.VOLUME:
        return session.volume
    if mode == ChartViewMode.TOTAL_VOLUME:
        return session.total_volume
    if mode == ChartViewMode.WEIGHT:
        return session.weight
    return session.reps


def calculate_exercise_progression(
    exercise: Exercise, mode: ChartViewMode = ChartViewMode.VOLUME
) -> List[Dict]:
    """Track progression of an exercise over its sessions for one chart mode."""
    progression = []

    for session in exercise.sessions:
        point = {
            "label": session.date,
            "sessionNumber": session.session_number,
            "isPR": session.is_pr,
        }
        if mode == ChartViewMode.BOTH:
            point["weight"] = round(session.weight, 2)
            point["reps"] = session.reps
        else:
            point["value"] = round(_series_value(session, mode), 2)
        progression.append(point)

    return progression


def calculate_exercise_summary(exercise: Exercise) -> Dict:
    """Summarise an exercise's history for reporting."""
    sessions = exercise.sessions
    if not sessions:
        return {
            "name": exercise.name,
            "sessions": 0,
            "total_sets": 0,
            "best": None,
            "latest": None,
            "volume_change": None,
            "is_time": False,
            "parse_errors": len(exercise.parse_errors),
        }

    prs = exercise.personal_records
    best = prs[0] if prs else max(sessions, key=lambda s: s.volume)
    first, latest = sessions[0], sessions[-1]

    volume_change = None
    if first.volume:
        volume_change = round((latest.volume - first.volume) / first.volume * 100, 1)

    return {
        "name": exercise.name,
        "sessions": len(sessions),
        "total_sets": sum(s.set_count for s in sessions),
        "best": {
            "session": best.date,
            "weight": round(best.weight, 2),
            "reps": best.reps,
            "volume": round(best.volume, 2),
        },
        "latest": {
            "session": latest.date,
            "weight": round(latest.weight, 2),
            "reps": latest.reps,
            "volume": round(latest.volume, 2),
        },
        "volume_change": volume_change,
        "is_time": exercise.is_time_based,
        "parse_errors": len(exercise.parse_errors),
    }


def filter_exercises(
    exercises: Dict[str, Exercise], query: Optional[str]
) -> Dict[str, Exercise]:
    """Filter exercises by case-insensitive name substring."""
    if not query or not query.strip():
        return dict(exercises)

    needle = query.strip().lower()
    return {name: ex for name, ex in exercises.items() if needle in name.lower()}
