"""
Cell parser for freeform workout log entries.

Interprets the hand-typed values found in the progression spreadsheet,
such as "10kg/12", "DB 15/12", "1.5 min", "25/10+failure SD" or
"70/12 (felt burning on 8th rep)", and converts them into ParsedEntry
records. Only a closed set of conventions is recognised; anything else
is reported as unparseable by returning None.
"""

import logging
import re
from typing import Any, Optional

from .models import ParsedEntry


logger = logging.getLogger(__name__)


LBS_TO_KG = 0.453592
DEFAULT_UNIT = "kg"
TIME_UNIT = "sec"

# annotations stripped before matching
PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
SAME_DAY_RE = re.compile(r"\s*\bSD\b", re.IGNORECASE)
LAP_RE = re.compile(r"\s*\blaps?\b", re.IGNORECASE)

NUMBER = r"(\d+(?:\.\d+)?)"
WEIGHT_UNIT = r"(kg|lbs|lb)?"

TIME_RE = re.compile(
    NUMBER + r"\s*(min|mins|minute|minutes|m|sec|secs|second|seconds|s)\b",
    re.IGNORECASE,
)
SLASH_RE = re.compile(
    r"(?:DB\s+)?" + NUMBER + r"\s*" + WEIGHT_UNIT + r"\s*/\s*(\d+)", re.IGNORECASE
)
# free text may precede the number, e.g. "Push ups 15 x 3"
TIMES_RE = re.compile(
    r"(?:.*?)" + NUMBER + r"\s*" + WEIGHT_UNIT + r"\s*x\s*(\d+)", re.IGNORECASE
)


def normalize_cell(raw: str) -> str:
    """
    Strip annotations from a raw cell value.

    Removes parenthesised asides, then truncates at the first "+"
    (e.g. "+failure"), at a "SD" marker and at a "lap"/"laps" marker,
    and finally trims whitespace.

    Parameters:
        raw: Cell text as typed in the spreadsheet.

    Returns:
        The cleaned text, possibly empty.
    """
    text = PARENTHETICAL_RE.sub("", raw)

    plus = text.find("+")
    if plus != -1:
        text = text[:plus]

    for marker in (SAME_DAY_RE, LAP_RE):
        match = marker.search(text)
        if match:
            text = text[: match.start()]

    return text.strip()


def _parse_time(text: str) -> Optional[ParsedEntry]:
    """Match a duration such as "1.5 min" or "30 sec"."""
    match = TIME_RE.search(text)
    if not match:
        return None

    value = float(match.group(1))
    unit = match.group(2).lower()
    seconds = value * 60 if unit.startswith("m") else value

    return ParsedEntry(
        weight=seconds,
        reps=1,
        original_weight=seconds,
        original_unit=TIME_UNIT,
        is_time=True,
    )


def _parse_weight_reps(text: str) -> Optional[ParsedEntry]:
    """Match weight/reps written as "10kg/12" or "15 x 5"."""
    match = SLASH_RE.search(text) or TIMES_RE.search(text)
    if not match:
        return None

    weight = float(match.group(1))
    unit = match.group(2) or DEFAULT_UNIT
    reps = int(match.group(3))

    weight_kg = weight * LBS_TO_KG if "lb" in unit.lower() else weight

    return ParsedEntry(
        weight=weight_kg,
        reps=reps,
        original_weight=weight,
        original_unit=unit,
    )


def parse_cell(value: Any) -> Optional[ParsedEntry]:
    """
    Parse a spreadsheet cell into a ParsedEntry.

    Durations are checked first and stored in seconds with reps=1.
    Otherwise the cell must contain a weight and a rep count separated
    by "/" or "x"; pounds are converted to kilograms.

    Parameters:
        value: Raw cell value. Anything other than a non-empty string
               yields None.

    Returns:
        ParsedEntry if the cell matches a known format, None otherwise.
    """
    if not value or not isinstance(value, str):
        return None

    text = normalize_cell(value)

    entry = _parse_time(text) or _parse_weight_reps(text)
    if entry is None:
        logger.debug(f"Could not parse: {value!r}")
        return None

    logger.debug(
        f"Parsed {value!r} -> {entry.original_weight}{entry.original_unit} "
        f"x {entry.reps}"
    )
    return entry


def is_same_day(raw: str) -> bool:
    """Check whether a raw cell carries the "SD" (same day) marker."""
    return " SD" in raw.upper()
