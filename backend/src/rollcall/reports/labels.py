"""Display labels for events, venues and reasons, and export filenames."""

from __future__ import annotations

import math
import re

from rollcall.models.records import Event

_CATEGORY_LABELS = {
    "training": "Training",
    "match": "Match",
    "challenge": "Challenge",
}

DEFAULT_VENUE = "Other"
NO_REASON = "No reason"

_FILENAME_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")


def category_label(category: str | None) -> str:
    """Training/Match/Challenge; unknown categories come back raw, blank as 'Event'."""
    raw = category or ""
    return _CATEGORY_LABELS.get(raw.strip().lower(), raw or "Event")


def venue_label(event: Event) -> str:
    """Resolve the venue shown for an event.

    The resolved ``venue`` string wins. Otherwise an "other" venue type uses
    the free-text field and any other type uses its own name; both fall back
    to "Other" when blank.
    """
    if event.venue and event.venue.strip():
        return event.venue.strip()
    if (event.venue_type or "").lower() == "other":
        return (event.venue_other or "").strip() or DEFAULT_VENUE
    return (event.venue_type or "").strip() or DEFAULT_VENUE


def reason_label(reason: str | None) -> str:
    return (reason or "").strip() or NO_REASON


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def report_filename(team_name: str, suffix: str, extension: str) -> str:
    """``Tang A`` + ``Attendance`` + ``xlsx`` -> ``Tang A_Attendance.xlsx``."""
    base = _FILENAME_STRIP_RE.sub("", team_name or "")
    base = _WHITESPACE_RE.sub(" ", base).strip() or "Team"
    return f"{base}_{suffix}.{extension}"
