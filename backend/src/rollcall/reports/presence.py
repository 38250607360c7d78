"""Normalize attendance status values into a presence flag.

A player counts as present unless the status explicitly says absent.
A missing record, ``present``/``yes``/``y``, and extended statuses such as
``late`` or ``injured`` all count as present. Callers that want a different
mapping for extended statuses rewrite them before building reports.
"""

from __future__ import annotations

import polars as pl

PRESENT_STATUSES = frozenset({"present", "yes", "y"})
ABSENT_STATUSES = frozenset({"absent", "no", "n"})


def _normalize(status: str | None) -> str:
    return (status or "").strip().lower()


def is_absent(status: str | None) -> bool:
    return _normalize(status) in ABSENT_STATUSES


def is_present(status: str | None) -> bool:
    """True unless ``status`` is one of the absence values. ``None`` is present."""
    return not is_absent(status)


def absent_expr(column: str = "status") -> pl.Expr:
    """Polars expression: True where the status column denotes absence."""
    return (
        pl.col(column)
        .fill_null("")
        .str.strip_chars()
        .str.to_lowercase()
        .is_in(list(ABSENT_STATUSES))
    )


def presence_expr(column: str = "status") -> pl.Expr:
    """Polars expression: True where the player counts as present (nulls included)."""
    return ~absent_expr(column)
