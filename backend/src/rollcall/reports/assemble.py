"""Assemble every sheet for one team from a snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rollcall.models.snapshot import TeamSnapshot
from rollcall.reports.matrix import MatrixReport, Row, build_matrix_report, require_roster
from rollcall.reports.reasons import ReasonsReport, build_reasons_report
from rollcall.reports.summary import build_player_summary, build_results_report

logger = logging.getLogger(__name__)

MATRIX_SHEET = "Attendance Matrix"
REASONS_SHEET = "Reasons Missing"
SUMMARY_SHEET = "Player Summary"
RESULTS_SHEET = "Results"


@dataclass
class TeamReports:
    team_id: str
    team_name: str
    matrix: MatrixReport
    reasons: ReasonsReport
    sheets: dict[str, list[Row]] = field(default_factory=dict)


def build_team_reports(
    snapshot: TeamSnapshot,
    include_summary: bool = False,
    include_results: bool = False,
) -> TeamReports:
    """Build the matrix and reasons sheets, plus the optional extras.

    Input problems (no team, no events, no players) raise before any sheet
    is built. The same snapshot always yields the same rows.
    """
    require_roster(snapshot)

    matrix = build_matrix_report(snapshot)
    reasons = build_reasons_report(snapshot)

    sheets: dict[str, list[Row]] = {
        MATRIX_SHEET: matrix.rows,
        REASONS_SHEET: reasons.rows,
    }
    if include_summary:
        sheets[SUMMARY_SHEET] = build_player_summary(snapshot)
    if include_results:
        sheets[RESULTS_SHEET] = build_results_report(snapshot)

    logger.info(f"Built {len(sheets)} sheet(s) for team {snapshot.team_name!r}")
    return TeamReports(
        team_id=snapshot.team.id,
        team_name=snapshot.team_name,
        matrix=matrix,
        reasons=reasons,
        sheets=sheets,
    )
