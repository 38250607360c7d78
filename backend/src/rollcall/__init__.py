"""Rollcall: attendance aggregation and spreadsheet reports for club teams."""
