"""Aggregation and HTML rendering for the Dependabot PR report."""

from report.aggregator import build_report_view, parse_search_result
from report.renderer import render_report, write_report

__all__ = [
    "build_report_view",
    "parse_search_result",
    "render_report",
    "write_report",
]
