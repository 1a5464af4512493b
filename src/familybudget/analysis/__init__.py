"""
Report Visualization Package

Chart rendering for the monthly family budget report.
"""

from .chart import PieSlice, build_slices, render_budget_chart

__all__ = [
    "PieSlice",
    "build_slices",
    "render_budget_chart",
]
