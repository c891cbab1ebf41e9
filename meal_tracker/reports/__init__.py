"""
Reporting utilities for the meal tracker.
"""
from .chart_builder import ChartBuilder
from .stats_report import build_stats_markdown, render_stats

__all__ = [
    'ChartBuilder',
    'build_stats_markdown',
    'render_stats',
]
