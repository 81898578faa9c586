"""
Metrics Widget — business metrics snapshots and home-screen widget timelines.

Usage:
    from metrics_widget import TimelineProvider, DisplayConfiguration
    provider = TimelineProvider()
    timeline = await provider.timeline(DisplayConfiguration(display_mode="Tasks"))
"""

from metrics_widget.errors import ConfigurationInvalid, DataUnavailable, SchedulingError
from metrics_widget.models import (
    ActiveMetric,
    ColorTheme,
    DisplayConfiguration,
    DisplayMode,
    MetricsSnapshot,
    RefreshPolicy,
    SizeClass,
    Timeline,
    TimelineEntry,
)
from metrics_widget.provider import MetricsProvider, SampleMetricsProvider, StaticMetricsProvider
from metrics_widget.renderer import render_entry, render_unavailable
from metrics_widget.scheduler import TimelineProvider, schedule

__version__ = "0.1.0"

__all__ = [
    "ActiveMetric",
    "ColorTheme",
    "ConfigurationInvalid",
    "DataUnavailable",
    "DisplayConfiguration",
    "DisplayMode",
    "MetricsProvider",
    "MetricsSnapshot",
    "RefreshPolicy",
    "SampleMetricsProvider",
    "SchedulingError",
    "SizeClass",
    "StaticMetricsProvider",
    "Timeline",
    "TimelineEntry",
    "TimelineProvider",
    "render_entry",
    "render_unavailable",
    "schedule",
]
