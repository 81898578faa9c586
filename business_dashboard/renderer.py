"""
Screen renderer for the dashboard and business health screens.

Both screens render titled sections of MetricCards the same way; only the
grouping differs.
"""

from datetime import date
from typing import Optional

from business_dashboard.models import MetricCard, MetricSection, TrendDirection
from metrics_widget.layout import LayoutNode, card, divider, icon, row, spacer, stack, text

TITLE_COLOR = "#4B5563"
VALUE_COLOR = "#111827"
SUBTITLE_COLOR = "#6B7280"
SECTION_TITLE_COLOR = "#1A1A1A"
HEADER_DATE_COLOR = "#5E7380"

# Trend badges are two-state: anything not flagged positive is neutral.
POSITIVE_BADGE = {"variant": "positive", "background": "#E6EEFF", "color": "#3B82F6"}
NEUTRAL_BADGE = {"variant": "neutral", "background": "#F3F4F6", "color": "#9CA3AF"}

_ARROWS = {
    TrendDirection.UP: "arrow.up",
    TrendDirection.DOWN: "arrow.down",
}


def ordinal_suffix(day: int) -> str:
    if day % 10 == 1 and day % 100 != 11:
        return "st"
    if day % 10 == 2 and day % 100 != 12:
        return "nd"
    if day % 10 == 3 and day % 100 != 13:
        return "rd"
    return "th"


def format_long_date(day: date) -> str:
    """'Monday, October 19th'"""
    return f"{day:%A, %B} {day.day}{ordinal_suffix(day.day)}"


def trend_badge(metric: MetricCard) -> LayoutNode:
    """Positive badges carry the direction arrow; neutral ones are text only."""
    if metric.is_positive:
        children = []
        arrow = _ARROWS.get(metric.trend_direction)
        if arrow:
            children.append(icon(arrow, size=12))
        children.append(text(metric.trend_text, size=13, weight="medium"))
        return LayoutNode(kind="badge", field="trend", style=dict(POSITIVE_BADGE, corner_radius=16),
                          children=children)
    return LayoutNode(
        kind="badge",
        field="trend",
        style=dict(NEUTRAL_BADGE, corner_radius=16),
        children=[text(metric.trend_text, size=13, weight="medium")],
    )


def metric_row(metric: MetricCard) -> LayoutNode:
    title_row = [text(metric.title, field="title", size=16, weight="medium", color=TITLE_COLOR)]
    if metric.icon:
        title_row.insert(0, icon(metric.icon, field="icon", size=20))
    return stack(
        row(*title_row, spacer(),
            text(metric.value, field="value", size=18, weight="bold", color=VALUE_COLOR)),
        row(text(metric.subtitle, field="subtitle", size=14, color=SUBTITLE_COLOR), spacer(),
            trend_badge(metric)),
        spacing=8,
    )


def render_section(section: MetricSection) -> LayoutNode:
    """Titled card list with a divider between consecutive rows."""
    rows = []
    for index, metric in enumerate(section.cards):
        if index > 0:
            rows.append(divider())
        rows.append(metric_row(metric))
    return LayoutNode(
        kind="section",
        text=section.title,
        children=[
            text(section.title, field="section_title", size=18, weight="bold", color=SECTION_TITLE_COLOR),
            card(*rows, padding=16, corner_radius=12, background="#FFFFFF"),
        ],
    )


def render_screen(
    title: str,
    sections: list[MetricSection],
    header: Optional[list[LayoutNode]] = None,
    footer: Optional[list[LayoutNode]] = None,
) -> LayoutNode:
    children = list(header or [])
    children.extend(render_section(section) for section in sections)
    children.extend(footer or [])
    return LayoutNode(kind="screen", text=title, style={"spacing": 24}, children=children)


def navigation_link(title: str, destination: str) -> LayoutNode:
    return LayoutNode(
        kind="link",
        text=title,
        style={"destination": destination},
        children=[text(title, size=16, weight="semibold"), spacer(), icon("chevron.right", size=14)],
    )


def date_header(day: date) -> LayoutNode:
    return row(
        text(format_long_date(day), field="date", size=18, weight="medium", color=HEADER_DATE_COLOR),
        spacer(),
        icon("star.fill", size=20),
        icon("bell.fill", size=20),
    )
