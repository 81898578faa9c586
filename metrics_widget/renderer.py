"""
Widget entry renderer.

Turns one TimelineEntry into a layout tree for a size class. Small shows the
active metric, Medium adds the second metric and the time, Large adds the
business health block. Every field shown at a size is also shown at the
next size up.
"""

from datetime import datetime

from metrics_widget.config import WIDGET_BRAND_NAME
from metrics_widget.layout import LayoutNode, card, icon, row, spacer, stack, text
from metrics_widget.models import ActiveMetric, DisplayConfiguration, SizeClass, TimelineEntry

SECONDARY_TEXT = "secondary"
REVENUE_COLOR = "#4CAF50"
INVOICES_COLOR = "#F59E0B"
OVERDUE_COLOR = "#EF4444"
TILE_BACKGROUND = "#FFFFFF99"

# (field prefix, singular, plural, caption, icon)
_METRIC_COPY = {
    ActiveMetric.CUSTOMERS: ("customers", "Customer", "Customers", "Today", "person.2.fill"),
    ActiveMetric.TASKS: ("tasks", "Task", "Tasks", "Due Today", "checklist"),
}

# value font size, label font size, caption font size per size class
_TYPE_SCALE = {
    SizeClass.SMALL: (36, 16, 14),
    SizeClass.MEDIUM: (36, 16, 14),
    SizeClass.LARGE: (40, 18, 16),
}


def format_date(moment: datetime) -> str:
    """'Jul 7, 2025'"""
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_time(moment: datetime) -> str:
    """'3:30 PM'"""
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment:%M} {'AM' if moment.hour < 12 else 'PM'}"


def format_revenue(value: float) -> str:
    """Thousands separators, no decimals."""
    return f"{value:,.0f}"


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def _metric_block(entry: TimelineEntry, metric: ActiveMetric, size: SizeClass) -> LayoutNode:
    prefix, singular, plural, caption, icon_name = _METRIC_COPY[metric]
    value_size, label_size, caption_size = _TYPE_SCALE[size]
    primary = entry.configuration.color_theme.primary_color
    count = entry.snapshot.value_of(metric)

    children = [
        text(str(count), field=f"{prefix}.value", size=value_size, weight="bold", color=primary),
        text(_plural(count, singular, plural), field=f"{prefix}.label",
             size=label_size, weight="medium", color=SECONDARY_TEXT),
        text(caption, field=f"{prefix}.caption", size=caption_size, color=SECONDARY_TEXT),
    ]
    if size == SizeClass.LARGE:
        children.append(icon(icon_name, field=f"{prefix}.icon", size=24, color=primary))
    if size == SizeClass.SMALL:
        return stack(*children, spacing=4)
    return card(*children, background=TILE_BACKGROUND, corner_radius=12 if size == SizeClass.MEDIUM else 16)


def _header(entry: TimelineEntry, size: SizeClass) -> LayoutNode:
    primary = entry.configuration.color_theme.primary_color
    brand_size = {SizeClass.SMALL: 12, SizeClass.MEDIUM: 14, SizeClass.LARGE: 16}[size]
    children = [text(WIDGET_BRAND_NAME, field="brand", size=brand_size, weight="bold", color=primary), spacer()]
    if size != SizeClass.SMALL:
        children.append(text("Business Dashboard", field="dashboard_title",
                             size=brand_size - 2, color=SECONDARY_TEXT))
    children.append(icon("briefcase.fill", field="brand_icon", size=16 if size == SizeClass.LARGE else 14,
                         color=primary))
    return row(*children)


def _business_health(entry: TimelineEntry) -> LayoutNode:
    snapshot = entry.snapshot
    overdue_color = OVERDUE_COLOR if snapshot.overdue_tasks > 0 else REVENUE_COLOR
    return card(
        text("Business Health", field="business_health.title", size=16, weight="semibold",
             color=entry.configuration.color_theme.primary_color),
        row(
            stack(text("Revenue", size=14, color=SECONDARY_TEXT),
                  text(f"${format_revenue(snapshot.total_revenue)}", field="revenue",
                       size=18, weight="bold", color=REVENUE_COLOR)),
            stack(text("Invoices", size=14, color=SECONDARY_TEXT),
                  text(f"{snapshot.pending_invoices} pending", field="pending_invoices",
                       size=18, weight="bold", color=INVOICES_COLOR)),
            stack(text("Overdue", size=14, color=SECONDARY_TEXT),
                  text(f"{snapshot.overdue_tasks} tasks", field="overdue_tasks",
                       size=18, weight="bold", color=overdue_color)),
        ),
        background=TILE_BACKGROUND,
        corner_radius=16,
    )


def _footer(entry: TimelineEntry, size: SizeClass) -> LayoutNode:
    footer_size = 14 if size == SizeClass.LARGE else 12
    children = [text(format_date(entry.timestamp), field="date", size=footer_size, color=SECONDARY_TEXT)]
    if size != SizeClass.SMALL:
        time_text = format_time(entry.timestamp)
        if size == SizeClass.LARGE:
            time_text = f"Last updated: {time_text}"
        children.extend([spacer(), text(time_text, field="time", size=footer_size, color=SECONDARY_TEXT)])
    return row(*children)


def render_entry(entry: TimelineEntry, size_class: SizeClass) -> LayoutNode:
    """Lay out one timeline entry. Pure: the same input always gives the same tree."""
    if size_class == SizeClass.SMALL:
        body = _metric_block(entry, entry.active_metric, size_class)
    else:
        body = row(
            _metric_block(entry, ActiveMetric.CUSTOMERS, size_class),
            _metric_block(entry, ActiveMetric.TASKS, size_class),
            spacing=20,
        )

    children = [_header(entry, size_class)]
    if size_class == SizeClass.LARGE:
        children.extend([body, _business_health(entry)])
    else:
        children.extend([spacer(), body])
    children.extend([spacer(), _footer(entry, size_class)])

    return LayoutNode(
        kind="widget",
        style={
            "size_class": size_class.value,
            "background": entry.configuration.color_theme.secondary_color,
            "spacing": 16 if size_class == SizeClass.LARGE else 8,
        },
        children=children,
    )


def render_unavailable(configuration: DisplayConfiguration, size_class: SizeClass) -> LayoutNode:
    """Empty state for when no snapshot has ever been rendered."""
    primary = configuration.color_theme.primary_color
    brand_size = {SizeClass.SMALL: 12, SizeClass.MEDIUM: 14, SizeClass.LARGE: 16}[size_class]
    return LayoutNode(
        kind="widget",
        style={
            "size_class": size_class.value,
            "background": configuration.color_theme.secondary_color,
            "spacing": 8,
            "state": "unavailable",
        },
        children=[
            row(
                text(WIDGET_BRAND_NAME, field="brand", size=brand_size, weight="bold", color=primary),
                spacer(),
                icon("briefcase.fill", field="brand_icon", size=14, color=primary),
            ),
            spacer(),
            stack(
                icon("exclamationmark.icloud", size=24, color=SECONDARY_TEXT),
                text("Data unavailable", field="status", size=16, weight="medium", color=SECONDARY_TEXT),
                text("Metrics will appear once they load", size=12, color=SECONDARY_TEXT),
                spacing=4,
            ),
            spacer(),
        ],
    )
