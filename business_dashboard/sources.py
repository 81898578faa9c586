"""
Section sources for the dashboard screens.

Each section list is fetched on its own; a live implementation can back
each one with a different query.
"""

from datetime import date, timedelta
from typing import Optional, Protocol, runtime_checkable

from business_dashboard.models import MetricCard, TrendDirection


@runtime_checkable
class BusinessHealthSource(Protocol):
    """Capability that supplies the card lists for the dashboard screens."""

    async def overview(self) -> list[MetricCard]:
        ...

    async def this_week(self) -> list[MetricCard]:
        ...

    async def monthly(self) -> list[MetricCard]:
        ...

    async def year_to_date(self) -> list[MetricCard]:
        ...


def week_range(today: date) -> tuple[date, date]:
    """Sunday..Saturday week containing `today`."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def format_week_range(today: date) -> str:
    """'Jun 29 - Jul 5'"""
    start, end = week_range(today)
    return f"{start:%b} {start.day} - {end:%b} {end.day}"


class SampleBusinessHealthSource:
    """Placeholder cards with period subtitles derived from `today`."""

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def _today(self) -> date:
        return self.today or date.today()

    async def overview(self) -> list[MetricCard]:
        return [
            MetricCard(
                title="Jobs Today",
                value="0",
                subtitle="1 last week",
                trend_direction=TrendDirection.DOWN,
                trend_text="-14%",
                is_positive=False,
                icon="calendar",
            ),
            MetricCard(
                title="Active Clients",
                value="4",
                subtitle="5 new this week",
                trend_direction=TrendDirection.UP,
                trend_text="+5",
                is_positive=True,
                icon="person.2.fill",
            ),
        ]

    async def this_week(self) -> list[MetricCard]:
        subtitle = f"This week ({format_week_range(self._today())})"
        rows = [
            ("Job value", "$200", "+100%", True),
            ("Visits scheduled", "2", "+100%", True),
            ("Invoices paid", "$0", "0%", False),
            ("Average job value", "$100", "+25%", True),
        ]
        return [
            MetricCard(
                title=title,
                value=value,
                subtitle=subtitle,
                trend_direction=TrendDirection.UP if positive else TrendDirection.FLAT,
                trend_text=trend,
                is_positive=positive,
            )
            for title, value, trend, positive in rows
        ]

    async def monthly(self) -> list[MetricCard]:
        subtitle = f"{self._today():%B %Y}"
        return [
            MetricCard(title="Monthly revenue", value="$800", subtitle=subtitle,
                       trend_direction=TrendDirection.UP, trend_text="+15%", is_positive=True),
            MetricCard(title="Total jobs", value="8", subtitle=subtitle,
                       trend_direction=TrendDirection.UP, trend_text="+33%", is_positive=True),
        ]

    async def year_to_date(self) -> list[MetricCard]:
        year = self._today().year
        return [
            MetricCard(title="Year-to-date revenue", value="$4,200", subtitle=str(year),
                       trend_direction=TrendDirection.UP, trend_text="+22%", is_positive=True),
            MetricCard(title="Total clients", value="12", subtitle=f"Active in {year}",
                       trend_direction=TrendDirection.UP, trend_text="+50%", is_positive=True),
        ]
