from datetime import date

import pytest

from business_dashboard.models import MetricCard, MetricSection, TrendDirection
from business_dashboard.renderer import (
    format_long_date,
    ordinal_suffix,
    render_section,
    trend_badge,
)
from business_dashboard.service import BUSINESS_HEALTH_PATH, DashboardService
from business_dashboard.sources import (
    BusinessHealthSource,
    SampleBusinessHealthSource,
    format_week_range,
)


def _card(title="Job value", is_positive=True, trend="+100%", direction=TrendDirection.UP):
    return MetricCard(
        title=title,
        value="$200",
        subtitle="This week",
        trend_direction=direction,
        trend_text=trend,
        is_positive=is_positive,
    )


@pytest.mark.parametrize("count, dividers", [(0, 0), (1, 0), (2, 1), (4, 3)])
def test_dividers_only_between_rows(count, dividers):
    section = MetricSection(title="This week", cards=[_card(f"Card {i}") for i in range(count)])
    layout = render_section(section)

    assert len(layout.find_all("divider")) == dividers
    body = layout.children[1]
    if body.children:
        assert body.children[0].kind != "divider"
        assert body.children[-1].kind != "divider"


def test_section_title():
    layout = render_section(MetricSection(title="Monthly overview", cards=[_card()]))
    assert layout.find("section_title").text == "Monthly overview"


def test_positive_badge_has_arrow():
    badge = trend_badge(_card())
    assert badge.style["variant"] == "positive"
    assert badge.find_all("icon")[0].text == "arrow.up"


@pytest.mark.parametrize(
    "trend, direction",
    [("0%", TrendDirection.FLAT), ("-14%", TrendDirection.DOWN), ("+3%", TrendDirection.UP)],
)
def test_non_positive_badges_are_neutral(trend, direction):
    badge = trend_badge(_card(is_positive=False, trend=trend, direction=direction))
    assert badge.style["variant"] == "neutral"
    assert badge.find_all("icon") == []
    assert badge.children[0].text == trend


def test_badge_style_is_driven_only_by_flag():
    variants = {
        trend_badge(_card(is_positive=flag, direction=direction)).style["variant"]
        for flag in (True, False)
        for direction in TrendDirection
    }
    assert variants == {"positive", "neutral"}


@pytest.mark.parametrize(
    "day, suffix",
    [(1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"), (12, "th"), (13, "th"),
     (21, "st"), (22, "nd"), (23, "rd"), (31, "st")],
)
def test_ordinal_suffix(day, suffix):
    assert ordinal_suffix(day) == suffix


def test_long_date():
    assert format_long_date(date(2026, 10, 19)) == "Monday, October 19th"
    assert format_long_date(date(2025, 7, 1)) == "Tuesday, July 1st"


def test_week_range_runs_sunday_to_saturday():
    assert format_week_range(date(2025, 6, 30)) == "Jun 29 - Jul 5"
    assert format_week_range(date(2025, 6, 29)) == "Jun 29 - Jul 5"
    assert format_week_range(date(2025, 7, 5)) == "Jun 29 - Jul 5"


@pytest.mark.asyncio
async def test_sample_source_subtitles():
    source = SampleBusinessHealthSource(today=date(2025, 6, 30))
    assert isinstance(source, BusinessHealthSource)

    week = await source.this_week()
    monthly = await source.monthly()
    ytd = await source.year_to_date()

    assert {c.subtitle for c in week} == {"This week (Jun 29 - Jul 5)"}
    assert {c.subtitle for c in monthly} == {"June 2025"}
    assert [c.subtitle for c in ytd] == ["2025", "Active in 2025"]
    invoices = next(c for c in week if c.title == "Invoices paid")
    assert invoices.trend_text == "0%" and not invoices.is_positive


@pytest.mark.asyncio
async def test_business_health_screen_sections():
    service = DashboardService(SampleBusinessHealthSource(today=date(2025, 6, 30)))
    screen = await service.business_health_screen()

    assert screen.kind == "screen"
    assert screen.text == "Business Health"
    sections = screen.find_all("section")
    assert [s.text for s in sections] == ["This week", "Monthly overview", "Year-to-date"]
    assert [len(s.find_all("divider")) for s in sections] == [3, 1, 1]


@pytest.mark.asyncio
async def test_dashboard_screen_links_to_business_health():
    service = DashboardService(SampleBusinessHealthSource())
    screen = await service.dashboard_screen(today=date(2026, 10, 19))

    assert screen.find("date").text == "Monday, October 19th"
    assert [s.text for s in screen.find_all("section")] == ["Overview"]
    links = screen.find_all("link")
    assert len(links) == 1
    assert links[0].style["destination"] == BUSINESS_HEALTH_PATH


@pytest.mark.asyncio
async def test_screens_render_with_custom_source():
    class EmptySource:
        async def overview(self):
            return []

        async def this_week(self):
            return [_card()]

        async def monthly(self):
            return []

        async def year_to_date(self):
            return []

    screen = await DashboardService(EmptySource()).business_health_screen()
    assert [len(s.find_all("badge")) for s in screen.find_all("section")] == [1, 0, 0]
