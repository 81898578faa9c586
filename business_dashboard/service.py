"""
Dashboard service.

Fetches the section lists for each screen from a BusinessHealthSource and
renders them into layout trees for the app.
"""

import asyncio
import logging
from datetime import date
from typing import Optional

from business_dashboard.models import MetricSection
from business_dashboard.renderer import date_header, navigation_link, render_screen
from business_dashboard.sources import BusinessHealthSource, SampleBusinessHealthSource
from metrics_widget.layout import LayoutNode

logger = logging.getLogger(__name__)

BUSINESS_HEALTH_PATH = "/dashboard/business-health"


class DashboardService:
    """Builds the dashboard and business health screens."""

    def __init__(self, source: Optional[BusinessHealthSource] = None):
        self.source = source or SampleBusinessHealthSource()

    async def business_health_sections(self) -> list[MetricSection]:
        """The three business health groups, fetched concurrently."""
        this_week, monthly, year_to_date = await asyncio.gather(
            self.source.this_week(),
            self.source.monthly(),
            self.source.year_to_date(),
        )
        return [
            MetricSection(title="This week", cards=this_week),
            MetricSection(title="Monthly overview", cards=monthly),
            MetricSection(title="Year-to-date", cards=year_to_date),
        ]

    async def business_health_screen(self) -> LayoutNode:
        sections = await self.business_health_sections()
        logger.info(
            "Rendering business health (%d cards)",
            sum(len(s.cards) for s in sections),
        )
        return render_screen("Business Health", sections)

    async def dashboard_screen(self, today: Optional[date] = None) -> LayoutNode:
        """Overview cards plus the link through to business health."""
        overview = await self.source.overview()
        return render_screen(
            "Dashboard",
            [MetricSection(title="Overview", cards=overview)],
            header=[date_header(today or date.today())],
            footer=[navigation_link("Business Health", BUSINESS_HEALTH_PATH)],
        )
