"""
Metrics providers.

The widget and the dashboard only ever see a MetricsSnapshot. Anything that
can produce one asynchronously satisfies MetricsProvider, so a real data
source replaces the sample one without touching the scheduler or renderers.
"""

import logging
from typing import Protocol, runtime_checkable

from metrics_widget.models import MetricsSnapshot

logger = logging.getLogger(__name__)

SAMPLE_SNAPSHOT = MetricsSnapshot(
    customers_today=5,
    tasks_due_today=8,
    overdue_tasks=2,
    total_revenue=1250.0,
    pending_invoices=3,
)


@runtime_checkable
class MetricsProvider(Protocol):
    """Capability that reads the current business metrics."""

    async def fetch_snapshot(self) -> MetricsSnapshot:
        ...


class StaticMetricsProvider:
    """Always returns the snapshot it was built with."""

    def __init__(self, snapshot: MetricsSnapshot):
        self.snapshot = snapshot

    async def fetch_snapshot(self) -> MetricsSnapshot:
        return self.snapshot


class SampleMetricsProvider(StaticMetricsProvider):
    """Deterministic placeholder metrics used until a live source is wired in."""

    def __init__(self):
        super().__init__(SAMPLE_SNAPSHOT)

    async def fetch_snapshot(self) -> MetricsSnapshot:
        logger.debug("Serving sample metrics snapshot")
        return self.snapshot
