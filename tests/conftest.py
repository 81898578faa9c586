import asyncio
from datetime import datetime, timezone

import pytest

from metrics_widget import DataUnavailable, DisplayConfiguration, MetricsSnapshot


class FlakyMetricsProvider:
    """Serves `snapshot` until `fail` is set, then raises DataUnavailable."""

    def __init__(self, snapshot: MetricsSnapshot):
        self.snapshot = snapshot
        self.fail = False
        self.calls = 0

    async def fetch_snapshot(self) -> MetricsSnapshot:
        self.calls += 1
        if self.fail:
            raise DataUnavailable("source offline")
        return self.snapshot


class SlowMetricsProvider:
    """Sleeps `delay` seconds before answering."""

    def __init__(self, snapshot: MetricsSnapshot, delay: float = 0.0):
        self.snapshot = snapshot
        self.delay = delay

    async def fetch_snapshot(self) -> MetricsSnapshot:
        await asyncio.sleep(self.delay)
        return self.snapshot


@pytest.fixture
def now():
    return datetime(2025, 7, 7, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def snapshot():
    return MetricsSnapshot(
        customers_today=5,
        tasks_due_today=8,
        overdue_tasks=2,
        total_revenue=1250.0,
        pending_invoices=3,
    )


@pytest.fixture
def alternating_blue():
    return DisplayConfiguration(display_mode="Alternating", color_theme="Blue")


@pytest.fixture
def flaky_provider(snapshot):
    return FlakyMetricsProvider(snapshot)


@pytest.fixture
def slow_provider(snapshot):
    return SlowMetricsProvider(snapshot)
