from datetime import datetime, timedelta, timezone

import pytest

from metrics_widget import (
    ActiveMetric,
    DataUnavailable,
    DisplayConfiguration,
    DisplayMode,
    MetricsProvider,
    MetricsSnapshot,
    SampleMetricsProvider,
    StaticMetricsProvider,
    TimelineProvider,
)


def test_providers_satisfy_protocol(snapshot, flaky_provider):
    assert isinstance(SampleMetricsProvider(), MetricsProvider)
    assert isinstance(StaticMetricsProvider(snapshot), MetricsProvider)
    assert isinstance(flaky_provider, MetricsProvider)


@pytest.mark.asyncio
async def test_sample_provider_is_deterministic():
    provider = SampleMetricsProvider()
    first = await provider.fetch_snapshot()
    second = await provider.fetch_snapshot()
    assert first == second
    assert (first.customers_today, first.tasks_due_today) == (5, 8)


def test_placeholder_entry():
    entry = TimelineProvider().placeholder_entry()
    assert entry.active_metric == ActiveMetric.CUSTOMERS
    assert entry.configuration == DisplayConfiguration()
    assert entry.snapshot.customers_today == 5


@pytest.mark.parametrize(
    "mode, metric",
    [
        ("Customers", ActiveMetric.CUSTOMERS),
        ("Tasks", ActiveMetric.TASKS),
        ("Alternating", ActiveMetric.CUSTOMERS),
    ],
)
@pytest.mark.asyncio
async def test_snapshot_entry_metric_follows_mode(mode, metric, snapshot):
    provider = TimelineProvider(StaticMetricsProvider(snapshot))
    entry = await provider.snapshot_entry(DisplayConfiguration(display_mode=mode))
    assert entry.active_metric == metric
    assert entry.snapshot == snapshot


@pytest.mark.asyncio
async def test_timeline_fetches_fresh_snapshot_each_call(flaky_provider, now):
    provider = TimelineProvider(flaky_provider)
    await provider.timeline(DisplayConfiguration(), now)
    await provider.timeline(DisplayConfiguration(), now)
    assert flaky_provider.calls == 2


@pytest.mark.asyncio
async def test_provider_failure_propagates(flaky_provider, now):
    flaky_provider.fail = True
    provider = TimelineProvider(flaky_provider)
    with pytest.raises(DataUnavailable):
        await provider.timeline(DisplayConfiguration(), now)


@pytest.mark.asyncio
async def test_unexpected_provider_error_becomes_data_unavailable(now):
    class BrokenProvider:
        async def fetch_snapshot(self):
            raise ConnectionError("refused")

    provider = TimelineProvider(BrokenProvider())
    with pytest.raises(DataUnavailable, match="refused"):
        await provider.timeline(DisplayConfiguration(), now)


@pytest.mark.asyncio
async def test_timeout_without_previous_snapshot_is_unavailable(slow_provider, now):
    slow_provider.delay = 1.0
    provider = TimelineProvider(slow_provider, fetch_timeout=0.01)
    with pytest.raises(DataUnavailable):
        await provider.timeline(DisplayConfiguration(), now)


@pytest.mark.asyncio
async def test_timeout_reuses_previous_snapshot(slow_provider, snapshot, now):
    provider = TimelineProvider(slow_provider, fetch_timeout=0.05)
    await provider.timeline(DisplayConfiguration(), now)

    slow_provider.snapshot = snapshot.model_copy(update={"customers_today": 99})
    slow_provider.delay = 1.0
    timeline = await provider.timeline(DisplayConfiguration(), now)

    assert timeline.entries[0].snapshot.customers_today == 5


@pytest.mark.asyncio
async def test_current_entry_selects_by_wall_clock(snapshot, now):
    provider = TimelineProvider(StaticMetricsProvider(snapshot))
    entry = await provider.current_entry(DisplayConfiguration(), now)
    assert entry.timestamp == now
    assert entry.active_metric == ActiveMetric.CUSTOMERS


@pytest.mark.asyncio
async def test_current_entry_falls_back_to_last_rendered(flaky_provider, now):
    provider = TimelineProvider(flaky_provider)
    config = DisplayConfiguration(display_mode=DisplayMode.TASKS)
    rendered = await provider.current_entry(config, now)

    flaky_provider.fail = True
    fallback = await provider.current_entry(config, now + timedelta(hours=1))

    assert fallback == rendered


@pytest.mark.asyncio
async def test_current_entry_falls_back_on_scheduling_error(flaky_provider, now):
    provider = TimelineProvider(flaky_provider)
    rendered = await provider.current_entry(DisplayConfiguration(), now)

    near_end = datetime.max.replace(tzinfo=timezone.utc) - timedelta(seconds=10)
    fallback = await provider.current_entry(DisplayConfiguration(), near_end)

    assert fallback == rendered


@pytest.mark.asyncio
async def test_current_entry_without_history_raises(flaky_provider, now):
    flaky_provider.fail = True
    provider = TimelineProvider(flaky_provider)
    with pytest.raises(DataUnavailable):
        await provider.current_entry(DisplayConfiguration(), now)


@pytest.mark.asyncio
async def test_snapshot_values_are_frozen_into_entries(snapshot, now):
    source = StaticMetricsProvider(snapshot)
    provider = TimelineProvider(source)
    timeline = await provider.timeline(DisplayConfiguration(), now)

    source.snapshot = MetricsSnapshot(
        customers_today=1, tasks_due_today=1, overdue_tasks=0, total_revenue=0, pending_invoices=0
    )
    assert all(e.snapshot.customers_today == 5 for e in timeline.entries)
