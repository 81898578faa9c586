"""
Widget timeline scheduling.

`schedule` is the pure part: configuration + snapshot + now -> Timeline.
`TimelineProvider` wraps it with the three entry points a widget host calls
(placeholder, snapshot, timeline) and owns the fallback state for when a
metrics fetch or a scheduling call fails.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from metrics_widget.config import METRICS_FETCH_TIMEOUT
from metrics_widget.errors import DataUnavailable, SchedulingError
from metrics_widget.models import (
    ActiveMetric,
    DisplayConfiguration,
    DisplayMode,
    MetricsSnapshot,
    RefreshPolicy,
    Timeline,
    TimelineEntry,
)
from metrics_widget.provider import SAMPLE_SNAPSHOT, MetricsProvider, SampleMetricsProvider

logger = logging.getLogger(__name__)

HOURLY_ENTRY_COUNT = 24
ALTERNATING_STEPS = (
    (timedelta(seconds=0), ActiveMetric.CUSTOMERS),
    (timedelta(seconds=30), ActiveMetric.TASKS),
    (timedelta(seconds=60), ActiveMetric.CUSTOMERS),
)

_FIXED_METRIC = {
    DisplayMode.CUSTOMERS: ActiveMetric.CUSTOMERS,
    DisplayMode.TASKS: ActiveMetric.TASKS,
}


def _steps_for(mode: DisplayMode) -> list[tuple[timedelta, ActiveMetric]]:
    if mode == DisplayMode.ALTERNATING:
        return list(ALTERNATING_STEPS)
    metric = _FIXED_METRIC[mode]
    return [(timedelta(hours=h), metric) for h in range(HOURLY_ENTRY_COUNT)]


def schedule(
    configuration: DisplayConfiguration,
    snapshot: MetricsSnapshot,
    now: datetime,
) -> Timeline:
    """
    Build the widget timeline for one configuration.

    Customers/Tasks modes get 24 hourly entries showing that metric; Alternating
    gets three entries 30 seconds apart toggling Customers, Tasks, Customers.
    Either way the host asks again once the last entry's time has passed.

    Raises:
        SchedulingError: if any entry timestamp falls outside the datetime
            range. No partial timeline is ever returned.
    """
    frozen = snapshot.model_copy()
    entries = []
    for offset, metric in _steps_for(configuration.display_mode):
        try:
            timestamp = now + offset
        except OverflowError as e:
            raise SchedulingError(
                f"Cannot schedule entry at {now.isoformat()} + {offset}"
            ) from e
        entries.append(
            TimelineEntry(
                timestamp=timestamp,
                configuration=configuration,
                snapshot=frozen,
                active_metric=metric,
            )
        )
    return Timeline(entries=entries, policy=RefreshPolicy.AT_END)


class TimelineProvider:
    """
    Host-facing widget timeline provider.

    Usage:
        provider = TimelineProvider()
        timeline = await provider.timeline(DisplayConfiguration())

    With a live data source:
        provider = TimelineProvider(metrics=MyDatabaseMetrics(), fetch_timeout=1.0)
    """

    def __init__(
        self,
        metrics: Optional[MetricsProvider] = None,
        fetch_timeout: float = METRICS_FETCH_TIMEOUT,
    ):
        self.metrics = metrics or SampleMetricsProvider()
        self.fetch_timeout = fetch_timeout
        self._last_snapshot: Optional[MetricsSnapshot] = None
        self._last_entry: Optional[TimelineEntry] = None

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    async def _fetch_snapshot(self) -> MetricsSnapshot:
        """Fetch with a single bounded wait; reuse the previous snapshot on timeout."""
        try:
            snapshot = await asyncio.wait_for(
                self.metrics.fetch_snapshot(), timeout=self.fetch_timeout
            )
        except asyncio.TimeoutError:
            if self._last_snapshot is not None:
                logger.warning(
                    "Metrics fetch timed out after %.1fs, reusing previous snapshot",
                    self.fetch_timeout,
                )
                return self._last_snapshot
            raise DataUnavailable(
                f"Metrics fetch timed out after {self.fetch_timeout}s"
            )
        except DataUnavailable:
            raise
        except Exception as e:
            raise DataUnavailable(f"Metrics provider failed: {e}") from e

        self._last_snapshot = snapshot
        return snapshot

    def placeholder_entry(self, now: Optional[datetime] = None) -> TimelineEntry:
        """Entry shown while the widget loads. Never fails."""
        return TimelineEntry(
            timestamp=now or self._now(),
            configuration=DisplayConfiguration(),
            snapshot=SAMPLE_SNAPSHOT,
            active_metric=ActiveMetric.CUSTOMERS,
        )

    async def snapshot_entry(self, configuration: DisplayConfiguration) -> TimelineEntry:
        """Single entry for the widget gallery preview."""
        snapshot = await self._fetch_snapshot()
        metric = (
            ActiveMetric.TASKS
            if configuration.display_mode == DisplayMode.TASKS
            else ActiveMetric.CUSTOMERS
        )
        return TimelineEntry(
            timestamp=self._now(),
            configuration=configuration,
            snapshot=snapshot,
            active_metric=metric,
        )

    async def timeline(
        self,
        configuration: DisplayConfiguration,
        now: Optional[datetime] = None,
    ) -> Timeline:
        """Fetch a fresh snapshot and schedule a full timeline."""
        snapshot = await self._fetch_snapshot()
        result = schedule(configuration, snapshot, now or self._now())
        logger.info(
            "Scheduled %d entries (mode=%s, theme=%s, refresh_at=%s)",
            len(result.entries),
            configuration.display_mode.value,
            configuration.color_theme.value,
            result.refresh_at.isoformat(),
        )
        return result

    async def current_entry(
        self,
        configuration: DisplayConfiguration,
        now: Optional[datetime] = None,
    ) -> TimelineEntry:
        """
        Entry the widget should display right now.

        On DataUnavailable or SchedulingError the last successfully rendered
        entry is returned instead; the error is re-raised only if nothing has
        been rendered yet.
        """
        now = now or self._now()
        try:
            result = await self.timeline(configuration, now)
        except (DataUnavailable, SchedulingError) as e:
            if self._last_entry is None:
                logger.error("No entry to fall back to: %s", e)
                raise
            logger.warning("Falling back to last rendered entry: %s", e)
            return self._last_entry

        entry = result.entry_at(now) or result.entries[0]
        self._last_entry = entry
        return entry
