"""Pydantic models for metrics snapshots and widget timelines."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from metrics_widget.errors import ConfigurationInvalid

logger = logging.getLogger(__name__)


def _parse_choice(enum_cls, value):
    """Match a value or name case-insensitively, or raise ConfigurationInvalid."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in enum_cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
    raise ConfigurationInvalid(f"Unrecognised {enum_cls.__name__}: {value!r}")


class DisplayMode(str, Enum):
    """Which metric(s) the widget shows over time."""
    CUSTOMERS = "Customers"
    TASKS = "Tasks"
    ALTERNATING = "Alternating"

    @classmethod
    def parse(cls, value) -> DisplayMode:
        return _parse_choice(cls, value)


class ColorTheme(str, Enum):
    """Widget color theme, resolving to a (primary, secondary) color pair."""
    BLUE = "Blue"
    GREEN = "Green"
    TEAL = "Teal"

    @classmethod
    def parse(cls, value) -> ColorTheme:
        return _parse_choice(cls, value)

    @property
    def primary_color(self) -> str:
        return _THEME_COLORS[self][0]

    @property
    def secondary_color(self) -> str:
        return _THEME_COLORS[self][1]


_THEME_COLORS = {
    ColorTheme.BLUE: ("#246BFD", "#EAF0FF"),
    ColorTheme.GREEN: ("#4CAF50", "#E8F5E9"),
    ColorTheme.TEAL: ("#153B3F", "#E0F2F1"),
}

DEFAULT_DISPLAY_MODE = DisplayMode.ALTERNATING
DEFAULT_COLOR_THEME = ColorTheme.BLUE


class ActiveMetric(str, Enum):
    """The metric a timeline entry puts in front."""
    CUSTOMERS = "Customers"
    TASKS = "Tasks"


class RefreshPolicy(str, Enum):
    """When the host should ask for a new timeline."""
    AT_END = "atEnd"


class SizeClass(str, Enum):
    """Widget size variants."""
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"

    @classmethod
    def parse(cls, value) -> SizeClass:
        return _parse_choice(cls, value)


class MetricsSnapshot(BaseModel):
    """Point-in-time read of the business metrics."""
    model_config = ConfigDict(frozen=True)

    customers_today: int = Field(ge=0, description="Customers created today")
    tasks_due_today: int = Field(ge=0, description="Tasks due today")
    overdue_tasks: int = Field(ge=0, description="Tasks past their due date")
    total_revenue: float = Field(ge=0, description="Revenue in the current period")
    pending_invoices: int = Field(ge=0, description="Invoices awaiting payment")

    def value_of(self, metric: ActiveMetric) -> int:
        if metric == ActiveMetric.CUSTOMERS:
            return self.customers_today
        return self.tasks_due_today


class DisplayConfiguration(BaseModel):
    """User-chosen widget presentation. Unknown values fall back to the defaults."""
    model_config = ConfigDict(frozen=True)

    display_mode: DisplayMode = DEFAULT_DISPLAY_MODE
    color_theme: ColorTheme = DEFAULT_COLOR_THEME

    @field_validator("display_mode", mode="before")
    @classmethod
    def _coerce_display_mode(cls, value):
        if value is None:
            return DEFAULT_DISPLAY_MODE
        try:
            return DisplayMode.parse(value)
        except ConfigurationInvalid as e:
            logger.warning("%s, using %s", e, DEFAULT_DISPLAY_MODE.value)
            return DEFAULT_DISPLAY_MODE

    @field_validator("color_theme", mode="before")
    @classmethod
    def _coerce_color_theme(cls, value):
        if value is None:
            return DEFAULT_COLOR_THEME
        try:
            return ColorTheme.parse(value)
        except ConfigurationInvalid as e:
            logger.warning("%s, using %s", e, DEFAULT_COLOR_THEME.value)
            return DEFAULT_COLOR_THEME


class TimelineEntry(BaseModel):
    """One scheduled render instruction for the widget."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    configuration: DisplayConfiguration
    snapshot: MetricsSnapshot
    active_metric: ActiveMetric

    @property
    def active_value(self) -> int:
        return self.snapshot.value_of(self.active_metric)


class Timeline(BaseModel):
    """Ordered entries plus the policy for requesting the next timeline."""
    model_config = ConfigDict(frozen=True)

    entries: list[TimelineEntry] = Field(min_length=1)
    policy: RefreshPolicy = RefreshPolicy.AT_END

    @model_validator(mode="after")
    def _check_order(self) -> Timeline:
        for earlier, later in zip(self.entries, self.entries[1:]):
            if later.timestamp <= earlier.timestamp:
                raise ValueError("timeline entries must have strictly increasing timestamps")
        return self

    @property
    def refresh_at(self) -> datetime:
        """The host re-requests once this moment has passed."""
        return self.entries[-1].timestamp

    def entry_at(self, when: datetime) -> Optional[TimelineEntry]:
        """Entry on display at `when`; None before the first entry."""
        active = None
        for entry in self.entries:
            if entry.timestamp > when:
                break
            active = entry
        return active
