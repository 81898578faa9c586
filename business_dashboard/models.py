"""Pydantic models for dashboard screen data."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TrendDirection(str, Enum):
    UP = "Up"
    DOWN = "Down"
    FLAT = "Flat"


class MetricCard(BaseModel):
    """One labeled stat. The value arrives already formatted."""
    model_config = ConfigDict(frozen=True)

    title: str
    value: str
    subtitle: str
    trend_direction: TrendDirection = TrendDirection.FLAT
    trend_text: str = ""
    is_positive: bool = Field(default=False, description="Selects positive vs neutral badge styling")
    icon: Optional[str] = None


class MetricSection(BaseModel):
    """A titled group of metric cards."""
    model_config = ConfigDict(frozen=True)

    title: str
    cards: list[MetricCard] = Field(default_factory=list)
