"""
FastAPI backend — widget timelines and dashboard screens.

Serves:
- GET /widget/placeholder  → Entry shown while the widget loads
- GET /widget/snapshot     → Single entry for the widget gallery
- GET /widget/timeline     → Scheduled entries + refresh policy
- GET /widget/render       → Layout of the entry active right now
- GET /dashboard           → Dashboard screen layout
- GET /dashboard/business-health → Business health screen layout
- GET /health              → Health check
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from business_dashboard.service import DashboardService
from metrics_widget import (
    ConfigurationInvalid,
    DataUnavailable,
    DisplayConfiguration,
    SchedulingError,
    SizeClass,
    TimelineProvider,
    render_entry,
    render_unavailable,
)
from metrics_widget.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

# Shared instances
timeline_provider = TimelineProvider()
dashboard_service = DashboardService()


def get_timeline_provider() -> TimelineProvider:
    return timeline_provider


def get_dashboard_service() -> DashboardService:
    return dashboard_service


def get_configuration(
    display_mode: Optional[str] = Query(default=None),
    color_theme: Optional[str] = Query(default=None),
) -> DisplayConfiguration:
    """Unknown values fall back to Alternating / Blue."""
    return DisplayConfiguration(display_mode=display_mode, color_theme=color_theme)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Backend ready")
    yield
    logger.info("Backend shutting down")


app = FastAPI(
    title="Sweeply Business Dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS — allow the app and widget hosts to call from any origin in dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Widget Endpoints ───────────────────────────────────────────


@app.get("/widget/placeholder")
async def widget_placeholder(provider: TimelineProvider = Depends(get_timeline_provider)):
    """Entry shown while the widget loads."""
    return provider.placeholder_entry().model_dump(mode="json")


@app.get("/widget/snapshot")
async def widget_snapshot(
    configuration: DisplayConfiguration = Depends(get_configuration),
    provider: TimelineProvider = Depends(get_timeline_provider),
):
    """Single entry for the widget gallery."""
    try:
        entry = await provider.snapshot_entry(configuration)
    except DataUnavailable as e:
        logger.error("Snapshot entry failed: %s", e)
        raise HTTPException(status_code=503, detail=f"Metrics unavailable: {e}")
    return entry.model_dump(mode="json")


@app.get("/widget/timeline")
async def widget_timeline(
    configuration: DisplayConfiguration = Depends(get_configuration),
    provider: TimelineProvider = Depends(get_timeline_provider),
):
    """
    Full widget timeline. The host should request again once `refresh_at`
    has passed.
    """
    try:
        timeline = await provider.timeline(configuration)
    except DataUnavailable as e:
        logger.error("Timeline fetch failed: %s", e)
        raise HTTPException(status_code=503, detail=f"Metrics unavailable: {e}")
    except SchedulingError as e:
        logger.error("Timeline scheduling failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Scheduling failed: {e}")

    response = timeline.model_dump(mode="json")
    response["refresh_at"] = timeline.refresh_at.isoformat()
    return response


@app.get("/widget/render")
async def widget_render(
    size: str = Query(default=SizeClass.SMALL.value),
    configuration: DisplayConfiguration = Depends(get_configuration),
    provider: TimelineProvider = Depends(get_timeline_provider),
):
    """
    Layout of the entry on display right now, falling back to the last
    rendered one. With nothing rendered yet, an unavailable layout is returned.
    """
    try:
        size_class = SizeClass.parse(size)
    except ConfigurationInvalid as e:
        logger.warning("%s, using %s", e, SizeClass.SMALL.value)
        size_class = SizeClass.SMALL

    try:
        entry = await provider.current_entry(configuration)
    except (DataUnavailable, SchedulingError) as e:
        logger.warning("Rendering unavailable state: %s", e)
        return {
            "entry": None,
            "layout": render_unavailable(configuration, size_class).model_dump(mode="json"),
        }

    return {
        "entry": entry.model_dump(mode="json"),
        "layout": render_entry(entry, size_class).model_dump(mode="json"),
    }


# ── Dashboard Endpoints ────────────────────────────────────────


@app.get("/dashboard")
async def dashboard(service: DashboardService = Depends(get_dashboard_service)):
    """Dashboard screen: date header, overview cards, link to business health."""
    screen = await service.dashboard_screen()
    return screen.model_dump(mode="json")


@app.get("/dashboard/business-health")
async def business_health(service: DashboardService = Depends(get_dashboard_service)):
    """Business health screen: this week, monthly and year-to-date sections."""
    screen = await service.business_health_screen()
    return screen.model_dump(mode="json")


# ── Health ─────────────────────────────────────────────────────


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "0.1.0"}
