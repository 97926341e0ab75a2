"""
FastAPI application factory for the business-day calendar API.

Usage:
    uvicorn api.app:app --reload --port 3001
    python run.py
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import dates
from services.clock import Clock, DateProvider, SystemClock, SystemDate
from services.holiday_calendar import HolidayCalendar


def create_app(
    calendar: HolidayCalendar | None = None,
    clock: Clock | None = None,
    date_provider: DateProvider | None = None,
    lifespan=None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Service instances are stored on app.state so routers can retrieve them
    via request.app.state.<name>. Missing ones are built from settings.
    """
    app = FastAPI(
        title="Business-Day Calendar API",
        version="1.0",
        lifespan=lifespan,
    )

    app.state.cal   = calendar or HolidayCalendar.from_settings()
    app.state.clock = clock or SystemClock()
    app.state.dates = date_provider or SystemDate()

    # CORS, lock down in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    PREFIX = "/api/v1"
    app.include_router(dates.router, prefix=PREFIX)

    return app


# ── Module-level app for `uvicorn api.app:app` ────────────────────────────────

app = create_app()
