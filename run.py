"""
Business-day calendar API: runner.

Usage:
    python run.py
    DATES_API_PORT=8080 python run.py
    DATES_HOLIDAY_COUNTRY=GB DATES_HOLIDAY_SUBDIV=ENG python run.py
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn

from config.settings import settings

# ── Logging setup ──────────────────────────────────────────────────────────────
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    stream=sys.stdout,
)

log = structlog.get_logger("dates.run")


def main() -> None:
    from api.app import create_app
    from services.holiday_calendar import HolidayCalendar

    cal = HolidayCalendar.from_settings()
    log.info(
        "business-day calendar API starting",
        host=settings.api_host,
        port=settings.api_port,
        holidays=cal.code,
        timezone=settings.default_timezone,
    )
    uvicorn.run(create_app(calendar=cal), host=settings.api_host, port=settings.api_port, log_level="info")


if __name__ == "__main__":
    main()
