"""
Dates router: weekday / business-day arithmetic over HTTP.

GET /dates/next-weekday?date=2023-06-02&n=1
GET /dates/next-business-day?date=2023-07-03&n=1&holidays=true
...
An omitted `date` means "today" per the app's date provider.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query, Request

from models.domain import DayOfWeek, InvalidArgument
from services.business_days import next_business_day, previous_business_day
from services.calendar_anchors import end_of_month, month_diff, nth_day_of_week, start_of_month
from services.tz_convert import iso8601
from services.weekdays import count_weekdays, is_weekday, next_weekday, previous_weekday

router = APIRouter(prefix="/dates", tags=["dates"])

# Upper bounds on counts; the walker checks one day per step.
MAX_WEEKDAYS      = 100_000
MAX_BUSINESS_DAYS = 10_000
MAX_NTH           = 1_000


def _resolve(request: Request, d: date | None) -> date:
    return d if d is not None else request.app.state.dates.today()


def _predicate(request: Request, holidays: bool):
    return request.app.state.cal.is_business_day if holidays else is_weekday


@router.get("/next-weekday")
async def get_next_weekday(
    request: Request,
    d: date | None = Query(default=None, alias="date"),
    n: int = Query(default=1, le=MAX_WEEKDAYS),
) -> dict[str, str]:
    try:
        result = next_weekday(_resolve(request, d), n)
    except (InvalidArgument, OverflowError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"date": result.isoformat()}


@router.get("/previous-weekday")
async def get_previous_weekday(
    request: Request,
    d: date | None = Query(default=None, alias="date"),
    n: int = Query(default=1, le=MAX_WEEKDAYS),
) -> dict[str, str]:
    try:
        result = previous_weekday(_resolve(request, d), n)
    except (InvalidArgument, OverflowError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"date": result.isoformat()}


@router.get("/next-business-day")
async def get_next_business_day(
    request: Request,
    d: date | None = Query(default=None, alias="date"),
    n: int = Query(default=1, le=MAX_BUSINESS_DAYS),
    holidays: bool = Query(default=False),
) -> dict[str, str]:
    try:
        result = await next_business_day(_resolve(request, d), n, _predicate(request, holidays))
    except (InvalidArgument, OverflowError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"date": result.isoformat()}


@router.get("/previous-business-day")
async def get_previous_business_day(
    request: Request,
    d: date | None = Query(default=None, alias="date"),
    n: int = Query(default=1, le=MAX_BUSINESS_DAYS),
    holidays: bool = Query(default=False),
) -> dict[str, str]:
    try:
        result = await previous_business_day(_resolve(request, d), n, _predicate(request, holidays))
    except (InvalidArgument, OverflowError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"date": result.isoformat()}


@router.get("/count-weekdays")
async def get_count_weekdays(start: date, end: date) -> dict[str, int]:
    return {"weekdays": count_weekdays(start, end)}


@router.get("/month")
async def get_month(
    request: Request,
    d: date | None = Query(default=None, alias="date"),
) -> dict[str, str]:
    d = _resolve(request, d)
    return {
        "start": start_of_month(d).isoformat(),
        "end":   end_of_month(d).isoformat(),
    }


@router.get("/month-diff")
async def get_month_diff(start: date, end: date) -> dict[str, int]:
    return {"months": month_diff(start, end)}


@router.get("/nth-day-of-week")
async def get_nth_day_of_week(
    request: Request,
    day: str,
    n: int = Query(default=1, le=MAX_NTH),
    d: date | None = Query(default=None, alias="date"),
) -> dict[str, str]:
    try:
        result = nth_day_of_week(_resolve(request, d), n, DayOfWeek.parse(day))
    except (InvalidArgument, OverflowError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"date": result.isoformat()}


@router.get("/now")
async def get_now(request: Request) -> dict[str, str]:
    return {"utc": iso8601(request.app.state.clock.utc_now())}
