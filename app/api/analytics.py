from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from app.api.deps import Aggregator, CurrentClaims, FeesAging, Store
from app.models.attendance import AttendanceAggregate
from app.models.fees import FeesAgingReport
from app.services.attendance_aggregator import parse_day
from app.services.dashboard import compute_kpis
from app.services.report import CSV_MEDIA_TYPE, EXCEL_MEDIA_TYPE, render_csv, render_excel

router = APIRouter()


def _parse_date(value: str) -> date:
    try:
        return parse_day(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format (YYYY-MM-DD)")


@router.get("/attendance/daily/{date_str}", response_model=AttendanceAggregate)
async def get_daily_attendance(
    date_str: str,
    aggregator: Aggregator,
    claims: CurrentClaims,
    cached: bool = Query(False),
):
    """Attendance summary for one day. With cached=true, served from (and fills) the cache."""
    _parse_date(date_str)
    if cached:
        return await aggregator.get_or_compute_daily(date_str)
    return await aggregator.aggregate_daily_attendance(date_str)


@router.get("/attendance/last-30-days", response_model=List[AttendanceAggregate])
async def get_last_30_days(
    aggregator: Aggregator,
    claims: CurrentClaims,
    as_of: Optional[str] = Query(None),
):
    """Rolling daily attendance ending at as_of (default today)."""
    as_of_date = _parse_date(as_of) if as_of else date.today()
    return await aggregator.aggregate_last_30_days(as_of_date)


@router.get("/class/{class_id}/attendance")
async def get_class_attendance(
    class_id: str,
    aggregator: Aggregator,
    claims: CurrentClaims,
    start: str = Query(...),
    end: str = Query(...),
):
    """Per-day attendance for a class over an inclusive date range."""
    _parse_date(start)
    _parse_date(end)
    attendance = await aggregator.aggregate_class_attendance(class_id, start, end)
    return {
        "class_id": class_id,
        "period": {"start": start, "end": end},
        "attendance": [a.model_dump() for a in attendance],
    }


@router.get("/class/{class_id}/attendance/export")
async def export_class_attendance(
    class_id: str,
    aggregator: Aggregator,
    claims: CurrentClaims,
    start: str = Query(...),
    end: str = Query(...),
    format: str = Query("csv", enum=["csv", "excel"]),
):
    """Download per-day class attendance as CSV or Excel."""
    _parse_date(start)
    _parse_date(end)
    attendance = await aggregator.aggregate_class_attendance(class_id, start, end)
    if not attendance:
        raise HTTPException(status_code=404, detail="No days in the given range")

    filename = f"attendance_{class_id}_{start}_{end}"
    if format == "csv":
        return StreamingResponse(
            iter([render_csv(attendance)]),
            media_type=CSV_MEDIA_TYPE,
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
        )
    return StreamingResponse(
        render_excel(attendance),
        media_type=EXCEL_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}.xlsx"},
    )


@router.get("/fees/aging", response_model=FeesAgingReport)
async def get_fees_aging(
    fees: FeesAging,
    claims: CurrentClaims,
    as_of: Optional[str] = Query(None, alias="asOf"),
):
    """Outstanding invoice balances bucketed by days overdue."""
    as_of_date = _parse_date(as_of) if as_of else date.today()
    return await fees.aging_report(as_of_date)


@router.get("/dashboard")
async def get_dashboard(
    aggregator: Aggregator,
    store: Store,
    claims: CurrentClaims,
    as_of: Optional[str] = Query(None),
):
    """Headline KPIs and the attendance trend for the admin dashboard."""
    as_of_date = _parse_date(as_of) if as_of else date.today()
    trend = await aggregator.aggregate_last_30_days(as_of_date)
    kpis = await compute_kpis(store)
    return {
        "as_of_date": as_of_date.isoformat(),
        "kpis": kpis,
        "attendance": {
            "today_rate": trend[-1].attendance_rate if trend else 0,
            "trend": [a.model_dump() for a in trend],
        },
    }


class DateRange(BaseModel):
    start: str
    end: str


class RecomputeRequest(BaseModel):
    target: Literal["attendance_daily", "fees_monthly", "enrollment_trends"]
    range: DateRange


@router.post("/recompute")
async def recompute(data: RecomputeRequest, aggregator: Aggregator, claims: CurrentClaims):
    """Overwrite cached rollups for a date range."""
    if data.target != "attendance_daily":
        raise HTTPException(status_code=501, detail=f"Recomputation of {data.target} is not supported")
    _parse_date(data.range.start)
    _parse_date(data.range.end)
    results = await aggregator.recompute_daily_attendance(data.range.start, data.range.end)
    return {
        "success": True,
        "message": f"Recomputed {data.target} for {len(results)} day(s)",
        "range": data.range.model_dump(),
    }
